"""Result record returned by a completed minifier run."""

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class MinifyResult:
    """Outcome of one load → rename → serialize → reduce → save run.

    Attributes:
        input_path: Document that was read
        output_path: Document that was written
        input_bytes: Size of the input file on disk
        output_bytes: Size of the written output file
        mappings: Alias table contents in allocation order (empty when renaming is off)
        renamed: Whether the identifier renaming passes ran
        precision: Decimal places kept, or None when precision reduction is off
    """

    input_path: Path
    output_path: Path
    input_bytes: int
    output_bytes: int
    mappings: tuple[tuple[str, str], ...] = field(default_factory=tuple)
    renamed: bool = True
    precision: int | None = None

    @property
    def alias_count(self) -> int:
        """Number of distinct identifiers (including compound IDs) in the alias table."""
        return len(self.mappings)

    @property
    def saved_bytes(self) -> int:
        return self.input_bytes - self.output_bytes

    @property
    def reduction_percent(self) -> float:
        """Size reduction relative to the input, in percent.

        An empty input reports 0.0 rather than dividing by zero.
        """
        if self.input_bytes == 0:
            return 0.0
        return (self.saved_bytes / self.input_bytes) * 100
