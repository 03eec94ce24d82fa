"""Exception taxonomy for minifier runs.

Every failure that ends a run derives from MinifierError so the CLI can
report it uniformly. Nothing here is retried: a run either completes or
fails fast without touching the output file.
"""

from pathlib import Path


class MinifierError(Exception):
    """Base class for all errors that terminate a minifier run."""

    pass


class DocumentReadError(MinifierError):
    """Raised when the input document cannot be read from disk.

    Attributes:
        path: The input path that failed
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read {path}: {reason}")


class DocumentParseError(MinifierError):
    """Raised when the input is not valid JSON or parses to null.

    Attributes:
        path: The input path (None when parsing in-memory text)
        line: 1-based line of the syntax error, if known
        column: 1-based column of the syntax error, if known
    """

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        self.path = path
        self.line = line
        self.column = column
        location = ""
        if path is not None:
            location = f"{path}"
            if line is not None:
                location += f":{line}:{column}"
            location += ": "
        super().__init__(f"{location}{message}")


class DocumentWriteError(MinifierError):
    """Raised when the minified output cannot be written.

    The original output file (if any) is left untouched.
    """

    def __init__(self, path: Path, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot write {path}: {reason}")


class AliasTableFrozenError(MinifierError):
    """Raised when a new alias is requested after collection has finished.

    The rewrite pass is pure substitution. Reaching this means an identifier
    was found by the rewriter that the collector never visited, which is a
    traversal bug, not bad input.
    """

    def __init__(self, original: str) -> None:
        self.original = original
        super().__init__(f"Alias table is frozen; refusing to allocate an alias for {original!r}")
