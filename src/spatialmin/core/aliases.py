# src/spatialmin/core/aliases.py
"""Short alias allocation.

Aliases are handed out in first-discovery order: the first new identifier
gets "a", the 26th "z", the 27th "aa". The table is written during the
collection pass, frozen, and then only read during the rewrite pass.
"""

from __future__ import annotations

import string
from collections.abc import Iterator

from spatialmin.contracts.errors import AliasTableFrozenError
from spatialmin.core.logging import get_logger
from spatialmin.core.references import PATH_SEPARATOR, ExclusionPolicy

logger = get_logger(__name__)

_ALPHABET = string.ascii_lowercase
_BASE = len(_ALPHABET)


def short_token(number: int) -> str:
    """Return the nth alias in bijective base-26 ("a".."z", "aa".."zz", "aaa", ...).

    There is no zero digit: each step decrements before taking the
    remainder, so 26 is "z" and 27 is "aa" (not "ba").

    Args:
        number: 1-based position in the alias sequence

    Returns:
        Lowercase alphabetic token

    Raises:
        ValueError: If number is less than 1
    """
    if number < 1:
        raise ValueError(f"Alias numbers start at 1, got {number}")

    digits: list[str] = []
    while number > 0:
        number, remainder = divmod(number - 1, _BASE)
        digits.append(_ALPHABET[remainder])
    return "".join(reversed(digits))


class AliasTable:
    """Ordered original → alias mapping plus its allocation counter.

    Keys are write-once: the first allocation wins and later requests for
    the same original return the stored alias without advancing the counter.
    Excluded and empty identifiers are returned unchanged and never stored.

    Example:
        >>> table = AliasTable()
        >>> table.allocate_or_get("TEAM_1_HQ")
        'a'
        >>> table.allocate_hierarchical("TEAM_1_HQ/SpawnPoint_1_1")
        'a/b'
        >>> table.lookup("TEAM_1_HQ/SpawnPoint_1_1")
        'a/b'
    """

    def __init__(self, policy: ExclusionPolicy | None = None) -> None:
        self._policy = policy if policy is not None else ExclusionPolicy()
        self._aliases: dict[str, str] = {}
        self._next_number = 1
        self._frozen = False

    @property
    def policy(self) -> ExclusionPolicy:
        return self._policy

    @property
    def allocated(self) -> int:
        """Number of counter values consumed so far."""
        return self._next_number - 1

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> None:
        """Stop accepting new keys. Lookups of existing keys still work."""
        self._frozen = True
        logger.debug("alias_table_frozen", entries=len(self._aliases), allocated=self.allocated)

    def is_excluded(self, identifier: str) -> bool:
        return not identifier or self._policy.is_excluded(identifier)

    def allocate_or_get(self, original: str) -> str:
        """Return the alias for ``original``, allocating the next token if needed."""
        if self.is_excluded(original):
            return original

        existing = self._aliases.get(original)
        if existing is not None:
            return existing

        alias = short_token(self._next_number)
        self._record(original, alias)
        self._next_number += 1
        return alias

    def allocate_hierarchical(self, original: str) -> str:
        """Alias an id, translating ``/``-delimited paths part by part.

        ``"TEAM_1_HQ/SpawnPoint_1_1"`` becomes ``"a/b"`` when neither part
        has been seen: each part is aliased on its own (so a later bare
        ``"TEAM_1_HQ"`` reuses ``"a"``) and the whole path is stored as one
        key mapping to the joined result. Empty and excluded parts are kept
        verbatim. Storing the compound key does not consume a counter value.
        """
        if self.is_excluded(original):
            return original

        existing = self._aliases.get(original)
        if existing is not None:
            return existing

        if PATH_SEPARATOR not in original:
            return self.allocate_or_get(original)

        parts = [self.allocate_or_get(part) for part in original.split(PATH_SEPARATOR)]
        alias = PATH_SEPARATOR.join(parts)
        self._record(original, alias)
        return alias

    def lookup(self, original: str) -> str | None:
        return self._aliases.get(original)

    def _record(self, original: str, alias: str) -> None:
        if self._frozen:
            raise AliasTableFrozenError(original)
        self._aliases[original] = alias

    def items(self) -> Iterator[tuple[str, str]]:
        """Iterate (original, alias) pairs in allocation order."""
        return iter(self._aliases.items())

    def as_dict(self) -> dict[str, str]:
        return dict(self._aliases)

    def __len__(self) -> int:
        return len(self._aliases)

    def __contains__(self, original: object) -> bool:
        return original in self._aliases
