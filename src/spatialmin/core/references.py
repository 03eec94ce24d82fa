# src/spatialmin/core/references.py
"""Field taxonomy and exclusion policy for spatial editor documents.

Which fields hold an object's own identity, which hold references to other
objects, and which identifiers must never be aliased are fixed facts about
the editor's export format. They cannot be inferred from the data, so they
live here as constants. Settings can extend them (see core/config.py).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

NAME_FIELD = "name"
ID_FIELD = "id"

PATH_SEPARATOR = "/"

# Fields whose value is the id of exactly one other object
SINGLE_REFERENCE_FIELDS: frozenset[str] = frozenset(
    {
        "HQArea",
        "CombatVolume",
        "CaptureArea",
        "Area",
        "SurroundingCombatArea",
        "ExclusionAreaTeam1",
        "ExclusionAreaTeam2",
        "ExclusionAreaTeam1_OBB",
        "ExclusionAreaTeam2_OBB",
        "DestructionArea",
        "MapDetailRenderArea",
        "SectorArea",
        "RetreatArea",
        "RetreatFromArea",
        "AdvanceFromArea",
        "AdvanceToArea",
    }
)

# Fields whose value is an array of ids of other objects
ARRAY_REFERENCE_FIELDS: frozenset[str] = frozenset(
    {
        "InfantrySpawns",
        "ForwardSpawns",
        "InfantrySpawnPoints_Team1",
        "InfantrySpawnPoints_Team2",
        "SpawnPoints",
        "CapturePoints",
        "MCOMs",
    }
)

# Structural asset names the game resolves by their literal text
DEFAULT_EXCLUDED_NAMES: frozenset[str] = frozenset({"Static"})
DEFAULT_EXCLUDED_PREFIX = "Static"


@dataclass(frozen=True, slots=True)
class ExclusionPolicy:
    """Identifiers that pass through renaming untouched.

    An identifier is excluded when it equals one of ``names`` exactly, or
    when it lives under the ``prefix`` namespace (``"Static/..."``). The bare
    prefix itself is only excluded if it is also listed in ``names``.
    """

    names: frozenset[str] = DEFAULT_EXCLUDED_NAMES
    prefix: str | None = DEFAULT_EXCLUDED_PREFIX

    def __post_init__(self) -> None:
        if self.prefix is not None and PATH_SEPARATOR in self.prefix:
            raise ValueError(f"Exclusion prefix must not contain '{PATH_SEPARATOR}': {self.prefix!r}")

    def is_excluded(self, identifier: str) -> bool:
        if identifier in self.names:
            return True
        if self.prefix:
            return identifier.startswith(self.prefix + PATH_SEPARATOR)
        return False


@dataclass(frozen=True, slots=True)
class ReferenceClassifier:
    """Static predicates over object field names.

    Holds no per-run state; one instance can be shared by any number of
    renamers.
    """

    single_reference_fields: frozenset[str] = SINGLE_REFERENCE_FIELDS
    array_reference_fields: frozenset[str] = ARRAY_REFERENCE_FIELDS

    def __post_init__(self) -> None:
        overlap = self.single_reference_fields & self.array_reference_fields
        if overlap:
            raise ValueError(f"Fields cannot be both single and array references: {sorted(overlap)}")
        identity = {NAME_FIELD, ID_FIELD} & (self.single_reference_fields | self.array_reference_fields)
        if identity:
            raise ValueError(f"Identity fields cannot be reference fields: {sorted(identity)}")

    @classmethod
    def extended(
        cls,
        single_reference_fields: Iterable[str] = (),
        array_reference_fields: Iterable[str] = (),
    ) -> ReferenceClassifier:
        """Build a classifier with extra reference fields on top of the defaults."""
        return cls(
            single_reference_fields=SINGLE_REFERENCE_FIELDS | frozenset(single_reference_fields),
            array_reference_fields=ARRAY_REFERENCE_FIELDS | frozenset(array_reference_fields),
        )

    @staticmethod
    def is_identity_field(key: str) -> bool:
        return key in (NAME_FIELD, ID_FIELD)

    @staticmethod
    def is_name_field(key: str) -> bool:
        return key == NAME_FIELD

    @staticmethod
    def is_id_field(key: str) -> bool:
        return key == ID_FIELD

    def is_single_reference_field(self, key: str) -> bool:
        return key in self.single_reference_fields

    def is_array_reference_field(self, key: str) -> bool:
        return key in self.array_reference_fields
