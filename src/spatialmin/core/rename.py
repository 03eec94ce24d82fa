# src/spatialmin/core/rename.py
"""Two-pass identifier renaming over a parsed JSON document.

Pass 1 (collect) walks the whole tree and fills the alias table from every
``name`` and ``id`` field, so that every object's alias exists before any
reference to it is rewritten. Pass 2 (rewrite) walks the tree again and
substitutes identity fields, reference fields and reference arrays in place.
The table is frozen between the passes: the rewrite never allocates.

Both passes visit dict fields and list elements in document order. That
order decides which alias each identifier receives, so it is part of the
observable output, not an implementation detail.
"""

from __future__ import annotations

from typing import Any

from spatialmin.core.aliases import AliasTable
from spatialmin.core.logging import get_logger
from spatialmin.core.references import ID_FIELD, ReferenceClassifier

logger = get_logger(__name__)


class IdentifierRenamer:
    """Collects and rewrites identifiers for one document.

    Args:
        table: Alias table to populate; owned by this run only
        classifier: Field taxonomy (defaults to the spatial editor fields)
        rename_names: Alias ``name`` fields
        rename_ids: Alias ``id`` fields and every reference field
    """

    def __init__(
        self,
        table: AliasTable | None = None,
        classifier: ReferenceClassifier | None = None,
        *,
        rename_names: bool = True,
        rename_ids: bool = True,
    ) -> None:
        self.table = table if table is not None else AliasTable()
        self.classifier = classifier if classifier is not None else ReferenceClassifier()
        self.rename_names = rename_names
        self.rename_ids = rename_ids

    def rename(self, document: Any) -> Any:
        """Run both passes over ``document`` and return it (mutated in place)."""
        self.collect(document)
        self.table.freeze()
        logger.debug(
            "identifiers_collected",
            unique=len(self.table),
            allocated=self.table.allocated,
        )
        self.rewrite(document)
        return document

    # === Pass 1 ===

    def collect(self, node: Any) -> None:
        match node:
            case dict():
                for key, value in node.items():
                    if isinstance(value, str):
                        self._collect_identity(key, value)
                    self.collect(value)
            case list():
                for item in node:
                    self.collect(item)
            case _:
                # Scalars (str, int, float, bool, None) end the walk
                pass

    def _collect_identity(self, key: str, value: str) -> None:
        if self.rename_names and self.classifier.is_name_field(key):
            self.table.allocate_or_get(value)
        elif self.rename_ids and self.classifier.is_id_field(key):
            self.table.allocate_hierarchical(value)

    # === Pass 2 ===

    def rewrite(self, node: Any) -> None:
        match node:
            case dict():
                self._rewrite_object(node)
            case list():
                for item in node:
                    self.rewrite(item)
            case _:
                pass

    def _rewrite_object(self, obj: dict[str, Any]) -> None:
        classifier = self.classifier
        # Assigning to existing keys while iterating is safe: the key set never changes
        for key, value in obj.items():
            match value:
                case str() if classifier.is_name_field(key):
                    if self.rename_names and not self._is_protected(obj):
                        obj[key] = self._substitute(value)
                case str() if classifier.is_id_field(key) or classifier.is_single_reference_field(key):
                    if self.rename_ids:
                        obj[key] = self._substitute(value)
                case list() if classifier.is_array_reference_field(key):
                    if self.rename_ids:
                        self._rewrite_reference_array(value)
                case dict() | list():
                    self.rewrite(value)
                case _:
                    pass

    def _rewrite_reference_array(self, refs: list[Any]) -> None:
        for index, ref in enumerate(refs):
            if isinstance(ref, str):
                refs[index] = self._substitute(ref)

    def _is_protected(self, obj: dict[str, Any]) -> bool:
        """Objects whose own id is excluded keep their human-readable name."""
        object_id = obj.get(ID_FIELD)
        return isinstance(object_id, str) and bool(object_id) and self.table.policy.is_excluded(object_id)

    def _substitute(self, original: str) -> str:
        alias = self.table.lookup(original)
        return original if alias is None else alias
