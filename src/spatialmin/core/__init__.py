# src/spatialmin/core/__init__.py
"""Core infrastructure: aliasing, renaming, precision, documents, configuration, logging."""

from spatialmin.core.aliases import AliasTable, short_token
from spatialmin.core.config import (
    MinifierSettings,
    ReferenceSettings,
    load_settings,
)
from spatialmin.core.document import (
    derive_output_path,
    load_document,
    parse_document,
    serialize_document,
    write_document,
)
from spatialmin.core.logging import (
    configure_logging,
    get_logger,
)
from spatialmin.core.minifier import minify_document, run_minifier
from spatialmin.core.precision import reduce_precision
from spatialmin.core.references import ExclusionPolicy, ReferenceClassifier
from spatialmin.core.rename import IdentifierRenamer

__all__ = [
    "AliasTable",
    "ExclusionPolicy",
    "IdentifierRenamer",
    "MinifierSettings",
    "ReferenceClassifier",
    "ReferenceSettings",
    "configure_logging",
    "derive_output_path",
    "get_logger",
    "load_document",
    "load_settings",
    "minify_document",
    "parse_document",
    "reduce_precision",
    "run_minifier",
    "serialize_document",
    "short_token",
    "write_document",
]
