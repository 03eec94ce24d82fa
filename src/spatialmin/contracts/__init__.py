"""Shared contracts for cross-boundary data types.

This package is a LEAF MODULE with no outbound dependencies to core/cli.
Settings classes are NOT re-exported here - import them from
spatialmin.core.config.

Import patterns:
    from spatialmin.contracts import MinifyResult, DocumentParseError
    from spatialmin.core.config import MinifierSettings
"""

from spatialmin.contracts.errors import (
    AliasTableFrozenError,
    DocumentParseError,
    DocumentReadError,
    DocumentWriteError,
    MinifierError,
)
from spatialmin.contracts.results import MinifyResult

__all__ = [
    "AliasTableFrozenError",
    "DocumentParseError",
    "DocumentReadError",
    "DocumentWriteError",
    "MinifierError",
    "MinifyResult",
]
