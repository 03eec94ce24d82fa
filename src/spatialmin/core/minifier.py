# src/spatialmin/core/minifier.py
"""Run driver: load → collect → rewrite → serialize → reduce → save.

Every stage runs to completion before the output file is touched. The alias
table is created fresh for each run and discarded afterwards; only its
contents are returned in the result.
"""

from __future__ import annotations

import time
from typing import Any

from spatialmin.contracts.results import MinifyResult
from spatialmin.core.aliases import AliasTable
from spatialmin.core.config import MinifierSettings
from spatialmin.core.document import load_document, serialize_document, write_document
from spatialmin.core.logging import get_logger
from spatialmin.core.precision import reduce_precision
from spatialmin.core.rename import IdentifierRenamer

logger = get_logger(__name__)


def build_renamer(settings: MinifierSettings) -> IdentifierRenamer:
    """Create a renamer with a fresh alias table for one run."""
    references = settings.references
    return IdentifierRenamer(
        AliasTable(references.exclusion_policy()),
        references.classifier(),
        rename_names=settings.rename_names,
        rename_ids=settings.rename_ids,
    )


def minify_document(document: Any, settings: MinifierSettings) -> tuple[str, tuple[tuple[str, str], ...]]:
    """Transform an in-memory document into minified JSON text.

    The document is mutated in place when renaming is enabled.

    Returns:
        (output text, alias table contents in allocation order)
    """
    mappings: tuple[tuple[str, str], ...] = ()
    if settings.renaming_enabled:
        renamer = build_renamer(settings)
        renamer.rename(document)
        mappings = tuple(renamer.table.items())

    text = serialize_document(document, formatted=settings.formatted, indent=settings.indent)

    if settings.reduce_precision:
        text = reduce_precision(text, settings.precision)

    return text, mappings


def run_minifier(settings: MinifierSettings) -> MinifyResult:
    """Minify ``settings.input_path`` and write the result.

    Raises:
        DocumentReadError: Input missing or unreadable
        DocumentParseError: Input is not a usable JSON document
        DocumentWriteError: Output could not be written
    """
    input_path = settings.input_path
    output_path = settings.resolved_output_path()
    log = logger.bind(input_path=str(input_path), output_path=str(output_path))

    start = time.perf_counter()
    document, input_bytes = load_document(input_path)
    text, mappings = minify_document(document, settings)
    output_bytes = write_document(output_path, text)
    duration = time.perf_counter() - start

    log.debug(
        "minify_completed",
        input_bytes=input_bytes,
        output_bytes=output_bytes,
        aliases=len(mappings),
        duration_seconds=round(duration, 3),
    )

    return MinifyResult(
        input_path=input_path,
        output_path=output_path,
        input_bytes=input_bytes,
        output_bytes=output_bytes,
        mappings=mappings,
        renamed=settings.renaming_enabled,
        precision=settings.precision if settings.reduce_precision else None,
    )
