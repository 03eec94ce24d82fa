# src/spatialmin/core/document.py
"""Loading, serializing and saving spatial JSON documents.

The whole document is held in memory. Output is written to a temporary
sibling file and moved into place only once it is complete, so a failed
run never leaves a truncated file behind.
"""

from __future__ import annotations

import json
import math
import os
from pathlib import Path
from typing import Any

from spatialmin.contracts.errors import DocumentParseError, DocumentReadError, DocumentWriteError
from spatialmin.core.logging import get_logger

logger = get_logger(__name__)

DEFAULT_OUTPUT_INFIX = ".minified"
DEFAULT_INDENT = 4


def _reject_nonfinite_constant(value: str) -> None:
    """Reject non-standard JSON constants (NaN, Infinity, -Infinity).

    Python's json module accepts these by default, but they are not JSON
    and the editor would refuse a file containing them.

    Raises:
        ValueError: Always
    """
    raise ValueError(f"Non-standard JSON constant '{value}' not allowed")


def _parse_finite_float(literal: str) -> float:
    """Parse a JSON number literal, rejecting ones that overflow to infinity.

    ``1e400`` is valid JSON syntax but has no finite float value, and the
    serializer cannot write it back out.

    Raises:
        ValueError: If the literal is out of float range
    """
    value = float(literal)
    if not math.isfinite(value):
        raise ValueError(f"Number {literal} is out of range")
    return value


def parse_document(text: str, *, path: Path | None = None) -> Any:
    """Parse JSON text into a document tree.

    Raises:
        DocumentParseError: If the text is not valid JSON or the document is null
    """
    try:
        document = json.loads(text, parse_float=_parse_finite_float, parse_constant=_reject_nonfinite_constant)
    except json.JSONDecodeError as e:
        raise DocumentParseError(e.msg, path=path, line=e.lineno, column=e.colno) from e
    except ValueError as e:
        raise DocumentParseError(str(e), path=path) from e

    if document is None:
        raise DocumentParseError("Document is empty (parsed to null)", path=path)
    return document


def load_document(path: Path) -> tuple[Any, int]:
    """Read and parse the document at ``path``.

    Returns:
        (document, size in bytes of the file as read)

    Raises:
        DocumentReadError: If the file cannot be read
        DocumentParseError: If the content is not a usable JSON document
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise DocumentReadError(path, e.strerror or str(e)) from e

    try:
        # utf-8-sig tolerates the BOM some Windows editors prepend
        text = raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise DocumentParseError(f"Input is not valid UTF-8: {e.reason}", path=path) from e

    document = parse_document(text, path=path)
    logger.debug("document_loaded", path=str(path), size_bytes=len(raw))
    return document, len(raw)


def serialize_document(document: Any, *, formatted: bool = False, indent: int = DEFAULT_INDENT) -> str:
    """Serialize a document compactly, or indented when ``formatted``.

    Non-ASCII characters are written as-is rather than escaped, which keeps
    the output smaller.
    """
    if formatted:
        return json.dumps(document, ensure_ascii=False, allow_nan=False, indent=indent)
    return json.dumps(document, ensure_ascii=False, allow_nan=False, separators=(",", ":"))


def write_document(path: Path, text: str) -> int:
    """Atomically write ``text`` to ``path``.

    Content goes to a temporary file in the same directory, is flushed and
    fsynced, then replaces ``path`` in one rename.

    Returns:
        Size in bytes of the written file

    Raises:
        DocumentWriteError: If any step fails; ``path`` is left untouched
    """
    temp_path = path.with_name(f".{path.name}.tmp")
    try:
        with open(temp_path, "w", encoding="utf-8", newline="") as f:
            f.write(text)
            f.flush()
            os.fsync(f.fileno())
        os.replace(temp_path, path)
    except OSError as e:
        temp_path.unlink(missing_ok=True)
        raise DocumentWriteError(path, e.strerror or str(e)) from e

    size_bytes = path.stat().st_size
    logger.debug("document_written", path=str(path), size_bytes=size_bytes)
    return size_bytes


def derive_output_path(input_path: Path, infix: str = DEFAULT_OUTPUT_INFIX) -> Path:
    """Insert ``infix`` before the final extension.

    ``maps/pl_badwater.spatial.json`` → ``maps/pl_badwater.spatial.minified.json``
    """
    return input_path.with_name(f"{input_path.stem}{infix}{input_path.suffix}")
