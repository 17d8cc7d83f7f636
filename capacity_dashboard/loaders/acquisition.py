"""
Source-text acquisition: the default file read at startup and user uploads.

Failures here are never raised. A missing file or undecodable upload is
logged and reported as None, which the store treats as an empty ingestion.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

_BOM = "\ufeff"


def _strip_bom(text: str) -> str:
    return text[1:] if text.startswith(_BOM) else text


def read_report_file(path: str | Path, encoding: str = "utf-8") -> str | None:
    """Read the default report file, returning None if it can't be read."""
    try:
        text = Path(path).read_text(encoding=encoding)
    except (OSError, UnicodeDecodeError):
        logger.warning("Auto-load skipped: could not read %s", path, exc_info=True)
        return None

    logger.info("Read %d characters from %s", len(text), path)
    return _strip_bom(text)


def decode_upload(payload: bytes | str | None, encoding: str = "utf-8") -> str | None:
    """Decode an uploaded file's contents to text.

    None means no file was selected. Undecodable bytes are logged and give
    None as well.
    """
    if payload is None:
        logger.info("No file selected")
        return None
    if isinstance(payload, str):
        return _strip_bom(payload)
    try:
        text = payload.decode(encoding)
    except UnicodeDecodeError:
        logger.warning("Upload is not valid %s text", encoding, exc_info=True)
        return None
    return _strip_bom(text)
