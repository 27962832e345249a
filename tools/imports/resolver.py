"""Omnigage Imports — Local file resolution.

Collects name, size and MIME type for a file before it is registered.
Only CSV and XLSX files are accepted by the contacts import.
"""
import logging
from pathlib import Path
from typing import Optional, Union

from tools.imports.errors import ImportFileNotFound, UnsupportedFileType
from tools.imports.models import CSV_MIME_TYPE, XLSX_MIME_TYPE, FileDescriptor

logger = logging.getLogger("omnigage.imports.resolver")

MIME_TYPES = {
    ".xlsx": XLSX_MIME_TYPE,
    ".csv": CSV_MIME_TYPE,
}

SUPPORTED_EXTENSIONS = set(MIME_TYPES)


def get_mime_type(filename: str) -> Optional[str]:
    """Determine MIME type based on the file name. None if not accepted."""
    return MIME_TYPES.get(Path(filename).suffix)


def resolve_file(path: Union[str, Path]) -> FileDescriptor:
    """Build a FileDescriptor for a local CSV or XLSX file.

    Args:
        path: Local path to the file.

    Returns:
        FileDescriptor with the size measured now.

    Raises:
        ImportFileNotFound: If the path is not an existing file.
        UnsupportedFileType: If the extension is not .csv or .xlsx.
    """
    filepath = Path(path)
    if not filepath.is_file():
        raise ImportFileNotFound(f"File {path} not found.")

    mime_type = get_mime_type(filepath.name)
    if mime_type is None:
        raise UnsupportedFileType(
            f"Only CSV or XLSX files accepted (got '{filepath.suffix or filepath.name}')."
        )

    descriptor = FileDescriptor(
        path=filepath,
        name=filepath.name,
        size_bytes=filepath.stat().st_size,
        mime_type=mime_type,
    )
    logger.debug("Resolved %s (%d bytes, %s)", descriptor.name, descriptor.size_bytes, mime_type)
    return descriptor
