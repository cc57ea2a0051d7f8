"""Source directory scanning: file discovery and reading."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Sequence, Union

from .config import SOURCE_SUFFIXES
from .errors import DirectoryNotFoundError
from .models import ModuleRecord

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def matched_suffix(file_name: str, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> Optional[str]:
    """Return the first recognized suffix *file_name* ends with, if any."""
    for suffix in suffixes:
        if file_name.endswith(suffix):
            return suffix
    return None


def scan_directory(directory: PathLike, suffixes: Sequence[str] = SOURCE_SUFFIXES) -> List[str]:
    """List source file names directly inside *directory*.

    Order follows directory enumeration and is not guaranteed to be stable.
    Raises ``DirectoryNotFoundError`` if the directory cannot be listed.
    """
    root = Path(directory)
    if not root.is_dir():
        raise DirectoryNotFoundError(str(root), "not a directory")

    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise DirectoryNotFoundError(str(root), str(exc)) from exc

    files = []
    for entry in entries:
        if entry.is_file() and matched_suffix(entry.name, suffixes):
            files.append(entry.name)
    return files


def read_source(directory: PathLike, file_name: str) -> str:
    """Read one source file as UTF-8 text."""
    path = Path(directory) / file_name
    try:
        return path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        raise DirectoryNotFoundError(str(path), str(exc)) from exc


def load_modules(directory: PathLike, parser=None) -> List[ModuleRecord]:
    """Scan *directory* and extract one ``ModuleRecord`` per source file."""
    from .parser import RegexModuleParser

    parser = parser or RegexModuleParser()
    records = []
    for file_name in scan_directory(directory, parser.suffixes):
        content = read_source(directory, file_name)
        records.append(parser.parse(file_name, content))
        logger.debug("Scanned: %s", file_name)
    return records
