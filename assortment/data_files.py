"""Local catalog file handling."""
from __future__ import annotations

import logging
import shutil
from pathlib import Path
from urllib.error import URLError
from urllib.request import urlopen

from .errors import CatalogUnavailable

logger = logging.getLogger(__name__)

LFS_POINTER_PREFIX = "version https://git-lfs.github.com/spec/v1"


def ensure_data_file(path: str | Path, source_url: str | None = None) -> Path:
    """Return ``path``, downloading it first when missing and a URL is known."""
    file_path = Path(path)
    if file_path.exists():
        return file_path
    if not source_url:
        raise CatalogUnavailable(f"Catalog file {file_path} is missing and no download URL is configured")
    logger.info("Downloading catalog %s from %s", file_path, source_url)
    file_path.parent.mkdir(parents=True, exist_ok=True)
    try:
        with urlopen(source_url) as response, file_path.open("wb") as handle:
            shutil.copyfileobj(response, handle)
    except (OSError, URLError) as exc:
        raise CatalogUnavailable(f"Failed to download {source_url} -> {file_path}") from exc
    return file_path


def is_lfs_pointer(path: Path) -> bool:
    with path.open("r", encoding="utf-8") as fh:
        return fh.readline().startswith(LFS_POINTER_PREFIX)
