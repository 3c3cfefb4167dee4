# contactbook/services/icons.py
"""
Icon attachment handling: validate uploaded images, write them to the
uploads directory, and release them when a contact lets go of them.
"""
import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from contactbook.core.errors import PayloadTooLarge, UnsupportedMediaType

logger = logging.getLogger(__name__)

ICON_URL_PREFIX = "/uploads"
_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9.]")
MAX_NAME_CHARS = 200  # well under the 255-byte filename limit once the time prefix is added

# Raster formats only: SVG can carry script and is served from our own origin
ALLOWED_TYPES = {
    "image/png",
    "image/jpeg",
    "image/gif",
    "image/webp",
    "image/bmp",
}


@dataclass
class IconUpload:
    """An accepted image, fully read into memory."""
    filename: str
    content_type: str
    data: bytes


def sanitize_filename(name: Optional[str]) -> str:
    """
    Replace every character other than letters, digits and dots with '_'.
    Long names keep their tail so the extension survives.
    """
    base = Path(name or "").name
    cleaned = _UNSAFE_CHARS.sub("_", base)[-MAX_NAME_CHARS:].lstrip(".")
    return cleaned or "icon"


async def read_icon(upload: Optional[UploadFile], max_bytes: int) -> Optional[IconUpload]:
    """
    Validate an uploaded icon without touching disk or database.

    Returns None when the request carried no file.

    Raises:
        UnsupportedMediaType: Declared content type is not an allowed raster image
        PayloadTooLarge: More than ``max_bytes`` bytes were sent
    """
    if upload is None:
        return None
    # Browsers send an empty part with no filename when no file was picked
    if not upload.filename and not upload.size:
        return None

    content_type = (upload.content_type or "").split(";", 1)[0].strip().lower()
    if content_type not in ALLOWED_TYPES:
        raise UnsupportedMediaType(message=f"Unsupported icon type: {upload.content_type or 'unknown'}")

    data = await upload.read(max_bytes + 1)
    if len(data) > max_bytes:
        raise PayloadTooLarge(message=f"Icon exceeds the {max_bytes} byte limit")
    return IconUpload(filename=upload.filename or "", content_type=content_type, data=data)


def store_icon(icon: IconUpload, upload_dir: Path) -> str:
    """
    Write the icon as ``<epoch-millis>-<sanitized name>`` and return its URL path.
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    millis = int(time.time() * 1000)
    name = sanitize_filename(icon.filename)
    filename = f"{millis}-{name}"
    attempt = 1
    while True:
        try:
            # "xb" never overwrites: another upload may have claimed this name in the same millisecond
            with open(upload_dir / filename, "xb") as buffer:
                buffer.write(icon.data)
            break
        except FileExistsError:
            attempt += 1
            filename = f"{millis}-{attempt}-{name}"
    logger.info("[icons] stored %s (%d bytes)", filename, len(icon.data))
    return f"{ICON_URL_PREFIX}/{filename}"


def icon_path(ref: str, upload_dir: Path) -> Path:
    """Resolve an icon reference to its file; only the basename is trusted."""
    return upload_dir / Path(ref).name


def remove_icon(ref: Optional[str], upload_dir: Path) -> bool:
    """
    Delete the file behind ``ref``.

    Failures are logged and swallowed: releasing a file never fails the
    request that removed the reference.
    """
    if not ref:
        return False
    path = icon_path(ref, upload_dir)
    try:
        path.unlink()
    except FileNotFoundError:
        logger.warning("[icons] icon file already gone: %s", path)
        return False
    except OSError as e:
        logger.error("[icons] failed to remove %s: %s", path, e)
        return False
    logger.info("[icons] removed %s", path.name)
    return True
