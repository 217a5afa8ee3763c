"""
Archive Serializer - File trees → zip archives

Responsibilities:
- Write a pack's ordered file tree into one deflated zip
- Re-expand both pack archives under <name>_BP/ and <name>_RP/ in the
  combined .mcaddon archive, so every inner file is individually listed

Entries get a fixed timestamp, so the same file tree always yields the
same set of paths and contents.
"""
import io
import json
import logging
import zipfile
from typing import Any, Iterable, Tuple

logger = logging.getLogger(__name__)


FIXED_TIMESTAMP = (1980, 1, 1, 0, 0, 0)


class ArchiveError(Exception):
    """Raised when an archive cannot be written or re-read"""
    pass


def encode_content(content: Any) -> bytes:
    """bytes as-is, text as UTF-8, everything else as indented JSON"""
    if isinstance(content, (bytes, bytearray)):
        return bytes(content)
    if isinstance(content, str):
        return content.encode("utf-8")
    return json.dumps(content, indent=2, ensure_ascii=False).encode("utf-8")


def _write_entry(archive: zipfile.ZipFile, path: str, data: bytes) -> None:
    info = zipfile.ZipInfo(path, date_time=FIXED_TIMESTAMP)
    info.compress_type = zipfile.ZIP_DEFLATED
    info.external_attr = 0o644 << 16
    archive.writestr(info, data)


def serialize_files(files: Iterable[Tuple[str, Any]]) -> bytes:
    """
    Serialize (path, content) pairs into a zip archive

    Raises:
        ArchiveError: If any entry cannot be encoded or written
    """
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as archive:
            for path, content in files:
                _write_entry(archive, path, encode_content(content))
    except (TypeError, ValueError, OSError, MemoryError, zipfile.LargeZipFile) as e:
        raise ArchiveError(f"Failed to write archive: {e}") from e
    return buffer.getvalue()


def pack_folder_name(name: str) -> str:
    """Addon name usable as a single folder segment."""
    cleaned = name.replace("/", "_").replace("\\", "_").strip()
    return cleaned or "addon"


def combine_archives(name: str, behavior_archive: bytes, resource_archive: bytes) -> bytes:
    """
    Build the combined .mcaddon archive

    Args:
        name: Addon name (folder prefix)
        behavior_archive: Serialized behavior pack
        resource_archive: Serialized resource pack

    Raises:
        ArchiveError: If an inner archive cannot be read or the output written
    """
    folder = pack_folder_name(name)
    buffer = io.BytesIO()
    try:
        with zipfile.ZipFile(buffer, "w", compression=zipfile.ZIP_DEFLATED) as combined:
            for suffix, inner_bytes in (("BP", behavior_archive), ("RP", resource_archive)):
                with zipfile.ZipFile(io.BytesIO(inner_bytes)) as inner:
                    for info in inner.infolist():
                        if info.is_dir():
                            continue
                        _write_entry(combined, f"{folder}_{suffix}/{info.filename}", inner.read(info))
    except (zipfile.BadZipFile, OSError, MemoryError, zipfile.LargeZipFile) as e:
        raise ArchiveError(f"Failed to build combined archive: {e}") from e

    logger.debug(f"[Archive] Combined archive for '{folder}' ({buffer.tell()} bytes)")
    return buffer.getvalue()


__all__ = [
    "ArchiveError",
    "FIXED_TIMESTAMP",
    "encode_content",
    "serialize_files",
    "pack_folder_name",
    "combine_archives",
]
