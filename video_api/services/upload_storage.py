import os
import logging
import uuid
from contextlib import suppress
from pathlib import Path

import aiofiles
import aiofiles.os
from starlette.datastructures import UploadFile

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_SIZE = 1024 * 1024  # 1 MiB


class UploadStorageError(Exception):
    """The upload folder could not be written."""


class UploadTooLargeError(UploadStorageError):
    def __init__(self, max_size: int):
        super().__init__(f"file exceeds the maximum upload size of {max_size} bytes")
        self.max_size = max_size


class InvalidFilenameError(ValueError):
    pass


def safe_filename(filename) -> str:
    """Strip any directory part from a client supplied filename."""
    name = os.path.basename((filename or "").replace("\\", "/")).strip()
    if name in ("", ".", ".."):
        raise InvalidFilenameError(f"invalid upload filename: {filename!r}")
    return name


def ensure_upload_folder(folder) -> Path:
    path = Path(folder)
    path.mkdir(parents=True, exist_ok=True)
    return path


async def save_upload(upload: UploadFile, folder, filename: str, max_size: int) -> int:
    """
    Stream an uploaded file into ``folder/filename``.

    The bytes go to a private part file first and are renamed onto the
    destination once complete, so concurrent uploads of the same name never
    interleave. The part file is removed whenever the rename does not happen.
    Returns the number of bytes written.
    """
    destination = Path(folder) / filename
    # part name length is fixed, independent of the client filename
    part_path = Path(folder) / f".{uuid.uuid4().hex}.part"
    total_size = 0
    stored = False
    try:
        async with aiofiles.open(part_path, "wb") as f:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_SIZE)
                if not chunk:
                    break
                total_size += len(chunk)
                if total_size > max_size:
                    raise UploadTooLargeError(max_size)
                await f.write(chunk)
        await aiofiles.os.replace(part_path, destination)
        stored = True
    except OSError as e:
        logger.error(f"Failed to write {destination}: {e}")
        raise UploadStorageError(str(e)) from e
    finally:
        if not stored:
            with suppress(OSError):
                part_path.unlink()

    logger.info(f"Stored upload {destination} ({total_size} bytes)")
    return total_size
