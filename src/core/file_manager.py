"""
File Manager - output path derivation, output writes and scratch files
"""

import logging
import os
import tempfile
from contextlib import contextmanager
from typing import Iterator, Optional

from common.constants import ProcessingConstants

logger = logging.getLogger(__name__)


def build_output_path(
    source_path: str,
    format_tag: str,
    output_dir: Optional[str] = None,
    suffix: str = ProcessingConstants.OUTPUT_SUFFIX,
    base_name: Optional[str] = None,
) -> str:
    """
    Derive the output path ``{dir}/{basename_without_ext}{suffix}.{format}``.

    Args:
        source_path: Path of the source image
        format_tag: Format tag used as the file extension
        output_dir: Target directory; defaults to the source directory
        suffix: Suffix appended to the base name
        base_name: Name to use instead of the source file name

    Returns:
        Output path (relative if the inputs are relative)
    """
    directory = output_dir if output_dir is not None else os.path.dirname(source_path)
    name = base_name if base_name is not None else os.path.basename(source_path)
    stem = os.path.splitext(name)[0]

    return os.path.join(directory, f"{stem}{suffix}.{format_tag}")


def write_output(path: str, data: bytes) -> int:
    """
    Write encoded bytes to path, creating or truncating the file.

    Args:
        path: Output file path
        data: Bytes to write

    Returns:
        Number of bytes written

    Raises:
        OSError: On any filesystem failure
    """
    with open(path, "wb") as f:
        f.write(data)

    logger.debug(f"Wrote {len(data)} bytes to {path}")
    return len(data)


def create_scratch_file(
    data: bytes,
    temp_dir: Optional[str] = None,
    prefix: str = ProcessingConstants.TEMP_PREFIX,
    suffix: str = ProcessingConstants.TEMP_SUFFIX,
) -> str:
    """
    Create a temporary file holding data.

    The file is removed again if writing fails.

    Returns:
        Path of the scratch file

    Raises:
        OSError: If the file cannot be created or written
    """
    fd, path = tempfile.mkstemp(prefix=prefix, suffix=suffix, dir=temp_dir)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
    except OSError:
        remove_scratch_file(path)
        raise

    logger.debug(f"Created scratch file {path} ({len(data)} bytes)")
    return path


def remove_scratch_file(path: str) -> bool:
    """
    Remove a scratch file, logging instead of raising on failure.

    Returns:
        True if the file no longer exists
    """
    try:
        os.remove(path)
        logger.debug(f"Removed scratch file {path}")
        return True
    except FileNotFoundError:
        return True
    except OSError as e:
        logger.warning(f"Failed to remove scratch file {path}: {e}")
        return False


@contextmanager
def scratch_file(
    data: bytes,
    temp_dir: Optional[str] = None,
    prefix: str = ProcessingConstants.TEMP_PREFIX,
    suffix: str = ProcessingConstants.TEMP_SUFFIX,
) -> Iterator[str]:
    """
    Context manager yielding the path of a scratch file holding data.

    The file is removed on every exit path, including exceptions raised
    inside the block.

    Raises:
        OSError: If the scratch file cannot be created or written
    """
    path = create_scratch_file(data, temp_dir=temp_dir, prefix=prefix, suffix=suffix)
    try:
        yield path
    finally:
        remove_scratch_file(path)
