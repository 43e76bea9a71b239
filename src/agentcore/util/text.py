"""
UTF-8 safe text truncation and bounded file reads.

All limits in this module are measured in UTF-8 encoded bytes, not in
characters. Truncation never splits a multi-byte character.
"""

import asyncio
import os
from pathlib import Path

from agentcore.errors import CustomExecutionError, IoExecutionError


def truncate_safe(s: str, max_bytes: int) -> str:
    """
    Return the longest prefix of `s` that fits in `max_bytes` UTF-8 bytes.

    Examples:
        truncate_safe("Hello World", 5) -> "Hello"
        truncate_safe("αα", 3) -> "α"
    """
    encoded = s.encode("utf-8")
    if len(encoded) <= max_bytes:
        return s
    # A prefix of valid UTF-8 can only be broken at its tail.
    return encoded[: max(max_bytes, 0)].decode("utf-8", errors="ignore")


def truncate_with_suffix(s: str, max_bytes: int, suffix: str) -> str:
    """
    Truncate `s` to at most `max_bytes` bytes, ending it with `suffix`.

    If `s` already fits it is returned unchanged. If `suffix` alone does not
    fit, the result is `suffix` truncated to `max_bytes`.
    """
    if len(s.encode("utf-8")) <= max_bytes:
        return s

    suffix_len = len(suffix.encode("utf-8"))
    if suffix_len > max_bytes:
        return truncate_safe(suffix, max_bytes)

    return truncate_safe(s, max_bytes - suffix_len) + suffix


def _read_limited(path: Path, max_file_length: int) -> tuple[bytes, int]:
    try:
        f = path.open("rb")
    except OSError as e:
        raise IoExecutionError(io_context=f"Failed to open file at '{path}'", source=e) from e
    except ValueError as e:
        raise CustomExecutionError(message=f"Failed to open file at '{path}': {e}") from e

    with f:
        try:
            size = os.fstat(f.fileno()).st_size
        except OSError as e:
            raise IoExecutionError(
                io_context=f"Failed to query file metadata at '{path}'", source=e
            ) from e
        try:
            data = f.read(max_file_length)
        except OSError as e:
            raise IoExecutionError(io_context=f"Failed to read from file at '{path}'", source=e) from e

    return data, size


async def read_file_with_max_limit(
    path: str | Path,
    max_file_length: int,
    truncated_suffix: str,
) -> tuple[str, int]:
    """
    Read a file, returning at most `max_file_length` bytes of text.

    Invalid UTF-8 is replaced rather than rejected. If the file is longer
    than the limit, the content is cut so that `truncated_suffix` fits and
    the suffix is appended.

    Args:
        path: File to read
        max_file_length: Maximum length of the returned content in bytes
        truncated_suffix: Marker appended when the file was truncated

    Returns:
        Tuple of (content, number of bytes of the file not returned)

    Raises:
        IoExecutionError: If the file cannot be opened or read
    """
    path = Path(path)
    data, size = await asyncio.to_thread(_read_limited, path, max_file_length)
    content = data.decode("utf-8", errors="replace")

    if size <= max_file_length:
        return content, 0

    suffix_len = len(truncated_suffix.encode("utf-8"))
    if suffix_len > max_file_length:
        return "", size

    truncated_amount = size - max_file_length + suffix_len
    content = truncate_safe(content, max_file_length - suffix_len) + truncated_suffix
    return content, truncated_amount
