"""
Shared helpers for the lanplus cryptographic primitives.

Base exception types and the input checks shared by every primitive,
plus small byte helpers.
"""

import hmac
from typing import Union

BytesLike = Union[bytes, bytearray, memoryview]


class LanplusCryptError(Exception):
    """Base class for all errors raised by lanplus primitives."""
    pass


class PreconditionError(LanplusCryptError, ValueError):
    """Raised when a caller passes input of the wrong shape (a programming defect)."""
    pass


class BlockAlignmentError(PreconditionError):
    """Raised when cipher input is not a whole number of blocks."""
    pass


def require_bytes(name: str, data: BytesLike) -> bytes:
    """
    Validate a bytes-like argument and return an immutable copy.

    Args:
        name: Argument name used in the error message
        data: Value to validate

    Returns:
        The data as bytes

    Raises:
        PreconditionError: If data is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise PreconditionError(f"{name} must be bytes-like, got {type(data).__name__}")
    return bytes(data)


def require_length(name: str, data: bytes, length: int) -> None:
    """Raise PreconditionError unless data is exactly length bytes."""
    if len(data) != length:
        raise PreconditionError(f"{name} must be {length} bytes, got {len(data)}")


def secure_zero(data: Union[bytearray, memoryview]) -> None:
    """
    Overwrite a mutable buffer with zeros.

    Immutable bytes cannot be wiped; callers that need wiping pass a
    bytearray or a writable memoryview.

    Args:
        data: Buffer to zero out
    """
    if not isinstance(data, (bytearray, memoryview)):
        raise TypeError("Data must be bytearray or memoryview")
    for i in range(len(data)):
        data[i] = 0


def constant_time_compare(a: BytesLike, b: BytesLike) -> bool:
    """Compare two byte sequences in constant time."""
    return hmac.compare_digest(bytes(a), bytes(b))


def format_hex(data: BytesLike, separator: str = " ") -> str:
    """
    Format bytes as hexadecimal string.

    Args:
        data: Bytes to format
        separator: Separator between hex bytes

    Returns:
        Formatted hex string
    """
    return separator.join(f"{b:02x}" for b in bytes(data))


def parse_hex(hex_string: str) -> bytes:
    """
    Parse hexadecimal string to bytes.

    Args:
        hex_string: Hex string (with or without separators)

    Returns:
        Parsed bytes
    """
    cleaned = hex_string.replace(" ", "").replace(":", "").replace("-", "")
    return bytes.fromhex(cleaned)
