"""
Keyed-hash message authentication for RAKP and per-packet integrity.

Both supported usages are HMAC-SHA1. RAKP authentication codes use the full
20-byte digest; the HMAC-SHA1-96 integrity check is the first 12 bytes of
the same digest, truncated by the caller.
"""

from typing import Optional

from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives import hmac as crypto_hmac

from ..diagnostics import BufferTracer, get_tracer
from .constants import AuthAlgorithm, IntegrityAlgorithm, MacAlgorithm
from .utils import (BytesLike, LanplusCryptError, PreconditionError,
                    constant_time_compare, require_bytes)


class MacError(LanplusCryptError):
    """Raised when a keyed hash cannot be computed."""
    pass


class UnsupportedAlgorithmError(MacError):
    """Raised when the MAC algorithm tag is not a supported usage."""

    def __init__(self, algorithm):
        self.algorithm = algorithm
        if isinstance(algorithm, int) and not isinstance(algorithm, bool):
            shown = f"0x{int(algorithm):x}"
        else:
            shown = repr(algorithm)
        super().__init__(f"Invalid mac type {shown}")


_HASHES = {
    MacAlgorithm.RAKP_HMAC_SHA1: hashes.SHA1,
    MacAlgorithm.INTEGRITY_HMAC_SHA1_96: hashes.SHA1,
}


def mac_algorithm_for(code) -> MacAlgorithm:
    """
    Map an IPMI authentication or integrity algorithm number to a MacAlgorithm.

    Plain integers are rejected because the same number means different
    algorithms in the authentication and integrity tables.

    Args:
        code: An AuthAlgorithm or IntegrityAlgorithm member

    Returns:
        The matching MacAlgorithm

    Raises:
        UnsupportedAlgorithmError: If there is no HMAC-SHA1 usage for code
    """
    if code is AuthAlgorithm.RAKP_HMAC_SHA1:
        return MacAlgorithm.RAKP_HMAC_SHA1
    if code is IntegrityAlgorithm.HMAC_SHA1_96:
        return MacAlgorithm.INTEGRITY_HMAC_SHA1_96
    raise UnsupportedAlgorithmError(code)


def _hash_for(algorithm) -> hashes.HashAlgorithm:
    if not isinstance(algorithm, MacAlgorithm):
        raise UnsupportedAlgorithmError(algorithm)
    return _HASHES[algorithm]()


def compute_hmac(algorithm: MacAlgorithm, key: BytesLike, data: BytesLike,
                 tracer: Optional[BufferTracer] = None) -> bytes:
    """
    Compute a keyed hash over data.

    Args:
        algorithm: RAKP_HMAC_SHA1 or INTEGRITY_HMAC_SHA1_96
        key: Key of any length
        data: Data to authenticate

    Returns:
        The full 20-byte digest

    Raises:
        UnsupportedAlgorithmError: If algorithm is not a supported MacAlgorithm
        PreconditionError: If key or data is not bytes-like
        MacError: If the hash engine fails
    """
    hash_algorithm = _hash_for(algorithm)
    key = require_bytes("key", key)
    data = require_bytes("data", data)

    tracer = get_tracer(tracer)
    tracer.printbuf(key, f"{algorithm.value} key")
    tracer.printbuf(data, f"{algorithm.value} data")

    try:
        h = crypto_hmac.HMAC(key, hash_algorithm)
        h.update(data)
        digest = h.finalize()
    except Exception as e:
        raise MacError(f"HMAC computation failed: {e}") from e

    tracer.printbuf(digest, f"{algorithm.value} digest")
    return digest


def verify_hmac(algorithm: MacAlgorithm, key: BytesLike, data: BytesLike,
                expected: BytesLike, tracer: Optional[BufferTracer] = None) -> bool:
    """
    Check a received authentication code against the keyed hash of data.

    expected may be a truncated digest, such as a 12-byte HMAC-SHA1-96
    integrity code; only that many leading bytes are compared.

    Returns:
        True if the code matches

    Raises:
        PreconditionError: If expected is empty or longer than the digest
    """
    expected = require_bytes("expected", expected)
    if not expected or len(expected) > algorithm_digest_size(algorithm):
        raise PreconditionError(
            f"expected code must be 1-{algorithm_digest_size(algorithm)} bytes, "
            f"got {len(expected)}"
        )
    digest = compute_hmac(algorithm, key, data, tracer=tracer)
    return constant_time_compare(digest[:len(expected)], expected)


def algorithm_digest_size(algorithm: MacAlgorithm) -> int:
    """Return the native digest size for algorithm."""
    return _hash_for(algorithm).digest_size
