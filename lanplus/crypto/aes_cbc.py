"""
AES-CBC-128 payload confidentiality for RMCP+ sessions.

Callers pad payloads to whole blocks themselves (the IPMI confidentiality
trailer), so these functions never add or strip padding: output length is
always equal to input length. The cryptography CBC mode only pads when a
padder is attached, and none is.
"""

import logging
from typing import Optional

from cryptography.hazmat.primitives.ciphers import Cipher, algorithms, modes

from ..diagnostics import TRACE_INPUTS, TRACE_OUTPUT, BufferTracer, get_tracer
from .constants import (AES_CBC_128_BLOCK_SIZE, AES_CBC_128_IV_SIZE,
                        AES_CBC_128_KEY_SIZE)
from .utils import (BlockAlignmentError, BytesLike, LanplusCryptError,
                    require_bytes, require_length)

logger = logging.getLogger(__name__)


class CipherError(LanplusCryptError):
    """Raised when the cipher engine rejects an operation."""
    pass


class EncryptionFailedError(CipherError):
    """Raised when AES-CBC-128 encryption fails."""

    def __init__(self, engine_message: str):
        self.engine_message = engine_message
        super().__init__(f"AES-CBC-128 encryption failed: {engine_message}")


class DecryptionFailedError(CipherError):
    """Raised when AES-CBC-128 decryption fails."""

    def __init__(self, engine_message: str):
        self.engine_message = engine_message
        super().__init__(f"AES-CBC-128 decryption failed: {engine_message}")


def _check_inputs(iv: BytesLike, key: BytesLike, data: BytesLike):
    iv = require_bytes("iv", iv)
    key = require_bytes("key", key)
    data = require_bytes("data", data)
    require_length("iv", iv, AES_CBC_128_IV_SIZE)
    require_length("key", key, AES_CBC_128_KEY_SIZE)
    if len(data) % AES_CBC_128_BLOCK_SIZE:
        raise BlockAlignmentError(
            f"Input length {len(data)} is not a multiple of "
            f"{AES_CBC_128_BLOCK_SIZE}"
        )
    return iv, key, data


def _new_cipher(iv: bytes, key: bytes) -> Cipher:
    return Cipher(algorithms.AES(key), modes.CBC(iv))


def encrypt_aes_cbc_128(iv: BytesLike, key: BytesLike, plaintext: BytesLike,
                        tracer: Optional[BufferTracer] = None) -> bytes:
    """
    Encrypt block-aligned data with AES-CBC-128.

    Args:
        iv: 16-byte initialization vector
        key: 16-byte key
        plaintext: Data to encrypt; length must be a multiple of 16
        tracer: Optional diagnostic tracer

    Returns:
        Ciphertext, the same length as plaintext

    Raises:
        PreconditionError: If iv or key is the wrong size
        BlockAlignmentError: If plaintext is not block aligned
        EncryptionFailedError: If the cipher engine fails
    """
    iv, key, plaintext = _check_inputs(iv, key, plaintext)
    if not plaintext:
        return b""

    tracer = get_tracer(tracer)
    tracer.printbuf(iv, "encrypting with this IV", TRACE_INPUTS)
    tracer.printbuf(key, "encrypting with this key", TRACE_INPUTS)
    tracer.printbuf(plaintext, "encrypting this data", TRACE_INPUTS)

    try:
        encryptor = _new_cipher(iv, key).encryptor()
        ciphertext = encryptor.update(plaintext) + encryptor.finalize()
    except Exception as e:
        raise EncryptionFailedError(str(e) or type(e).__name__) from e

    if len(ciphertext) != len(plaintext):
        raise EncryptionFailedError(
            f"engine produced {len(ciphertext)} bytes for {len(plaintext)} input bytes"
        )
    return ciphertext


def decrypt_aes_cbc_128(iv: BytesLike, key: BytesLike, ciphertext: BytesLike,
                        tracer: Optional[BufferTracer] = None) -> bytes:
    """
    Decrypt block-aligned data with AES-CBC-128.

    Args:
        iv: 16-byte initialization vector
        key: 16-byte key
        ciphertext: Data to decrypt; length must be a multiple of 16
        tracer: Optional diagnostic tracer

    Returns:
        Plaintext, the same length as ciphertext. Trailer padding is left
        in place for the caller to remove.

    Raises:
        PreconditionError: If iv or key is the wrong size
        BlockAlignmentError: If ciphertext is not block aligned
        DecryptionFailedError: If the cipher engine fails; carries the
            engine's message in engine_message
    """
    iv, key, ciphertext = _check_inputs(iv, key, ciphertext)

    tracer = get_tracer(tracer)
    tracer.printbuf(iv, "decrypting with this IV", TRACE_INPUTS)
    tracer.printbuf(key, "decrypting with this key", TRACE_INPUTS)
    tracer.printbuf(ciphertext, "decrypting this data", TRACE_INPUTS)

    if not ciphertext:
        return b""

    try:
        decryptor = _new_cipher(iv, key).decryptor()
        plaintext = decryptor.update(ciphertext)
    except Exception as e:
        logger.error("Decrypt update failed: %s", e)
        raise DecryptionFailedError(str(e) or type(e).__name__) from e

    try:
        plaintext += decryptor.finalize()
    except Exception as e:
        logger.error("Decrypt final failed: %s", e)
        raise DecryptionFailedError(str(e) or type(e).__name__) from e

    if len(plaintext) != len(ciphertext):
        logger.error("Decrypt produced %d bytes for %d input bytes",
                     len(plaintext), len(ciphertext))
        raise DecryptionFailedError(
            f"engine produced {len(plaintext)} bytes for {len(ciphertext)} input bytes"
        )

    tracer.message("Decrypted %d encrypted bytes", len(ciphertext), threshold=TRACE_OUTPUT)
    tracer.printbuf(plaintext, "Decrypted this data", TRACE_OUTPUT)
    return plaintext
