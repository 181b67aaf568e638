"""
lanplus-crypt: cryptographic primitives for IPMI v2.0 LAN+ (RMCP+) sessions.

Provides the random, HMAC-SHA1 and AES-CBC-128 operations an RMCP+ session
needs to run RAKP and protect its payloads.

Basic Usage:
    >>> from lanplus import create_crypto_context, MacAlgorithm
    >>>
    >>> ctx = create_crypto_context()          # seeds from /dev/urandom
    >>> iv = ctx.random_bytes(16)
    >>> key = ctx.random_bytes(16)
    >>>
    >>> ciphertext = ctx.encrypt(iv, key, b"sixteen byte msg")
    >>> ctx.decrypt(iv, key, ciphertext)
    b'sixteen byte msg'
    >>>
    >>> auth_code = ctx.hmac(MacAlgorithm.RAKP_HMAC_SHA1, b"password", b"rakp2")
    >>> len(auth_code)
    20
"""

__version__ = "1.0.0"

from typing import Optional

from .config import ConfigError, LanplusConfig
from .crypto.aes_cbc import (CipherError, DecryptionFailedError,
                             EncryptionFailedError, decrypt_aes_cbc_128,
                             encrypt_aes_cbc_128)
from .crypto.constants import (AuthAlgorithm, CryptAlgorithm,
                               IntegrityAlgorithm, MacAlgorithm)
from .crypto.mac import (MacError, UnsupportedAlgorithmError, compute_hmac,
                         mac_algorithm_for, verify_hmac)
from .crypto.random import (DeterministicRandomSource, RandomError,
                            RandomSource, SecureRandomSource, SeedError,
                            create_random_source, seed_prng)
from .crypto.utils import (BlockAlignmentError, LanplusCryptError,
                           PreconditionError)
from .diagnostics import BufferTracer


class CryptoContext:
    """
    Bundles a random source and a diagnostic tracer with the primitives.

    The random source is fixed when the context is built. The HMAC and
    cipher calls are stateless; the context only forwards its tracer.
    """

    def __init__(self, config: Optional[LanplusConfig] = None,
                 random_source: Optional[RandomSource] = None,
                 tracer: Optional[BufferTracer] = None):
        """
        Initialize context.

        Args:
            config: Settings; defaults to production settings
            random_source: Source to use instead of the one config selects
            tracer: Tracer to use instead of one built from config
        """
        self.config = config or LanplusConfig()
        self.random_source = random_source or create_random_source(self.config)
        self.tracer = tracer or self.config.create_tracer()

    def seed(self, byte_count: Optional[int] = None) -> None:
        """Seed the random source; defaults to config.seed_bytes."""
        if byte_count is None:
            byte_count = self.config.seed_bytes
        self.random_source.seed(byte_count)

    def fill(self, buffer, length: int) -> None:
        self.random_source.fill(buffer, length)

    def random_bytes(self, length: int) -> bytes:
        return self.random_source.random_bytes(length)

    def hmac(self, algorithm: MacAlgorithm, key: bytes, data: bytes) -> bytes:
        return compute_hmac(algorithm, key, data, tracer=self.tracer)

    def verify_hmac(self, algorithm: MacAlgorithm, key: bytes, data: bytes,
                    expected: bytes) -> bool:
        return verify_hmac(algorithm, key, data, expected, tracer=self.tracer)

    def encrypt(self, iv: bytes, key: bytes, plaintext: bytes) -> bytes:
        return encrypt_aes_cbc_128(iv, key, plaintext, tracer=self.tracer)

    def decrypt(self, iv: bytes, key: bytes, ciphertext: bytes) -> bytes:
        return decrypt_aes_cbc_128(iv, key, ciphertext, tracer=self.tracer)

    def get_info(self) -> dict:
        """Get information about this context."""
        return {
            'random_source': self.random_source.name,
            'insecure_random': self.random_source.insecure,
            'seeded': self.random_source.is_seeded,
            'mac_algorithms': [alg.value for alg in MacAlgorithm],
            'cipher': 'AES-CBC-128',
            'verbosity': self.tracer.verbosity,
        }


def create_crypto_context(config: Optional[LanplusConfig] = None) -> CryptoContext:
    """
    Create and seed a crypto context.

    Args:
        config: Settings; defaults to production settings

    Returns:
        Seeded CryptoContext

    Raises:
        SeedError: If the entropy source cannot be read
    """
    ctx = CryptoContext(config)
    ctx.seed()
    return ctx


__all__ = [
    '__version__',

    # High-level interface
    'CryptoContext',
    'create_crypto_context',
    'LanplusConfig',
    'ConfigError',
    'BufferTracer',

    # Random
    'RandomSource',
    'SecureRandomSource',
    'DeterministicRandomSource',
    'create_random_source',
    'seed_prng',

    # Keyed hash
    'MacAlgorithm',
    'compute_hmac',
    'verify_hmac',
    'mac_algorithm_for',

    # Cipher
    'encrypt_aes_cbc_128',
    'decrypt_aes_cbc_128',

    # Algorithm numbers
    'AuthAlgorithm',
    'IntegrityAlgorithm',
    'CryptAlgorithm',

    # Errors
    'LanplusCryptError',
    'PreconditionError',
    'BlockAlignmentError',
    'SeedError',
    'RandomError',
    'MacError',
    'UnsupportedAlgorithmError',
    'CipherError',
    'EncryptionFailedError',
    'DecryptionFailedError',
]
