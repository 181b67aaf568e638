"""
Cryptographic primitives for IPMI v2.0 LAN+ sessions.

This module provides the primitive operations used by RMCP+ session setup:
- Random bytes for nonces and session IDs
- HMAC-SHA1 for RAKP authentication and packet integrity
- AES-CBC-128 payload encryption and decryption
"""

from .aes_cbc import (CipherError, DecryptionFailedError, EncryptionFailedError,
                      decrypt_aes_cbc_128, encrypt_aes_cbc_128)
from .constants import (AuthAlgorithm, CryptAlgorithm, IntegrityAlgorithm,
                        MacAlgorithm)
from .mac import (MacError, UnsupportedAlgorithmError, compute_hmac,
                  mac_algorithm_for, verify_hmac)
from .random import (DeterministicRandomSource, RandomError, RandomSource,
                     SecureRandomSource, SeedError, create_random_source,
                     seed_prng)
from .utils import BlockAlignmentError, LanplusCryptError, PreconditionError

__all__ = [
    'seed_prng',
    'RandomSource',
    'SecureRandomSource',
    'DeterministicRandomSource',
    'create_random_source',
    'compute_hmac',
    'verify_hmac',
    'mac_algorithm_for',
    'encrypt_aes_cbc_128',
    'decrypt_aes_cbc_128',
    'MacAlgorithm',
    'AuthAlgorithm',
    'IntegrityAlgorithm',
    'CryptAlgorithm',
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
