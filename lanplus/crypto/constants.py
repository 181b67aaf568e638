"""
RMCP+ algorithm numbers and primitive sizes.

The IPMI v2.0 specification numbers authentication, integrity and
confidentiality algorithms independently, so the same wire code (0x01) names
HMAC-SHA1 both as a RAKP authentication algorithm and as an integrity
algorithm. MacAlgorithm keeps the two usages apart.
"""

from enum import Enum, IntEnum

AES_CBC_128_BLOCK_SIZE = 16
AES_CBC_128_KEY_SIZE = 16
AES_CBC_128_IV_SIZE = 16

SHA1_DIGEST_SIZE = 20
HMAC_SHA1_96_AUTHCODE_SIZE = 12

DEFAULT_SEED_BYTES = 16
FAKE_RANDOM_BASE = 0x70


class AuthAlgorithm(IntEnum):
    """RAKP authentication algorithm numbers."""
    RAKP_NONE = 0x00
    RAKP_HMAC_SHA1 = 0x01
    RAKP_HMAC_MD5 = 0x02


class IntegrityAlgorithm(IntEnum):
    """Per-packet integrity algorithm numbers."""
    NONE = 0x00
    HMAC_SHA1_96 = 0x01
    HMAC_MD5_128 = 0x02
    MD5_128 = 0x03


class CryptAlgorithm(IntEnum):
    """Confidentiality algorithm numbers."""
    NONE = 0x00
    AES_CBC_128 = 0x01
    XRC4_128 = 0x02
    XRC4_40 = 0x03


class MacAlgorithm(Enum):
    """Keyed-hash usages supported by compute_hmac. Both are HMAC-SHA1."""
    RAKP_HMAC_SHA1 = "rakp-hmac-sha1"
    INTEGRITY_HMAC_SHA1_96 = "integrity-hmac-sha1-96"

    @property
    def wire_code(self) -> int:
        if self is MacAlgorithm.RAKP_HMAC_SHA1:
            return int(AuthAlgorithm.RAKP_HMAC_SHA1)
        return int(IntegrityAlgorithm.HMAC_SHA1_96)


__all__ = [
    'AES_CBC_128_BLOCK_SIZE',
    'AES_CBC_128_KEY_SIZE',
    'AES_CBC_128_IV_SIZE',
    'SHA1_DIGEST_SIZE',
    'HMAC_SHA1_96_AUTHCODE_SIZE',
    'DEFAULT_SEED_BYTES',
    'FAKE_RANDOM_BASE',
    'AuthAlgorithm',
    'IntegrityAlgorithm',
    'CryptAlgorithm',
    'MacAlgorithm',
]
