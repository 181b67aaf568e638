"""
Integration tests for lanplus.

Drives the primitives the way an RMCP+ session does: seed once, draw
nonces, authenticate RAKP messages, tag packets and protect payloads.
"""

import pytest

from lanplus import (BlockAlignmentError, CryptoContext, DeterministicRandomSource,
                     LanplusConfig, MacAlgorithm, RandomError,
                     SecureRandomSource, SeedError, create_crypto_context)
from lanplus.crypto.constants import (AES_CBC_128_BLOCK_SIZE,
                                      HMAC_SHA1_96_AUTHCODE_SIZE)

BLOCK = AES_CBC_128_BLOCK_SIZE
AUTHCODE = HMAC_SHA1_96_AUTHCODE_SIZE


def pad_confidentiality_trailer(payload: bytes) -> bytes:
    """Caller-side IPMI padding: 1, 2, 3... then the pad length byte."""
    pad_len = (BLOCK - (len(payload) + 1) % BLOCK) % BLOCK
    return payload + bytes(range(1, pad_len + 1)) + bytes([pad_len])


def strip_confidentiality_trailer(data: bytes) -> bytes:
    pad_len = data[-1]
    return data[:-(pad_len + 1)]


@pytest.fixture
def context(entropy_file):
    return create_crypto_context(LanplusConfig(entropy_source=entropy_file))


class TestCryptoContext:
    """Test the high-level context."""

    def test_create_seeds(self, context):
        info = context.get_info()
        assert info['seeded'] is True
        assert info['random_source'] == 'secure'
        assert info['insecure_random'] is False
        assert info['cipher'] == 'AES-CBC-128'

    def test_unseeded_context(self, entropy_file):
        ctx = CryptoContext(LanplusConfig(entropy_source=entropy_file))
        with pytest.raises(RandomError):
            ctx.random_bytes(16)
        ctx.seed()
        assert len(ctx.random_bytes(16)) == 16

    def test_seed_failure(self, tmp_path):
        with pytest.raises(SeedError):
            create_crypto_context(LanplusConfig(entropy_source=str(tmp_path / "none")))

    def test_seed_byte_count_from_config(self, tmp_path):
        """A 20-byte entropy file cannot satisfy a 32-byte seed."""
        path = tmp_path / "small"
        path.write_bytes(bytes(20))
        config = LanplusConfig(entropy_source=str(path), seed_bytes=32)
        with pytest.raises(SeedError):
            create_crypto_context(config)
        ctx = CryptoContext(config)
        ctx.seed(16)
        assert ctx.random_source.is_seeded

    def test_fake_random_context(self):
        ctx = create_crypto_context(LanplusConfig(insecure_fake_random=True))
        assert isinstance(ctx.random_source, DeterministicRandomSource)
        assert ctx.random_bytes(4) == b"pqrs"
        assert ctx.get_info()['insecure_random'] is True

    def test_injected_source(self):
        source = DeterministicRandomSource()
        ctx = CryptoContext(random_source=source)
        assert ctx.random_source is source

    def test_fill(self, context):
        buffer = bytearray(8)
        context.fill(buffer, 8)
        assert isinstance(context.random_source, SecureRandomSource)


class TestSessionFlow:
    """Test an RMCP+ style exchange end to end."""

    def test_rakp_auth_codes(self, context):
        """Both sides compute the same RAKP auth code over shared fields."""
        console_nonce = context.random_bytes(16)
        console_session_id = context.random_bytes(4)
        bmc_nonce = bytes(range(16))
        password = b"admin".ljust(20, b"\x00")

        rakp2_fields = console_session_id + bytes(4) + console_nonce + bmc_nonce
        bmc_code = context.hmac(MacAlgorithm.RAKP_HMAC_SHA1, password, rakp2_fields)
        assert len(bmc_code) == 20
        assert context.verify_hmac(MacAlgorithm.RAKP_HMAC_SHA1, password,
                                   rakp2_fields, bmc_code)
        assert not context.verify_hmac(MacAlgorithm.RAKP_HMAC_SHA1, b"guess",
                                       rakp2_fields, bmc_code)

    def test_protected_payload(self, context):
        """Pad, encrypt with a fresh IV, tag, verify, decrypt, unpad."""
        k1 = context.random_bytes(20)
        k2 = context.random_bytes(16)
        payload = b"\x20\x18\xc8\x81\x04\x3b\x04\x3c"

        iv = context.random_bytes(16)
        ciphertext = context.encrypt(iv, k2, pad_confidentiality_trailer(payload))
        packet = iv + ciphertext
        auth_code = context.hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1, packet)[:AUTHCODE]

        assert context.verify_hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1, packet, auth_code)
        received_iv, received = packet[:16], packet[16:]
        padded = context.decrypt(received_iv, k2, received)
        assert strip_confidentiality_trailer(padded) == payload

    @pytest.mark.parametrize("size", [0, 1, 14, 15, 16, 31, 100])
    def test_trailer_alignment(self, context, size):
        payload = bytes(size)
        padded = pad_confidentiality_trailer(payload)
        assert len(padded) % BLOCK == 0
        iv, key = context.random_bytes(16), context.random_bytes(16)
        assert strip_confidentiality_trailer(
            context.decrypt(iv, key, context.encrypt(iv, key, padded))) == payload

    def test_unpadded_payload_rejected(self, context):
        iv, key = context.random_bytes(16), context.random_bytes(16)
        with pytest.raises(BlockAlignmentError):
            context.encrypt(iv, key, b"not padded")

    def test_tampered_packet_detected(self, context):
        k1 = context.random_bytes(20)
        packet = bytearray(context.random_bytes(48))
        auth_code = context.hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1, packet)[:AUTHCODE]
        packet[20] ^= 0x80
        assert not context.verify_hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1,
                                       packet, auth_code)
