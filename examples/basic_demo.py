#!/usr/bin/env python3
"""
Basic example of the lanplus primitives.

This example shows:
1. Seeding and drawing session nonces
2. RAKP authentication codes
3. HMAC-SHA1-96 integrity codes
4. AES-CBC-128 payload encryption with the IPMI trailer padding
5. Deterministic random bytes with hex tracing, for debugging only
"""

import logging
import sys
import os

# Add the lanplus package to the path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from lanplus import (CryptoContext, LanplusConfig, MacAlgorithm,
                     create_crypto_context)
from lanplus.crypto.constants import HMAC_SHA1_96_AUTHCODE_SIZE
from lanplus.crypto.utils import format_hex


def pad_payload(payload: bytes) -> bytes:
    pad_len = (16 - (len(payload) + 1) % 16) % 16
    return payload + bytes(range(1, pad_len + 1)) + bytes([pad_len])


def main():
    print("lanplus-crypt demo")
    print("=" * 60)

    # 1. Nonces
    print("\n1. Seeding and drawing nonces...")
    ctx = create_crypto_context()
    console_nonce = ctx.random_bytes(16)
    session_id = ctx.random_bytes(4)
    print(f"   Console nonce: {format_hex(console_nonce)}")
    print(f"   Session ID:    {format_hex(session_id)}")

    # 2. RAKP
    print("\n2. RAKP authentication code...")
    password = b"admin".ljust(20, b"\x00")
    bmc_nonce = ctx.random_bytes(16)
    auth_code = ctx.hmac(MacAlgorithm.RAKP_HMAC_SHA1, password,
                         session_id + console_nonce + bmc_nonce)
    print(f"   Auth code ({len(auth_code)} bytes): {format_hex(auth_code)}")

    # 3. Payload
    print("\n3. Encrypting a payload...")
    k1, k2 = ctx.random_bytes(20), ctx.random_bytes(16)
    iv = ctx.random_bytes(16)
    payload = b"\x20\x18\xc8\x81\x04\x3b\x04\x3c"
    ciphertext = ctx.encrypt(iv, k2, pad_payload(payload))
    icv = ctx.hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1, iv + ciphertext)
    icv = icv[:HMAC_SHA1_96_AUTHCODE_SIZE]
    print(f"   Ciphertext: {format_hex(ciphertext)}")
    print(f"   ICV:        {format_hex(icv)}")

    # 4. Verify and decrypt
    print("\n4. Verifying and decrypting...")
    ok = ctx.verify_hmac(MacAlgorithm.INTEGRITY_HMAC_SHA1_96, k1, iv + ciphertext, icv)
    padded = ctx.decrypt(iv, k2, ciphertext)
    recovered = padded[:-(padded[-1] + 1)]
    print(f"   Integrity OK: {ok}")
    print(f"   Payload matches: {recovered == payload}")

    # 5. Debug mode
    print("\n5. Deterministic random bytes with tracing (never in production)...")
    logging.basicConfig(level=logging.DEBUG, format="   %(name)s: %(message)s")
    debug_ctx = CryptoContext(LanplusConfig(verbosity=3, insecure_fake_random=True))
    debug_ctx.seed()
    fake_iv = debug_ctx.random_bytes(16)
    print(f"   Fake IV: {format_hex(fake_iv)}")
    debug_ctx.encrypt(fake_iv, bytes(16), bytes(16))

    print("\nDone.")


if __name__ == "__main__":
    main()
