import numpy as np

from libobf.core.types import Status
from libobf.obf import decode, encode
from libobf.utils.blockops import format_blocks, random_blocks, random_iv, random_key

BLOCK_LENGTH = 32


if __name__ == "__main__":
    rng = np.random.default_rng()

    key = random_key(rng)
    iv = random_iv(rng)
    iv_start = iv.value

    plain = random_blocks(BLOCK_LENGTH, rng)
    cipher = plain.copy()

    print(f"Length = {BLOCK_LENGTH}")
    print(f"Key    = {key.high:08X}{key.low:08X}")
    print(f"IV     = {iv.value:08X}")
    print(f"\nPlain  = {format_blocks(plain)}")

    assert encode(key, iv, cipher) == Status.SUCCESS

    print(f"\nIVW    = {iv.value:08X}")
    print(f"\nCipher = {format_blocks(cipher)}")

    assert decode(key, iv, cipher) == Status.SUCCESS

    print(f"\nIV     = {iv.value:08X}")
    print(f"\nPlain  = {format_blocks(cipher)}")

    ok = np.array_equal(cipher, plain) and iv.value == iv_start
    print(f"\n[{'PASS' if ok else 'FAIL'}] roundtrip")
