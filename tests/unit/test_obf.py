import numpy as np
import pytest

from libobf.core.types import IV, Key, ObfError, Status
from libobf.obf import API_VERSION, check, decode, encode
from libobf.utils.blockops import random_blocks, random_iv, random_key
from tests.conftest import seeded_rng

BLOCK_LENGTH = 32


def test_api_version():
    assert API_VERSION == 1


def test_example_scenario_roundtrip():
    key = Key(low=0x00000001, high=0x00000002)
    iv = IV(0x00000000)
    blocks = np.array([0x11111111, 0x22222222], dtype=np.uint32)

    assert encode(key, iv, blocks, 2) == Status.SUCCESS
    assert blocks.tolist() == [0x22222220, 0x33333333]
    assert iv.value == 0x22222227

    assert decode(key, iv, blocks, 2) == Status.SUCCESS
    assert blocks.tolist() == [0x11111111, 0x22222222]
    assert iv.value == 0x00000000


@pytest.mark.parametrize("seed", [1, 2, 3, 4, 5])
def test_encode_decode_random(seed: int):
    rng = seeded_rng(seed)
    key = random_key(rng)
    iv = random_iv(rng)
    iv_start = iv.value

    plain = random_blocks(BLOCK_LENGTH, rng)
    cipher = plain.copy()

    assert encode(key, iv, cipher) == Status.SUCCESS

    # Probabilistic: holds for all but degenerate key/iv/data combinations.
    assert not np.array_equal(cipher, plain)
    assert iv.value != iv_start

    assert decode(key, iv, cipher) == Status.SUCCESS

    assert np.array_equal(cipher, plain)
    assert iv.value == iv_start


@pytest.mark.parametrize("n", [1, 2, 3, 8, 255])
def test_roundtrip_every_length(n: int):
    rng = seeded_rng(1000 + n)
    key = random_key(rng)
    iv = random_iv(rng)
    iv_start = iv.value
    plain = random_blocks(n, rng)
    data = plain.copy()

    assert encode(key, iv, data) == Status.SUCCESS
    assert decode(key, iv, data) == Status.SUCCESS

    assert np.array_equal(data, plain)
    assert iv.value == iv_start


def test_single_block_roundtrip():
    key = Key(low=0xFFFFFFFF, high=0x00000000)
    iv = IV(0x80000000)
    data = [0x00000000]

    assert encode(key, iv, data) == Status.SUCCESS
    assert decode(key, iv, data) == Status.SUCCESS

    assert data == [0x00000000]
    assert iv.value == 0x80000000


def test_counter_wraparound_roundtrip():
    # 2N + wrap steps push the counter past 2^32
    key = Key(low=0xFFFFFFFF, high=0xFFFFFFFF)
    iv = IV(0xFFFFFFFF - 10)
    plain = random_blocks(64, seeded_rng(0xBEEF))
    data = plain.copy()

    assert encode(key, iv, data) == Status.SUCCESS
    assert decode(key, iv, data) == Status.SUCCESS

    assert np.array_equal(data, plain)
    assert iv.value == 0xFFFFFFFF - 10


def test_list_blocks_mutated_in_place():
    key = Key(low=0x00000001, high=0x00000002)
    iv = IV(0)
    blocks = [0x11111111, 0x22222222]
    same = blocks

    assert encode(key, iv, blocks) == Status.SUCCESS
    assert same is blocks
    assert blocks == [0x22222220, 0x33333333]


def test_partial_length_leaves_tail_untouched():
    rng = seeded_rng(77)
    key = random_key(rng)
    iv = random_iv(rng)
    iv_start = iv.value
    plain = random_blocks(10, rng)
    data = plain.copy()

    assert encode(key, iv, data, 4) == Status.SUCCESS
    assert np.array_equal(data[4:], plain[4:])

    assert decode(key, iv, data, 4) == Status.SUCCESS
    assert np.array_equal(data, plain)
    assert iv.value == iv_start


@pytest.mark.parametrize("op", [encode, decode])
def test_arguments(op):
    key = Key(low=0, high=0)
    iv = IV(0)
    block = np.zeros(BLOCK_LENGTH, dtype=np.uint32)

    assert op(None, iv, block, BLOCK_LENGTH) == Status.INVALID_KEY
    assert op(key, None, block, BLOCK_LENGTH) == Status.INVALID_IV
    assert op(key, iv, None, BLOCK_LENGTH) == Status.INVALID_DATA
    assert op(key, iv, block, 0) == Status.INVALID_LENGTH


@pytest.mark.parametrize("op", [encode, decode])
def test_rejected_call_does_not_mutate(op):
    key = Key(low=0x12345678, high=0x9ABCDEF0)
    iv = IV(0x55555555)
    plain = random_blocks(8, seeded_rng(9))
    data = plain.copy()

    assert op(None, iv, data) == Status.INVALID_KEY
    assert op(key, None, data) == Status.INVALID_IV
    assert op(key, iv, None) == Status.INVALID_DATA
    assert op(key, iv, data, 0) == Status.INVALID_LENGTH
    assert op(key, iv, data, 9) == Status.INVALID_LENGTH

    assert np.array_equal(data, plain)
    assert iv.value == 0x55555555


@pytest.mark.parametrize("op", [encode, decode])
def test_rejected_call_without_iv_leaves_list_untouched(op):
    data = [0x11111111, 0x22222222]
    assert op(Key(low=1, high=2), None, data) == Status.INVALID_IV
    assert data == [0x11111111, 0x22222222]


@pytest.mark.parametrize("op", [encode, decode])
def test_rejected_call_without_data_leaves_iv_untouched(op):
    iv = IV(0xDEADBEEF)
    assert op(Key(low=1, high=2), iv, None) == Status.INVALID_DATA
    assert iv.value == 0xDEADBEEF


@pytest.mark.parametrize(
    "bad, exc",
    [
        ((1 << 32) + 5, ValueError),
        (-1, ValueError),
        (True, TypeError),
        (1.0, TypeError),
        ("7", TypeError),
    ],
)
def test_list_elements_out_of_range_or_non_int_rejected(bad, exc):
    iv = IV(0)
    data = [0x11111111, bad]
    with pytest.raises(exc, match=r"blocks\[1\]"):
        encode(Key(low=1, high=2), iv, data)
    assert data == [0x11111111, bad]
    assert iv.value == 0


def test_list_elements_past_length_are_not_checked():
    iv = IV(0)
    data = [0x11111111, -1]
    assert encode(Key(low=1, high=2), iv, data, 1) == Status.SUCCESS
    assert data[1] == -1


@pytest.mark.parametrize("bad, exc", [(1 << 40, ValueError), (-1, ValueError), (None, TypeError)])
def test_iv_value_reassigned_out_of_range_rejected(bad, exc):
    iv = IV(0)
    iv.value = bad
    data = [0x11111111, 0x22222222]
    with pytest.raises(exc, match="iv.value"):
        encode(Key(low=1, high=2), iv, data)
    assert data == [0x11111111, 0x22222222]
    assert iv.value == bad


def test_empty_blocks_rejected():
    iv = IV(7)
    assert encode(Key(low=1, high=2), iv, np.zeros(0, dtype=np.uint32)) == Status.INVALID_LENGTH
    assert iv.value == 7


def test_wrong_dtype_raises_type_error():
    iv = IV(0)
    data = np.zeros(4, dtype=np.int64)
    with pytest.raises(TypeError, match="uint32"):
        encode(Key(low=1, high=2), iv, data)
    assert iv.value == 0


def test_check_raises_on_failure():
    check(Status.SUCCESS)
    with pytest.raises(ObfError) as ei:
        check(Status.INVALID_LENGTH)
    assert ei.value.status == Status.INVALID_LENGTH
    assert isinstance(ei.value, ValueError)
