import random

import pytest

from sm4lab.cipher.errors import InvalidKeyLength, InvalidRoundKeys
from sm4lab.cipher.key_schedule import RoundKeys, expand_key

KEY = bytes.fromhex("0123456789ABCDEFFEDCBA9876543210")


def test_standard_key_round_keys():
    rk = expand_key(KEY)
    assert len(rk) == 32
    assert rk[0] == 0xF12186F9
    assert rk[31] == 0x9124A012


def test_schedule_is_deterministic():
    assert expand_key(KEY) == expand_key(bytearray(KEY))
    assert hash(expand_key(KEY)) == hash(expand_key(KEY))


def test_distinct_keys_give_distinct_schedules():
    rng = random.Random(1337)
    seen = set()
    for _ in range(50):
        key = bytes(rng.randrange(256) for _ in range(16))
        seen.add(expand_key(key))
    assert len(seen) == 50


@pytest.mark.parametrize("length", [0, 15, 17, 32])
def test_wrong_key_length_rejected(length):
    with pytest.raises(InvalidKeyLength):
        expand_key(b"\x00" * length)


def test_round_keys_reverse_order():
    rk = expand_key(KEY)
    rev = rk.reversed()
    assert isinstance(rev, RoundKeys)
    assert list(rev) == list(reversed(rk)) == list(rk)[::-1]
    assert rev[0] == rk[31]
    assert rev.reversed() == rk


def test_round_keys_validation():
    with pytest.raises(InvalidRoundKeys):
        RoundKeys(tuple(range(31)))
    with pytest.raises(InvalidRoundKeys):
        RoundKeys((1 << 32,) + tuple(range(31)))
    assert RoundKeys(list(range(32))).words == tuple(range(32))
