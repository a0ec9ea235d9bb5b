import random

import pytest

from sm4lab.cipher.block import Block, decrypt_block, encrypt_block, split_blocks
from sm4lab.cipher.errors import InvalidInputLength, InvalidRoundKeys, SM4Error
from sm4lab.cipher.key_schedule import expand_key

KEY = bytes.fromhex("0123456789ABCDEFFEDCBA9876543210")


def test_official_vector():
    rk = expand_key(KEY)
    ct = encrypt_block(KEY, rk)
    assert ct == bytes.fromhex("681EDF34D206965E86B3E94F536E4246")
    assert decrypt_block(ct, rk) == KEY


def test_second_published_vector():
    rk = expand_key(bytes.fromhex("FEDCBA98765432100123456789ABCDEF"))
    pt = bytes.fromhex("000102030405060708090A0B0C0D0E0F")
    assert encrypt_block(pt, rk) == bytes.fromhex("F766678F13F01ADEAC1B3EA955ADB594")


def test_output_word_order_is_reversed():
    # Swapping the output words back gives a different (wrong) block; the
    # reversal step is what makes the published vector match.
    rk = expand_key(KEY)
    ct = encrypt_block(KEY, rk)
    words = [ct[i:i + 4] for i in range(0, 16, 4)]
    assert b"".join(reversed(words)) != bytes.fromhex("681EDF34D206965E86B3E94F536E4246")
    assert words[0] == bytes.fromhex("681EDF34")


def test_decrypt_is_encrypt_with_reversed_keys():
    rk = expand_key(KEY)
    ct = encrypt_block(KEY, rk)
    assert encrypt_block(ct, rk.reversed()) == KEY


def test_block_roundtrip_random():
    rng = random.Random(1337)
    for _ in range(50):
        key = bytes(rng.randrange(256) for _ in range(16))
        block = bytes(rng.randrange(256) for _ in range(16))
        rk = expand_key(key)
        ct = encrypt_block(block, rk)
        assert ct == encrypt_block(block, rk)
        assert decrypt_block(ct, rk) == block


def test_block_type():
    b = Block(b"\x00" * 16)
    assert isinstance(b, bytes)
    assert isinstance(encrypt_block(b, expand_key(KEY)), Block)
    with pytest.raises(InvalidInputLength):
        Block(b"\x00" * 15)
    with pytest.raises(InvalidInputLength):
        encrypt_block(b"\x00" * 17, expand_key(KEY))


def test_block_core_requires_32_round_keys():
    with pytest.raises(InvalidRoundKeys):
        encrypt_block(b"\x00" * 16, list(range(31)))
    with pytest.raises(SM4Error):
        decrypt_block(b"\x00" * 16, list(range(33)))


def test_split_blocks():
    blocks = split_blocks(bytes(range(48)))
    assert len(blocks) == 3
    assert all(isinstance(b, Block) for b in blocks)
    assert b"".join(blocks) == bytes(range(48))
    assert split_blocks(b"") == []
    with pytest.raises(InvalidInputLength):
        split_blocks(bytes(20))
