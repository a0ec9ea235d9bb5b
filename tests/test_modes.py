import pytest

from sm4lab.cipher.errors import InvalidInputLength, InvalidIVLength, UnsupportedMode
from sm4lab.cipher.key_schedule import expand_key
from sm4lab.cipher.modes import (
    MODES,
    Mode,
    cbc_decrypt,
    cbc_encrypt,
    ecb_decrypt,
    ecb_encrypt,
    get_mode,
)
from sm4lab.cipher.padding import Padding

KEY = bytes.fromhex("0123456789ABCDEFFEDCBA9876543210")
IV = bytes.fromhex("000102030405060708090A0B0C0D0E0F")
TWO_BLOCKS = bytes.fromhex("AAAAAAAABBBBBBBBCCCCCCCCDDDDDDDDEEEEEEEEFFFFFFFFAAAAAAAABBBBBBBB")


def test_ecb_two_block_vector():
    rk = expand_key(KEY)
    ct = ecb_encrypt(TWO_BLOCKS, rk, Padding.NONE)
    assert ct == bytes.fromhex("5EC8143DE509CFF7B5179F8F474B86192F1D305A7FB17DF985F81C8482192304")
    assert ecb_decrypt(ct, rk, Padding.NONE) == TWO_BLOCKS


def test_cbc_two_block_vector():
    rk = expand_key(KEY)
    ct = cbc_encrypt(TWO_BLOCKS, rk, IV, Padding.NONE)
    assert ct == bytes.fromhex("78EBB11CC40B0A48312AAEB2040244CB4CB7016951909226979B0D15DC6A8F6D")
    assert cbc_decrypt(ct, rk, IV, Padding.NONE) == TWO_BLOCKS


def test_ecb_leaks_equal_blocks_cbc_does_not():
    rk = expand_key(KEY)
    pt = b"Y" * 32
    ecb = ecb_encrypt(pt, rk, Padding.NONE)
    cbc = cbc_encrypt(pt, rk, IV, Padding.NONE)
    assert ecb[:16] == ecb[16:]
    assert cbc[:16] != cbc[16:]


def test_cbc_bit_flip_propagation():
    rk = expand_key(KEY)
    pt = bytes(range(48))
    ct = bytearray(cbc_encrypt(pt, rk, IV, Padding.NONE))

    byte_i, mask = 5, 0x10
    ct[byte_i] ^= mask  # block 0
    out = cbc_decrypt(bytes(ct), rk, IV, Padding.NONE)

    # block 0 is garbled
    assert out[:16] != pt[:16]
    # block 1 differs in exactly the flipped bit
    diff = bytes(a ^ b for a, b in zip(out[16:32], pt[16:32]))
    assert diff == bytes(byte_i) + bytes([mask]) + bytes(16 - byte_i - 1)
    # block 2 untouched
    assert out[32:] == pt[32:]


def test_cbc_chains_on_ciphertext():
    rk = expand_key(KEY)
    pt = bytes(range(32))
    ct = cbc_encrypt(pt, rk, IV, Padding.NONE)
    # second block decrypts on its own with the first ciphertext block as IV
    assert cbc_decrypt(ct[16:], rk, ct[:16], Padding.NONE) == pt[16:]


@pytest.mark.parametrize("length", [1, 15, 17, 33])
def test_decrypt_rejects_misaligned_ciphertext(length):
    rk = expand_key(KEY)
    with pytest.raises(InvalidInputLength):
        ecb_decrypt(b"\x00" * length, rk)
    with pytest.raises(InvalidInputLength):
        cbc_decrypt(b"\x00" * length, rk, IV)


def test_empty_ciphertext():
    rk = expand_key(KEY)
    with pytest.raises(InvalidInputLength):
        ecb_decrypt(b"", rk, Padding.PKCS7)
    assert ecb_decrypt(b"", rk, Padding.NONE) == b""
    assert cbc_decrypt(b"", rk, IV, Padding.ZERO) == b""


def test_cbc_iv_checks():
    rk = expand_key(KEY)
    with pytest.raises(InvalidIVLength):
        cbc_encrypt(b"abc", rk, None)
    with pytest.raises(InvalidIVLength):
        cbc_encrypt(b"abc", rk, IV[:15])
    with pytest.raises(InvalidIVLength):
        cbc_decrypt(b"\x00" * 16, rk, IV + b"\x00")


def test_mode_registry():
    assert set(MODES) == {Mode.ECB, Mode.CBC}
    assert get_mode("ecb").encrypt is ecb_encrypt
    assert get_mode(Mode.CBC).decrypt is cbc_decrypt
    assert Mode.CBC.requires_iv and not Mode.ECB.requires_iv


@pytest.mark.parametrize("name", ["CTR", "GCM", "OFB", "", None])
def test_unsupported_modes(name):
    with pytest.raises(UnsupportedMode):
        Mode.parse(name)
