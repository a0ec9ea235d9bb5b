import random

import pytest

from sm4lab.cipher import (
    CipherOptions,
    InvalidInputLength,
    InvalidIVLength,
    InvalidKeyLength,
    InvalidPadding,
    Mode,
    Padding,
    SM4BlockCipher,
    SM4Engine,
    SM4Error,
    UnsupportedMode,
    UnsupportedPadding,
    decrypt,
    encrypt,
    key_schedule,
)

KEY = bytes.fromhex("0123456789ABCDEFFEDCBA9876543210")
IV = bytes.fromhex("000102030405060708090A0B0C0D0E0F")


# ---------------------------------------------------------------------------
# Round-trip across modes and paddings
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("mode", ["ECB", "CBC"])
@pytest.mark.parametrize("padding", ["PKCS7", "ZERO"])
def test_roundtrip_random_messages(mode, padding):
    rng = random.Random(1337)
    for _ in range(20):
        key = bytes(rng.randrange(256) for _ in range(16))
        iv = bytes(rng.randrange(256) for _ in range(16))
        pt = bytes(rng.randrange(256) for _ in range(rng.randrange(0, 70)))
        if padding == "ZERO":
            pt = pt.rstrip(b"\x00")
        ct = encrypt(pt, key, mode=mode, iv=iv, padding=padding)
        assert len(ct) % 16 == 0
        assert decrypt(ct, key, mode=mode, iv=iv, padding=padding) == pt


@pytest.mark.parametrize("length,padding,expected", [
    (0, "PKCS7", 16),
    (15, "PKCS7", 16),
    (16, "PKCS7", 32),
    (17, "PKCS7", 32),
    (0, "ZERO", 0),
    (16, "ZERO", 16),
    (17, "ZERO", 32),
    (32, "NONE", 32),
])
def test_ciphertext_lengths(length, padding, expected):
    ct = encrypt(b"\x01" * length, KEY, mode="CBC", iv=IV, padding=padding)
    assert len(ct) == expected


def test_official_vector_through_facade():
    ct = encrypt(KEY, KEY, mode="ECB", padding="NONE")
    assert ct == bytes.fromhex("681EDF34D206965E86B3E94F536E4246")
    assert decrypt(ct, KEY, mode="ECB", padding="NONE") == KEY


def test_zero_padding_loses_trailing_zeros():
    ct = encrypt(b"data\x00\x00", KEY, mode="ECB", padding="ZERO")
    assert decrypt(ct, KEY, mode="ECB", padding="ZERO") == b"data"


def test_accepts_enums_and_bytearrays():
    a = encrypt(bytearray(b"hello"), bytearray(KEY), mode=Mode.CBC, iv=bytearray(IV), padding=Padding.PKCS7)
    b = encrypt(b"hello", KEY, mode="cbc", iv=IV, padding="pkcs7")
    assert a == b
    assert type(a) is bytes


# ---------------------------------------------------------------------------
# Length and option contracts
# ---------------------------------------------------------------------------

@pytest.mark.parametrize("bad_key", [b"", b"\x00" * 15, b"\x00" * 17, b"\x00" * 32])
def test_bad_key_length(bad_key):
    with pytest.raises(InvalidKeyLength):
        encrypt(b"hello", bad_key, mode="ECB")
    with pytest.raises(InvalidKeyLength):
        decrypt(b"\x00" * 16, bad_key, mode="CBC", iv=IV)
    with pytest.raises(InvalidKeyLength):
        key_schedule(bad_key)


def test_key_checked_before_anything_else():
    with pytest.raises(InvalidKeyLength):
        encrypt(b"x", b"short", mode="CTR", padding="bogus", iv=None)


def test_cbc_decrypt_misaligned_ciphertext():
    with pytest.raises(InvalidInputLength):
        decrypt(b"\x00" * 17, KEY, mode="CBC", iv=IV)


def test_no_padding_misaligned_plaintext():
    with pytest.raises(InvalidInputLength):
        encrypt(b"\x00" * 15, KEY, mode="ECB", padding="NONE")


def test_ecb_ignores_iv():
    a = encrypt(b"hello", KEY, mode="ECB")
    b = encrypt(b"hello", KEY, mode="ECB", iv=b"not even sixteen bytes long")
    assert a == b
    assert decrypt(b, KEY, mode="ECB", iv=b"junk") == b"hello"


def test_cbc_requires_iv():
    with pytest.raises(InvalidIVLength):
        encrypt(b"hello", KEY, mode="CBC")
    with pytest.raises(InvalidIVLength):
        encrypt(b"hello", KEY, mode="CBC", iv=IV[:8])
    with pytest.raises(InvalidIVLength):
        decrypt(b"\x00" * 16, KEY, mode="CBC", iv=b"")


def test_unsupported_options():
    with pytest.raises(UnsupportedMode):
        encrypt(b"hello", KEY, mode="GCM", iv=IV)
    with pytest.raises(UnsupportedPadding):
        encrypt(b"hello", KEY, mode="ECB", padding="ISO10126")


def test_invalid_padding_surfaces_unchanged():
    # last plaintext byte 0x00 can never be valid PKCS#7
    ct = encrypt(b"A" * 15 + b"\x00", KEY, mode="ECB", padding="NONE")
    with pytest.raises(InvalidPadding) as exc:
        decrypt(ct, KEY, mode="ECB", padding="PKCS7")
    assert type(exc.value) is InvalidPadding
    assert isinstance(exc.value, SM4Error)
    assert isinstance(exc.value, ValueError)


# ---------------------------------------------------------------------------
# Bound engine and adapters
# ---------------------------------------------------------------------------

def test_engine_matches_functions():
    engine = SM4Engine.from_key(KEY)
    assert engine.round_keys == key_schedule(KEY)
    ct = engine.encrypt(b"cached schedule", mode="CBC", iv=IV)
    assert ct == encrypt(b"cached schedule", KEY, mode="CBC", iv=IV)
    assert engine.decrypt(ct, mode="CBC", iv=IV) == b"cached schedule"
    assert engine.decrypt_block(engine.encrypt_block(IV)) == IV


def test_engine_rejects_bad_key():
    with pytest.raises(InvalidKeyLength):
        SM4Engine.from_key(b"\x00" * 8)


def test_engine_repr_hides_round_keys():
    assert str(key_schedule(KEY)[0]) not in repr(SM4Engine.from_key(KEY))


def test_block_cipher_adapter():
    cipher = SM4BlockCipher()
    ct = cipher.encrypt_block(KEY, KEY)
    assert ct == bytes.fromhex("681EDF34D206965E86B3E94F536E4246")
    assert cipher.decrypt_block(ct, KEY) == KEY


def test_cipher_options():
    opts = CipherOptions(mode="ecb", padding="zero")
    assert opts.mode == "ECB"
    assert opts.padding_enum is Padding.ZERO
    assert not opts.requires_iv
    assert CipherOptions().requires_iv
    with pytest.raises(ValueError):
        CipherOptions(mode="CTR")


def test_cipher_options_resolve_raises_typed_errors():
    opts = CipherOptions.resolve("cbc", "pkcs#7")
    assert opts == CipherOptions()
    assert CipherOptions.resolve(Mode.ECB, Padding.NONE).mode == "ECB"
    with pytest.raises(UnsupportedMode):
        CipherOptions.resolve("CTR", "PKCS7")
    with pytest.raises(UnsupportedPadding):
        CipherOptions.resolve("ECB", "ISO10126")
