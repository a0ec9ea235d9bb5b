import pytest
from pydantic import ValidationError

from sm4lab.cipher import CipherOptions, Mode, Padding
from sm4lab.config import Settings, load_settings


def test_defaults():
    s = Settings()
    assert s.cipher_options == CipherOptions()
    assert s.default_mode == "CBC"
    assert s.default_padding == "PKCS7"
    assert s.output_format == "hex"
    assert s.global_seed == 1337
    assert not hasattr(s, "project_root")


def test_normalization():
    s = Settings(
        cipher_options={"mode": "ecb", "padding": "zero"},
        output_format="BASE64",
        log_level="debug",
    )
    assert isinstance(s.cipher_options, CipherOptions)
    assert s.cipher_options.mode_enum is Mode.ECB
    assert s.cipher_options.padding_enum is Padding.ZERO
    assert s.default_mode == "ECB"
    assert s.default_padding == "ZERO"
    assert s.output_format == "base64"
    assert s.log_level == "DEBUG"


@pytest.mark.parametrize("kwargs", [
    {"cipher_options": {"mode": "CTR"}},
    {"cipher_options": {"padding": "iso"}},
    {"output_format": "base32"},
    {"log_level": "LOUD"},
    {"roundtrip_vectors": 0},
])
def test_invalid_settings(kwargs):
    with pytest.raises(ValidationError):
        Settings(**kwargs)


def test_load_settings_from_env(monkeypatch):
    monkeypatch.setenv("SM4LAB_DEFAULT_MODE", "ecb")
    monkeypatch.setenv("SM4LAB_DEFAULT_PADDING", "NoPadding")
    monkeypatch.setenv("SM4LAB_OUTPUT_FORMAT", "base64")
    monkeypatch.setenv("SM4LAB_ROUNDTRIP_VECTORS", "7")
    monkeypatch.setenv("GLOBAL_SEED", "42")
    load_settings.cache_clear()
    try:
        s = load_settings()
        assert s.cipher_options.mode == "ECB"
        assert s.cipher_options.padding == "NONE"
        assert not s.cipher_options.requires_iv
        assert s.output_format == "base64"
        assert s.roundtrip_vectors == 7
        assert s.global_seed == 42
        assert load_settings() is s
    finally:
        load_settings.cache_clear()
