"""Command line front end for the SM4 engine.

Usage:
    sm4lab encrypt "hello" --key 0123456789abcdeffedcba9876543210 --iv 000102030405060708090a0b0c0d0e0f
    sm4lab decrypt 6a1b... --key ... --iv ...
    sm4lab encrypt "hello" --mode ECB --key-format text --key "sixteen byte key"
    sm4lab keygen --iv
    sm4lab selftest --vectors 50

Research / education only. Do NOT use in production.
"""
from __future__ import annotations

import argparse
import logging
import sys
from typing import List, Optional

from sm4lab.cipher.engine import decrypt, encrypt
from sm4lab.cipher.errors import SM4Error
from sm4lab.cipher.options import CipherOptions
from sm4lab.codec import (
    CodecError,
    bytes_to_text,
    decode_input,
    encode_output,
    generate_material,
    parse_key_material,
    text_to_bytes,
)
from sm4lab.config import Settings, load_settings
from sm4lab.evaluation.report import EvaluationReport
from sm4lab.evaluation.roundtrip import run_all_combinations
from sm4lab.evaluation.vectors import run_known_answer_tests

logger = logging.getLogger(__name__)


def _add_cipher_args(p: argparse.ArgumentParser, settings: Settings) -> None:
    p.add_argument("--key", required=True, help="16-byte key")
    p.add_argument(
        "--key-format", choices=["hex", "text"], default="hex",
        help="How --key is written (default: hex)",
    )
    p.add_argument(
        "--mode", default=settings.default_mode,
        help=f"ECB or CBC (default: {settings.default_mode})",
    )
    p.add_argument(
        "--padding", default=settings.default_padding,
        help=f"PKCS7, ZERO or NONE (default: {settings.default_padding})",
    )
    p.add_argument("--iv", default=None, help="16-byte IV (CBC only)")
    p.add_argument(
        "--iv-format", choices=["hex", "text"], default="hex",
        help="How --iv is written (default: hex)",
    )
    p.add_argument(
        "--output-format", choices=["hex", "base64"], default=settings.output_format,
        help=f"Ciphertext encoding (default: {settings.output_format})",
    )


def build_parser(settings: Optional[Settings] = None) -> argparse.ArgumentParser:
    settings = settings or load_settings()
    parser = argparse.ArgumentParser(
        prog="sm4lab",
        description="SM4 block cipher (ECB/CBC, PKCS#7/zero/no padding)",
    )
    parser.add_argument(
        "--verbose", "-v", action="store_true",
        help="Enable verbose logging",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p_enc = sub.add_parser("encrypt", help="Encrypt UTF-8 text")
    p_enc.add_argument("text", help="Plaintext")
    _add_cipher_args(p_enc, settings)

    p_dec = sub.add_parser("decrypt", help="Decrypt hex/Base64 ciphertext to UTF-8 text")
    p_dec.add_argument("data", help="Ciphertext in --output-format encoding")
    _add_cipher_args(p_dec, settings)

    p_key = sub.add_parser("keygen", help="Generate a random key (and IV)")
    p_key.add_argument("--format", choices=["hex", "text"], default="hex")
    p_key.add_argument("--iv", action="store_true", help="Also generate an IV")

    p_self = sub.add_parser("selftest", help="Run known-answer and roundtrip checks")
    p_self.add_argument(
        "--vectors", type=int, default=settings.roundtrip_vectors,
        help=f"Roundtrip vectors per mode/padding pair (default: {settings.roundtrip_vectors})",
    )
    p_self.add_argument("--seed", type=int, default=settings.global_seed)
    p_self.add_argument(
        "--slow", action="store_true",
        help="Include the 1,000,000-iteration known-answer vector",
    )

    return parser


def _material(args: argparse.Namespace, opts: CipherOptions):
    key = parse_key_material(args.key, args.key_format)
    iv = None
    if args.iv is not None:
        if opts.requires_iv:
            iv = parse_key_material(args.iv, args.iv_format)
        else:
            logger.info("%s mode ignores the supplied IV", opts.mode)
    return key, iv


def _cmd_encrypt(args: argparse.Namespace) -> int:
    opts = CipherOptions.resolve(args.mode, args.padding)
    key, iv = _material(args, opts)
    ct = encrypt(text_to_bytes(args.text), key, mode=opts.mode_enum, iv=iv, padding=opts.padding_enum)
    print(encode_output(ct, args.output_format))
    return 0


def _cmd_decrypt(args: argparse.Namespace) -> int:
    opts = CipherOptions.resolve(args.mode, args.padding)
    key, iv = _material(args, opts)
    ct = decode_input(args.data, args.output_format)
    pt = decrypt(ct, key, mode=opts.mode_enum, iv=iv, padding=opts.padding_enum)
    print(bytes_to_text(pt))
    return 0


def _cmd_keygen(args: argparse.Namespace) -> int:
    print(f"key: {generate_material(args.format)}")
    if args.iv:
        print(f"iv:  {generate_material(args.format)}")
    return 0


def _cmd_selftest(args: argparse.Namespace) -> int:
    report = EvaluationReport(
        known_answer_results=run_known_answer_tests(include_slow=args.slow),
        roundtrip_results=run_all_combinations(num_vectors=args.vectors, seed=args.seed),
    )
    print(report.to_summary())
    return 0 if report.all_pass else 1


_COMMANDS = {
    "encrypt": _cmd_encrypt,
    "decrypt": _cmd_decrypt,
    "keygen": _cmd_keygen,
    "selftest": _cmd_selftest,
}


def main(argv: Optional[List[str]] = None) -> int:
    settings = load_settings()
    parser = build_parser(settings)
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    try:
        return _COMMANDS[args.command](args)
    except (SM4Error, CodecError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
