"""AnyBase CLI.

This is the stable CLI entrypoint (console-script: ``anybase``).

I/O policy:
  - INPUT/OUTPUT default to stdin/stdout ('-' also means stdio).
  - Bytes by default; ``--text`` switches to UTF-8 text units.
  - Encoded input is stripped of surrounding whitespace before decode.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from anybase.alphabet_spec import AlphabetSpecError, load_alphabet_spec
from anybase.core.codec import BYTE_MAX, UNICODE_MAX, AnyBase
from anybase.errors import EXIT_GENERIC, EXIT_USAGE, AnyBaseError, UsageError

logger = logging.getLogger(__name__)


def _add_common_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("--debug", action="store_true", help="Show stack traces on errors")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable DEBUG logging")


def _parse_max_unit(s: str) -> int:
    """argparse type for --max-unit: decimal or 0x-prefixed, within the unit range."""
    try:
        v = int(s, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {s!r}") from None
    if not (BYTE_MAX <= v <= UNICODE_MAX):
        raise argparse.ArgumentTypeError(
            f"must be in [{BYTE_MAX:#x}, {UNICODE_MAX:#x}], got {s!r}"
        )
    return v


def _add_codec_args(p: argparse.ArgumentParser) -> None:
    g = p.add_mutually_exclusive_group(required=True)
    g.add_argument("--alphabet", help="Preset alphabet name (e.g. binary, octal, decimal, hex)")
    g.add_argument(
        "--spec",
        help="Alphabet spec JSON. Use '@file.json' to load from file, or pass JSON inline.",
    )
    p.add_argument(
        "--max-unit",
        type=_parse_max_unit,
        default=None,
        help="Largest unit value (default: spec.max_unit or 255). Raise it for non-Latin-1 text.",
    )


def _build_codec(alphabet: str | None, spec_arg: str | None, max_unit: int | None) -> AnyBase[str]:
    if spec_arg is not None:
        spec = load_alphabet_spec(spec_arg)
        # precedence: CLI --max-unit > spec.max_unit
        if max_unit is None:
            return spec.build()
        return AnyBase(spec.alphabet(), max_unit=max_unit)
    if alphabet is None:
        raise UsageError("one of --alphabet or --spec is required")
    return AnyBase.from_preset(alphabet, max_unit=BYTE_MAX if max_unit is None else max_unit)


def _read_input(path: str | None) -> bytes:
    if path is None or path == "-":
        return sys.stdin.buffer.read()
    return Path(path).read_bytes()


def _write_output(path: str | None, data: bytes) -> None:
    if path is None or path == "-":
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
        return
    Path(path).write_bytes(data)


def _cmd_encode(codec: AnyBase[str], input_path: str | None, output_path: str | None, *, text: bool) -> int:
    raw = _read_input(input_path)
    data: bytes | str = raw.decode("utf-8") if text else raw
    encoded = codec.encode_to_string(data)
    logger.debug("encode: %d units -> %d symbols", len(data), len(encoded))
    _write_output(output_path, encoded.encode("utf-8") + b"\n")
    return 0


def _cmd_decode(codec: AnyBase[str], input_path: str | None, output_path: str | None, *, text: bool) -> int:
    encoded = _read_input(input_path).decode("utf-8").strip()
    if text:
        _write_output(output_path, codec.decode_to_string(encoded).encode("utf-8"))
    else:
        _write_output(output_path, codec.decode_to_bytes(encoded))
    return 0


def _cmd_info(codec: AnyBase[str]) -> int:
    print(f"alphabet: {''.join(codec.alphabet.rendered)}")
    print(f"base:     {codec.base}")
    print(f"width:    {codec.width}")
    print(f"max_unit: {codec.max_unit:#x}")
    return 0


def _cmd_spec_validate(spec_arg: str) -> int:
    # load is the validation
    load_alphabet_spec(spec_arg)
    print("OK")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="anybase", description="Alphabet-based byte/text codec")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_e = sub.add_parser("encode", help="Encode bytes (or --text) into alphabet symbols")
    p_e.add_argument("input", nargs="?", default=None, help="Input file ('-' or omitted: stdin)")
    p_e.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    p_e.add_argument("--text", action="store_true", help="Encode UTF-8 text code points")
    _add_codec_args(p_e)
    _add_common_args(p_e)

    p_d = sub.add_parser("decode", help="Decode alphabet symbols back into bytes (or --text)")
    p_d.add_argument("input", nargs="?", default=None, help="Input file ('-' or omitted: stdin)")
    p_d.add_argument("-o", "--output", default=None, help="Output file (default: stdout)")
    p_d.add_argument("--text", action="store_true", help="Decode into UTF-8 text")
    _add_codec_args(p_d)
    _add_common_args(p_d)

    p_i = sub.add_parser("info", help="Show base and digit width of an alphabet")
    _add_codec_args(p_i)
    _add_common_args(p_i)

    p_v = sub.add_parser("spec-validate", help="Validate an alphabet spec (v1)")
    p_v.add_argument("spec", help="Alphabet spec JSON (@file.json or inline JSON)")
    _add_common_args(p_v)

    return p


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    p = build_parser()
    ns = p.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if ns.verbose else logging.WARNING,
        format="[anybase] %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        if ns.cmd == "spec-validate":
            return _cmd_spec_validate(str(ns.spec))

        codec = _build_codec(ns.alphabet, ns.spec, ns.max_unit)
        if ns.cmd == "encode":
            return _cmd_encode(codec, ns.input, ns.output, text=bool(ns.text))
        if ns.cmd == "decode":
            return _cmd_decode(codec, ns.input, ns.output, text=bool(ns.text))
        if ns.cmd == "info":
            return _cmd_info(codec)
        raise AssertionError("unreachable")

    except SystemExit:
        raise
    except AlphabetSpecError as e:
        if ns.debug:
            raise
        print(f"[anybase] {e}", file=sys.stderr)
        return EXIT_USAGE
    except AnyBaseError as e:
        if ns.debug:
            raise
        print(f"[anybase] {e}", file=sys.stderr)
        return int(getattr(e, "exit_code", EXIT_GENERIC) or EXIT_GENERIC)
    except Exception as e:
        if ns.debug:
            raise
        print(f"[anybase] error: {e}", file=sys.stderr)
        return EXIT_GENERIC


if __name__ == "__main__":
    raise SystemExit(main())
