from __future__ import annotations

import subprocess
import sys
from pathlib import Path

from anybase.alphabet_spec import AlphabetSpecError
from anybase.errors import (
    EXIT_CODES,
    EXIT_FORMAT,
    EXIT_INVALID_ALPHABET,
    EXIT_USAGE,
    AnyBaseError,
    FormatError,
    InvalidAlphabet,
    UsageError,
    exit_code_info,
    render_exit_codes_markdown,
)


def test_exit_codes_unique() -> None:
    codes = [e.code for e in EXIT_CODES]
    names = [e.name for e in EXIT_CODES]
    assert len(codes) == len(set(codes))
    assert len(names) == len(set(names))


def test_exception_exit_codes() -> None:
    assert FormatError.exit_code == EXIT_FORMAT
    assert InvalidAlphabet.exit_code == EXIT_INVALID_ALPHABET
    assert AlphabetSpecError.exit_code == EXIT_USAGE
    assert issubclass(AlphabetSpecError, UsageError)
    for cls in (FormatError, InvalidAlphabet, UsageError):
        assert issubclass(cls, AnyBaseError)
    assert issubclass(FormatError, ValueError)
    assert issubclass(InvalidAlphabet, ValueError)


def test_exit_code_info_lookup() -> None:
    info = exit_code_info(20)
    assert info is not None
    assert info.name == "FORMAT"
    assert exit_code_info(99) is None


def test_render_markdown_lists_every_code() -> None:
    md = render_exit_codes_markdown()
    assert md.startswith("# Exit codes\n")
    for e in EXIT_CODES:
        assert f"| {e.code} | `{e.name}` |" in md


def _run_doc_script(*args: str) -> subprocess.CompletedProcess[str]:
    script = Path(__file__).resolve().parents[1] / "scripts" / "gen_exit_codes_md.py"
    return subprocess.run([sys.executable, str(script), *args], text=True, capture_output=True)


def test_exit_codes_doc_is_in_sync() -> None:
    r = _run_doc_script("--check")
    assert r.returncode == 0, (r.stdout, r.stderr)


def test_exit_codes_doc_check_and_write(tmp_path: Path) -> None:
    doc = tmp_path / "exit_codes.md"
    r = _run_doc_script("--check", "--output", str(doc))
    assert r.returncode == 1
    assert "stale" in r.stderr

    r = _run_doc_script("--output", str(doc))
    assert r.returncode == 0, (r.stdout, r.stderr)
    assert doc.read_text(encoding="utf-8") == render_exit_codes_markdown()

    r = _run_doc_script("--check", "--output", str(doc))
    assert r.returncode == 0, (r.stdout, r.stderr)
