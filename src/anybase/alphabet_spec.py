"""Alphabet spec (v1) for AnyBase.

Goal: make codec configurations reproducible and portable (CLI, scripts, CI).

This module intentionally stays *small* and strict:
  - JSON only
  - explicit schema id
  - unknown keys are rejected
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from anybase.core.alphabet import Alphabet
from anybase.core.codec import BYTE_MAX, UNICODE_MAX, AnyBase
from anybase.core.presets import PRESETS, preset
from anybase.errors import UsageError

SPEC_ID_V1 = "anybase.alphabet.v1"


class AlphabetSpecError(UsageError, ValueError):
    pass


def _load_json_arg(spec_arg: str) -> dict[str, Any]:
    s = spec_arg.strip()
    if not s:
        raise AlphabetSpecError("alphabet spec: empty argument")

    if s.startswith("@"):
        p = Path(s[1:]).expanduser()
        if not p.exists() or not p.is_file():
            raise AlphabetSpecError(f"alphabet spec: file not found: {p}")
        raw = p.read_text(encoding="utf-8")
        try:
            obj = json.loads(raw)
        except json.JSONDecodeError as e:
            raise AlphabetSpecError(f"alphabet spec: invalid JSON in {p}: {e}") from e
        if not isinstance(obj, dict):
            raise AlphabetSpecError(f"alphabet spec: JSON in {p} must be an object")
        return obj

    try:
        obj = json.loads(s)
    except json.JSONDecodeError as e:
        raise AlphabetSpecError(f"alphabet spec: invalid inline JSON: {e}") from e
    if not isinstance(obj, dict):
        raise AlphabetSpecError("alphabet spec: inline JSON must be an object")
    return obj


def _optional_symbols(obj: dict[str, Any]) -> tuple[str, ...] | None:
    if "symbols" not in obj:
        return None
    v = obj.get("symbols")
    if isinstance(v, str):
        return tuple(v)
    if not isinstance(v, list):
        raise AlphabetSpecError("alphabet spec: 'symbols' must be a string or a list of strings")
    for i, sym in enumerate(v):
        if not isinstance(sym, str) or not sym:
            raise AlphabetSpecError(f"alphabet spec: symbols[{i}] must be a non-empty string")
    return tuple(v)


def _optional_max_unit(obj: dict[str, Any]) -> int:
    v = obj.get("max_unit", BYTE_MAX)
    # bool is an int subclass
    if isinstance(v, bool) or not isinstance(v, int):
        raise AlphabetSpecError("alphabet spec: 'max_unit' must be an integer")
    if not (BYTE_MAX <= v <= UNICODE_MAX):
        raise AlphabetSpecError(
            f"alphabet spec: 'max_unit' must be in [{BYTE_MAX}, {UNICODE_MAX}], got {v}"
        )
    return v


@dataclass(frozen=True)
class AlphabetSpecV1:
    """A single codec configuration."""

    name: str
    preset: str | None = None
    symbols: tuple[str, ...] | None = None
    max_unit: int = BYTE_MAX

    def alphabet(self) -> Alphabet[str]:
        if self.preset is not None:
            return preset(self.preset)
        return Alphabet(self.symbols)

    def build(self) -> AnyBase[str]:
        return AnyBase(self.alphabet(), max_unit=self.max_unit)


def load_alphabet_spec(spec_arg: str) -> AlphabetSpecV1:
    """Load and validate an alphabet spec.

    spec_arg:
      - '@file.json'
      - inline JSON object
    """
    obj = _load_json_arg(spec_arg)

    allowed = {"spec", "name", "preset", "symbols", "max_unit"}
    extra = sorted(set(obj.keys()) - allowed)
    if extra:
        raise AlphabetSpecError(f"alphabet spec: unsupported keys: {', '.join(extra)}")

    spec_id = obj.get("spec")
    if spec_id != SPEC_ID_V1:
        raise AlphabetSpecError(
            f"alphabet spec: unsupported spec: {spec_id!r} (expected {SPEC_ID_V1!r})"
        )

    preset_name = obj.get("preset")
    if preset_name is not None:
        if not isinstance(preset_name, str) or preset_name.strip().lower() not in PRESETS:
            known = ", ".join(sorted(PRESETS))
            raise AlphabetSpecError(
                f"alphabet spec: unknown preset {preset_name!r} (known: {known})"
            )
        preset_name = preset_name.strip().lower()

    symbols = _optional_symbols(obj)
    if (preset_name is None) == (symbols is None):
        raise AlphabetSpecError("alphabet spec: exactly one of 'preset' or 'symbols' is required")

    name = obj.get("name")
    if name is None:
        name = preset_name or "alphabet"
    if not isinstance(name, str) or not name.strip():
        raise AlphabetSpecError("alphabet spec: field 'name' must be a string")

    spec = AlphabetSpecV1(
        name=name.strip(),
        preset=preset_name,
        symbols=symbols,
        max_unit=_optional_max_unit(obj),
    )
    # Surface alphabet problems (too small, ambiguous renderings) at load time.
    spec.alphabet()
    return spec
