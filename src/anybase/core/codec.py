"""AnyBase byte/text codec.

Every input unit (a byte, or a character code point) is encoded on its own as
a fixed-width group of W base-B digits, W being the smallest width with
B**W > max_unit. Groups are independent, so decode only needs to split the
digit stream every W digits.

Byte-output decode lays each unit value out little-endian over the byte cells
of max_unit and strips trailing zero bytes. A zero unit therefore decodes to
nothing: ``b"\\x00"`` does not survive ``decode_to_bytes``. Text decode keeps
every unit.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Sequence
from typing import Generic

from anybase.core.alphabet import Alphabet, S
from anybase.core.numeral import NumeralSystem
from anybase.core.presets import preset
from anybase.errors import FormatError

logger = logging.getLogger(__name__)

BYTE_MAX = 0xFF
UNICODE_MAX = 0x10FFFF


class AnyBase(Generic[S]):
    """Codec bound to one alphabet and one unit range, immutable after construction."""

    __slots__ = ("_alphabet", "_max_unit", "_units", "_digits", "_cell_bytes")

    def __init__(
        self,
        alphabet: Alphabet[S] | Iterable[S] | None,
        *,
        max_unit: int = BYTE_MAX,
        render: Callable[[S], str] | None = None,
    ) -> None:
        if not isinstance(alphabet, Alphabet):
            alphabet = Alphabet(alphabet, render=render)
        if not (BYTE_MAX <= int(max_unit) <= UNICODE_MAX):
            raise ValueError(
                f"max_unit must be in [{BYTE_MAX:#x}, {UNICODE_MAX:#x}], got {max_unit!r}"
            )
        max_unit = int(max_unit)

        self._alphabet: Alphabet[S] = alphabet
        self._max_unit = max_unit
        # Natural system of the unit domain: one digit per unit.
        self._units = NumeralSystem.for_range(max_unit + 1, max_unit)
        self._digits = NumeralSystem.for_range(alphabet.base, max_unit)
        self._cell_bytes = (max_unit.bit_length() + 7) // 8

        logger.debug(
            "anybase: base=%d width=%d max_unit=%#x",
            alphabet.base,
            self._digits.width,
            max_unit,
        )

    @classmethod
    def from_preset(cls, name: str, *, max_unit: int = BYTE_MAX) -> AnyBase[str]:
        return cls(preset(name), max_unit=max_unit)

    @property
    def alphabet(self) -> Alphabet[S]:
        return self._alphabet

    @property
    def base(self) -> int:
        return self._alphabet.base

    @property
    def width(self) -> int:
        return self._digits.width

    @property
    def max_unit(self) -> int:
        return self._max_unit

    def __repr__(self) -> str:
        return f"AnyBase({self._alphabet!r}, width={self.width}, max_unit={self._max_unit:#x})"

    # -------
    # encode
    # -------

    def encode(self, data: bytes | bytearray | memoryview | str) -> list[S]:
        units = _units_of(data)
        out: list[S] = []
        for pos, u in enumerate(units):
            if u > self._max_unit:
                raise FormatError(
                    f"unit {u:#x} at offset {pos} exceeds max_unit {self._max_unit:#x}"
                )
            group = self._units.to(self._units.digits(u), self._digits)
            out.extend(self._alphabet.symbol(d) for d in group)
        return out

    def encode_to_string(self, data: bytes | bytearray | memoryview | str) -> str:
        rendered = self._alphabet.rendered
        return "".join(rendered[self._alphabet.index(s)] for s in self.encode(data))

    # -------
    # decode
    # -------

    def decode_to_string(self, encoded: str | Sequence[S]) -> str:
        return "".join(chr(u) for u in self._decode_units(encoded))

    def decode_to_bytes(self, encoded: Sequence[S] | str) -> bytes:
        out = bytearray()
        for u in self._decode_units(encoded):
            cell = u.to_bytes(self._cell_bytes, "little")
            out += cell.rstrip(b"\x00")
        return bytes(out)

    def _decode_units(self, encoded: str | Sequence[S]) -> list[int]:
        """Symbols -> digit indices -> W-digit groups -> unit values.

        Nothing is returned unless every group decodes.
        """
        symbols = self._alphabet.tokenize(encoded) if isinstance(encoded, str) else encoded
        width = self._digits.width
        if len(symbols) % width:
            logger.debug("decode: %d symbols, width %d", len(symbols), width)
            raise FormatError(
                f"encoded length {len(symbols)} is not a multiple of the digit width {width}"
            )

        indices = [self._alphabet.index(s) for s in symbols]
        units: list[int] = []
        for start in range(0, len(indices), width):
            group = indices[start : start + width]
            try:
                (u,) = self._digits.to(group, self._units)
            except FormatError as e:
                raise FormatError(f"group at offset {start}: {e}") from e
            units.append(u)
        return units


def _units_of(data: bytes | bytearray | memoryview | str) -> Iterable[int]:
    if isinstance(data, str):
        return [ord(c) for c in data]
    if isinstance(data, (bytes, bytearray, memoryview)):
        return bytes(data)
    raise TypeError(f"expected bytes-like or str, got {type(data).__name__}")
