from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from anybase.errors import FormatError, InvalidAlphabet


def digits_for_value(value: int, base: int) -> list[int]:
    """Digits of ``value`` in ``base``, most significant first ([0] for zero)."""
    if base < 2:
        raise InvalidAlphabet(f"base must be >= 2, got {base}")
    if value < 0:
        raise ValueError("negative values are not supported")
    if value == 0:
        return [0]
    out: list[int] = []
    while value:
        value, rem = divmod(value, base)
        out.append(rem)
    out.reverse()
    return out


def value_for_digits(digits: Sequence[int], base: int) -> int:
    if base < 2:
        raise InvalidAlphabet(f"base must be >= 2, got {base}")
    value = 0
    for d in digits:
        if not (0 <= d < base):
            raise FormatError(f"digit {d} out of range for base {base}")
        value = value * base + d
    return value


def convert(digits: Sequence[int], from_base: int, to_base: int) -> list[int]:
    """Re-express a digit sequence of ``from_base`` in ``to_base``, same value."""
    return digits_for_value(value_for_digits(digits, from_base), to_base)


def pad_digits(digits: Sequence[int], width: int) -> list[int]:
    """Left-pad with zero digits to exactly ``width``."""
    if len(digits) > width:
        raise ValueError(f"{len(digits)} digits do not fit width {width}")
    return [0] * (width - len(digits)) + list(digits)


def canonical_width(base: int, max_value: int) -> int:
    """Smallest W >= 1 with base**W > max_value."""
    if base < 2:
        raise InvalidAlphabet(f"base must be >= 2, got {base}")
    if max_value < 0:
        raise ValueError("max_value must be >= 0")
    width = 1
    span = base
    while span <= max_value:
        span *= base
        width += 1
    return width


@dataclass(frozen=True)
class NumeralSystem:
    """A positional system of fixed ``base`` with a canonical digit ``width``.

    ``width`` is sized so every value in [0, max_value] fits exactly.
    """

    base: int
    max_value: int
    width: int

    @classmethod
    def for_range(cls, base: int, max_value: int) -> NumeralSystem:
        return cls(base=base, max_value=max_value, width=canonical_width(base, max_value))

    def digits(self, value: int) -> list[int]:
        if value > self.max_value:
            raise FormatError(f"value {value} exceeds max {self.max_value}")
        return pad_digits(digits_for_value(value, self.base), self.width)

    def value(self, digits: Sequence[int]) -> int:
        if len(digits) != self.width:
            raise FormatError(f"expected {self.width} digits, got {len(digits)}")
        return value_for_digits(digits, self.base)

    def to(self, digits: Sequence[int], other: NumeralSystem) -> list[int]:
        """Convert one canonical group of this system into ``other``'s canonical group."""
        converted = convert(digits, self.base, other.base)
        if len(converted) > other.width:
            raise FormatError(
                f"value does not fit {other.width} digits of base {other.base}"
            )
        return pad_digits(converted, other.width)
