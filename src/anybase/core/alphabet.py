"""Ordered symbol sets that define a numeral base.

An alphabet owns two mappings:
  - digit index -> symbol (caller's iteration order, first occurrence wins)
  - symbol -> digit index (reverse lookup used by decode)

Each symbol also has a rendered text form, used by ``encode_to_string`` and by
the tokenizer that splits raw encoded strings back into symbols. Renderings
must be non-empty, distinct and prefix-free.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable, Iterator
from typing import Generic, Protocol, TypeVar

from anybase.errors import FormatError, InvalidAlphabet

logger = logging.getLogger(__name__)


class Symbol(Protocol):
    """Capability bound for alphabet symbols: hashable with value equality."""

    def __hash__(self) -> int: ...

    def __eq__(self, other: object) -> bool: ...


S = TypeVar("S", bound=Symbol)


class Alphabet(Generic[S]):
    """Immutable, deduplicated, ordered symbol set of cardinality >= 2."""

    __slots__ = ("_symbols", "_index", "_render", "_rendered", "_by_text", "_max_token")

    def __init__(
        self, symbols: Iterable[S] | None, render: Callable[[S], str] | None = None
    ) -> None:
        if symbols is None:
            raise InvalidAlphabet("alphabet cannot be None")

        ordered: list[S] = []
        index: dict[S, int] = {}
        for s in symbols:
            if s in index:
                continue
            index[s] = len(ordered)
            ordered.append(s)

        if not ordered:
            raise InvalidAlphabet("alphabet cannot be empty")
        if len(ordered) < 2:
            raise InvalidAlphabet(
                f"alphabet needs at least 2 distinct symbols, got {len(ordered)}"
            )

        if render is None:
            bad = next((s for s in ordered if not isinstance(s, str)), None)
            if bad is not None:
                raise InvalidAlphabet(
                    f"symbol {bad!r} is not a str: pass render= to define its text form"
                )
            render = _render_str

        rendered = tuple(render(s) for s in ordered)
        by_text: dict[str, int] = {}
        for i, text in enumerate(rendered):
            if not isinstance(text, str):
                raise InvalidAlphabet(
                    f"render({ordered[i]!r}) returned {type(text).__name__}, expected str"
                )
            if not text:
                raise InvalidAlphabet(f"symbol {ordered[i]!r} renders to an empty string")
            if text in by_text:
                raise InvalidAlphabet(
                    f"symbols {ordered[by_text[text]]!r} and {ordered[i]!r} both render as {text!r}"
                )
            by_text[text] = i

        # Prefix-free renderings keep concatenated output uniquely splittable.
        # In sorted order a prefix always sits right before some word it prefixes.
        ordered_texts = sorted(by_text)
        for short, long in zip(ordered_texts, ordered_texts[1:]):
            if long.startswith(short):
                raise InvalidAlphabet(
                    f"rendering {short!r} is a prefix of {long!r}: encoded strings would be ambiguous"
                )

        self._symbols: tuple[S, ...] = tuple(ordered)
        self._index = index
        self._render = render
        self._rendered = rendered
        self._by_text = by_text
        self._max_token = max(len(t) for t in rendered)

    # -- basic view --------------------------------------------------------

    @property
    def symbols(self) -> tuple[S, ...]:
        return self._symbols

    @property
    def base(self) -> int:
        return len(self._symbols)

    @property
    def rendered(self) -> tuple[str, ...]:
        return self._rendered

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[S]:
        return iter(self._symbols)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Alphabet):
            return NotImplemented
        return self._symbols == other._symbols and self._rendered == other._rendered

    def __hash__(self) -> int:
        return hash((self._symbols, self._rendered))

    def __repr__(self) -> str:
        return f"Alphabet({''.join(self._rendered)!r}, base={self.base})"

    # -- lookups -----------------------------------------------------------

    def symbol(self, digit: int) -> S:
        return self._symbols[digit]

    def index(self, symbol: S) -> int:
        try:
            return self._index[symbol]
        except (KeyError, TypeError) as e:
            raise FormatError(f"unknown symbol: {symbol!r}") from e

    def render(self, symbol: S) -> str:
        return self._rendered[self.index(symbol)]

    def tokenize(self, text: str) -> list[S]:
        """Split a raw encoded string into symbols.

        Renderings may be multi-character but are prefix-free, so at most one
        rendering matches at each position.
        """
        out: list[S] = []
        pos = 0
        n = len(text)
        while pos < n:
            for size in range(min(self._max_token, n - pos), 0, -1):
                i = self._by_text.get(text[pos : pos + size])
                if i is not None:
                    out.append(self._symbols[i])
                    pos += size
                    break
            else:
                logger.debug("tokenize: no symbol matches at offset %d", pos)
                raise FormatError(f"no alphabet symbol matches at offset {pos}: {text[pos:pos + 8]!r}")
        return out


def _render_str(s: str) -> str:
    return s
