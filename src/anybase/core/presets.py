from __future__ import annotations

from anybase.core.alphabet import Alphabet
from anybase.errors import InvalidAlphabet

# Symbol order is the digit order. Keep these stable.
PRESETS: dict[str, str] = {
    "binary": "01",
    "octal": "01234567",
    "decimal": "0123456789",
    "hex": "0123456789ABCDEF",
    "hex-lower": "0123456789abcdef",
    "base32": "ABCDEFGHIJKLMNOPQRSTUVWXYZ234567",
    "base36": "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ",
    "base62": "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz",
}


def preset(name: str) -> Alphabet[str]:
    key = name.strip().lower()
    try:
        return Alphabet(PRESETS[key])
    except KeyError:
        known = ", ".join(sorted(PRESETS))
        raise InvalidAlphabet(f"unknown preset alphabet: {name!r} (known: {known})") from None
