"""nurlcomponents.codec
Percent-encoding primitives shared by every component.
"""

import enum
import re

from typing import Protocol, runtime_checkable

from urllib.parse import quote, unquote_to_bytes

from .abnf import INVALID_URI_CHARS_PAT, PCT_ENCODED, RESERVED_CHARS, UCSCHAR
from .errors import UriSyntaxError


class Encoding(enum.Enum):
    """The encoding profiles a component can be serialized with."""

    RFC3986 = "rfc3986"
    RFC1738 = "rfc1738"
    RFC3987 = "rfc3987"
    NONE = "none"


@runtime_checkable
class UriComponent(Protocol):
    def value(self) -> str | None: ...

    def uri_component(self) -> str: ...


# Octets that stay percent-encoded when a component is normalized.
PREVENTS_DECODING: str = RESERVED_CHARS + "%"

_PCT_ENCODED_RUN_PAT: re.Pattern[str] = re.compile(rf"(?:{PCT_ENCODED})+")
_PCT_ENCODED_SPLIT_PAT: re.Pattern[str] = re.compile(rf"({PCT_ENCODED})")
_UCSCHAR_SPLIT_PAT: re.Pattern[str] = re.compile(rf"({UCSCHAR}+)")


def _stringify(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (str, int, float)):
        return str(value)
    if type(value).__str__ is not object.__str__:
        return str(value)
    raise TypeError(f"Expected component to be stringable; received {type(value).__name__}.")


def filter_component(value: object) -> str | None:
    """Coerces value into a component string, or None when the component is absent.
    Raises TypeError if value can not be turned into a string, and UriSyntaxError if it contains control characters.
    """
    if isinstance(value, UriComponent):
        return value.value()
    if value is None:
        return None
    component: str = _stringify(value)
    if INVALID_URI_CHARS_PAT.search(component) is not None:
        raise UriSyntaxError(f"Invalid component string: {component!r}.")
    return component


def capitalize_percent_encodings(string: str) -> str:
    """Returns string with all percent-encoded sequences expressed in capital letters.
    e.g. capitalize_percent_encodings("example%2ecom") == "example%2Ecom"
    """
    return _PCT_ENCODED_SPLIT_PAT.sub(lambda m: m[0].upper(), string)


def decode_component(string: str, prevents_decoding: str = PREVENTS_DECODING) -> str:
    """Decodes every percent-encoded sequence of string, except the ones standing for a character
    of prevents_decoding, for whitespace or for a control character. Those are kept, capitalized.
    e.g. decode_component("%7Efoo%2fbar") == "~foo%2Fbar"
    """

    def _decode(m: re.Match[str]) -> str:
        try:
            text: str = unquote_to_bytes(m[0]).decode("utf-8")
        except UnicodeDecodeError:
            return m[0].upper()
        return "".join(
            quote(c, safe="") if c in prevents_decoding or ord(c) <= 0x20 or ord(c) == 0x7F else c for c in text
        )

    return _PCT_ENCODED_RUN_PAT.sub(_decode, string)


def _quote(string: str, allowed: str, keep_unicode: bool) -> str:
    if not keep_unicode:
        return quote(string, safe=allowed, errors="surrogateescape")
    # Odd indices hold runs of ucschar, which IRIs may carry unescaped.
    parts: list[str] = _UCSCHAR_SPLIT_PAT.split(string)
    return "".join(
        part if i % 2 == 1 else quote(part, safe=allowed, errors="surrogateescape") for i, part in enumerate(parts)
    )


def encode_component(string: str, allowed: str, *, keep_encoded: bool = True, keep_unicode: bool = False) -> str:
    """Percent-encodes every character of string that is neither unreserved nor in allowed.
    With keep_encoded, valid percent-encoded sequences are preserved (capitalized) and only a bare "%" is escaped.
    With keep_unicode, characters from the RFC 3987 ucschar range are left as they are.
    """
    allowed = allowed.replace("%", "")
    if not keep_encoded:
        return _quote(string, allowed, keep_unicode)
    # Odd indices hold the percent-encoded sequences found by the split.
    parts: list[str] = _PCT_ENCODED_SPLIT_PAT.split(string)
    return "".join(
        part.upper() if i % 2 == 1 else _quote(part, allowed, keep_unicode) for i, part in enumerate(parts)
    )


def to_rfc1738(string: str) -> str:
    """Converts an RFC 3986 encoded string so that it is safe to read as RFC 1738,
    where "+" stands for a space and "~" is reserved.
    """
    return string.replace("+", "%2B").replace("~", "%7E")
