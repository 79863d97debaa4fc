"""nurlcomponents.fragment
The URI fragment (RFC 3986 section 3.5).
"""

import dataclasses

from typing import Self

from urllib.parse import unquote

from .abnf import FRAGMENT_CHARS
from .codec import decode_component, encode_component, filter_component


def parse_fragment(fragment: object = None) -> "Fragment":
    """Normalizes a fragment: needlessly percent-encoded characters are decoded, the rest is kept.
    e.g. parse_fragment("%7efoo%23bar").value() == "~foo%23bar"
    """
    raw_fragment: str | None = filter_component(fragment)
    if raw_fragment is None:
        return Fragment()
    return Fragment(decode_component(raw_fragment))


@dataclasses.dataclass(frozen=True)
class Fragment:
    """A class to hold a URI fragment. You should not instantiate this directly. Instead use parse_fragment or Fragment.new."""

    raw_fragment: str | None = None

    @classmethod
    def new(cls, fragment: object = None) -> "Fragment":
        return parse_fragment(fragment)

    def value(self: Self) -> str | None:
        if self.raw_fragment is None:
            return None
        return encode_component(self.raw_fragment, FRAGMENT_CHARS)

    def decoded(self: Self) -> str | None:
        if self.raw_fragment is None:
            return None
        return unquote(self.raw_fragment)

    def with_content(self: Self, content: object) -> "Fragment":
        fragment: Fragment = parse_fragment(content)
        if fragment.value() == self.value():
            return self
        return fragment

    def uri_component(self: Self) -> str:
        fragment: str | None = self.value()
        return f"#{fragment}" if fragment is not None else ""

    def __str__(self: Self) -> str:
        fragment: str | None = self.value()
        return fragment if fragment is not None else ""
