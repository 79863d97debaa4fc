"""nurlcomponents.scheme
The URI scheme (RFC 3986 section 3.1), with the default ports of the schemes that have one.
"""

import collections
import dataclasses
import threading

from typing import Self

from .abnf import SCHEME_PAT
from .codec import filter_component
from .errors import UriSyntaxError
from .port import Port

SCHEME_DEFAULT_PORTS: dict[str, int | None] = {
    "acap": 674,
    "afp": 548,
    "data": None,
    "dict": 2628,
    "dns": 53,
    "file": None,
    "ftp": 21,
    "gopher": 70,
    "http": 80,
    "https": 443,
    "imap": 143,
    "ipp": 631,
    "ipps": 631,
    "irc": 194,
    "ircs": 6697,
    "ldap": 389,
    "ldaps": 636,
    "mms": 1755,
    "msrp": 2855,
    "msrps": None,
    "mtqp": 1038,
    "nfs": 111,
    "nntp": 119,
    "nntps": 563,
    "pop": 110,
    "prospero": 1525,
    "redis": 6379,
    "rsync": 873,
    "rtsp": 554,
    "rtsps": 322,
    "rtspu": 5005,
    "sftp": 22,
    "smb": 445,
    "snmp": 161,
    "ssh": 22,
    "steam": None,
    "svn": 3690,
    "telnet": 23,
    "tn3270": 23,
    "ventrilo": 3784,
    "vnc": 5900,
    "wais": 210,
    "ws": 80,
    "wss": 443,
    "xmpp": None,
}

# The WHATWG URL Standard's special schemes.
SPECIAL_SCHEMES: frozenset[str] = frozenset(("data", "file", "ftp", "gopher", "http", "https", "ws", "wss"))


class SchemeCache:
    """Remembers the normalized schemes that already passed validation.
    Holds at most maxsize entries and evicts the oldest one first. Safe to share between threads.
    """

    def __init__(self: Self, maxsize: int = 100) -> None:
        self.maxsize: int = maxsize
        self._entries: collections.OrderedDict[str, None] = collections.OrderedDict()
        self._lock: threading.Lock = threading.Lock()

    def __contains__(self: Self, scheme: object) -> bool:
        with self._lock:
            return scheme in self._entries

    def __len__(self: Self) -> int:
        with self._lock:
            return len(self._entries)

    def add(self: Self, scheme: str) -> None:
        with self._lock:
            if scheme in self._entries:
                return
            if len(self._entries) >= self.maxsize:
                self._entries.popitem(last=False)
            self._entries[scheme] = None

    def clear(self: Self) -> None:
        with self._lock:
            self._entries.clear()


DEFAULT_SCHEME_CACHE: SchemeCache = SchemeCache()


def parse_scheme(scheme: object = None, cache: SchemeCache | None = DEFAULT_SCHEME_CACHE) -> "Scheme":
    """Validates and lowercases a scheme.
    e.g. parse_scheme("HTTPS").value() == "https"
    """
    raw_scheme: str | None = filter_component(scheme)
    if raw_scheme is None:
        return Scheme()

    raw_scheme = raw_scheme.lower()
    if cache is not None and raw_scheme in cache:
        return Scheme(raw_scheme)
    if SCHEME_PAT.match(raw_scheme) is None:
        raise UriSyntaxError(f"The scheme `{raw_scheme}` is invalid.")
    if cache is not None:
        cache.add(raw_scheme)
    return Scheme(raw_scheme)


@dataclasses.dataclass(frozen=True)
class Scheme:
    """A class to hold a URI scheme. You should not instantiate this directly. Instead use parse_scheme or Scheme.new."""

    raw_scheme: str | None = None

    @classmethod
    def new(cls, scheme: object = None, cache: SchemeCache | None = DEFAULT_SCHEME_CACHE) -> "Scheme":
        return parse_scheme(scheme, cache)

    def value(self: Self) -> str | None:
        return self.raw_scheme

    def default_port(self: Self) -> Port:
        """The port the scheme uses when none is given, or an absent Port if it has none or is unknown."""
        return Port.new(SCHEME_DEFAULT_PORTS.get(self.raw_scheme or ""))

    def is_http(self: Self) -> bool:
        return self.raw_scheme in ("http", "https")

    def is_websocket(self: Self) -> bool:
        return self.raw_scheme in ("ws", "wss")

    def is_ssl(self: Self) -> bool:
        return self.raw_scheme in ("https", "wss")

    def is_special(self: Self) -> bool:
        return self.raw_scheme in SPECIAL_SCHEMES

    def with_content(self: Self, content: object) -> "Scheme":
        scheme: str | None = filter_component(content)
        if scheme is not None:
            scheme = scheme.lower()
        if scheme == self.raw_scheme:
            return self
        return parse_scheme(scheme)

    def uri_component(self: Self) -> str:
        return f"{self.raw_scheme}:" if self.raw_scheme is not None else ""

    def __str__(self: Self) -> str:
        return self.raw_scheme if self.raw_scheme is not None else ""
