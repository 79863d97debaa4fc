"""nurlcomponents.port
The URI port (RFC 3986 section 3.2.3).
"""

import dataclasses

from typing import Self

from .abnf import PORT_PAT
from .codec import filter_component
from .errors import UriSyntaxError


def parse_port(port: object = None) -> "Port":
    """Validates a port. An empty port string stands for an absent port and leading zeros are dropped.
    e.g. parse_port("0080").to_int() == 80
    """
    raw_port: str | None = filter_component(port)
    if raw_port is None or len(raw_port) == 0:
        return Port()
    if PORT_PAT.match(raw_port) is None:
        raise UriSyntaxError(f"Expected port to be a positive integer or 0; received `{raw_port}`.")
    return Port(int(raw_port, base=10))


@dataclasses.dataclass(frozen=True)
class Port:
    """A class to hold a URI port. You should not instantiate this directly. Instead use parse_port or one of the new* constructors."""

    raw_port: int | None = None

    @classmethod
    def new(cls, port: object = None) -> "Port":
        return parse_port(port)

    @classmethod
    def new_from_int(cls, port: int) -> "Port":
        if isinstance(port, bool) or not isinstance(port, int):
            raise TypeError(f"Expected port to be an int; received {type(port).__name__}.")
        if port < 0:
            raise UriSyntaxError(f"Expected port to be a positive integer or 0; received `{port}`.")
        return cls(port)

    def value(self: Self) -> str | None:
        return str(self.raw_port) if self.raw_port is not None else None

    def to_int(self: Self) -> int | None:
        return self.raw_port

    def with_content(self: Self, content: object) -> "Port":
        port: Port = parse_port(content)
        if port == self:
            return self
        return port

    def uri_component(self: Self) -> str:
        return f":{self.raw_port}" if self.raw_port is not None else ""

    def __str__(self: Self) -> str:
        return str(self.raw_port) if self.raw_port is not None else ""
