"""nurlcomponents.authority
The URI authority (RFC 3986 section 3.2), composed of a UserInfo, a Host and a Port.
"""

import dataclasses

from typing import Self

from .codec import filter_component
from .errors import UriSyntaxError
from .host import Host, parse_host
from .port import Port, parse_port
from .userinfo import UserInfo, parse_user_info


def _split_host_port(host_port: str) -> tuple[str, str | None]:
    # host = IP-literal / IPv4address / reg-name
    # Only an IP-literal may contain ":", and it is always bracketed.
    if host_port.startswith("["):
        closing: int = host_port.find("]")
        if closing == -1:
            raise UriSyntaxError(f"`{host_port}` is an invalid authority : the IP literal is not closed.")
        host, rest = host_port[: closing + 1], host_port[closing + 1 :]
        if len(rest) == 0:
            return host, None
        if not rest.startswith(":"):
            raise UriSyntaxError(f"`{host_port}` is an invalid authority.")
        return host, rest[1:]
    host, colon, port = host_port.partition(":")
    return host, port if len(colon) > 0 else None


def parse_authority(authority: object = None) -> "Authority":
    """Splits an authority string into its components.
    e.g. parse_authority("user:pass@Example.com:0443").value() == "user:pass@example.com:443"
    """
    raw_authority: str | None = filter_component(authority)
    if raw_authority is None:
        return Authority()
    user_info, at, host_port = raw_authority.rpartition("@")
    host, port = _split_host_port(host_port)
    return Authority(
        host=parse_host(host),
        port=parse_port(port),
        user_info=parse_user_info(user_info) if len(at) > 0 else UserInfo(),
    )


@dataclasses.dataclass(frozen=True)
class Authority:
    """A class to hold a URI authority. You should not instantiate this directly. Instead use parse_authority or one of the new* constructors."""

    host: Host = dataclasses.field(default_factory=Host)
    port: Port = dataclasses.field(default_factory=Port)
    user_info: UserInfo = dataclasses.field(default_factory=UserInfo)

    def __post_init__(self: Self) -> None:
        # authority = [ userinfo "@" ] host [ ":" port ]
        if self.host.value() is None and (self.port.value() is not None or self.user_info.value() is not None):
            raise UriSyntaxError("A non-empty authority must contain a non null host.")

    @classmethod
    def new(cls, authority: object = None) -> "Authority":
        return parse_authority(authority)

    @classmethod
    def new_from_components(
        cls,
        host: object = None,
        port: object = None,
        user: object = None,
        password: object = None,
    ) -> "Authority":
        return cls(
            host=host if isinstance(host, Host) else parse_host(host),
            port=port if isinstance(port, Port) else parse_port(port),
            user_info=UserInfo.new(user, password),
        )

    def value(self: Self) -> str | None:
        host: str | None = self.host.value()
        if host is None:
            return None
        return f"{self.user_info.uri_component()}{host}{self.port.uri_component()}"

    def components(self: Self) -> dict[str, str | int | None]:
        """The authority split the way urllib.parse.urlsplit names its attributes."""
        return {
            "username": self.user_info.user,
            "password": self.user_info.password,
            "hostname": self.host.value(),
            "port": self.port.to_int(),
        }

    def with_host(self: Self, host: object) -> "Authority":
        new_host: Host = host if isinstance(host, Host) else parse_host(host)
        if new_host == self.host:
            return self
        return dataclasses.replace(self, host=new_host)

    def with_port(self: Self, port: object) -> "Authority":
        new_port: Port = port if isinstance(port, Port) else parse_port(port)
        if new_port == self.port:
            return self
        return dataclasses.replace(self, port=new_port)

    def with_user_info(self: Self, user: object, password: object = None) -> "Authority":
        user_info: UserInfo = self.user_info.with_user_info(user, password)
        if user_info is self.user_info:
            return self
        return dataclasses.replace(self, user_info=user_info)

    def with_content(self: Self, content: object) -> "Authority":
        authority: Authority = parse_authority(content)
        if authority == self:
            return self
        return authority

    def uri_component(self: Self) -> str:
        authority: str | None = self.value()
        return f"//{authority}" if authority is not None else ""

    def __str__(self: Self) -> str:
        authority: str | None = self.value()
        return authority if authority is not None else ""
