"""nurlcomponents.userinfo
The URI user information (RFC 3986 section 3.2.1), kept as a user and an optional password.
"""

import dataclasses

from typing import Self

from urllib.parse import unquote

from .abnf import PASSWORD_CHARS, USER_CHARS
from .codec import decode_component, encode_component, filter_component


def _decode(string: str | None) -> str | None:
    return decode_component(string) if string is not None else None


def parse_user_info(user_info: object = None) -> "UserInfo":
    """Splits an encoded userinfo string on its first ":".
    e.g. parse_user_info("user:pa:ss").password == "pa:ss"
    """
    raw_user_info: str | None = filter_component(user_info)
    if raw_user_info is None:
        return UserInfo()
    user, colon, password = raw_user_info.partition(":")
    return UserInfo.new(user, password if len(colon) > 0 else None)


@dataclasses.dataclass(frozen=True)
class UserInfo:
    """A class to hold a URI userinfo. You should not instantiate this directly. Instead use parse_user_info or UserInfo.new.
    A password without a user makes no sense and is dropped.
    """

    user: str | None = None
    password: str | None = None

    def __post_init__(self: Self) -> None:
        if self.user is None or len(self.user) == 0:
            object.__setattr__(self, "password", None)

    @classmethod
    def new(cls, user: object = None, password: object = None) -> "UserInfo":
        return cls(_decode(filter_component(user)), _decode(filter_component(password)))

    @classmethod
    def new_from_string(cls, user_info: object) -> "UserInfo":
        return parse_user_info(user_info)

    def value(self: Self) -> str | None:
        if self.user is None:
            return None
        user_info: str = encode_component(self.user, USER_CHARS)
        if self.password is None:
            return user_info
        return f"{user_info}:{encode_component(self.password, PASSWORD_CHARS)}"

    def decoded(self: Self) -> str | None:
        if self.user is None:
            return None
        if self.password is None:
            return unquote(self.user)
        return f"{unquote(self.user)}:{unquote(self.password)}"

    def with_user_info(self: Self, user: object, password: object = None) -> "UserInfo":
        user_info: UserInfo = UserInfo.new(user, password)
        if user_info == self:
            return self
        return user_info

    def with_pass(self: Self, password: object) -> "UserInfo":
        if self.user is None:
            return self
        return self.with_user_info(self.user, password)

    def with_content(self: Self, content: object) -> "UserInfo":
        user_info: UserInfo = parse_user_info(content)
        if user_info == self:
            return self
        return user_info

    def uri_component(self: Self) -> str:
        user_info: str | None = self.value()
        return f"{user_info}@" if user_info is not None else ""

    def __str__(self: Self) -> str:
        user_info: str | None = self.value()
        return user_info if user_info is not None else ""
