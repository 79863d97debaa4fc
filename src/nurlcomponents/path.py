"""nurlcomponents.path
The URI path (RFC 3986 section 3.3). A path is always present, possibly empty.
"""

import dataclasses

from typing import Self

from urllib.parse import unquote

from .abnf import PATH_CHARS
from .codec import decode_component, encode_component, filter_component

_SEPARATOR: str = "/"


def remove_dot_segments(path: str) -> str:
    """Resolves the "." and ".." segments of path as RFC 3986 section 5.2.4 does.
    The output is kept as a stack of segments, each with its leading "/" except for a relative first one.
    e.g. remove_dot_segments("/a/b/c/./../../g") == "/a/g"
    """
    output: list[str] = []
    while len(path) > 0:
        if path.startswith(("../", "./")):
            path = path[path.index(_SEPARATOR) + 1 :]
        elif path.startswith("/./") or path == "/.":
            path = f"{_SEPARATOR}{path[3:]}"
        elif path.startswith("/../") or path == "/..":
            path = f"{_SEPARATOR}{path[4:]}"
            if len(output) > 0:
                output.pop()
        elif path in (".", ".."):
            break
        else:
            end: int = path.find(_SEPARATOR, 1)
            if end == -1:
                end = len(path)
            output.append(path[:end])
            path = path[end:]
    return "".join(output)


def parse_path(path: object = "") -> "Path":
    """Normalizes a path the way the other components are normalized: needlessly percent-encoded characters are decoded.
    Dot segments are kept; use Path.without_dot_segments to resolve them.
    """
    raw_path: str | None = filter_component(path)
    if raw_path is None:
        raise TypeError("The path can not be None.")
    return Path(decode_component(raw_path))


@dataclasses.dataclass(frozen=True)
class Path:
    """A class to hold a URI path. You should not instantiate this directly. Instead use parse_path or Path.new."""

    raw_path: str = ""

    @classmethod
    def new(cls, path: object = "") -> "Path":
        return parse_path(path)

    def value(self: Self) -> str:
        return encode_component(self.raw_path, PATH_CHARS)

    def decoded(self: Self) -> str:
        return unquote(self.raw_path)

    def is_absolute(self: Self) -> bool:
        return self.raw_path.startswith(_SEPARATOR)

    def has_trailing_slash(self: Self) -> bool:
        return self.raw_path.endswith(_SEPARATOR)

    def _with_raw_path(self: Self, raw_path: str) -> "Path":
        if raw_path == self.raw_path:
            return self
        return dataclasses.replace(self, raw_path=raw_path)

    def without_dot_segments(self: Self) -> "Path":
        if "." not in self.raw_path:
            return self
        return self._with_raw_path(remove_dot_segments(self.raw_path))

    def with_leading_slash(self: Self) -> "Path":
        if self.is_absolute():
            return self
        return self._with_raw_path(f"{_SEPARATOR}{self.raw_path}")

    def without_leading_slash(self: Self) -> "Path":
        return self._with_raw_path(self.raw_path.removeprefix(_SEPARATOR))

    def with_trailing_slash(self: Self) -> "Path":
        if self.has_trailing_slash():
            return self
        return self._with_raw_path(f"{self.raw_path}{_SEPARATOR}")

    def without_trailing_slash(self: Self) -> "Path":
        return self._with_raw_path(self.raw_path.removesuffix(_SEPARATOR))

    def with_content(self: Self, content: object) -> "Path":
        path: Path = parse_path(content)
        if path == self:
            return self
        return path

    def uri_component(self: Self) -> str:
        return self.value()

    def __str__(self: Self) -> str:
        return self.value()
