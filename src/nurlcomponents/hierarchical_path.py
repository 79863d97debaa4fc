"""nurlcomponents.hierarchical_path
A Path seen as a sequence of "/"-separated segments, with segment-level edits.
"""

import dataclasses
import re

from typing import Iterable, Iterator, Self

from .codec import filter_component
from .errors import OffsetOutOfBounds, UriSyntaxError
from .path import Path, parse_path

_SEPARATOR: str = "/"
_EXTENSION_SEPARATOR: str = "."
_PARAMETER_SEPARATOR: str = ";"

_REPEATED_SEPARATORS_PAT: re.Pattern[str] = re.compile(r"/{2,}")


def _dirname(path: str) -> str:
    """Same results as PHP's dirname: trailing slashes are ignored and "." stands for no directory."""
    if len(path) == 0:
        return ""
    stripped: str = path.rstrip(_SEPARATOR)
    if len(stripped) == 0:
        return _SEPARATOR
    head, separator, _ = stripped.rpartition(_SEPARATOR)
    if len(separator) == 0:
        return "."
    return head.rstrip(_SEPARATOR) or _SEPARATOR


def _segment_string(segment: object) -> str:
    filtered: str | None = filter_component(segment)
    if filtered is None:
        raise TypeError("A path segment can not be None.")
    return filtered


def parse_hierarchical_path(path: object = "") -> "HierarchicalPath":
    """e.g. parse_hierarchical_path("/path/to/my/file.txt").segments() == ["path", "to", "my", "file.txt"]"""
    return HierarchicalPath(path if isinstance(path, Path) else parse_path(path))


@dataclasses.dataclass(frozen=True)
class HierarchicalPath:
    """A class to hold a segmented URI path. You should not instantiate this directly.
    Instead use parse_hierarchical_path or one of the new* constructors.
    Segments are counted from the left, the leading slash of an absolute path is not a segment.
    """

    path: Path = dataclasses.field(default_factory=Path)

    @classmethod
    def new(cls, path: object = "") -> "HierarchicalPath":
        return parse_hierarchical_path(path)

    @classmethod
    def new_from_relative(cls, segments: Iterable[object]) -> "HierarchicalPath":
        """e.g. HierarchicalPath.new_from_relative(["", "toto", "yeah", ""]).value() == "toto/yeah/" """
        path: str = _SEPARATOR.join(_segment_string(segment) for segment in segments)
        return parse_hierarchical_path(path.lstrip(_SEPARATOR))

    @classmethod
    def new_from_absolute(cls, segments: Iterable[object]) -> "HierarchicalPath":
        path: str = _SEPARATOR.join(_segment_string(segment) for segment in segments)
        if not path.startswith(_SEPARATOR):
            path = f"{_SEPARATOR}{path}"
        return parse_hierarchical_path(path)

    def _with_path(self: Self, path: Path) -> "HierarchicalPath":
        if path == self.path:
            return self
        return HierarchicalPath(path)

    def segments(self: Self) -> list[str]:
        raw_path: str = self.path.raw_path
        if self.is_absolute():
            raw_path = raw_path[len(_SEPARATOR) :]
        return raw_path.split(_SEPARATOR)

    def __iter__(self: Self) -> Iterator[str]:
        return iter(self.segments())

    def __len__(self: Self) -> int:
        return len(self.segments())

    def count(self: Self) -> int:
        return len(self)

    def get(self: Self, offset: int) -> str | None:
        segments: list[str] = self.segments()
        if offset < 0:
            offset += len(segments)
        if 0 <= offset < len(segments):
            return segments[offset]
        return None

    def keys(self: Self, segment: str | None = None) -> list[int]:
        segments: list[str] = self.segments()
        if segment is None:
            return list(range(len(segments)))
        return [offset for offset, value in enumerate(segments) if value == segment]

    def value(self: Self) -> str:
        return self.path.value()

    def decoded(self: Self) -> str:
        return self.path.decoded()

    def is_absolute(self: Self) -> bool:
        return self.path.is_absolute()

    def has_trailing_slash(self: Self) -> bool:
        return self.path.has_trailing_slash()

    def dirname(self: Self) -> str:
        """e.g. parse_hierarchical_path("/path/to/my/file/").dirname() == "/path/to/my" """
        return _dirname(self.path.raw_path)

    def basename(self: Self) -> str:
        return self.segments()[-1]

    def extension(self: Self) -> str:
        """The extension of the basename, its ";" parameters left out."""
        name: str = self.basename().partition(_PARAMETER_SEPARATOR)[0]
        _, separator, extension = name.rpartition(_EXTENSION_SEPARATOR)
        return extension if len(separator) > 0 else ""

    def without_dot_segments(self: Self) -> "HierarchicalPath":
        return self._with_path(self.path.without_dot_segments())

    def with_leading_slash(self: Self) -> "HierarchicalPath":
        return self._with_path(self.path.with_leading_slash())

    def without_leading_slash(self: Self) -> "HierarchicalPath":
        return self._with_path(self.path.without_leading_slash())

    def with_trailing_slash(self: Self) -> "HierarchicalPath":
        return self._with_path(self.path.with_trailing_slash())

    def without_trailing_slash(self: Self) -> "HierarchicalPath":
        return self._with_path(self.path.without_trailing_slash())

    def append(self: Self, segment: object) -> "HierarchicalPath":
        """Adds segment after the last one, e.g. "/test" and "master" give "/test/master"."""
        appended: str = _segment_string(segment).lstrip(_SEPARATOR)
        return self._with_path(parse_path(f"{self.value().rstrip(_SEPARATOR)}{_SEPARATOR}{appended}"))

    def prepend(self: Self, segment: object) -> "HierarchicalPath":
        """Adds segment before the first one, e.g. "/test" and "/master/" give "/master/test"."""
        prepended: str = _segment_string(segment).rstrip(_SEPARATOR)
        return self._with_path(parse_path(f"{prepended}{_SEPARATOR}{self.value().lstrip(_SEPARATOR)}"))

    def with_segment(self: Self, offset: int, segment: object) -> "HierarchicalPath":
        """Replaces the segment at offset.
        An offset one step past either end adds the segment instead: len(self) appends it and -len(self) - 1 prepends it.
        """
        nb_segments: int = len(self)
        if offset < -nb_segments - 1 or offset > nb_segments:
            raise OffsetOutOfBounds(f"No segment can be added with the submitted offset : `{offset}`.")
        if offset < 0:
            offset += nb_segments
        if offset == nb_segments:
            return self.append(segment)
        if offset == -1:
            return self.prepend(segment)

        if segment is None:
            raise UriSyntaxError("A path segment can not be None.")
        new_segment: str = parse_path(segment).raw_path
        segments: list[str] = self.segments()
        if new_segment == segments[offset]:
            return self
        segments[offset] = new_segment
        if self.is_absolute():
            segments.insert(0, "")
        return self._with_path(parse_path(_SEPARATOR.join(segments)))

    def without_segment(self: Self, *offsets: int) -> "HierarchicalPath":
        """Removes the segments at offsets, counting from the end when an offset is negative."""
        if len(offsets) == 0:
            return self
        nb_segments: int = len(self)
        deleted: set[int] = set()
        for offset in offsets:
            if offset < -nb_segments or offset > nb_segments - 1:
                raise OffsetOutOfBounds(f"No segment can be removed with the submitted offset : `{offset}`.")
            deleted.add(offset + nb_segments if offset < 0 else offset)
        path: str = _SEPARATOR.join(segment for offset, segment in enumerate(self.segments()) if offset not in deleted)
        if self.is_absolute():
            path = f"{_SEPARATOR}{path}"
        return self._with_path(parse_path(path))

    def without_empty_segments(self: Self) -> "HierarchicalPath":
        return self._with_path(parse_path(_REPEATED_SEPARATORS_PAT.sub(_SEPARATOR, self.value())))

    def with_dirname(self: Self, dirname: object) -> "HierarchicalPath":
        """Replaces everything before the basename, e.g. "/foo/bar/baz" with "/bar" gives "/bar/baz"."""
        if dirname is None:
            raise UriSyntaxError("A dirname can not be None.")
        new_dirname: Path = dirname if isinstance(dirname, Path) else parse_path(dirname)
        if new_dirname.raw_path == self.dirname():
            return self
        return self._with_path(parse_path(f"{new_dirname.value().rstrip(_SEPARATOR)}{_SEPARATOR}{self.basename()}"))

    def with_basename(self: Self, basename: object) -> "HierarchicalPath":
        new_basename: str | None = filter_component(basename)
        if new_basename is None:
            raise UriSyntaxError("A basename can not be None.")
        if _SEPARATOR in new_basename:
            raise UriSyntaxError(f"The basename `{new_basename}` can not contain the path separator.")
        return self.with_segment(len(self) - 1, new_basename)

    def with_extension(self: Self, extension: object) -> "HierarchicalPath":
        """Replaces the extension of the basename, keeping its ";" parameters. An empty extension removes it.
        e.g. parse_hierarchical_path("/foo/bar.csv;type=a").with_extension("txt").value() == "/foo/bar.txt;type=a"
        """
        new_extension: str | None = filter_component(extension)
        if new_extension is None:
            raise UriSyntaxError("An extension can not be None.")
        if _SEPARATOR in new_extension:
            raise UriSyntaxError(f"The extension `{new_extension}` can not contain the path separator.")
        if new_extension.startswith(_EXTENSION_SEPARATOR):
            raise UriSyntaxError(f"The extension `{new_extension}` can not start with a `.` character.")

        name, separator, parameters = self.basename().partition(_PARAMETER_SEPARATOR)
        if len(name) == 0:
            return self
        if _EXTENSION_SEPARATOR in name:
            name = name.rpartition(_EXTENSION_SEPARATOR)[0]
        if len(parameters) > 0:
            parameters = f"{separator}{parameters}"
        new_extension = new_extension.strip()
        if len(new_extension) == 0:
            return self.with_basename(f"{name}{parameters}")
        return self.with_basename(f"{name}{_EXTENSION_SEPARATOR}{new_extension}{parameters}")

    def with_content(self: Self, content: object) -> "HierarchicalPath":
        return self._with_path(parse_path(content))

    def uri_component(self: Self) -> str:
        return self.value()

    def __str__(self: Self) -> str:
        return self.value()
