"""nurlcomponents.datapath
The path of a data: URI (RFC 2397).
"""

import base64
import binascii
import dataclasses
import re

from typing import Self

from urllib.parse import quote, unquote_to_bytes

from .abnf import PATH_CHARS
from .codec import encode_component, filter_component
from .errors import UriSyntaxError
from .path import Path, parse_path

DEFAULT_MIMETYPE: str = "text/plain"
DEFAULT_PARAMETER: str = "charset=us-ascii"
BINARY_PARAMETER: str = "base64"

# mediatype = [ type "/" subtype ] *( ";" parameter )
_MIMETYPE_PAT: re.Pattern[str] = re.compile(r"\A\w+/[-.\w]+(?:\+[-.\w]+)?\Z")
_MIMETYPE_WITHOUT_PARAMETERS_PAT: re.Pattern[str] = re.compile(r"\A\w+/[-.\w]+(?:\+[-.\w]+)?;,\Z")
_BINARY_FLAG_PAT: re.Pattern[str] = re.compile(rf"(?:;|\A){BINARY_PARAMETER}\Z")


def _filter_path(path: str) -> str:
    if path in ("", ","):
        return f"{DEFAULT_MIMETYPE};{DEFAULT_PARAMETER},"
    if _MIMETYPE_WITHOUT_PARAMETERS_PAT.match(path) is not None:
        return f"{path[:-1]}{DEFAULT_PARAMETER},"
    if not path.isascii() or "," not in path:
        raise UriSyntaxError(f"The path `{path}` is invalid according to RFC 2397.")
    return path


def _filter_mimetype(mimetype: str) -> str:
    if len(mimetype) == 0:
        return DEFAULT_MIMETYPE
    if _MIMETYPE_PAT.match(mimetype) is None:
        raise UriSyntaxError(f"Invalid mimetype, `{mimetype}`.")
    return mimetype


def _is_valid_parameter(parameter: str) -> bool:
    properties: list[str] = parameter.split("=")
    return len(properties) == 2 and properties[0].lower() != BINARY_PARAMETER


def _filter_parameters(parameters: str) -> tuple[tuple[str, ...], bool]:
    """Returns the media type parameters and whether the data is base64 encoded."""
    if len(parameters) == 0:
        return (DEFAULT_PARAMETER,), False

    m: re.Match[str] | None = _BINARY_FLAG_PAT.search(parameters)
    is_binary_data: bool = m is not None
    if m is not None:
        parameters = parameters[: m.start()]

    params: tuple[str, ...] = tuple(param for param in parameters.split(";") if len(param) > 0)
    if not all(_is_valid_parameter(param) for param in params):
        raise UriSyntaxError(f"Invalid mediatype parameters, `{parameters}`.")
    return params, is_binary_data


def _validate_document(document: str) -> None:
    try:
        data: bytes = base64.b64decode(document, validate=True)
    except binascii.Error as e:
        raise UriSyntaxError(f"Invalid document, `{document}`.") from e
    if base64.b64encode(data).decode("ascii") != document:
        raise UriSyntaxError(f"Invalid document, `{document}`.")


def _format_path(mimetype: str, parameters: str, is_binary_data: bool, data: str) -> str:
    if len(parameters) > 0:
        parameters = f";{parameters}"
    if is_binary_data:
        parameters += f";{BINARY_PARAMETER}"
    return encode_component(f"{mimetype}{parameters},{data}", PATH_CHARS)


def parse_data_path(path: object = "") -> "DataPath":
    """Parses the <mimetype>[;parameter]*[;base64],<data> path of a data: URI.
    The mimetype and parameters default to text/plain;charset=us-ascii.
    e.g. parse_data_path("text/plain;,Bonjour").value() == "text/plain;charset=us-ascii,Bonjour"
    """
    raw_path: str | None = filter_component(path)
    if raw_path is None:
        raise TypeError("The path can not be None.")

    data_path: Path = parse_path(_filter_path(raw_path))
    media_type, _, document = data_path.value().partition(",")
    mimetype, _, parameters = media_type.partition(";")
    params, is_binary_data = _filter_parameters(parameters)
    if is_binary_data:
        _validate_document(document)

    return DataPath(
        path=data_path,
        mimetype=_filter_mimetype(mimetype),
        raw_parameters=params,
        is_binary=is_binary_data,
        document=document,
    )


@dataclasses.dataclass(frozen=True)
class DataPath:
    """A class to hold a data: URI path. You should not instantiate this directly. Instead use parse_data_path or DataPath.new."""

    path: Path
    mimetype: str
    raw_parameters: tuple[str, ...]
    is_binary: bool
    document: str

    @classmethod
    def new(cls, path: object = "") -> "DataPath":
        return parse_data_path(path)

    def value(self: Self) -> str:
        return self.path.value()

    def decoded(self: Self) -> str:
        return self.path.decoded()

    def data(self: Self) -> str:
        return self.document

    def mime_type(self: Self) -> str:
        return self.mimetype

    def parameters(self: Self) -> str:
        return ";".join(self.raw_parameters)

    def media_type(self: Self) -> str:
        return f"{self.mimetype};{self.parameters()}"

    def is_binary_data(self: Self) -> bool:
        return self.is_binary

    def is_absolute(self: Self) -> bool:
        return self.path.is_absolute()

    def has_trailing_slash(self: Self) -> bool:
        return self.path.has_trailing_slash()

    def to_binary(self: Self) -> "DataPath":
        """Returns the same data, base64 encoded."""
        if self.is_binary:
            return self
        data: str = base64.b64encode(unquote_to_bytes(self.document)).decode("ascii")
        return parse_data_path(_format_path(self.mimetype, self.parameters(), True, data))

    def to_ascii(self: Self) -> "DataPath":
        """Returns the same data, percent-encoded."""
        if not self.is_binary:
            return self
        data: str = quote(base64.b64decode(self.document, validate=True), safe="")
        return parse_data_path(_format_path(self.mimetype, self.parameters(), False, data))

    def with_parameters(self: Self, parameters: object) -> "DataPath":
        """Replaces the media type parameters. The base64 flag is not a parameter and can not be changed this way."""
        new_parameters: str | None = filter_component(parameters)
        if new_parameters is None:
            raise TypeError("The parameters can not be None.")
        if new_parameters == self.parameters():
            return self
        return parse_data_path(_format_path(self.mimetype, new_parameters, self.is_binary, self.document))

    def with_trailing_slash(self: Self) -> "DataPath":
        if self.has_trailing_slash():
            return self
        return parse_data_path(self.path.with_trailing_slash())

    def without_trailing_slash(self: Self) -> "DataPath":
        if not self.has_trailing_slash():
            return self
        return parse_data_path(self.path.without_trailing_slash())

    def with_content(self: Self, content: object) -> "DataPath":
        data_path: DataPath = parse_data_path(content)
        if data_path == self:
            return self
        return data_path

    def uri_component(self: Self) -> str:
        return self.value()

    def __str__(self: Self) -> str:
        return self.value()
