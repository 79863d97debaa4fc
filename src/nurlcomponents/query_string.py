"""nurlcomponents.query_string
Conversion between query strings and ordered (key, value) pairs, and between pairs and the nested
parameters PHP's parse_str and http_build_query work with.
"""

import logging
import re

from typing import Any, Callable, Iterable, Iterator, Mapping

from urllib.parse import unquote

from .abnf import QUERY_CHARS
from .codec import Encoding, encode_component, filter_component, to_rfc1738
from .errors import UriSyntaxError

logger = logging.getLogger(__name__)

DEFAULT_SEPARATOR: str = "&"

Pair = tuple[str, str | None]

# A key may not hold "=" unescaped, or the pair would split differently once parsed again.
_KEY_CHARS: str = QUERY_CHARS.replace("=", "")
_VALUE_CHARS: str = QUERY_CHARS

_NUMERIC_KEY_PAT: re.Pattern[str] = re.compile(r"\A(?:0|-?[1-9][0-9]*)\Z")


def filter_separator(separator: str) -> str:
    if len(separator) != 1 or separator == "=":
        raise UriSyntaxError(f"The separator must be a single character different from `=`; received `{separator}`.")
    return separator


def filter_encoding(encoding: Encoding) -> Encoding:
    if not isinstance(encoding, Encoding):
        raise UriSyntaxError(f"Unknown query encoding: `{encoding}`.")
    return encoding


def _decode(string: str, encoding: Encoding) -> str:
    if encoding is Encoding.RFC1738:
        string = string.replace("+", " ")
    return unquote(string, errors="surrogateescape")


def parse_pairs(query: object, separator: str = DEFAULT_SEPARATOR, encoding: Encoding = Encoding.RFC3986) -> list[Pair]:
    """Splits a query string into decoded (key, value) pairs, in order and keeping duplicates.
    A value is None when its pair has no "=". A pair whose decoded key is empty is dropped,
    except for the empty query string, which gives a single ("", None) pair.
    e.g. parse_pairs("a=1&b&=c") == [("a", "1"), ("b", None)]
    """
    separator = filter_separator(separator)
    encoding = filter_encoding(encoding)
    string: str | None = filter_component(query)
    if string is None:
        return []
    if len(string) == 0:
        return [("", None)]

    pairs: list[Pair] = []
    for token in string.split(separator):
        raw_key, equals, raw_value = token.partition("=")
        key: str = _decode(raw_key, encoding)
        if len(key) == 0:
            continue
        pairs.append((key, _decode(raw_value, encoding) if len(equals) > 0 else None))
    logger.debug("parsed %d pair(s) out of query %r", len(pairs), string)
    return pairs


def _encoder(separator: str, encoding: Encoding, chars: str) -> Callable[[str], str]:
    allowed: str = "".join(c for c in chars if c not in separator)
    if encoding is Encoding.NONE:
        return lambda string: string
    if encoding is Encoding.RFC3987:
        return lambda string: encode_component(string, allowed, keep_encoded=False, keep_unicode=True)
    if encoding is Encoding.RFC1738:
        return lambda string: to_rfc1738(encode_component(string, allowed, keep_encoded=False)).replace("%20", "+")
    return lambda string: encode_component(string, allowed, keep_encoded=False)


def build_pairs(pairs: Iterable[Pair], separator: str = DEFAULT_SEPARATOR, encoding: Encoding = Encoding.RFC3986) -> str | None:
    """Serializes (key, value) pairs into a query string, or None if there are no pairs.
    e.g. build_pairs([("q", "va lue"), ("flag", None)]) == "q=va%20lue&flag"
    """
    encoding = filter_encoding(encoding)
    separator = filter_separator(separator)
    encode_key = _encoder(separator, encoding, _KEY_CHARS)
    encode_value = _encoder(separator, encoding, _VALUE_CHARS)

    tokens: list[str] = []
    for key, value in pairs:
        token: str = encode_key(key)
        if value is not None:
            token += f"={encode_value(value)}"
        tokens.append(token)
    if len(tokens) == 0:
        return None
    return separator.join(tokens)


def filter_pair_value(value: object) -> list[str | None]:
    """Normalizes the value of a pair built by hand. A flat list or tuple stands for as many pairs as it holds values."""
    if isinstance(value, (list, tuple)):
        values: list[str | None] = []
        for item in value:
            if isinstance(item, (list, tuple, dict)):
                raise UriSyntaxError("A pair value must be None, a scalar or a flat list of scalars.")
            values.append(filter_component(item))
        return values
    if isinstance(value, dict):
        raise UriSyntaxError("A pair value must be None, a scalar or a flat list of scalars.")
    return [filter_component(value)]


def _php_key(index: str) -> str | int:
    return int(index) if _NUMERIC_KEY_PAT.match(index) is not None else index


def _next_index(data: dict[str | int, Any]) -> int:
    indices: list[int] = [key for key in data if isinstance(key, int)]
    return max(indices) + 1 if len(indices) > 0 else 0


def _extract_variable(name: str, value: str, data: dict[str | int, Any]) -> None:
    """Stores value under name in data the way PHP's parse_str does, without mangling the names.
    - empty names are skipped
    - a name without "[", or without a "]" after its first "[", is used as is
    - "name[index]..." recurses into data["name"], and "name[]" appends to it
    """
    if len(name) == 0:
        return

    left: int = name.find("[")
    if left == -1:
        data[_php_key(name)] = value
        return

    right: int = name.find("]", left)
    if right == -1:
        data[_php_key(name)] = value
        return

    key: str | int = _php_key(name[:left])
    if not isinstance(data.get(key), dict):
        data[key] = {}

    index: str = name[left + 1 : right]
    if len(index) == 0:
        data[key][_next_index(data[key])] = value
        return

    remaining: str = name[right + 1 :]
    if not remaining.startswith("[") or remaining.find("]", 1) == -1:
        remaining = ""
    _extract_variable(index + remaining, value, data[key])


def extract_parameters(pairs: Iterable[Pair]) -> dict[str | int, Any]:
    """Decomposes bracketed keys into nested dicts.
    e.g. extract_parameters([("foo[]", "bar"), ("foo[]", "baz")]) == {"foo": {0: "bar", 1: "baz"}}
    """
    data: dict[str | int, Any] = {}
    for key, value in pairs:
        _extract_variable(key.strip(), value if value is not None else "", data)
    return data


def _flatten(parameters: Mapping[Any, Any], prefix: str | None) -> Iterator[Pair]:
    for name, value in parameters.items():
        key: str = str(name) if prefix is None else f"{prefix}[{name}]"
        if isinstance(value, Mapping):
            yield from _flatten(value, key)
        elif isinstance(value, (list, tuple)):
            yield from _flatten(dict(enumerate(value)), key)
        elif value is not None:
            yield (key, filter_component(value))


def pairs_from_parameters(parameters: Mapping[Any, Any]) -> list[Pair]:
    """The reverse of extract_parameters, like PHP's http_build_query: nested keys get bracketed and None values are skipped.
    e.g. pairs_from_parameters({"a": {"b": 1}, "c": [True]}) == [("a[b]", "1"), ("c[0]", "true")]
    """
    if not isinstance(parameters, Mapping):
        raise TypeError(f"Expected parameters to be a mapping; received {type(parameters).__name__}.")
    return list(_flatten(parameters, None))
