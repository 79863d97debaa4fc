"""nurlcomponents.query
The URI query as an ordered multi-map of decoded (key, value) pairs.
"""

import dataclasses
import re

from typing import Any, Iterable, Iterator, Mapping, Self

from .codec import Encoding, filter_component
from .query_string import (
    DEFAULT_SEPARATOR,
    Pair,
    build_pairs,
    extract_parameters,
    filter_pair_value,
    filter_separator,
    pairs_from_parameters,
    parse_pairs,
)

_NUMERIC_INDEX_PAT: re.Pattern[str] = re.compile(r"\[\d+\]")


def parse_query(query: object = None, separator: str = DEFAULT_SEPARATOR, encoding: Encoding = Encoding.RFC3986) -> "Query":
    """Parses a query string. None stands for an absent query and "" for an empty one.
    e.g. parse_query("a=1&b=2&a=3").get_all("a") == ["1", "3"]
    """
    return Query(pairs=tuple(parse_pairs(query, separator, encoding)), separator=separator)


def _filter_key(key: object) -> str:
    filtered: str | None = filter_component(key)
    if filtered is None:
        raise TypeError("A pair key can not be None.")
    return filtered


def _add_pair(pairs: Iterable[Pair], pair: Pair) -> list[Pair]:
    """Puts pair in place of the first pair sharing its key and drops the others, or appends it if the key is new."""
    result: list[Pair] = []
    found: bool = False
    for current in pairs:
        if current[0] != pair[0]:
            result.append(current)
        elif not found:
            result.append(pair)
            found = True
    if not found:
        result.append(pair)
    return result


def _is_empty_pair(pair: Pair) -> bool:
    return pair[0] == "" or pair[1] is None or pair[1] == ""


@dataclasses.dataclass(frozen=True)
class Query:
    """A class to hold a URI query. You should not instantiate this directly. Instead use parse_query or one of the new* constructors.
    Pairs are kept decoded, in order, duplicates included; they are only encoded when the query is serialized.
    """

    pairs: tuple[Pair, ...] = ()
    separator: str = DEFAULT_SEPARATOR

    def __post_init__(self: Self) -> None:
        filter_separator(self.separator)

    @classmethod
    def new(cls, query: object = None, separator: str = DEFAULT_SEPARATOR, encoding: Encoding = Encoding.RFC3986) -> "Query":
        return parse_query(query, separator, encoding)

    @classmethod
    def new_from_pairs(cls, pairs: Iterable[tuple[object, object]], separator: str = DEFAULT_SEPARATOR) -> "Query":
        """Builds a query from (key, value) pairs. Unlike parse_query, pairs with an empty key are kept.
        A list value gives one pair per item.
        """
        result: list[Pair] = []
        for key, value in pairs:
            filtered_key: str = _filter_key(key)
            result.extend((filtered_key, filtered_value) for filtered_value in filter_pair_value(value))
        return cls(pairs=tuple(result), separator=separator)

    @classmethod
    def new_from_parameters(cls, parameters: Mapping[Any, Any], separator: str = DEFAULT_SEPARATOR) -> "Query":
        """Builds a query from nested parameters, e.g. {"a": {"b": "c"}} gives "a%5Bb%5D=c"."""
        return cls(pairs=tuple(pairs_from_parameters(parameters)), separator=separator)

    def _with_pairs(self: Self, pairs: Iterable[Pair]) -> Self:
        new_pairs: tuple[Pair, ...] = tuple(pairs)
        if new_pairs == self.pairs:
            return self
        return dataclasses.replace(self, pairs=new_pairs)

    def value(self: Self, encoding: Encoding = Encoding.RFC3986) -> str | None:
        return build_pairs(self.pairs, self.separator, encoding)

    def to_rfc3986(self: Self) -> str | None:
        return self.value(Encoding.RFC3986)

    def to_rfc1738(self: Self) -> str | None:
        return self.value(Encoding.RFC1738)

    def decoded(self: Self) -> str | None:
        return self.value(Encoding.NONE)

    def uri_component(self: Self) -> str:
        query: str | None = self.value()
        return f"?{query}" if query is not None else ""

    def __str__(self: Self) -> str:
        query: str | None = self.value()
        return query if query is not None else ""

    def __len__(self: Self) -> int:
        return len(self.pairs)

    def __iter__(self: Self) -> Iterator[Pair]:
        return iter(self.pairs)

    def count(self: Self) -> int:
        return len(self.pairs)

    def get(self: Self, key: str) -> str | None:
        """The value of the first pair with key, or None."""
        for current_key, value in self.pairs:
            if current_key == key:
                return value
        return None

    def get_all(self: Self, key: str) -> list[str | None]:
        return [value for current_key, value in self.pairs if current_key == key]

    def has(self: Self, *keys: str) -> bool:
        present: set[str] = {key for key, _ in self.pairs}
        return all(key in present for key in keys)

    def has_pair(self: Self, key: str, value: str | None) -> bool:
        return (key, value) in self.pairs

    def parameters(self: Self) -> dict[str | int, Any]:
        return extract_parameters(self.pairs)

    def parameter(self: Self, name: str) -> Any:
        return self.parameters().get(name)

    def has_parameter(self: Self, *names: str) -> bool:
        parameters: dict[str | int, Any] = self.parameters()
        return all(name in parameters for name in names)

    def with_content(self: Self, content: object) -> Self:
        return self._with_pairs(parse_query(content, self.separator).pairs)

    def with_separator(self: Self, separator: str) -> Self:
        if separator == self.separator:
            return self
        return dataclasses.replace(self, separator=filter_separator(separator))

    def with_pair(self: Self, key: object, value: object) -> Self:
        """Sets the value of key: the first pair with that key is replaced and the others are removed."""
        return self._with_pairs(_add_pair(self.pairs, (_filter_key(key), filter_component(value))))

    def append_to(self: Self, key: object, value: object) -> Self:
        """Adds pairs for key, leaving the existing ones in place."""
        filtered_key: str = _filter_key(key)
        return self._with_pairs(self.pairs + tuple((filtered_key, v) for v in filter_pair_value(value)))

    def append(self: Self, query: object) -> Self:
        """Adds the pairs of another query after these ones."""
        other: Query = query if isinstance(query, Query) else parse_query(query, self.separator)
        if len(other.pairs) == 0:
            return self
        return self._with_pairs(pair for pair in self.pairs + other.pairs if pair != ("", None))

    def merge(self: Self, query: object) -> Self:
        """Sets every key of another query the way with_pair does."""
        other: Query = query if isinstance(query, Query) else parse_query(query, self.separator)
        pairs: list[Pair] = list(self.pairs)
        for pair in other.pairs:
            pairs = _add_pair(pairs, pair)
        return self._with_pairs(pair for pair in pairs if pair[0] != "" or pair[1] not in (None, ""))

    def sort(self: Self) -> Self:
        """Stable sort of the pairs by key."""
        return self._with_pairs(sorted(self.pairs, key=lambda pair: pair[0]))

    def without_pairs(self: Self, *keys: str) -> Self:
        return self._with_pairs(pair for pair in self.pairs if pair[0] not in keys)

    def without_pair_by_value(self: Self, *values: str | None) -> Self:
        return self._with_pairs(pair for pair in self.pairs if pair[1] not in values)

    def without_pair_by_key_value(self: Self, key: str, value: str | None) -> Self:
        return self._with_pairs(pair for pair in self.pairs if pair != (key, value))

    def without_duplicates(self: Self) -> Self:
        """Removes repeated (key, value) pairs, keeping the first one."""
        return self._with_pairs(dict.fromkeys(self.pairs))

    def without_empty_pairs(self: Self) -> Self:
        """Removes the pairs with an empty key or with an empty or missing value."""
        return self._with_pairs(pair for pair in self.pairs if not _is_empty_pair(pair))

    def without_numeric_indices(self: Self) -> Self:
        """Removes the numeric indices of bracketed keys, e.g. "a[0]" becomes "a[]" and "a[b]" stays as is."""
        return self._with_pairs((_NUMERIC_INDEX_PAT.sub("[]", key), value) for key, value in self.pairs)

    def without_parameters(self: Self, *names: str) -> Self:
        """Removes the pairs holding the given parameters, bracketed sub-keys included."""
        if len(names) == 0:
            return self
        pattern: re.Pattern[str] = re.compile(rf"\A(?:{'|'.join(map(re.escape, names))})(?:\[.*\].*)?\Z", re.DOTALL)
        return self._with_pairs(pair for pair in self.pairs if pattern.match(pair[0]) is None)
