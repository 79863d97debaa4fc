"""nurlcomponents.domain
Domain names seen as a sequence of labels, stored right to left so that index 0 is the top-level domain.
"""

import dataclasses

from typing import Iterable, Iterator, Self

from .codec import filter_component
from .errors import OffsetOutOfBounds, UriSyntaxError
from .host import Host, parse_host

_SEPARATOR: str = "."


def parse_domain(domain: object) -> "Domain":
    """Parses a domain name. Raises UriSyntaxError for anything that is not one (IP addresses, empty or absent hosts...)."""
    host: Host = domain if isinstance(domain, Host) else parse_host(domain)
    if host.raw_host is None:
        raise UriSyntaxError("A domain name can not be None.")
    if not host.is_domain:
        raise UriSyntaxError(f"`{host.raw_host}` is an invalid domain name.")
    return Domain(host)


def _try_parse_domain(domain: object) -> "Domain | None":
    if isinstance(domain, Domain):
        return domain
    try:
        return parse_domain(domain)
    except UriSyntaxError:
        return None


@dataclasses.dataclass(frozen=True)
class Domain:
    """A class to hold a domain name. You should not instantiate this directly. Instead use parse_domain or Domain.new."""

    host: Host

    @classmethod
    def new(cls, domain: object) -> "Domain":
        if isinstance(domain, Domain):
            return domain
        return parse_domain(domain)

    @classmethod
    def new_from_labels(cls, labels: Iterable[object]) -> "Domain":
        """Builds a domain from labels given right to left.
        e.g. Domain.new_from_labels(["com", "example", "www"]).value() == "www.example.com"
        """
        host_labels: list[str] = []
        for label in labels:
            filtered: str | None = filter_component(label)
            if filtered is None:
                raise TypeError("A label can not be None.")
            host_labels.append(filtered)
        return parse_domain(_SEPARATOR.join(reversed(host_labels)))

    @property
    def raw_host(self: Self) -> str:
        # parse_domain never builds a Domain around an absent host.
        return self.host.raw_host or ""

    def value(self: Self) -> str | None:
        return self.host.value()

    def to_ascii(self: Self) -> str | None:
        return self.host.to_ascii()

    def to_unicode(self: Self) -> str | None:
        return self.host.to_unicode()

    def labels(self: Self) -> list[str]:
        return list(reversed(self.raw_host.split(_SEPARATOR)))

    def __iter__(self: Self) -> Iterator[str]:
        return iter(self.labels())

    def __len__(self: Self) -> int:
        return self.raw_host.count(_SEPARATOR) + 1

    def count(self: Self) -> int:
        return len(self)

    def get(self: Self, offset: int) -> str | None:
        """Returns the label at offset, counting from the end when offset is negative."""
        labels: list[str] = self.labels()
        if offset < 0:
            offset += len(labels)
        if 0 <= offset < len(labels):
            return labels[offset]
        return None

    def keys(self: Self, label: str | None = None) -> list[int]:
        labels: list[str] = self.labels()
        if label is None:
            return list(range(len(labels)))
        return [offset for offset, value in enumerate(labels) if value == label]

    def is_absolute(self: Self) -> bool:
        """Tells whether the domain is fully qualified, i.e. ends with the root label's dot."""
        labels: list[str] = self.labels()
        return len(labels) > 1 and labels[0] == ""

    def first(self: Self) -> str | None:
        return self.get(0)

    def last(self: Self) -> str | None:
        return self.get(-1)

    def index_of(self: Self, label: str) -> int | None:
        offsets: list[int] = self.keys(label)
        return offsets[0] if len(offsets) > 0 else None

    def last_index_of(self: Self, label: str) -> int | None:
        offsets: list[int] = self.keys(label)
        return offsets[-1] if len(offsets) > 0 else None

    def contains(self: Self, label: str) -> bool:
        return len(self.keys(label)) > 0

    def is_empty(self: Self) -> bool:
        return len(self.raw_host) == 0

    def is_subdomain_of(self: Self, parent: object) -> bool:
        """Tells whether the domain sits below parent, e.g. "www.example.com" below "example.com".
        The root label is ignored and anything that is not a domain is never a parent.
        """
        parent_domain: Domain | None = _try_parse_domain(parent)
        if parent_domain is None or len(self) <= len(parent_domain):
            return False
        child_name: str = self.without_root_label().raw_host
        return child_name.endswith(f"{_SEPARATOR}{parent_domain.without_root_label().raw_host}")

    def has_subdomain(self: Self, child: object) -> bool:
        child_domain: Domain | None = _try_parse_domain(child)
        return child_domain is not None and child_domain.is_subdomain_of(self)

    def is_sibling_of(self: Self, other: object) -> bool:
        """Tells whether both domains are different and share the same parent. Two top-level domains are siblings."""
        other_domain: Domain | None = _try_parse_domain(other)
        if other_domain is None or other_domain == self:
            return False
        return self.parent_host() == other_domain.parent_host()

    def parent_host(self: Self) -> "Domain | None":
        """The domain without its leftmost label, or None for a top-level domain."""
        return self.without_root_label().slice(0, -1)

    def common_ancestor_with(self: Self, other: object) -> "Domain | None":
        """The labels both domains end with, or None when they share none.
        e.g. parse_domain("a.b.example.com").common_ancestor_with("c.example.com").value() == "example.com"
        """
        other_domain: Domain | None = _try_parse_domain(other)
        if other_domain is None:
            return None
        other_domain = other_domain.without_root_label()
        labels: list[str] = []
        for offset, label in enumerate(self.without_root_label()):
            if label != other_domain.get(offset):
                break
            labels.append(label)
        if len(labels) == 0:
            return None
        return Domain.new_from_labels(labels)

    def slice(self: Self, offset: int, length: int | None = None) -> "Domain | None":
        """Keeps the labels from offset on, at most length of them, counting from the end when length is negative.
        Returns None when no label is left.
        """
        labels: list[str] = self.labels()
        nb_labels: int = len(labels)
        if offset < -nb_labels or offset > nb_labels:
            raise OffsetOutOfBounds(f"No label can be found at : `{offset}`.")
        if offset < 0:
            offset += nb_labels
        if length is None:
            sliced: list[str] = labels[offset:]
        elif length < 0:
            sliced = labels[offset:length]
        else:
            sliced = labels[offset : offset + length]
        if sliced == labels:
            return self
        if len(sliced) == 0:
            return None
        return Domain.new_from_labels(sliced)

    def prepend(self: Self, label: object) -> "Domain":
        """Adds label to the left of the domain. A label ending with the separator is used as is."""
        filtered: str | None = filter_component(label)
        if filtered is None:
            return self
        if filtered.endswith(_SEPARATOR):
            return parse_domain(f"{filtered}{self.raw_host}")
        return parse_domain(f"{filtered}{_SEPARATOR}{self.raw_host}")

    def append(self: Self, label: object) -> "Domain":
        """Adds label to the right of the domain. An absolute domain stays absolute."""
        filtered: str | None = filter_component(label)
        if filtered is None:
            return self
        if not self.is_absolute():
            return parse_domain(f"{self.raw_host}{_SEPARATOR}{filtered}")
        if filtered.endswith(_SEPARATOR):
            return parse_domain(f"{self.raw_host}{filtered}")
        return parse_domain(f"{self.raw_host}{filtered}{_SEPARATOR}")

    def with_label(self: Self, offset: int, label: object) -> "Domain":
        """Replaces the label at offset.
        An offset one step past either end adds the label instead: len(self) appends it and -len(self) - 1 prepends it.
        """
        nb_labels: int = len(self)
        if offset < -nb_labels - 1 or offset > nb_labels:
            raise OffsetOutOfBounds(f"No label can be added with the submitted offset : `{offset}`.")
        if offset < 0:
            offset += nb_labels
        if offset == nb_labels:
            return self.append(label)
        if offset == -1:
            return self.prepend(label)

        new_label: str | None = parse_host(label).raw_host
        labels: list[str] = self.labels()
        if new_label == labels[offset]:
            return self
        labels[offset] = new_label if new_label is not None else ""
        return parse_domain(_SEPARATOR.join(reversed(labels)))

    def without_label(self: Self, *offsets: int) -> "Domain":
        """Removes the labels at offsets, counting from the end when an offset is negative."""
        if len(offsets) == 0:
            return self
        nb_labels: int = len(self)
        deleted: set[int] = set()
        for offset in offsets:
            if offset < -nb_labels or offset > nb_labels - 1:
                raise OffsetOutOfBounds(f"No label can be removed with the submitted offset : `{offset}`.")
            deleted.add(offset + nb_labels if offset < 0 else offset)
        return Domain.new_from_labels(label for offset, label in enumerate(self.labels()) if offset not in deleted)

    def with_root_label(self: Self) -> "Domain":
        if self.is_absolute():
            return self
        return self.append("")

    def without_root_label(self: Self) -> "Domain":
        if not self.is_absolute():
            return self
        return Domain.new_from_labels(self.labels()[1:])

    def with_content(self: Self, content: object) -> "Domain":
        domain: Domain = parse_domain(content)
        if domain == self:
            return self
        return domain

    def uri_component(self: Self) -> str:
        return str(self)

    def __str__(self: Self) -> str:
        return self.raw_host
