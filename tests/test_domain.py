import pytest

from nurlcomponents import Domain, OffsetOutOfBounds, UriSyntaxError, parse_domain, parse_host


@pytest.mark.parametrize("domain", ["example.com", "23.42c.two", "98.3.2", "toto.127.0.0.1", "localhost."])
def test_valid_domains(domain: str) -> None:
    assert parse_domain(domain).value() == domain


@pytest.mark.parametrize("domain", [None, "", "127.0.0.1", "[::1]", "master..plan.be", "％４１.com"])
def test_invalid_domains(domain: str | None) -> None:
    with pytest.raises(UriSyntaxError):
        parse_domain(domain)


def test_new_accepts_hosts_and_domains() -> None:
    domain = Domain.new("Example.com")
    assert Domain.new(domain) is domain
    assert Domain.new(parse_host("example.com")) == domain


def test_labels() -> None:
    domain = parse_domain("master.example.com")
    assert domain.labels() == ["com", "example", "master"]
    assert list(domain) == ["com", "example", "master"]
    assert len(domain) == 3
    assert domain.count() == 3
    assert parse_domain("localhost.").labels() == ["", "localhost"]
    assert parse_domain("92.56.8").count() == 3


def test_get() -> None:
    domain = parse_domain("master.example.com")
    assert domain.get(0) == "com"
    assert domain.get(2) == "master"
    assert domain.get(-1) == "master"
    assert domain.get(-3) == "com"
    assert domain.get(23) is None
    assert domain.get(-23) is None


def test_keys() -> None:
    domain = parse_domain("master.example.com")
    assert domain.keys() == [0, 1, 2]
    assert domain.keys("master") == [2]
    assert domain.keys("nope") == []
    assert parse_domain("www.www.example").keys("www") == [1, 2]


def test_is_absolute() -> None:
    assert parse_domain("example.com.").is_absolute()
    assert not parse_domain("example.com").is_absolute()


def test_idn() -> None:
    domain = parse_domain("例子.测试")
    assert domain.value() == "xn--fsqu00a.xn--0zwm56d"
    assert domain.to_ascii() == "xn--fsqu00a.xn--0zwm56d"
    assert domain.to_unicode() == "例子.测试"
    assert domain.labels() == ["xn--0zwm56d", "xn--fsqu00a"]


@pytest.mark.parametrize(
    "labels, expected",
    [
        (["com", "example", "www"], "www.example.com"),
        (["", "com", "example", "www"], "www.example.com."),
        (("localhost",), "localhost"),
    ],
)
def test_new_from_labels(labels, expected: str) -> None:
    assert Domain.new_from_labels(labels).value() == expected


@pytest.mark.parametrize("labels", [[""], []])
def test_new_from_labels_rejects_empty_domains(labels: list[str]) -> None:
    with pytest.raises(UriSyntaxError):
        Domain.new_from_labels(labels)


def test_new_from_labels_rejects_none() -> None:
    with pytest.raises(TypeError):
        Domain.new_from_labels([None])


@pytest.mark.parametrize(
    "domain, label, expected",
    [
        ("secure.example.com", "master", "master.secure.example.com"),
        ("secure.example.com.", "master", "master.secure.example.com."),
        ("secure.example.com", "127.0.0.1", "127.0.0.1.secure.example.com"),
        ("secure.example.com", "127.", "127.secure.example.com"),
        ("secure.example.com.", "127.", "127.secure.example.com."),
        ("secure.example.com", "127", "127.secure.example.com"),
    ],
)
def test_prepend(domain: str, label: str, expected: str) -> None:
    assert parse_domain(domain).prepend(label).value() == expected


def test_prepend_none() -> None:
    domain = parse_domain("example.com")
    assert domain.prepend(None) is domain


def test_prepend_rejects_invalid_results() -> None:
    with pytest.raises(UriSyntaxError):
        parse_domain("secure.example.com").prepend("master..")


@pytest.mark.parametrize(
    "domain, label, expected",
    [
        ("secure.example.com", "master", "secure.example.com.master"),
        ("secure.example.com", "master.", "secure.example.com.master."),
        ("toto", "127.0.0.1", "toto.127.0.0.1"),
        ("example.com", "", "example.com."),
        ("secure.example.com.", "master", "secure.example.com.master."),
        ("secure.example.com.", "master.", "secure.example.com.master."),
    ],
)
def test_append(domain: str, label: str, expected: str) -> None:
    assert parse_domain(domain).append(label).value() == expected


def test_append_none() -> None:
    domain = parse_domain("example.com")
    assert domain.append(None) is domain


def test_append_rejects_invalid_results() -> None:
    with pytest.raises(UriSyntaxError):
        parse_domain("secure.example.com").append("master..")


def test_label_lookups() -> None:
    domain = parse_domain("www.example.www.com")
    assert domain.first() == "com"
    assert domain.last() == "www"
    assert domain.index_of("www") == 1
    assert domain.last_index_of("www") == 3
    assert domain.index_of("nope") is None
    assert domain.last_index_of("nope") is None
    assert domain.contains("example")
    assert not domain.contains("org")
    assert not domain.is_empty()


def test_slice() -> None:
    domain = parse_domain("ulb.ac.be")
    assert domain.slice(-3) is domain
    assert domain.slice(0) is domain
    assert domain.slice(1).value() == "ulb.ac"
    assert domain.slice(-1).value() == "ulb"
    assert domain.slice(-3, 1).value() == "be"
    assert domain.slice(0, -1).value() == "ac.be"
    assert domain.slice(3) is None


def test_slice_out_of_bounds() -> None:
    with pytest.raises(OffsetOutOfBounds):
        parse_domain("ulb.ac.be").slice(5)


@pytest.mark.parametrize(
    "child, parent, expected",
    [
        ("foo.example.com", "example.com", True),
        ("bar.foo.example.com", "example.com", True),
        ("example.com", "example.com", False),
        ("example.com", "foo.example.com", False),
        ("foo.example.com", "bar.example.com", False),
        ("evil-example.com", "example.com", False),
        ("example.com", "com", True),
        ("foo.example.com", "not a domain", False),
        ("foo.example.com", None, False),
    ],
)
def test_is_subdomain_of(child: str, parent: str | None, expected: bool) -> None:
    assert parse_domain(child).is_subdomain_of(parent) is expected


@pytest.mark.parametrize(
    "parent, child, expected",
    [
        ("example.com", "foo.example.com", True),
        ("example.com", "bar.foo.example.com", True),
        ("example.com", "example.com", False),
        ("foo.example.com", "example.com", False),
        ("example.com", "evil.com", False),
        ("example.com", "evil-example.com", False),
    ],
)
def test_has_subdomain(parent: str, child: str, expected: bool) -> None:
    assert parse_domain(parent).has_subdomain(child) is expected


def test_subdomains_with_idn_and_root_labels() -> None:
    parent = parse_domain("bébé.com")
    child = parse_domain(f"foo.{parent.value()}.")
    assert child.is_subdomain_of(parent)
    assert parent.has_subdomain(child)
    assert not parent.is_subdomain_of(child)
    assert not child.has_subdomain(parent)


@pytest.mark.parametrize(
    "domain, other, expected",
    [
        ("foo.example.com", "bar.example.com", True),
        ("a.b.example.com", "c.b.example.com", True),
        ("example.com", "foo.example.com", False),
        ("foo.example.com", "example.com", False),
        ("foo.example.com", "foo.example.com", False),
        ("foo.example.com", "bar.example.org", False),
        ("com", "org", True),
        ("foo.example.com", "127.0.0.1", False),
    ],
)
def test_is_sibling_of(domain: str, other: str, expected: bool) -> None:
    assert parse_domain(domain).is_sibling_of(other) is expected


def test_parent_host() -> None:
    assert parse_domain("www.example.com").parent_host().value() == "example.com"
    assert parse_domain("www.example.com.").parent_host().value() == "example.com"
    assert parse_domain("com").parent_host() is None


@pytest.mark.parametrize(
    "domain, other, expected",
    [
        ("a.b.example.com", "c.example.com", "example.com"),
        ("www.example.com.", "example.com", "example.com"),
        ("example.com", "example.org", None),
        ("example.com", "[::1]", None),
    ],
)
def test_common_ancestor_with(domain: str, other: str, expected: str | None) -> None:
    ancestor = parse_domain(domain).common_ancestor_with(other)
    assert (ancestor.value() if ancestor is not None else None) == expected


@pytest.mark.parametrize(
    "domain, label, offset, expected",
    [
        ("master.example.com", "shop", 3, "master.example.com.shop"),
        ("master.example.com", "shop", -4, "shop.master.example.com"),
        ("master.example.com", "shop", 2, "shop.example.com"),
        ("master.example.com", "master", 2, "master.example.com"),
        ("secure.example.com", "127.0.0.1", 0, "secure.example.127.0.0.1"),
        ("master.example.com.", "shop", -2, "master.shop.com."),
        ("master.example.com", "shop", -1, "shop.example.com"),
        ("foo", "bar", -1, "bar"),
    ],
)
def test_with_label(domain: str, label: str, offset: int, expected: str) -> None:
    assert parse_domain(domain).with_label(offset, label).value() == expected


def test_with_label_returns_the_same_domain_when_nothing_changes() -> None:
    domain = parse_domain("master.example.com")
    assert domain.with_label(2, "master") is domain


def test_with_label_failures() -> None:
    domain = parse_domain("master.example.com")
    with pytest.raises(UriSyntaxError):
        domain.with_label(2, "[::1]")
    with pytest.raises(OffsetOutOfBounds):
        domain.with_label(23, "shop")
    with pytest.raises(OffsetOutOfBounds):
        domain.with_label(-5, "shop")


def test_offset_out_of_bounds_is_an_index_error() -> None:
    with pytest.raises(IndexError):
        parse_domain("example.com").with_label(23, "shop")


@pytest.mark.parametrize(
    "domain, offsets, expected",
    [
        ("master.example.com", (-1,), "example.com"),
        ("master.example.com", (0,), "master.example"),
        ("master.example.com", (0, 2), "example"),
        ("master.example.com", (1, -2), "master.com"),
        ("master.example.com", (), "master.example.com"),
    ],
)
def test_without_label(domain: str, offsets: tuple[int, ...], expected: str) -> None:
    assert parse_domain(domain).without_label(*offsets).value() == expected


def test_without_label_failures() -> None:
    domain = parse_domain("master.example.com")
    with pytest.raises(OffsetOutOfBounds):
        domain.without_label(3)
    with pytest.raises(OffsetOutOfBounds):
        domain.without_label(-4)
    with pytest.raises(UriSyntaxError):
        domain.without_label(0, 1, 2)


def test_root_label() -> None:
    assert parse_domain("example.com").with_root_label().value() == "example.com."
    assert parse_domain("example.com.").without_root_label().value() == "example.com"
    domain = parse_domain("example.com")
    assert domain.without_root_label() is domain
    absolute = parse_domain("example.com.")
    assert absolute.with_root_label() is absolute


def test_with_content() -> None:
    domain = parse_domain("example.com")
    assert domain.with_content("example.com") is domain
    assert domain.with_content("example.org").value() == "example.org"
    with pytest.raises(UriSyntaxError):
        domain.with_content("127.0.0.1")


def test_str() -> None:
    domain = parse_domain("www.example.com")
    assert str(domain) == "www.example.com"
    assert domain.uri_component() == "www.example.com"
