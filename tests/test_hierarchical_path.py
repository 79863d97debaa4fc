import pytest

from nurlcomponents import HierarchicalPath, OffsetOutOfBounds, UriSyntaxError, parse_hierarchical_path, parse_path


def test_segments() -> None:
    path = parse_hierarchical_path("/bar/3/troll/3")
    assert path.segments() == ["bar", "3", "troll", "3"]
    assert list(path) == ["bar", "3", "troll", "3"]
    assert path.keys() == [0, 1, 2, 3]
    assert path.keys("3") == [1, 3]
    assert path.keys("foo") == []
    assert path.get(0) == "bar"
    assert path.get(-2) == "troll"
    assert path.get(23) is None
    assert HierarchicalPath.new().segments() == [""]
    assert HierarchicalPath.new("/").segments() == [""]


@pytest.mark.parametrize(
    "path, count",
    [("/toto/le/heros/masson", 4), ("toto/le/heros/masson", 4), ("/toto/le/heros/masson/", 5)],
)
def test_count(path: str, count: int) -> None:
    assert len(parse_hierarchical_path(path)) == count
    assert parse_hierarchical_path(path).count() == count


def test_new_accepts_a_path() -> None:
    path = parse_path("/a/b")
    assert HierarchicalPath.new(path).path is path
    assert HierarchicalPath.new("/a/b").value() == "/a/b"


@pytest.mark.parametrize(
    "segments, expected",
    [
        (["www", "example", "com"], "www/example/com"),
        (["foo/bar/baz", ""], "foo/bar/baz/"),
        (["all", "i%3fs", "good"], "all/i%3Fs/good"),
        (["", "toto", "yeah", ""], "toto/yeah/"),
        (["", "", "toto", "yeah", ""], "toto/yeah/"),
    ],
)
def test_new_from_relative(segments: list[str], expected: str) -> None:
    assert HierarchicalPath.new_from_relative(segments).value() == expected


@pytest.mark.parametrize(
    "segments, expected",
    [
        (["www", "example", "com"], "/www/example/com"),
        (iter(["www", "example", "com"]), "/www/example/com"),
        (HierarchicalPath.new("/foo/bar/baz"), "/foo/bar/baz"),
        (["foo/bar", "baz"], "/foo/bar/baz"),
        (["all", "i%23s", "good"], "/all/i%23s/good"),
        (["", "toto", "yeah", ""], "/toto/yeah/"),
        (["", "", "toto", "yeah", ""], "//toto/yeah/"),
    ],
)
def test_new_from_absolute(segments, expected: str) -> None:
    assert HierarchicalPath.new_from_absolute(segments).value() == expected


@pytest.mark.parametrize(
    "path, segment, expected",
    [
        ("/test/query.php", "/master", "/master/test/query.php"),
        ("/test/query.php", "/master/", "/master/test/query.php"),
        ("/test/query.php", "", "/test/query.php"),
        ("/test/query.php", "/", "/test/query.php"),
        ("test", "/", "/test"),
        ("/", "test", "test/"),
    ],
)
def test_prepend(path: str, segment: str, expected: str) -> None:
    assert parse_hierarchical_path(path).prepend(segment).value() == expected


@pytest.mark.parametrize(
    "path, segment, expected",
    [
        ("/test/", "/master/", "/test/master/"),
        ("/test/", "/master", "/test/master"),
        ("/test", "master", "/test/master"),
        ("test", "master", "test/master"),
        ("test", "/master", "test/master"),
        ("test", "master/", "test/master/"),
        ("test", "/", "test/"),
        ("/", "test", "/test"),
    ],
)
def test_append(path: str, segment: str, expected: str) -> None:
    assert parse_hierarchical_path(path).append(segment).value() == expected


def test_append_and_prepend_reject_none() -> None:
    path = parse_hierarchical_path("/test")
    with pytest.raises(TypeError):
        path.append(None)
    with pytest.raises(TypeError):
        path.prepend(None)


@pytest.mark.parametrize(
    "path, segment, offset, expected",
    [
        ("/path/to/the/sky", "shop", 0, "/shop/to/the/sky"),
        ("", "shoki", 0, "shoki"),
        ("", "shoki/", 0, "shoki/"),
        ("", "/shoki/", 0, "/shoki/"),
        ("/path/to/paradise", "path", -1, "/path/to/path"),
        ("/path/to/paradise", "path", -4, "path/path/to/paradise"),
        ("/foo", "bar", -1, "/bar"),
        ("foo", "bar", -1, "bar"),
        ("foo/bar", "baz", 2, "foo/bar/baz"),
    ],
)
def test_with_segment(path: str, segment: str, offset: int, expected: str) -> None:
    assert parse_hierarchical_path(path).with_segment(offset, segment).value() == expected


def test_with_segment_returns_the_same_path_when_nothing_changes() -> None:
    path = parse_hierarchical_path("/path/to/paradise")
    assert path.with_segment(0, "path") is path
    assert path.with_segment(-3, "path") is path


def test_with_segment_failures() -> None:
    path = parse_hierarchical_path("/test/")
    with pytest.raises(OffsetOutOfBounds):
        path.with_segment(23, "bar")
    with pytest.raises(UriSyntaxError):
        path.with_segment(0, None)


@pytest.mark.parametrize(
    "path, offsets, expected",
    [
        ("/master/test/query.php", (2,), "/master/test"),
        ("/master/test/query.php", (-1,), "/master/test"),
        ("/toto/le/heros/masson", (0,), "/le/heros/masson"),
        ("/toto", (-1,), "/"),
        ("toto/le/heros/masson", (2, 3), "toto/le"),
    ],
)
def test_without_segment(path: str, offsets: tuple[int, ...], expected: str) -> None:
    assert parse_hierarchical_path(path).without_segment(*offsets).value() == expected


def test_without_segment_edge_cases() -> None:
    path = parse_hierarchical_path("www/example/com")
    assert path.without_segment() is path
    with pytest.raises(OffsetOutOfBounds):
        parse_hierarchical_path("/test/").without_segment(23)


@pytest.mark.parametrize(
    "path, expected",
    [("/a/b/c", "/a/b/c"), ("//a//b//c", "/a/b/c"), ("a//b/c//", "a/b/c/"), ("/a/b/c//", "/a/b/c/")],
)
def test_without_empty_segments(path: str, expected: str) -> None:
    assert parse_hierarchical_path(path).without_empty_segments().value() == expected


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/path/to/my/file.txt", "/path/to/my"),
        ("/path/to/my/file/", "/path/to/my"),
        (".", "."),
        ("/path/to/my//file/", "/path/to/my"),
        ("", ""),
        ("/", "/"),
        ("/path/to/my/../file.txt", "/path/to/my/.."),
        ("file.txt", "."),
    ],
)
def test_dirname(path: str, expected: str) -> None:
    assert parse_hierarchical_path(path).dirname() == expected


def test_basename() -> None:
    assert parse_hierarchical_path("/path/to/my/file.txt").basename() == "file.txt"
    assert parse_hierarchical_path("/path/to/my/").basename() == ""


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/path/to/my/", ""),
        ("/path/to/my/file", ""),
        ("/path/to/my/file.txt", "txt"),
        ("/path/to/my/file.csv.txt", "txt"),
        ("/foo/bar.csv;type=a", "csv"),
    ],
)
def test_extension(path: str, expected: str) -> None:
    assert parse_hierarchical_path(path).extension() == expected


@pytest.mark.parametrize(
    "path, extension, expected, expected_extension",
    [
        ("/path/to/my/file.txt", "csv", "/path/to/my/file.csv", "csv"),
        ("/path/to/my/file.txt;foo=bar", "csv", "/path/to/my/file.csv;foo=bar", "csv"),
        ("/path/to/my/file", "csv", "/path/to/my/file.csv", "csv"),
        ("/path/to/my/file;foo", "csv", "/path/to/my/file.csv;foo", "csv"),
        ("/path/to/my/file.csv", "", "/path/to/my/file", ""),
        ("/path/to/my/file.csv;foo=bar,baz", "", "/path/to/my/file;foo=bar,baz", ""),
        ("/path/to/my/file.tar.gz", "bz2", "/path/to/my/file.tar.bz2", "bz2"),
        ("", "csv", "", ""),
        (";foo=bar", "csv", ";foo=bar", ""),
        ("toto.", "csv", "toto.csv", "csv"),
        ("toto.;foo", "csv", "toto.csv;foo", "csv"),
        ("toto.csv;foo", "csv", "toto.csv;foo", "csv"),
    ],
)
def test_with_extension(path: str, extension: str, expected: str, expected_extension: str) -> None:
    new_path = parse_hierarchical_path(path).with_extension(extension)
    assert new_path.value() == expected
    assert new_path.extension() == expected_extension


@pytest.mark.parametrize("extension", [None, "t/xt", ".csv"])
def test_with_extension_rejects_invalid_extensions(extension: str | None) -> None:
    with pytest.raises(UriSyntaxError):
        parse_hierarchical_path("/path/to/my/file.txt").with_extension(extension)


@pytest.mark.parametrize(
    "path, dirname, expected",
    [
        ("/foo/bar/baz", "/bar", "/bar/baz"),
        ("/foo/bar/baz", "bar", "bar/baz"),
        ("/foo/bar/baz", "", "/baz"),
        ("", "", ""),
        ("", "/foo/bar", "/foo/bar/"),
        ("", "bar/baz/", "bar/baz/"),
    ],
)
def test_with_dirname(path: str, dirname: str, expected: str) -> None:
    assert parse_hierarchical_path(path).with_dirname(dirname).value() == expected


def test_with_basename() -> None:
    path = parse_hierarchical_path("/path/to/my/file.txt")
    assert path.with_basename("image.png").value() == "/path/to/my/image.png"
    assert path.with_basename("file.txt") is path
    with pytest.raises(UriSyntaxError):
        path.with_basename("a/b")
    with pytest.raises(UriSyntaxError):
        path.with_basename(None)
    with pytest.raises(UriSyntaxError):
        path.with_dirname(None)


def test_slashes_and_dot_segments() -> None:
    path = parse_hierarchical_path("/a/./b/../c")
    assert path.without_dot_segments().value() == "/a/c"
    assert path.without_leading_slash().value() == "a/./b/../c"
    assert path.with_trailing_slash().segments() == ["a", ".", "b", "..", "c", ""]
    assert path.with_leading_slash() is path
    assert path.without_trailing_slash() is path
    assert path.with_content("/a/./b/../c") is path
    assert str(path) == path.uri_component() == "/a/./b/../c"
