"""Tests for warble.routing.params — path segment converters."""

from warble.routing.params import CONVERTERS, accepts


class TestAccepts:
    def test_str(self) -> None:
        assert accepts("anything", "str") is True
        assert accepts("a/b", "str") is False

    def test_int(self) -> None:
        assert accepts("123", "int") is True
        assert accepts("-1", "int") is False
        assert accepts("1.5", "int") is False

    def test_float(self) -> None:
        assert accepts("1.5", "float") is True
        assert accepts("2", "float") is True
        assert accepts("x", "float") is False

    def test_path(self) -> None:
        assert accepts("a/b/c", "path") is True

    def test_known_converters(self) -> None:
        assert set(CONVERTERS) == {"str", "int", "float", "path"}
