"""Tests for the identifier engine."""

import pytest

from styleforge.config import BuildConfig
from styleforge.identifiers import FileScope, file_hash, sanitize_debug_id


# ---------------------------------------------------------------------------
# file_hash
# ---------------------------------------------------------------------------


class TestFileHash:
    def test_stable(self):
        assert file_hash("src/button.css.py") == file_hash("src/button.css.py")

    def test_different_files_differ(self):
        assert file_hash("src/button.css.py") != file_hash("src/card.css.py")

    def test_never_starts_with_digit(self):
        for i in range(50):
            assert not file_hash(f"src/file_{i}.css.py")[0].isdigit()

    def test_length(self):
        h = file_hash("src/button.css.py", length=8)
        assert len(h.lstrip("_")) == 8

    def test_package_name_changes_hash(self):
        assert file_hash("button.css.py", "pkg-a") != file_hash("button.css.py", "pkg-b")

    def test_windows_and_posix_paths_match(self):
        from pathlib import PureWindowsPath

        windows = PureWindowsPath("src\\button.css.py").as_posix()
        assert file_hash(windows) == file_hash("src/button.css.py")


# ---------------------------------------------------------------------------
# FileScope.allocate
# ---------------------------------------------------------------------------


class TestAllocate:
    def test_debug_prefix(self):
        scope = FileScope("src/button.css.py")
        ident = scope.allocate("button")
        assert ident.startswith("button__")
        assert ident.endswith(f"{scope.hash}0")

    def test_without_debug_id(self):
        scope = FileScope("src/button.css.py")
        assert scope.allocate() == f"{scope.hash}0"

    def test_debug_ids_disabled(self):
        scope = FileScope("src/button.css.py", config=BuildConfig(debug_ids=False))
        assert scope.allocate("button") == f"{scope.hash}0"

    def test_same_binding_twice_yields_distinct_ids(self):
        scope = FileScope("src/button.css.py")
        assert scope.allocate("button") != scope.allocate("button")

    def test_sequence_is_stable_across_rebuilds(self):
        first = FileScope("src/button.css.py")
        second = FileScope("src/button.css.py")
        names = ["root", "label", "root", None]
        assert [first.allocate(n) for n in names] == [second.allocate(n) for n in names]

    def test_same_binding_in_different_files_never_collides(self):
        a = FileScope("src/a.css.py").allocate("className")
        b = FileScope("src/b.css.py").allocate("className")
        assert a != b

    def test_records_allocated_ids(self):
        scope = FileScope("src/button.css.py")
        ident = scope.allocate("button")
        assert scope.allocated == {ident: "button"}

    def test_sequence_past_ten_stays_unique(self):
        scope = FileScope("src/many.css.py")
        ids = [scope.allocate() for _ in range(100)]
        assert len(set(ids)) == 100


class TestSanitize:
    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("button", "button"),
            ("my button!", "my_button_"),
            ("color-brand", "color-brand"),
            ("a.b", "a_b"),
            ("2col", "_2col"),
        ],
    )
    def test_sanitize(self, raw, expected):
        assert sanitize_debug_id(raw) == expected

    def test_leading_digit_debug_id_is_valid_class(self):
        identifier = FileScope("src/grid.css.py").allocate("2col")
        assert identifier.startswith("_2col__")
