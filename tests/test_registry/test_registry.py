"""Tests for the global style registry."""

import threading

import pytest

from styleforge.errors import IdentifierConflict
from styleforge.model import Condition, Rule, VariableRef
from styleforge.registry import Registry


MEDIA = (Condition("media", "screen"),)


def _rule(selector: str, color: str = "red", conditions=()) -> Rule:
    return Rule(selector, (("color", color),), conditions)


# ---------------------------------------------------------------------------
# register
# ---------------------------------------------------------------------------


class TestRegister:
    def test_identical_registration_is_idempotent(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        registry.register("a", [_rule(".a")])
        assert len(registry) == 1
        assert registry.css() == ".a {\n  color: red;\n}\n"

    def test_conflicting_registration(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        with pytest.raises(IdentifierConflict) as excinfo:
            registry.register("a", [_rule(".a", "blue")])
        assert excinfo.value.identifier == "a"

    def test_contains(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        assert "a" in registry
        assert "b" not in registry

    def test_class_map(self):
        registry = Registry()
        registry.register("button__x0", [_rule(".button__x0")], label="button")
        registry.register("global:a.css.py:1", [_rule("body")])
        assert registry.class_map() == {"button__x0": "button"}


class TestFilesAndVariables:
    def test_file_index_is_stable(self):
        registry = Registry()
        assert registry.file_index("src/a.css.py") == 0
        assert registry.file_index("src/b.css.py") == 1
        assert registry.file_index("src/a.css.py") == 0

    def test_declared_variables(self):
        registry = Registry()
        registry.declare_variable(VariableRef("brand"))
        assert registry.is_known("brand")
        assert not registry.is_known("other")


# ---------------------------------------------------------------------------
# Serialization
# ---------------------------------------------------------------------------


class TestSerialization:
    def test_empty(self):
        assert Registry().css() == ""

    def test_unconditioned_before_conditioned(self):
        registry = Registry()
        registry.register("a", [_rule(".a", "blue", MEDIA)])
        registry.register("b", [_rule(".b")])
        assert registry.css() == (
            ".b {\n  color: red;\n}\n"
            "@media screen {\n  .a {\n    color: blue;\n  }\n}\n"
        )

    def test_identical_conditions_merge(self):
        registry = Registry()
        registry.register("a", [_rule(".a"), _rule(".a", "blue", MEDIA)])
        registry.register("b", [_rule(".b"), _rule(".b", "green", MEDIA)])
        css = registry.css()
        assert css.count("@media screen") == 1
        assert css.index(".a {\n    color: blue") < css.index(".b {\n    color: green")

    def test_condition_groups_keep_first_appearance(self):
        registry = Registry()
        print_ = (Condition("media", "print"),)
        registry.register("a", [_rule(".a", "blue", print_)])
        registry.register("b", [_rule(".b", "blue", MEDIA)])
        registry.register("c", [_rule(".c", "blue", print_)])
        css = registry.css()
        assert css.index("@media print") < css.index("@media screen")
        assert css.count("@media print") == 1

    def test_shared_outer_condition_merges(self):
        registry = Registry()
        print_ = Condition("media", "print")
        gap = Condition("supports", "(gap: 1px)")
        registry.register("a", [_rule(".a", "blue", (print_,))])
        registry.register("b", [_rule(".b", "blue", (print_, gap))])
        registry.register("c", [_rule(".c", "blue", MEDIA)])
        assert registry.css() == (
            "@media print {\n"
            "  .a {\n    color: blue;\n  }\n"
            "  @supports (gap: 1px) {\n"
            "    .b {\n      color: blue;\n    }\n"
            "  }\n"
            "}\n"
            "@media screen {\n"
            "  .c {\n    color: blue;\n  }\n"
            "}\n"
        )

    def test_nested_conditions(self):
        registry = Registry()
        conditions = (Condition("supports", "(display: grid)"), Condition("media", "print"))
        registry.register("a", [Rule(".a", (("display", "grid"),), conditions)])
        assert registry.css() == (
            "@supports (display: grid) {\n"
            "  @media print {\n"
            "    .a {\n"
            "      display: grid;\n"
            "    }\n"
            "  }\n"
            "}\n"
        )

    def test_keyframes(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        registry.register(
            "spin",
            [
                Rule("from", (("opacity", "0"),), keyframes="spin"),
                Rule("to", (("opacity", "1"),), keyframes="spin"),
            ],
        )
        assert registry.css() == (
            "@keyframes spin {\n"
            "  from {\n    opacity: 0;\n  }\n"
            "  to {\n    opacity: 1;\n  }\n"
            "}\n"
            ".a {\n  color: red;\n}\n"
        )

    def test_font_face_first(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        registry.register("font", [Rule("@font-face", (("font-family", '"Inter"'),))])
        assert registry.css().startswith('@font-face {\n  font-family: "Inter";\n}\n')

    def test_order_key_beats_arrival(self):
        registry = Registry()
        registry.register("b", [_rule(".b")], order=(1, 0))
        registry.register("a", [_rule(".a")], order=(0, 0))
        assert registry.css().index(".a") < registry.css().index(".b")

    def test_custom_indent(self):
        from styleforge.config import BuildConfig

        registry = Registry(BuildConfig(indent="    "))
        registry.register("a", [_rule(".a")])
        assert registry.css() == ".a {\n    color: red;\n}\n"


# ---------------------------------------------------------------------------
# Lifecycle
# ---------------------------------------------------------------------------


class TestLifecycle:
    def test_finalize_clears(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        assert registry.finalize() == ".a {\n  color: red;\n}\n"
        assert registry.finalize() == ""
        assert len(registry) == 0

    def test_reset_discards_everything(self):
        registry = Registry()
        registry.register("a", [_rule(".a")])
        registry.declare_variable(VariableRef("v"))
        registry.file_index("src/a.css.py")
        registry.reset()
        assert len(registry) == 0
        assert not registry.is_known("v")
        assert registry.file_index("src/b.css.py") == 0

    def test_rule_count(self):
        registry = Registry()
        registry.register("a", [_rule(".a"), _rule(".a", "blue", MEDIA)])
        assert registry.rule_count() == 2


class TestConcurrency:
    def test_parallel_registration_is_deterministic(self):
        def fill(registry: Registry, reverse: bool) -> None:
            files = list(range(8))
            if reverse:
                files.reverse()
            threads = [
                threading.Thread(
                    target=lambda i=i: [
                        registry.register(
                            f"c{i}_{j}", [_rule(f".c{i}_{j}", conditions=MEDIA if j % 2 else ())],
                            order=(i, j),
                        )
                        for j in range(10)
                    ]
                )
                for i in files
            ]
            for t in threads:
                t.start()
            for t in threads:
                t.join()

        forward, backward = Registry(), Registry()
        fill(forward, reverse=False)
        fill(backward, reverse=True)
        assert forward.css() == backward.css()
        assert len(forward) == 80
