"""Unit tests for variable binding and substitution."""

from autocheck.nodes import Atom, Identifier, ListNode, Literal
from autocheck.variables import VariableTable, literal_value


class TestBind:
    """Tests for VariableTable.bind."""

    def test_bind_returns_new_table(self):
        """Test that binding never mutates the original table."""
        empty = VariableTable()
        table = empty.bind("f", Literal("Lab1.hs"))
        assert "f" not in empty
        assert table.get("f") == "Lab1.hs"
        assert len(table) == 1

    def test_last_write_wins(self):
        table = VariableTable().bind("g", Literal(0.2)).bind("g", Literal(0.9))
        assert table.get("g") == 0.9
        assert len(table) == 1

    def test_non_literal_values_are_bound_as_is(self):
        """Test that no validation happens at bind time."""
        table = VariableTable().bind("a", Atom("x")).bind("b", Identifier("a"))
        assert table.get("a") == Atom("x")
        assert table.get("b") == Identifier("a")

    def test_list_values(self):
        table = VariableTable().bind("exts", ListNode((Literal(".ex"), Literal(".exs"))))
        assert table.get("exts") == [".ex", ".exs"]


class TestResolve:
    """Tests for VariableTable.resolve."""

    def test_identifier(self):
        table = VariableTable({"i": "haskell"})
        assert table.resolve(Identifier("i")) == "haskell"

    def test_unbound_identifier_is_absent(self):
        assert VariableTable().resolve(Identifier("missing")) is None

    def test_placeholder_substitution(self):
        table = VariableTable({"f": "Lab1.hs", "g": 0.5, "net": True})
        assert table.resolve("cat %f") == "cat Lab1.hs"
        assert table.resolve("grade=%g net=%net") == "grade=0.5 net=true"

    def test_unbound_placeholder_left_untouched(self):
        table = VariableTable({"f": "Lab1.hs"})
        assert table.resolve("cat %missing %f") == "cat %missing Lab1.hs"

    def test_placeholder_uses_whole_word(self):
        """Test that %fx does not expand %f."""
        table = VariableTable({"f": "Lab1.hs"})
        assert table.resolve("%fx") == "%fx"

    def test_single_pass_without_indirection(self):
        """Test that substituted text is not scanned again."""
        table = VariableTable({"a": "%b", "b": "value"})
        assert table.resolve("%a") == "%b"

    def test_list_is_resolved_elementwise(self):
        table = VariableTable({"f": "x.hs"})
        assert table.resolve(["cat %f", Identifier("f"), 3]) == ["cat x.hs", "x.hs", 3]

    def test_other_values_unchanged(self):
        table = VariableTable({"f": "x"})
        assert table.resolve(7) == 7
        assert table.resolve(True) is True
        assert table.resolve(Atom("f")) == Atom("f")


def test_literal_value():
    assert literal_value(Literal("a")) == "a"
    assert literal_value(ListNode((Literal(1), Identifier("x")))) == [1, Identifier("x")]
    assert literal_value(Identifier("x")) == Identifier("x")
