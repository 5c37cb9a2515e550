"""
Unit tests for cmlint.loader (front-end interchange reader).

Structure:
    1. Well-formed documents
    2. Malformed documents raise TreeFormatError
"""
import json
import sys
import tempfile
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from cmlint.loader import TreeFormatError, load_file, load_tree
from cmlint.orchestrator import analyze_tree
from cmlint.tree import (
    Block,
    Call,
    ClassDecl,
    CompilationUnit,
    Identifier,
    Lambda,
    Literal,
    MemberReference,
    Return,
    walk,
)
from tests.helpers import find, find_all

FIXTURE = ROOT / "tests" / "fixtures" / "Example.json"


def _document(tree, symbols=(), types=(), source="Doc.java"):
    return {"source": source, "types": list(types), "symbols": list(symbols), "tree": tree}


def _unit(*body):
    return {"kind": "CompilationUnit", "body": list(body)}


# ---------------------------------------------------------------------------
# 1. Well-formed documents
# ---------------------------------------------------------------------------

class TestLoadTree:

    def test_fixture_round_trip(self):
        context = load_file(FIXTURE)

        assert context.source == "Example.java"
        assert isinstance(context.root, CompilationUnit)
        assert find(context.root, ClassDecl).name == "Example"
        assert len(find_all(context.root, Lambda)) == 1
        assert len(find_all(context.root, MemberReference)) == 1

    def test_parent_links_cover_every_node(self):
        context = load_file(FIXTURE)
        nodes = list(walk(context.root))

        assert context.parent_of(context.root) is None
        assert all(context.parent_of(n) is not None for n in nodes[1:])

    def test_symbols_are_shared_by_id(self):
        context = load_file(FIXTURE)
        lists = [n for n in find_all(context.root, Identifier) if n.name == "list"]

        assert len(lists) == 3
        assert lists[0].symbol is lists[1].symbol is lists[2].symbol
        assert context.type_of(lists[0]).name == "java.util.ArrayList"

    def test_positions_kept(self):
        context = load_file(FIXTURE)
        remove = find(context.root, MemberReference, "remove")

        assert (remove.line, remove.column) == (7, 18)

    def test_inline_method_description(self):
        call = {
            "kind": "Call", "name": "invokeLater", "owner": "java.awt.EventQueue", "static": True,
            "receiver": None, "args": [],
        }
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": call})))
        loaded = find(context.root, Call)

        assert loaded.method.name == "invokeLater"
        assert loaded.method.is_static is True
        assert loaded.method.owner.name == "java.awt.EventQueue"

    def test_call_without_method_is_unresolved(self):
        call = {"kind": "Call", "name": "add", "receiver": None}
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": call})))

        assert find(context.root, Call).method is None

    def test_call_without_receiver_key(self):
        call = {"kind": "Call", "name": "helper", "args": [], "line": 2, "column": 5}
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": call})))
        loaded = find(context.root, Call)

        assert loaded.receiver is None
        assert loaded.args == []
        assert analyze_tree(context) == []

    def test_literal_value_and_return_value(self):
        ret = {"kind": "Return", "value": {"kind": "Literal", "value": "42"}}
        context = load_tree(_document(_unit(ret)))

        assert find(context.root, Literal).value == "42"
        assert isinstance(find(context.root, Return).value, Literal)

    def test_static_flag_on_block(self):
        klass = {"kind": "ClassDecl", "name": "T", "body": [{"kind": "Block", "static": True, "statements": []}]}
        context = load_tree(_document(_unit(klass)))

        assert find(context.root, Block).is_static is True

    def test_declared_types_extend_catalog(self):
        types = [{"name": "com.acme.Bag", "supertypes": ["java.util.ArrayList"]}]
        symbols = [{"id": "b", "name": "bag", "kind": "local", "type": "com.acme.Bag"}]
        ident = {"kind": "Identifier", "name": "bag", "symbol": "b"}
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident}), symbols, types))
        bag_type = context.type_of(find(context.root, Identifier))

        assert "java.util.Collection" in {t.name for t in context.closure(bag_type)}

    def test_types_may_be_listed_subtype_first(self):
        types = [
            {"name": "com.acme.Child", "supertypes": ["com.acme.Parent"]},
            {"name": "com.acme.Parent", "supertypes": ["java.util.HashSet"]},
        ]
        symbols = [{"id": "c", "name": "c", "type": "com.acme.Child"}]
        ident = {"kind": "Identifier", "name": "c", "symbol": "c"}
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident}), symbols, types))
        child = context.type_of(find(context.root, Identifier))

        assert "java.util.Set" in {t.name for t in context.closure(child)}

    def test_unknown_type_is_isolated(self):
        symbols = [{"id": "m", "name": "m", "type": "com.acme.Mystery"}]
        ident = {"kind": "Identifier", "name": "m", "symbol": "m"}
        context = load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident}), symbols))
        mystery = context.type_of(find(context.root, Identifier))

        assert mystery.name == "com.acme.Mystery"
        assert context.closure(mystery) == {mystery}

    def test_source_fallback(self):
        context = load_tree({"tree": _unit()}, source="fallback.java")
        assert context.source == "fallback.java"


# ---------------------------------------------------------------------------
# 2. Malformed documents
# ---------------------------------------------------------------------------

class TestMalformed:

    def test_missing_tree(self):
        with pytest.raises(TreeFormatError):
            load_tree({"source": "x.java"})

    def test_not_an_object(self):
        with pytest.raises(TreeFormatError):
            load_tree([1, 2, 3])

    def test_unknown_node_kind(self):
        with pytest.raises(TreeFormatError, match="kind"):
            load_tree(_document(_unit({"kind": "Goto"})))

    def test_node_must_be_an_object(self):
        with pytest.raises(TreeFormatError, match="Invalid node"):
            load_tree(_document(_unit("list.add(x)")))

    def test_string_line_rejected(self):
        call = {"kind": "Call", "name": "add", "line": "3", "column": 5}
        with pytest.raises(TreeFormatError, match="line"):
            load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": call})))

    def test_string_column_rejected(self):
        ident = {"kind": "Identifier", "name": "x", "line": 3, "column": "5"}
        with pytest.raises(TreeFormatError, match="column"):
            load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident})))

    def test_negative_line_rejected(self):
        with pytest.raises(TreeFormatError, match="line"):
            load_tree(_document(_unit({"kind": "Identifier", "name": "x", "line": -1})))

    def test_non_bool_static_rejected(self):
        klass = {"kind": "ClassDecl", "name": "T", "body": [{"kind": "Block", "static": "yes"}]}
        with pytest.raises(TreeFormatError, match="static"):
            load_tree(_document(_unit(klass)))

    def test_non_string_name_rejected(self):
        with pytest.raises(TreeFormatError, match="name"):
            load_tree(_document(_unit({"kind": "Identifier", "name": 7})))

    def test_non_string_type_reference(self):
        ident = {"kind": "Identifier", "name": "x", "type": ["java.util.List"]}
        with pytest.raises(TreeFormatError, match="type"):
            load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident})))

    def test_type_entry_needs_a_name(self):
        with pytest.raises(TreeFormatError, match="name"):
            load_tree(_document(_unit(), types=[{"supertypes": []}]))

    def test_dangling_symbol_id(self):
        ident = {"kind": "Identifier", "name": "x", "symbol": "nope"}
        with pytest.raises(TreeFormatError, match="Unknown symbol id"):
            load_tree(_document(_unit({"kind": "ExpressionStatement", "expression": ident})))

    def test_duplicate_symbol_id(self):
        symbols = [{"id": "a", "name": "x"}, {"id": "a", "name": "y"}]
        with pytest.raises(TreeFormatError, match="Duplicate"):
            load_tree(_document(_unit(), symbols))

    def test_bad_symbol_kind(self):
        with pytest.raises(TreeFormatError):
            load_tree(_document(_unit(), [{"id": "a", "name": "x", "kind": "macro"}]))

    def test_cyclic_types(self):
        types = [
            {"name": "a.A", "supertypes": ["a.B"]},
            {"name": "a.B", "supertypes": ["a.A"]},
        ]
        with pytest.raises(TreeFormatError, match="Cyclic"):
            load_tree(_document(_unit(), types=types))

    def test_missing_required_field(self):
        with pytest.raises(TreeFormatError):
            load_tree(_document(_unit({"kind": "ExpressionStatement"})))

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            load_tree(_document(_unit({"kind": "Goto"})))

    def test_invalid_json_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "broken.json"
            path.write_text("{ not json")

            with pytest.raises(TreeFormatError, match="Invalid JSON"):
                load_file(path)

    def test_missing_file(self):
        with pytest.raises(TreeFormatError, match="Cannot read"):
            load_file(Path("/nonexistent/tree.json"))

    def test_valid_json_wrong_shape(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "list.json"
            path.write_text(json.dumps(["not", "a", "tree"]))

            with pytest.raises(TreeFormatError):
                load_file(path)
