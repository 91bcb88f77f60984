"""Tests for JSON and outline export."""

import json

from slax.tree import Element, Text, to_json, to_outline

TREE = Element("cas:user", {":id": "7", ":role": ["a", "b"]}, (
    Text("jdoe"),
    Element(":note", {}, (Text("caf\xe9"),)),
))


class TestToJson:
    """Tests for JSON export."""

    def test_structure(self):
        """Test that the JSON document mirrors to_dict."""
        assert json.loads(to_json(TREE)) == TREE.to_dict()

    def test_non_ascii_kept(self):
        """Test that non-ASCII text is not escaped."""
        assert "caf\xe9" in to_json(TREE)

    def test_indent(self):
        """Test compact output without indentation."""
        assert "\n" not in to_json(Text("x"), indent=None)


class TestToOutline:
    """Tests for the indented outline."""

    def test_outline(self):
        """Test one line per node with nested indentation."""
        assert to_outline(TREE).splitlines() == [
            "cas:user :id='7' :role='a' :role='b'",
            "  'jdoe'",
            "  :note",
            "    'caf\xe9'",
        ]

    def test_custom_indent(self):
        """Test a custom indentation string."""
        tree = Element(":a", {}, (Element(":b"),))

        assert to_outline(tree, indent="\t") == ":a\n\t:b"
