"""
Unit tests for the field tree model.
"""

import unittest

from pydantic import ValidationError

from docschema.errors import InvalidFieldTree
from docschema.schemas.fields import (
    ArrayField,
    FieldFormat,
    NumberField,
    ObjectField,
    StringField,
    check_tree,
    ensure_tree,
    is_well_formed,
    parse_field,
    parse_tree,
    to_payload,
)


class TestParsing(unittest.TestCase):
    """Plain JSON data to field models."""

    def test_parse_picks_variant_by_type(self):
        tree = parse_tree([
            {"name": "email", "type": "string", "format": "email"},
            {"name": "total", "type": "number", "required": False},
            {"name": "lines", "type": "array", "items": {"name": "item", "type": "string"}},
            {"name": "vendor", "type": "object", "properties": [{"name": "city", "type": "string"}]},
        ])

        self.assertIsInstance(tree[0], StringField)
        self.assertEqual(tree[0].format, FieldFormat.EMAIL)
        self.assertIsInstance(tree[1], NumberField)
        self.assertFalse(tree[1].required)
        self.assertIsInstance(tree[2], ArrayField)
        self.assertIsInstance(tree[2].items, StringField)
        self.assertIsInstance(tree[3], ObjectField)
        self.assertEqual(tree[3].properties[0].name, "city")

    def test_required_defaults_to_true(self):
        field = parse_field({"name": "date", "type": "string"})
        self.assertTrue(field.required)
        self.assertEqual(field.examples, ())

    def test_attribute_of_another_type_is_rejected(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            parse_tree([{"name": "total", "type": "number", "format": "date"}])
        self.assertEqual(ctx.exception.path, "[0].format")

    def test_error_path_through_array_items(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            parse_tree([{"name": "lines", "type": "array",
                         "items": {"type": "number", "format": "date"}}])
        self.assertEqual(ctx.exception.path, "[0].items.format")

    def test_error_path_keeps_attribute_named_like_a_type(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            parse_tree([{"name": "total", "type": "number", "string": "x"}])
        self.assertEqual(ctx.exception.path, "[0].string")

        with self.assertRaises(InvalidFieldTree) as ctx:
            parse_field({"name": "flag", "type": "boolean", "object": {}})
        self.assertEqual(ctx.exception.path, "object")

    def test_properties_on_array_is_rejected(self):
        with self.assertRaises(InvalidFieldTree):
            parse_field({"name": "lines", "type": "array", "properties": []})

    def test_unknown_type_is_rejected(self):
        with self.assertRaises(InvalidFieldTree):
            parse_field({"name": "when", "type": "datetime"})

    def test_fields_are_frozen(self):
        field = StringField(name="date")
        with self.assertRaises(ValidationError):
            field.name = "other"

    def test_ensure_tree_keeps_models(self):
        field = NumberField(name="total")
        tree = ensure_tree([field])
        self.assertIs(tree[0], field)

    def test_payload_round_trip(self):
        raw = [
            {"name": "lines", "type": "array", "required": False,
             "items": {"name": "item", "type": "object",
                       "properties": [{"name": "qty", "type": "number"}]}},
        ]
        tree = parse_tree(raw)
        self.assertEqual(parse_tree(to_payload(tree)), tree)


class TestWellFormed(unittest.TestCase):
    """Structural checks done by check_tree."""

    def test_valid_tree(self):
        tree = [
            StringField(name="name"),
            ArrayField(name="tags", items=StringField(name="tag")),
            ObjectField(name="address", properties=(StringField(name="city"),)),
        ]
        check_tree(tree)
        self.assertTrue(is_well_formed(tree))

    def test_empty_tree_is_well_formed(self):
        self.assertTrue(is_well_formed([]))

    def test_blank_name(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree([StringField(name="ok"), StringField(name="   ")])
        self.assertEqual(ctx.exception.path, "[1]")

    def test_blank_nested_name(self):
        tree = [ObjectField(name="address", properties=(StringField(name=""),))]
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree(tree)
        self.assertEqual(ctx.exception.path, "address[0]")

    def test_array_item_needs_no_name(self):
        tree = [ArrayField(name="tags", items=StringField())]
        self.assertTrue(is_well_formed(tree))

    def test_properties_of_unnamed_item_still_need_names(self):
        item = ObjectField(properties=(NumberField(name=""),))
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree([ArrayField(name="lines", items=item)])
        self.assertEqual(ctx.exception.path, "lines.items[0]")

    def test_array_without_items(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree([ArrayField(name="line_items")])
        self.assertEqual(ctx.exception.path, "line_items")

    def test_duplicate_names(self):
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree([StringField(name="date"), NumberField(name="date")])
        self.assertEqual(ctx.exception.path, "date")

    def test_duplicate_names_inside_array_items(self):
        item = ObjectField(name="item", properties=(
            NumberField(name="qty"),
            NumberField(name="qty"),
        ))
        with self.assertRaises(InvalidFieldTree) as ctx:
            check_tree([ArrayField(name="line_items", items=item)])
        self.assertEqual(ctx.exception.path, "line_items.items.qty")

    def test_same_name_at_different_levels_is_fine(self):
        tree = [
            StringField(name="name"),
            ObjectField(name="vendor", properties=(StringField(name="name"),)),
        ]
        self.assertTrue(is_well_formed(tree))

    def test_non_field_value(self):
        with self.assertRaises(InvalidFieldTree):
            check_tree([{"name": "raw", "type": "string"}])


if __name__ == "__main__":
    unittest.main()
