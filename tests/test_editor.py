"""
Unit tests for the field editing operations.
"""

import unittest

from docschema.errors import InvalidOperation
from docschema.schemas.fields import (
    ArrayField,
    BooleanField,
    FieldFormat,
    FieldType,
    NumberField,
    ObjectField,
    StringField,
)
from docschema.services import editor


def _sample_fields():
    return [
        StringField(name="email", format="email", description="Contact", examples=("a@b.c",)),
        NumberField(name="total", required=False),
        BooleanField(name="paid"),
        ArrayField(name="tags", items=StringField(name="tag")),
        ObjectField(name="vendor", properties=(StringField(name="name"),)),
    ]


class TestSetType(unittest.TestCase):
    """Type changes keep attributes consistent with the new type."""

    def test_attributes_match_target_type(self):
        for field in _sample_fields():
            for target in FieldType:
                result = editor.set_type(field, target)

                self.assertEqual(result.type, target.value)
                self.assertEqual(hasattr(result, "properties"), target == FieldType.OBJECT)
                self.assertEqual(hasattr(result, "items"), target == FieldType.ARRAY)
                if target != FieldType.STRING:
                    self.assertFalse(hasattr(result, "format"))
                if target == FieldType.ARRAY:
                    self.assertIsNotNone(result.items)

    def test_common_attributes_carry_over(self):
        field = _sample_fields()[0]
        result = editor.set_type(field, "number")

        self.assertIsInstance(result, NumberField)
        self.assertEqual(result.name, "email")
        self.assertEqual(result.description, "Contact")
        self.assertEqual(result.examples, ("a@b.c",))
        self.assertTrue(result.required)

    def test_to_object_starts_empty(self):
        result = editor.set_type(StringField(name="vendor"), FieldType.OBJECT)
        self.assertIsInstance(result, ObjectField)
        self.assertEqual(result.properties, ())

    def test_to_array_gets_placeholder_item(self):
        result = editor.set_type(NumberField(name="lines"), "array")
        self.assertEqual(result.items, ObjectField(name="item", required=True, properties=()))

    def test_leaving_string_drops_format(self):
        field = StringField(name="date", format="date")
        back = editor.set_type(editor.set_type(field, "number"), "string")
        self.assertIsNone(back.format)

    def test_same_type_keeps_field(self):
        field = ObjectField(name="vendor", properties=(StringField(name="name"),))
        self.assertIs(editor.set_type(field, "object"), field)

    def test_unknown_type(self):
        with self.assertRaises(InvalidOperation):
            editor.set_type(StringField(name="x"), "date")


class TestPropertyEdits(unittest.TestCase):
    """Nested property operations on object fields."""

    def setUp(self):
        self.vendor = ObjectField(name="vendor", properties=(
            StringField(name="name"),
            StringField(name="city"),
        ))

    def test_add_property(self):
        result = editor.add_property(self.vendor)

        self.assertEqual(len(result.properties), 3)
        added = result.properties[-1]
        self.assertEqual((added.name, added.type, added.required), ("", "string", True))
        self.assertEqual(len(self.vendor.properties), 2)

    def test_remove_property(self):
        result = editor.remove_property(self.vendor, 0)
        self.assertEqual([p.name for p in result.properties], ["city"])

    def test_update_property_accepts_dict(self):
        result = editor.update_property(self.vendor, 1, {"name": "zip", "type": "number"})
        self.assertIsInstance(result.properties[1], NumberField)
        self.assertEqual(result.properties[1].name, "zip")
        self.assertEqual(self.vendor.properties[1].name, "city")

    def test_index_out_of_range(self):
        with self.assertRaises(InvalidOperation):
            editor.remove_property(self.vendor, 5)
        with self.assertRaises(InvalidOperation):
            editor.update_property(self.vendor, -1, StringField(name="x"))

    def test_wrong_type(self):
        field = StringField(name="note")
        with self.assertRaises(InvalidOperation):
            editor.add_property(field)
        with self.assertRaises(InvalidOperation):
            editor.remove_property(field, 0)
        with self.assertRaises(InvalidOperation):
            editor.update_property(field, 0, StringField(name="x"))

    def test_set_items(self):
        field = ArrayField(name="tags", items=StringField(name="tag"))
        result = editor.set_items(field, {"name": "tag", "type": "number"})
        self.assertIsInstance(result.items, NumberField)
        with self.assertRaises(InvalidOperation):
            editor.set_items(self.vendor, StringField(name="x"))


class TestAttributeEdits(unittest.TestCase):

    def test_set_format(self):
        result = editor.set_format(StringField(name="email"), "email")
        self.assertEqual(result.format, FieldFormat.EMAIL)
        self.assertIsNone(editor.set_format(result, None).format)

    def test_set_format_rejects_other_types(self):
        with self.assertRaises(InvalidOperation):
            editor.set_format(NumberField(name="total"), "currency")
        with self.assertRaises(InvalidOperation):
            editor.set_format(StringField(name="x"), "uuid")

    def test_examples(self):
        field = editor.add_example(StringField(name="code"), "  INV-1 ")
        field = editor.add_example(field, "INV-2")
        self.assertEqual(field.examples, ("INV-1", "INV-2"))

        self.assertIs(editor.add_example(field, "   "), field)
        self.assertEqual(editor.remove_example(field, 0).examples, ("INV-2",))
        with self.assertRaises(InvalidOperation):
            editor.remove_example(field, 2)

    def test_set_attributes(self):
        field = editor.set_attributes(StringField(name="a"), name="b", required=False)
        self.assertEqual((field.name, field.required), ("b", False))
        with self.assertRaises(InvalidOperation):
            editor.set_attributes(field, type="number")

    def test_new_field_defaults(self):
        field = editor.new_field()
        self.assertIsInstance(field, StringField)
        self.assertEqual(field.name, "")
        self.assertTrue(field.required)
        self.assertIsNotNone(editor.new_field("rows", "array").items)


class TestTreeEdits(unittest.TestCase):

    def test_add_update_remove(self):
        tree = [StringField(name="a")]

        added = editor.add_field(tree, {"name": "b", "type": "boolean"})
        self.assertEqual([f.name for f in added], ["a", "b"])

        updated = editor.update_field(added, 0, NumberField(name="a"))
        self.assertIsInstance(updated[0], NumberField)

        removed = editor.remove_field(updated, 1)
        self.assertEqual([f.name for f in removed], ["a"])

        # inputs are left alone
        self.assertEqual(len(tree), 1)
        self.assertIsInstance(added[0], StringField)
        self.assertEqual(len(updated), 2)

    def test_remove_out_of_range(self):
        with self.assertRaises(InvalidOperation):
            editor.remove_field([], 0)


class TestApplyEdit(unittest.TestCase):

    def test_set_type_edit(self):
        tree = editor.apply_edit(_sample_fields(), {"op": "set_type", "index": 1, "field_type": "object"})
        self.assertIsInstance(tree[1], ObjectField)

    def test_add_field_without_field(self):
        tree = editor.apply_edit([], {"op": "add_field"})
        self.assertEqual(tree[0].name, "")

    def test_update_property_edit(self):
        tree = editor.apply_edit(_sample_fields(), {
            "op": "update_property",
            "index": 4,
            "property_index": 0,
            "property": {"name": "legal_name", "type": "string"},
        })
        self.assertEqual(tree[4].properties[0].name, "legal_name")

    def test_property_edit_on_wrong_type(self):
        with self.assertRaises(InvalidOperation):
            editor.apply_edit(_sample_fields(), {"op": "add_property", "index": 0})

    def test_missing_index(self):
        with self.assertRaises(InvalidOperation):
            editor.apply_edit(_sample_fields(), {"op": "set_type", "field_type": "string"})

    def test_unknown_operation(self):
        with self.assertRaises(InvalidOperation):
            editor.apply_edit([], {"op": "rename_everything"})


if __name__ == "__main__":
    unittest.main()
