"""
editor.py

Editing operations for field trees.

Every function here is pure: it takes a field (or tree) and returns a new
one. The caller owns the "current tree" reference and decides what to do
with the result (store it, push it on an undo stack, send it back to a
client).

Object and array operations check the field type first. Calling them on
the wrong kind of field raises InvalidOperation instead of quietly doing
nothing.
"""

import logging
from typing import Any, Iterable, Optional, Union

from pydantic import ValidationError

from docschema.errors import InvalidOperation
from docschema.schemas.builder import FieldEdit
from docschema.schemas.fields import (
    FIELD_MODELS,
    ArrayField,
    FieldFormat,
    FieldNode,
    FieldTree,
    FieldType,
    ObjectField,
    StringField,
    ensure_tree,
    is_field,
    parse_field,
)

logger = logging.getLogger(__name__)

# Attributes that can be changed without changing the field type
EDITABLE_ATTRIBUTES = ("name", "required", "description", "examples")


def new_field(name: str = "", field_type: Union[FieldType, str] = FieldType.STRING,
              required: bool = True) -> FieldNode:
    """A fresh field, as created by the "Add Field" action."""
    model = FIELD_MODELS[_field_type(field_type)]
    field = model(name=name, required=required)
    if isinstance(field, ArrayField):
        return _replace(field, items=default_item())
    return field


def default_item() -> ObjectField:
    """Placeholder item schema given to a field when it becomes an array."""
    return ObjectField(name="item", required=True, properties=())


def _field_type(value: Union[FieldType, str]) -> FieldType:
    try:
        return FieldType(value)
    except ValueError:
        raise InvalidOperation(f"Unknown field type: {value!r}")


def _as_field(value: Any) -> FieldNode:
    if is_field(value):
        return value
    return parse_field(value)


def _replace(field: FieldNode, **changes) -> FieldNode:
    data = {name: getattr(field, name) for name in type(field).model_fields}
    data.update(changes)
    try:
        return type(field).model_validate(data)
    except ValidationError as error:
        raise InvalidOperation(f"Invalid value for '{field.name}': {error.errors()[0]['msg']}") from error


def _check_index(size: int, index: Optional[int], what: str) -> int:
    if index is None or not 0 <= index < size:
        raise InvalidOperation(f"{what} index {index} out of range (size {size})")
    return index


def _require_object(field: FieldNode, operation: str) -> ObjectField:
    if not isinstance(field, ObjectField):
        raise InvalidOperation(f"{operation} needs an object field, '{field.name}' is {field.type}")
    return field


# ------------------------------------------------------------------
# Single field edits
# ------------------------------------------------------------------

def set_type(field: FieldNode, new_type: Union[FieldType, str]) -> FieldNode:
    """
    Change a field's type.

    Name, required flag, description and examples carry over. Everything
    that belongs to the old type is dropped:
    - object -> starts with no properties
    - array  -> starts with a placeholder object item ("item")
    - string -> starts without a format

    Setting the type a field already has returns it unchanged.
    """
    target = _field_type(new_type)
    if field.type == target:
        return field

    common = {
        "name": field.name,
        "required": field.required,
        "description": field.description,
        "examples": field.examples,
    }
    if target == FieldType.OBJECT:
        common["properties"] = ()
    elif target == FieldType.ARRAY:
        common["items"] = default_item()

    return FIELD_MODELS[target](**common)


def set_attributes(field: FieldNode, **changes) -> FieldNode:
    """Change name, required, description or examples."""
    unknown = set(changes) - set(EDITABLE_ATTRIBUTES)
    if unknown:
        raise InvalidOperation(f"Cannot set {', '.join(sorted(unknown))} with set_attributes")
    return _replace(field, **changes)


def set_format(field: FieldNode, fmt: Union[FieldFormat, str, None]) -> FieldNode:
    if not isinstance(field, StringField):
        raise InvalidOperation(f"Formats only apply to string fields, '{field.name}' is {field.type}")
    if fmt is None:
        return _replace(field, format=None)
    try:
        fmt = FieldFormat(fmt)
    except ValueError:
        raise InvalidOperation(f"Unknown format: {fmt!r}")
    return _replace(field, format=fmt)


def add_example(field: FieldNode, text: str) -> FieldNode:
    """Append an example value. Blank input is ignored."""
    text = (text or "").strip()
    if not text:
        return field
    return _replace(field, examples=field.examples + (text,))


def remove_example(field: FieldNode, index: int) -> FieldNode:
    _check_index(len(field.examples), index, "Example")
    examples = field.examples[:index] + field.examples[index + 1:]
    return _replace(field, examples=examples)


def add_property(field: FieldNode) -> ObjectField:
    """Append an empty string property to an object field."""
    field = _require_object(field, "add_property")
    return _replace(field, properties=field.properties + (new_field(),))


def remove_property(field: FieldNode, index: int) -> ObjectField:
    field = _require_object(field, "remove_property")
    _check_index(len(field.properties), index, "Property")
    properties = field.properties[:index] + field.properties[index + 1:]
    return _replace(field, properties=properties)


def update_property(field: FieldNode, index: int, new_property: Any) -> ObjectField:
    field = _require_object(field, "update_property")
    _check_index(len(field.properties), index, "Property")
    properties = list(field.properties)
    properties[index] = _as_field(new_property)
    return _replace(field, properties=tuple(properties))


def set_items(field: FieldNode, item: Any) -> ArrayField:
    """Replace the item schema of an array field."""
    if not isinstance(field, ArrayField):
        raise InvalidOperation(f"set_items needs an array field, '{field.name}' is {field.type}")
    return _replace(field, items=_as_field(item))


# ------------------------------------------------------------------
# Tree edits
# ------------------------------------------------------------------

def add_field(tree: Iterable, field: Any) -> FieldTree:
    return ensure_tree(tree) + [_as_field(field)]


def update_field(tree: Iterable, index: int, field: Any) -> FieldTree:
    fields = ensure_tree(tree)
    _check_index(len(fields), index, "Field")
    fields[index] = _as_field(field)
    return fields


def remove_field(tree: Iterable, index: int) -> FieldTree:
    fields = ensure_tree(tree)
    _check_index(len(fields), index, "Field")
    del fields[index]
    return fields


def _edit_one(field: FieldNode, edit: FieldEdit) -> FieldNode:
    if edit.op == "set_type":
        return set_type(field, edit.field_type)
    if edit.op == "set_format":
        return set_format(field, edit.format)
    if edit.op == "set_attributes":
        return set_attributes(field, **edit.attributes)
    if edit.op == "add_example":
        return add_example(field, edit.example)
    if edit.op == "remove_example":
        return remove_example(field, edit.example_index)
    if edit.op == "add_property":
        return add_property(field)
    if edit.op == "remove_property":
        return remove_property(field, edit.property_index)
    if edit.op == "update_property":
        return update_property(field, edit.property_index, edit.prop)
    if edit.op == "set_items":
        return set_items(field, edit.item)
    raise InvalidOperation(f"Unsupported edit: {edit.op}")


def apply_edit(tree: Iterable, edit: Union[FieldEdit, dict]) -> FieldTree:
    """
    Apply one declarative edit to a tree and return the new tree.

    Field-level edits address the top-level field at `edit.index`.
    """
    if not isinstance(edit, FieldEdit):
        try:
            edit = FieldEdit.model_validate(edit)
        except ValidationError as error:
            raise InvalidOperation(f"Invalid edit: {error.errors()[0]['msg']}") from error

    fields = ensure_tree(tree)
    logger.debug(f"Applying edit '{edit.op}' at index {edit.index}")

    if edit.op == "add_field":
        return add_field(fields, edit.field if edit.field is not None else new_field())
    if edit.op == "remove_field":
        return remove_field(fields, edit.index)
    if edit.op == "update_field":
        if edit.field is None:
            raise InvalidOperation("update_field needs a field")
        return update_field(fields, edit.index, edit.field)

    _check_index(len(fields), edit.index, "Field")
    fields[edit.index] = _edit_one(fields[edit.index], edit)
    return fields
