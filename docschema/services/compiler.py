"""
compiler.py

Lowers a field tree into the JSON validation schema that is sent to the
extraction service together with the uploaded document.

Output shape:

    {
        "type": "object",
        "properties": {"<name>": <field schema>, ...},
        "required": ["<name>", ...],        # omitted when empty
        "additionalProperties": false
    }

Every object fragment, at any depth, is closed with
"additionalProperties": false. Keys are always written in the same order
so two compilations of equal trees serialize to identical bytes.
"""

import json
import logging
from typing import Any, Dict, Iterable, List

from docschema.errors import InvalidFieldTree
from docschema.schemas.fields import (
    ArrayField,
    FieldFormat,
    FieldNode,
    FieldTree,
    ObjectField,
    StringField,
    check_tree,
    ensure_tree,
)

logger = logging.getLogger(__name__)


def _object_schema(properties: Iterable[FieldNode]) -> Dict[str, Any]:
    """Build the properties/required/additionalProperties part of an object."""
    compiled: Dict[str, Any] = {}
    required: List[str] = []

    for prop in properties:
        if prop.required:
            required.append(prop.name)
        compiled[prop.name] = compile_field(prop)

    fragment: Dict[str, Any] = {"properties": compiled}
    if required:
        fragment["required"] = required
    fragment["additionalProperties"] = False
    return fragment


def compile_field(field: FieldNode) -> Dict[str, Any]:
    """
    Lower one field (and its children) into a schema fragment.

    Rules, in output order:
    1. type
    2. description, when non-empty
    3. format, for strings, unless unset or "none"
    4. examples, when non-empty
    5. objects: properties / required / additionalProperties
    6. arrays: items, lowered with these same rules
    """
    schema: Dict[str, Any] = {"type": field.type}

    if field.description:
        schema["description"] = field.description

    if isinstance(field, StringField) and field.format and field.format != FieldFormat.NONE:
        schema["format"] = field.format.value

    if field.examples:
        schema["examples"] = list(field.examples)

    if isinstance(field, ObjectField):
        schema.update(_object_schema(field.properties))
    elif isinstance(field, ArrayField):
        if field.items is None:
            raise InvalidFieldTree("array field has no items schema", field.name)
        schema["items"] = compile_field(field.items)

    return schema


def compile_schema(tree: Iterable) -> Dict[str, Any]:
    """
    Compile a whole field tree into the root validation schema.

    Parameters:
    - tree: top-level fields (models or plain dicts)

    Returns:
    - a new dict; the tree is neither modified nor referenced by it

    Raises:
    - InvalidFieldTree when the tree is not well-formed
    """
    fields = ensure_tree(tree)
    check_tree(fields)

    schema: Dict[str, Any] = {"type": "object"}
    schema.update(_object_schema(fields))

    logger.debug(f"Compiled schema with {len(fields)} top-level fields")
    return schema


def compile_schema_json(tree: Iterable) -> str:
    """The compiled schema serialized exactly as it is transmitted."""
    return json.dumps(compile_schema(tree), ensure_ascii=False, separators=(",", ":"))


def to_type_map(tree: Iterable) -> Dict[str, str]:
    """
    Flat {field name: field type} map of the top-level fields.

    This is the simplified schema the document processing endpoint takes.
    """
    fields: FieldTree = ensure_tree(tree)
    return {field.name: field.type for field in fields}
