"""
fields.py (schemas)

The field tree model: typed, nestable extraction fields.

Each field type is its own Pydantic model and the `type` attribute is the
discriminator, so a field can only ever carry the attributes that belong
to its kind:

- StringField  -> may carry a `format` hint
- NumberField, BooleanField -> scalars, nothing extra
- ArrayField   -> carries one `items` field describing every element
- ObjectField  -> carries an ordered tuple of `properties`

Fields are frozen. Editing never changes a field in place, it builds a
new one (see services/editor.py).

A field tree is a plain ordered list of top-level fields.
"""

from enum import Enum
from typing import Annotated, Any, Iterable, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, ValidationError

from docschema.errors import InvalidFieldTree


class FieldType(str, Enum):
    """Closed set of field types understood by the extraction service."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class FieldFormat(str, Enum):
    """
    Format hints for string fields.

    NONE means "no format" and is never written to a compiled schema.
    """

    NONE = "none"
    EMAIL = "email"
    DATE = "date"
    PHONE = "phone"
    CURRENCY = "currency"
    ADDRESS = "address"


# Labels shown next to each format option in a picker
FORMAT_OPTIONS: List[Tuple[FieldFormat, str]] = [
    (FieldFormat.NONE, "None"),
    (FieldFormat.EMAIL, "Email"),
    (FieldFormat.DATE, "Date"),
    (FieldFormat.PHONE, "Phone Number"),
    (FieldFormat.CURRENCY, "Currency"),
    (FieldFormat.ADDRESS, "Address"),
]


class _FieldBase(BaseModel):
    """Attributes shared by every field type."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(
        default="",
        description="Field identifier, unique among its siblings",
        examples=["invoice_number"]
    )

    required: bool = Field(
        default=True,
        description="Whether the extraction service must return this field"
    )

    description: Optional[str] = Field(
        default=None,
        description="Free-text hint passed through to the compiled schema"
    )

    examples: Tuple[str, ...] = Field(
        default=(),
        description="Example values, emitted verbatim when present"
    )


class StringField(_FieldBase):
    type: Literal["string"] = "string"

    format: Optional[FieldFormat] = Field(
        default=None,
        description="Optional format hint (email, date, phone, ...)"
    )


class NumberField(_FieldBase):
    type: Literal["number"] = "number"


class BooleanField(_FieldBase):
    type: Literal["boolean"] = "boolean"


class ArrayField(_FieldBase):
    type: Literal["array"] = "array"

    # None only while a tree is being built; compiling requires items
    items: Optional["FieldNode"] = Field(
        default=None,
        description="Schema shared by every element of the array"
    )


class ObjectField(_FieldBase):
    type: Literal["object"] = "object"

    properties: Tuple["FieldNode", ...] = Field(
        default=(),
        description="Nested fields, in display order"
    )


FieldNode = Annotated[
    Union[StringField, NumberField, BooleanField, ArrayField, ObjectField],
    Field(discriminator="type"),
]

FieldTree = List[FieldNode]

ArrayField.model_rebuild()
ObjectField.model_rebuild()

# Field model per type, used when re-typing a field
FIELD_MODELS = {
    FieldType.STRING: StringField,
    FieldType.NUMBER: NumberField,
    FieldType.BOOLEAN: BooleanField,
    FieldType.ARRAY: ArrayField,
    FieldType.OBJECT: ObjectField,
}

_field_adapter = TypeAdapter(FieldNode)
_tree_adapter = TypeAdapter(List[FieldNode])


def _error_path(loc: Iterable[Any]) -> str:
    """Turn a pydantic error location into a readable path.

    Discriminator tags (the type names pydantic inserts into the
    location) are dropped. A tag only ever follows the start of the
    location, a list index or an `items` segment.
    """
    tags = {member.value for member in FieldType}
    path = ""
    previous = None
    for position, part in enumerate(loc):
        is_tag = part in tags and (position == 0 or isinstance(previous, int) or previous == "items")
        previous = part
        if isinstance(part, int):
            path += f"[{part}]"
        elif not is_tag:
            path = f"{path}.{part}" if path else str(part)
    return path


def _raise_invalid(error: ValidationError):
    first = error.errors()[0]
    raise InvalidFieldTree(first["msg"], _error_path(first["loc"])) from error


def parse_field(raw: Any) -> FieldNode:
    """Build a field model from plain JSON data."""
    try:
        return _field_adapter.validate_python(raw)
    except ValidationError as error:
        _raise_invalid(error)


def parse_tree(raw: Any) -> FieldTree:
    """Build a field tree from plain JSON data (a list of field objects)."""
    try:
        return _tree_adapter.validate_python(raw)
    except ValidationError as error:
        _raise_invalid(error)


def is_field(value: Any) -> bool:
    return isinstance(value, _FieldBase)


def ensure_tree(tree: Iterable[Any]) -> FieldTree:
    """
    Return `tree` as a list of field models.

    Model instances are kept as they are; plain dicts are parsed.
    """
    tree = list(tree)
    if all(is_field(field) for field in tree):
        return tree
    return parse_tree(tree)


def to_payload(tree: Iterable[FieldNode]) -> List[dict]:
    """Dump a field tree back to JSON-ready data."""
    return [field.model_dump(mode="json", exclude_none=True) for field in tree]


def _join(parent: str, name: str) -> str:
    return f"{parent}.{name}" if parent else name


def _check_field(field: Any, path: str, named: bool = True):
    if not is_field(field):
        raise InvalidFieldTree(f"expected a field, got {type(field).__name__}", path)

    # array items are never emitted under a name
    if named and (not field.name or not field.name.strip()):
        raise InvalidFieldTree("field name must not be empty", path)

    if isinstance(field, ObjectField):
        check_tree(field.properties, path)
    elif isinstance(field, ArrayField):
        if field.items is None:
            raise InvalidFieldTree("array field has no items schema", path)
        _check_field(field.items, f"{path}.items", named=False)


def check_tree(tree: Iterable[FieldNode], path: str = ""):
    """
    Verify that a field tree is well-formed.

    Rules:
    - every field has a non-blank name, except array items
    - every array field defines `items`
    - names are unique within one sibling set

    Type/attribute consistency needs no runtime check, the field models
    make other combinations unrepresentable.

    Raises:
    - InvalidFieldTree naming the path of the first offending field
    """
    seen = set()
    for index, field in enumerate(tree):
        label = (getattr(field, "name", "") or "").strip()
        field_path = _join(path, label) if label else f"{path}[{index}]"
        _check_field(field, field_path)

        if field.name in seen:
            raise InvalidFieldTree(f"duplicate field name {field.name!r}", field_path)
        seen.add(field.name)


def is_well_formed(tree: Iterable[FieldNode]) -> bool:
    try:
        check_tree(tree)
    except InvalidFieldTree:
        return False
    return True
