"""
builder.py (schemas)

Pydantic models for the schema builder API endpoints.

These schemas define:
- Request format for compile / resolve / edit endpoints
- Response format carrying field trees and compiled schemas
- The declarative edit request understood by services/editor.py
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from docschema.schemas.fields import FieldFormat, FieldNode, FieldType


EditOperation = Literal[
    "add_field",
    "update_field",
    "remove_field",
    "set_type",
    "set_format",
    "set_attributes",
    "add_example",
    "remove_example",
    "add_property",
    "remove_property",
    "update_property",
    "set_items",
]


class FieldEdit(BaseModel):
    """
    One edit applied to a field tree.

    `index` selects the top-level field for every operation except
    add_field. Only the attributes the operation needs have to be set.
    """

    model_config = ConfigDict(populate_by_name=True)

    op: EditOperation = Field(..., description="Edit operation to apply")

    index: Optional[int] = Field(
        default=None,
        description="Position of the top-level field to edit"
    )

    field: Optional[FieldNode] = Field(
        default=None,
        description="Field to add (add_field) or the replacement (update_field)"
    )

    field_type: Optional[FieldType] = Field(default=None, description="New type (set_type)")

    format: Optional[FieldFormat] = Field(default=None, description="New format (set_format)")

    attributes: Dict[str, Any] = Field(
        default_factory=dict,
        description="name / required / description / examples (set_attributes)"
    )

    example: Optional[str] = Field(default=None, description="Example to append (add_example)")

    example_index: Optional[int] = Field(default=None, description="Example to remove (remove_example)")

    property_index: Optional[int] = Field(
        default=None,
        description="Nested property position (remove_property, update_property)"
    )

    prop: Optional[FieldNode] = Field(
        default=None,
        alias="property",
        description="Replacement nested property (update_property)"
    )

    item: Optional[FieldNode] = Field(default=None, description="New array item schema (set_items)")


class FieldTreeRequest(BaseModel):
    fields: List[FieldNode] = Field(
        default_factory=list,
        description="Top-level fields in display order"
    )


class FieldTreeResponse(BaseModel):
    fields: List[FieldNode] = Field(..., description="Resulting top-level fields")


class CompileResponse(BaseModel):
    """
    Compiled validation schema plus the flat type map.
    """

    model_config = ConfigDict(populate_by_name=True)

    json_schema: Dict[str, Any] = Field(
        ...,
        alias="schema",
        description="JSON validation schema sent to the extraction service"
    )

    type_map: Dict[str, str] = Field(
        ...,
        description="Flat {field name: field type} map of the top-level fields"
    )


class ResolveRequest(FieldTreeRequest):
    template: str = Field(..., description="Template key", examples=["invoice"])

    merge: bool = Field(
        default=False,
        description="Merge into the current fields instead of replacing them"
    )


class EditRequest(FieldTreeRequest):
    edit: FieldEdit


class EditResponse(FieldTreeResponse):
    model_config = ConfigDict(populate_by_name=True)

    json_schema: Optional[Dict[str, Any]] = Field(
        default=None,
        alias="schema",
        description="Compiled schema, or null while the tree is incomplete"
    )


class TemplateSummary(BaseModel):
    key: str
    name: str


class TemplateDetail(TemplateSummary):
    fields: List[FieldNode]
