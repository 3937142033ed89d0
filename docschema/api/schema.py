"""
schema.py (API)

Schema builder endpoints.

The client keeps the current field tree and sends it with every request;
each endpoint returns a new tree (or the compiled schema) without storing
anything.

Endpoints:
- GET  /schema/default  - Starter fields for a new session
- GET  /schema/options  - Field types and format hints for pickers
- POST /schema/compile  - Compile fields into the JSON validation schema
- POST /schema/resolve  - Apply a template (merge or replace)
- POST /schema/edit     - Apply one edit operation
"""

import logging

from fastapi import APIRouter, HTTPException, status

from docschema.errors import InvalidFieldTree, InvalidOperation, UnknownTemplate
from docschema.schemas.builder import (
    CompileResponse,
    EditRequest,
    EditResponse,
    FieldTreeRequest,
    FieldTreeResponse,
    ResolveRequest,
)
from docschema.schemas.fields import FORMAT_OPTIONS, FieldType, is_well_formed
from docschema.services.compiler import compile_schema, to_type_map
from docschema.services.editor import apply_edit
from docschema.services.resolver import resolve
from docschema.services.templates import default_tree

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get(
    "/default",
    response_model=FieldTreeResponse,
    summary="Starter fields for a new schema"
)
def default_schema():
    return FieldTreeResponse(fields=default_tree())


@router.get(
    "/options",
    summary="Field types and string formats a field can use"
)
def field_options():
    return {
        "types": [field_type.value for field_type in FieldType],
        "formats": [{"value": fmt.value, "label": label} for fmt, label in FORMAT_OPTIONS],
    }


@router.post(
    "/compile",
    response_model=CompileResponse,
    status_code=status.HTTP_200_OK,
    summary="Compile fields into a JSON validation schema",
    description=(
        "Turns the field tree into the closed JSON schema used by the "
        "extraction service, plus the flat name-to-type map."
    )
)
def compile_endpoint(request: FieldTreeRequest):
    """
    Compile the submitted field tree.

    Errors:
    - 400 Bad Request: tree is not well-formed (empty name, array without
      items, duplicate names)
    """
    try:
        return CompileResponse(
            schema=compile_schema(request.fields),
            type_map=to_type_map(request.fields)
        )
    except InvalidFieldTree as error:
        logger.info(f"Rejected field tree: {error}")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )


@router.post(
    "/resolve",
    response_model=FieldTreeResponse,
    summary="Apply a template to the current fields"
)
def resolve_endpoint(request: ResolveRequest):
    """
    Merge or replace the current fields with a template.

    Errors:
    - 404 Not Found: unknown template key
    """
    try:
        fields = resolve(request.fields, request.template, request.merge)
    except UnknownTemplate as error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error)
        )
    return FieldTreeResponse(fields=fields)


@router.post(
    "/edit",
    response_model=EditResponse,
    summary="Apply one edit to the current fields",
    description=(
        "Returns the edited tree and, when the tree is complete, its "
        "compiled schema. While a field still has an empty name the "
        "schema is null."
    )
)
def edit_endpoint(request: EditRequest):
    """
    Errors:
    - 400 Bad Request: operation does not fit the field type, or an
      index is out of range
    """
    try:
        fields = apply_edit(request.fields, request.edit)
    except (InvalidOperation, InvalidFieldTree) as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )

    schema = compile_schema(fields) if is_well_formed(fields) else None
    return EditResponse(fields=fields, schema=schema)
