"""
process.py (API Route)

Document processing endpoint.

What this file does:
- Accepts the uploaded document and the field schema
- Compiles the field tree into the validation schema
- Forwards both to the remote processing service
- Returns the OCR lines and the extracted values

What this file does NOT do:
- Run OCR itself
- Store documents or results

Flow:
User uploads file + fields → This API → compiler → processing service → JSON
"""

import json
import logging
from typing import Any, Dict, Optional, Tuple

from fastapi import APIRouter, File, Form, HTTPException, UploadFile, status
from fastapi.concurrency import run_in_threadpool

from docschema.config import PROCESS_API_MAX_RETRIES, PROCESS_API_TIMEOUT, PROCESS_API_URL
from docschema.errors import InvalidFieldTree
from docschema.schemas.fields import FieldType, parse_tree
from docschema.schemas.process import ProcessResponse
from docschema.services.compiler import compile_schema, to_type_map
from docschema.services.process_client import DocumentProcessingClient, ProcessingError

logger = logging.getLogger(__name__)

router = APIRouter()


def build_schemas(raw_schema: str) -> Tuple[Dict[str, str], Optional[Dict[str, Any]]]:
    """
    Read the submitted schema form field.

    Accepts either:
    - a field tree (JSON list of fields) -> type map + compiled schema
    - a flat {name: type} map           -> type map only

    Raises:
    - InvalidFieldTree for anything else
    """
    try:
        payload = json.loads(raw_schema)
    except ValueError:
        raise InvalidFieldTree("schema is not valid JSON")

    if isinstance(payload, list):
        fields = parse_tree(payload)
        return to_type_map(fields), compile_schema(fields)

    if isinstance(payload, dict):
        allowed = {member.value for member in FieldType}
        for name, field_type in payload.items():
            if not name:
                raise InvalidFieldTree("field name must not be empty")
            if field_type not in allowed:
                raise InvalidFieldTree(f"unknown field type {field_type!r}", name)
        return dict(payload), None

    raise InvalidFieldTree("schema must be a list of fields or a name-to-type map")


@router.post(
    "",
    response_model=ProcessResponse,
    status_code=status.HTTP_200_OK,
    summary="Extract schema fields from a document",
    description=(
        "Upload a document together with the field schema (JSON). The "
        "document is sent to the processing service, which returns the "
        "OCR text lines and the extracted field values."
    )
)
async def process_document(
    file: UploadFile = File(...),
    schema: str = Form(...)
):
    """
    Errors:
    - 400 Bad Request: missing/empty file or invalid schema
    - 4xx/5xx: passed through from the processing service
    - 502 Bad Gateway: processing service unreachable
    """
    if not file.filename:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Document file is required"
        )

    file_bytes = await file.read()
    if not file_bytes:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Uploaded document is empty"
        )

    try:
        type_map, json_schema = build_schemas(schema)
    except InvalidFieldTree as error:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(error)
        )

    if not type_map:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Please add at least one field to the schema"
        )

    client = DocumentProcessingClient(
        url=PROCESS_API_URL,
        timeout=PROCESS_API_TIMEOUT,
        max_retries=PROCESS_API_MAX_RETRIES
    )

    try:
        # requests is blocking, keep it off the event loop
        return await run_in_threadpool(
            client.process,
            file_bytes=file_bytes,
            filename=file.filename,
            content_type=file.content_type,
            type_map=type_map,
            json_schema=json_schema
        )
    except ProcessingError as error:
        logger.error(f"Processing '{file.filename}' failed: {error}")
        raise HTTPException(
            status_code=error.status_code or status.HTTP_502_BAD_GATEWAY,
            detail=str(error)
        )
