"""
templates.py (API)

Template catalog endpoints.

Endpoints:
- GET /templates        - List available templates in picker order
- GET /templates/{key}  - Fields of one template
"""

from typing import List

from fastapi import APIRouter, HTTPException, status

from docschema.errors import UnknownTemplate
from docschema.schemas.builder import TemplateDetail, TemplateSummary
from docschema.services.templates import get_template, get_template_name, list_templates

router = APIRouter()


@router.get(
    "",
    response_model=List[TemplateSummary],
    summary="List schema templates",
    description="Pre-built field sets for common documents (invoice, receipt, business card)."
)
def list_templates_endpoint():
    return [TemplateSummary(key=key, name=name) for key, name in list_templates()]


@router.get(
    "/{key}",
    response_model=TemplateDetail,
    summary="Get the fields of a template"
)
def get_template_endpoint(key: str):
    """
    Return one template.

    Errors:
    - 404 Not Found: key is not part of the catalog
    """
    try:
        return TemplateDetail(key=key, name=get_template_name(key), fields=get_template(key))
    except UnknownTemplate as error:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(error)
        )
