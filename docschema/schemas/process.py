"""
process.py (schemas)

Response models of the remote document processing endpoint.

The endpoint runs OCR on the uploaded document and then extracts the
fields described by the submitted schema. These models only describe
what comes back; this service does not interpret the values.
"""

from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, Field


class TextLine(BaseModel):
    """One line of OCR text with its position on the page."""

    text: str = Field(..., description="Recognized text")

    confidence: float = Field(..., description="OCR confidence between 0 and 1")

    bbox: Tuple[float, float, float, float] = Field(
        ...,
        description="Bounding box as (x1, y1, x2, y2)"
    )

    polygon: List[Tuple[float, float]] = Field(
        default_factory=list,
        description="Outline of the line as (x, y) points"
    )


class OCRResults(BaseModel):
    text_lines: List[TextLine] = Field(default_factory=list)

    full_text: str = Field(default="", description="All recognized text joined together")


class ProcessResponse(BaseModel):
    """
    Result of processing one document.

    extracted_data maps each schema field name to the value found in the
    document (string, number, boolean, list, object or null).
    """

    ocr_results: OCRResults

    extracted_data: Dict[str, Any] = Field(default_factory=dict)
