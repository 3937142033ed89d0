"""
process_client.py

Client for the remote document processing endpoint.

The endpoint receives the uploaded document plus the field schema,
runs OCR and returns the OCR lines together with the extracted values.

Responsibilities:
- Build the multipart/form-data request (file + schema)
- Retry on network failures and server errors
- Report client errors (4xx) immediately, with the endpoint's detail
"""

import json
import logging
import time
from typing import Any, Dict, Optional

import requests

logger = logging.getLogger(__name__)


class ProcessingError(RuntimeError):
    """
    The processing endpoint could not handle the document.

    status_code is the remote HTTP status, or None when the endpoint
    could not be reached at all.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message)


class DocumentProcessingClient:
    """
    Thin wrapper over the document processing endpoint.
    """

    def __init__(
        self,
        url: str,
        timeout: float = 60,
        max_retries: int = 2,
        retry_delay: float = 1.0
    ):
        """
        Initialize the client.

        Parameters:
        - url: Full URL of the processing endpoint (e.g. http://host:81/process/)
        - timeout: Request timeout in seconds
        - max_retries: Number of attempts before giving up
        - retry_delay: Delay (seconds) between attempts
        """
        self.url = url
        self.timeout = timeout
        self.max_retries = max(1, max_retries)
        self.retry_delay = retry_delay

    @staticmethod
    def _error_detail(response: requests.Response) -> str:
        try:
            body = response.json()
        except ValueError:
            return response.text or "Error processing document"
        if isinstance(body, dict) and body.get("detail"):
            return str(body["detail"])
        return "Error processing document"

    def process(
        self,
        *,
        file_bytes: bytes,
        filename: str,
        content_type: Optional[str],
        type_map: Dict[str, str],
        json_schema: Optional[Dict[str, Any]] = None
    ) -> Dict[str, Any]:
        """
        Send one document for OCR and field extraction.

        Parameters:
        - file_bytes: Raw document content
        - filename: Original file name
        - content_type: MIME type reported by the uploader
        - type_map: Flat {field name: type} schema expected by the endpoint
        - json_schema: Full compiled validation schema (sent alongside)

        Returns:
        - Parsed JSON body ({"ocr_results": ..., "extracted_data": ...})

        Raises:
        - ProcessingError on a 4xx response or when all attempts failed
        """
        data = {"schema": json.dumps(type_map)}
        if json_schema is not None:
            data["json_schema"] = json.dumps(json_schema, separators=(",", ":"))

        files = {
            "file": (filename, file_bytes, content_type or "application/octet-stream")
        }

        last_error: Optional[ProcessingError] = None

        for attempt in range(1, self.max_retries + 1):
            try:
                response = requests.post(
                    self.url,
                    data=data,
                    files=files,
                    timeout=self.timeout
                )
            except requests.RequestException as error:
                logger.warning(f"Processing request failed (attempt {attempt}): {error}")
                last_error = ProcessingError(f"Processing service unreachable: {error}")
            else:
                if 200 <= response.status_code < 300:
                    logger.info(f"Processed '{filename}' ({len(file_bytes)} bytes)")
                    return response.json()

                detail = self._error_detail(response)

                # Client errors are not retried
                if 400 <= response.status_code < 500:
                    raise ProcessingError(detail, status_code=response.status_code)

                logger.warning(
                    f"Processing service error {response.status_code} (attempt {attempt}): {detail}"
                )
                last_error = ProcessingError(detail, status_code=response.status_code)

            if attempt < self.max_retries:
                time.sleep(self.retry_delay)

        logger.error(f"Processing failed after {self.max_retries} attempts: {last_error}")
        raise last_error
