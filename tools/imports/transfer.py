"""Omnigage Imports — Presigned POST to object storage.

The `uploads` response dictates the target URL, headers and form fields.
They are applied verbatim, then the file is posted as multipart/form-data.
Success is HTTP 204; nothing else counts.
"""
import logging
from typing import List, Optional, Tuple

import httpx

from tools.imports.errors import TransferFailed
from tools.imports.models import FileDescriptor, TransferContract

logger = logging.getLogger("omnigage.imports.transfer")

_SUCCESS_STATUS = 204
_DEFAULT_TIMEOUT = 120.0

MultipartPart = Tuple[str, tuple]


def build_multipart_parts(contract: TransferContract, descriptor: FileDescriptor,
                          content: bytes) -> List[MultipartPart]:
    """Ordered httpx `files=` entries for the presigned POST.

    Form fields first (source order, duplicates kept), then the Content-Type
    field required by the presigned policy, then the file itself. Text parts
    carry no filename, so they are sent as plain form fields.
    """
    parts: List[MultipartPart] = [
        (name, (None, value.encode("utf-8")))
        for name, value in contract.required_form_fields
    ]
    parts.append(("Content-Type", (None, descriptor.mime_type.encode("utf-8"))))
    parts.append(("file", (descriptor.name, content, descriptor.mime_type)))
    return parts


def upload_to_storage(contract: TransferContract, upload_id: str,
                      descriptor: FileDescriptor, content: bytes,
                      timeout: float = _DEFAULT_TIMEOUT,
                      transport: Optional[httpx.BaseTransport] = None):
    """POST the file to storage using the presigned contract.

    Uses its own HTTP client: Omnigage authorization must never reach storage.

    Raises:
        TransferFailed: On any status other than 204, or a transport error.
    """
    parts = build_multipart_parts(contract, descriptor, content)
    logger.debug(
        f"Upload {upload_id}: posting {descriptor.name} ({len(content)} bytes, "
        f"{len(parts)} parts) to {contract.target_url}"
    )

    try:
        with httpx.Client(headers=list(contract.required_headers), timeout=timeout,
                          transport=transport) as client:
            resp = client.post(contract.target_url, files=parts)
    except httpx.HTTPError as e:
        logger.error(f"Storage upload failed for upload {upload_id}: {e}")
        raise TransferFailed(f"Storage upload failed: {e}") from e

    if resp.status_code != _SUCCESS_STATUS:
        logger.error(
            f"Storage upload for upload {upload_id} → {resp.status_code}: {resp.text[:200]}"
        )
        raise TransferFailed(
            f"Storage upload failed with status {resp.status_code}",
            status_code=resp.status_code,
            body=resp.text,
        )

    logger.info(f"Successfully uploaded file {descriptor.name} (upload {upload_id})")
