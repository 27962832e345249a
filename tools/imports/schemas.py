"""Omnigage Imports — Request bodies and response parsing.

Request bodies are plain dicts handed to httpx's JSON encoder.
Responses are JSON:API documents; only the fields the pipeline needs are read.
"""
from typing import Any, Optional

from tools.imports.models import FileDescriptor, ImportJob, Pairs, TransferContract, UploadIntent


def build_upload_schema(descriptor: FileDescriptor) -> dict:
    """Omnigage `uploads` body. Flat object, not a JSON:API envelope."""
    return {
        "name": descriptor.name,
        "type": descriptor.mime_type,
        "size": descriptor.size_bytes,
    }


def build_import_contact_schema(upload_id: str) -> dict:
    """Omnigage `import-contacts` JSON:API document referencing an upload."""
    return {
        "data": {
            "type": "import-contacts",
            "attributes": {
                "status": "queued",
                "unique-primary-phone": True,
            },
            "relationships": {
                "upload": {
                    "data": {
                        "type": "uploads",
                        "id": upload_id,
                    },
                },
            },
        },
    }


def decode_ordered_pairs(items: Any, field_name: str = "pairs") -> Pairs:
    """Flatten a list of single-key objects into ordered (name, value) pairs.

    `[{"a": "1"}, {"b": "2"}]` -> `(("a", "1"), ("b", "2"))`. Objects with
    more than one key contribute all of them in their own order.
    A missing (None) list decodes to an empty tuple.

    Raises:
        ValueError: If items is not a list of objects.
    """
    if items is None:
        return ()
    if not isinstance(items, list):
        raise ValueError(f"{field_name} must be a list, got {type(items).__name__}")

    pairs = []
    for item in items:
        if not isinstance(item, dict):
            raise ValueError(f"{field_name} entries must be objects, got {type(item).__name__}")
        for name, value in item.items():
            pairs.append((str(name), "" if value is None else str(value)))
    return tuple(pairs)


def _data(document: Any) -> dict:
    if not isinstance(document, dict) or not isinstance(document.get("data"), dict):
        raise ValueError("response has no `data` object")
    return document["data"]


def _required_str(container: dict, key: str, label: str) -> str:
    value = container.get(key)
    if not isinstance(value, str) or not value:
        raise ValueError(f"response is missing `{label}`")
    return value


def parse_upload_response(document: Any) -> UploadIntent:
    """Extract the upload ID and presigned transfer contract.

    Raises:
        ValueError: If required fields are missing or malformed.
    """
    data = _data(document)
    upload_id = _required_str(data, "id", "data.id")

    attributes = data.get("attributes")
    if not isinstance(attributes, dict):
        raise ValueError("response is missing `data.attributes`")

    contract = TransferContract(
        target_url=_required_str(attributes, "request-url", "data.attributes.request-url"),
        required_headers=decode_ordered_pairs(
            attributes.get("request-headers"), "request-headers"),
        required_form_fields=decode_ordered_pairs(
            attributes.get("request-form-data"), "request-form-data"),
    )
    return UploadIntent(id=upload_id, transfer_contract=contract)


def parse_import_response(document: Any) -> ImportJob:
    """Extract the import job ID (and status, when present).

    Raises:
        ValueError: If `data.id` is missing.
    """
    data = _data(document)
    import_id = _required_str(data, "id", "data.id")

    status: Optional[str] = None
    attributes = data.get("attributes")
    if isinstance(attributes, dict):
        status = attributes.get("status")
    return ImportJob(id=import_id, status=status or "queued")
