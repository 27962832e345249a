"""
Omnigage Imports — Omnigage API Client
Registers uploads and creates contact imports.
Every request carries Basic authorization plus the X-Account-Key header.
"""
import base64
import logging
from typing import Optional, Type

import httpx

from config.settings import OmnigageConfig, config
from tools.imports.errors import ImportPipelineError, RegistrationFailed, SubmissionFailed
from tools.imports.models import FileDescriptor, ImportJob, UploadIntent
from tools.imports.schemas import (
    build_import_contact_schema,
    build_upload_schema,
    parse_import_response,
    parse_upload_response,
)

logger = logging.getLogger("omnigage.client")


def create_authorization(key: str, secret: str) -> str:
    """Basic authorization credential (RFC 2617): base64 of `key:secret`."""
    return base64.b64encode(f"{key}:{secret}".encode("utf-8")).decode("ascii")


def auth_headers(settings: OmnigageConfig) -> dict:
    """Headers attached to every Omnigage API call (never to storage)."""
    return {
        "Authorization": "Basic " + create_authorization(settings.token_key, settings.token_secret),
        "X-Account-Key": settings.account_key,
    }


class OmnigageClient:
    """Omnigage API wrapper for the contacts import flow. No retries."""

    def __init__(self, settings: OmnigageConfig = None,
                 transport: Optional[httpx.BaseTransport] = None):
        self._settings = settings or config.omnigage
        if not self._settings.is_configured:
            logger.warning("Omnigage token key/secret or account key not set — API calls will be rejected")

        self._base_url = self._settings.host
        self._client = httpx.Client(
            base_url=self._base_url,
            headers=auth_headers(self._settings),
            timeout=self._settings.timeout,
            transport=transport,
        )

    # -------------------------------------------------------
    # Transport
    # -------------------------------------------------------

    def _post(self, path: str, payload: dict,
              error_cls: Type[ImportPipelineError]) -> dict:
        """
        POST a JSON body and return the parsed JSON response.
        Any transport error, non-2xx status or non-JSON body raises error_cls.
        """
        try:
            resp = self._client.post(path, json=payload)
        except httpx.HTTPError as e:
            logger.error(f"Omnigage API POST {path} failed: {e}")
            raise error_cls(f"POST {path} failed: {e}") from e

        if resp.status_code >= 400:
            logger.error(f"Omnigage API POST {path} → {resp.status_code}: {resp.text[:200]}")
            raise error_cls(
                f"POST {path} returned {resp.status_code}",
                status_code=resp.status_code,
                body=resp.text,
            )

        try:
            return resp.json()
        except ValueError as e:
            logger.error(f"Omnigage API POST {path} returned non-JSON body: {resp.text[:200]}")
            raise error_cls(
                f"POST {path} returned an unparseable response",
                status_code=resp.status_code,
                body=resp.text,
            ) from e

    # -------------------------------------------------------
    # Uploads
    # -------------------------------------------------------

    def create_upload(self, descriptor: FileDescriptor) -> UploadIntent:
        """POST /uploads — register the file and receive the presigned contract."""
        document = self._post("uploads", build_upload_schema(descriptor), RegistrationFailed)
        try:
            intent = parse_upload_response(document)
        except ValueError as e:
            logger.error(f"Upload registration response invalid: {e}")
            raise RegistrationFailed(f"Invalid uploads response: {e}") from e

        logger.info(
            f"Upload ID: {intent.id} "
            f"({len(intent.transfer_contract.required_form_fields)} form fields, "
            f"{len(intent.transfer_contract.required_headers)} headers)"
        )
        return intent

    # -------------------------------------------------------
    # Contact imports
    # -------------------------------------------------------

    def create_contact_import(self, upload_id: str) -> ImportJob:
        """POST /import-contacts — queue ingestion of a stored upload."""
        document = self._post(
            "import-contacts", build_import_contact_schema(upload_id), SubmissionFailed
        )
        try:
            job = parse_import_response(document)
        except ValueError as e:
            logger.error(f"Import response invalid: {e}")
            raise SubmissionFailed(f"Invalid import-contacts response: {e}") from e

        logger.info(f"Import ID: {job.id} (status={job.status})")
        return job

    # -------------------------------------------------------
    # Cleanup
    # -------------------------------------------------------

    def close(self):
        """Close the HTTP client."""
        self._client.close()
        logger.debug("Omnigage client closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
