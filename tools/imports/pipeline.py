"""Omnigage Imports — Contact import pipeline.

Orchestrates: resolve → register upload → storage POST → create import.
Strictly sequential; the first failure stops the run and is re-raised.
Nothing is rolled back: a failed transfer leaves the upload registered,
a failed submission leaves the stored file without an import.
"""
import logging
import time
from pathlib import Path
from typing import Callable, Optional, Union

from config.settings import OmnigageConfig, config
from omnigage_client import OmnigageClient
from tools.imports.errors import ImportPipelineError
from tools.imports.models import ImportResult, PipelineStage
from tools.imports.resolver import resolve_file
from tools.imports.transfer import upload_to_storage

logger = logging.getLogger("omnigage.imports.pipeline")


class ContactImportPipeline:
    """
    One pipeline instance per imported file.
    Holds no state shared with other instances.
    """

    def __init__(self, settings: OmnigageConfig = None,
                 client_factory: Callable[[OmnigageConfig], OmnigageClient] = OmnigageClient,
                 uploader: Callable = upload_to_storage):
        self.settings = settings or config.omnigage
        self._client_factory = client_factory
        self._uploader = uploader

    def run(self, path: Union[str, Path], result: Optional[ImportResult] = None) -> ImportResult:
        """
        Import a single CSV/XLSX file into the Omnigage account.

        Args:
            path: Local path to the file.
            result: Optional result to fill in; the caller keeps it on failure.

        Returns:
            ImportResult at stage SUBMITTED.

        Raises:
            ImportPipelineError: Whatever stage failed, unchanged.
        """
        start = time.time()
        result = result or ImportResult(filename=Path(path).name)
        result.advance(PipelineStage.START)

        try:
            # Step 1: Resolve (no network before this succeeds)
            descriptor = resolve_file(path)
            result.file = descriptor
            result.advance(PipelineStage.RESOLVED)
            logger.info(f"File: {descriptor.name} ({descriptor.size_bytes} bytes, {descriptor.mime_type})")

            with self._client_factory(self.settings) as client:
                # Step 2: Register upload
                intent = client.create_upload(descriptor)
                result.upload_id = intent.id
                result.advance(PipelineStage.REGISTERED)

                # Step 3: Presigned POST to storage
                content = descriptor.path.read_bytes()
                if len(content) != descriptor.size_bytes:
                    logger.warning(
                        f"{descriptor.name} changed size since registration: "
                        f"declared {descriptor.size_bytes} bytes, read {len(content)}"
                    )
                self._uploader(
                    intent.transfer_contract, intent.id, descriptor, content,
                    timeout=self.settings.timeout,
                )
                result.advance(PipelineStage.TRANSFERRED)

                # Step 4: Create import
                job = client.create_contact_import(intent.id)
                result.import_id = job.id
                result.advance(PipelineStage.SUBMITTED)

        except (ImportPipelineError, OSError) as e:
            result.advance(PipelineStage.FAILED)
            result.error = str(e)
            logger.error(f"Import of {result.filename} failed: {e}")
            raise
        finally:
            result.duration_ms = int((time.time() - start) * 1000)

        logger.info(f"Import of {result.filename} queued in {result.duration_ms}ms")
        return result


def import_contacts(path: Union[str, Path], settings: OmnigageConfig = None) -> ImportResult:
    """Convenience wrapper: run one file through a fresh pipeline."""
    return ContactImportPipeline(settings).run(path)
