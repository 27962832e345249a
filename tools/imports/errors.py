"""Omnigage Imports — Pipeline errors.

Every error aborts the pipeline run. None are retried; the outermost caller
reports them.
"""
from typing import Optional


class ImportPipelineError(Exception):
    """Base class for all import pipeline failures."""

    stage = "pipeline"

    def __init__(self, message: str, status_code: Optional[int] = None, body: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ImportFileNotFound(ImportPipelineError, FileNotFoundError):
    stage = "resolve"


class UnsupportedFileType(ImportPipelineError, ValueError):
    stage = "resolve"


class RegistrationFailed(ImportPipelineError):
    stage = "register"


class TransferFailed(ImportPipelineError):
    """Storage rejected the presigned POST (anything but 204) or was unreachable."""

    stage = "transfer"


class SubmissionFailed(ImportPipelineError):
    stage = "submit"
