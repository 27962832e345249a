"""Omnigage Imports — Pipeline data models."""
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Optional, Tuple

XLSX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
CSV_MIME_TYPE = "text/csv"

# Ordered (name, value) pairs, applied verbatim
Pairs = Tuple[Tuple[str, str], ...]


class PipelineStage(str, Enum):
    START = "start"
    RESOLVED = "resolved"
    REGISTERED = "registered"
    TRANSFERRED = "transferred"
    SUBMITTED = "submitted"
    FAILED = "failed"


@dataclass(frozen=True)
class FileDescriptor:
    """Local file metadata captured once, before any network call."""
    path: Path
    name: str
    size_bytes: int
    mime_type: str


@dataclass(frozen=True)
class TransferContract:
    """Presigned POST contract dictated by the `uploads` response."""
    target_url: str
    required_headers: Pairs = ()
    required_form_fields: Pairs = ()


@dataclass(frozen=True)
class UploadIntent:
    id: str
    transfer_contract: TransferContract


@dataclass(frozen=True)
class ImportJob:
    id: str
    status: str = "queued"


@dataclass
class ImportResult:
    """Result of running a single file through the import pipeline."""
    filename: str
    stage: PipelineStage = PipelineStage.START
    file: Optional[FileDescriptor] = None
    upload_id: Optional[str] = None
    import_id: Optional[str] = None
    error: Optional[str] = None
    duration_ms: int = 0
    history: list = field(default_factory=list)  # stages reached, in order

    @property
    def succeeded(self) -> bool:
        return self.stage == PipelineStage.SUBMITTED

    def advance(self, stage: PipelineStage):
        self.stage = stage
        self.history.append(stage)
