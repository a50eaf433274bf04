"""
Schemas for the packing worklist and the report produced by the assembler.
"""

from enum import Enum
from pathlib import Path
from typing import List

from pydantic import BaseModel, ConfigDict, Field, field_validator


class WorklistEntry(BaseModel):
    """One file or folder to place in the archive."""
    model_config = ConfigDict(frozen=True)

    source: Path
    destination: str  # Full path inside the archive, used verbatim

    @field_validator("destination")
    @classmethod
    def _check_destination(cls, value: str) -> str:
        if not value:
            raise ValueError("destination inside the archive must not be empty")
        if "\x00" in value:
            raise ValueError("destination inside the archive must not contain NUL")
        return value


Worklist = List[WorklistEntry]


class AssemblerState(str, Enum):
    """Lifecycle of a single assembler run."""
    IDLE = "idle"
    FILE_CREATED = "file_created"
    WRITING = "writing"
    FINALIZED = "finalized"
    CLOSED = "closed"


class EntryFailure(BaseModel):
    """An archive entry that could not be written."""
    source: Path
    destination: str
    reason: str


class AssembleReport(BaseModel):
    """Outcome of writing a worklist to disk."""
    output_path: Path
    entries: List[str] = Field(default_factory=list)
    failures: List[EntryFailure] = Field(default_factory=list)

    @property
    def entry_count(self) -> int:
        return len(self.entries)

    @property
    def complete(self) -> bool:
        return not self.failures
