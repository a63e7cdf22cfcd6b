"""Event payloads published on the in-process event bus."""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, Field


class EventKind(StrEnum):
    EDITOR_CONTENT_UPDATE = "editor-content-update"
    FILE_TRACKING_OPERATION = "file-tracking-operation"


class ChangeType(StrEnum):
    INSERT = "insert"
    REMOVE = "remove"


class TrackingOperationType(StrEnum):
    START = "start"
    STOP = "stop"
    SUSPEND = "suspend"
    RESUME = "resume"
    MOVE = "move"


class EditorChanges(BaseModel):
    """A single content edit made in an editor working copy."""

    file_location: str = Field(alias="fileLocation")
    project_path: str | None = Field(None, alias="projectPath")
    working_copy_owner_id: str | None = Field(None, alias="workingCopyOwnerId")
    type: ChangeType = ChangeType.INSERT
    offset: int = Field(0, ge=0)
    length: int = Field(0, ge=0)
    text: str = ""

    model_config = {"populate_by_name": True}


class FileTrackingOperation(BaseModel):
    """A request to start/stop tracking a file (or a move of a tracked file)."""

    path: str
    old_path: str | None = Field(None, alias="oldPath")
    type: TrackingOperationType

    model_config = {"populate_by_name": True}


class EditorContentUpdateEvent(BaseModel):
    kind: ClassVar[EventKind] = EventKind.EDITOR_CONTENT_UPDATE

    endpoint_id: str
    changes: EditorChanges


class FileTrackingOperationEvent(BaseModel):
    kind: ClassVar[EventKind] = EventKind.FILE_TRACKING_OPERATION

    endpoint_id: str
    operation: FileTrackingOperation


Event = EditorContentUpdateEvent | FileTrackingOperationEvent
