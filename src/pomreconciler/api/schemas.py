"""API request/response Pydantic schemas."""

from __future__ import annotations

from pydantic import BaseModel, Field

from pomreconciler.models.problems import Problem
from pomreconciler.service.transmitter import Notification


class ReconcileRequest(BaseModel):
    """Request body for the reconcile endpoints."""

    document_path: str = Field(alias="documentPath", min_length=1)

    model_config = {"populate_by_name": True}


class ReconcileResponse(BaseModel):
    """Response body for POST /reconcile."""

    document_path: str = Field(alias="documentPath")
    problems: list[Problem] = []

    model_config = {"populate_by_name": True}


class AcceptedResponse(BaseModel):
    """Response body for asynchronously handled requests."""

    accepted: bool = True


class NotificationListResponse(BaseModel):
    """Response body for GET /endpoints/{endpoint_id}/notifications."""

    notifications: list[Notification] = []


class ProjectUpdateRequest(BaseModel):
    """Request body for PUT /projects."""

    identity: str = Field(min_length=1, description="Workspace folder owning the descriptor")
    problems: list[str] = []


class ProjectResponse(BaseModel):
    """A tracked project and its outstanding problems."""

    identity: str
    problems: list[str] = []


class HealthResponse(BaseModel):
    """Response body for GET /health."""

    status: str = "ok"
    version: str
