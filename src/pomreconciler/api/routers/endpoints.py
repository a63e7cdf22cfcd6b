"""Endpoint-scoped routes: async reconciliation, notifications, and events."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from pomreconciler.api.deps import get_runtime
from pomreconciler.api.runtime import ReconcileRuntime
from pomreconciler.api.schemas import (
    AcceptedResponse,
    NotificationListResponse,
    ReconcileRequest,
)
from pomreconciler.models.events import (
    EditorChanges,
    EditorContentUpdateEvent,
    FileTrackingOperation,
    FileTrackingOperationEvent,
)

router = APIRouter()


@router.post("/{endpoint_id}/reconcile", response_model=AcceptedResponse, status_code=202)
async def reconcile_for_endpoint(
    endpoint_id: str,
    body: ReconcileRequest,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> AcceptedResponse:
    """Schedule a pass whose result is delivered to the endpoint's notifications."""
    future = runtime.dispatcher.submit(endpoint_id, body.document_path)
    if future is None:
        raise HTTPException(status_code=503, detail="Reconciler is shutting down")
    return AcceptedResponse()


@router.get("/{endpoint_id}/notifications", response_model=NotificationListResponse)
async def drain_notifications(
    endpoint_id: str,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> NotificationListResponse:
    """Return (and clear) the notifications pending for an endpoint."""
    return NotificationListResponse(notifications=runtime.transmitter.drain(endpoint_id))


@router.post("/{endpoint_id}/events/editor-content", response_model=AcceptedResponse, status_code=202)
async def publish_editor_content(
    endpoint_id: str,
    body: EditorChanges,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> AcceptedResponse:
    """Publish an editor content update on the event bus."""
    runtime.events.publish(EditorContentUpdateEvent(endpoint_id=endpoint_id, changes=body))
    return AcceptedResponse()


@router.post("/{endpoint_id}/events/file-operation", response_model=AcceptedResponse, status_code=202)
async def publish_file_operation(
    endpoint_id: str,
    body: FileTrackingOperation,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> AcceptedResponse:
    """Publish a file tracking operation on the event bus."""
    runtime.events.publish(FileTrackingOperationEvent(endpoint_id=endpoint_id, operation=body))
    return AcceptedResponse()
