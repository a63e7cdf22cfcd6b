"""Synchronous reconciliation endpoint: POST /reconcile."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from pomreconciler.api.deps import get_runtime
from pomreconciler.api.runtime import ReconcileRuntime
from pomreconciler.api.schemas import ReconcileRequest, ReconcileResponse

router = APIRouter()


@router.post("", response_model=ReconcileResponse)
async def reconcile(
    body: ReconcileRequest,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> ReconcileResponse:
    """Reconcile a descriptor and return its problems."""
    problems = await runtime.reconciler.reconcile_async(body.document_path)
    return ReconcileResponse(document_path=body.document_path, problems=problems)
