"""Project model management: GET/PUT/DELETE /projects."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException

from pomreconciler.api.deps import get_runtime
from pomreconciler.api.runtime import ReconcileRuntime
from pomreconciler.api.schemas import ProjectResponse, ProjectUpdateRequest
from pomreconciler.models.project import ProjectUnit
from pomreconciler.service.collaborators import AccessDeniedError

router = APIRouter()


def _project_response(unit: ProjectUnit) -> ProjectResponse:
    return ProjectResponse(
        identity=unit.identity, problems=[p.description for p in unit.problems]
    )


@router.get("", response_model=list[ProjectResponse])
async def list_projects(
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> list[ProjectResponse]:
    """List tracked projects."""
    return [_project_response(u) for u in runtime.registry.list_units()]


@router.put("", response_model=ProjectResponse)
async def put_project(
    body: ProjectUpdateRequest,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> ProjectResponse:
    """Track a project (or replace its problems)."""
    try:
        unit = runtime.registry.register(body.identity, body.problems)
    except AccessDeniedError:
        raise HTTPException(
            status_code=400, detail=f"Invalid project identity '{body.identity}'"
        ) from None
    return _project_response(unit)


@router.delete("", status_code=204)
async def remove_project(
    identity: str,
    runtime: ReconcileRuntime = Depends(get_runtime),  # noqa: B008
) -> None:
    """Stop tracking a project."""
    try:
        runtime.registry.remove(identity)
    except (KeyError, AccessDeniedError):
        raise HTTPException(status_code=404, detail=f"Project '{identity}' not found") from None
