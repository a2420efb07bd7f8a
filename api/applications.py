from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends, Request

from schemas.application import StatusUpdateResponse
from services.registry import ApplicationRegistry

router = APIRouter(prefix="/api/applications", tags=["applications"])

MSG_STATUS_UPDATED = "Application status updated."


def get_registry(request: Request) -> ApplicationRegistry:
    return request.app.state.registry


@router.post("", status_code=201)
async def create_application(
    payload: Any = Body(None),
    registry: ApplicationRegistry = Depends(get_registry),
):
    app = await registry.create(payload)
    return app.to_response()


@router.get("")
async def list_applications(registry: ApplicationRegistry = Depends(get_registry)):
    apps = await registry.list()
    return [a.to_response() for a in apps]


@router.get("/{application_id}")
async def get_application(application_id: str, registry: ApplicationRegistry = Depends(get_registry)):
    app = await registry.get_by_id(application_id)
    return app.to_response()


@router.put("/{application_id}")
async def update_application_status(
    application_id: str,
    payload: Any = Body(None),
    registry: ApplicationRegistry = Depends(get_registry),
):
    status = payload.get("status") if isinstance(payload, dict) else None
    app = await registry.update_status(application_id, status)
    return StatusUpdateResponse(message=MSG_STATUS_UPDATED, application=app.to_response()).model_dump()
