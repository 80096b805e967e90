"""Audit log endpoints — browse document workflow events."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from prolist.audit.service import AuditService
from prolist.dependencies import get_db
from prolist.schemas.audit import AuditEventListResponse, AuditEventResponse, AuditStatsResponse

router = APIRouter()


@router.get("/events", response_model=AuditEventListResponse)
async def list_events(
    shipment_id: str | None = None,
    entity_id: str | None = None,
    event_type: str | None = None,
    page: int = Query(1, ge=1),
    per_page: int = Query(50, ge=1, le=200),
    db: AsyncSession = Depends(get_db),
) -> AuditEventListResponse:
    events, total = await AuditService.get_events(
        db,
        shipment_id=shipment_id,
        entity_id=entity_id,
        event_type=event_type,
        page=page,
        per_page=per_page,
    )
    return AuditEventListResponse(
        events=[AuditEventResponse.model_validate(e) for e in events],
        total=total,
        page=page,
        per_page=per_page,
    )


@router.get("/stats", response_model=AuditStatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db)) -> AuditStatsResponse:
    stats = await AuditService.get_stats(db)
    return AuditStatsResponse(**stats)
