"""Pydantic schemas for the audit log."""

from datetime import datetime

from pydantic import BaseModel, Field


class AuditEventResponse(BaseModel):
    id: str
    event_type: str
    entity_type: str | None = None
    entity_id: str | None = None
    shipment_id: str | None = None
    action: str | None = None
    actor: str | None = None
    event_data: dict | None = None
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class AuditEventListResponse(BaseModel):
    events: list[AuditEventResponse]
    total: int
    page: int
    per_page: int


class AuditStatsResponse(BaseModel):
    total_events: int = 0
    events_by_type: dict[str, int] = Field(default_factory=dict)
    events_by_actor: dict[str, int] = Field(default_factory=dict)
