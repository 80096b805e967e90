"""AuditService — immutable append-only log of document workflow events.

Static methods so any module can call AuditService.log_event() directly
without DI wiring.
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from prolist.models.audit import AuditEvent


class AuditService:
    """Static audit event logger and query interface."""

    @staticmethod
    async def log_event(
        db: AsyncSession,
        *,
        event_type: str,
        entity_type: str | None = None,
        entity_id: str | None = None,
        shipment_id: str | None = None,
        action: str | None = None,
        actor: str = "system",
        event_data: dict | None = None,
    ) -> AuditEvent:
        """Append an immutable audit event."""
        event = AuditEvent(
            id=str(uuid.uuid4()),
            event_type=event_type,
            entity_type=entity_type,
            entity_id=entity_id,
            shipment_id=shipment_id,
            action=action or event_type.lower(),
            actor=actor,
            event_data=event_data,
        )
        db.add(event)
        await db.flush()
        return event

    @staticmethod
    async def get_events(
        db: AsyncSession,
        *,
        shipment_id: str | None = None,
        entity_id: str | None = None,
        event_type: str | None = None,
        page: int = 1,
        per_page: int = 50,
    ) -> tuple[list[AuditEvent], int]:
        """Query audit events with filtering and pagination, newest first."""
        query = select(AuditEvent)
        count_query = select(func.count(AuditEvent.id))

        if shipment_id:
            query = query.where(AuditEvent.shipment_id == shipment_id)
            count_query = count_query.where(AuditEvent.shipment_id == shipment_id)
        if entity_id:
            query = query.where(AuditEvent.entity_id == entity_id)
            count_query = count_query.where(AuditEvent.entity_id == entity_id)
        if event_type:
            query = query.where(AuditEvent.event_type == event_type)
            count_query = count_query.where(AuditEvent.event_type == event_type)

        total = (await db.execute(count_query)).scalar_one()

        offset = (page - 1) * per_page
        query = (
            query.order_by(AuditEvent.created_at.desc(), AuditEvent.id)
            .offset(offset)
            .limit(per_page)
        )
        result = await db.execute(query)
        events = list(result.scalars().all())

        return events, total

    @staticmethod
    async def get_stats(db: AsyncSession) -> dict:
        total = (await db.execute(select(func.count(AuditEvent.id)))).scalar_one()

        rows = (await db.execute(
            select(AuditEvent.event_type, func.count(AuditEvent.id))
            .group_by(AuditEvent.event_type)
        )).all()
        by_type = {row[0] or "unknown": row[1] for row in rows}

        rows = (await db.execute(
            select(AuditEvent.actor, func.count(AuditEvent.id))
            .group_by(AuditEvent.actor)
        )).all()
        by_actor = {row[0] or "unknown": row[1] for row in rows}

        return {
            "total_events": total,
            "events_by_type": by_type,
            "events_by_actor": by_actor,
        }


class SqlEventRecorder:
    """EventRecorder that writes document events into the audit log."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(
        self,
        event_type: str,
        *,
        shipment_id: str | None = None,
        entity_id: str | None = None,
        actor: str = "system",
        data: dict | None = None,
    ) -> None:
        await AuditService.log_event(
            self.db,
            event_type=event_type,
            entity_type="shipment_document",
            entity_id=entity_id,
            shipment_id=shipment_id,
            actor=actor,
            event_data=data,
        )
