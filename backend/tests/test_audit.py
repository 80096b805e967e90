import pytest

from prolist.audit.service import AuditService, SqlEventRecorder


@pytest.mark.asyncio
async def test_log_event(db_session):
    event = await AuditService.log_event(
        db_session,
        event_type="DOCUMENT_GENERATED",
        entity_type="shipment_document",
        entity_id="doc_1",
        shipment_id="s_5001",
        actor="tester",
        event_data={"doc_key": "INVOICE", "version": 1},
    )
    assert event.id is not None
    assert event.action == "document_generated"


@pytest.mark.asyncio
async def test_get_events_filters(db_session):
    recorder = SqlEventRecorder(db_session)
    await recorder.record("DOCUMENT_GENERATED", shipment_id="s_5001", entity_id="doc_1")
    await recorder.record("DOCUMENT_APPROVED", shipment_id="s_5001", entity_id="doc_1", actor="reviewer")
    await recorder.record("DOCUMENT_GENERATED", shipment_id="s_5002", entity_id="doc_2")

    events, total = await AuditService.get_events(db_session, shipment_id="s_5001")
    assert total == 2
    assert {e.event_type for e in events} == {"DOCUMENT_GENERATED", "DOCUMENT_APPROVED"}
    assert all(e.entity_type == "shipment_document" for e in events)

    events, total = await AuditService.get_events(db_session, event_type="DOCUMENT_GENERATED")
    assert total == 2

    events, total = await AuditService.get_events(db_session, per_page=1, page=2)
    assert total == 3
    assert len(events) == 1


@pytest.mark.asyncio
async def test_get_stats(db_session):
    recorder = SqlEventRecorder(db_session)
    await recorder.record("DOCUMENT_GENERATED", shipment_id="s_5001", actor="tester")
    await recorder.record("DOCUMENT_GENERATED", shipment_id="s_5001", actor="tester")
    await recorder.record("DOCUMENT_APPROVED", shipment_id="s_5001", actor="reviewer")

    stats = await AuditService.get_stats(db_session)
    assert stats["total_events"] == 3
    assert stats["events_by_type"] == {"DOCUMENT_GENERATED": 2, "DOCUMENT_APPROVED": 1}
    assert stats["events_by_actor"] == {"tester": 2, "reviewer": 1}


@pytest.mark.asyncio
async def test_workflow_events_via_api(client):
    await client.get("/api/v1/shipments/s_5001/documents")
    await client.post(
        "/api/v1/shipments/s_5001/documents/INVOICE/generate",
        json={"date": "2025-03-14", "created_by": "exporter"},
    )

    response = await client.get("/api/v1/audit/events", params={"shipment_id": "s_5001"})
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 2
    types = {e["event_type"] for e in data["events"]}
    assert types == {"DOCUMENT_CATALOGUE_RECONCILED", "DOCUMENT_GENERATED"}

    generated = next(e for e in data["events"] if e["event_type"] == "DOCUMENT_GENERATED")
    assert generated["actor"] == "exporter"
    assert generated["event_data"]["number"] == "INV-2025-0001"


@pytest.mark.asyncio
async def test_audit_stats_endpoint(client):
    response = await client.get("/api/v1/audit/stats")
    assert response.status_code == 200
    assert response.json()["total_events"] == 0
