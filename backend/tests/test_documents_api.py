import io

import pytest

GENERATE_BODY = {"date": "2025-03-14", "signature_name": "A. Fon"}


def make_upload_file(filename: str, content: bytes = b"%PDF-1.4 test content") -> dict:
    """Helper to create a file upload payload."""
    return {"file": (filename, io.BytesIO(content), "application/octet-stream")}


# ── Requirements ──


@pytest.mark.asyncio
async def test_requirements_for_cocoa_to_france(client):
    response = await client.get("/api/v1/shipments/s_5001/requirements")
    assert response.status_code == 200
    data = response.json()
    assert data["shipment_id"] == "s_5001"
    assert [r["doc_key"] for r in data["requirements"]] == ["COO", "PHYTO"]
    assert data["requirements"][0]["label"] == "Certificate of Origin"


@pytest.mark.asyncio
async def test_requirements_for_uk_sea_freight(client):
    response = await client.get("/api/v1/shipments/s_5004/requirements")
    keys = [r["doc_key"] for r in response.json()["requirements"]]
    assert keys == ["PHYTO", "CUSTOMS_EXPORT_DECLARATION"]


@pytest.mark.asyncio
async def test_requirements_unknown_shipment(client):
    response = await client.get("/api/v1/shipments/s_missing/requirements")
    assert response.status_code == 404


# ── Catalogue ──


@pytest.mark.asyncio
async def test_list_documents_creates_catalogue(client):
    response = await client.get("/api/v1/shipments/s_5003/documents")
    assert response.status_code == 200
    data = response.json()
    assert data["created"] is True
    assert [d["doc_key"] for d in data["documents"]] == [
        "COO", "INSURANCE", "INVOICE", "PACKING_LIST",
    ]
    for doc in data["documents"]:
        assert doc["status"] == "required"
        assert doc["status_label"] == "Required"
        assert doc["versions"] == []

    again = await client.get("/api/v1/shipments/s_5003/documents")
    assert again.json()["created"] is False
    assert {d["id"] for d in again.json()["documents"]} == {d["id"] for d in data["documents"]}


@pytest.mark.asyncio
async def test_list_documents_unknown_shipment(client):
    response = await client.get("/api/v1/shipments/s_missing/documents")
    assert response.status_code == 404


# ── Generate ──


@pytest.mark.asyncio
async def test_generate_invoice(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/INVOICE/generate", json=GENERATE_BODY
    )
    assert response.status_code == 201
    data = response.json()
    assert data["doc_key"] == "INVOICE"
    assert data["label"] == "Commercial Invoice"
    assert data["status"] == "ready"
    assert data["current_version"] == 1
    assert data["versions"][0]["file_name"] == "invoice-INV-2025-0001.txt"
    assert data["versions"][0]["note"] == "Generated INVOICE"

    second = await client.post(
        "/api/v1/shipments/s_5001/documents/INVOICE/generate", json=GENERATE_BODY
    )
    assert second.json()["current_version"] == 2
    assert second.json()["versions"][1]["file_name"] == "invoice-INV-2025-0002.txt"


@pytest.mark.asyncio
async def test_generate_unsupported_document(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/COO/generate", json=GENERATE_BODY
    )
    assert response.status_code == 422
    assert "not supported" in response.json()["detail"]


@pytest.mark.asyncio
async def test_generate_unknown_key(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/VISA/generate", json=GENERATE_BODY
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_generate_unknown_shipment(client):
    response = await client.post(
        "/api/v1/shipments/s_missing/documents/INVOICE/generate", json=GENERATE_BODY
    )
    assert response.status_code == 404


# ── Upload ──


@pytest.mark.asyncio
async def test_upload_version(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/COO/versions",
        files=make_upload_file("coo-signed.pdf"),
        data={"note": "Chamber of commerce stamp", "created_by": "clerk"},
    )
    assert response.status_code == 201
    data = response.json()
    assert data["status"] == "ready"
    assert data["current_version"] == 1
    assert data["versions"][0]["created_by"] == "clerk"
    assert data["versions"][0]["note"] == "Chamber of commerce stamp"


@pytest.mark.asyncio
async def test_upload_rejects_invalid_file_type(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/COO/versions",
        files=make_upload_file("macro.exe"),
    )
    assert response.status_code == 400
    assert "not allowed" in response.json()["detail"]


@pytest.mark.asyncio
async def test_upload_unknown_shipment(client):
    response = await client.post(
        "/api/v1/shipments/s_missing/documents/COO/versions",
        files=make_upload_file("coo.pdf"),
    )
    assert response.status_code == 404


# ── Review ──


@pytest.mark.asyncio
async def test_approve_and_reject(client):
    await client.post("/api/v1/shipments/s_5001/documents/INVOICE/generate", json=GENERATE_BODY)

    response = await client.post(
        "/api/v1/shipments/s_5001/documents/INVOICE/status",
        json={"status": "signed", "note": "Checked against PO"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "signed"
    assert response.json()["versions"][0]["note"] == "Checked against PO"

    response = await client.post(
        "/api/v1/shipments/s_5001/documents/INVOICE/status",
        json={"status": "rejected"},
    )
    assert response.json()["status"] == "rejected"
    assert len(response.json()["versions"]) == 1


@pytest.mark.asyncio
async def test_legacy_approved_status_is_stored_as_signed(client):
    await client.post(
        "/api/v1/shipments/s_5001/documents/COO/versions", files=make_upload_file("coo.pdf")
    )
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/COO/status", json={"status": "approved"}
    )
    assert response.status_code == 200
    assert response.json()["status"] == "signed"


@pytest.mark.asyncio
async def test_list_filter_accepts_legacy_status(client):
    await client.post(
        "/api/v1/shipments/s_5001/documents/COO/versions", files=make_upload_file("coo.pdf")
    )
    await client.post(
        "/api/v1/shipments/s_5001/documents/COO/status", json={"status": "signed"}
    )

    for status in ("approved", "signed"):
        response = await client.get("/api/v1/documents", params={"status": status})
        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["documents"][0]["doc_key"] == "COO"
        assert data["documents"][0]["status"] == "signed"


@pytest.mark.asyncio
async def test_approve_without_versions(client):
    await client.get("/api/v1/shipments/s_5001/documents")
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/PHYTO/status", json={"status": "signed"}
    )
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_status_for_missing_document(client):
    response = await client.post(
        "/api/v1/shipments/s_5001/documents/INSURANCE/status", json={"status": "signed"}
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_restore_current_version(client):
    for _ in range(2):
        await client.post(
            "/api/v1/shipments/s_5001/documents/PACKING_LIST/generate", json=GENERATE_BODY
        )

    response = await client.put(
        "/api/v1/shipments/s_5001/documents/PACKING_LIST/current-version", json={"version": 1}
    )
    assert response.status_code == 200
    assert response.json()["current_version"] == 1
    assert len(response.json()["versions"]) == 2

    missing = await client.put(
        "/api/v1/shipments/s_5001/documents/PACKING_LIST/current-version", json={"version": 9}
    )
    assert missing.status_code == 404


# ── Cross-shipment listing ──


@pytest.mark.asyncio
async def test_list_all_documents(client):
    await client.get("/api/v1/shipments/s_5001/documents")
    await client.post("/api/v1/shipments/s_5002/documents/INVOICE/generate", json=GENERATE_BODY)

    response = await client.get("/api/v1/documents")
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 5
    assert data["documents"][0]["status"] == "required"
    assert data["documents"][-1]["shipment_id"] == "s_5002"

    ready = await client.get("/api/v1/documents", params={"status": "ready"})
    assert ready.json()["total"] == 1
    assert ready.json()["documents"][0]["doc_key"] == "INVOICE"
