from prolist.document_lifecycle.metadata import (
    document_label,
    is_system_renderable,
    number_prefix,
)
from prolist.document_lifecycle.status import (
    STATUS_ORDER,
    is_approval,
    is_attention_status,
    is_blocked_status,
    is_ready_status,
    normalize_status,
    status_label,
    status_sort_order,
    status_tone,
)
from prolist.models.document import DocumentKey, DocumentStatus
from prolist.schemas.document import DocumentRecord


class TestNormalizeStatus:
    def test_legacy_generated(self):
        assert normalize_status("generated") == DocumentStatus.READY

    def test_legacy_approved(self):
        assert normalize_status("approved") == DocumentStatus.SIGNED
        assert normalize_status(DocumentStatus.APPROVED) == DocumentStatus.SIGNED

    def test_canonical_values_pass_through(self):
        for status in STATUS_ORDER:
            assert normalize_status(status.value) == status

    def test_unknown_and_missing(self):
        assert normalize_status(None) == DocumentStatus.REQUIRED
        assert normalize_status("lost") == DocumentStatus.REQUIRED

    def test_record_normalizes_on_read(self):
        record = DocumentRecord.model_validate(
            {"id": "d", "shipment_id": "s", "doc_key": "INVOICE", "status": "generated"}
        )
        assert record.status == DocumentStatus.READY


class TestClassification:
    def test_approval(self):
        assert is_approval("signed")
        assert is_approval("active")
        assert is_approval("approved")
        assert not is_approval("ready")

    def test_groups(self):
        assert is_blocked_status("required")
        assert is_blocked_status("rejected")
        assert is_attention_status("under_review")
        assert is_ready_status("generated")
        assert not is_ready_status("draft")

    def test_labels_and_tones(self):
        assert status_label("under_review") == "Under review"
        assert status_label("approved") == "Signed"
        assert status_tone("required") == "negative"
        assert status_tone("ready") == "positive"

    def test_sort_order(self):
        assert status_sort_order("required") < status_sort_order("ready")
        assert status_sort_order("generated") == status_sort_order("ready")


class TestDocumentMetadata:
    def test_every_key_has_a_label_and_prefix(self):
        for key in DocumentKey:
            assert document_label(key)
            assert len(number_prefix(key)) == 3

    def test_labels(self):
        assert document_label(DocumentKey.INVOICE) == "Commercial Invoice"
        assert document_label(DocumentKey.PHYTO) == "Phytosanitary Certificate"

    def test_system_renderable(self):
        assert is_system_renderable(DocumentKey.INVOICE)
        assert is_system_renderable(DocumentKey.PACKING_LIST)
        assert not is_system_renderable(DocumentKey.COO)
