"""Pydantic schemas for document records, versions and requirement sets."""

from datetime import date as date_type, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from prolist.document_lifecycle.metadata import document_label
from prolist.document_lifecycle.status import normalize_status, status_label, status_tone
from prolist.models.document import DocumentKey, DocumentStatus


class DocumentVersion(BaseModel):
    """One immutable file snapshot. Only the note may change later."""

    model_config = ConfigDict(from_attributes=True, frozen=True)

    id: str
    version: int = Field(..., ge=1)
    created_at: datetime
    created_by: str
    file_ref: str
    file_name: str
    note: str | None = None


class DocumentRecord(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    shipment_id: str
    doc_key: DocumentKey
    status: DocumentStatus = DocumentStatus.REQUIRED
    current_version: int | None = None
    versions: list[DocumentVersion] = Field(default_factory=list)
    revision: int = 0

    @field_validator("status", mode="before")
    @classmethod
    def _normalize_legacy_status(cls, value):
        return normalize_status(value)

    def get_version(self, number: int | None) -> DocumentVersion | None:
        if number is None:
            return None
        for version in self.versions:
            if version.version == number:
                return version
        return None

    @property
    def current(self) -> DocumentVersion | None:
        return self.get_version(self.current_version)


class RequirementSet(BaseModel):
    """Documents a shipment must carry, with the reason each one applies."""

    model_config = ConfigDict(frozen=True)

    required: frozenset[DocumentKey] = frozenset()
    reasons: dict[DocumentKey, str] = Field(default_factory=dict)

    def __contains__(self, key: DocumentKey) -> bool:
        return key in self.required


# ── API request/response schemas ──


class GenerateDocumentRequest(BaseModel):
    number: str | None = None
    date: date_type
    signature_name: str | None = None
    created_by: str | None = None


class SetStatusRequest(BaseModel):
    status: DocumentStatus
    note: str | None = None
    created_by: str | None = None


class SetCurrentVersionRequest(BaseModel):
    version: int = Field(..., ge=1)
    created_by: str | None = None


class DocumentVersionResponse(BaseModel):
    model_config = {"from_attributes": True}

    id: str
    version: int
    created_at: datetime
    created_by: str
    file_name: str
    file_ref: str
    note: str | None = None


class DocumentRecordResponse(BaseModel):
    id: str
    shipment_id: str
    doc_key: DocumentKey
    label: str
    status: DocumentStatus
    status_label: str
    status_tone: str
    current_version: int | None = None
    versions: list[DocumentVersionResponse] = Field(default_factory=list)
    revision: int

    @classmethod
    def from_record(cls, record: DocumentRecord) -> "DocumentRecordResponse":
        return cls(
            id=record.id,
            shipment_id=record.shipment_id,
            doc_key=record.doc_key,
            label=document_label(record.doc_key),
            status=record.status,
            status_label=status_label(record.status),
            status_tone=status_tone(record.status),
            current_version=record.current_version,
            versions=[DocumentVersionResponse.model_validate(v) for v in record.versions],
            revision=record.revision,
        )


class DocumentCatalogueResponse(BaseModel):
    shipment_id: str
    documents: list[DocumentRecordResponse]
    created: bool


class DocumentListResponse(BaseModel):
    documents: list[DocumentRecordResponse]
    total: int


class RequirementResponse(BaseModel):
    doc_key: DocumentKey
    label: str
    reason: str


class RequirementSetResponse(BaseModel):
    shipment_id: str
    requirements: list[RequirementResponse]
