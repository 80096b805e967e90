import enum
from datetime import datetime

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from prolist.models.base import Base, TimestampMixin


class DocumentKey(str, enum.Enum):
    COO = "COO"
    PHYTO = "PHYTO"
    INSURANCE = "INSURANCE"
    INVOICE = "INVOICE"
    PACKING_LIST = "PACKING_LIST"
    BILL_OF_LADING = "BILL_OF_LADING"
    CUSTOMS_EXPORT_DECLARATION = "CUSTOMS_EXPORT_DECLARATION"


class DocumentStatus(str, enum.Enum):
    REQUIRED = "required"
    DRAFT = "draft"
    READY = "ready"
    SUBMITTED = "submitted"
    UNDER_REVIEW = "under_review"
    SIGNED = "signed"
    ACTIVE = "active"
    EXPIRED = "expired"
    REJECTED = "rejected"
    # Legacy values still found in older rows; normalized on read.
    GENERATED = "generated"
    APPROVED = "approved"


class ShipmentDocument(Base, TimestampMixin):
    """One document slot per (shipment, document key)."""

    __tablename__ = "shipment_documents"
    __table_args__ = (
        UniqueConstraint("shipment_id", "doc_key", name="uq_shipment_documents_shipment_key"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    shipment_id: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    doc_key: Mapped[DocumentKey] = mapped_column(
        SAEnum(
            DocumentKey,
            name="document_key",
            values_callable=lambda e: [member.value for member in e],
        ),
        nullable=False,
    )
    status: Mapped[DocumentStatus] = mapped_column(
        SAEnum(
            DocumentStatus,
            name="document_status",
            values_callable=lambda e: [member.value for member in e],
        ),
        default=DocumentStatus.REQUIRED,
        nullable=False,
    )
    current_version: Mapped[int | None] = mapped_column(Integer, nullable=True)
    revision: Mapped[int] = mapped_column(Integer, nullable=False)

    versions: Mapped[list["ShipmentDocumentVersion"]] = relationship(
        back_populates="document",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="ShipmentDocumentVersion.version",
    )

    __mapper_args__ = {"version_id_col": revision}


class ShipmentDocumentVersion(Base):
    __tablename__ = "document_versions"
    __table_args__ = (
        UniqueConstraint("document_id", "version", name="uq_document_versions_document_version"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    document_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("shipment_documents.id", ondelete="CASCADE"), nullable=False, index=True
    )
    version: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    created_by: Mapped[str] = mapped_column(String(200), nullable=False)
    file_ref: Mapped[str] = mapped_column(String(1024), nullable=False)
    file_name: Mapped[str] = mapped_column(String(512), nullable=False)
    note: Mapped[str | None] = mapped_column(Text, nullable=True)

    document: Mapped[ShipmentDocument] = relationship(back_populates="versions")


class DocumentSequence(Base):
    """Named counters backing document numbers (e.g. invoice_2025)."""

    __tablename__ = "document_sequences"

    name: Mapped[str] = mapped_column(String(100), primary_key=True)
    value: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
