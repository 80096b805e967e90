"""Shipments, catalogue, document records with version history, audit log

Revision ID: 001_document_workflow
Revises:
Create Date: 2025-03-14

"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001_document_workflow"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

DOCUMENT_KEYS = (
    "COO",
    "PHYTO",
    "INSURANCE",
    "INVOICE",
    "PACKING_LIST",
    "BILL_OF_LADING",
    "CUSTOMS_EXPORT_DECLARATION",
)

# Includes the legacy "generated" and "approved" values so old rows stay readable.
DOCUMENT_STATUSES = (
    "required",
    "draft",
    "ready",
    "submitted",
    "under_review",
    "signed",
    "active",
    "expired",
    "rejected",
    "generated",
    "approved",
)


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade() -> None:
    # Shipment side (read-only for the document workflow)
    op.create_table(
        "shipments",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("reference", sa.String(100), nullable=False),
        sa.Column("buyer", sa.String(200), nullable=False),
        sa.Column("incoterm", sa.String(10), nullable=False),
        sa.Column("mode", sa.String(10), nullable=False),
        sa.Column("route", sa.String(100), nullable=False),
        sa.Column("value_fcfa", sa.Float, nullable=True),
        sa.Column("status", sa.String(20), nullable=True),
        *_timestamps(),
    )

    op.create_table(
        "shipment_items",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "shipment_id",
            sa.String(64),
            sa.ForeignKey("shipments.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("product_id", sa.String(64), nullable=False),
        sa.Column("quantity", sa.Integer, nullable=False),
        sa.Column("position", sa.Integer, nullable=True),
    )

    op.create_table(
        "products",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False),
        sa.Column("hs_code", sa.String(20), nullable=False),
        sa.Column("unit_price_fcfa", sa.Float, nullable=False),
        sa.Column("weight_kg", sa.Float, nullable=True),
    )

    op.create_table(
        "parties",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("name", sa.String(200), nullable=False, index=True),
        sa.Column("country", sa.String(2), nullable=False),
        sa.Column("type", sa.String(20), nullable=True),
        sa.Column("address", sa.Text, nullable=True),
    )

    # Document records and their immutable versions
    op.create_table(
        "shipment_documents",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("shipment_id", sa.String(64), nullable=False, index=True),
        sa.Column("doc_key", sa.Enum(*DOCUMENT_KEYS, name="document_key"), nullable=False),
        sa.Column("status", sa.Enum(*DOCUMENT_STATUSES, name="document_status"), nullable=False),
        sa.Column("current_version", sa.Integer, nullable=True),
        sa.Column("revision", sa.Integer, nullable=False),
        *_timestamps(),
        sa.UniqueConstraint("shipment_id", "doc_key", name="uq_shipment_documents_shipment_key"),
    )

    op.create_table(
        "document_versions",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column(
            "document_id",
            sa.String(64),
            sa.ForeignKey("shipment_documents.id", ondelete="CASCADE"),
            nullable=False,
            index=True,
        ),
        sa.Column("version", sa.Integer, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(200), nullable=False),
        sa.Column("file_ref", sa.String(1024), nullable=False),
        sa.Column("file_name", sa.String(512), nullable=False),
        sa.Column("note", sa.Text, nullable=True),
        sa.UniqueConstraint("document_id", "version", name="uq_document_versions_document_version"),
    )

    op.create_table(
        "document_sequences",
        sa.Column("name", sa.String(100), primary_key=True),
        sa.Column("value", sa.Integer, nullable=False, server_default="0"),
    )

    op.create_table(
        "audit_events",
        sa.Column("id", sa.String(64), primary_key=True),
        sa.Column("event_type", sa.String(100), nullable=False, index=True),
        sa.Column("entity_type", sa.String(100), nullable=True),
        sa.Column("entity_id", sa.String(64), nullable=True),
        sa.Column("shipment_id", sa.String(64), nullable=True, index=True),
        sa.Column("action", sa.String(100), nullable=True),
        sa.Column("actor", sa.String(200), nullable=True),
        sa.Column("event_data", sa.JSON, nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=True),
    )


def downgrade() -> None:
    op.drop_table("audit_events")
    op.drop_table("document_sequences")
    op.drop_table("document_versions")
    op.drop_table("shipment_documents")
    op.drop_table("parties")
    op.drop_table("products")
    op.drop_table("shipment_items")
    op.drop_table("shipments")
    op.execute("DROP TYPE IF EXISTS document_status")
    op.execute("DROP TYPE IF EXISTS document_key")
