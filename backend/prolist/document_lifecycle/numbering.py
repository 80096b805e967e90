"""Document numbers: INV-2025-0001, PKL-2025-0001, one counter per type and year."""

from datetime import datetime, timezone

from prolist.document_lifecycle.metadata import number_prefix
from prolist.models.document import DocumentKey
from prolist.storage.base import SequenceStore


def sequence_name(doc_key: DocumentKey, year: int) -> str:
    return f"{doc_key.value.lower()}_{year}"


def format_document_number(doc_key: DocumentKey, year: int, value: int) -> str:
    return f"{number_prefix(doc_key)}-{year}-{value:04d}"


async def next_document_number(
    sequences: SequenceStore,
    doc_key: DocumentKey,
    year: int | None = None,
) -> str:
    year = year or datetime.now(timezone.utc).year
    value = await sequences.next_value(sequence_name(doc_key, year))
    return format_document_number(doc_key, year, value)
