"""Pure state transitions for a single document record.

Every function returns a new DocumentRecord and leaves its input alone, so
a caller that gives up halfway never leaves a half-updated record behind.

    required --(generate|upload)--> ready
    ready    --(generate|upload)--> ready        (current version advances)
    ready    --(approve)----------> signed/active
    signed   --(generate|upload)--> ready        (new review cycle)
    any      --(reject)-----------> rejected
    rejected --(generate|upload)--> ready
"""

from datetime import datetime

from prolist.document_lifecycle.status import is_approval, normalize_status
from prolist.exceptions import InvalidStatusTransition, NoVersionToApprove, VersionNotFound
from prolist.models.document import DocumentStatus
from prolist.schemas.document import DocumentRecord, DocumentVersion

# Status a record lands in whenever a new version is appended.
PENDING_REVIEW_STATUS = DocumentStatus.READY


def next_version_number(record: DocumentRecord) -> int:
    return len(record.versions) + 1


def append_version(
    record: DocumentRecord,
    *,
    version_id: str,
    file_ref: str,
    file_name: str,
    created_by: str,
    created_at: datetime,
    note: str | None = None,
) -> DocumentRecord:
    """Append a version, make it current and reopen the record for review."""
    version = DocumentVersion(
        id=version_id,
        version=next_version_number(record),
        created_at=created_at,
        created_by=created_by,
        file_ref=file_ref,
        file_name=file_name,
        note=note,
    )
    return record.model_copy(
        update={
            "versions": [*record.versions, version],
            "current_version": version.version,
            "status": PENDING_REVIEW_STATUS,
        }
    )


def attach_note(record: DocumentRecord, note: str) -> DocumentRecord:
    """Set the note on the current version; no-op without a current version."""
    current = record.current
    if current is None:
        return record
    versions = [
        v.model_copy(update={"note": note}) if v.version == current.version else v
        for v in record.versions
    ]
    return record.model_copy(update={"versions": versions})


def change_status(
    record: DocumentRecord,
    status: DocumentStatus | str,
    note: str | None = None,
) -> DocumentRecord:
    """Move a record to a new status, writing the canonical value.

    Approval needs at least one version. Going back to `required` is only
    allowed while the record has no versions.
    """
    target = normalize_status(status)

    if is_approval(target) and not record.versions:
        raise NoVersionToApprove(record.doc_key.value)
    if target == DocumentStatus.REQUIRED and record.versions:
        raise InvalidStatusTransition(
            f"{record.doc_key.value} has {len(record.versions)} version(s) and cannot return to required"
        )

    updated = record.model_copy(update={"status": target})
    if note:
        updated = attach_note(updated, note)
    return updated


def select_current_version(record: DocumentRecord, version: int) -> DocumentRecord:
    """Point current_version at an existing version without touching history."""
    if record.get_version(version) is None:
        raise VersionNotFound(record.doc_key.value, version)
    return record.model_copy(update={"current_version": version})
