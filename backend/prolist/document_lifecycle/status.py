"""Document status normalization and classification.

Older records may still carry the legacy statuses "generated" and
"approved". Everything that reads a status goes through normalize_status.
"""

from prolist.models.document import DocumentStatus

LEGACY_STATUS_ALIASES: dict[DocumentStatus, DocumentStatus] = {
    DocumentStatus.GENERATED: DocumentStatus.READY,
    DocumentStatus.APPROVED: DocumentStatus.SIGNED,
}

# Display order, lowest first.
STATUS_ORDER: tuple[DocumentStatus, ...] = (
    DocumentStatus.REQUIRED,
    DocumentStatus.DRAFT,
    DocumentStatus.READY,
    DocumentStatus.SUBMITTED,
    DocumentStatus.UNDER_REVIEW,
    DocumentStatus.SIGNED,
    DocumentStatus.ACTIVE,
    DocumentStatus.EXPIRED,
    DocumentStatus.REJECTED,
)

APPROVED_STATUSES = frozenset({DocumentStatus.SIGNED, DocumentStatus.ACTIVE})
ATTENTION_STATUSES = frozenset(
    {DocumentStatus.DRAFT, DocumentStatus.SUBMITTED, DocumentStatus.UNDER_REVIEW}
)
BLOCKED_STATUSES = frozenset(
    {DocumentStatus.REQUIRED, DocumentStatus.REJECTED, DocumentStatus.EXPIRED}
)
READY_STATUSES = frozenset({DocumentStatus.READY, DocumentStatus.SIGNED, DocumentStatus.ACTIVE})

_STATUS_META: dict[DocumentStatus, tuple[str, str]] = {
    DocumentStatus.REQUIRED: ("Required", "negative"),
    DocumentStatus.DRAFT: ("Draft", "caution"),
    DocumentStatus.READY: ("Ready", "positive"),
    DocumentStatus.SUBMITTED: ("Submitted", "neutral"),
    DocumentStatus.UNDER_REVIEW: ("Under review", "caution"),
    DocumentStatus.SIGNED: ("Signed", "positive"),
    DocumentStatus.ACTIVE: ("Active", "positive"),
    DocumentStatus.EXPIRED: ("Expired", "negative"),
    DocumentStatus.REJECTED: ("Rejected", "negative"),
}


def normalize_status(status: DocumentStatus | str | None) -> DocumentStatus:
    """Map a raw stored status onto the canonical status set.

    Unknown or missing values fall back to REQUIRED.
    """
    if status is None:
        return DocumentStatus.REQUIRED
    try:
        value = DocumentStatus(status)
    except ValueError:
        return DocumentStatus.REQUIRED
    return LEGACY_STATUS_ALIASES.get(value, value)


def status_label(status: DocumentStatus | str) -> str:
    return _STATUS_META[normalize_status(status)][0]


def status_tone(status: DocumentStatus | str) -> str:
    """Return positive, caution, neutral or negative."""
    return _STATUS_META[normalize_status(status)][1]


def is_attention_status(status: DocumentStatus | str) -> bool:
    return normalize_status(status) in ATTENTION_STATUSES


def is_blocked_status(status: DocumentStatus | str) -> bool:
    return normalize_status(status) in BLOCKED_STATUSES


def is_ready_status(status: DocumentStatus | str) -> bool:
    return normalize_status(status) in READY_STATUSES


def is_approval(status: DocumentStatus | str) -> bool:
    return normalize_status(status) in APPROVED_STATUSES


def status_sort_order(status: DocumentStatus | str) -> int:
    return STATUS_ORDER.index(normalize_status(status))
