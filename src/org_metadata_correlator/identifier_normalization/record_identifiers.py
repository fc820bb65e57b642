"""Record identifier normalization service."""

from __future__ import annotations

CASE_SENSITIVE_ID_LENGTH = 15
CASE_INSENSITIVE_ID_LENGTH = 18


def normalize_record_id(raw_id: object) -> str | None:
    """Return the canonical 15-character form of a platform record id.

    The row-level API returns 18-character case-insensitive ids while the
    schema-description API and some tooling surfaces return the 15-character
    case-sensitive form. The 18-character form is the 15-character form plus
    a 3-character checksum suffix, so truncation yields the canonical key.

    Args:
      raw_id: Identifier in either form, or None/empty.

    Returns:
      The canonical identifier, or None when the input is absent.
    """
    if raw_id is None:
        return None
    text = str(raw_id).strip()
    if not text:
        return None
    if len(text) == CASE_INSENSITIVE_ID_LENGTH and _is_record_id_text(text):
        return text[:CASE_SENSITIVE_ID_LENGTH]
    return text


def normalize_durable_member_id(durable_id: object) -> str | None:
    """Normalize the member part of a dotted durable id such as `Account.00N5e00000AbCdE`."""
    if durable_id is None:
        return None
    text = str(durable_id).strip()
    if not text:
        return None
    _, separator, member = text.partition(".")
    if not separator:
        return normalize_record_id(text)
    return normalize_record_id(member)


def _is_record_id_text(text: str) -> bool:
    # Durable names such as "Opportunity.Fields" can share the 18-character length.
    return text.isascii() and text.isalnum()
