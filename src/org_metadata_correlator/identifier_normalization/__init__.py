"""Identifier normalization exports."""

from .record_identifiers import (
    CASE_INSENSITIVE_ID_LENGTH,
    CASE_SENSITIVE_ID_LENGTH,
    normalize_durable_member_id,
    normalize_record_id,
)

__all__ = [
    "CASE_INSENSITIVE_ID_LENGTH",
    "CASE_SENSITIVE_ID_LENGTH",
    "normalize_durable_member_id",
    "normalize_record_id",
]
