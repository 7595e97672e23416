# =============================================================================
# lib/utils.py - Shared Utilities
# =============================================================================
# Common utilities used across the application:
# - UUID normalization for Supabase queries
# - String-list serialization for multi-valued columns (services, industry)
# =============================================================================

import json
from typing import Iterable
from uuid import UUID


# =============================================================================
# UUID Utilities
# =============================================================================

def normalize_uuid(value: str | UUID) -> str:
    """
    Normalize a UUID to string format.

    Handles both string and UUID objects, ensuring consistent string output.

    Example:
        project_id = normalize_uuid(uuid_obj)  # "550e8400-..."
        project_id = normalize_uuid("550e8400-...")  # "550e8400-..."
    """
    return str(value) if isinstance(value, UUID) else value


# =============================================================================
# String List Serialization
# =============================================================================
# Multi-valued project attributes are stored as JSON array strings,
# e.g. '["UX Design","UI Design"]'. Older rows hold plain comma-separated
# text ("UX Design, UI Design"), so decoding falls back to comma-splitting.

def encode_string_list(values: Iterable[str] | None) -> str:
    """
    Convert a list of strings to its stored JSON representation.

    Example:
        encode_string_list(["UX Design", "UI Design"])
        # => '["UX Design", "UI Design"]'
    """
    return json.dumps([str(v) for v in (values or [])])


def decode_string_list(raw: str | list | None) -> list[str]:
    """
    Parse a stored list column back into a list of strings.

    Args:
        raw: JSON array string, legacy comma-separated string, an already
            decoded list, or None

    Returns:
        List of strings (empty list for None/empty input)

    Example:
        decode_string_list('["UX Design", "UI Design"]')  # => ['UX Design', 'UI Design']
        decode_string_list('UX Design, UI Design')        # => ['UX Design', 'UI Design']
        decode_string_list(None)                          # => []
    """
    if raw is None:
        return []
    if isinstance(raw, list):
        return [str(v) for v in raw]
    if not raw.strip():
        return []

    try:
        parsed = json.loads(raw)
    except json.JSONDecodeError:
        return _split_legacy_list(raw)

    if isinstance(parsed, list):
        return [str(v) for v in parsed]
    return []


def _split_legacy_list(raw: str) -> list[str]:
    """Legacy plain-text format: comma-separated, whitespace-padded."""
    return [part.strip() for part in raw.split(",") if part.strip()]


def join_string_list(raw: str | list | None, separator: str = ", ") -> str:
    """
    Decode a stored list column and join it for display.

    Example:
        join_string_list('["UX", "UI"]')         # => 'UX, UI'
        join_string_list('["UX", "UI"]', " · ")  # => 'UX · UI'
    """
    return separator.join(decode_string_list(raw))
