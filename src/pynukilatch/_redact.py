"""Token masking for debug logs.

The bridge API token travels as a query parameter on every request, so
request URLs and anything echoing them are scrubbed before logging.
"""

from __future__ import annotations

from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

_SENSITIVE_KEYS = frozenset({"token", "hash", "authorization", "password"})
_MASK = "<redacted>"


def _is_sensitive(key: Any) -> bool:
    return str(key).lower() in _SENSITIVE_KEYS


def redact_for_log(value: Any) -> Any:
    """Return *value* with sensitive mapping entries masked, at any depth."""
    if isinstance(value, dict):
        return {key: _MASK if _is_sensitive(key) else redact_for_log(item) for key, item in value.items()}
    if isinstance(value, list):
        return [redact_for_log(item) for item in value]
    return value


def redact_url(url: str) -> str:
    """Replace sensitive query parameter values in *url*."""
    parts = urlsplit(url)
    if not parts.query:
        return url
    pairs = parse_qsl(parts.query, keep_blank_values=True)
    query = [(key, _MASK if _is_sensitive(key) else value) for key, value in pairs]
    return urlunsplit(parts._replace(query=urlencode(query, safe="<>")))
