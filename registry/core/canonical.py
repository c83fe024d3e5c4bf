"""
Canonical JSON for the recipient store document and event log lines.

Sorted keys, no whitespace, non-ASCII metadata kept as UTF-8: the same
recipients or events always serialize to the same bytes.
"""

import json
from typing import Any, Mapping


def canonical_json_str(obj: Any) -> str:
    return json.dumps(obj, sort_keys=True, separators=(",", ":"), ensure_ascii=False)


def canonical_line(record: Mapping[str, Any]) -> str:
    """One newline-terminated event log line."""
    return canonical_json_str(dict(record)) + "\n"
