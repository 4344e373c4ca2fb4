"""Tolerant request parsing — bodies and path ids never raise.

Invariants:
    - read_json_body returns {} for empty, malformed, non-UTF-8, too deeply nested
      or non-object bodies
    - parse_id takes the leading integer of the text ("12abc" -> 12), else 0
"""

import json
import re

from fastapi import Request

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


async def read_json_body(request: Request) -> dict:
    raw = await request.body()
    try:
        data = json.loads(raw)
    except (ValueError, RecursionError):
        return {}
    return data if isinstance(data, dict) else {}


def parse_id(raw: str) -> int:
    match = _LEADING_INT.match(raw)
    return int(match.group(1)) if match else 0
