"""Request Context — the slice of an inbound request that error reporting needs.

Invariants:
    - Immutable snapshot; never holds a live Request object
    - Defaults ("/", "GET", "") apply when no request is in scope
    - Header names are stored lower-cased
    - STARTUP_CONTEXT carries the sentinel values used for startup failures
"""

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class RequestContext:
    """What a failure report knows about the request that triggered it."""
    path: str = "/"
    method: str = "GET"
    user_agent: str = ""
    host: str | None = None
    query_params: Mapping[str, str] = field(default_factory=dict)
    headers: Mapping[str, str] = field(default_factory=dict)

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


STARTUP_CONTEXT = RequestContext(
    path="STARTUP", method="STARTUP", user_agent="STARTUP_ERROR",
)
