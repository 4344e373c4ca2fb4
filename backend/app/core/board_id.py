"""Board Identifier Resolution — ordered fallback strategies, first hit wins.

Invariants:
    - Strategies run in order; resolution stops at the first non-None result
    - Returns None (never raises) when no strategy matches
    - Query parameter and header count when present, even if empty;
      the configured BOARD_ID counts only when non-empty
    - Host and endpoint patterns take the FIRST 24-hex token after "webapi"
      (case-insensitive); further tokens are ignored

Design Decisions:
    - Strategies are plain functions in a tuple: a different hosting convention
      is a different tuple passed to resolve_board_id, call sites unchanged
"""

import re
from typing import Callable, Protocol, Sequence

from app.core.request_context import RequestContext

BOARD_ID_QUERY_PARAM = "boardId"
BOARD_ID_HEADER = "x-board-id"

# Railway host convention: webapi{boardId}.up.railway.app (no separator)
HOST_BOARD_ID_PATTERN = re.compile(r"webapi([a-f0-9]{24})", re.IGNORECASE)


class BoardIdSettings(Protocol):
    """Configuration the resolver reads, satisfied by ObservabilitySettings."""
    board_id: str
    runtime_error_endpoint_url: str


BoardIdStrategy = Callable[[RequestContext, BoardIdSettings], str | None]


def from_query_param(context: RequestContext, settings: BoardIdSettings) -> str | None:
    return context.query_params.get(BOARD_ID_QUERY_PARAM)


def from_header(context: RequestContext, settings: BoardIdSettings) -> str | None:
    return context.header(BOARD_ID_HEADER)


def from_environment(context: RequestContext, settings: BoardIdSettings) -> str | None:
    return settings.board_id or None


def from_host(context: RequestContext, settings: BoardIdSettings) -> str | None:
    return extract_board_id(context.host)


def from_endpoint_url(context: RequestContext, settings: BoardIdSettings) -> str | None:
    return extract_board_id(settings.runtime_error_endpoint_url)


def extract_board_id(text: str | None) -> str | None:
    """Pull the first webapi<24 hex> token out of a host name or URL."""
    if not text:
        return None
    match = HOST_BOARD_ID_PATTERN.search(text)
    return match.group(1) if match else None


DEFAULT_STRATEGIES: tuple[BoardIdStrategy, ...] = (
    from_query_param,
    from_header,
    from_environment,
    from_host,
    from_endpoint_url,
)


def resolve_board_id(
    context: RequestContext,
    settings: BoardIdSettings,
    strategies: Sequence[BoardIdStrategy] = DEFAULT_STRATEGIES,
) -> str | None:
    """Return the board identifier for this request, or None if unresolvable."""
    for strategy in strategies:
        board_id = strategy(context, settings)
        if board_id is not None:
            return board_id
    return None
