"""Error Report — the diagnostic payload sent to the runtime error endpoint.

Invariants:
    - to_payload() always emits exactly the ten wire keys, in a fixed order
    - boardId is always a string ("" when unresolved); the endpoint rejects null
    - line is the only non-string field (int or None)
    - file/line come from the innermost traceback frame (where the error was raised);
      file is "" and line is None when the exception carries no traceback
    - message defaults to "Unknown error", stackTrace to "N/A"
"""

import traceback
from dataclasses import dataclass
from datetime import datetime, timezone

from app.core.request_context import RequestContext

UNKNOWN_MESSAGE = "Unknown error"
UNKNOWN_EXCEPTION_TYPE = "Exception"
NO_STACK_TRACE = "N/A"


@dataclass(frozen=True)
class ErrorReport:
    board_id: str
    timestamp: str
    file: str
    line: int | None
    stack_trace: str
    message: str
    exception_type: str
    request_path: str
    request_method: str
    user_agent: str

    def to_payload(self) -> dict:
        """Wire representation (camelCase keys)."""
        return {
            "boardId": self.board_id,
            "timestamp": self.timestamp,
            "file": self.file,
            "line": self.line,
            "stackTrace": self.stack_trace,
            "message": self.message,
            "exceptionType": self.exception_type,
            "requestPath": self.request_path,
            "requestMethod": self.request_method,
            "userAgent": self.user_agent,
        }


def build_error_report(
    exc: BaseException,
    board_id: str | None,
    context: RequestContext,
    now: datetime | None = None,
) -> ErrorReport:
    """Build the report for a failure observed under the given request context."""
    file, line = source_location(exc)
    return ErrorReport(
        board_id=board_id or "",
        timestamp=format_timestamp(now or datetime.now(timezone.utc)),
        file=file or "",
        line=line,
        stack_trace=format_stack_trace(exc),
        message=str(exc) or UNKNOWN_MESSAGE,
        exception_type=exception_type_name(exc) or UNKNOWN_EXCEPTION_TYPE,
        request_path=context.path or "/",
        request_method=context.method or "GET",
        user_agent=context.user_agent or "",
    )


def source_location(exc: BaseException) -> tuple[str | None, int | None]:
    """(filename, line) of the frame that raised, or (None, None)."""
    frames = traceback.extract_tb(exc.__traceback__)
    if not frames:
        return None, None
    frame = frames[-1]
    return frame.filename, frame.lineno


def format_stack_trace(exc: BaseException) -> str:
    if exc.__traceback__ is None:
        return NO_STACK_TRACE
    return "".join(
        traceback.format_exception(type(exc), exc, exc.__traceback__),
    ).rstrip("\n")


def exception_type_name(exc: BaseException) -> str:
    """Qualified class name; builtins are left unprefixed (ValueError, not builtins.ValueError)."""
    cls = type(exc)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def format_timestamp(moment: datetime) -> str:
    """ISO-8601 UTC with second precision and a Z suffix."""
    return (
        moment.astimezone(timezone.utc)
        .isoformat(timespec="seconds")
        .replace("+00:00", "Z")
    )
