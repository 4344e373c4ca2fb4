"""Runtime Error Reporter — POSTs an ErrorReport to the monitoring endpoint.

Invariants:
    - report() never raises: transport failures are logged at ERROR and dropped
    - One attempt only: no retry, no backoff, no escalation
    - Connect and read timeouts bounded (5s each by default)
    - Response status logged at WARNING whatever it is
    - TLS is negotiated by httpx when the endpoint scheme is https
"""

import logging

import httpx

from app.config import ObservabilitySettings
from app.core.error_report import build_error_report
from app.core.request_context import RequestContext

logger = logging.getLogger(__name__)


class ErrorReporter:
    """Sends failure diagnostics to a configured endpoint, best-effort."""

    def __init__(
        self,
        endpoint_url: str,
        connect_timeout: float = 5.0,
        read_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.endpoint_url = endpoint_url
        self.timeout = httpx.Timeout(
            read_timeout, connect=connect_timeout, read=read_timeout,
        )
        self._transport = transport

    @classmethod
    def from_settings(
        cls, settings: ObservabilitySettings, **kwargs,
    ) -> "ErrorReporter":
        return cls(
            settings.runtime_error_endpoint_url,
            connect_timeout=settings.error_report_connect_timeout,
            read_timeout=settings.error_report_read_timeout,
            **kwargs,
        )

    async def report(
        self,
        board_id: str | None,
        context: RequestContext,
        exc: BaseException,
    ) -> None:
        """Build and deliver one report. Swallows (and logs) delivery failures."""
        payload = build_error_report(exc, board_id, context).to_payload()
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport,
            ) as client:
                response = await client.post(
                    self.endpoint_url,
                    json=payload,
                    headers={"Content-Type": "application/json"},
                )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(
                f"Failed to send error to endpoint: {e}",
                extra={"endpoint": self.endpoint_url},
                exc_info=True,
            )
            return

        if response.status_code != 200:
            logger.warning(
                f"Error endpoint response: {response.status_code} - {response.text}",
                extra={"status_code": response.status_code},
            )
        else:
            logger.warning(
                f"Error endpoint response: {response.status_code}",
                extra={"status_code": response.status_code},
            )
