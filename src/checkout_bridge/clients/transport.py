"""JSON-over-HTTP transport shared by the upstream clients.

``post_json`` never raises for upstream failures. It returns an
``UpstreamResult`` and each client decides which domain exception the failure
becomes.
"""

from dataclasses import dataclass
from typing import Any

import httpx
import structlog

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class UpstreamResult:
    """Outcome of one upstream JSON call.

    ``status_code`` is None when no HTTP response was received.
    """

    ok: bool
    status_code: int | None
    data: Any

    @property
    def body(self) -> dict[str, Any]:
        """Response payload as a dict (empty when it is not a JSON object)."""
        return self.data if isinstance(self.data, dict) else {}


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return {}
    try:
        return response.json()
    except ValueError:
        return {"raw": response.text}


async def post_json(
    http_client: httpx.AsyncClient,
    url: str,
    **kwargs: Any,
) -> UpstreamResult:
    """
    POST to ``url`` and decode the JSON response.

    Args:
        http_client: Client owned by the caller
        url: Absolute upstream URL
        **kwargs: Passed through to ``httpx.AsyncClient.post`` (headers, json,
            data, auth)

    Returns:
        UpstreamResult with ``ok`` set for 2xx responses
    """
    try:
        response = await http_client.post(url, **kwargs)
    except httpx.RequestError as e:
        # Network errors, timeouts, connection errors, etc.
        logger.error("upstream_request_error", url=url, error=str(e))
        return UpstreamResult(ok=False, status_code=None, data={"message": str(e)})

    data = _decode(response)

    if not response.is_success:
        logger.warning(
            "upstream_request_failed",
            url=url,
            status_code=response.status_code,
        )

    return UpstreamResult(
        ok=response.is_success,
        status_code=response.status_code,
        data=data,
    )
