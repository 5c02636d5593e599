"""Shopify Admin GraphQL client."""

from typing import Any

import httpx
import structlog

from checkout_bridge.clients.transport import post_json
from checkout_bridge.config import ShopifySettings
from checkout_bridge.models import GraphUserError, TransportError

logger = structlog.get_logger(__name__)

DRAFT_ORDER_CREATE = """
mutation draftOrderCreate($input: DraftOrderInput!) {
  draftOrderCreate(input: $input) {
    draftOrder { id }
    userErrors { field message }
  }
}
"""

DRAFT_ORDER_COMPLETE = """
mutation draftOrderComplete($id: ID!) {
  draftOrderComplete(id: $id) {
    draftOrder { id order { id name } }
    userErrors { field message }
  }
}
"""


class ShopifyClient:
    """
    Client for Shopify Admin GraphQL mutations.

    Transport failures and top-level GraphQL ``errors`` raise. Mutation
    ``userErrors`` are returned with the data for the caller to inspect.
    """

    def __init__(
        self,
        settings: ShopifySettings,
        http_client: httpx.AsyncClient | None = None,
    ):
        self.settings = settings
        self.url = settings.graphql_url
        self.http_client = http_client or httpx.AsyncClient(
            timeout=settings.timeout_seconds
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def mutate(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """
        Execute a GraphQL document.

        Args:
            query: GraphQL mutation document
            variables: Mutation variables

        Returns:
            The ``data`` member of the response

        Raises:
            TransportError: non-2xx response or network failure
            GraphUserError: response carries a top-level ``errors`` array
        """
        result = await post_json(
            self.http_client,
            self.url,
            headers={
                "Content-Type": "application/json",
                "X-Shopify-Access-Token": self.settings.admin_token,
            },
            json={"query": query, "variables": variables or {}},
        )

        if not result.ok:
            raise TransportError(
                "Shopify GraphQL request failed",
                details={"status": result.status_code, "body": result.data},
            )

        errors = result.body.get("errors")
        if errors:
            logger.warning("shopify_graphql_errors", errors=errors)
            raise GraphUserError("Shopify GraphQL error", details=errors)

        data = result.body.get("data")
        return data if isinstance(data, dict) else {}

    async def draft_order_create(self, draft_input: dict[str, Any]) -> dict[str, Any]:
        """Run ``draftOrderCreate`` and return its payload node."""
        data = await self.mutate(DRAFT_ORDER_CREATE, {"input": draft_input})
        logger.debug("shopify_draft_order_create_response", data=data)
        return data.get("draftOrderCreate") or {}

    async def draft_order_complete(self, draft_id: str) -> dict[str, Any]:
        """Run ``draftOrderComplete`` and return its payload node."""
        data = await self.mutate(DRAFT_ORDER_COMPLETE, {"id": draft_id})
        logger.debug("shopify_draft_order_complete_response", data=data)
        return data.get("draftOrderComplete") or {}
