"""Lightweight async GraphQL client for the Linear API.

Handles single queries and Relay-style cursor pagination.
"""

import logging
import re
from typing import Any, AsyncIterator, Dict, List, Optional

from .exceptions import UpstreamAPIError

logger = logging.getLogger(__name__)

_OPERATION_NAME = re.compile(r"^\s*(?:query|mutation)\s+(\w+)")


def operation_name(query: str) -> str:
    """Name of the GraphQL operation in ``query``, or '' for anonymous ones."""
    match = _OPERATION_NAME.match(query)
    return match.group(1) if match else ""


class GraphQLClient:
    """Async GraphQL client that uses the shared HTTP client."""

    def __init__(
        self,
        endpoint: str,
        auth_header: str = "Authorization",
        auth_value: str = "",
    ):
        self.endpoint = endpoint
        self.auth_header = auth_header
        self.auth_value = auth_value

    async def execute(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """Execute a single GraphQL query.

        Args:
            query: GraphQL query string.
            variables: Optional query variables.

        Returns:
            The "data" portion of the response.

        Raises:
            UpstreamAPIError: If the response contains GraphQL errors.
        """
        from .http_client import get_http_client
        from .guard import guarded_request

        payload: Dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        async def _do_request():
            client = get_http_client()
            response = await client.post(
                self.endpoint,
                json=payload,
                headers={
                    self.auth_header: self.auth_value,
                    "Content-Type": "application/json",
                },
            )
            response.raise_for_status()
            return response

        operation = operation_name(query)
        response = await guarded_request(_do_request, operation=operation)
        body = response.json()

        if "errors" in body and body["errors"]:
            error_messages = "; ".join(
                e.get("message", "Unknown error") for e in body["errors"]
            )
            raise UpstreamAPIError(
                f"GraphQL error: {error_messages}",
                status_code=response.status_code,
                response_body=str(body["errors"])[:500],
                operation=operation,
            )

        return body.get("data") or {}

    async def fetch_page(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        connection_path: str = "",
    ) -> Dict[str, Any]:
        """Fetch a single page of a Relay connection.

        Returns the connection object itself (``{"nodes": [...],
        "pageInfo": {...}}``), or an empty connection when any step of
        ``connection_path`` is null.
        """
        data = await self.execute(query, variables)
        connection = _navigate(data, connection_path)
        if connection is None:
            return {"nodes": [], "pageInfo": {"hasNextPage": False, "endCursor": None}}
        return connection

    async def paginate_connection(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        connection_path: str = "",
        page_size: int = 50,
        max_pages: int = 50,
    ) -> AsyncIterator[Dict[str, Any]]:
        """Paginate a Relay-style GraphQL connection.

        Expects the query to accept $first (Int) and $after (String) variables,
        and the connection to have the shape:
            { nodes: [...], pageInfo: { hasNextPage, endCursor } }

        Args:
            query: GraphQL query with $first and $after variables.
            variables: Base variables (first/after will be injected).
            connection_path: Dot-separated path to the connection in the data,
                             e.g. "issues" or "team.cycles".
            page_size: Number of items per page.
            max_pages: Safety limit on total pages fetched.

        Yields:
            Individual node dicts from the connection.
        """
        vars_ = dict(variables or {})
        vars_["first"] = page_size
        cursor: Optional[str] = None

        for _ in range(max_pages):
            if cursor:
                vars_["after"] = cursor
            elif "after" in vars_:
                del vars_["after"]

            connection = await self.fetch_page(query, dict(vars_), connection_path)

            nodes = connection.get("nodes") or []
            for node in nodes:
                yield node

            page_info = connection.get("pageInfo") or {}
            if not page_info.get("hasNextPage") or not nodes:
                break

            cursor = page_info.get("endCursor")
            if not cursor:
                break

    async def collect_connection(
        self,
        query: str,
        variables: Optional[Dict[str, Any]] = None,
        connection_path: str = "",
        page_size: int = 50,
        max_items: int = 10_000,
    ) -> List[Dict[str, Any]]:
        """Collect all nodes from a Relay connection into a list."""
        items: List[Dict[str, Any]] = []
        async for node in self.paginate_connection(
            query, variables, connection_path, page_size
        ):
            items.append(node)
            if len(items) >= max_items:
                logger.warning("collect_connection hit max_items=%d", max_items)
                break
        return items


def _navigate(data: Dict[str, Any], path: str) -> Optional[Dict[str, Any]]:
    """Follow a dot-separated path through nested dicts; None on a null hop."""
    node: Any = data
    if path:
        for key in path.split("."):
            if not isinstance(node, dict):
                return None
            node = node.get(key)
    return node if isinstance(node, dict) else None
