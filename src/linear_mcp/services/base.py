"""Base class shared by the Linear services."""

from typing import Optional, Union

from ..upstream.client import LinearClient


SELF_REFERENCE = "me"


class SelfReferenceResolver:
    """Resolves the ``"me"`` token to the authenticated user's id.

    Create one per tool call: the viewer lookup happens at most once per
    resolver, however many ``"me"`` values it is asked to resolve.
    """

    def __init__(self, client: LinearClient):
        self._client = client
        self._user_id: Optional[str] = None

    async def user_id(self) -> str:
        if self._user_id is None:
            viewer = await self._client.viewer()
            self._user_id = viewer.id
        return self._user_id

    async def resolve(self, value: Optional[str]) -> Optional[str]:
        if value == SELF_REFERENCE:
            return await self.user_id()
        return value


class BaseService:
    """Holds the Linear client; accepts either a client or an API key."""

    def __init__(self, client_or_api_key: Union[str, LinearClient]):
        if isinstance(client_or_api_key, str):
            if not client_or_api_key:
                raise ValueError("LINEAR_API_KEY is required")
            self.client = LinearClient(client_or_api_key)
        else:
            self.client = client_or_api_key

    def self_references(self) -> SelfReferenceResolver:
        return SelfReferenceResolver(self.client)
