"""HTTP clients for the Agent Factory, Ingress and ACC services."""

import json
import logging
from typing import Any

import httpx

from .exceptions import ContractError, HttpStatusError, TransportError
from .schemas import AgentCreated, AgentDefinition, AgentListing, WebhookEvent

logger = logging.getLogger(__name__)


class HttpJsonClient:
    """Minimal JSON request helpers.

    POST and PUT return the decoded body as-is; callers validate its shape.
    GET raises ``HttpStatusError`` on a non-success status first.
    """

    def __init__(
        self,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the client.

        Args:
            timeout: Request timeout in seconds (default: 10)
            transport: Optional transport override (tests mount an ASGI app here)
        """
        self.timeout = timeout
        self.client = httpx.AsyncClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    async def _request(self, method: str, url: str, payload: Any = None) -> httpx.Response:
        try:
            if payload is None:
                return await self.client.request(method, url)
            return await self.client.request(method, url, json=payload)
        except httpx.TimeoutException as e:
            raise TransportError(f"{method} {url} timed out after {self.timeout}s") from e
        except httpx.TransportError as e:
            raise TransportError(f"{method} {url} failed: {e}") from e

    @staticmethod
    def _decode(response: httpx.Response) -> Any:
        try:
            return response.json()
        except json.JSONDecodeError as e:
            raise ContractError(
                f"Non-JSON response from {response.request.url} "
                f"(HTTP {response.status_code}): {response.text[:200]}"
            ) from e

    async def post(self, url: str, payload: Any) -> Any:
        response = await self._request("POST", url, payload)
        logger.debug(f"POST {url} -> {response.status_code}")
        return self._decode(response)

    async def put(self, url: str, payload: Any) -> Any:
        response = await self._request("PUT", url, payload)
        logger.debug(f"PUT {url} -> {response.status_code}")
        return self._decode(response)

    async def get(self, url: str) -> Any:
        response = await self._request("GET", url)
        logger.debug(f"GET {url} -> {response.status_code}")
        if not response.is_success:
            raise HttpStatusError(response.status_code, url)
        return self._decode(response)


class PlatformClient:
    """Typed access to the platform endpoints the harness drives."""

    def __init__(
        self,
        factory_url: str,
        ingress_url: str,
        acc_url: str,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize platform client.

        Args:
            factory_url: Agent Factory base URL
            ingress_url: Full ingress webhook URL
            acc_url: ACC mirror base URL
            timeout: Request timeout in seconds
            transport: Optional transport override for all requests
        """
        self.factory_url = factory_url.rstrip("/")
        self.ingress_url = ingress_url
        self.acc_url = acc_url.rstrip("/")
        self.http = HttpJsonClient(timeout=timeout, transport=transport)

    async def close(self) -> None:
        await self.http.close()

    async def __aenter__(self) -> "PlatformClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def create_agent(self, agent: AgentDefinition) -> AgentCreated:
        """Create an agent and return its Factory-assigned ID."""
        body = await self.http.post(f"{self.factory_url}/api/agents", agent.to_wire())
        created = AgentCreated.from_body(body)
        logger.info(f"Created agent {agent.name} ({created.id})")
        return created

    async def update_agent(self, agent_id: str, agent: AgentDefinition) -> Any:
        """Full-replace an agent definition; the body is returned unvalidated."""
        body = await self.http.put(
            f"{self.factory_url}/api/agents/{agent_id}", agent.to_wire()
        )
        logger.info(f"Updated agent {agent_id} (status={agent.status.value})")
        return body

    async def send_webhook(self, event: WebhookEvent) -> Any:
        """Post an event to the ingress; downstream effects are asynchronous."""
        body = await self.http.post(self.ingress_url, event.model_dump(mode="json"))
        logger.info(f"Webhook sent (source={event.source})")
        return body

    async def get_export(self) -> AgentListing:
        """Factory export, the source of truth for published agents."""
        body = await self.http.get(f"{self.factory_url}/.well-known/agent.json")
        return AgentListing.parse(body, require_envelope=True)

    async def get_mirror(self) -> AgentListing:
        """ACC mirror listing, in either wire shape."""
        body = await self.http.get(f"{self.acc_url}/api/agents")
        return AgentListing.parse(body)
