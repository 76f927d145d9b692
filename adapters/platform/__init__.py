"""Clients and wire contracts for the platform services under test."""

from .client import HttpJsonClient, PlatformClient
from .exceptions import (
    ContractError,
    HttpStatusError,
    PlatformClientError,
    TransportError,
)
from .schemas import (
    AgentCreated,
    AgentDefinition,
    AgentListing,
    ListedAgent,
    WebhookEvent,
)

__all__ = [
    "HttpJsonClient",
    "PlatformClient",
    "PlatformClientError",
    "TransportError",
    "HttpStatusError",
    "ContractError",
    "AgentDefinition",
    "AgentCreated",
    "WebhookEvent",
    "ListedAgent",
    "AgentListing",
]
