"""
Request/response contracts for the platform endpoints.

Every body crossing the harness boundary is parsed into one of these
models, so checks never index into raw JSON.
"""
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from adapters.persistence.schemas import AgentStatus

from .exceptions import ContractError

# ============================================
# FACTORY
# ============================================


class AgentDefinition(BaseModel):
    """Body for create (POST) and full-replace update (PUT)"""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    role: str
    goal: str
    system_prompt: str = Field(..., alias="systemPrompt")
    workspace: str | None = None
    knowledge_base_id: str | None = Field(None, alias="knowledgeBaseId")
    status: AgentStatus = AgentStatus.DRAFT
    tools: list[Any] = Field(default_factory=list)

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class AgentCreated(BaseModel):
    """Create response; only the identifier is required"""

    model_config = ConfigDict(extra="allow")

    id: str

    @classmethod
    def from_body(cls, body: Any) -> "AgentCreated":
        if not isinstance(body, dict) or body.get("id") in (None, ""):
            raise ContractError("No ID returned")
        return cls.model_validate({**body, "id": str(body["id"])})


# ============================================
# INGRESS
# ============================================


class WebhookEvent(BaseModel):
    """Body accepted by the ingress webhook"""

    source: str = Field(..., description="Event source, matched against agent role")
    payload: Any = Field(..., description="Arbitrary JSON payload")


# ============================================
# EXPORT / MIRROR LISTINGS
# ============================================


class ListedAgent(BaseModel):
    """Agent entry as listed by the export or the mirror"""

    model_config = ConfigDict(extra="allow")

    name: str
    workspace: str | None = None
    status: str | None = None


class AgentListing(BaseModel):
    """
    Agent listing in either wire shape.

    ``envelope`` is ``{"agents": [...]}``, ``bare`` is a top-level array.
    """

    shape: Literal["envelope", "bare"]
    agents: list[ListedAgent]

    @classmethod
    def parse(cls, body: Any, require_envelope: bool = False) -> "AgentListing":
        if isinstance(body, dict) and "agents" in body:
            shape, agents = "envelope", body["agents"]
        elif isinstance(body, list) and not require_envelope:
            shape, agents = "bare", body
        else:
            expected = "{agents: [...]}" if require_envelope else "{agents: [...]} or [...]"
            raise ContractError(
                f"Unexpected listing shape {type(body).__name__}, expected {expected}"
            )

        try:
            return cls(shape=shape, agents=agents)
        except ValidationError as e:
            raise ContractError(f"Invalid agent listing: {e}") from e

    def names(self) -> list[str]:
        return [agent.name for agent in self.agents]

    def find(self, name: str) -> ListedAgent | None:
        return next((agent for agent in self.agents if agent.name == name), None)
