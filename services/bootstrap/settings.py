"""
Harness settings.

Endpoints and polling windows come from the environment, optionally
seeded from a ``.env`` file at the project root.
"""
import os
from pathlib import Path

from dotenv import load_dotenv
from pydantic import BaseModel, Field

from services.verification.schemas import PollPolicy

project_root = Path(__file__).parent.parent.parent

DEFAULT_DEMO_INGRESS_URL = (
    "https://egap-ingress-910005263485.us-central1.run.app/webhook"
)

_TRUTHY = {"1", "true", "yes", "on"}


class HarnessSettings(BaseModel):
    """Endpoints, ground-truth config and timing for the suites"""

    factory_url: str = "http://localhost:3000"
    ingress_url: str = "http://localhost:8080/webhook"
    demo_ingress_url: str = DEFAULT_DEMO_INGRESS_URL
    acc_url: str = "http://localhost:3001"
    persistence_config: str = "adapters/persistence/postgres/config.yaml"
    http_timeout: float = Field(10.0, gt=0)

    webhook_wait_s: float = Field(5.0, ge=0, description="Fixed wait before a negative check")
    task_poll: PollPolicy = PollPolicy(interval_s=1.0, max_attempts=10)
    # The mirror syncs every 60s; the default window covers one full cycle.
    mirror_poll: PollPolicy = PollPolicy(interval_s=2.0, max_attempts=40)
    mirror_sync_strict: bool = False

    @classmethod
    def from_env(cls, env_file: Path | None = None) -> "HarnessSettings":
        """Build settings from environment variables (after loading .env)."""
        load_dotenv(env_file or project_root / ".env")

        defaults = cls()
        return cls(
            factory_url=os.getenv("FACTORY_URL", defaults.factory_url),
            ingress_url=os.getenv("INGRESS_URL", defaults.ingress_url),
            demo_ingress_url=os.getenv("DEMO_INGRESS_URL", defaults.demo_ingress_url),
            acc_url=os.getenv("ACC_URL", defaults.acc_url),
            persistence_config=os.getenv(
                "PERSISTENCE_CONFIG", defaults.persistence_config
            ),
            http_timeout=float(os.getenv("HTTP_TIMEOUT", defaults.http_timeout)),
            webhook_wait_s=float(
                os.getenv("WEBHOOK_WAIT_SECONDS", defaults.webhook_wait_s)
            ),
            task_poll=PollPolicy(
                interval_s=float(
                    os.getenv("TASK_POLL_INTERVAL", defaults.task_poll.interval_s)
                ),
                max_attempts=int(
                    os.getenv("TASK_POLL_ATTEMPTS", defaults.task_poll.max_attempts)
                ),
            ),
            mirror_poll=PollPolicy(
                interval_s=float(
                    os.getenv("MIRROR_POLL_INTERVAL", defaults.mirror_poll.interval_s)
                ),
                max_attempts=int(
                    os.getenv("MIRROR_POLL_ATTEMPTS", defaults.mirror_poll.max_attempts)
                ),
            ),
            mirror_sync_strict=os.getenv("MIRROR_SYNC_STRICT", "false").lower()
            in _TRUTHY,
        )
