"""HTTP client for the remote skills service."""

__version__ = "1.0.0"

from skills_client.async_client import AsyncSkillsClient
from skills_client.client import SkillsClient
from skills_client.config import DEFAULT_TIMEOUT, ClientConfig
from skills_client.exceptions import (
    ConfigError,
    DecodeError,
    RequestError,
    SkillsClientError,
    StatusError,
    TransportError,
)
from skills_client.models import Skill, SkillProject
from skills_client.transport import AsyncTransport, Transport

__all__ = [
    # Version
    "__version__",
    # Clients
    "SkillsClient",
    "AsyncSkillsClient",
    "ClientConfig",
    "DEFAULT_TIMEOUT",
    "Transport",
    "AsyncTransport",
    # Models
    "Skill",
    "SkillProject",
    # Errors
    "SkillsClientError",
    "TransportError",
    "StatusError",
    "RequestError",
    "DecodeError",
    "ConfigError",
]
