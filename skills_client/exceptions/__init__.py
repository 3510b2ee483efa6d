from .base import SkillsClientError
from .config import ConfigError
from .network import DecodeError, RequestError, StatusError, TransportError

__all__ = [
    "SkillsClientError",
    "ConfigError",
    "TransportError",
    "StatusError",
    "RequestError",
    "DecodeError",
]
