"""Client configuration.

Configuration is fixed at construction time and shared by every call a
client makes. It can be built directly or loaded from environment variables.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final, Mapping, Optional

from skills_client.exceptions import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT: Final = 10.0
ENV_PREFIX: Final = "SKILLS_"


@dataclass(frozen=True)
class ClientConfig:
    """Skills client configuration.

    Attributes:
        base_url: Root URL of the skills service, without trailing slash.
        token: Bearer token sent in the Authorization header.
        api_key: API key sent in the X-API-Key header.
        timeout: Transport timeout in seconds for the default transport.
    """

    base_url: str
    token: str
    api_key: str
    timeout: float = DEFAULT_TIMEOUT

    def __repr__(self) -> str:
        return (
            f"ClientConfig(base_url={self.base_url!r}, token='[REDACTED]', "
            f"api_key='[REDACTED]', timeout={self.timeout})"
        )

    @classmethod
    def from_env(
        cls,
        prefix: str = ENV_PREFIX,
        environ: Optional[Mapping[str, str]] = None,
    ) -> ClientConfig:
        """Load configuration from environment variables.

        Reads ``{prefix}BASE_URL``, ``{prefix}TOKEN``, ``{prefix}API_KEY`` and
        the optional ``{prefix}TIMEOUT``.

        Args:
            prefix: Variable name prefix.
            environ: Mapping to read from (defaults to ``os.environ``).

        Returns:
            ClientConfig instance.

        Raises:
            ConfigError: If a required variable is missing or the timeout is invalid.
        """
        env = os.environ if environ is None else environ

        values = {}
        for field_name in ("base_url", "token", "api_key"):
            key = f"{prefix}{field_name.upper()}"
            value = env.get(key)
            if not value:
                raise ConfigError(f"Missing required setting {key}", config_key=key)
            values[field_name] = value

        timeout = DEFAULT_TIMEOUT
        timeout_key = f"{prefix}TIMEOUT"
        raw_timeout = env.get(timeout_key)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError as e:
                raise ConfigError(
                    f"Invalid timeout {raw_timeout!r}", config_key=timeout_key, cause=e
                ) from e
            if timeout <= 0:
                raise ConfigError(
                    f"Timeout must be positive, got {timeout}", config_key=timeout_key
                )

        logger.debug(f"Loaded skills client config for {values['base_url']}")
        return cls(timeout=timeout, **values)
