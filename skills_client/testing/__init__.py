"""In-memory stand-in for the skills service (requires the ``testing`` extra)."""

from skills_client.testing.server import create_app
from skills_client.testing.store import SkillStore

__all__ = [
    "create_app",
    "SkillStore",
]
