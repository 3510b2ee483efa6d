"""Asyncio client for the remote skills service.

Same endpoints, status rules and errors as :class:`SkillsClient`, built on
``httpx.AsyncClient``.
"""

from __future__ import annotations

from typing import Any, Optional
from uuid import UUID

import httpx

from skills_client.client import BaseSkillsClient, Call
from skills_client.config import DEFAULT_TIMEOUT, ClientConfig
from skills_client.models import Skill, SkillProject
from skills_client.transport import AsyncTransport, default_async_transport


class AsyncSkillsClient(BaseSkillsClient):
    """Non-blocking client for the skills service.

    Example:
        async with AsyncSkillsClient(base_url, token, api_key) as client:
            skills = await client.search_skills("python")
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        api_key: str,
        transport: Optional[AsyncTransport] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: Root URL of the skills service.
            token: Bearer token.
            api_key: API key.
            transport: Pre-configured async transport. When omitted, the client
                creates an ``httpx.AsyncClient`` with ``timeout`` and owns it.
            timeout: Timeout in seconds for the default transport.
        """
        super().__init__(ClientConfig(base_url, token, api_key, timeout))
        self._owns_transport = transport is None
        self._transport: AsyncTransport = (
            transport if transport is not None else default_async_transport(timeout)
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: Optional[AsyncTransport] = None
    ) -> AsyncSkillsClient:
        return cls(
            config.base_url,
            config.token,
            config.api_key,
            transport,
            timeout=config.timeout,
        )

    async def aclose(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            aclose = getattr(self._transport, "aclose", None)
            if aclose is not None:
                await aclose()

    async def __aenter__(self) -> AsyncSkillsClient:
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _execute(self, call: Call) -> Any:
        try:
            response = await self._transport.send(call.request)
        except httpx.HTTPError as e:
            raise self._send_failed(call, e) from e

        try:
            try:
                await response.aread()
            except httpx.HTTPError as e:
                raise self._send_failed(call, e) from e
            return self._interpret(call, response)
        finally:
            await response.aclose()

    async def create_skill(self, skill: Skill) -> Skill:
        return await self._execute(self._create_skill_call(skill))

    async def get_skill_by_id(self, skill_id: UUID) -> Skill:
        return await self._execute(self._get_skill_by_id_call(skill_id))

    async def get_all_skills(self) -> list[Skill]:
        """Fetch every skill without checking the status code."""
        return await self._execute(self._get_all_skills_call())

    async def update_skill(self, skill_id: UUID, skill: Skill) -> Skill:
        return await self._execute(self._update_skill_call(skill_id, skill))

    async def delete_skill(self, skill_id: UUID) -> None:
        await self._execute(self._delete_skill_call(skill_id))

    async def search_skills(self, query: str) -> list[Skill]:
        return await self._execute(self._search_skills_call(query))

    async def get_skills_by_category(self, category_id: UUID) -> list[Skill]:
        return await self._execute(self._get_skills_by_category_call(category_id))

    async def get_skills_by_user_id(self, user_id: str) -> list[Skill]:
        return await self._execute(self._get_skills_by_user_id_call(user_id))

    async def get_popular_skills(self, limit: int) -> list[Skill]:
        return await self._execute(self._get_popular_skills_call(limit))

    async def associate_skill_with_project(self, association: SkillProject) -> None:
        await self._execute(self._associate_call("/associate_skill", association))

    async def disassociate_skill_from_project(self, association: SkillProject) -> None:
        await self._execute(self._associate_call("/disassociate_skill", association))

    async def get_project_ids_for_skill(self, skill_id: UUID) -> list[UUID]:
        return await self._execute(self._get_project_ids_for_skill_call(skill_id))

    async def get_skills_for_project(self, project_id: UUID) -> list[Skill]:
        return await self._execute(self._get_skills_for_project_call(project_id))
