"""Synchronous client for the remote skills service.

Each public method maps to exactly one endpoint: it builds a request, sends
it over the configured transport, checks the status code where that
endpoint's contract says to, and decodes the JSON body into models.
Nothing is retried or cached.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Any, Callable, Optional
from uuid import UUID

import httpx
from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from skills_client.config import DEFAULT_TIMEOUT, ClientConfig
from skills_client.exceptions import DecodeError, StatusError, TransportError
from skills_client.models import (
    SKILL_ADAPTER,
    SKILL_LIST_ADAPTER,
    UUID_LIST_ADAPTER,
    Skill,
    SkillProject,
)
from skills_client.transport import Transport, default_transport

logger = logging.getLogger(__name__)

# Failure message templates. None means the raw response body is the message.
STATUS_LINE = "{status_code} {reason}"
USER_STATUS = "error: received status code {status_code}"

# A "%" that does not start a valid percent-escape.
BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")


@dataclass(frozen=True)
class Call:
    """A prepared request plus the rules for interpreting its response.

    Attributes:
        request: The request to send.
        expected_status: Required status code, or None when not checked.
        failure: Message template for status mismatches, or None for the raw body.
        adapter: Adapter for the response body, or None when no body is decoded.
        empty: Factory for the result when the body is a JSON null.
    """

    request: httpx.Request
    expected_status: Optional[int] = None
    failure: Optional[str] = None
    adapter: Optional[TypeAdapter] = None
    empty: Callable[[], Any] = list


class BaseSkillsClient:
    """Request building and response interpretation shared by both clients."""

    def __init__(self, config: ClientConfig):
        self.config = config

    @property
    def base_url(self) -> str:
        return self.config.base_url

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url={self.base_url!r})"

    # ------------------------------------------------------------------
    # Request building
    # ------------------------------------------------------------------

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Authorization": f"Bearer {self.config.token}",
            "X-API-Key": self.config.api_key,
        }
        if has_body:
            headers["Content-Type"] = "application/json"
        return headers

    def _request(
        self,
        method: str,
        path: str,
        params: dict[str, Any] | None = None,
        content: bytes | None = None,
    ) -> httpx.Request:
        url = f"{self.config.base_url}{path}"
        bad_escape = BAD_ESCAPE.search(url)
        if bad_escape is not None:
            logger.debug(f"{method} {url} rejected: invalid URL escape")
            raise TransportError(
                f"invalid request URL: invalid URL escape "
                f"{url[bad_escape.start():bad_escape.start() + 3]!r}",
                method=method,
                url=url,
            )
        try:
            return httpx.Request(
                method,
                url,
                params=params,
                headers=self._headers(content is not None),
                content=content,
            )
        except httpx.InvalidURL as e:
            raise TransportError(
                f"invalid request URL: {e}", method=method, url=url, cause=e
            ) from e

    def _create_skill_call(self, skill: Skill) -> Call:
        return Call(
            self._request("POST", "/skills", content=skill.to_payload()),
            expected_status=201,
            adapter=SKILL_ADAPTER,
            empty=Skill,
        )

    def _get_skill_by_id_call(self, skill_id: UUID) -> Call:
        return Call(
            self._request("GET", f"/skills/{skill_id}"),
            expected_status=200,
            adapter=SKILL_ADAPTER,
            empty=Skill,
        )

    def _get_all_skills_call(self) -> Call:
        # Status is deliberately not checked; the body is always decoded.
        return Call(self._request("GET", "/skills"), adapter=SKILL_LIST_ADAPTER)

    def _update_skill_call(self, skill_id: UUID, skill: Skill) -> Call:
        payload = skill.model_copy(update={"id": skill_id}).to_payload()
        # Status is not checked here either.
        return Call(
            self._request("PATCH", f"/skills/{skill_id}", content=payload),
            adapter=SKILL_ADAPTER,
            empty=Skill,
        )

    def _delete_skill_call(self, skill_id: UUID) -> Call:
        return Call(
            self._request("DELETE", f"/skills/{skill_id}"),
            expected_status=200,
            failure="failed to delete skill: status code {status_code}",
        )

    def _search_skills_call(self, query: str) -> Call:
        # The query goes into the path as-is, without escaping.
        return Call(
            self._request("GET", f"/skills/search/{query}"),
            expected_status=200,
            failure="failed to search skills: status code {status_code}",
            adapter=SKILL_LIST_ADAPTER,
        )

    def _get_skills_by_category_call(self, category_id: UUID) -> Call:
        return Call(
            self._request("GET", f"/skills/category/{category_id}"),
            expected_status=200,
            failure="failed to get skills by category: status code {status_code}",
            adapter=SKILL_LIST_ADAPTER,
        )

    def _get_skills_by_user_id_call(self, user_id: str) -> Call:
        return Call(
            self._request("GET", f"/skills/user/{user_id}"),
            expected_status=200,
            failure=USER_STATUS,
            adapter=SKILL_LIST_ADAPTER,
        )

    def _get_popular_skills_call(self, limit: int) -> Call:
        return Call(
            self._request("GET", "/skills/popular", params={"limit": int(limit)}),
            expected_status=200,
            failure=USER_STATUS,
            adapter=SKILL_LIST_ADAPTER,
        )

    def _associate_call(self, path: str, association: SkillProject) -> Call:
        return Call(
            self._request("POST", path, content=association.to_payload()),
            expected_status=200,
            failure=STATUS_LINE,
        )

    def _get_project_ids_for_skill_call(self, skill_id: UUID) -> Call:
        return Call(
            self._request("GET", "/get_projects", params={"skill_id": str(skill_id)}),
            expected_status=200,
            failure=STATUS_LINE,
            adapter=UUID_LIST_ADAPTER,
        )

    def _get_skills_for_project_call(self, project_id: UUID) -> Call:
        return Call(
            self._request(
                "GET", "/get_skills_for_project", params={"project_id": str(project_id)}
            ),
            expected_status=200,
            failure=STATUS_LINE,
            adapter=SKILL_LIST_ADAPTER,
        )

    # ------------------------------------------------------------------
    # Response interpretation
    # ------------------------------------------------------------------

    def _send_failed(self, call: Call, error: Exception) -> TransportError:
        request = call.request
        logger.debug(f"{request.method} {request.url} failed: {error}")
        return TransportError(
            f"request failed: {error}",
            method=request.method,
            url=str(request.url),
            cause=error,
        )

    def _interpret(self, call: Call, response: httpx.Response) -> Any:
        """Turn a fully read response into a result, or raise.

        Args:
            call: The call the response belongs to.
            response: Response whose body has already been read.

        Returns:
            The decoded body, or None for calls that return nothing.

        Raises:
            StatusError: If the status code does not match.
            DecodeError: If the body does not parse into the expected shape.
        """
        status_code = response.status_code
        logger.debug(f"{call.request.method} {call.request.url} -> {status_code}")

        if call.expected_status is not None and status_code != call.expected_status:
            if call.failure is None:
                message = response.text
            else:
                message = call.failure.format(
                    status_code=status_code, reason=response.reason_phrase
                )
            logger.warning(
                f"{call.request.method} {call.request.url.path} returned {status_code}, "
                f"expected {call.expected_status}"
            )
            raise StatusError(message, status_code=status_code, body=response.text)

        if call.adapter is None:
            return None

        try:
            value = call.adapter.validate_json(response.content)
        except PydanticValidationError as e:
            logger.warning(
                f"{call.request.method} {call.request.url.path} returned an undecodable "
                f"body (status {status_code})"
            )
            raise DecodeError(
                f"failed to decode response body: {e.errors()[0]['msg']}",
                status_code=status_code,
                body=response.text,
                cause=e,
            ) from e

        if value is None:
            return call.empty()
        return value


class SkillsClient(BaseSkillsClient):
    """Blocking client for the skills service.

    Every call sends ``Authorization: Bearer <token>`` and ``X-API-Key``.
    Instances hold no per-call state and may be shared between threads as
    long as the transport allows it.

    Example:
        with SkillsClient("https://skills.example.com", token, api_key) as client:
            skill = client.create_skill(Skill(name="Python"))
            client.get_skill_by_id(skill.id)
    """

    def __init__(
        self,
        base_url: str,
        token: str,
        api_key: str,
        transport: Optional[Transport] = None,
        *,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """Initialize the client.

        Args:
            base_url: Root URL of the skills service.
            token: Bearer token.
            api_key: API key.
            transport: Pre-configured transport. When omitted, the client
                creates an ``httpx.Client`` with ``timeout`` and owns it.
            timeout: Timeout in seconds for the default transport.
        """
        super().__init__(ClientConfig(base_url, token, api_key, timeout))
        self._owns_transport = transport is None
        self._transport: Transport = (
            transport if transport is not None else default_transport(timeout)
        )

    @classmethod
    def from_config(
        cls, config: ClientConfig, transport: Optional[Transport] = None
    ) -> SkillsClient:
        return cls(
            config.base_url,
            config.token,
            config.api_key,
            transport,
            timeout=config.timeout,
        )

    def close(self) -> None:
        """Close the transport if this client created it."""
        if self._owns_transport:
            close = getattr(self._transport, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> SkillsClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _execute(self, call: Call) -> Any:
        try:
            response = self._transport.send(call.request)
        except httpx.HTTPError as e:
            raise self._send_failed(call, e) from e

        try:
            try:
                response.read()
            except httpx.HTTPError as e:
                raise self._send_failed(call, e) from e
            return self._interpret(call, response)
        finally:
            response.close()

    def create_skill(self, skill: Skill) -> Skill:
        """Create a skill. Expects 201 Created.

        Raises:
            StatusError: On any other status; the message is the response body.
        """
        return self._execute(self._create_skill_call(skill))

    def get_skill_by_id(self, skill_id: UUID) -> Skill:
        """Fetch one skill. Expects 200; the message of a StatusError is the body."""
        return self._execute(self._get_skill_by_id_call(skill_id))

    def get_all_skills(self) -> list[Skill]:
        """Fetch every skill.

        The status code is not checked: an error response is decoded like any
        other and usually surfaces as a DecodeError.
        """
        return self._execute(self._get_all_skills_call())

    def update_skill(self, skill_id: UUID, skill: Skill) -> Skill:
        """Patch a skill. The body's id is always ``skill_id``; status is not checked."""
        return self._execute(self._update_skill_call(skill_id, skill))

    def delete_skill(self, skill_id: UUID) -> None:
        self._execute(self._delete_skill_call(skill_id))

    def search_skills(self, query: str) -> list[Skill]:
        """Search skills. ``query`` is inserted into the URL path unescaped."""
        return self._execute(self._search_skills_call(query))

    def get_skills_by_category(self, category_id: UUID) -> list[Skill]:
        return self._execute(self._get_skills_by_category_call(category_id))

    def get_skills_by_user_id(self, user_id: str) -> list[Skill]:
        return self._execute(self._get_skills_by_user_id_call(user_id))

    def get_popular_skills(self, limit: int) -> list[Skill]:
        return self._execute(self._get_popular_skills_call(limit))

    def associate_skill_with_project(self, association: SkillProject) -> None:
        """Link a skill to a project. Failures carry the status line as message."""
        self._execute(self._associate_call("/associate_skill", association))

    def disassociate_skill_from_project(self, association: SkillProject) -> None:
        self._execute(self._associate_call("/disassociate_skill", association))

    def get_project_ids_for_skill(self, skill_id: UUID) -> list[UUID]:
        return self._execute(self._get_project_ids_for_skill_call(skill_id))

    def get_skills_for_project(self, project_id: UUID) -> list[Skill]:
        return self._execute(self._get_skills_for_project_call(project_id))
