"""Async GitHub REST API client."""

import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from .models import BranchInfo, ContentItem, GeneratedRepository, Tree

logger = logging.getLogger(__name__)

API_VERSION = "2022-11-28"
DEFAULT_TIMEOUT = 30.0  # seconds

ModelT = TypeVar("ModelT", bound=BaseModel)


class RemoteCallError(RuntimeError):
    """A GitHub API call failed.

    ``status_code`` is None when no usable HTTP response was received
    (transport error, or a body that does not match the expected shape).
    """

    def __init__(
        self,
        path: str,
        status_code: int | None = None,
        reason: str = "",
        body: str = "",
    ):
        self.path = path
        self.status_code = status_code
        self.reason = reason
        self.body = body
        if status_code is None:
            message = f"GitHub {path} -> {reason}"
        else:
            message = f"GitHub {path} -> {status_code} {reason}: {body}"
        super().__init__(message)


def _segment(value: str) -> str:
    """Quote a single URL path segment."""
    return quote(value, safe="")


class GitHubClient:
    """GitHub REST API client.

    Holds read-only configuration only; every call opens its own
    ``httpx.AsyncClient`` so instances can be shared between tasks.
    """

    BASE_URL = "https://api.github.com"

    def __init__(
        self,
        token: str | None,
        base_url: str | None = None,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = "repoforge",
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize GitHub client.

        Args:
            token: GitHub token sent as bearer credential
            base_url: Custom base URL (defaults to GitHub API)
            timeout: Request timeout in seconds
            user_agent: User-Agent header value
            transport: Optional httpx transport (used by tests)
        """
        self.base_url = (base_url or self.BASE_URL).rstrip("/")
        self.timeout = timeout
        self._transport = transport
        self.headers = {
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token or ''}",
            "X-GitHub-Api-Version": API_VERSION,
            "User-Agent": user_agent,
        }
        if not token:
            logger.warning("GitHub client initialized without token")
        logger.debug("GitHub client ready, base_url=%s", self.base_url)

    async def call(
        self,
        path: str,
        method: str = "GET",
        *,
        json: Any = None,
        params: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """
        Perform one request and return the parsed JSON body.

        Args:
            path: API path, starting with '/'
            method: HTTP method
            json: JSON request body
            params: Query parameters
            headers: Extra headers, merged over the defaults

        Returns:
            Parsed JSON, or None for an empty body

        Raises:
            RemoteCallError: On non-2xx status or transport failure
        """
        url = f"{self.base_url}{path}"
        merged = {**self.headers, **(headers or {})}
        logger.debug("Request: %s %s", method, url)
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                async with client.stream(
                    method, url, json=json, params=params, headers=merged
                ) as response:
                    logger.debug(
                        "Response: %s %s (status=%d)", method, path, response.status_code
                    )
                    if not response.is_success:
                        try:
                            body = (await response.aread()).decode("utf-8", "replace")
                        except Exception as e:  # noqa: BLE001 - body is best-effort
                            logger.debug("Failed to read error body of %s: %s", path, e)
                            body = ""
                        raise RemoteCallError(
                            path, response.status_code, response.reason_phrase, body
                        )
                    content = await response.aread()
        except httpx.TransportError as e:
            logger.debug("Transport error: %s %s: %s", method, path, e)
            raise RemoteCallError(path, None, f"{type(e).__name__}: {e}") from e

        if response.status_code == 204 or not content:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise RemoteCallError(
                path,
                response.status_code,
                "Invalid JSON response",
                content.decode("utf-8", "replace"),
            ) from e

    def _parse(self, model: type[ModelT], path: str, data: Any) -> ModelT:
        """Validate a response body against a model."""
        try:
            return model.model_validate(data or {})
        except ValidationError as e:
            raise RemoteCallError(
                path, None, f"Unexpected response shape for {model.__name__}", str(e)
            ) from e

    async def get_tree(
        self, owner: str, repo: str, ref: str, recursive: bool = True
    ) -> Tree:
        """
        Get the git tree of a ref (branch name or commit sha).

        Args:
            owner: Repository owner
            repo: Repository name
            ref: Branch name or tree-ish sha
            recursive: Whether to list the whole tree

        Returns:
            Tree with its entries
        """
        path = f"/repos/{_segment(owner)}/{_segment(repo)}/git/trees/{_segment(ref)}"
        params = {"recursive": "1"} if recursive else None
        data = await self.call(path, params=params)
        return self._parse(Tree, path, data)

    async def get_branch(self, owner: str, repo: str, branch: str) -> BranchInfo:
        """Look up a branch and its head commit."""
        path = f"/repos/{_segment(owner)}/{_segment(repo)}/branches/{_segment(branch)}"
        data = await self.call(path)
        return self._parse(BranchInfo, path, data)

    async def list_contents(self, owner: str, repo: str, ref: str) -> list[ContentItem]:
        """
        List the repository root contents at a ref.

        A single-file response is returned as a one-item list.
        """
        path = f"/repos/{_segment(owner)}/{_segment(repo)}/contents"
        data = await self.call(path, params={"ref": ref})
        if data is None:
            return []
        if isinstance(data, dict):
            return [self._parse(ContentItem, path, data)]
        logger.debug("Directory listing: %d items", len(data))
        return [self._parse(ContentItem, path, item) for item in data]

    async def generate_from_template(
        self,
        template_owner: str,
        template_repo: str,
        *,
        owner: str,
        name: str,
        private: bool = False,
    ) -> GeneratedRepository:
        """
        Create a repository from a template repository.

        Args:
            template_owner: Owner of the template repository
            template_repo: Name of the template repository
            owner: Owner of the new repository
            name: Name of the new repository
            private: Whether the new repository is private

        Returns:
            The created repository
        """
        path = f"/repos/{_segment(template_owner)}/{_segment(template_repo)}/generate"
        body = {
            "owner": owner,
            "name": name,
            "private": private,
            "include_all_branches": False,
        }
        logger.info(
            "Generating %s/%s from template %s/%s",
            owner, name, template_owner, template_repo,
        )
        data = await self.call(path, "POST", json=body)
        return self._parse(GeneratedRepository, path, data)
