"""Repository provisioning flow."""

import asyncio
import logging

from ghrest import GitHubClient, RemoteCallError, Tree

from .acquisition import TreeAcquirer
from .config import Settings
from .errors import AcquisitionTimeout, ConfigError, TreeUnavailableError, ValidationError
from .models import ProvisionResult, RepositoryCoordinates
from .polling import Sleep

logger = logging.getLogger(__name__)


class RepositoryService:
    """Generate repositories from the template and report their trees."""

    def __init__(
        self,
        settings: Settings,
        client: GitHubClient | None = None,
        sleep: Sleep = asyncio.sleep,
    ):
        """
        Initialize the service.

        Args:
            settings: Process configuration
            client: GitHub client (built from settings when omitted)
            sleep: Awaitable sleep used between tree polling rounds
        """
        self.settings = settings
        self.client = client or GitHubClient(
            token=settings.github_token,
            base_url=settings.github_api_url,
            timeout=settings.request_timeout,
        )
        self.acquirer = TreeAcquirer(self.client, sleep=sleep)

    def _require_token(self) -> None:
        if not self.settings.github_token:
            raise ConfigError("missing_github_token", "GitHub token is not configured")

    async def provision_repository(
        self,
        project_name: str | None = None,
        owner: str | None = None,
        private: bool = False,
    ) -> ProvisionResult:
        """
        Create a repository from the template and read its tree.

        Args:
            project_name: Name of the new repository (default from settings)
            owner: Owner of the new repository (default from settings)
            private: Whether the repository is private

        Returns:
            ProvisionResult; ``tree`` is None when the tree was not ready

        Raises:
            ValidationError: If the project name is empty
            ConfigError: If no GitHub token is configured
            RemoteCallError: If the generate call fails
        """
        if project_name is None:
            project_name = self.settings.default_project_name
        project_name = project_name.strip()
        owner = (owner or self.settings.default_owner).strip()

        if not project_name:
            raise ValidationError("missing_project_name", "Project name is required")
        self._require_token()

        created = await self.client.generate_from_template(
            self.settings.template_owner,
            self.settings.template_repo,
            owner=owner,
            name=project_name,
            private=private,
        )
        branch = created.default_branch or "main"
        logger.info("Created %s/%s (default branch %s)", owner, created.name, branch)

        tree = await self.acquirer.try_acquire(
            RepositoryCoordinates(owner=owner, repo=created.name, branch=branch),
            max_attempts=self.settings.tree_max_attempts,
            interval=self.settings.tree_interval,
        )
        return ProvisionResult(
            owner=owner,
            repo=created.name,
            html_url=created.html_url,
            default_branch=branch,
            tree=tree,
        )

    async def fetch_repository_tree(
        self,
        repo: str | None,
        owner: str | None = None,
        branch: str | None = None,
    ) -> Tree:
        """
        Read the tree of an existing repository.

        Raises:
            ValidationError: If the repository name is empty
            ConfigError: If no GitHub token is configured
            TreeUnavailableError: If the tree could not be read in time
        """
        repo = (repo or "").strip()
        owner = (owner or self.settings.default_owner).strip()
        branch = (branch or self.settings.default_branch).strip()

        if not repo:
            raise ValidationError("missing_repo", "Repository name is required")
        self._require_token()

        coords = RepositoryCoordinates(owner=owner, repo=repo, branch=branch)
        try:
            return await self.acquirer.acquire(
                coords,
                max_attempts=self.settings.tree_max_attempts,
                interval=self.settings.tree_interval,
            )
        except (AcquisitionTimeout, RemoteCallError) as e:
            raise TreeUnavailableError("repo_info_failed", str(e)) from e
