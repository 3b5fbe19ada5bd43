"""Repoforge data models."""

from ghrest import Tree
from pydantic import BaseModel, ConfigDict, Field


class RepositoryCoordinates(BaseModel):
    """Owner, repository and branch of one request."""

    model_config = ConfigDict(frozen=True)

    owner: str
    repo: str
    branch: str = "main"

    def __str__(self) -> str:
        return f"{self.owner}/{self.repo}@{self.branch}"


class ProvisionResult(BaseModel):
    """Outcome of provisioning a repository from the template."""

    ok: bool = True
    owner: str
    repo: str
    html_url: str | None = None
    default_branch: str
    tree: Tree | None = None  # None when the tree was not ready in time


class GenerateRepoRequest(BaseModel):
    """Body of POST /generate-repo."""

    model_config = ConfigDict(populate_by_name=True)

    project_name: str | None = Field(default=None, alias="projectName")
    owner: str | None = None
    private: bool | None = None
