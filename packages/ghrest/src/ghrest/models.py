"""GitHub REST API data models."""

from typing import Literal

from pydantic import BaseModel, Field, model_serializer


class TreeEntry(BaseModel):
    """Entry of a git tree (file or directory)."""

    path: str
    type: Literal["tree", "blob", "commit"]
    mode: str | None = None
    sha: str | None = None
    size: int | None = None
    url: str | None = None

    @model_serializer(mode="wrap")
    def _drop_missing(self, handler):
        # Synthesized entries only carry path and type.
        return {k: v for k, v in handler(self).items() if v is not None}


class Tree(BaseModel):
    """Recursive git tree of a repository at a given ref."""

    sha: str | None = None
    truncated: bool = False
    tree: list[TreeEntry] = Field(default_factory=list)


class ContentItem(BaseModel):
    """Item of a repository contents listing."""

    name: str = ""
    path: str
    type: str  # "file", "dir", "symlink" or "submodule"
    sha: str | None = None
    size: int | None = None
    html_url: str | None = None
    download_url: str | None = None


class BranchCommit(BaseModel):
    """Head commit reference of a branch."""

    sha: str | None = None


class BranchInfo(BaseModel):
    """Branch lookup result."""

    name: str = ""
    commit: BranchCommit = Field(default_factory=BranchCommit)


class GeneratedRepository(BaseModel):
    """Repository created from a template."""

    name: str
    full_name: str | None = None
    html_url: str | None = None
    default_branch: str | None = None
    private: bool | None = None
