"""GitHub REST API client utilities."""

from .client import GitHubClient, RemoteCallError
from .models import (
    BranchCommit,
    BranchInfo,
    ContentItem,
    GeneratedRepository,
    Tree,
    TreeEntry,
)

__all__ = [
    "GitHubClient",
    "RemoteCallError",
    "BranchCommit",
    "BranchInfo",
    "ContentItem",
    "GeneratedRepository",
    "Tree",
    "TreeEntry",
]
