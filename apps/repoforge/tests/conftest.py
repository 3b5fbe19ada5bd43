"""Pytest fixtures and fakes for repoforge."""

from collections.abc import Callable
from typing import Any

import pytest
from ghrest import BranchInfo, ContentItem, GeneratedRepository, RemoteCallError, Tree

from repoforge import RepositoryCoordinates, Settings


def not_found(path: str = "/") -> Callable[..., Any]:
    """Endpoint behavior that always fails with 404."""

    def respond(*args: Any, **kwargs: Any) -> Any:
        raise RemoteCallError(path, 404, "Not Found", '{"message": "Not Found"}')

    return respond


def returns(*values: Any) -> Callable[..., Any]:
    """Endpoint behavior returning the given values in turn, repeating the last."""
    remaining = list(values)

    def respond(*args: Any, **kwargs: Any) -> Any:
        value = remaining.pop(0) if len(remaining) > 1 else remaining[0]
        if isinstance(value, Exception):
            raise value
        return value

    return respond


def make_tree(*entries: tuple[str, str], sha: str = "abc123") -> Tree:
    return Tree(
        sha=sha,
        truncated=False,
        tree=[{"path": path, "type": kind} for path, kind in entries],
    )


def make_listing(*items: tuple[str, str]) -> list[ContentItem]:
    return [ContentItem(name=path.rsplit("/", 1)[-1], path=path, type=kind) for path, kind in items]


class FakeGitHub:
    """Stand-in for ghrest.GitHubClient with scripted endpoint behavior."""

    def __init__(
        self,
        tree: Callable[..., Any] | None = None,
        branch: Callable[..., Any] | None = None,
        contents: Callable[..., Any] | None = None,
        generated: Callable[..., Any] | None = None,
    ):
        self.tree = tree or not_found("/git/trees")
        self.branch = branch or not_found("/branches")
        self.contents = contents or not_found("/contents")
        self.generated = generated or returns(
            GeneratedRepository(
                name="demo",
                full_name="acme/demo",
                html_url="https://github.com/acme/demo",
                default_branch="main",
            )
        )
        self.calls: list[tuple] = []

    async def get_tree(self, owner: str, repo: str, ref: str, recursive: bool = True) -> Tree:
        self.calls.append(("get_tree", owner, repo, ref))
        return self.tree(owner, repo, ref)

    async def get_branch(self, owner: str, repo: str, branch: str) -> BranchInfo:
        self.calls.append(("get_branch", owner, repo, branch))
        return self.branch(owner, repo, branch)

    async def list_contents(self, owner: str, repo: str, ref: str) -> list[ContentItem]:
        self.calls.append(("list_contents", owner, repo, ref))
        return self.contents(owner, repo, ref)

    async def generate_from_template(self, template_owner, template_repo, *, owner, name, private=False):
        self.calls.append(("generate", template_owner, template_repo, owner, name, private))
        return self.generated(owner=owner, name=name, private=private)

    def called(self, name: str) -> list[tuple]:
        return [c for c in self.calls if c[0] == name]


class RecordingSleep:
    """Awaitable sleep that only records the requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)

    @property
    def elapsed(self) -> float:
        return sum(self.delays)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def coords() -> RepositoryCoordinates:
    return RepositoryCoordinates(owner="acme", repo="demo", branch="main")


@pytest.fixture
def settings() -> Settings:
    return Settings(
        github_token="t0k",
        default_owner="acme",
        template_owner="tmpl-owner",
        template_repo="tmpl",
        tree_max_attempts=5,
        tree_interval=2.0,
    )
