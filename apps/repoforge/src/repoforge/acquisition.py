"""Tree acquisition for freshly generated repositories.

A repository created from a template is not immediately readable: the
branch, its commit and its tree appear with some delay. Each round tries
three independent strategies in order and stops at the first that yields
a non-empty tree:

1. the recursive tree of the branch by name
2. the recursive tree of the branch's head commit sha
3. the root contents listing, converted into a tree

A failing strategy only means "not this one, not this round". Rounds are
repeated every ``interval`` seconds up to ``max_attempts`` times.
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass

from ghrest import GitHubClient, Tree

from .errors import AcquisitionTimeout
from .listing import listing_to_tree
from .models import RepositoryCoordinates
from .polling import Sleep, poll

logger = logging.getLogger(__name__)

DEFAULT_MAX_ATTEMPTS = 60
DEFAULT_INTERVAL = 2.0  # seconds


@dataclass(frozen=True)
class StrategyResult:
    """Outcome of one strategy: a tree, or the reason there is none."""

    strategy: str
    tree: Tree | None = None
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.tree is not None


Strategy = Callable[[RepositoryCoordinates], Awaitable[StrategyResult]]


def _guarded(name: str, fetch: Callable[[RepositoryCoordinates], Awaitable[Tree | None]]) -> Strategy:
    """Wrap a tree fetch so that any exception becomes a failed result."""

    async def run(coords: RepositoryCoordinates) -> StrategyResult:
        try:
            tree = await fetch(coords)
        except Exception as e:  # noqa: BLE001 - a failed strategy is an expected outcome
            logger.debug("Strategy %s failed for %s: %s", name, coords, e)
            return StrategyResult(strategy=name, error=str(e))
        if tree is None:
            return StrategyResult(strategy=name, error="empty")
        return StrategyResult(strategy=name, tree=tree)

    return run


async def first_success(
    strategies: Sequence[Strategy], coords: RepositoryCoordinates
) -> StrategyResult | None:
    """Run strategies in order; return the first successful result."""
    for strategy in strategies:
        result = await strategy(coords)
        if result.ok:
            return result
    return None


class TreeAcquirer:
    """Obtain a complete tree despite eventual consistency."""

    def __init__(self, client: GitHubClient, sleep: Sleep = asyncio.sleep):
        self.client = client
        self.sleep = sleep
        self.strategies: list[Strategy] = [
            _guarded("branch_tree", self._branch_tree),
            _guarded("commit_tree", self._commit_tree),
            _guarded("contents_listing", self._contents_listing),
        ]

    async def _branch_tree(self, coords: RepositoryCoordinates) -> Tree | None:
        tree = await self.client.get_tree(coords.owner, coords.repo, coords.branch)
        return tree if tree.tree else None

    async def _commit_tree(self, coords: RepositoryCoordinates) -> Tree | None:
        branch = await self.client.get_branch(coords.owner, coords.repo, coords.branch)
        sha = branch.commit.sha
        if not sha:
            return None
        tree = await self.client.get_tree(coords.owner, coords.repo, sha)
        return tree if tree.tree else None

    async def _contents_listing(self, coords: RepositoryCoordinates) -> Tree | None:
        items = await self.client.list_contents(coords.owner, coords.repo, coords.branch)
        if not items:
            return None
        return listing_to_tree(items, root_name=coords.repo)

    async def run_round(self, coords: RepositoryCoordinates) -> StrategyResult | None:
        """Run one round of all strategies."""
        return await first_success(self.strategies, coords)

    async def try_acquire(
        self,
        coords: RepositoryCoordinates,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval: float = DEFAULT_INTERVAL,
    ) -> Tree | None:
        """Like acquire(), but returns None instead of raising on timeout."""
        try:
            return await self.acquire(coords, max_attempts, interval)
        except AcquisitionTimeout as e:
            logger.warning("Tree not ready: %s", e)
            return None

    async def acquire(
        self,
        coords: RepositoryCoordinates,
        max_attempts: int = DEFAULT_MAX_ATTEMPTS,
        interval: float = DEFAULT_INTERVAL,
    ) -> Tree:
        """
        Poll until a strategy yields a non-empty tree.

        Args:
            coords: Repository to read
            max_attempts: Maximum number of rounds
            interval: Seconds to wait after a failed round

        Returns:
            The tree from the first successful strategy

        Raises:
            AcquisitionTimeout: If no round succeeded
        """
        logger.info(
            "Acquiring tree for %s (max_attempts=%d, interval=%.1fs)",
            coords, max_attempts, interval,
        )
        outcome = await poll(
            lambda: self.run_round(coords),
            attempts=max_attempts,
            interval=interval,
            sleep=self.sleep,
        )
        if not outcome.succeeded:
            raise AcquisitionTimeout(coords.owner, coords.repo, coords.branch, outcome.attempts)

        result = outcome.value
        logger.info(
            "Tree for %s acquired via %s on round %d (%d entries)",
            coords, result.strategy, outcome.attempts, len(result.tree.tree),
        )
        return result.tree
