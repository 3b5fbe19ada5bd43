"""Template-based repository provisioning."""

from .acquisition import StrategyResult, TreeAcquirer, first_success
from .config import Settings
from .errors import (
    AcquisitionTimeout,
    ConfigError,
    RepoForgeError,
    TreeUnavailableError,
    ValidationError,
)
from .listing import DirectoryNode, build_hierarchy, flatten_hierarchy, listing_to_tree
from .models import ProvisionResult, RepositoryCoordinates
from .polling import PollOutcome, poll
from .service import RepositoryService

__all__ = [
    "RepositoryService",
    "TreeAcquirer",
    "StrategyResult",
    "first_success",
    "Settings",
    "RepoForgeError",
    "ValidationError",
    "ConfigError",
    "AcquisitionTimeout",
    "TreeUnavailableError",
    "DirectoryNode",
    "build_hierarchy",
    "flatten_hierarchy",
    "listing_to_tree",
    "ProvisionResult",
    "RepositoryCoordinates",
    "PollOutcome",
    "poll",
]
