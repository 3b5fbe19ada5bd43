"""Process-wide configuration."""

import logging
import os

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict

logger = logging.getLogger(__name__)


class Settings(BaseModel):
    """Immutable settings, built once at startup and passed explicitly."""

    model_config = ConfigDict(frozen=True)

    github_token: str | None = None
    github_api_url: str = "https://api.github.com"
    request_timeout: float = 30.0

    default_owner: str = "leochanvin"
    template_owner: str = "leochanvin"
    template_repo: str = "flutter-studio-template"
    default_project_name: str = "flutter_studio"
    default_branch: str = "main"

    tree_max_attempts: int = 60
    tree_interval: float = 2.0  # seconds

    host: str = "0.0.0.0"
    port: int = 8080

    @classmethod
    def from_env(
        cls, github_token: str | None = None, load_dotenv_file: bool = True
    ) -> "Settings":
        """
        Build settings from environment variables.

        Reads GH_TOKEN (or GITHUB_TOKEN), GH_OWNER, TEMPLATE_OWNER,
        TEMPLATE_REPO, GITHUB_API_URL, TREE_MAX_ATTEMPTS, TREE_INTERVAL,
        HOST and PORT. Unset variables keep their defaults; an explicit
        ``github_token`` wins over the environment.
        """
        if load_dotenv_file:
            load_dotenv()

        env = os.environ
        values: dict[str, object] = {
            "github_token": github_token or env.get("GH_TOKEN") or env.get("GITHUB_TOKEN") or None,
        }
        mapping = {
            "GITHUB_API_URL": "github_api_url",
            "GH_OWNER": "default_owner",
            "TEMPLATE_OWNER": "template_owner",
            "TEMPLATE_REPO": "template_repo",
            "TREE_MAX_ATTEMPTS": "tree_max_attempts",
            "TREE_INTERVAL": "tree_interval",
            "HOST": "host",
            "PORT": "port",
        }
        for var, field in mapping.items():
            if env.get(var):
                values[field] = env[var]

        settings = cls(**values)
        if not settings.github_token:
            logger.warning("GH_TOKEN is not set; GitHub calls will be rejected")
        return settings
