"""Error types reported to callers."""


class RepoForgeError(Exception):
    """Base error carrying a machine-readable code."""

    code = "repoforge_error"

    def __init__(self, code: str | None = None, message: str | None = None):
        if code:
            self.code = code
        self.message = message or self.code
        super().__init__(self.message)


class ValidationError(RepoForgeError):
    """A required input field is missing or empty."""

    code = "validation_error"


class ConfigError(RepoForgeError):
    """Required configuration (the GitHub token) is missing."""

    code = "missing_github_token"


class AcquisitionTimeout(RepoForgeError):
    """No tree strategy succeeded within the allowed rounds."""

    code = "timeout_waiting_for_repo_ready"

    def __init__(self, owner: str, repo: str, branch: str, attempts: int):
        self.owner = owner
        self.repo = repo
        self.branch = branch
        self.attempts = attempts
        super().__init__(
            message=(
                f"timeout_waiting_for_repo_ready: {owner}/{repo}@{branch} "
                f"after {attempts} attempts"
            )
        )


class TreeUnavailableError(RepoForgeError):
    """The tree of a repository could not be read."""

    code = "repo_info_failed"
