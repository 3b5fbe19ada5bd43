"""HTTP surface: /generate-repo, /repo-info and /health."""

import logging

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, PlainTextResponse
from ghrest import RemoteCallError

from .config import Settings
from .errors import ConfigError, RepoForgeError, ValidationError
from .models import GenerateRepoRequest
from .service import RepositoryService

logger = logging.getLogger(__name__)

router = APIRouter()


def get_service(request: Request) -> RepositoryService:
    """Return the service bound to the running app."""
    return request.app.state.service


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    """Liveness check."""
    return "ok"


@router.post("/generate-repo")
async def generate_repo(request: Request, body: GenerateRepoRequest | None = None):
    """Generate a repository from the template and return its tree."""
    body = body or GenerateRepoRequest()
    service = get_service(request)
    try:
        result = await service.provision_repository(
            project_name=body.project_name or None,
            owner=body.owner,
            private=bool(body.private),
        )
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"ok": False, "error": e.code})
    except ConfigError as e:
        return JSONResponse(status_code=500, content={"ok": False, "error": e.code})
    except (RemoteCallError, RepoForgeError) as e:
        logger.error("Repository generation failed: %s", e)
        return JSONResponse(
            status_code=500,
            content={"ok": False, "error": "repo_generation_failed", "message": str(e)},
        )
    return result.model_dump(mode="json")


@router.get("/repo-info")
async def repo_info(
    request: Request,
    repo: str = "",
    owner: str | None = None,
    branch: str | None = None,
):
    """Return the tree of an existing repository."""
    service = get_service(request)
    try:
        tree = await service.fetch_repository_tree(repo, owner=owner, branch=branch)
    except ValidationError as e:
        return JSONResponse(status_code=400, content={"error": e.code})
    except ConfigError as e:
        return JSONResponse(status_code=500, content={"error": e.code})
    except RepoForgeError as e:
        logger.warning("Tree unavailable for %s: %s", repo, e.message)
        return JSONResponse(status_code=500, content={"error": e.code, "message": e.message})
    return tree.model_dump(mode="json")


def add_cors(app: FastAPI) -> None:
    """Allow cross-origin calls from any UI."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )


def add_error_handlers(app: FastAPI) -> None:
    """Map unexpected exceptions to a JSON 500."""

    @app.exception_handler(Exception)
    async def generic_exception_handler(_, exc: Exception):
        logger.exception("Unhandled exception: %s", exc)
        return JSONResponse(status_code=500, content={"ok": False, "error": "internal_error"})


def create_app(
    settings: Settings | None = None,
    service: RepositoryService | None = None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (read from the environment when omitted)
        service: Prebuilt service, mostly for tests
    """
    if service is None:
        service = RepositoryService(settings or Settings.from_env())
    app = FastAPI(title="repoforge")
    app.state.service = service

    add_cors(app)
    add_error_handlers(app)
    app.include_router(router)
    return app
