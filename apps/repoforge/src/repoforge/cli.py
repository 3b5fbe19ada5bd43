"""CLI for repoforge."""

import asyncio
import json
import logging

import click
from ghrest import RemoteCallError

from .config import Settings
from .errors import RepoForgeError
from .service import RepositoryService

logger = logging.getLogger(__name__)


def setup_logging(verbose: int) -> None:
    """Setup logging."""
    level = logging.DEBUG if verbose >= 2 else logging.INFO if verbose == 1 else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
    )


def echo_json(data: dict) -> None:
    """Print data as indented JSON."""
    click.echo(json.dumps(data, ensure_ascii=False, indent=2))


def fail(code: str, message: str | None = None) -> None:
    """Print an error code to stderr and exit with status 1."""
    click.echo(f"Error: {code}" + (f": {message}" if message and message != code else ""), err=True)
    raise SystemExit(1)


# ============ CLI Group ============

@click.group()
@click.option("--token", envvar="GH_TOKEN", help="GitHub token")
@click.option("-v", "--verbose", count=True, help="Verbosity (-v, -vv)")
@click.pass_context
def cli(ctx: click.Context, token: str | None, verbose: int) -> None:
    """Provision repositories from a template and report their trees."""
    setup_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj["settings"] = Settings.from_env(github_token=token)


def get_service(ctx: click.Context) -> RepositoryService:
    """Build the service once per invocation."""
    if "service" not in ctx.obj:
        ctx.obj["service"] = RepositoryService(ctx.obj["settings"])
    return ctx.obj["service"]


# ============ Commands ============

@cli.command()
@click.argument("name", required=False)
@click.option("--owner", help="Owner of the new repository")
@click.option("--private", is_flag=True, help="Create a private repository")
@click.pass_context
def provision(ctx, name, owner, private):
    """Generate a repository from the template and print its tree."""
    service = get_service(ctx)
    try:
        result = asyncio.run(
            service.provision_repository(project_name=name, owner=owner, private=private)
        )
    except RepoForgeError as e:
        fail(e.code, e.message)
    except RemoteCallError as e:
        fail("repo_generation_failed", str(e))
    if result.tree is None:
        click.echo("Repository created, tree not ready yet", err=True)
    echo_json(result.model_dump(mode="json"))


@cli.command()
@click.argument("repo")
@click.option("--owner", help="Repository owner")
@click.option("--branch", help="Branch name")
@click.option("--attempts", type=int, help="Maximum polling rounds")
@click.option("--interval", type=float, help="Seconds between rounds")
@click.pass_context
def tree(ctx, repo, owner, branch, attempts, interval):
    """Print the tree of an existing repository."""
    update = {}
    if attempts is not None:
        update["tree_max_attempts"] = attempts
    if interval is not None:
        update["tree_interval"] = interval
    if update:
        ctx.obj["settings"] = ctx.obj["settings"].model_copy(update=update)

    service = get_service(ctx)
    try:
        result = asyncio.run(service.fetch_repository_tree(repo, owner=owner, branch=branch))
    except RepoForgeError as e:
        fail(e.code, e.message)
    echo_json(result.model_dump(mode="json"))


@cli.command()
@click.option("--host", help="Bind address")
@click.option("--port", type=int, help="Bind port")
@click.pass_context
def serve(ctx, host, port):
    """Run the HTTP API."""
    import uvicorn

    from .api import create_app

    settings: Settings = ctx.obj["settings"]
    app = create_app(settings, service=ctx.obj.get("service"))
    host = host or settings.host
    port = port or settings.port
    logger.info("Listening on %s:%d", host, port)
    uvicorn.run(app, host=host, port=port, log_level="info")


if __name__ == "__main__":
    cli()
