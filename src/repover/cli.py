"""CLI for repover."""

import sys

import click
import structlog

from repover.config.logging import configure_logging
from repover.core.exceptions import ConfigurationError, RepoverError
from repover.core.models.repository import BulkOperationResult, RepositoryRecord
from repover.core.models.version import BumpKind

logger = structlog.get_logger(__name__)


def _create_service(settings=None):
    """Create the repository service from settings."""
    from repover.config.settings import get_settings
    from repover.services.repositories import RepositoryService

    if settings is None:
        settings = get_settings()
    try:
        return RepositoryService.from_settings(settings)
    except ConfigurationError as e:
        _fail(e)


def _fail(error: RepoverError) -> None:
    click.echo(f"Error: {error.message}", err=True)
    sys.exit(1)


def _echo_record(record: RepositoryRecord) -> None:
    langs = " ".join(
        f"{locale}:{'yes' if present else 'no'}"
        for locale, present in record.language_availability.items()
    )
    click.echo(f"{record.basename}  [{record.last_tag or 'untagged'}]")
    click.echo(f"  Path:        {record.path}")
    click.echo(f"  Package:     {record.package_name} ({record.package_type})")
    click.echo(f"  Description: {record.package_description}")
    click.echo(f"  Changed:     {record.changed_file_count}")
    click.echo(f"  README:      {'yes' if record.has_readme else 'no'}")
    if langs:
        click.echo(f"  Languages:   {langs}")


def _echo_bulk(result: BulkOperationResult) -> None:
    for path, tag in result.succeeded.items():
        click.echo(f"  [ok]     {path} -> {tag}")
    for path, error in result.failed.items():
        click.echo(f"  [failed] {path}: {error}")
    click.echo(f"{len(result.succeeded)} succeeded, {len(result.failed)} failed")
    if not result.ok:
        sys.exit(1)


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--root", "-r", default=None, help="Root directory base paths are resolved against")
@click.option(
    "--base-path", "-b", "base_paths", multiple=True,
    help="Directory whose children are scanned (repeatable)",
)
@click.pass_context
def cli(ctx: click.Context, verbose: bool, root: str | None, base_paths: tuple[str, ...]) -> None:
    """repover: tag, align and inspect local git repositories."""
    from repover.config.settings import get_settings

    settings = get_settings()
    overrides = {}
    if root:
        overrides["root"] = root
    if base_paths:
        overrides["base_paths"] = list(base_paths)
    if overrides:
        settings = settings.model_copy(update=overrides)

    configure_logging(
        log_level="DEBUG" if verbose else settings.log_level,
        json_logs=settings.is_production,
    )
    ctx.obj = settings


@cli.command("list")
@click.pass_obj
def list_repositories(settings) -> None:
    """List discovered repositories."""
    records = _create_service(settings).list_repositories()
    if not records:
        click.echo("No repositories found.")
        return

    click.echo(f"Found {len(records)} repositories:\n")
    for record in records:
        changed = f"{record.changed_file_count} changed" if record.changed_file_count else "clean"
        readme = "" if record.has_readme else "  (no README)"
        click.echo(f"  {record.basename:<30} {record.last_tag or '-':<10} {changed}{readme}")


@cli.command()
@click.argument("repo_dir")
@click.option("--no-cache", is_flag=True, help="Inspect without the cache")
@click.pass_obj
def show(settings, repo_dir: str, no_cache: bool) -> None:
    """Show details of one repository."""
    try:
        record = _create_service(settings).get_repository(repo_dir, use_cache=not no_cache)
    except RepoverError as e:
        _fail(e)
    _echo_record(record)


@cli.command()
@click.argument("repo_dir")
@click.option(
    "--kind", "-k",
    type=click.Choice([kind.value for kind in BumpKind]),
    default=BumpKind.PATCH.value,
    help="Component to bump",
)
@click.option("--tag", "-t", default=None, help="Explicit tag (skips the bump rule)")
@click.option("--message", "-m", default=None, help="Commit message")
@click.option("--patch-limit", type=int, default=None, help="Patch rollover limit")
@click.option("--minor-limit", type=int, default=None, help="Minor rollover limit")
@click.pass_obj
def bump(
    settings,
    repo_dir: str,
    kind: str,
    tag: str | None,
    message: str | None,
    patch_limit: int | None,
    minor_limit: int | None,
) -> None:
    """Bump the version tag, commit, tag and push."""
    try:
        new_tag = _create_service(settings).bump(
            repo_dir,
            kind=kind,
            tag=tag,
            message=message,
            patch_limit=patch_limit,
            minor_limit=minor_limit,
        )
    except RepoverError as e:
        _fail(e)
    click.echo(f"Tagged and pushed {new_tag}")


@cli.command()
@click.argument("repo_dir")
@click.pass_obj
def untag(settings, repo_dir: str) -> None:
    """Delete the last local tag."""
    try:
        removed = _create_service(settings).untag(repo_dir)
    except RepoverError as e:
        _fail(e)
    if removed is None:
        click.echo("Repository has no tag.")
    else:
        click.echo(f"Removed tag {removed}")


@cli.command()
@click.argument("repo_dir")
@click.pass_obj
def refresh(settings, repo_dir: str) -> None:
    """Re-inspect a repository."""
    try:
        record = _create_service(settings).refresh(repo_dir)
    except RepoverError as e:
        _fail(e)
    _echo_record(record)


@cli.command()
@click.argument("repo_dir")
@click.pass_obj
def readme(settings, repo_dir: str) -> None:
    """Create a default README.md."""
    try:
        path = _create_service(settings).create_readme(repo_dir)
    except RepoverError as e:
        _fail(e)
    click.echo(f"Created {path}")


@cli.command()
@click.argument("repo_dir", required=False)
@click.pass_obj
def keywords(settings, repo_dir: str | None) -> None:
    """Add default keywords to manifests lacking them.

    Applies to every discovered repository when REPO_DIR is omitted.
    """
    try:
        changes = _create_service(settings).normalize_keywords(repo_dir)
    except RepoverError as e:
        _fail(e)
    for path, changed in changes.items():
        click.echo(f"  [{'updated' if changed else 'unchanged':>9}] {path}")


@cli.command("bulk-patch")
@click.pass_obj
def bulk_patch(settings) -> None:
    """Patch-bump every discovered repository."""
    _echo_bulk(_create_service(settings).bulk_patch())


@cli.command()
@click.argument("tag")
@click.option("--message", "-m", default=None, help="Commit message")
@click.pass_obj
def align(settings, tag: str, message: str | None) -> None:
    """Tag every discovered repository with TAG."""
    try:
        result = _create_service(settings).align(tag, message=message)
    except RepoverError as e:
        _fail(e)
    _echo_bulk(result)


@cli.command()
@click.pass_obj
def serve(settings) -> None:
    """Run the admin API."""
    import uvicorn

    from repover.api.main import create_app

    uvicorn.run(create_app(settings), host=settings.api_host, port=settings.api_port)


if __name__ == "__main__":
    cli()
