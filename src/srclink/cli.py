"""CLI for srclink."""

import sys
from pathlib import Path

import click
import structlog

from srclink.config.logging import configure_logging

logger = structlog.get_logger(__name__)


def _get_service():
    from srclink.services.source_links import get_source_link_service

    return get_source_link_service()


@click.group()
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
def cli(verbose: bool) -> None:
    """srclink: view-source links for documentation files."""
    from srclink.config.settings import get_settings

    settings = get_settings()
    log_level = "DEBUG" if verbose or settings.debug else settings.log_level
    configure_logging(log_level=log_level, json_logs=settings.json_logs)


@cli.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path())
@click.option("--jobs", "-j", type=int, default=None, help="Worker threads")
def detail(paths: tuple[str, ...], jobs: int | None) -> None:
    """Show repository, branch and relative path for files."""
    service = _get_service()
    details = service.get_file_details(paths, max_parallelism=jobs)

    missing = 0
    for path, file_detail in details.items():
        if file_detail is None:
            missing += 1
            click.echo(f"{path}: not under version control", err=True)
            continue
        click.echo(f"{path}")
        click.echo(f"  Repository: {file_detail.repo_url}")
        click.echo(f"  Branch:     {file_detail.branch}")
        click.echo(f"  Path:       {file_detail.relative_path}")

    logger.debug("Files resolved", total=len(details), missing=missing)
    if missing:
        sys.exit(1)


@cli.command()
@click.argument("path", type=click.Path())
@click.option("--line", "-l", type=click.IntRange(min=0), default=0, help="Line number")
def url(path: str, line: int) -> None:
    """Print the web URL of a local file."""
    link = _get_service().get_file_url(path, line=line)
    if link is None:
        logger.debug("No source link for file", path=path)
        click.echo(f"Error: No source link available for {path}", err=True)
        sys.exit(1)
    click.echo(link)


@cli.command()
@click.option("--repo", "-r", required=True, help="Repository URL or scp-like address")
@click.option("--branch", "-b", required=True, help="Branch name or commit id")
@click.option("--path", "-p", "file_path", required=True, help="Path relative to the repository root")
@click.option("--line", "-l", type=click.IntRange(min=0), default=0, help="Line number")
def link(repo: str, branch: str, file_path: str, line: int) -> None:
    """Build the web URL for a repository location."""
    from srclink.core.models.source import SourceLocation

    location = SourceLocation(repo=repo, branch=branch, path=file_path, line=line)
    result = _get_service().get_source_url(location)
    if result is None:
        click.echo(f"Error: Unsupported repository: {repo}", err=True)
        sys.exit(1)
    click.echo(result)


@cli.command()
@click.argument("raw_url")
def rewrite(raw_url: str) -> None:
    """Rewrite a raw-content URL into its browsable form."""
    click.echo(_get_service().raw_content_url_to_content_url(raw_url))


@cli.command()
@click.argument("directory", default=".", type=click.Path())
def root(directory: str) -> None:
    """Print the repository root containing a directory."""
    from srclink.git.locator import find_repo_root

    repo_root = find_repo_root(Path(directory))
    if repo_root is None:
        click.echo(f"Error: Not inside a git repository: {Path(directory).resolve()}", err=True)
        sys.exit(1)
    click.echo(str(repo_root))


if __name__ == "__main__":
    cli()
