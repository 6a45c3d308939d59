"""Main CLI entry point for mergelog."""

import logging
import sys

import click

from .. import __version__
from ..config import get_config, create_sample_config, Config
from ..github import GitHubClient
from .changelog import changelog


@click.group()
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.option('--github-token', help='GitHub API token (can also be set per command)')
@click.option('--config-file', '-c', help='Path to JSON configuration file')
@click.version_option(version=__version__, prog_name="mergelog")
@click.pass_context
def cli(ctx, debug, github_token, config_file):
    """mergelog - changelogs from merged GitHub pull requests."""

    level = logging.DEBUG if debug else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    try:
        base_config = get_config(config_file)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    ctx.ensure_object(dict)
    ctx.obj['base_config'] = base_config
    ctx.obj['global_github_token'] = github_token
    ctx.obj['logger'] = logging.getLogger('mergelog')


def create_client(ctx, org=None, repo=None, github_token=None):
    """Create GitHub client with configuration precedence."""
    base_config = ctx.obj['base_config']
    logger = ctx.obj['logger']

    config = base_config.model_copy(update={
        'github_token': github_token or ctx.obj['global_github_token'] or base_config.github_token,
        'org': org or base_config.org,
        'repo': repo or base_config.repo,
    })

    if not config.github_token:
        logger.debug("No GitHub token configured, using anonymous access")

    return GitHubClient(config, logger), config


@cli.command()
@click.option('--path', '-p', default='mergelog.json', help='Path for the config file')
def init_config(path):
    """Create a sample configuration file."""
    try:
        create_sample_config(path)
    except OSError as e:
        click.echo(f"Error creating config file: {e}", err=True)
        sys.exit(1)
    click.echo(f"Sample configuration file created at: {path}")
    click.echo("Please edit the file and add your GitHub token and repository details.")


@cli.command()
def version():
    """Show version information."""
    click.echo(f"mergelog version {__version__}")


cli.add_command(changelog)


def main():
    """Main entry point for console script."""
    cli()


if __name__ == '__main__':
    main()
