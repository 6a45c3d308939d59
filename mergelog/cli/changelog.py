"""Changelog command implementation."""

import sys

import click

from ..changelog import get_changelog, render_changelog
from ..github import GitHubError


@click.command()
@click.option('--from', 'base', required=True, help='The commitish (SHA, tag etc) of the previous release')
@click.option('--to', 'head', required=True, help='The commitish (SHA, tag etc) of the new release')
@click.option('--org', help='Repository owner (overrides config)')
@click.option('--repo', help='Repository name (overrides config)')
@click.option('--github-token', help='GitHub API token (overrides global setting)')
@click.option('--workers', type=click.IntRange(min=1), help='Number of concurrent pull request fetches')
@click.option('--output', '-o', help='Write the changelog to a file instead of stdout')
@click.pass_context
def changelog(ctx, base, head, org, repo, github_token, workers, output):
    """Print merged pull requests between two commits, grouped by label."""

    from .main import create_client

    client, config = create_client(ctx, org, repo, github_token)
    logger = ctx.obj['logger']

    logger.info(f"Generating changelog for {config.org}/{config.repo}: {base}...{head}")

    try:
        repository = client.get_repository(config.org, config.repo)
        logger.debug(f"Using repository {repository['full_name']}")

        result = get_changelog(
            client, config.org, config.repo, base, head,
            config.taxonomy, workers or config.workers
        )
    except GitHubError as e:
        logger.error(f"GitHub request failed: {e}")
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if result.is_empty:
        click.echo("No merged PRs found")
        return

    click.echo(f"Found {len(result.merged_numbers)} merged PRs between {base} and {head}.")
    click.echo()

    text = render_changelog(result.sections)

    if output:
        try:
            with open(output, 'w', encoding='utf-8') as f:
                f.write(text)
        except OSError as e:
            click.echo(f"Error writing to file {output}: {e}", err=True)
            sys.exit(1)
        click.echo(f"Changelog saved to: {output}")
    else:
        click.echo(text)
