# The MIT License (MIT)
# Copyright © 2025 Entrius

"""
GitActivity CLI - Main entry point

Usage:
    gitactivity report [ORG]    - Pull-request activity report for an organization
    gitactivity config          - Show/set CLI configuration
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

import bittensor as bt
import click
from dotenv import load_dotenv
from rich.console import Console

from gitactivity import __version__
from gitactivity.classes import PullRequest
from gitactivity.cli.config_commands import config, get_config_value, resolve_token
from gitactivity.cli.tables import build_pr_table
from gitactivity.config import GITHUB_TOKEN_ENV, WINDOW_DAYS
from gitactivity.errors import RunError
from gitactivity.report import ActivityReport
from gitactivity.report.ordering import SORT_KEYS
from gitactivity.utils.logging import bittensor_sink

console = Console()


def _pr_to_dict(pr: PullRequest) -> Dict[str, Any]:
    data = asdict(pr)
    data['state'] = pr.state.value
    return data


def _ordered(prs: List[PullRequest], sort: Optional[str]) -> List[PullRequest]:
    if sort is None:
        return list(prs)
    return SORT_KEYS[sort](prs)


def report_to_dict(report: ActivityReport, sort: Optional[str] = None) -> Dict[str, Any]:
    """JSON-serializable view of a finished report."""
    result = report.result
    return {
        'organization': report.organization,
        'window_days': report.window_days,
        'generated_at': report.generated_at.isoformat() if report.generated_at else None,
        'repositories': list(report.repositories),
        'merged_prs': [_pr_to_dict(pr) for pr in _ordered(result.merged_prs, sort)],
        'open_prs_with_activity': [_pr_to_dict(pr) for pr in _ordered(result.open_prs_with_activity, sort)],
        'open_prs_without_activity': [_pr_to_dict(pr) for pr in _ordered(result.open_prs_without_activity, sort)],
    }


def print_report(report: ActivityReport, sort: Optional[str] = None) -> None:
    result = report.result
    generated = report.generated_at.strftime('%Y-%m-%d %H:%M UTC') if report.generated_at else 'N/A'

    console.print(
        f'\n[bold cyan]{report.organization}[/bold cyan] activity over the last {report.window_days} days '
        f'[dim]({len(report.repositories)} repositories, generated {generated})[/dim]\n'
    )
    console.print(build_pr_table('Merged PRs', _ordered(result.merged_prs, sort), show_merged=True))
    console.print(build_pr_table('Open PRs with activity', _ordered(result.open_prs_with_activity, sort)))
    console.print(build_pr_table('Open PRs without activity', _ordered(result.open_prs_without_activity, sort)))

    console.print(
        f'\n[green]{len(result.merged_prs)}[/green] merged, '
        f'[yellow]{len(result.open_prs_with_activity)}[/yellow] open with activity, '
        f'[red]{len(result.open_prs_without_activity)}[/red] open without activity'
    )
    if report.rate_limit.last is not None:
        console.print(f'[dim]{report.rate_limit.last}[/dim]')


@click.group()
@click.version_option(version=__version__, prog_name='gitactivity')
def cli():
    """GitActivity CLI - Pull-request activity across an organization's repositories"""
    pass


@cli.command('report')
@click.argument('organization', required=False)
@click.option('--days', '-d', type=click.IntRange(min=1), default=None, help='Report window in days')
@click.option('--token', '-t', default=None, help=f'GitHub token (default: ${GITHUB_TOKEN_ENV} or config)')
@click.option('--sample', is_flag=True, help='Only report on one small page of repositories')
@click.option('--workers', '-w', type=click.IntRange(min=1), default=1, show_default=True, help='Parallel repository fetches')
@click.option('--sort', type=click.Choice(sorted(SORT_KEYS)), default=None, help='Order PRs within each bucket')
@click.option('--json', 'as_json', is_flag=True, help='Print the report as JSON')
@click.option('--verbose', '-v', is_flag=True, help='Debug logging')
def report(
    organization: Optional[str],
    days: Optional[int],
    token: Optional[str],
    sample: bool,
    workers: int,
    sort: Optional[str],
    as_json: bool,
    verbose: bool,
):
    """Report merged and open pull requests of every repository owned by ORGANIZATION.

    \b
    Examples:
        gitactivity report my-org
        gitactivity report my-org --days 14 --sort activity
        gitactivity report my-org --sample --json
    """
    if verbose:
        bt.logging.set_debug(True)

    organization = organization or get_config_value('organization')
    if not organization:
        raise click.UsageError('No organization given and none configured (gitactivity config set organization ...)')

    token = resolve_token(token)
    if not token:
        raise click.UsageError(f'No GitHub token: pass --token, set ${GITHUB_TOKEN_ENV} or run "gitactivity config set token ..."')

    if days is None:
        days = int(get_config_value('days', WINDOW_DAYS))

    activity_report = ActivityReport(
        organization,
        token,
        days,
        log=None if as_json else bittensor_sink('info'),
        exhaustive=not sample,
        workers=workers,
    )

    try:
        activity_report.run()
    except RunError as e:
        bt.logging.error(str(e))
        console.print(f'[red]Error:[/red] {e}')
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(report_to_dict(activity_report, sort), indent=2))
    else:
        print_report(activity_report, sort)


cli.add_command(config)


def main():
    """Main entry point for the CLI"""
    load_dotenv()
    cli()


if __name__ == '__main__':
    main()
