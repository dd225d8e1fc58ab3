# The MIT License (MIT)
# Copyright © 2025 Entrius

"""Rich tables for report buckets."""

from typing import List

from rich import box
from rich.table import Table

from gitactivity.classes import PullRequest


def build_table(**kwargs) -> Table:
    """Create a Rich table with the report's visual style."""
    params = {
        'box': box.MINIMAL_HEAVY_HEAD,
        'header_style': 'bold white',
        'border_style': 'grey50',
        'show_lines': False,
        'pad_edge': False,
    }
    params.update(kwargs)
    return Table(**params)


def build_pr_table(title: str, prs: List[PullRequest], show_merged: bool = False) -> Table:
    """Build a Rich table for one report bucket."""
    table = build_table(title=title, show_header=True)
    table.add_column('Repository', style='cyan')
    table.add_column('PR #', style='cyan', justify='right')
    table.add_column('Title', style='green', max_width=50)
    table.add_column('Created', style='magenta')
    if show_merged:
        table.add_column('Merged', style='magenta')
    table.add_column('Participants', justify='right')
    table.add_column('Events', style='yellow', justify='right')

    for pr in prs:
        row = [
            pr.repository,
            str(pr.number),
            pr.title or 'Untitled',
            pr.created_at[:10] if pr.created_at else 'N/A',
        ]
        if show_merged:
            row.append(pr.merged_at[:10] if pr.merged_at else 'N/A')
        row.extend([str(pr.participant_count), str(pr.activity_event_count)])
        table.add_row(*row)

    return table
