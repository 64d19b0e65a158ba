"""
Review command for releasereport.

Summarizes commits since the last release and proposes the next tag.
"""

import click
import json
import sys

from ..config import TAG_SORT_MODES, configure_logging, load_config
from ..exit_codes import CommandError, INTERRUPTED
from ..render import render_report
from ..services.release_service import ReleaseService


@click.command('review')
@click.argument('path', type=click.Path(file_okay=False))
@click.option('--from', 'from_ref', help='Start of the commit range, exclusive (default: oldest of the recent tags)')
@click.option('--to', 'to_ref', help='End of the commit range, inclusive (default: current tip)')
@click.option('--remote', help='Remote to fetch from (default: git\'s own default)')
@click.option('--no-fetch', is_flag=True, help='Skip fetching remote references')
@click.option('--limit', type=click.IntRange(min=1), help='Number of recent tags to list (default: 10)')
@click.option('--prefix', help='Prefix release tags start with (default: v)')
@click.option('--sort', type=click.Choice(TAG_SORT_MODES), help='Tag ranking order (default: numeric)')
@click.option('--json', 'json_output', is_flag=True, help='Output the report as a single JSON object')
@click.option('-v', '--verbose', is_flag=True, help='Log every git command')
def review_handler(path, from_ref, to_ref, remote, no_fetch, limit, prefix, sort, json_output, verbose):
    """Review changes since the last release.

    PATH: Path to a git working copy

    Fetches remote references, lists the most recent release tags (unless
    --from is given), counts fix/feat/refactor/test/style commits in the
    range and proposes the next version.

    Examples:

    \b
        releasereport review .
        releasereport review ~/src/app --from v1.1.0 --to v1.2.0
        releasereport review . --sort lexicographic --no-fetch
    """
    try:
        config = load_config()
        configure_logging(config, verbose=verbose)

        if remote:
            config['git']['remote'] = remote
        if limit:
            config['tags']['limit'] = limit
        if prefix is not None:
            config['tags']['prefix'] = prefix
        if sort:
            config['tags']['sort'] = sort

        service = ReleaseService(config=config)
        report = service.review(
            path,
            from_ref=from_ref,
            to_ref=to_ref,
            fetch=False if no_fetch else None,
        )
    except KeyboardInterrupt:
        click.echo("Interrupted by user", err=True)
        sys.exit(INTERRUPTED)
    except CommandError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    if json_output:
        print(json.dumps(report.to_dict(), ensure_ascii=False))
    else:
        render_report(report, limit=config['tags']['limit'], show_tags=not from_ref)
