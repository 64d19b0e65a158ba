#!/usr/bin/env python3

import click

from releasereport.commands.review import review_handler
from releasereport.commands.config import config_cmd


@click.group()
@click.version_option(package_name="releasereport")
def cli():
    """releasereport - Review commits since the last release tag.

    Counts fix/feat/refactor/test/style commits in a git repository and
    proposes the next semantic version.
    """
    pass


cli.add_command(review_handler, name='review')
cli.add_command(config_cmd)


def main():
    cli()

if __name__ == "__main__":
    main()
