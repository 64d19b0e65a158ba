import click
import json
import sys

from releasereport.config import get_config_path, load_config
from releasereport.exit_codes import ConfigError


@click.group("config")
def config_cmd():
    """Inspect releasereport settings."""
    pass


@config_cmd.command("show")
@click.option("--pretty", is_flag=True, help="Indent the JSON output")
@click.option("--path", is_flag=True, help="Print only the config file location")
def show_config(pretty, path):
    """Print the effective settings as JSON.

    The result is the defaults with the config file and any
    RELEASEREPORT_* environment variables applied on top, i.e. exactly
    what `releasereport review` will use before its own options.
    """
    if path:
        print(json.dumps({"config_path": str(get_config_path())}))
        return

    try:
        config = load_config()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(e.exit_code)

    print(json.dumps(config, indent=2 if pretty else None, sort_keys=True))
