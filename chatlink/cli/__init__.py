"""CLI entry point for chatlink."""

import logging

import rich_click as click

from .. import __version__

# Import command modules without shadowing module names with command objects
# so that `import chatlink.cli.<module>` still resolves to the module.
from . import config_cmd as _config_mod
from . import messages as _messages_mod


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging")
def cli(verbose: bool):
    """Parse chat hyperlink markup into segments and classify messages."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")


# Register commands
cli.add_command(_messages_mod.parse)
cli.add_command(_messages_mod.classify)
cli.add_command(_messages_mod.render)
cli.add_command(_config_mod.config)


if __name__ == "__main__":
    cli()
