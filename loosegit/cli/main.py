"""Main CLI entry point for loosegit."""

import logging

import click
from colorama import init

from loosegit import __version__
from loosegit.cli.output import BANNER
from loosegit.cli.commands import (show_ref_cmd, symbolic_ref_cmd, rev_parse_cmd,
                                   cat_file_cmd, count_objects_cmd)
from loosegit.core.config import Config

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s %(name)s: %(message)s'


class LooseGitGroup(click.Group):
    """Custom Group class to display banner before help."""
    
    def format_help(self, ctx, formatter):
        """Override to add banner before help text."""
        click.echo(BANNER)
        super().format_help(ctx, formatter)


def setup_logging(debug: bool) -> None:
    """Configure log output for the command line."""
    level = 'DEBUG' if debug else Config().log_level
    logging.basicConfig(format=LOG_FORMAT)
    logging.getLogger('loosegit').setLevel(level)


@click.group(cls=LooseGitGroup)
@click.version_option(version=__version__)
@click.option('--git-dir', type=click.Path(file_okay=False), help='Path to the git directory')
@click.option('--debug', is_flag=True, help='Enable debug logging')
@click.pass_context
def cli(ctx, git_dir, debug):
    """Inspect git repositories without modifying them."""
    setup_logging(debug)
    ctx.obj = {'git_dir': git_dir, 'debug': debug}


# Register commands
cli.add_command(show_ref_cmd)
cli.add_command(symbolic_ref_cmd)
cli.add_command(rev_parse_cmd)
cli.add_command(cat_file_cmd)
cli.add_command(count_objects_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
