"""CLI commands for loosegit."""

from loosegit.cli.commands.refs import show_ref_cmd, symbolic_ref_cmd, rev_parse_cmd
from loosegit.cli.commands.objects import cat_file_cmd, count_objects_cmd

__all__ = ['show_ref_cmd', 'symbolic_ref_cmd', 'rev_parse_cmd',
           'cat_file_cmd', 'count_objects_cmd']
