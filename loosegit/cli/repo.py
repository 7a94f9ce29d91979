"""Repository discovery for CLI commands."""

import logging
import os
from pathlib import Path
from typing import Optional

import click

from loosegit.cli.output import error
from loosegit.core.errors import NotFoundError
from loosegit.core.storage import ObjectStorage


def is_git_dir(path: Path) -> bool:
    """Return True if path looks like a git directory."""
    return (path / 'HEAD').is_file() and (path / 'objects').is_dir()


def find_git_dir(path: str = '.') -> Optional[Path]:
    """
    Find the git directory by searching up the directory tree.
    
    Searches from the given path upwards until it finds a .git directory
    (or a bare repository) or reaches the filesystem root.
    
    Args:
        path: Starting path for search
        
    Returns:
        Path of the git directory, or None if not found
    """
    current = Path(path).resolve()
    
    while True:
        if is_git_dir(current / '.git'):
            return current / '.git'
        if is_git_dir(current):
            return current
        
        # Reached filesystem root
        if current == current.parent:
            return None
        
        current = current.parent


def open_storage(ctx: click.Context) -> ObjectStorage:
    """
    Open the storage for the current command.
    
    Uses --git-dir when given, otherwise searches from the current
    directory. Aborts the command if no repository is found.
    """
    options = ctx.find_root().obj or {}
    git_dir = options.get('git_dir')
    
    path = Path(git_dir).resolve() if git_dir else find_git_dir()
    if path is None:
        click.echo(error("Not a git repository"), err=True)
        raise click.Abort()
    
    try:
        storage = ObjectStorage.open(str(path))
    except NotFoundError:
        click.echo(error(f"Not a git repository: {path}"), err=True)
        raise click.Abort()
    
    if not options.get('debug') and 'LOOSEGIT_LOG_LEVEL' not in os.environ:
        logging.getLogger('loosegit').setLevel(storage.config.log_level)
    
    return storage
