"""Object commands - cat-file and count-objects."""

from typing import Optional

import click
from colorama import Fore, Style

from loosegit.cli.output import error, info
from loosegit.cli.repo import open_storage
from loosegit.core.errors import LooseGitError
from loosegit.core.hash import HEX_SIZE, Hash, is_hex_hash
from loosegit.core.objects import BLOB, OBJECT_TYPES, TREE, parse_tree


def resolve_short_hash(storage, short_hash: str) -> Optional[Hash]:
    """Resolve a short hash to a full hash among the loose objects."""
    short_hash = short_hash.lower()
    if len(short_hash) == HEX_SIZE:
        return Hash.from_hex(short_hash) if is_hex_hash(short_hash) else None
    
    if len(short_hash) < 4:
        return None
    
    matches = [h for h in storage.dir.loose_objects() if h.hex.startswith(short_hash)]
    if len(matches) == 1:
        return matches[0]
    return None


def echo_content(content: bytes) -> None:
    try:
        click.echo(content.decode('utf-8'), nl=False)
    except UnicodeDecodeError:
        click.echo(f"<binary data: {len(content)} bytes>")


@click.command('cat-file')
@click.argument('object_hash')
@click.option('-t', 'show_type', is_flag=True, help='Show object type')
@click.option('-s', 'show_size', is_flag=True, help='Show object size')
@click.option('-p', 'pretty', is_flag=True, help='Pretty-print object content')
@click.pass_context
def cat_file_cmd(ctx, object_hash, show_type, show_size, pretty):
    """
    Show the type, size or content of an object.
    
    Examples:
        loosegit cat-file -t abc1234   # Show object type
        loosegit cat-file -s abc1234   # Show object size
        loosegit cat-file -p abc1234   # Pretty-print object
    """
    storage = open_storage(ctx)
    
    full_hash = resolve_short_hash(storage, object_hash)
    if full_hash is None:
        click.echo(error(f"Not a valid object name {object_hash}"), err=True)
        raise click.Abort()
    
    try:
        obj = storage.get(full_hash)
    except (OSError, LooseGitError) as e:
        click.echo(error(f"cat-file failed: {e}"), err=True)
        raise click.Abort()
    
    if show_type:
        click.echo(obj.type)
        return
    
    if show_size:
        click.echo(obj.size)
        return
    
    if pretty and obj.type == TREE:
        try:
            entries = parse_tree(obj.content)
        except LooseGitError as e:
            click.echo(error(f"cat-file failed: {e}"), err=True)
            raise click.Abort()
        for entry in entries:
            click.echo(f"{entry.mode.zfill(6)} {entry.type} {Fore.YELLOW}{entry.hash}{Style.RESET_ALL}\t{entry.name}")
        return
    
    if pretty or obj.type == BLOB:
        echo_content(obj.content)
        return
    
    click.echo(error("Use -p to pretty-print non-blob objects"), err=True)
    raise click.Abort()


@click.command('count-objects')
@click.option('-v', '--verbose', is_flag=True, help='Show detailed information')
@click.pass_context
def count_objects_cmd(ctx, verbose):
    """
    Count objects in the repository.
    
    Shows statistics about loose objects in the object database.
    
    Examples:
        loosegit count-objects          # Show object counts
        loosegit count-objects -v       # Show detailed breakdown
    """
    storage = open_storage(ctx)
    fs = storage.dir.fs
    
    total_objects = 0
    total_size = 0
    type_counts = dict.fromkeys(OBJECT_TYPES, 0)
    
    try:
        for h in storage.dir.loose_objects():
            _, path = storage.dir.object_file(h)
            total_objects += 1
            total_size += fs.stat(path).st_size
            
            if verbose:
                type_counts[storage.get(h).type] += 1
    except (OSError, LooseGitError) as e:
        click.echo(error(f"count-objects failed: {e}"), err=True)
        raise click.Abort()
    
    if verbose:
        click.echo(info("Object statistics:"))
        for obj_type, count in type_counts.items():
            label = f"{obj_type.capitalize()}s:"
            click.echo(f"  {label:9}{Fore.YELLOW}{count}{Style.RESET_ALL}")
        click.echo()
    
    size_kb = total_size / 1024
    click.echo(f"{total_objects} objects, {size_kb:.2f} KB")
