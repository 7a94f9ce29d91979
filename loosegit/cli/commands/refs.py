"""Reference commands - show-ref, symbolic-ref and rev-parse."""

import click
from colorama import Fore, Style

from loosegit.cli.output import error, warning
from loosegit.cli.repo import open_storage
from loosegit.core.errors import LooseGitError
from loosegit.core.gitdir import head_target
from loosegit.core.hash import Hash, is_hex_hash


@click.command('show-ref')
@click.option('--heads', is_flag=True, help='Show only branch references')
@click.option('--tags', is_flag=True, help='Show only tag references')
@click.option('--head', is_flag=True, help='Show HEAD reference')
@click.pass_context
def show_ref_cmd(ctx, heads, tags, head):
    """
    Display references in the repository.
    
    Shows branches, tags and other references with their hashes,
    including references from packed-refs.
    
    Examples:
        loosegit show-ref              # Show all references
        loosegit show-ref --heads      # Show only branches
        loosegit show-ref --tags       # Show only tags
        loosegit show-ref --head       # Also show HEAD
    """
    storage = open_storage(ctx)
    
    try:
        refs = storage.refs()
        head_hash = storage.head() if head else None
    except (OSError, LooseGitError) as e:
        click.echo(error(f"show-ref failed: {e}"), err=True)
        raise click.Abort()
    
    shown_any = False
    
    if head_hash is not None:
        shown_any = True
        click.echo(f"{head_hash} {Fore.CYAN}HEAD{Style.RESET_ALL}")
    
    for name in sorted(refs):
        if name.startswith('refs/heads/'):
            if tags and not heads:
                continue
            color = Fore.GREEN
        elif name.startswith('refs/tags/'):
            if heads and not tags:
                continue
            color = Fore.YELLOW
        else:
            if heads or tags:
                continue
            color = Fore.RED
        
        shown_any = True
        click.echo(f"{refs[name]} {color}{name}{Style.RESET_ALL}")
    
    if not shown_any:
        click.echo(warning("No references found"))


@click.command('symbolic-ref')
@click.argument('name')
@click.pass_context
def symbolic_ref_cmd(ctx, name):
    """
    Show which reference a symbolic reference points to.
    
    Examples:
        loosegit symbolic-ref HEAD     # Show what HEAD points to
    """
    if name != 'HEAD':
        click.echo(error("Only HEAD supported"), err=True)
        raise click.Abort()
    
    storage = open_storage(ctx)
    
    try:
        target = head_target(storage.dir.capabilities())
    except (OSError, LooseGitError) as e:
        click.echo(error(f"Cannot read HEAD: {e}"), err=True)
        raise click.Abort()
    
    if not target or is_hex_hash(target):
        click.echo(error("HEAD is not a symbolic reference (detached HEAD)"), err=True)
        raise click.Abort()
    
    click.echo(target)


def resolve_revision(storage, rev: str) -> Hash:
    """
    Resolve a revision to a hash.
    
    Accepts HEAD, a full hash, a full reference name, or a branch or
    tag name.
    
    Raises:
        LookupError: If the revision does not resolve
    """
    if rev == 'HEAD':
        return storage.head()
    
    if is_hex_hash(rev):
        return Hash.from_hex(rev.lower())
    
    refs = storage.refs()
    for name in (rev, f'refs/{rev}', f'refs/heads/{rev}', f'refs/tags/{rev}',
                 f'refs/remotes/{rev}'):
        if name in refs:
            return refs[name]
    
    raise LookupError(f"unknown revision {rev!r}")


@click.command('rev-parse')
@click.argument('rev', default='HEAD')
@click.pass_context
def rev_parse_cmd(ctx, rev):
    """
    Print the hash a revision points to.
    
    Examples:
        loosegit rev-parse             # Hash of HEAD
        loosegit rev-parse main        # Hash of refs/heads/main
        loosegit rev-parse v1.0        # Hash of refs/tags/v1.0
    """
    storage = open_storage(ctx)
    
    try:
        click.echo(str(resolve_revision(storage, rev)))
    except (OSError, LookupError, LooseGitError) as e:
        click.echo(error(str(e)), err=True)
        raise click.Abort()
