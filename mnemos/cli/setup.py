"""
Setup Commands
---------------

Commands:
    - init: Create the database, default stats/settings and the main hall
"""
import click

from mnemos.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_kb


@click.command()
@click.pass_context
def init(ctx):
    """Initialize the knowledge base (safe to run repeatedly)."""
    try:
        click.echo("🚀 Initializing Mnemos knowledge base...")
        kb = get_kb(ctx)
        click.echo(f"🗄️  Database: {ctx.obj['config'].db_path}")
        click.echo(f"📐 Schema version: {kb.db.schema_version()}")
        click.echo("✅ Knowledge base ready!")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "init")
