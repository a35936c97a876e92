"""
Snapshot Commands
------------------

Backup and restore of the whole knowledge base as a JSON document.

Commands:
    - export: Write a snapshot file
    - import: Replace the knowledge base with a snapshot file
"""
from datetime import datetime

import click

from mnemos.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_kb


@click.command()
@click.argument("export_file", type=click.Path(dir_okay=False), required=False)
@click.pass_context
def export(ctx, export_file):
    """
    Write a snapshot to EXPORT_FILE.

    Without EXPORT_FILE, a timestamped file is written to the export
    directory from the configuration.
    """
    if export_file is None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        export_file = ctx.obj["config"].export_dir / f"mnemos_{stamp}.json"
    try:
        kb = get_kb(ctx)
        click.echo("📦 Exporting snapshot...")
        written = kb.export_to_file(export_file)
        click.echo(f"✅ Snapshot written to {written}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "export", {"file": str(export_file)})


@click.command("import")
@click.argument("import_file", type=click.Path(exists=True, dir_okay=False))
@click.confirmation_option(
    prompt="⚠️  This will REPLACE the entire knowledge base! Are you sure?"
)
@click.pass_context
def import_snapshot(ctx, import_file):
    """Replace the knowledge base with the snapshot in IMPORT_FILE."""
    try:
        kb = get_kb(ctx)
        click.echo(f"📥 Importing {import_file}...")
        counts = kb.import_from_file(import_file)
        summary = ", ".join(f"{count} {kind}" for kind, count in counts.items())
        click.echo(f"✅ Imported {summary}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "import", {"file": str(import_file)})
