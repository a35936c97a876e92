"""
Link Commands
--------------

Commands:
    - add: Link two notes
    - remove: Delete a link
    - list: Show the links leaving and entering a note
    - verify: Check links against the notes they join
"""
import sys

import click

from mnemos.core.logging_manager import handle_cli_error
from mnemos.database.models import LinkType
from . import CLI_ERRORS, get_kb


@click.group()
@click.pass_context
def link(ctx: click.Context) -> None:
    """Connect notes with typed links."""
    pass


@link.command("add")
@click.argument("source_id")
@click.argument("target_id")
@click.option(
    "--type",
    "link_type",
    type=click.Choice(LinkType.choices()),
    default=LinkType.RELATED.value,
    show_default=True,
)
@click.option("--context", default=None, help="Why the notes are linked")
@click.pass_context
def add(ctx, source_id, target_id, link_type, context):
    """Link SOURCE_ID to TARGET_ID."""
    try:
        kb = get_kb(ctx)
        created = kb.create_link(source_id, target_id, link_type, context)
        click.echo(f"🔗 Created link {created.id} ({source_id} -{link_type}-> {target_id})")

    except CLI_ERRORS as e:
        handle_cli_error(
            ctx, e, "link_add", {"source_id": source_id, "target_id": target_id}
        )


@link.command("remove")
@click.argument("link_id")
@click.pass_context
def remove(ctx, link_id):
    """Delete a link."""
    try:
        kb = get_kb(ctx)
        if kb.delete_link(link_id) is None:
            click.echo(f"❌ Link not found: {link_id}", err=True)
            sys.exit(1)
        click.echo(f"🗑️  Removed link {link_id}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "link_remove", {"link_id": link_id})


@link.command("list")
@click.argument("note_id")
@click.pass_context
def list_links(ctx, note_id):
    """Show the links leaving and entering a note."""
    try:
        kb = get_kb(ctx)
        links = kb.links_for_note(note_id)
        if not links:
            click.echo(f"⚠️  No links for {note_id}")
            return
        for item in links:
            direction = "→" if item.source_id == note_id else "←"
            other = item.target_id if item.source_id == note_id else item.source_id
            line = f"  {direction} {other}  [{item.type.value}]  {item.id}"
            if item.context:
                line += f"  ({item.context})"
            click.echo(line)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "link_list", {"note_id": note_id})


@link.command("verify")
@click.pass_context
def verify(ctx):
    """Check every link is recorded on both endpoint notes."""
    try:
        kb = get_kb(ctx)
        problems = kb.verify_links()
        if not problems:
            click.echo("✅ Link graph is consistent")
            return
        click.echo(f"⚠️  {len(problems)} link problem(s):")
        for problem in problems:
            click.echo(f"  • {problem}")
        sys.exit(1)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "link_verify")
