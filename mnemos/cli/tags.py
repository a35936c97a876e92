"""
Tag Commands
-------------

Commands:
    - add: Create a tag
    - list: List tags
    - edit: Update a tag
"""
import sys

import click

from mnemos.core.logging_manager import handle_cli_error
from . import CLI_ERRORS, get_kb


@click.group()
@click.pass_context
def tag(ctx: click.Context) -> None:
    """Manage tags."""
    pass


@tag.command("add")
@click.argument("name")
@click.option("--color", default="#888888", show_default=True)
@click.option("--description", default="")
@click.pass_context
def add(ctx, name, color, description):
    """Create a tag."""
    try:
        kb = get_kb(ctx)
        created = kb.create_tag(name, color, description)
        click.echo(f"🏷️  Created tag {created.name} ({created.id})")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "tag_add", {"name": name})


@tag.command("list")
@click.pass_context
def list_tags(ctx):
    """List tags."""
    try:
        kb = get_kb(ctx)
        tags = kb.list_tags()
        if not tags:
            click.echo("⚠️  No tags defined")
            return
        for item in tags:
            line = f"  {item.id}  {item.name}  {item.color}"
            if item.description:
                line += f"  - {item.description}"
            click.echo(line)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "tag_list")


@tag.command("edit")
@click.argument("tag_id")
@click.option("--name", default=None)
@click.option("--color", default=None)
@click.option("--description", default=None)
@click.pass_context
def edit(ctx, tag_id, name, color, description):
    """Update a tag."""
    changes = {
        key: value
        for key, value in (("name", name), ("color", color), ("description", description))
        if value is not None
    }
    if not changes:
        click.echo("⚠️  Nothing to update")
        return
    try:
        kb = get_kb(ctx)
        if kb.update_tag(tag_id, changes) is None:
            click.echo(f"❌ Tag not found: {tag_id}", err=True)
            sys.exit(1)
        click.echo(f"✅ Updated tag {tag_id}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "tag_edit", {"tag_id": tag_id})
