"""
Note Commands
--------------

Create, browse and edit notes.

Commands:
    - add: Create a note
    - show: Display a note with its review data and links
    - list: List notes, optionally filtered
    - edit: Update fields of a note
    - delete: Delete a note and its links
    - collect: Mark a note collected
"""
import sys
from typing import Any, Dict

import click

from mnemos.core.logging_manager import handle_cli_error
from mnemos.database.models import KnowledgeDomain, Note, NoteType
from mnemos.database.stats_aggregator import COLLECT_POINTS
from . import CLI_ERRORS, get_kb


def format_note_line(note: Note) -> str:
    """One-line summary used by list-style commands."""
    marker = "★" if note.is_collected else " "
    return f"{marker} {note.id}  [{note.domain.value}/{note.type.value}]  {note.title}"


def _note_changes(title, content, note_type, domain, tags, importance) -> Dict[str, Any]:
    changes: Dict[str, Any] = {}
    if title is not None:
        changes["title"] = title
    if content is not None:
        changes["content"] = content
    if note_type is not None:
        changes["type"] = note_type
    if domain is not None:
        changes["domain"] = domain
    if tags:
        changes["tags"] = list(tags)
    if importance is not None:
        changes["importance"] = importance
    return changes


@click.group()
@click.pass_context
def note(ctx: click.Context) -> None:
    """Create, browse and edit notes."""
    pass


@note.command("add")
@click.argument("title")
@click.option("--content", "-c", default=None, help="Note body")
@click.option("--type", "note_type", type=click.Choice(NoteType.choices()), default=None)
@click.option("--domain", type=click.Choice(KnowledgeDomain.choices()), default=None)
@click.option("--tag", "-t", "tags", multiple=True, help="Tag (repeatable)")
@click.option("--importance", type=click.IntRange(1, 5), default=None)
@click.pass_context
def add(ctx, title, content, note_type, domain, tags, importance):
    """Create a note."""
    try:
        kb = get_kb(ctx)
        created = kb.create_note(
            _note_changes(title, content, note_type, domain, tags, importance)
        )
        click.echo(f"✅ Created note {created.id}")
        click.echo(f"   {created.title} ({created.domain.value}, {created.word_count} words)")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_add", {"title": title})


@note.command("show")
@click.argument("note_id")
@click.pass_context
def show(ctx, note_id):
    """Display a note with its review data and links."""
    try:
        kb = get_kb(ctx)
        found = kb.get_note(note_id)
        if found is None:
            click.echo(f"❌ Note not found: {note_id}", err=True)
            sys.exit(1)

        click.echo(f"\n📝 {found.title}")
        click.echo(f"   id: {found.id}")
        click.echo(f"   {found.type.value} · {found.domain.value} · importance {found.importance}")
        click.echo(f"   {found.word_count} words, {found.reading_time} min read")
        if found.tags:
            click.echo(f"   🏷️  {', '.join(found.tags)}")
        if found.content:
            click.echo(f"\n{found.content}\n")

        click.echo(
            f"🧠 {found.review_status.value}: ease {found.ease_factor:.2f}, "
            f"interval {found.interval}d, next {found.next_review.isoformat()}"
        )
        if found.links:
            click.echo(f"🔗 Links to: {', '.join(found.links)}")
        if found.backlinks:
            click.echo(f"↩️  Linked from: {', '.join(found.backlinks)}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_show", {"note_id": note_id})


@note.command("list")
@click.option("--domain", type=click.Choice(KnowledgeDomain.choices()), default=None)
@click.option("--type", "note_type", type=click.Choice(NoteType.choices()), default=None)
@click.option("--tag", default=None)
@click.pass_context
def list_notes(ctx, domain, note_type, tag):
    """List notes, optionally filtered by domain, type or tag."""
    try:
        kb = get_kb(ctx)
        notes = kb.list_notes(domain=domain, note_type=note_type, tag=tag)
        if not notes:
            click.echo("⚠️  No notes found")
            return
        for item in notes:
            click.echo(format_note_line(item))
        click.echo(f"\nTotal: {len(notes)} notes")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_list")


@note.command("edit")
@click.argument("note_id")
@click.option("--title", default=None)
@click.option("--content", "-c", default=None)
@click.option("--type", "note_type", type=click.Choice(NoteType.choices()), default=None)
@click.option("--domain", type=click.Choice(KnowledgeDomain.choices()), default=None)
@click.option("--tag", "-t", "tags", multiple=True, help="Replace tags (repeatable)")
@click.option("--importance", type=click.IntRange(1, 5), default=None)
@click.pass_context
def edit(ctx, note_id, title, content, note_type, domain, tags, importance):
    """Update fields of a note."""
    changes = _note_changes(title, content, note_type, domain, tags, importance)
    if not changes:
        click.echo("⚠️  Nothing to update")
        return
    try:
        kb = get_kb(ctx)
        updated = kb.update_note(note_id, changes)
        if updated is None:
            click.echo(f"❌ Note not found: {note_id}", err=True)
            sys.exit(1)
        click.echo(f"✅ Updated note {note_id}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_edit", {"note_id": note_id})


@note.command("delete")
@click.argument("note_id")
@click.confirmation_option(prompt="⚠️  Delete this note and all of its links?")
@click.pass_context
def delete(ctx, note_id):
    """Delete a note and every link touching it."""
    try:
        kb = get_kb(ctx)
        if not kb.delete_note(note_id):
            click.echo(f"❌ Note not found: {note_id}", err=True)
            sys.exit(1)
        click.echo(f"🗑️  Deleted note {note_id}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_delete", {"note_id": note_id})


@note.command("collect")
@click.argument("note_id")
@click.pass_context
def collect(ctx, note_id):
    """Mark a note collected."""
    try:
        kb = get_kb(ctx)
        existing = kb.get_note(note_id)
        if existing is None:
            click.echo(f"❌ Note not found: {note_id}", err=True)
            sys.exit(1)
        if existing.is_collected:
            click.echo(f"⚠️  Already collected: {existing.title}")
            return
        collected = kb.collect_note(note_id)
        click.echo(f"✨ Collected: {collected.title} (+{COLLECT_POINTS} wisdom)")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "note_collect", {"note_id": note_id})
