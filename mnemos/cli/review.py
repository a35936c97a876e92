"""
Review Commands
----------------

Spaced-repetition review from the terminal.

Commands:
    - due: List notes due for review
    - grade: Record a review of a note
"""
import sys

import click

from mnemos.core.logging_manager import handle_cli_error
from mnemos.core.validators import DataValidator
from mnemos.database.models import ReviewQuality
from . import CLI_ERRORS, get_kb


@click.group()
@click.pass_context
def review(ctx: click.Context) -> None:
    """Review notes on a spaced-repetition schedule."""
    pass


@review.command("due")
@click.option("--as-of", default=None, help="ISO timestamp (default: now)")
@click.pass_context
def due(ctx, as_of):
    """List notes due for review."""
    try:
        kb = get_kb(ctx)
        when = DataValidator.normalize_datetime(as_of) if as_of else None
        notes = kb.due_for_review(when)
        if not notes:
            click.echo("🎉 Nothing due for review")
            return
        click.echo(f"\n🧠 Due for review ({len(notes)}):\n")
        for item in notes:
            click.echo(
                f"  {item.id}  {item.title}  "
                f"[{item.review_status.value}, due {item.next_review.date().isoformat()}]"
            )

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "review_due", {"as_of": as_of})


@review.command("grade")
@click.argument("note_id")
@click.argument("quality", type=click.Choice(ReviewQuality.choices()))
@click.pass_context
def grade(ctx, note_id, quality):
    """Record a review of NOTE_ID graded QUALITY."""
    try:
        kb = get_kb(ctx)
        reviewed = kb.review_note(note_id, quality)
        if reviewed is None:
            click.echo(f"❌ Note not found: {note_id}", err=True)
            sys.exit(1)
        click.echo(
            f"✅ {reviewed.title}: {reviewed.review_status.value}, "
            f"next review in {reviewed.interval} day(s) "
            f"(ease {reviewed.ease_factor:.2f})"
        )

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "review_grade", {"note_id": note_id, "quality": quality})
