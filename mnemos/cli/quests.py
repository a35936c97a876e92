"""
Quest Commands
---------------

Commands:
    - add: Create a quest, from a template or from scratch
    - list: List quests
    - refresh: Recompute a quest's progress from its collected notes
    - complete: Complete a quest and collect its reward
"""
import sys

import click

from mnemos.core.logging_manager import handle_cli_error
from mnemos.database.models import KnowledgeDomain, QuestDifficulty
from mnemos.knowledge_base import QUEST_TEMPLATES
from . import CLI_ERRORS, get_kb


@click.group()
@click.pass_context
def quest(ctx: click.Context) -> None:
    """Knowledge quests and their rewards."""
    pass


@quest.command("add")
@click.option("--template", type=click.Choice(sorted(QUEST_TEMPLATES)), default=None)
@click.option("--title", default=None, help="Title (required without --template)")
@click.option("--description", default="")
@click.option("--objective", default="")
@click.option(
    "--domain",
    type=click.Choice(KnowledgeDomain.choices()),
    default=KnowledgeDomain.PERSONAL.value,
    show_default=True,
)
@click.option(
    "--difficulty",
    type=click.Choice(QuestDifficulty.choices()),
    default=QuestDifficulty.EASY.value,
    show_default=True,
)
@click.option("--points", type=click.IntRange(min=0), default=0, help="Wisdom point reward")
@click.option("--note", "-n", "notes", multiple=True, help="Required note id (repeatable)")
@click.pass_context
def add(ctx, template, title, description, objective, domain, difficulty, points, notes):
    """Create a quest."""
    if template is None and not title:
        raise click.UsageError("Provide --title or --template")
    try:
        kb = get_kb(ctx)
        if template:
            created = kb.create_quest_from_template(template, domain, notes)
        else:
            created = kb.create_quest(
                {
                    "title": title,
                    "description": description,
                    "objective": objective,
                    "domain": domain,
                    "difficulty": difficulty,
                    "required_notes": list(notes),
                    "reward": {"wisdomPoints": points},
                }
            )
        click.echo(f"🗺️  Created quest {created.id}: {created.title}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "quest_add", {"template": template, "title": title})


@quest.command("list")
@click.option("--open", "only_open", is_flag=True, help="Hide completed quests")
@click.pass_context
def list_quests(ctx, only_open):
    """List quests."""
    try:
        kb = get_kb(ctx)
        quests = kb.list_quests(include_completed=not only_open)
        if not quests:
            click.echo("⚠️  No quests")
            return
        for item in quests:
            marker = "✅" if item.is_completed else "⬜"
            click.echo(
                f"{marker} {item.id}  {item.title}  "
                f"[{item.difficulty.value}, {item.progress}%]"
            )

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "quest_list")


@quest.command("refresh")
@click.argument("quest_id")
@click.pass_context
def refresh(ctx, quest_id):
    """Recompute progress from the quest's collected notes."""
    try:
        kb = get_kb(ctx)
        updated = kb.refresh_quest_progress(quest_id)
        if updated is None:
            click.echo(f"❌ Quest not found: {quest_id}", err=True)
            sys.exit(1)
        click.echo(f"📈 {updated.title}: {updated.progress}%")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "quest_refresh", {"quest_id": quest_id})


@quest.command("complete")
@click.argument("quest_id")
@click.pass_context
def complete(ctx, quest_id):
    """Complete a quest and collect its reward."""
    try:
        kb = get_kb(ctx)
        completed = kb.complete_quest(quest_id)
        if completed is None:
            click.echo(f"❌ Quest not found: {quest_id}", err=True)
            sys.exit(1)
        points = (completed.reward or {}).get("wisdomPoints", 0)
        click.echo(f"🏆 Completed {completed.title} (+{points} wisdom)")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "quest_complete", {"quest_id": quest_id})
