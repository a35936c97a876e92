"""
Stats & Settings Commands
--------------------------

Commands:
    - stats: Show counters and recent activity
    - settings show: Show preferences
    - settings set: Change one preference
"""
import click
import yaml

from mnemos.core.logging_manager import handle_cli_error
from mnemos.database.models import Settings
from . import CLI_ERRORS, get_kb

SETTING_FIELDS = (
    "auto_save",
    "default_domain",
    "review_reminders",
    "daily_review_goal",
    "theme",
    "sound_effects",
    "show_backlinks",
    "auto_link_similar",
)


def _display(value) -> str:
    return value.value if hasattr(value, "value") else str(value)


@click.command()
@click.pass_context
def stats(ctx):
    """Show counters and recent activity."""
    try:
        kb = get_kb(ctx)
        current = kb.get_stats()

        click.echo("\n📊 Knowledge Base Statistics\n")
        click.echo(f"  Notes:            {current.total_notes}")
        click.echo(f"  Collected:        {current.collected_notes}")
        click.echo(f"  Links:            {current.total_links}")
        click.echo(f"  Review streak:    {current.review_streak} day(s)")
        click.echo(f"  Wisdom points:    {current.wisdom_points}")
        click.echo(f"  Quests completed: {current.completed_quests}")
        click.echo(f"  Review accuracy:  {current.average_review_accuracy:.0%}")
        click.echo(f"  Top domain:       {current.most_productive_domain.display_name}")

        if current.recent_activity:
            click.echo("\n🕑 Recent activity:")
            for entry in current.recent_activity:
                points = f" (+{entry['points']})" if "points" in entry else ""
                click.echo(f"  {entry['timestamp'][:19]}  {entry['description']}{points}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "stats")


@click.group()
@click.pass_context
def settings(ctx: click.Context) -> None:
    """Show or change preferences."""
    pass


def _echo_settings(current: Settings) -> None:
    for name in SETTING_FIELDS:
        click.echo(f"  {name:<18} {_display(getattr(current, name))}")


@settings.command("show")
@click.pass_context
def show(ctx):
    """Show preferences."""
    try:
        kb = get_kb(ctx)
        click.echo("\n⚙️  Settings\n")
        _echo_settings(kb.get_settings())

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "settings_show")


@settings.command("set")
@click.argument("key")
@click.argument("value")
@click.pass_context
def set_setting(ctx, key, value):
    """
    Change one preference.

    VALUE is read as YAML, so 'true', '12' and 'science' become a boolean,
    an integer and a string.
    """
    try:
        parsed = yaml.safe_load(value)
    except yaml.YAMLError:
        parsed = value
    try:
        kb = get_kb(ctx)
        updated = kb.update_settings({key: parsed})
        click.echo("✅ Settings updated\n")
        _echo_settings(updated)

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "settings_set", {"key": key, "value": value})
