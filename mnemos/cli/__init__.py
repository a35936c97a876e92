#!/usr/bin/env python3
"""
Mnemos Command-Line Interface
------------------------------

Modular command-line interface for the Mnemos knowledge base.

This module provides the main CLI group and shared context setup
for all commands.

Command Structure:
    - Setup (init)
    - Notes (note add|show|list|edit|delete|collect)
    - Links (link add|remove|list)
    - Tags (tag add|list|edit)
    - Review (review due|grade)
    - Search (search)
    - Stats & Settings (stats, settings show|set)
    - Quests (quest add|list|refresh|complete)
    - Snapshots (export, import)

Usage:
    # Get general help
    mnemos --help

    # Get help for a specific command group
    mnemos note --help

    # Get help for a specific command
    mnemos note add --help
"""
import click
from pathlib import Path

from mnemos.core.cli_utils import setup_logger
from mnemos.core.config import MnemosConfig, load_config
from mnemos.core.exceptions import DatabaseError, ValidationError
from mnemos.core.logging_manager import handle_cli_error
from mnemos.database import MnemosDB
from mnemos.knowledge_base import KnowledgeBase

# Errors reported to the user as a one-line message
CLI_ERRORS = (DatabaseError, ValidationError)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    default=None,
    help="Path to database file (overrides config)",
)
@click.option(
    "--log-dir",
    type=click.Path(),
    default=None,
    help="Path to log directory (overrides config)",
)
@click.option(
    "--config",
    "config_path",
    type=click.Path(),
    default=None,
    help="Path to YAML configuration file",
)
@click.option(
    "--verbose",
    is_flag=True,
    help="Show detailed errors and tracebacks",
)
@click.pass_context
def cli(ctx, db_path, log_dir, config_path, verbose):
    """Mnemos knowledge base CLI"""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose

    try:
        config = load_config(config_path)
    except ValidationError as e:
        handle_cli_error(ctx, e, "load_config", {"config": str(config_path)})

    if db_path:
        config.db_path = Path(db_path).expanduser()
    if log_dir:
        config.log_dir = Path(log_dir).expanduser()
    ctx.obj["config"] = config


def get_kb(ctx) -> KnowledgeBase:
    """Get or create the initialized knowledge base for this invocation."""
    if "kb" not in ctx.obj:
        config: MnemosConfig = ctx.obj["config"]
        logger = setup_logger(config.log_dir, "cli", config)
        ctx.obj["logger"] = logger
        db = MnemosDB(config.db_path, logger=logger)
        ctx.obj["db"] = db
        root = ctx.find_root()
        root.call_on_close(db.close)
        root.call_on_close(logger.close)
        ctx.obj["kb"] = KnowledgeBase(
            db, logger=logger, keep_mirror=config.keep_mirror
        ).initialize()
    return ctx.obj["kb"]


# Import and register command modules
# These imports must come after CLI group definition
from .setup import init  # noqa: E402
from .notes import note  # noqa: E402
from .links import link  # noqa: E402
from .tags import tag  # noqa: E402
from .review import review  # noqa: E402
from .search import search  # noqa: E402
from .stats import settings, stats  # noqa: E402
from .quests import quest  # noqa: E402
from .snapshot import export, import_snapshot  # noqa: E402

# Register top-level commands
cli.add_command(init)
cli.add_command(search)
cli.add_command(stats)
cli.add_command(export)
cli.add_command(import_snapshot)

# Register command groups
cli.add_command(note)
cli.add_command(link)
cli.add_command(tag)
cli.add_command(review)
cli.add_command(settings)
cli.add_command(quest)


if __name__ == "__main__":
    cli(obj={})
