"""
Search Command
---------------

Commands:
    - search: Find notes containing every query term
"""
import click

from mnemos.core.logging_manager import handle_cli_error
from mnemos.database.models import KnowledgeDomain, NoteType
from . import CLI_ERRORS, get_kb


@click.command()
@click.argument("terms", nargs=-1)
@click.option("--domain", type=click.Choice(KnowledgeDomain.choices()), default=None)
@click.option("--type", "note_type", type=click.Choice(NoteType.choices()), default=None)
@click.option("--context", "with_context", is_flag=True, help="Show a snippet per match")
@click.pass_context
def search(ctx, terms, domain, note_type, with_context):
    """Find notes whose title, content and tags contain every term."""
    query = " ".join(terms)
    try:
        kb = get_kb(ctx)
        if with_context:
            results = kb.search_with_context(query, domain, note_type)
            for result in results:
                click.echo(f"  {result.note.id}  {result.note.title}")
                if result.snippet:
                    click.echo(f"      {result.snippet}")
            count = len(results)
        else:
            notes = kb.search(query, domain, note_type)
            for item in notes:
                click.echo(f"  {item.id}  {item.title}")
            count = len(notes)

        click.echo(f"\n🔍 {count} match(es) for {query!r}")

    except CLI_ERRORS as e:
        handle_cli_error(ctx, e, "search", {"query": query})
