"""
Interactive picker command for readmore.
"""

from html import escape as html_escape
from typing import Optional

import typer
from rich.markup import escape

from readmore.commands._helpers import open_index
from readmore.search.query import ContentItemSummary
from readmore.utils.error_handling import handle_cli_error
from readmore.utils.output import console

app = typer.Typer()


def read_more_anchor(item: ContentItemSummary) -> str:
    """HTML anchor inserted for a chosen item."""
    return (
        f'<a href="{html_escape(item.permalink)}" class="read-more">'
        f"{html_escape(item.title)}</a>"
    )


@app.command()
@handle_cli_error("picking an item")
def pick(
    ctx: typer.Context,
    page_size: Optional[int] = typer.Option(
        None, "--page-size", "-n", help="Results to show per page (1-100)"
    ),
) -> None:
    """Search published items by keyword or ID and pick one to link to."""
    from readmore.ui.picker import PickerApp

    index = open_index(ctx)
    try:
        item = PickerApp(index, page_size=page_size).run()
    except KeyboardInterrupt:
        item = None

    if item is None:
        console.print("[dim]No item selected[/dim]")
        raise typer.Exit(1)

    console.print(f"Read More: [bold]{escape(item.title)}[/bold] (#{item.id})")
    print(read_more_anchor(item))
