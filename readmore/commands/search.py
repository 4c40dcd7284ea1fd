"""
Batch search command for readmore.

`readmore search` lists the ids of every published item that carries the
read-more marker within a publish-date window.
"""

from typing import Optional

import typer

from readmore.commands._helpers import open_index
from readmore.config.constants import DEFAULT_WINDOW_DAYS
from readmore.config.settings import get_marker
from readmore.search.batch import BatchOutcome, BatchReport, BatchSearcher
from readmore.utils.error_handling import handle_cli_error
from readmore.utils.output import console, print_json

app = typer.Typer(help="Search items carrying the read-more marker")


def _print_report(report: BatchReport) -> None:
    """Print one batch report as a console line."""
    if report.kind is BatchOutcome.SEARCHING:
        if report.window.defaulted:
            scope = f"defaulting to the last {DEFAULT_WINDOW_DAYS} days ({report.window})"
        else:
            scope = f"between {report.window.after} && {report.window.before}"
        console.print(f"Searching items containing '{report.marker}' {scope} ...", markup=False)
    elif report.kind is BatchOutcome.NO_MATCHES:
        console.print(f"[yellow]No items found containing '{report.marker}'[/yellow]")
    else:
        ids = ",".join(str(item_id) for item_id in report.ids)
        console.print(f"[green]Success:[/green] Matching item IDs: {ids}")


@app.command()
@handle_cli_error("searching items")
def search(
    ctx: typer.Context,
    date_before: Optional[str] = typer.Option(
        None, "--date-before", help="Latest publish date to include (YYYY-MM-DD)"
    ),
    date_after: Optional[str] = typer.Option(
        None, "--date-after", help="Earliest publish date to include (YYYY-MM-DD)"
    ),
    json_output: bool = typer.Option(False, "--json", help="Output the result as JSON"),
) -> None:
    """Find published items containing the read-more marker.

    Both dates must be given for the window to apply; otherwise the last
    30 days are searched.

    Examples:
        readmore search
        readmore search --date-after 2024-01-01 --date-before 2024-01-31
        readmore search --json
    """
    index = open_index(ctx)
    searcher = BatchSearcher(
        index,
        marker=get_marker(),
        on_report=None if json_output else _print_report,
    )
    report = searcher.run(raw_after=date_after, raw_before=date_before)

    if json_output:
        print_json(report.to_dict())
