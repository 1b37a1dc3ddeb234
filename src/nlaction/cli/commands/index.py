"""Index inspection commands."""

import typer

from nlaction.cli.context import CLIContext
from nlaction.cli.output import OutputFormatter

# Create index subcommand group
app = typer.Typer(help="Inspect the example and value indices")


@app.command("status")
def index_status(ctx: typer.Context) -> None:
    """Build the index and show example/value counts per collection.

    Examples:

        nlaction index status
        nlaction index status --json
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        engine = cli_ctx.get_engine()
        formatter.print_index_status(engine.index_status())
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)
