"""nlaction CLI - Main entry point."""

import logging
from typing import Annotated

import typer

import nlaction
from nlaction.cli.context import CLIContext, get_dataset_source, get_provider_name

# Create main Typer app
app = typer.Typer(
    name="nlaction",
    help="nlaction CLI - Natural-language CRUD actions over JSON datasets",
    no_args_is_help=True,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    dataset: Annotated[
        str | None,
        typer.Option(
            "--dataset",
            "-d",
            envvar="NLACTION_DATASET",
            help="Dataset JSON file or database URL",
        ),
    ] = None,
    provider: Annotated[
        str | None,
        typer.Option(
            "--provider",
            "-p",
            envvar="NLACTION_PROVIDER",
            help="Embedding provider (fastembed, openai)",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            "-j",
            help="Output as JSON (machine-readable)",
        ),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Log index builds and scoring to stderr",
        ),
    ] = False,
) -> None:
    """Initialize CLI context with global options."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    ctx.obj = CLIContext(
        dataset_source=get_dataset_source(dataset),
        provider_name=get_provider_name(provider),
        json_output=json_output,
    )


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"nlaction v{nlaction.__version__}")


# Register commands
from nlaction.cli.commands import actions, index  # noqa: E402

app.add_typer(index.app, name="index")
app.command(name="propose")(actions.propose_command)
app.command(name="execute")(actions.execute_command)
app.command(name="collections")(actions.collections_command)


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
