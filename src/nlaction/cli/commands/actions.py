"""Propose and execute natural-language actions."""

import asyncio
import json
from typing import Annotated, Any

import typer

from nlaction.cli.context import CLIContext
from nlaction.cli.output import OutputFormatter
from nlaction.core.types import ActionCandidate, ActionType


def _parse_json_object(raw: str, option: str) -> dict[str, Any]:
    try:
        value = json.loads(raw)
    except json.JSONDecodeError as e:
        raise typer.BadParameter(f"Invalid JSON in {option}: {e}") from e
    if not isinstance(value, dict):
        raise typer.BadParameter(f"{option} must be a JSON object")
    return value


def propose_command(
    ctx: typer.Context,
    query: Annotated[str, typer.Argument(help="Natural-language request")],
    top_k: Annotated[
        int, typer.Option("--top-k", "-k", help="Intent matches expanded into candidates")
    ] = 6,
    limit: Annotated[int | None, typer.Option("--limit", "-n", help="Candidates to show")] = None,
) -> None:
    """Propose ranked CRUD actions for a query.

    Examples:

        nlaction propose "show accounts for Swapnil"
        nlaction propose "delete goals with name Car" --limit 3 --json
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        engine = cli_ctx.get_engine()
        candidates = asyncio.run(engine.propose_actions(query, top_k=top_k))
        formatter.print_candidates(query, candidates[:limit] if limit else candidates)
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


def execute_command(
    ctx: typer.Context,
    query: Annotated[
        str | None, typer.Argument(help="Natural-language request (omit with --action)")
    ] = None,
    index: Annotated[
        int, typer.Option("--index", "-i", help="Which proposed candidate to run (0 = best)")
    ] = 0,
    action: Annotated[
        str | None,
        typer.Option("--action", "-a", help="Explicit action as JSON instead of a query"),
    ] = None,
    patch: Annotated[
        str | None,
        typer.Option("--patch", help="Field values to write as JSON (create/update)"),
    ] = None,
    top_k: Annotated[int, typer.Option("--top-k", "-k", help="Intent matches to expand")] = 6,
    yes: Annotated[bool, typer.Option("--yes", "-y", help="Skip the confirmation prompt")] = False,
    save: Annotated[
        bool, typer.Option("--save", help="Write the dataset back to its JSON file")
    ] = False,
) -> None:
    """Execute a proposed (or explicit) action against the dataset.

    Examples:

        nlaction execute "show accounts for Swapnil"
        nlaction execute "update holders where name is Swapnil" --patch '{"city": "Pune"}' --save
        nlaction execute --action '{"type": "delete", "collection": "goals", "filter": {"id": 3}}' -y
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        if action:
            candidate = ActionCandidate.model_validate(_parse_json_object(action, "--action"))
        elif query:
            engine = cli_ctx.get_engine()
            candidates = asyncio.run(engine.propose_actions(query, top_k=top_k))
            if not candidates:
                raise ValueError(f"No actions found for: {query}")
            if not 0 <= index < len(candidates):
                raise ValueError(
                    f"Candidate index {index} out of range (0-{len(candidates) - 1})"
                )
            candidate = candidates[index]
        else:
            raise typer.BadParameter("Either provide a query or use --action")

        if patch:
            merged = {**(candidate.patch or {}), **_parse_json_object(patch, "--patch")}
            candidate = candidate.model_copy(update={"patch": merged})

        if candidate.type != ActionType.READ and not yes:
            typer.confirm(f"Execute: {candidate.describe()}?", abort=True)

        result = cli_ctx.execute(candidate)
        formatter.print_result(candidate, result)

        if save and candidate.type != ActionType.READ:
            path = cli_ctx.save()
            if not cli_ctx.json_output:
                formatter.print_success(f"Saved dataset to {path}")

    except (typer.Exit, typer.Abort):
        raise
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


def collections_command(ctx: typer.Context) -> None:
    """List collections and their record counts.

    Examples:

        nlaction collections
        nlaction -d sqlite:///app.db collections --json
    """
    cli_ctx: CLIContext = ctx.obj
    formatter = OutputFormatter(cli_ctx.json_output)

    try:
        dataset = cli_ctx.get_dataset()
        rows = [{"collection": name, "records": len(records)} for name, records in dataset.items()]
        formatter.print_table("Collections", rows, ["collection", "records"])
    except Exception as e:
        formatter.print_error(e)
        raise typer.Exit(code=1)


__all__ = ["collections_command", "execute_command", "propose_command"]
