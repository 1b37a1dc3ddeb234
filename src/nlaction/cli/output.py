"""Output formatting for CLI commands."""

import json
from typing import Any

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from nlaction.core.types import ActionCandidate, IndexStatus
from nlaction.exceptions import NLActionError

console = Console()


class OutputFormatter:
    """Formats output for terminal or JSON mode."""

    def __init__(self, json_mode: bool = False) -> None:
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode

    def print_table(
        self,
        title: str,
        data: list[dict[str, Any]],
        columns: list[str],
    ) -> None:
        """Print data as Rich table or JSON array.

        Args:
            title: Table title
            data: List of row dictionaries
            columns: Column names to display
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            table = Table(title=title, show_header=True, header_style="bold magenta")
            for col in columns:
                table.add_column(col)
            for row in data:
                table.add_row(*[str(row.get(col, "")) for col in columns])
            console.print(table)

    def print_candidates(self, query: str, candidates: list[ActionCandidate]) -> None:
        """Print ranked candidates with their index for ``execute --index``."""
        if self.json_mode:
            output = {
                "query": query,
                "count": len(candidates),
                "candidates": [c.model_dump() for c in candidates],
            }
            print(json.dumps(output, default=str, indent=2))
            return

        if not candidates:
            console.print(f"[yellow]No actions found for:[/yellow] {query}")
            return

        table = Table(title=f"Actions: {query}", show_header=True, header_style="bold magenta")
        table.add_column("#", style="dim", justify="right")
        table.add_column("Score", style="green")
        table.add_column("Type", style="cyan")
        table.add_column("Collection")
        table.add_column("Action", max_width=70)
        for i, candidate in enumerate(candidates):
            table.add_row(
                str(i),
                f"{candidate.score:.3f}",
                str(candidate.type),
                candidate.collection,
                candidate.describe(),
            )
        console.print(table)

    def print_result(self, candidate: ActionCandidate, result: Any) -> None:
        """Print the outcome of an executed action."""
        if self.json_mode:
            print(
                json.dumps(
                    {"action": candidate.model_dump(), "result": result}, default=str, indent=2
                )
            )
            return

        console.print(f"✓ {candidate.describe()}", style="green")
        if isinstance(result, list):
            columns: dict[str, None] = {}
            for record in result:
                for key in record:
                    columns.setdefault(key, None)
            self.print_table(f"{len(result)} record(s)", result, list(columns))
        else:
            self.print_data(result)

    def print_index_status(self, status: IndexStatus) -> None:
        """Print index counts per collection."""
        if self.json_mode:
            print(json.dumps(status.to_dict(), indent=2))
            return

        console.print(f"[bold]Index generation:[/bold] {status.generation}")
        if status.stale:
            console.print("[yellow]Index is stale: run a retrain after mutations[/yellow]")
        table = Table(show_header=True, header_style="bold cyan")
        table.add_column("Collection")
        table.add_column("Records", justify="right")
        table.add_column("Examples", justify="right")
        table.add_column("Values", justify="right")
        for c in status.collections:
            table.add_row(c.collection, str(c.records), str(c.examples), str(c.values))
        console.print(table)

    def print_success(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Print success message.

        Args:
            message: Success message
            details: Optional details to display
        """
        if self.json_mode:
            output = {"success": True, "message": message}
            if details:
                output.update(details)
            print(json.dumps(output, default=str, indent=2))
        else:
            console.print(f"✓ {message}", style="green")
            if details:
                for key, value in details.items():
                    console.print(f"  {key}: {value}", style="dim")

    def print_error(self, error: Exception) -> None:
        """Print error message.

        Args:
            error: Exception to display
        """
        if self.json_mode:
            if isinstance(error, NLActionError):
                print(json.dumps(error.to_dict(), default=str, indent=2))
            else:
                print(json.dumps({"error": str(error)}, indent=2))
        else:
            error_text = str(error)
            # For NLActionError, include context if available
            if isinstance(error, NLActionError) and error.context:
                context_str = "\n".join(f"{k}: {v}" for k, v in error.context.items())
                error_text = f"{error_text}\n\n{context_str}"

            panel = Panel(
                error_text,
                title="[red]Error[/red]",
                border_style="red",
            )
            console.print(panel)

    def print_data(self, data: Any) -> None:
        """Print generic data (dict, list, etc.).

        Args:
            data: Data to print
        """
        if self.json_mode:
            print(json.dumps(data, default=str, indent=2))
        else:
            console.print_json(json.dumps(data, default=str))
