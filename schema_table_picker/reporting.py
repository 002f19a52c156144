import json
from typing import Any, Iterable, List, Optional, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table as RichTable

from .error_formatter import format_error_with_suggestions
from .models.analysis_result import AnalysisResult, ConfidenceLevel
from .models.schema import Table
from .models.table_score import TableScore

CONFIDENCE_STYLES = {
    ConfidenceLevel.HIGH: "green",
    ConfidenceLevel.MEDIUM: "yellow",
    ConfidenceLevel.LOW: "red",
}


class ConsolePresenter:
    """
    Handles all console presentation for the table picker CLI.
    """
    def __init__(self, console: Optional[Console] = None):
        self.console = console or Console()

    # -------------------------------------------------------------------------
    # Generic Helpers
    # -------------------------------------------------------------------------
    def print_error(self, error: Exception, show_traceback: bool = False) -> None:
        self.console.print(format_error_with_suggestions(error, show_traceback))

    def print_warning(self, message: str) -> None:
        self.console.print(f"[yellow]Warning: {escape(message)}[/yellow]")

    def print_success(self, message: str) -> None:
        self.console.print(f"[green]✓ {escape(message)}[/green]")

    def print_header(self, message: str) -> None:
        self.console.print(f"\n[bold magenta]--- {escape(message)} ---[/bold magenta]")

    def print_json(self, data: Any) -> None:
        self.console.print_json(json.dumps(data, default=str))

    # -------------------------------------------------------------------------
    # Schema
    # -------------------------------------------------------------------------
    def print_schema_loaded(self, tables: Sequence[Table]) -> None:
        self.print_success(f"Schema loaded successfully ({len(tables)} tables)")

    def print_schema_summary(self, tables: Sequence[Table]) -> None:
        summary = RichTable(title=f"Available Tables ({len(tables)})", header_style="bold magenta")
        summary.add_column("#", justify="right", style="dim")
        summary.add_column("Table")
        summary.add_column("Columns", justify="right")

        for i, table in enumerate(tables, 1):
            summary.add_row(str(i), escape(table.name), str(len(table.columns)))

        self.console.print(summary)

    def build_column_table(self, table: Table, matched_columns: Iterable[str] = ()) -> RichTable:
        """Columns of one table; matched columns are highlighted"""
        matched = set(matched_columns)
        column_table = RichTable(show_header=True, header_style="bold", expand=True)
        column_table.add_column("Column")
        column_table.add_column("Type", style="magenta")
        column_table.add_column("Constraints", style="dim")

        for column in table.columns:
            name = escape(column.name)
            if column.name in matched:
                name = f"[bold magenta]★ {name}[/bold magenta]"
            column_table.add_row(name, escape(column.type), escape(", ".join(column.constraints)))

        return column_table

    def print_table_details(self, table: Table, matched_columns: Iterable[str] = ()) -> None:
        self.console.print(Panel(
            self.build_column_table(table, matched_columns),
            title=f"[bold]{escape(table.name)}[/bold]",
            border_style="blue"
        ))

    # -------------------------------------------------------------------------
    # Analysis
    # -------------------------------------------------------------------------
    def print_analysis(self, result: AnalysisResult) -> None:
        """Renders query, confidence, matching tables and match details."""
        self.print_header("Analysis Results")
        self.console.print(f"[bold blue]Query:[/bold blue] {escape(result.query)}")
        self.console.print(f"[dim]Terms: {escape(', '.join(result.query_terms) or '(none)')}[/dim]")

        if not result.has_matches:
            self.console.print(Panel(
                "No matching tables found for your query.\n"
                "[dim]Try using more specific terms related to your tables or check if the "
                "required tables are included in your schema.[/dim]",
                border_style="blue"
            ))
            return

        style = CONFIDENCE_STYLES[result.confidence_level]
        self.console.print(
            f"[bold]Matching Tables ({len(result.relevant_tables)})[/bold]  "
            f"[{style}]Confidence: {round(result.confidence * 100)}%[/{style}]"
        )

        for score_obj in result.ranked_scores:
            self.console.print(Panel(
                self.build_column_table(score_obj.table, score_obj.column_matches),
                title=(
                    f"[bold]→ {escape(score_obj.table_name)}[/bold] "
                    f"[dim](Match Score: {round(score_obj.total * 100)}%)[/dim]"
                ),
                title_align="left",
                border_style="magenta"
            ))

        self.print_match_details(result.table_scores)

    def print_match_details(self, scores: List[TableScore]) -> None:
        details = RichTable(title="Match Details", header_style="bold magenta")
        details.add_column("#", justify="right", style="dim")
        details.add_column("Table")
        details.add_column("Score", justify="right")
        details.add_column("Matched Columns")

        for score_obj in scores:
            details.add_row(
                str(score_obj.index),
                escape(score_obj.table_name),
                f"{score_obj.total:.2f}",
                escape(", ".join(score_obj.column_matches))
            )

        self.console.print(details)

    def print_explanations(self, result: AnalysisResult) -> None:
        self.print_header("Score Breakdown")
        for score_obj in result.table_scores:
            self.console.print(escape(score_obj.explain_score()))
