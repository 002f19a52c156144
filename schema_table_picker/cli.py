"""
Schema Table Picker command line

Load a schema file and find the tables a natural language query needs,
either once (--query) or interactively.
"""

import argparse
import sys
from typing import Callable, List, Optional, Sequence

from rich.console import Console

from .config import ConfidenceMode, DetailKey, PickerConfig
from .exceptions import ConfigError, TablePickerError
from .logger import configure_logging, get_logger
from .models.analysis_result import AnalysisResult
from .models.schema import Table
from .reporting import ConsolePresenter
from .services.table_picker import TablePicker

logger = get_logger(__name__)


class InteractiveSession:
    """Interactive query interface over one loaded schema"""

    def __init__(self, picker: TablePicker, tables: Sequence[Table],
                 presenter: ConsolePresenter, explain: bool = False):
        self.picker = picker
        self.tables = tables
        self.presenter = presenter
        self.explain = explain
        self.last_result: Optional[AnalysisResult] = None

    def show_available_tables(self):
        """Show all available tables"""
        self.presenter.print_schema_summary(self.tables)

    def show_table_details(self, table_name: str):
        """Show columns of every table with this name"""
        matches = [t for t in self.tables if t.name.lower() == table_name.lower()]
        if not matches:
            self.presenter.print_warning(f"Table '{table_name}' not found")
            return

        for table in matches:
            self.presenter.print_table_details(table)

    def run_query(self, query: str) -> Optional[AnalysisResult]:
        """Analyze a single query and render the result"""
        result = self.picker.pick(self.tables, query)
        if result is None:
            self.presenter.print_warning("Enter a query and load a non-empty schema first")
            return None

        self.presenter.print_analysis(result)
        if self.explain:
            self.presenter.print_explanations(result)

        self.last_result = result
        return result

    def show_weights(self):
        """Show scoring weights and threshold"""
        service = self.picker.scoring_service
        self.presenter.print_header("Scoring Weights")
        console = self.presenter.console
        console.print(f"  Table name word match : {service.SCORE_TABLE_NAME_MATCH} pts")
        console.print(f"  Column name match     : {service.SCORE_COLUMN_NAME_MATCH} pts")
        console.print(f"  Semantic bonus        : {service.SCORE_SEMANTIC_BONUS} pts")
        console.print(f"  Relevance threshold   : > {service.RELEVANCE_THRESHOLD}")
        console.print(f"  Confidence mode       : {service.confidence_mode.value}")

    def show_help(self):
        """Show help"""
        self.presenter.print_header("Help")
        console = self.presenter.console
        console.print("  tables          - List all tables in the schema")
        console.print("  show <table>    - Show the columns of a table")
        console.print("  explain         - Show the score breakdown of the last query")
        console.print("  weights         - Show scoring weights and threshold")
        console.print("  help            - Show this help")
        console.print("  quit            - Exit")
        console.print("\n  Anything else is analyzed as a query, e.g.")
        console.print("    Find all orders with customer information")

    def run_interactive(self, input_func: Callable[[str], str] = input):
        """Run interactive mode until quit or end of input"""
        self.presenter.print_header("Interactive Table Picker")
        self.show_help()

        while True:
            try:
                user_input = input_func("\nEnter query or command: ").strip()
            except (KeyboardInterrupt, EOFError):
                self.presenter.console.print("\nGoodbye!")
                break

            if not user_input:
                continue

            command = user_input.lower()
            if command in ['quit', 'exit', 'q']:
                self.presenter.console.print("Goodbye!")
                break
            elif command == 'tables':
                self.show_available_tables()
            elif command.startswith('show '):
                self.show_table_details(user_input[5:].strip())
            elif command == 'explain':
                if self.last_result is None:
                    self.presenter.print_warning("No query analyzed yet")
                else:
                    self.presenter.print_explanations(self.last_result)
            elif command == 'weights':
                self.show_weights()
            elif command == 'help':
                self.show_help()
            else:
                try:
                    self.run_query(user_input)
                except TablePickerError as e:
                    self.presenter.print_error(e)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schema-table-picker",
        description="Find the database tables a natural language query needs."
    )
    parser.add_argument("schema", help="Schema file (.json, .yaml or .yml)")
    parser.add_argument("-q", "--query", help="Analyze one query and exit (default: interactive)")
    parser.add_argument("--json", action="store_true", help="Print the result as JSON")
    parser.add_argument("--explain", action="store_true", help="Show per-table score breakdown")
    parser.add_argument("--synonyms", help="CSV of extra semantic concepts (concept,related_terms)")
    parser.add_argument("--confidence-mode", choices=[m.value for m in ConfidenceMode],
                        help="Score the confidence is derived from")
    parser.add_argument("--key-by", choices=[k.value for k in DetailKey],
                        help="Key match details by table name or schema index")
    parser.add_argument("--config", help="YAML config file")
    parser.add_argument("--log-level", help="Logging level (default: WARNING)")
    parser.add_argument("--log-json", action="store_true", help="Emit logs as JSON lines")
    return parser


def resolve_config(args: argparse.Namespace) -> PickerConfig:
    """Config file values overridden by command line flags"""
    config = PickerConfig.from_yaml(args.config) if args.config else PickerConfig()

    if args.synonyms:
        config.synonyms_csv = args.synonyms
    if args.confidence_mode:
        config.confidence_mode = ConfidenceMode(args.confidence_mode)
    if args.key_by:
        config.detail_key = DetailKey(args.key_by)
    if args.log_level:
        config.log_level = args.log_level
    if args.log_json:
        config.log_json = True

    return config


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None,
         input_func: Callable[[str], str] = input) -> int:
    """Main entry point"""
    args = build_parser().parse_args(argv)
    presenter = ConsolePresenter(console)

    try:
        config = resolve_config(args)
        try:
            configure_logging(config.log_level, config.log_json)
        except ValueError as e:
            raise ConfigError(f"Invalid log level: {config.log_level}") from e
        logger.debug("Resolved config: %s", config.to_dict())
        picker = TablePicker.from_config(config)
    except TablePickerError as e:
        presenter.print_error(e)
        return 1

    load_result = picker.load_schema(args.schema)
    if not load_result.ok:
        presenter.print_error(load_result.error)
        return 1

    tables = load_result.tables

    if args.query is None:
        presenter.print_schema_loaded(tables)
        session = InteractiveSession(picker, tables, presenter, explain=args.explain)
        session.run_interactive(input_func)
        return 0

    result = picker.pick(tables, args.query)
    if result is None:
        presenter.print_warning("Nothing to analyze: the query is blank or the schema has no tables")
        return 1

    if args.json:
        presenter.print_json(result.to_dict())
    else:
        presenter.print_schema_loaded(tables)
        presenter.print_analysis(result)
        if args.explain:
            presenter.print_explanations(result)

    return 0


if __name__ == "__main__":
    sys.exit(main())
