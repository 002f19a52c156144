import json

import pytest

from schema_table_picker.cli import InteractiveSession, build_parser, main, resolve_config
from schema_table_picker.config import ConfidenceMode, DetailKey
from schema_table_picker.reporting import ConsolePresenter


@pytest.fixture(autouse=True)
def _isolate_logging(restore_root_logger):
    yield


def scripted_input(*lines):
    """input() replacement that replays lines, then signals end of input."""
    remaining = list(lines)

    def _input(prompt=""):
        if not remaining:
            raise EOFError
        return remaining.pop(0)

    return _input


def test_one_shot_query(shop_schema_file, console):
    code = main([str(shop_schema_file), "-q", "find all orders with user information"], console=console)
    output = console.export_text()

    assert code == 0
    assert "Schema loaded successfully (2 tables)" in output
    assert "Matching Tables (2)" in output
    assert "Confidence: 50%" in output
    assert "Match Score: 150%" in output
    assert "★ user_id" in output


def test_json_output(shop_schema_file, console):
    code = main([str(shop_schema_file), "-q", "orders for user", "--json", "--confidence-mode", "top_ranked"],
                console=console)
    data = json.loads(console.export_text())

    assert code == 0
    assert [t["name"] for t in data["relevant_tables"]] == ["orders", "users"]
    assert data["confidence"] == 0.75
    assert data["query_terms"] == ["orders", "user"]


def test_json_output_keyed_by_index(shop_schema_file, console):
    main([str(shop_schema_file), "-q", "orders", "--json", "--key-by", "index"], console=console)
    data = json.loads(console.export_text())
    assert data["match_details"]["table_matches"] == {"0": 0.0, "1": 1.0}


def test_explain_flag(shop_schema_file, console):
    main([str(shop_schema_file), "-q", "orders", "--explain"], console=console)
    output = console.export_text()
    assert "Score Breakdown" in output
    assert "Table 'orders' scored 1.0 points" in output


def test_no_matches_message(shop_schema_file, console):
    code = main([str(shop_schema_file), "-q", "weather forecast"], console=console)
    assert code == 0
    assert "No matching tables found for your query." in console.export_text()


def test_blank_query_exits_with_warning(shop_schema_file, console):
    code = main([str(shop_schema_file), "-q", "   "], console=console)
    assert code == 1
    assert "Nothing to analyze" in console.export_text()


def test_invalid_schema_reports_error(tmp_path, console):
    path = tmp_path / "schema.json"
    path.write_text('{"name": "users"}', encoding="utf-8")

    code = main([str(path), "-q", "users"], console=console)
    output = console.export_text()

    assert code == 1
    assert "[INVALID SCHEMA]" in output
    assert "Schema must be an array of tables" in output
    assert "Suggestions:" in output


def test_parse_error_reports_error(tmp_path, console):
    path = tmp_path / "schema.json"
    path.write_text("[{", encoding="utf-8")

    assert main([str(path), "-q", "users"], console=console) == 1
    assert "[PARSE ERROR]" in console.export_text()


def test_bad_config_reports_error(tmp_path, shop_schema_file, console):
    config_path = tmp_path / "picker.yaml"
    config_path.write_text("confidence_mode: best\n", encoding="utf-8")

    assert main([str(shop_schema_file), "-q", "users", "--config", str(config_path)], console=console) == 1
    assert "[CONFIG ERROR]" in console.export_text()


def test_unknown_log_level_reports_config_error(shop_schema_file, console):
    assert main([str(shop_schema_file), "-q", "users", "--log-level", "chatty"], console=console) == 1
    assert "Invalid log level: chatty" in console.export_text()


def test_flags_override_config_file(tmp_path):
    config_path = tmp_path / "picker.yaml"
    config_path.write_text("confidence_mode: top_ranked\ndetail_key: index\n", encoding="utf-8")
    args = build_parser().parse_args([
        "schema.json", "--config", str(config_path), "--confidence-mode", "first_scanned",
    ])

    config = resolve_config(args)
    assert config.confidence_mode is ConfidenceMode.FIRST_SCANNED
    assert config.detail_key is DetailKey.INDEX


def test_interactive_session(shop_schema_file, console):
    code = main([str(shop_schema_file)], console=console, input_func=scripted_input(
        "", "tables", "show ORDERS", "show nothing", "explain",
        "orders with user", "explain", "weights", "help", "quit",
    ))
    output = console.export_text()

    assert code == 0
    assert "Available Tables (2)" in output
    assert "Table 'nothing' not found" in output
    assert "No query analyzed yet" in output
    assert "Matching Tables (2)" in output
    assert "Table 'orders' scored 1.5 points" in output
    assert "Relevance threshold" in output
    assert output.rstrip().endswith("Goodbye!")


def test_interactive_session_ends_on_eof(picker, shop_tables, console):
    session = InteractiveSession(picker, shop_tables, ConsolePresenter(console))
    session.run_interactive(scripted_input("orders"))

    assert session.last_result is not None
    assert session.last_result.relevant_table_names == ["orders"]
    assert "Goodbye!" in console.export_text()
