import json
import logging

import pytest

from schema_table_picker.logger import JsonFormatter, configure_logging, get_logger


def test_json_formatter_includes_extra_fields():
    record = logging.LogRecord(
        name="schema_table_picker.services.scoring_service",
        level=logging.INFO,
        pathname=__file__,
        lineno=1,
        msg="Analyzed query against %d tables",
        args=(2,),
        exc_info=None,
    )
    record.query_terms = ["orders", "user"]

    data = json.loads(JsonFormatter().format(record))

    assert data["level"] == "INFO"
    assert data["name"] == "schema_table_picker.services.scoring_service"
    assert data["message"] == "Analyzed query against 2 tables"
    assert data["query_terms"] == ["orders", "user"]
    assert "args" not in data


def test_configure_logging_replaces_handlers(restore_root_logger):
    root = restore_root_logger
    root.addHandler(logging.NullHandler())

    configure_logging("debug", json_format=True)

    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert isinstance(root.handlers[0].formatter, JsonFormatter)


def test_configure_logging_rejects_unknown_level(restore_root_logger):
    root = restore_root_logger
    existing = logging.NullHandler()
    root.addHandler(existing)

    with pytest.raises(ValueError, match="Unknown log level: chatty"):
        configure_logging("chatty")

    assert existing in root.handlers


def test_analysis_logs_summary(scoring_service, shop_tables, caplog):
    with caplog.at_level(logging.INFO, logger="schema_table_picker"):
        scoring_service.analyze(shop_tables, "orders")

    assert "Analyzed query against 2 tables: 1 relevant" in caplog.text
    assert get_logger("schema_table_picker").name == "schema_table_picker"
