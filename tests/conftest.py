import io
import json
import logging

import pytest
from rich.console import Console

from schema_table_picker.models import Column, Table
from schema_table_picker.services import ScoringService, TablePicker


def make_table(name, *column_names):
    """Table with text columns named as given."""
    return Table(name=name, columns=tuple(Column(name=c, type="text") for c in column_names))


@pytest.fixture
def table_factory():
    return make_table


@pytest.fixture
def shop_tables():
    """The users/orders schema used throughout the docs."""
    return [
        Table(name="users", columns=(
            Column(name="id", type="uuid"),
            Column(name="email", type="text"),
        )),
        Table(name="orders", columns=(
            Column(name="id", type="uuid"),
            Column(name="user_id", type="uuid"),
            Column(name="total", type="decimal"),
        )),
    ]


@pytest.fixture
def shop_schema_data():
    return [
        {"name": "users", "columns": [
            {"name": "id", "type": "uuid", "constraints": ["PRIMARY KEY"]},
            {"name": "email", "type": "text"},
        ]},
        {"name": "orders", "columns": [
            {"name": "id", "type": "uuid"},
            {"name": "user_id", "type": "uuid", "constraints": ["REFERENCES users(id)"]},
            {"name": "total", "type": "decimal"},
        ]},
    ]


@pytest.fixture
def shop_schema_file(tmp_path, shop_schema_data):
    path = tmp_path / "shop.json"
    path.write_text(json.dumps(shop_schema_data), encoding="utf-8")
    return path


@pytest.fixture
def scoring_service():
    return ScoringService()


@pytest.fixture
def picker():
    return TablePicker()


@pytest.fixture
def console():
    """Console that records output instead of writing to the terminal."""
    return Console(file=io.StringIO(), record=True, width=120)


@pytest.fixture
def restore_root_logger():
    """configure_logging replaces root handlers; put them back afterwards."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield root
    root.handlers[:] = handlers
    root.setLevel(level)
