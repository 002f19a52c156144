import pytest

from schema_table_picker.config import ConfidenceMode, DetailKey, PickerConfig
from schema_table_picker.exceptions import ConfigError


def test_defaults():
    config = PickerConfig()
    assert config.confidence_mode is ConfidenceMode.FIRST_SCANNED
    assert config.detail_key is DetailKey.NAME
    assert config.synonyms_csv is None
    assert config.extra_stopwords == []


def test_from_yaml(tmp_path):
    path = tmp_path / "picker.yaml"
    path.write_text(
        "confidence_mode: top_ranked\n"
        "detail_key: index\n"
        "extra_stopwords: [Me, please]\n"
        "log_level: DEBUG\n",
        encoding="utf-8",
    )
    config = PickerConfig.from_yaml(str(path))

    assert config.confidence_mode is ConfidenceMode.TOP_RANKED
    assert config.detail_key is DetailKey.INDEX
    assert config.extra_stopwords == ["me", "please"]
    assert config.log_level == "DEBUG"
    assert config.to_dict()["confidence_mode"] == "top_ranked"


def test_empty_yaml_gives_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert PickerConfig.from_yaml(str(path)) == PickerConfig()


@pytest.mark.parametrize("data,fragment", [
    ({"threshold": 0.2}, "Unknown config keys"),
    ({"confidence_mode": "best"}, "best"),
    ({"detail_key": "uuid"}, "uuid"),
    ({"extra_stopwords": "me"}, "extra_stopwords"),
])
def test_invalid_values(data, fragment):
    with pytest.raises(ConfigError, match=fragment):
        PickerConfig.from_dict(data)


def test_yaml_must_be_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- top_ranked\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="must be a mapping"):
        PickerConfig.from_yaml(str(path))


def test_missing_config_file(tmp_path):
    with pytest.raises(ConfigError, match="Could not read config"):
        PickerConfig.from_yaml(str(tmp_path / "missing.yaml"))


def test_unparseable_yaml(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("confidence_mode: [oops\n", encoding="utf-8")
    with pytest.raises(ConfigError, match="Invalid YAML"):
        PickerConfig.from_yaml(str(path))
