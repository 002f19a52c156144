"""
Configuration for Schema Table Picker
"""

from dataclasses import dataclass, field, fields
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from .exceptions import ConfigError


class ConfidenceMode(Enum):
    """Which table's score the confidence value is derived from"""
    FIRST_SCANNED = "first_scanned"  # First table in schema order (default)
    TOP_RANKED = "top_ranked"        # Highest-ranked relevant table


class DetailKey(Enum):
    """How match-detail mappings are keyed"""
    NAME = "name"    # Table name; later duplicates overwrite earlier ones
    INDEX = "index"  # Position in the schema; duplicates never collapse


@dataclass
class PickerConfig:
    """
    Runtime options for the table picker

    Defaults match the plain scorer. Scoring weights and the
    relevance threshold are constants on ScoringService.
    """
    confidence_mode: ConfidenceMode = ConfidenceMode.FIRST_SCANNED
    detail_key: DetailKey = DetailKey.NAME
    synonyms_csv: Optional[str] = None
    extra_stopwords: List[str] = field(default_factory=list)
    log_level: str = "WARNING"
    log_json: bool = False

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'PickerConfig':
        """
        Build a config from a plain mapping

        Raises:
            ConfigError: On unknown keys or invalid values
        """
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigError(f"Unknown config keys: {sorted(unknown)}")

        values = dict(data)
        try:
            if 'confidence_mode' in values:
                values['confidence_mode'] = ConfidenceMode(values['confidence_mode'])
            if 'detail_key' in values:
                values['detail_key'] = DetailKey(values['detail_key'])
        except ValueError as e:
            raise ConfigError(str(e)) from e

        stopwords = values.get('extra_stopwords', [])
        if not isinstance(stopwords, list) or not all(isinstance(w, str) for w in stopwords):
            raise ConfigError("extra_stopwords must be a list of strings")
        values['extra_stopwords'] = [w.lower() for w in stopwords]

        return cls(**values)

    @classmethod
    def from_yaml(cls, path: str) -> 'PickerConfig':
        """
        Load config from a YAML file

        Raises:
            ConfigError: If the file is missing, unparseable or invalid
        """
        config_path = Path(path)
        try:
            raw = yaml.safe_load(config_path.read_text(encoding='utf-8')) or {}
        except OSError as e:
            raise ConfigError(f"Could not read config {config_path}: {e}") from e
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in config {config_path}: {e}") from e

        if not isinstance(raw, dict):
            raise ConfigError(f"Config {config_path} must be a mapping")

        return cls.from_dict(raw)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary"""
        return {
            'confidence_mode': self.confidence_mode.value,
            'detail_key': self.detail_key.value,
            'synonyms_csv': self.synonyms_csv,
            'extra_stopwords': list(self.extra_stopwords),
            'log_level': self.log_level,
            'log_json': self.log_json
        }
