"""Configuration for urlsieve runs.

Runs are configured from command-line options. An optional YAML rules
file can extend the built-in blacklists used by the classifier.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from urlsieve.core.constants import DEFAULTS
from urlsieve.core.exceptions import ConfigError, RulesFileError


# ============================================================================
# Run Configuration
# ============================================================================

@dataclass
class SieveConfig:
    """Settings for a single run."""
    format: str = DEFAULTS["format"]
    unique: bool = DEFAULTS["unique"]
    verbose: bool = DEFAULTS["verbose"]
    concurrency: int = DEFAULTS["concurrency"]
    timeout: float = DEFAULTS["timeout"]
    follow_redirects: bool = DEFAULTS["follow_redirects"]
    extra_path_fragments: list[str] = field(default_factory=list)
    extra_extensions: list[str] = field(default_factory=list)

    def validate(self) -> None:
        """Validate option values.

        Raises:
            ConfigError: If any value is out of range
        """
        if self.concurrency < 1:
            raise ConfigError(f"concurrency must be at least 1, got {self.concurrency}")
        if self.timeout <= 0:
            raise ConfigError(f"timeout must be positive, got {self.timeout}")

    def apply_rules(self, rules: dict[str, list[str]]) -> None:
        """Merge rules loaded by ``load_rules_config`` into this config."""
        self.extra_path_fragments.extend(rules.get("path_fragments", []))
        self.extra_extensions.extend(rules.get("extensions", []))


# ============================================================================
# Rules File Loader
# ============================================================================

def load_rules_config(rules_file: Path | str) -> dict[str, list[str]]:
    """Load extra blacklist entries from a YAML file.

    Expected layout::

        rules:
          path_fragments: ["/static/"]
          extensions: ["map"]

    Args:
        rules_file: Path to the rules YAML file

    Returns:
        Dictionary with ``path_fragments`` and ``extensions`` lists

    Raises:
        RulesFileError: If the file is missing, unparsable or malformed
    """
    rules_path = Path(rules_file)

    if not rules_path.exists():
        raise RulesFileError(f"Rules file not found: {rules_path}")

    try:
        with rules_path.open("r") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise RulesFileError(f"Failed to parse rules YAML: {e}") from e
    except OSError as e:
        raise RulesFileError(f"Failed to read rules file: {e}") from e

    if not data or not isinstance(data, dict):
        raise RulesFileError("Rules configuration is empty")

    if "rules" not in data or not isinstance(data["rules"], dict):
        raise RulesFileError("Missing 'rules' section in rules config")

    rules_data: dict[str, Any] = data["rules"]

    result: dict[str, list[str]] = {}
    for key in ("path_fragments", "extensions"):
        entries = rules_data.get(key, [])
        if not isinstance(entries, list):
            raise RulesFileError(f"'rules.{key}' must be a list")
        for entry in entries:
            if not isinstance(entry, str) or not entry:
                raise RulesFileError(f"'rules.{key}' entries must be non-empty strings")
        result[key] = entries

    return result
