"""
Centralized loading of user-facing strings.
Loads the UI text catalogue once from YAML and caches it.
"""

import yaml
from pathlib import Path
from functools import lru_cache


@lru_cache(maxsize=1)
def load_ui_text() -> dict:
    """
    Loads the UI text catalogue from the YAML configuration file.
    Only loads once and reuses the result.

    Returns:
        Dictionary with header, input, message and medicine card strings

    Raises:
        FileNotFoundError: If ui_text.yaml is not found
    """
    config_path = Path(__file__).parent.parent.parent / "config" / "ui_text.yaml"
    with open(config_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f)
