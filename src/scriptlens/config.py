"""YAML/dict config loader for scriptlens.

Supports loading from a YAML file or a plain dict (for embedding
in a larger host config).

Example YAML:

    scriptlens:
      indent_size: 2
      escape: true
      line_breaks: false
      class_map:
        aws_access_key: hl-aws
      skip_kinds:
        - base64_long
      allow_list:
        - https://example.com/
"""

from __future__ import annotations
from pathlib import Path
from typing import Any

import yaml

from .annotator import AnnotatorConfig
from .beautifier import BeautifyConfig
from .patterns import ScannerConfig
from .pipeline import Pipeline


class ConfigError(ValueError):
    """Raised for malformed scriptlens configuration."""


def load_config(data: dict[str, Any] | None) -> dict[str, Any]:
    """Normalize a config dict (from YAML or inline)."""
    data = data or {}
    if not isinstance(data, dict):
        raise ConfigError(f"config must be a mapping, got {type(data).__name__}")
    # Support nested under "scriptlens" key or flat
    if "scriptlens" in data:
        data = data["scriptlens"] or {}

    indent_size = data.get("indent_size", 4)
    if not isinstance(indent_size, int) or isinstance(indent_size, bool) or indent_size < 0:
        raise ConfigError(f"indent_size must be a non-negative integer, got {indent_size!r}")

    class_map = data.get("class_map") or {}
    if not isinstance(class_map, dict):
        raise ConfigError("class_map must be a mapping of finding kind to css class")

    return {
        "indent_size": indent_size,
        "escape": bool(data.get("escape", True)),
        "line_breaks": bool(data.get("line_breaks", False)),
        "class_map": {str(k): str(v) for k, v in class_map.items()},
        "skip_kinds": set(data.get("skip_kinds") or []),
        "allow_list": set(data.get("allow_list") or []),
    }


def load_from_yaml(path: str | Path) -> dict[str, Any]:
    """Load config from a YAML file."""
    with open(path) as f:
        try:
            raw = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ConfigError(f"invalid YAML in {path}: {e}") from e
    return load_config(raw)


def create_pipeline(config: dict[str, Any] | None = None) -> Pipeline:
    """Create a fully configured pipeline from a config dict."""
    # load_config is idempotent, so normalized dicts pass through
    cfg = load_config(config)

    return Pipeline.create(
        beautify_config=BeautifyConfig(indent_size=cfg["indent_size"]),
        annotator_config=AnnotatorConfig(
            escape=cfg["escape"],
            line_breaks=cfg["line_breaks"],
            class_map=cfg["class_map"],
            scanner=ScannerConfig(
                skip_kinds=cfg["skip_kinds"],
                allow_list=cfg["allow_list"],
            ),
        ),
    )
