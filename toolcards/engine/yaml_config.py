"""YAML configuration loader.

Overlays a YAML file on top of the environment configuration. When no
YAML is provided, env vars and defaults work exactly as before.

Example YAML:
    parser:
      block_label: tool-result
      bullet_markers: ["-", "*"]
      entity_keywords: [HOSPITAL, CLINIC, MEDICAL, SURGERY]
      min_heading_tokens: 2
      default_tool: Unknown Tool
      default_status: info

    logging:
      level: DEBUG
"""
from __future__ import annotations

import logging
from dataclasses import fields, replace
from pathlib import Path

import yaml

from toolcards.shared.config import ParserConfig
from toolcards.shared.errors import ConfigError

logger = logging.getLogger(__name__)

_LIST_KEYS = {"bullet_markers", "entity_keywords"}
_INT_KEYS = {"min_heading_tokens"}


def _coerce_setting(path: Path, key: str, value: object) -> object:
    """Check a single ``parser:`` entry and normalise its type."""
    if key in _LIST_KEYS:
        if isinstance(value, str):
            return [value]
        if not isinstance(value, list):
            raise ConfigError(str(path), f"parser.{key} must be a list")
        return [str(item) for item in value]
    if key in _INT_KEYS:
        if isinstance(value, bool) or not isinstance(value, int):
            raise ConfigError(str(path), f"parser.{key} must be an integer")
        return value
    if not isinstance(value, (str, int, float)):
        raise ConfigError(str(path), f"parser.{key} must be a string")
    return str(value)


def parse_config_dict(
    raw: dict, path: str | Path = "<yaml>", base: ParserConfig | None = None,
) -> ParserConfig:
    """Build a ParserConfig from an already-loaded YAML mapping."""
    path = Path(path)
    if not isinstance(raw, dict):
        raise ConfigError(str(path), "top level must be a mapping")

    config = base or ParserConfig()
    known = {f.name for f in fields(ParserConfig)} - {"log_level"}

    parser_section = raw.get("parser") or {}
    if not isinstance(parser_section, dict):
        raise ConfigError(str(path), "'parser' must be a mapping")

    overrides: dict[str, object] = {}
    for key, value in parser_section.items():
        if key not in known:
            logger.warning(
                "parse_config_dict: ignoring unknown parser setting %r in %s",
                key, path,
            )
            continue
        overrides[key] = _coerce_setting(path, key, value)

    logging_section = raw.get("logging") or {}
    if not isinstance(logging_section, dict):
        raise ConfigError(str(path), "'logging' must be a mapping")
    if "level" in logging_section:
        overrides["log_level"] = str(logging_section["level"]).upper()

    if "default_status" in overrides:
        overrides["default_status"] = str(overrides["default_status"]).strip().lower()

    config = replace(config, **overrides)
    return config.validate(str(path))


def load_yaml_config(
    path: str | Path, base: ParserConfig | None = None,
) -> ParserConfig:
    """Load and parse a YAML config file.

    Settings in the file win over *base* (by default the environment
    configuration from ``ParserConfig.from_env()``).
    """
    path = Path(path)
    logger.info(
        "load_yaml_config: attempting to load config from %s (exists=%s)",
        path, path.exists(),
    )
    try:
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
    except FileNotFoundError as exc:
        logger.error(
            "load_yaml_config: config file not found at %s (absolute path: %s)",
            path, path.absolute(),
        )
        raise ConfigError(str(path), "file not found") from exc
    except yaml.YAMLError as exc:
        logger.error("load_yaml_config: YAML parse error in %s: %s", path, exc)
        raise ConfigError(str(path), f"YAML parse error: {exc}") from exc
    except OSError as exc:
        logger.error(
            "load_yaml_config: unexpected error reading %s: %s",
            path, exc, exc_info=True,
        )
        raise ConfigError(str(path), str(exc)) from exc

    top_sections = sorted(str(k) for k in raw) if isinstance(raw, dict) else []
    logger.info(
        "Parsed YAML config %s, sections: %s",
        path.name, ", ".join(top_sections) if top_sections else "(empty)",
    )
    if base is None:
        base = ParserConfig.from_env()
    return parse_config_dict(raw, path, base)
