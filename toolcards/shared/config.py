"""Configuration loaded from environment variables.

All settings have sensible defaults. Override via TOOLCARDS_* env vars.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .errors import ConfigError

logger = logging.getLogger(__name__)

DEFAULT_ENTITY_KEYWORDS = ("HOSPITAL", "CLINIC", "MEDICAL")
VALID_STATUSES = ("success", "error", "info")


def _split_list(raw: str) -> list[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class ParserConfig:
    """Tool result parser configuration."""

    # Block markers: fence + label opens a block, a bare fence closes it.
    fence: str = "```"
    block_label: str = "tool-result"

    # Line syntax inside a block
    separator: str = ":"
    bullet_markers: list[str] = field(default_factory=lambda: ["-"])

    # Template grouping: a bullet whose key contains one of these words
    # (case-insensitive), or is all caps with at least min_heading_tokens
    # words, opens a new entity.
    entity_keywords: list[str] = field(
        default_factory=lambda: list(DEFAULT_ENTITY_KEYWORDS)
    )
    min_heading_tokens: int = 2

    # Record defaults when the block omits them
    default_tool: str = "Unknown Tool"
    default_status: str = "info"

    # Logging
    log_level: str = "INFO"

    def validate(self, source: str = "<config>") -> ParserConfig:
        """Raise ConfigError if any setting is unusable."""
        if not self.fence:
            raise ConfigError(source, "fence must not be empty")
        if not self.block_label:
            raise ConfigError(source, "block_label must not be empty")
        if len(self.separator) != 1:
            raise ConfigError(
                source, f"separator must be one character, got {self.separator!r}"
            )
        if not self.bullet_markers or not all(self.bullet_markers):
            raise ConfigError(source, "bullet_markers must be non-empty strings")
        if self.min_heading_tokens < 1:
            raise ConfigError(
                source,
                f"min_heading_tokens must be >= 1, got {self.min_heading_tokens}",
            )
        if not isinstance(logging.getLevelName(self.log_level.upper()), int):
            raise ConfigError(source, f"unknown log_level {self.log_level!r}")
        if self.default_status not in VALID_STATUSES:
            raise ConfigError(
                source,
                f"default_status must be one of {', '.join(VALID_STATUSES)}, "
                f"got {self.default_status!r}",
            )
        return self

    @classmethod
    def from_env(cls) -> ParserConfig:
        """Load configuration from TOOLCARDS_* environment variables."""
        env_vars = {
            k: v for k, v in os.environ.items() if k.startswith("TOOLCARDS_")
        }
        if env_vars:
            logger.info(
                "ParserConfig.from_env: TOOLCARDS_* env overrides: %s",
                ", ".join(f"{k}={v}" for k, v in sorted(env_vars.items())),
            )
        else:
            logger.debug(
                "ParserConfig.from_env: no TOOLCARDS_* env vars set, using defaults"
            )

        defaults = cls()
        try:
            min_tokens = int(os.getenv(
                "TOOLCARDS_MIN_HEADING_TOKENS", str(defaults.min_heading_tokens)
            ))
        except ValueError as exc:
            raise ConfigError("TOOLCARDS_MIN_HEADING_TOKENS", str(exc)) from exc

        config = cls(
            fence=os.getenv("TOOLCARDS_FENCE", defaults.fence),
            block_label=os.getenv("TOOLCARDS_BLOCK_LABEL", defaults.block_label),
            separator=os.getenv("TOOLCARDS_SEPARATOR", defaults.separator),
            bullet_markers=(
                _split_list(os.getenv("TOOLCARDS_BULLET_MARKERS", ""))
                or defaults.bullet_markers
            ),
            entity_keywords=(
                _split_list(os.getenv("TOOLCARDS_ENTITY_KEYWORDS", ""))
                or defaults.entity_keywords
            ),
            min_heading_tokens=min_tokens,
            default_tool=os.getenv("TOOLCARDS_DEFAULT_TOOL", defaults.default_tool),
            default_status=os.getenv(
                "TOOLCARDS_DEFAULT_STATUS", defaults.default_status
            ).strip().lower(),
            log_level=os.getenv("TOOLCARDS_LOG_LEVEL", defaults.log_level),
        )
        config.validate("environment")
        logger.info(
            "ParserConfig.from_env: label=%s keywords=%s log_level=%s",
            config.block_label, ",".join(config.entity_keywords),
            config.log_level,
        )
        return config
