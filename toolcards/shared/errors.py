"""Exception hierarchy for the tool result toolkit.

Parsing itself never raises: malformed input degrades to coarser
values. These exceptions belong to the outer surfaces only
(configuration loading and the command line).
"""
from __future__ import annotations


class ToolCardsError(Exception):
    """Base exception for all toolcards errors."""


class ConfigError(ToolCardsError):
    """A configuration file or value could not be used."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid configuration {path}: {reason}")


class InputError(ToolCardsError):
    """Input text could not be read."""
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot read input {path}: {reason}")
