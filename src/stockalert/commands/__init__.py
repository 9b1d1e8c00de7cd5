"""CLI command implementations for the stock alert package.

Each command module provides:
- Configuration loading and validation
- Parameter defaulting for the core library functions
"""

from stockalert.commands.config import load_config
from stockalert.commands.quotes import build_quotes_request

__all__ = [
    "load_config",
    "build_quotes_request",
]
