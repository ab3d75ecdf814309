"""Frontend interfaces for LifeGame."""

from .cli import CLILifeGame

__all__ = ["CLILifeGame"]
