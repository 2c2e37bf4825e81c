"""Version helpers for aecli."""

from __future__ import annotations

# Bump this when publishing
__version__ = "0.1.0"


def user_agent() -> str:
    return f"aecli-python/{__version__}"


__all__ = ["__version__", "user_agent"]
