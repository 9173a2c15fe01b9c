"""Shared pytest fixtures for config, database and HTTP tests."""

from .auth import *  # noqa: F401,F403
from .core import *  # noqa: F401,F403
