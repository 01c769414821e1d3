# ruff: noqa: F403, F401
"""Schemas package initialization."""

from .base import *
from .catalog import *
from .settings import *
from .chat import *
from .completion import *
