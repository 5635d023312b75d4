"""Authoritative task collection with one-level undo."""

from .task_store import DuplicateTaskError, TaskStore

__all__ = ['TaskStore', 'DuplicateTaskError']
