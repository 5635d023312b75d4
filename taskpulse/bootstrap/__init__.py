"""Initial collection loading and synthetic data generation."""

from .generator import SalesTaskGenerator
from .loader import BootstrapError, TaskLoader, load_snapshot, save_snapshot

__all__ = ['SalesTaskGenerator', 'BootstrapError', 'TaskLoader', 'load_snapshot', 'save_snapshot']
