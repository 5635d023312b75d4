"""Snapshot loading with fallback to synthetic generation."""

import json
import logging
import uuid
import yaml
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Union

from ..models.task import Task
from ..utils.datetime_utils import utc_now
from .generator import SalesTaskGenerator

logger = logging.getLogger(__name__)


class BootstrapError(RuntimeError):
    """The initial collection could not be loaded."""


def _read_records(path: Path) -> Any:
    with open(path, 'r', encoding='utf-8') as f:
        if path.suffix.lower() in ['.yaml', '.yml']:
            return yaml.safe_load(f)
        return json.load(f)


def load_snapshot(path: Union[str, Path]) -> List[Task]:
    """
    Load a snapshot file holding a list of task records.

    Records without an id get a generated one and records without createdAt
    are stamped with the load time. Raises FileNotFoundError if the file is
    missing and BootstrapError if it cannot be read or parsed.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Snapshot not found: {path}")
    
    try:
        records = _read_records(path)
    except (OSError, ValueError, yaml.YAMLError) as exc:
        raise BootstrapError(f"Failed to read snapshot {path}: {exc}") from exc
    
    if records is None:
        return []
    if not isinstance(records, list):
        raise BootstrapError(f"Snapshot {path} must contain a list of tasks")
    
    now = utc_now()
    tasks = []
    seen = set()
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise BootstrapError(f"Snapshot {path} record {index} is not a mapping")
        try:
            task = Task.from_dict(record, default_id=str(uuid.uuid4()), default_created_at=now)
        except (TypeError, ValueError) as exc:
            raise BootstrapError(f"Snapshot {path} record {index} is invalid: {exc}") from exc
        if task.id in seen:
            raise BootstrapError(f"Snapshot {path} has duplicate task id {task.id}")
        seen.add(task.id)
        tasks.append(task)
    
    return tasks


def save_snapshot(tasks: Iterable[Task], path: Union[str, Path]) -> Path:
    """Write tasks as a JSON snapshot."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        json.dump([t.to_dict() for t in tasks], f, indent=2)
    return path


class TaskLoader:
    """Supplies the initial collection: the snapshot if present, generated tasks otherwise."""
    
    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """Initialize loader from the 'bootstrap' config section."""
        self.config = config or {}
        bootstrap_config = self.config.get('bootstrap', {})
        self.snapshot_path = bootstrap_config.get('snapshot_path')
        self.seed_count = int(bootstrap_config.get('seed_count', 50))
        self.seed = int(bootstrap_config.get('seed', 42))
    
    def generate(self) -> List[Task]:
        """Generate the synthetic fallback collection."""
        return SalesTaskGenerator(seed=self.seed).generate_tasks(self.seed_count)
    
    def load(self) -> List[Task]:
        """Load the initial collection; raises BootstrapError on a hard failure."""
        if not self.snapshot_path:
            logger.info("No snapshot configured; generating %d tasks", self.seed_count)
            return self.generate()
        
        try:
            tasks = load_snapshot(self.snapshot_path)
        except FileNotFoundError:
            logger.info("Snapshot %s not found; generating %d tasks", self.snapshot_path, self.seed_count)
            return self.generate()
        
        if not tasks:
            logger.info("Snapshot %s is empty; generating %d tasks", self.snapshot_path, self.seed_count)
            return self.generate()
        
        logger.info("Loaded %d tasks from %s", len(tasks), self.snapshot_path)
        return tasks
    
    __call__ = load
