"""Synthetic sales task generator."""

import random
import uuid
from datetime import datetime, timedelta
from typing import List, Optional

from ..models.task import Priority, Status, Task
from ..utils.datetime_utils import utc_now


class SalesTaskGenerator:
    """Generates deterministic sales task sets for demos and empty snapshots."""
    
    ACTIVITIES = [
        'Follow up with', 'Prepare proposal for', 'Demo call with',
        'Negotiate renewal with', 'Discovery meeting with', 'Send quote to',
        'Contract review for', 'Upsell pitch to',
    ]
    ACCOUNTS = [
        'Acme Corp', 'Globex', 'Initech', 'Umbrella', 'Stark Industries',
        'Wayne Enterprises', 'Hooli', 'Soylent', 'Vandelay Imports', 'Tyrell',
    ]
    
    def __init__(self, seed: int = 42):
        """Initialize generator with seed for reproducibility."""
        self.seed = seed
        self.random = random.Random(seed)
    
    def _make_id(self) -> str:
        return str(uuid.UUID(int=self.random.getrandbits(128), version=4))
    
    def generate_tasks(self, count: int, now: Optional[datetime] = None) -> List[Task]:
        """Generate count tasks created within the 30 days before now."""
        now = now or utc_now()
        tasks = []
        
        for _ in range(count):
            title = f"{self.random.choice(self.ACTIVITIES)} {self.random.choice(self.ACCOUNTS)}"
            
            # Mostly small deals, some large ones
            if self.random.random() < 0.8:
                revenue = self.random.randint(100, 3000)
            else:
                revenue = self.random.randint(3000, 10000)
            time_taken = self.random.randint(1, 40)
            
            priority = self.random.choice(list(Priority))
            status = self.random.choice(list(Status))
            
            created_at = now - timedelta(
                days=self.random.randint(0, 30),
                minutes=self.random.randint(0, 24 * 60),
            )
            completed_at = None
            if status == Status.DONE:
                completed_at = min(now, created_at + timedelta(hours=time_taken))
            
            notes = None
            if self.random.random() < 0.3:
                notes = "Generated sample task"
            
            tasks.append(Task(
                id=self._make_id(),
                title=title,
                revenue=float(revenue),
                time_taken=float(time_taken),
                priority=priority,
                status=status,
                created_at=created_at,
                notes=notes,
                completed_at=completed_at,
            ))
        
        return tasks
