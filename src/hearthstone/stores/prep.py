"""
Prep Task store.

Holds the derived prep list. Derivation itself lives in
hearthstone.engine.prep; this store only keeps and toggles the result.
"""

from datetime import datetime
from typing import Any

from hearthstone.models import PrepTask
from hearthstone.storage import PREP_KEY
from hearthstone.stores.base import Clock, PersistentStore


class PrepTaskStore(PersistentStore):
    """Owning store for PrepTask records."""

    STORAGE_KEY = PREP_KEY

    def __init__(self, tasks: list[PrepTask] | None = None, clock: Clock | None = None):
        super().__init__(clock)
        self.tasks: list[PrepTask] = list(tasks or [])
        self.last_generated_at: datetime | None = None

    def set_tasks(self, tasks: list[PrepTask]) -> None:
        """Replace the whole list (regeneration is never incremental)."""
        self.tasks = list(tasks)
        self.last_generated_at = self.now()

    def toggle(self, task_id: str) -> PrepTask | None:
        for i, task in enumerate(self.tasks):
            if task.id == task_id:
                self.tasks[i] = task.model_copy(update={"completed": not task.completed})
                return self.tasks[i]
        return None

    def clear(self) -> None:
        self.tasks = []
        self.last_generated_at = None

    def total_remaining_time(self) -> int:
        """Minutes of prep still to do."""
        return sum(t.time for t in self.tasks if not t.completed)

    def completed_count(self) -> int:
        return sum(1 for t in self.tasks if t.completed)

    def to_state(self) -> dict[str, Any]:
        return {
            "tasks": [t.model_dump() for t in self.tasks],
            "last_generated_at": self.last_generated_at,
        }

    def load_state(self, state: dict[str, Any]) -> None:
        self.tasks = [PrepTask.model_validate(raw) for raw in state.get("tasks", [])]
        self.last_generated_at = state.get("last_generated_at")
