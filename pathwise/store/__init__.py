from pathwise.store.base import TaskStore
from pathwise.store.memory import InMemoryTaskStore

__all__ = ["TaskStore", "InMemoryTaskStore"]
