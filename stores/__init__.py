from stores.base import ApplicationStore
from stores.memory import MemoryApplicationStore
from stores.sql import SqlApplicationStore

__all__ = [
    "ApplicationStore",
    "MemoryApplicationStore",
    "SqlApplicationStore",
]
