from .history_repository import HistoryRepository, JsonFileStorage, KeyValueStorage

__all__ = [
    "HistoryRepository",
    "JsonFileStorage",
    "KeyValueStorage",
]
