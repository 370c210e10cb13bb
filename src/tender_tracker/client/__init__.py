from .api import ApiError, TenderTrackerClient
from .cache import QueryCache

__all__ = ["ApiError", "QueryCache", "TenderTrackerClient"]
