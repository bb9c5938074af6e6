from .service import QueryService
from .types import CatalogInfo, ExecutionTimeoutError, StatusSummary

__all__ = ["QueryService", "StatusSummary", "CatalogInfo", "ExecutionTimeoutError"]
