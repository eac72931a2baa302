"""Services.

Remote service client and the data refresh orchestrator that drives it.
"""

from .api_client import ServiceClient
from .refresh_orchestrator import RefreshOrchestrator

__all__ = [
    "ServiceClient",
    "RefreshOrchestrator",
]
