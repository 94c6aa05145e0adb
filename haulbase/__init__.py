"""
haulbase - Python client for the fleet-management API.

Layers:
- api: HTTP client and one resource API per backend resource
- state: loading/error bookkeeping around calls
- domain: filtering, sorting and statistics over fetched lists
- cli: command line front end
"""

from haulbase.api import HaulbaseClient, TokenStore
from haulbase.core.errors import ApiError, AuthenticationError, HaulbaseError

__version__ = "0.1.0"

__all__ = ["ApiError", "AuthenticationError", "HaulbaseClient", "HaulbaseError", "TokenStore"]
