"""
REST API client.

`HaulbaseClient` owns the HTTP connection and exposes one resource API per
backend resource (`client.loads`, `client.expenses`, ...).
"""

from .client import HaulbaseClient, TokenStore, build_params

__all__ = ["HaulbaseClient", "TokenStore", "build_params"]
