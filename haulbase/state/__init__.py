"""
Request state objects shared by all domain views.
"""

from .request import ApiRequest, ApiState, Mutation, unwrap_envelope

__all__ = ["ApiRequest", "ApiState", "Mutation", "unwrap_envelope"]
