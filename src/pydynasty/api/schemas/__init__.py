"""Pydantic models for API I/O."""

from .diagnosis import DiagnoseRequest, DiagnoseResponse
from .durability import DurabilityRequest, DurabilityResponse

__all__ = [
    "DiagnoseRequest",
    "DiagnoseResponse",
    "DurabilityRequest",
    "DurabilityResponse",
]
