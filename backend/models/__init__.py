"""
Centralized model imports for easy access across the application
"""

# Common models
from .common import (
    HealthResponse,
    MessageResponse
)

# Lookup models
from .lookups import (
    SimilarPlaceRequest,
    SimilarPlaceResponse,
    LogRecord
)

# Export all models for easy importing
__all__ = [
    # Common
    "HealthResponse",
    "MessageResponse",

    # Lookups
    "SimilarPlaceRequest",
    "SimilarPlaceResponse",
    "LogRecord",
]
