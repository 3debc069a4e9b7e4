"""Service layer for business logic.

Services depend on protocols (interfaces), not concrete implementations,
making them testable and flexible.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .error_classifier import SAFETY_REJECTION_MESSAGE, ErrorClassifier, is_content_policy_rejection
from .image_service import ImageService

__all__ = [
    "ErrorClassifier",
    "ImageService",
    "SAFETY_REJECTION_MESSAGE",
    "is_content_policy_rejection",
]
