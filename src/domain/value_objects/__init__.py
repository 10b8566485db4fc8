"""Domain value objects.

Immutable value objects that carry detector configuration and outcomes.
"""

from src.domain.value_objects.detection_policy import DetectionPolicy
from src.domain.value_objects.suspicion_verdict import (
    HistoryAnalysis,
    SuspicionVerdict,
)

__all__ = [
    "DetectionPolicy",
    "HistoryAnalysis",
    "SuspicionVerdict",
]
