"""
Filter Result Types

Shared value types returned when a filter pipeline is applied to a search
result.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict


class FilterComposition(Enum):
    """How to combine multiple filter outcomes."""
    AND = "and"  # All must pass
    OR = "or"    # At least one must pass


@dataclass
class FilterResult:
    """
    Result of applying a filter pipeline to a search result.

    Attributes:
        passed: Whether the result passed the pipeline
        reason: Human-readable reason for pass/fail
        metadata: Additional pipeline-specific details
        execution_time: Time taken to evaluate (seconds)
    """
    passed: bool
    reason: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)
    execution_time: float = 0.0

    def __bool__(self) -> bool:
        return self.passed
