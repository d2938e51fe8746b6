"""
Outcome of a completed dispatch.
"""

from dataclasses import dataclass, field
from typing import Optional

from .classifier import classify


@dataclass(frozen=True)
class Result:
    """Status code, its category and whether a body came back.

    ``category`` is always derived from ``code`` so the two are either both
    set or both ``None``.
    """

    code: Optional[int] = None
    has_body: bool = False
    category: Optional[str] = field(init=False, default=None)

    def __post_init__(self):
        if self.code is not None:
            object.__setattr__(self, "category", classify(self.code))

    def to_dict(self) -> dict:
        """Plain dict view, used for structured log output."""
        return {
            "code": self.code,
            "category": self.category,
            "has_body": self.has_body,
        }
