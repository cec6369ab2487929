"""
Reserved exception category ranges.

Categories 0x0000 ~ 0xFFFF are reserved by the framework. Within that block
the base libraries use 0x0000 ~ 0x00FF and the cornerstone libraries use
0x0100 ~ 0x01FF. Application exceptions should pick ids above 0xFFFF.

The ranges are a convention only; the registry does not reject a category
because of the range it falls in.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class CategoryRange:
    """Inclusive range of category ids owned by one group of subsystems."""

    name: str
    start: int
    end: int

    def __post_init__(self) -> None:
        if self.start < 0 or self.end < self.start:
            raise ValueError(
                f"Invalid category range {self.name}: {self.start:#06x}..{self.end:#06x}"
            )

    def contains(self, category: int) -> bool:
        return self.start <= category <= self.end

    def __contains__(self, category: int) -> bool:
        return self.contains(category)


FRAMEWORK = CategoryRange("framework", 0x0000, 0xFFFF)
BASE = CategoryRange("base", 0x0000, 0x00FF)
CORNERSTONE = CategoryRange("cornerstone", 0x0100, 0x01FF)


def is_reserved(category: int) -> bool:
    """Return True if ``category`` lies in the framework-reserved block."""
    return category in FRAMEWORK
