# price_merge/models/span.py

"""Validity spans and the pairwise relations between them.

A span's ``end`` is exclusive for overlap tests and inclusive for the
inside/disjoint tests, so two spans that only touch at one instant
(``a.end == b.begin``) are disjoint:

    overlaps_right      a  ┗━━━━━━━━┛
                        b       ┗━━━━━━━━━┛

    overlaps_left       a       ┗━━━━━━━━━┛
                        b  ┗━━━━━━━━┛

    is_inside_of        a     ┗━━━━┛
                        b  ┗━━━━━━━━━━┛

    covers              a  ┗━━━━━━━━━━┛
                        b     ┗━━━━┛

    is_disjoint_from    a  ┗━━━┛
                        b      ┗━━━━━━┛
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum, auto


class SpanRelation(Enum):
    """Relation of span ``a`` to span ``b`` as returned by :func:`classify`."""

    DISJOINT = auto()
    EQUAL = auto()
    INSIDE = auto()
    OVERLAPS_LEFT = auto()
    OVERLAPS_RIGHT = auto()
    COVERS = auto()


@dataclass(frozen=True)
class Span:
    """A validity span between ``begin`` and ``end``.

    ``begin <= end`` is assumed, never checked.
    """

    begin: datetime
    end: datetime

    def is_inside_of(self, other: "Span") -> bool:
        """True if this span lies fully within ``other`` (bounds included)."""
        return self.begin >= other.begin and self.end <= other.end

    def overlaps_right(self, other: "Span") -> bool:
        """True if this span starts before ``other`` and ends inside it."""
        return (
            self.begin < other.begin
            and self.end > other.begin
            and self.end < other.end
        )

    def overlaps_left(self, other: "Span") -> bool:
        """True if this span starts inside ``other`` and ends after it."""
        return (
            self.begin > other.begin
            and self.begin < other.end
            and self.end > other.end
        )

    def is_disjoint_from(self, other: "Span") -> bool:
        """True if the spans share no instant other than a touching bound."""
        return self.begin >= other.end or self.end <= other.begin

    def covers(self, other: "Span") -> bool:
        """True if this span contains ``other`` and is not equal to it."""
        return (
            self.begin <= other.begin
            and self.end >= other.end
            and self != other
        )


def classify(a: Span, b: Span) -> SpanRelation:
    """Return the single relation of ``a`` to ``b``.

    Precedence follows the enum order, so a zero-length span sitting on
    the bound of another is DISJOINT rather than INSIDE.
    """
    if a.is_disjoint_from(b):
        return SpanRelation.DISJOINT
    if a == b:
        return SpanRelation.EQUAL
    if a.is_inside_of(b):
        return SpanRelation.INSIDE
    if a.overlaps_left(b):
        return SpanRelation.OVERLAPS_LEFT
    if a.overlaps_right(b):
        return SpanRelation.OVERLAPS_RIGHT
    return SpanRelation.COVERS
