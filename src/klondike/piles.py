"""Pile identifiers and the move description passed between host and engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

FOUNDATION_COUNT = 4
TABLEAU_COUNT = 7


class PileKind(Enum):
    STOCK = "stock"
    WASTE = "waste"
    FOUNDATION = "foundation"
    TABLEAU = "tableau"

    @property
    def slots(self) -> int:
        """Number of piles of this kind (1 for stock and waste)."""
        if self is PileKind.FOUNDATION:
            return FOUNDATION_COUNT
        if self is PileKind.TABLEAU:
            return TABLEAU_COUNT
        return 1

    @property
    def indexed(self) -> bool:
        return self in (PileKind.FOUNDATION, PileKind.TABLEAU)


@dataclass(frozen=True)
class PileRef:
    """Names one concrete pile: a kind plus an index for foundations/tableau."""

    kind: PileKind
    index: Optional[int] = None

    def __post_init__(self) -> None:
        if self.kind.indexed:
            if self.index is None or not 0 <= self.index < self.kind.slots:
                raise ValueError(f"{self.kind.value} index out of range: {self.index!r}")
        elif self.index is not None:
            raise ValueError(f"{self.kind.value} takes no index")

    @classmethod
    def stock(cls) -> "PileRef":
        return cls(PileKind.STOCK)

    @classmethod
    def waste(cls) -> "PileRef":
        return cls(PileKind.WASTE)

    @classmethod
    def foundation(cls, index: int) -> "PileRef":
        return cls(PileKind.FOUNDATION, index)

    @classmethod
    def tableau(cls, index: int) -> "PileRef":
        return cls(PileKind.TABLEAU, index)

    @classmethod
    def parse(cls, pile_id: str) -> Optional["PileRef"]:
        """Parse ids such as ``"stock"`` or ``"tableau-3"``; unknown ids give None."""
        if pile_id in ("stock", "waste"):
            return cls(PileKind(pile_id))
        kind_name, sep, raw_index = pile_id.partition("-")
        if not sep or kind_name not in ("foundation", "tableau"):
            return None
        try:
            return cls(PileKind(kind_name), int(raw_index))
        except ValueError:
            return None

    def __str__(self) -> str:
        if self.index is None:
            return self.kind.value
        return f"{self.kind.value}-{self.index}"


@dataclass(frozen=True)
class Move:
    """Pick up the run starting at ``index`` of ``source`` and drop it on ``target``.

    ``index=None`` means the top card only.
    """

    source: PileRef
    target: PileRef
    index: Optional[int] = None
