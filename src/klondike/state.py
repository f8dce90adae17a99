"""The owned game state: five pile groups and the move counter."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

from klondike.cards import Card
from klondike.piles import FOUNDATION_COUNT, TABLEAU_COUNT, PileKind, PileRef


def _empty_piles(count: int) -> List[List[Card]]:
    return [[] for _ in range(count)]


@dataclass
class GameState:
    stock: List[Card] = field(default_factory=list)
    waste: List[Card] = field(default_factory=list)
    foundations: List[List[Card]] = field(default_factory=lambda: _empty_piles(FOUNDATION_COUNT))
    tableau: List[List[Card]] = field(default_factory=lambda: _empty_piles(TABLEAU_COUNT))
    moves: int = 0

    def pile(self, ref: PileRef) -> List[Card]:
        """Resolve a pile reference to the live list of cards it names."""
        if ref.kind is PileKind.STOCK:
            return self.stock
        if ref.kind is PileKind.WASTE:
            return self.waste
        if ref.kind is PileKind.FOUNDATION:
            return self.foundations[ref.index]
        return self.tableau[ref.index]
