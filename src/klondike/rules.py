"""Klondike rules as plain functions over an explicit :class:`GameState`.

Validation functions never mutate. ``apply_move``, ``draw_from_stock`` and
``auto_complete`` mutate the state they are given; ``apply_move`` returns
False and leaves the state untouched when a move is rejected.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from klondike.cards import ACE, KING, Card
from klondike.piles import FOUNDATION_COUNT, TABLEAU_COUNT, Move, PileKind, PileRef
from klondike.state import GameState

logger = logging.getLogger(__name__)

FULL_SUIT = KING


@dataclass(frozen=True)
class AutoMove:
    """One card carried to a foundation by auto-complete."""

    card: Card
    source: PileRef
    target: PileRef


# ---------- Deal ----------
def deal(deck: List[Card]) -> GameState:
    """Lay out a fresh game from ``deck`` (consumed in order, front first)."""
    state = GameState()
    cards = iter(deck)
    for i in range(TABLEAU_COUNT):
        for j in range(i, TABLEAU_COUNT):
            c = next(cards)
            c.face_up = (j == i)
            state.tableau[j].append(c)

    # Remaining cards go to stock, face down
    state.stock = list(cards)
    for c in state.stock:
        c.face_up = False
    return state


# ---------- Legality ----------
def can_stack_tableau(upper: Card, lower: Card) -> bool:
    return upper.is_opposite_color(lower) and upper.value == lower.value - 1


def can_move_to_empty_tableau(card: Card) -> bool:
    return card.value == KING


def can_move_to_foundation(state: GameState, card: Card, foundation_index: int) -> bool:
    f = state.foundations[foundation_index]
    if not f:
        return card.value == ACE
    top = f[-1]
    return card.suit == top.suit and card.value == top.value + 1


def is_valid_move(state: GameState, cards: Sequence[Card], target: PileRef) -> bool:
    """Would dropping ``cards`` (bottom card first) onto ``target`` be legal?

    Only the attachment point is checked; a tableau run is assumed to be
    internally ordered already. A run whose first card is face-down is never
    movable, so cards built with ``Card(suit, value)`` (face-down by default)
    are rejected until ``face_up`` is set.
    """
    if not cards or not cards[0].face_up:
        return False
    card = cards[0]

    if target.kind is PileKind.FOUNDATION:
        if len(cards) > 1:
            return False
        return can_move_to_foundation(state, card, target.index)

    if target.kind is PileKind.TABLEAU:
        pile = state.tableau[target.index]
        if not pile:
            return can_move_to_empty_tableau(card)
        return can_stack_tableau(card, pile[-1])

    # Stock and waste never receive cards from a move
    return False


def movable_run(state: GameState, source: PileRef, index: Optional[int] = None) -> Optional[List[Card]]:
    """Return the cards a move from ``source`` would pick up, or None.

    Waste and foundations only give up their top card. Tableau piles give
    the tail starting at ``index``, which must be a face-up card.
    """
    if source.kind is PileKind.STOCK:
        return None
    pile = state.pile(source)
    if not pile:
        return None
    top = len(pile) - 1
    if index is None:
        index = top
    if not 0 <= index <= top:
        return None
    if source.kind is not PileKind.TABLEAU and index != top:
        return None
    if not pile[index].face_up:
        return None
    return pile[index:]


# ---------- Mutations ----------
def _reveal_top(pile: List[Card]) -> None:
    if pile and not pile[-1].face_up:
        pile[-1].face_up = True


def apply_move(state: GameState, move: Move) -> bool:
    """Apply ``move`` if legal. Returns False and changes nothing otherwise."""
    if move.source == move.target:
        return False
    run = movable_run(state, move.source, move.index)
    if run is None or not is_valid_move(state, run, move.target):
        return False

    source = state.pile(move.source)
    del source[len(source) - len(run):]
    if move.source.kind is PileKind.TABLEAU:
        _reveal_top(source)
    state.pile(move.target).extend(run)
    state.moves += 1
    return True


def draw_from_stock(state: GameState) -> None:
    """Turn the top stock card onto the waste, or recycle the waste when stock is empty."""
    if state.stock:
        c = state.stock.pop()
        c.face_up = True
        state.waste.append(c)
    else:
        recycled = len(state.waste)
        while state.waste:
            c = state.waste.pop()
            c.face_up = False
            state.stock.append(c)
        logger.debug("Recycled %d waste cards back to stock", recycled)
    state.moves += 1


# ---------- Win / auto-complete ----------
def check_win(state: GameState) -> bool:
    return all(len(f) == FULL_SUIT for f in state.foundations)


def find_auto_move(state: GameState) -> Optional[AutoMove]:
    """First tableau top (piles 0..6) that fits a foundation (0..3), or None."""
    for ti, t in enumerate(state.tableau):
        if not t:
            continue
        c = t[-1]
        for fi in range(FOUNDATION_COUNT):
            if is_valid_move(state, [c], PileRef.foundation(fi)):
                return AutoMove(c, PileRef.tableau(ti), PileRef.foundation(fi))
    return None


def has_possible_foundation_moves(state: GameState) -> bool:
    return find_auto_move(state) is not None


def can_auto_complete(state: GameState) -> bool:
    """All tableau cards face-up, stock empty, and a tableau->foundation move exists.

    The waste is deliberately not considered.
    """
    for t in state.tableau:
        for c in t:
            if not c.face_up:
                return False
    if state.stock:
        return False
    return has_possible_foundation_moves(state)


def auto_complete(state: GameState) -> Iterator[AutoMove]:
    """Carry tableau tops to the foundations one card per iteration.

    Each yielded step has already been applied. Callers decide the pacing
    and may stop iterating at any point.
    """
    while can_auto_complete(state) and not check_win(state):
        step = find_auto_move(state)
        if step is None:
            break
        pile = state.pile(step.source)
        pile.pop()
        _reveal_top(pile)
        state.pile(step.target).append(step.card)
        state.moves += 1
        yield step
    logger.debug("Auto-complete stopped at move %d (won=%s)", state.moves, check_win(state))
