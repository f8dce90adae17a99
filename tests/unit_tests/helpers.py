"""Small builders for hand-made game positions used across the unit tests."""

from typing import List

from klondike.cards import RANKS, SUITS, Card
from klondike.state import GameState

_SUIT_LETTERS = {"H": "hearts", "D": "diamonds", "C": "clubs", "S": "spades"}


def card_from_text(text, face_up=True) -> Card:
    """``"10H"``/``"KS"`` style text to a card."""
    text = text.strip().upper()
    return Card(_SUIT_LETTERS[text[-1]], RANKS.index(text[:-1]) + 1, face_up)


def cards(*texts, face_up=True) -> List[Card]:
    return [card_from_text(t, face_up) for t in texts]


def suit_run(suit, low=1, high=13, face_up=True, descending=False) -> List[Card]:
    run = [Card(suit, v, face_up) for v in range(low, high + 1)]
    return list(reversed(run)) if descending else run


def suit_columns_state() -> GameState:
    """Every suit stacked K..A (Ace on top) in tableau piles 0..3, all face-up."""
    state = GameState()
    for i, suit in enumerate(SUITS):
        state.tableau[i] = suit_run(suit, descending=True)
    return state


def all_cards(state) -> List[Card]:
    piles = [state.stock, state.waste] + state.foundations + state.tableau
    return [c for pile in piles for c in pile]


def card_count(state) -> int:
    return len(all_cards(state))
