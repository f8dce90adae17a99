# cards.py - card identities, deck construction and shuffling
import random
from typing import List, Optional

SUITS = ["hearts", "diamonds", "clubs", "spades"]
SUIT_SYMBOLS = {"hearts": "♥", "diamonds": "♦", "clubs": "♣", "spades": "♠"}
RANKS = ["A", "2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K"]

ACE = 1
KING = 13


def is_red(suit):
    return suit in ("hearts", "diamonds")


# ---------- Cards ----------
class Card:
    __slots__ = ("_suit", "_value", "face_up")

    def __init__(self, suit, value, face_up=False):
        if suit not in SUIT_SYMBOLS:
            raise ValueError(f"unknown suit: {suit!r}")
        if not ACE <= value <= KING:
            raise ValueError(f"card value out of range: {value!r}")
        self._suit = suit
        self._value = value
        self.face_up = face_up

    @property
    def suit(self) -> str:
        return self._suit

    @property
    def value(self) -> int:
        return self._value

    @property
    def rank(self) -> str:
        return RANKS[self._value - 1]

    @property
    def identity(self):
        return (self._suit, self._value)

    def is_opposite_color(self, other: "Card") -> bool:
        return is_red(self._suit) != is_red(other.suit)

    def __repr__(self):
        return f"{self.rank}{SUIT_SYMBOLS[self._suit]}{'↑' if self.face_up else '↓'}"


def create_deck() -> List[Card]:
    return [Card(suit, value, False) for suit in SUITS for value in range(ACE, KING + 1)]


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """Fisher-Yates shuffle in place.

    ``rng`` only needs ``randrange``; the ``random`` module is used when
    omitted. Returns the same list for convenience.
    """
    rng = rng or random
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randrange(i + 1)
        deck[i], deck[j] = deck[j], deck[i]
    return deck
