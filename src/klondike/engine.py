"""SolitaireEngine: owns one game and exposes the operations a host calls.

The engine is a thin owner around :mod:`klondike.rules`. It adds the
bookkeeping the rules leave out: starting the clock on the first action,
stopping it on a win, and re-dealing on ``new_game``.
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence, Union

from klondike import rules
from klondike.cards import Card, create_deck, shuffle
from klondike.clock import GameClock, format_elapsed
from klondike.piles import Move, PileRef
from klondike.state import GameState

logger = logging.getLogger(__name__)

PileLike = Union[PileRef, str]


@dataclass(frozen=True)
class GameSummary:
    moves: int
    elapsed: int

    @property
    def elapsed_text(self) -> str:
        return format_elapsed(self.elapsed)


def _as_ref(pile: PileLike) -> Optional[PileRef]:
    if isinstance(pile, PileRef):
        return pile
    if isinstance(pile, str):
        return PileRef.parse(pile)
    return None


class SolitaireEngine:
    def __init__(self, rng: Optional[random.Random] = None, clock: Optional[GameClock] = None):
        self.rng = rng or random.Random()
        self.clock = clock or GameClock()
        self._state = GameState()
        self._won = False
        self.new_game()

    # ---------- Game lifecycle ----------
    def new_game(self) -> GameState:
        self.clock.reset()
        self._won = False
        deck = shuffle(create_deck(), self.rng)
        self._state = rules.deal(deck)
        logger.debug("Dealt new game; stock=%d", len(self._state.stock))
        return self._state

    def _on_action(self):
        self.clock.start()

    def _after_move(self):
        if not self._won and rules.check_win(self._state):
            self._won = True
            self.clock.stop()
            logger.info("Game won in %d moves, %s", self._state.moves, format_elapsed(self.clock.elapsed))

    # ---------- Queries ----------
    def is_valid_move(self, cards: Sequence[Card], target: PileLike) -> bool:
        ref = _as_ref(target)
        if ref is None:
            return False
        return rules.is_valid_move(self._state, cards, ref)

    def movable_run(self, source: PileLike, index: Optional[int] = None) -> Optional[List[Card]]:
        ref = _as_ref(source)
        if ref is None:
            return None
        run = rules.movable_run(self._state, ref, index)
        return list(run) if run is not None else None

    def can_auto_complete(self) -> bool:
        return rules.can_auto_complete(self._state)

    def check_win(self) -> bool:
        return rules.check_win(self._state)

    # ---------- Actions ----------
    def try_move(self, source: PileLike, target: PileLike, index: Optional[int] = None) -> bool:
        """Move the run at ``index`` of ``source`` (top card if None) onto ``target``.

        A won game is frozen until ``new_game``; every move is rejected.
        """
        if self._won:
            return False
        src, dst = _as_ref(source), _as_ref(target)
        if src is None or dst is None:
            return False
        if not rules.apply_move(self._state, Move(src, dst, index)):
            return False
        self._on_action()
        self._after_move()
        return True

    def draw_from_stock(self) -> bool:
        if self._won:
            return False
        self._on_action()
        rules.draw_from_stock(self._state)
        return True

    def auto_complete(self) -> Iterator[rules.AutoMove]:
        """Yield each auto-complete move after applying it.

        Pull one step per repaint; dropping the iterator stops auto-complete.
        """
        if self._won:
            return
        state = self._state
        for step in rules.auto_complete(state):
            if state is not self._state:
                # A new game was dealt mid-run
                return
            self._on_action()
            self._after_move()
            yield step

    def summary(self) -> GameSummary:
        return GameSummary(self._state.moves, self.clock.elapsed)

    # ---------- Accessors ----------
    @property
    def state(self) -> GameState:
        return self._state

    @property
    def stock(self) -> List[Card]:
        return self._state.stock

    @property
    def waste(self) -> List[Card]:
        return self._state.waste

    @property
    def foundations(self) -> List[List[Card]]:
        return self._state.foundations

    @property
    def tableau(self) -> List[List[Card]]:
        return self._state.tableau

    @property
    def moves(self) -> int:
        return self._state.moves

    @property
    def elapsed(self) -> int:
        return self.clock.elapsed

    @property
    def won(self) -> bool:
        return self._won
