# scene.py - pygame scene that renders a SolitaireEngine and forwards input to it
import random

import pygame

from klondike import common as C
from klondike import settings as S
from klondike.clock import GameClock, format_elapsed
from klondike.engine import SolitaireEngine
from klondike.piles import FOUNDATION_COUNT, TABLEAU_COUNT, PileRef


def pygame_clock() -> GameClock:
    return GameClock(now=lambda: pygame.time.get_ticks() / 1000.0)


class KlondikeGameScene(C.Scene):
    def __init__(self, app, engine=None, auto_step_ms=None):
        super().__init__(app)
        cfg = S.get_current_settings()
        if engine is None:
            seed = cfg.get("seed")
            engine = SolitaireEngine(rng=random.Random(seed), clock=pygame_clock())
        self.engine = engine
        self.auto_interval_ms = cfg["auto_step_ms"] if auto_step_ms is None else auto_step_ms

        self.stock_view = None
        self.waste_view = None
        self.foundation_views = []
        self.tableau_views = []
        self.b_autocomplete = None
        self.compute_layout()

        # (source ref, start index, cards) while a drag is in progress
        self.drag = None
        self.drag_offset = (0, 0)
        self.auto_steps = None
        self.auto_last_time = 0
        self.message = ""

    def compute_layout(self):
        top_y = 90
        step_x = C.CARD_W + C.CARD_GAP_X
        self.stock_view = C.PileView(PileRef.stock(), 40, top_y)
        self.waste_view = C.PileView(PileRef.waste(), 40 + step_x, top_y)
        self.foundation_views = [
            C.PileView(PileRef.foundation(i), 40 + (3 + i) * step_x, top_y)
            for i in range(FOUNDATION_COUNT)
        ]
        tab_y = top_y + C.CARD_H + 40
        self.tableau_views = [
            C.PileView(PileRef.tableau(i), 40 + i * step_x, tab_y, fan_y=C.TABLEAU_FAN_Y)
            for i in range(TABLEAU_COUNT)
        ]
        self.b_autocomplete = C.Button("Auto Complete", C.SCREEN_W // 2 - 100, 20, w=200, h=36)

    def all_views(self):
        return [self.stock_view, self.waste_view] + self.foundation_views + self.tableau_views

    def cards_for(self, view):
        return self.engine.state.pile(view.ref)

    # ---------- Actions ----------
    def new_game(self):
        self.engine.new_game()
        self.drag = None
        self.auto_steps = None
        self.message = ""

    def start_auto_complete(self):
        if self.auto_steps is not None or not self.engine.can_auto_complete():
            return
        self.auto_steps = self.engine.auto_complete()
        self.auto_last_time = pygame.time.get_ticks()

    def step_auto_complete(self):
        """Pull one auto-complete move; stop when the engine has none left."""
        if self.auto_steps is None:
            return
        if next(self.auto_steps, None) is None:
            self.auto_steps = None
        self._check_win()

    def _check_win(self):
        if self.engine.won:
            summary = self.engine.summary()
            self.message = (f"You won! Moves: {summary.moves}  Time: {summary.elapsed_text}"
                            "  Press N for a new game.")

    def _drop_target(self, pos):
        for view in self.foundation_views + self.tableau_views:
            cards = self.cards_for(view)
            r = view.top_rect(cards)
            if view.fan_y:
                # Whole column accepts drops
                r = r.union(pygame.Rect(view.x, view.y, C.CARD_W, C.CARD_H))
            if r.collidepoint(pos):
                return view.ref
        return None

    # ---------- Event handling ----------
    def handle_event(self, e):
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            if self.auto_steps is not None or self.engine.won:
                return
            mx, my = e.pos

            if self.b_autocomplete.hovered((mx, my)):
                self.start_auto_complete()
                return

            if self.stock_view.hit((mx, my), self.cards_for(self.stock_view)) is not None:
                self.engine.draw_from_stock()
                return

            for view in [self.waste_view] + self.foundation_views + self.tableau_views:
                hi = view.hit((mx, my), self.cards_for(view))
                if hi is None or hi == -1:
                    continue
                run = self.engine.movable_run(view.ref, hi)
                if run:
                    r = view.rect_for_index(hi)
                    self.drag = (view.ref, hi, run)
                    self.drag_offset = (mx - r.x, my - r.y)
                return

        elif e.type == pygame.MOUSEBUTTONUP and e.button == 1:
            if not self.drag:
                return
            source, index, _ = self.drag
            self.drag = None
            target = self._drop_target(e.pos)
            if target is not None and self.engine.try_move(source, target, index):
                self._check_win()

        elif e.type == pygame.KEYDOWN:
            if e.key == pygame.K_n:
                self.new_game()
            elif e.key == pygame.K_a:
                self.start_auto_complete()
            elif e.key == pygame.K_ESCAPE:
                pygame.event.post(pygame.event.Event(pygame.QUIT))

    def update(self, dt):
        if self.auto_steps is not None:
            now = pygame.time.get_ticks()
            if now - self.auto_last_time >= self.auto_interval_ms:
                self.step_auto_complete()
                self.auto_last_time = now

    def draw(self, screen):
        screen.fill(C.TABLE_BG)

        # HUD
        hud = f"Moves: {self.engine.moves}   Time: {format_elapsed(self.engine.elapsed)}"
        h = C.FONT_UI.render(hud, True, C.WHITE)
        screen.blit(h, (20, 26))
        hints = "N: New  A: Auto Complete  ESC: Quit"
        t = C.FONT_SMALL.render(hints, True, C.WHITE)
        screen.blit(t, (C.SCREEN_W - t.get_width() - 20, 30))

        mp = pygame.mouse.get_pos()
        enabled = self.auto_steps is None and self.engine.can_auto_complete()
        self.b_autocomplete.draw(screen, hover=self.b_autocomplete.hovered(mp) and enabled, enabled=enabled)

        drag_ref, drag_index = (self.drag[0], self.drag[1]) if self.drag else (None, None)
        for view in self.all_views():
            skip = drag_index if view.ref == drag_ref else None
            view.draw(screen, self.cards_for(view), skip_from=skip)

        for label, view in (("Stock", self.stock_view), ("Waste", self.waste_view)):
            lab = C.FONT_SMALL.render(label, True, C.WHITE)
            screen.blit(lab, (view.x + (C.CARD_W - lab.get_width()) // 2, view.y - 22))

        # Drag visuals
        if self.drag:
            _, _, run = self.drag
            ox, oy = self.drag_offset
            for i, c in enumerate(run):
                screen.blit(C.get_card_surface(c), (mp[0] - ox, mp[1] - oy + i * C.TABLEAU_FAN_Y))

        if self.message:
            msg = C.FONT_UI.render(self.message, True, (255, 255, 180))
            screen.blit(msg, (C.SCREEN_W // 2 - msg.get_width() // 2, C.SCREEN_H - 40))
