# common.py - shared drawing helpers for the pygame host
import pygame

from klondike import settings as S
from klondike.cards import Card, is_red

# ---------- Configuration ----------
SCREEN_W, SCREEN_H = 1280, 800
TABLE_BG = (2, 100, 40)

CARD_W, CARD_H = S.size_to_dims(S.get_current_settings().get("card_size", "Medium"))
CARD_RADIUS = 10
CARD_GAP_X = 18
TABLEAU_FAN_Y = 28

# Fonts are initialized via setup_fonts() AFTER pygame.init() in __main__.py
FONT_UI = None
FONT_SMALL = None
FONT_CORNER_RANK = None

# Colors
BLACK = (20, 20, 20)
WHITE = (245, 245, 245)
RED = (200, 20, 20)
GOLD = (230, 190, 80)
LIGHT = (220, 220, 220)


def setup_fonts():
    global FONT_UI, FONT_SMALL, FONT_CORNER_RANK
    name = pygame.font.get_default_font()
    FONT_UI = pygame.font.SysFont(name, 26, bold=True)
    FONT_SMALL = pygame.font.SysFont(name, 20, bold=True)
    FONT_CORNER_RANK = pygame.font.SysFont(name, 28, bold=True)


def apply_card_settings(size_name: str = None):
    global CARD_W, CARD_H
    if size_name is not None:
        CARD_W, CARD_H = S.size_to_dims(size_name)
    invalidate_card_caches()


# ---------- Card surfaces ----------
_card_face_cache = {}
_card_back_cache = None


def invalidate_card_caches():
    global _card_face_cache, _card_back_cache
    _card_face_cache = {}
    _card_back_cache = None


def draw_suit_shape(surface, center, suit, color, size=42):
    x, y = center
    if suit == "diamonds":
        half = size//2
        points = [(x, y - half), (x + half, y), (x, y + half), (x - half, y)]
        pygame.draw.polygon(surface, color, points)
    elif suit == "hearts":
        r = size//3
        pygame.draw.circle(surface, color, (x - r, y - r), r)
        pygame.draw.circle(surface, color, (x + r, y - r), r)
        tri = [(x - 2*r, y - r), (x + 2*r, y - r), (x, y + 2*r)]
        pygame.draw.polygon(surface, color, tri)
    elif suit == "spades":
        r = size//3
        pygame.draw.circle(surface, color, (x - r, y), r)
        pygame.draw.circle(surface, color, (x + r, y), r)
        tri = [(x - 2*r, y), (x + 2*r, y), (x, y - 2*r)]
        pygame.draw.polygon(surface, color, tri)
        stem_w = max(6, size//6)
        pygame.draw.rect(surface, color, (x - stem_w//2, y + r, stem_w, size//2))
    else:  # clubs
        r = size//3
        pygame.draw.circle(surface, color, (x, y - r), r)
        pygame.draw.circle(surface, color, (x - r, y + r//3), r)
        pygame.draw.circle(surface, color, (x + r, y + r//3), r)
        stem_w = max(6, size//6)
        pygame.draw.rect(surface, color, (x - stem_w//2, y + r, stem_w, size//2))


def get_card_surface(card: Card):
    if not card.face_up:
        return get_back_surface()
    key = card.identity
    if key in _card_face_cache:
        return _card_face_cache[key]
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=3, border_radius=CARD_RADIUS)
    color = RED if is_red(card.suit) else BLACK
    margin = 8
    rtxt = FONT_CORNER_RANK.render(card.rank, True, color)
    surf.blit(rtxt, (margin, margin))
    r180 = pygame.transform.rotate(rtxt, 180)
    surf.blit(r180, (CARD_W - margin - r180.get_width(), CARD_H - margin - r180.get_height()))
    draw_suit_shape(surf, (CARD_W//2, CARD_H//2), card.suit, color, size=min(56, CARD_W//2))
    _card_face_cache[key] = surf
    return surf


def get_back_surface():
    global _card_back_cache
    if _card_back_cache is not None:
        return _card_back_cache
    surf = pygame.Surface((CARD_W, CARD_H), pygame.SRCALPHA)
    pygame.draw.rect(surf, WHITE, (0, 0, CARD_W, CARD_H), border_radius=CARD_RADIUS)
    pygame.draw.rect(surf, BLACK, (0, 0, CARD_W, CARD_H), width=3, border_radius=CARD_RADIUS)
    inset = 8
    inner_rect = pygame.Rect(inset, inset, CARD_W-2*inset, CARD_H-2*inset)
    pygame.draw.rect(surf, (34, 96, 200), inner_rect, border_radius=8)
    for i in range(-CARD_H, CARD_W, 12):
        pygame.draw.line(surf, LIGHT, (i, 8), (i+CARD_H, CARD_H-8), 1)
    _card_back_cache = surf
    return surf


# ---------- Pile views ----------
class PileView:
    """Screen placement for one engine pile. Holds no cards of its own."""

    def __init__(self, ref, x, y, fan_y=0):
        self.ref = ref
        self.x, self.y = x, y
        self.fan_y = fan_y

    def rect_for_index(self, idx):
        return pygame.Rect(self.x, self.y + idx * self.fan_y, CARD_W, CARD_H)

    def top_rect(self, cards):
        if not cards:
            return pygame.Rect(self.x, self.y, CARD_W, CARD_H)
        return self.rect_for_index(len(cards)-1)

    def draw(self, screen, cards, skip_from=None):
        if skip_from is not None:
            cards = cards[:skip_from]
        if not cards:
            pygame.draw.rect(screen, (255, 255, 255), (self.x, self.y, CARD_W, CARD_H),
                             border_radius=CARD_RADIUS, width=2)
        # Only the top card is visible on piles that do not fan
        start = 0 if self.fan_y else max(0, len(cards) - 1)
        for i in range(start, len(cards)):
            r = self.rect_for_index(i)
            screen.blit(get_card_surface(cards[i]), (r.left, r.top))

    def hit(self, pos, cards):
        """Index of the card under ``pos``, -1 for an empty slot, None for a miss."""
        if not cards:
            if pygame.Rect(self.x, self.y, CARD_W, CARD_H).collidepoint(pos):
                return -1
            return None
        if not self.fan_y:
            return len(cards) - 1 if self.top_rect(cards).collidepoint(pos) else None
        for i in reversed(range(len(cards))):
            if self.rect_for_index(i).collidepoint(pos):
                return i
        return None


# ---------- UI ----------
class Button:
    def __init__(self, text, x, y, w=280, h=48, center=False):
        self.text = text
        self.rect = pygame.Rect(0, 0, w, h)
        if center:
            self.rect.center = (x, y)
        else:
            self.rect.topleft = (x, y)

    def draw(self, screen, hover=False, enabled=True):
        if not enabled:
            col = (140, 140, 140)
        else:
            col = GOLD if hover else (200, 200, 200)
        pygame.draw.rect(screen, col, self.rect, border_radius=12)
        pygame.draw.rect(screen, BLACK, self.rect, 2, border_radius=12)
        t = FONT_UI.render(self.text, True, BLACK)
        screen.blit(t, (self.rect.centerx - t.get_width() // 2,
                        self.rect.centery - t.get_height() // 2))

    def hovered(self, mouse_pos):
        return self.rect.collidepoint(mouse_pos)


# ---------- Base Scene ----------
class Scene:
    def __init__(self, app):
        self.app = app
        self.next_scene = None
    def handle_event(self, e): pass
    def update(self, dt): pass
    def draw(self, screen): pass
