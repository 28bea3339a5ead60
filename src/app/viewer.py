# src/app/viewer.py
#!/usr/bin/env python3
"""
Pathfinding Visualizer: grid editor + animated search

- Mouse:
    [Left]    -> set start         [Right] -> set end
    [Middle]  -> toggle obstacle
- Keyboard:
    [S]/[E]/[O] held -> drag start / end / obstacles under the cursor
    [P]              -> random obstacles (10% of free cells)
    [1]..[4]         -> algorithm (A* / Dijkstra / BFS / DFS)
    [SPACE]          -> run search
    [C]              -> clear path      [R] -> reset grid
    [H]              -> toggle help     [Q]/[ESC] -> quit

Config:
- ENV: PATHFINDER_ALGO, PATHFINDER_SIZE, PATHFINDER_LOG_LEVEL
- CLI: --algo=astar|dijkstra|bfs|dfs --size=WxH --log-level=DEBUG
"""

# --- bootstrap import path so `from src...` works when run as a script ---
import sys
from pathlib import Path
_REPO_ROOT = Path(__file__).resolve().parents[2]
if str(_REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(_REPO_ROOT))
# -------------------------------------------------------------------------

from typing import Callable, List, Optional, Tuple
import logging

import pygame

from src.app.config import Settings, resolve_settings, setup_logging
from src.core.base import SearchSession
from src.core.board import Board, tiles_that_fit
from src.core.errors import InvalidRequest
from src.core.scheduler import StepScheduler, animation_info
from src.core.search import new_session, resolve_algorithm
from src.core.types import Algorithm, Cell, Done, NodeExplored, SearchEvent, SearchResult

logger = logging.getLogger(__name__)

# ---------- Layout ----------
PANEL_W = 320            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 24
FONT_NAME = None  # default pygame font
MESSAGE_MS = 3000
RANDOM_OBSTACLE_PCT = 10

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
BLUE        = ( 70,130,180)
RED         = (220, 50, 47)
FREE_GRAY   = (200,200,200)
WALL_DARK   = ( 40, 44, 52)
NEON_MAG_A  = (255,0,120,90)
NEON_MINT   = (0,255,200)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)
MSG_COLORS  = {"info": (58, 86, 160, 235), "warning": (170, 120, 20, 235), "error": (160, 40, 40, 235)}

ALGO_KEYS = {
    pygame.K_1: Algorithm.ASTAR,
    pygame.K_2: Algorithm.DIJKSTRA,
    pygame.K_3: Algorithm.BFS,
    pygame.K_4: Algorithm.DFS,
}

HELP_LINES = [
    "Mouse: Left = start, Right = end, Middle = obstacle",
    "Hold S / E / O and move: drag start / end / obstacles",
    "P: random obstacles (10% of free cells)",
    "Space: run   C: clear path   R: reset grid",
    "1-4: A* / Dijkstra / BFS / DFS",
    "H: toggle this help   Q / Esc: quit",
]


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback: Callable[[], None], *, togglable: bool = False):
        self.label = label
        self.rect = rect
        self.callback = callback
        self.hover = False
        self.togglable = togglable
        self.active = False  # highlight state

    def set_active(self, value: bool):
        self.active = bool(value)

    def draw(self, screen: pygame.Surface, font: pygame.font.Font):
        base = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        bg_idle   = (36, 40, 48, 220)
        bg_hover  = (46, 50, 60, 230)
        bg_active = (58, 86, 160, 235)
        border_active = (120, 170, 255, 255)

        if self.active and self.togglable:
            bg = bg_active
        elif self.hover:
            bg = bg_hover
        else:
            bg = bg_idle

        pygame.draw.rect(base, bg, base.get_rect(), border_radius=10)
        screen.blit(base, self.rect.topleft)

        if self.active and self.togglable:
            pygame.draw.rect(screen, border_active, self.rect, width=2, border_radius=10)

        text = font.render(self.label, True, (235,238,242))
        screen.blit(text, text.get_rect(center=self.rect.center))

    def handle_mouse(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()
                return True
        return False


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings):
        pygame.init()

        self.board = Board(settings.width, settings.height)
        self.selected_algo: Algorithm = settings.algorithm
        self.cell_size = self._auto_cell_size()
        self.font_small = pygame.font.Font(FONT_NAME, 16)
        self.font = pygame.font.Font(FONT_NAME, 20)
        self.font_big = pygame.font.Font(FONT_NAME, 24)

        grid_px_w = GRID_MARGIN*2 + self.board.width * self.cell_size
        grid_px_h = GRID_MARGIN*2 + self.board.height* self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 560)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pathfinding Visualizer")

        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)
        # window resizes are measured in tiles of the startup cell size
        self.tile_px = self.cell_size
        self._fitted_tiles = self._tiles_for_window(win_w, win_h)

        # sink state: cleared before every search
        self.explored: List[Cell] = []
        self.path: List[Cell] = []
        self.last_result: Optional[SearchResult] = None

        self.session: Optional[SearchSession] = None
        self.scheduler: Optional[StepScheduler] = None
        self.clock = pygame.time.Clock()
        self.show_help = False
        self.held_key: Optional[int] = None
        self._drag_obstacle_mode: Optional[bool] = None
        self._message: Optional[Tuple[str, str, int]] = None  # (text, kind, expires_at)

        self.show_message("Press H for controls")

    # ---------- layout ----------
    def _auto_cell_size(self) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(8, min(CELL_SIZE_DEFAULT, target_h // self.board.height))

    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)
        cs_by_w = avail_w // self.board.width
        cs_by_h = avail_h // self.board.height
        self.cell_size = int(max(4, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.board.width  * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.board.height * self.cell_size + 2 * GRID_MARGIN
        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN, self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right), win_h)
        self._build_buttons()

    def _tiles_for_window(self, win_w: int, win_h: int) -> Tuple[int, int]:
        return tiles_that_fit(win_w - PANEL_W - 2 * GRID_MARGIN, win_h - 2 * GRID_MARGIN, self.tile_px)

    def _on_resize(self, w: int, h: int):
        self.screen = pygame.display.set_mode((max(480, w), max(360, h)), pygame.RESIZABLE)
        win_w, win_h = self.screen.get_size()
        tiles = self._tiles_for_window(win_w, win_h)
        if tiles != self._fitted_tiles:
            self._fitted_tiles = tiles
            self.clear_path()
            self.board.resize(*tiles)
            logger.info("Grid resized to %dx%d", *tiles)
            self.show_message(f"Grid resized to {tiles[0]}x{tiles[1]}")
        self._layout(win_w, win_h)

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Cell]:
        ox, oy = self._grid_origin
        px, py = pos
        if px < ox or py < oy:
            return None
        c = ((px - ox) // self.cell_size, (py - oy) // self.cell_size)
        return c if self.board.in_bounds(c) else None

    # ---------- main loop ----------
    def run(self):
        while True:
            self._handle_events()
            self._tick_search()
            self._draw()
            self.clock.tick(60)

    def _tick_search(self):
        if self.scheduler is None or not self.scheduler.active:
            return
        for event in self.scheduler.advance(pygame.time.get_ticks()):
            self._apply(event)

    # ---------- sink ----------
    def _apply(self, event: SearchEvent):
        if isinstance(event, NodeExplored):
            self.explored.append(event.cell)
        elif isinstance(event, Done):
            self._on_done(event.result)

    def _on_done(self, result: SearchResult):
        self.last_result = result
        if result.success:
            self.path = list(result.path)
            text = f"Path found! Length: {result.path_length}, Explored: {result.nodes_explored}"
            self.show_message(text)
            logger.info(text)
        else:
            self.show_message(result.message, "error")
            logger.info("%s (%d explored)", result.message, result.nodes_explored)

    def _cancel_search(self):
        if self.scheduler is not None:
            self.scheduler.cancel()
            self.scheduler = None

    def clear_path(self):
        self._cancel_search()
        self.explored.clear()
        self.path = []
        self.last_result = None
        self.session = None

    def run_search(self):
        self.clear_path()
        try:
            request = self.board.request(self.selected_algo)
        except InvalidRequest as ex:
            self.show_message(str(ex), "warning")
            logger.info("Cannot run pathfinding: %s", ex)
            return

        info = animation_info(self.board.topology)
        logger.info("Finding path from %s to %s using %s", request.start, request.end, self.selected_algo.label)
        logger.info("Grid: %s (%d cells), Animation: %dms delay, %s", info["grid_size"],
                    info["total_cells"], info["delay_ms"], info["update_frequency"])
        self.show_message(f"Running {self.selected_algo.label}...")
        self.session = new_session(request)
        self.scheduler = StepScheduler(iter(self.session), info["delay_ms"])

    def reset_grid(self):
        self.clear_path()
        self.board.clear_all()
        self.show_message("Grid reset")

    def add_random_obstacles(self):
        placed = self.board.add_random_obstacles(RANDOM_OBSTACLE_PCT)
        self.show_message(f"Added {placed} obstacles")

    def set_algorithm(self, name):
        self.selected_algo = resolve_algorithm(name)
        self._refresh_active_states()
        logger.info("Pathfinding algorithm set to: %s", self.selected_algo.value)

    def show_message(self, text: str, kind: str = "info"):
        self._message = (text, kind, pygame.time.get_ticks() + MESSAGE_MS)

    # ---------- input ----------
    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                self._on_key_down(e)
            elif e.type == pygame.KEYUP:
                if e.key == self.held_key:
                    self.held_key = None
                    self._drag_obstacle_mode = None
            elif e.type == pygame.VIDEORESIZE:
                self._on_resize(e.w, e.h)
            elif e.type == pygame.MOUSEBUTTONDOWN:
                if any(b.handle_mouse(e) for b in self._buttons):
                    continue
                self._on_cell_click(e)
            elif e.type == pygame.MOUSEMOTION:
                for b in self._buttons:
                    b.handle_mouse(e)
                self._on_drag(e.pos)

    def _on_key_down(self, e: pygame.event.Event):
        if e.key in (pygame.K_ESCAPE, pygame.K_q):
            pygame.quit(); sys.exit(0)
        elif e.key == pygame.K_SPACE:
            self.run_search()
        elif e.key == pygame.K_c:
            self.clear_path()
            self.show_message("Path cleared")
        elif e.key == pygame.K_r:
            self.reset_grid()
        elif e.key == pygame.K_p:
            self.add_random_obstacles()
        elif e.key == pygame.K_h:
            self.show_help = not self.show_help
        elif e.key in ALGO_KEYS:
            self.set_algorithm(ALGO_KEYS[e.key])
        elif e.key in (pygame.K_s, pygame.K_e, pygame.K_o) and self.held_key is None:
            self.held_key = e.key
            self._on_drag(pygame.mouse.get_pos())

    def _on_cell_click(self, e: pygame.event.Event):
        c = self.cell_at(e.pos)
        if c is None:
            return
        if e.button == 1:
            self.board.set_start(c)
        elif e.button == 3:
            self.board.set_end(c)
        elif e.button == 2:
            self.board.toggle_obstacle(c)

    def _on_drag(self, pos: Tuple[int, int]):
        if self.held_key is None:
            return
        c = self.cell_at(pos)
        if c is None:
            return
        if self.held_key == pygame.K_s and c != self.board.start:
            self.board.set_start(c)
        elif self.held_key == pygame.K_e and c != self.board.end:
            self.board.set_end(c)
        elif self.held_key == pygame.K_o:
            # first cell decides whether this drag adds or removes
            if self._drag_obstacle_mode is None:
                self._drag_obstacle_mode = not self.board.is_obstacle(c)
            if self.board.is_obstacle(c) != self._drag_obstacle_mode:
                self.board.toggle_obstacle(c)

    # ---------- drawing ----------
    def _draw(self):
        self._draw_backdrop()
        self._draw_grid()
        self._draw_metrics_and_buttons()
        if self.show_help:
            self._draw_help()
        self._draw_message()
        pygame.display.flip()

    def _draw_backdrop(self):
        w, h = self.screen.get_size()
        top = (24, 26, 32); bot = (36, 40, 48)
        for y in range(h):
            t = y / max(1, h-1)
            c = (
                int(top[0] + (bot[0]-top[0]) * t),
                int(top[1] + (bot[1]-top[1]) * t),
                int(top[2] + (bot[2]-top[2]) * t),
            )
            pygame.draw.line(self.screen, c, (0, y), (w, y))

    def _cell_rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = c
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        for c in self.board.topology.cells():
            rect = self._cell_rect(c)
            pygame.draw.rect(self.screen, WALL_DARK if self.board.is_obstacle(c) else FREE_GRAY, rect)
            pygame.draw.rect(self.screen, BLACK, rect, 1)

        overlay = pygame.Surface((cs, cs), pygame.SRCALPHA); overlay.fill(NEON_MAG_A)
        for c in self.explored:
            self.screen.blit(overlay, self._cell_rect(c).topleft)

        if len(self.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.path]
            glow = pygame.Surface(self.screen.get_size(), pygame.SRCALPHA)
            pygame.draw.lines(glow, (0, 255, 220, 60), False, pts, 7)
            self.screen.blit(glow, (0,0), special_flags=pygame.BLEND_ADD)
            pygame.draw.lines(self.screen, NEON_MINT, False, pts, max(2, cs // 5))

        if self.board.start is not None:
            self._draw_badge(self.board.start, BLUE, "S")
        if self.board.end is not None:
            self._draw_badge(self.board.end, RED, "E")

    def _draw_badge(self, cell: Cell, color: Tuple[int,int,int], letter: str):
        center = self._cell_rect(cell).center
        pygame.draw.circle(self.screen, color, center, max(3, self.cell_size//2 - 2))
        if self.cell_size >= 14:
            txt = self.font_small.render(letter, True, WHITE)
            self.screen.blit(txt, txt.get_rect(center=center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 230  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None):
            btn = UIButton(label, pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run (Space)", self.run_search); y += h + gap
        add("Clear Path (C)", self.clear_path); y += h + gap
        add("Reset Grid (R)", self.reset_grid); y += h + gap
        add("Random Obstacles (P)", self.add_random_obstacles); y += h + gap
        for i, algo in enumerate(Algorithm, start=1):
            add(f"{i}: {algo.label}", lambda a=algo: self.set_algorithm(a),
                togglable=True, store_as=f"btn_algo_{algo.value}")
            y += h + gap

        self._refresh_active_states()

    def _refresh_active_states(self):
        for algo in Algorithm:
            btn = getattr(self, f"btn_algo_{algo.value}", None)
            if btn is not None:
                btn.set_active(self.selected_algo == algo)

    def _state_label(self) -> str:
        if self.scheduler is not None and self.scheduler.active:
            return "Running"
        if self.last_result is None:
            return "Idle"
        return "Done" if self.last_result.success else "No path"

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 210
        card = pygame.Surface((rb.width - 20, card_h), pygame.SRCALPHA)
        pygame.draw.rect(card, CARD_BG, card.get_rect(), border_radius=14)
        hi = pygame.Surface((card.get_width(), 24), pygame.SRCALPHA)
        pygame.draw.rect(hi, CARD_HI, hi.get_rect(), border_radius=14)
        card.blit(hi, (0,0))
        self.screen.blit(card, (rb.x + 10, rb.y + 10))

        x0 = rb.x + 24
        y0 = rb.y + 18

        def line(text, big=False, color=TEXT_LIGHT):
            nonlocal y0
            f = self.font_big if big else self.font
            surf = f.render(text, True, color)
            self.screen.blit(surf, (x0, y0))
            y0 += surf.get_height() + 6

        info = animation_info(self.board.topology)
        # finalized-node count; matches nodes_explored once Done arrives
        m = self.session.metrics() if self.session else {}
        line("Metrics", big=True, color=ACCENT_GOLD)
        line(f"Algo: {m.get('algo', self.selected_algo.label)}")
        line(f"State: {self._state_label()}")
        line(f"Explored: {m.get('popped', 0)}")
        line(f"Frontier: {m.get('open_size', 0)}")
        line(f"Path Len: {m.get('path_len', 0)}")
        line(f"Grid: {info['grid_size']} ({info['total_cells']} cells)")
        line(f"Delay: {info['delay_ms']}ms, {info['update_frequency'].lower()}")

        for b in self._buttons:
            b.draw(self.screen, self.font)

    def _draw_help(self):
        w, h = self.screen.get_size()
        shade = pygame.Surface((w, h), pygame.SRCALPHA); shade.fill((0, 0, 0, 160))
        self.screen.blit(shade, (0, 0))
        y = h // 2 - (len(HELP_LINES) * 28) // 2
        title = self.font_big.render("Controls", True, ACCENT_GOLD)
        self.screen.blit(title, title.get_rect(center=(w // 2, y - 30)))
        for text in HELP_LINES:
            surf = self.font.render(text, True, TEXT_LIGHT)
            self.screen.blit(surf, surf.get_rect(center=(w // 2, y)))
            y += 28

    def _draw_message(self):
        if self._message is None:
            return
        text, kind, expires_at = self._message
        if pygame.time.get_ticks() >= expires_at:
            self._message = None
            return
        surf = self.font.render(text, True, WHITE)
        box = surf.get_rect(midbottom=(self.canvas_rect.centerx, self.screen.get_height() - 16)).inflate(24, 14)
        pill = pygame.Surface(box.size, pygame.SRCALPHA)
        pygame.draw.rect(pill, MSG_COLORS.get(kind, MSG_COLORS["info"]), pill.get_rect(), border_radius=10)
        self.screen.blit(pill, box.topleft)
        self.screen.blit(surf, surf.get_rect(center=box.center))


# ---------- main ----------
def main(argv=None):
    settings = resolve_settings(argv)
    setup_logging(settings)
    logger.info("Pathfinding visualizer: %dx%d grid, %s", settings.width, settings.height, settings.algorithm.label)
    Viewer(settings).run()


if __name__ == "__main__":
    main()
