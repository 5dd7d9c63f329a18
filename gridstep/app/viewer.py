#!/usr/bin/env python3
"""
Grid Search Viewer — Controls + Metrics

- Keyboard:
    [B]/[D]/[A]  -> select algorithm (BFS / Dijkstra / A*)
    [SPACE]      -> run/pause
    [N]          -> single step
    [R]          -> reset (same grid)
    [G]          -> new random grid
    [W]          -> toggle weighted random grids
    [ [ ]/[ ] ]  -> grid size -/+
    [1]..[9]     -> load bundled map
    [+]/[-]      -> steps/sec
    [Q]/[ESC]    -> quit

Settings come from GRIDSTEP_* environment variables and the command line
(see gridstep.config).
"""

import sys
import time
from typing import Dict, List, Optional, Tuple

import pygame

from gridstep.app.run import make_grid
from gridstep.config import MAX_SIZE, MIN_SIZE, Settings, load_settings
from gridstep.core.algorithms import make_algo
from gridstep.core.maps import MapFormatError, bundled_maps, load_map, random_grid
from gridstep.core.stepper import StepEngine
from gridstep.core.types import Cell, Grid, GridError, Status

# ---------- Config ----------
PANEL_W = 360            # right band: metrics + buttons
GRID_MARGIN = 16
CELL_SIZE_DEFAULT = 28
FONT_NAME = None  # default pygame font

ALGO_LABELS = {"bfs": "BFS", "dijkstra": "Dijkstra", "astar": "A*"}

# Colors
WHITE       = (255,255,255)
BLACK       = (  0,  0,  0)
WALL_BLUE   = ( 52, 73, 94)
START_GREEN = ( 46,204,113)
GOAL_RED    = (231, 76, 60)
FLOOR       = (236,240,241)
CURRENT     = ( 52,152,219)
CLOSED_A    = (189,195,199,170)
OPEN_A      = (241,196, 15,120)
PATH_COLOR  = (155, 89,182)

CARD_BG     = (24,28,36,220)
CARD_HI     = (255,255,255,18)
TEXT_LIGHT  = (230,235,240)
ACCENT_GOLD = (255,210,0)


def cost_shade(cost: int, max_cost: int) -> Tuple[int,int,int]:
    """Darker floor for more expensive cells."""
    t = 0.0 if max_cost <= 1 else (cost - 1) / (max_cost - 1)
    return tuple(int(c - (c - 120) * t) for c in FLOOR)


# ---------- Simple UI Button ----------
class UIButton:
    def __init__(self, label: str, rect: pygame.Rect, callback, *, togglable: bool = False):
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

    def handle_mouse(self, event: pygame.event.Event):
        if event.type == pygame.MOUSEMOTION:
            self.hover = self.rect.collidepoint(event.pos)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self.callback()


# ---------- Viewer ----------
class Viewer:
    def __init__(self, settings: Settings, grid: Grid):
        pygame.init()

        self.settings = settings
        self.grid = grid
        self.grid_size = settings.grid_size
        self.weighted = settings.weighted
        self.maps = bundled_maps()
        self.selected_map_key: Optional[str] = None

        self.font_small = pygame.font.Font(FONT_NAME, 14)
        self.font = pygame.font.Font(FONT_NAME, 18)
        self.font_big = pygame.font.Font(FONT_NAME, 22)

        self.cell_size = self._auto_cell_size(grid)
        grid_px_w = GRID_MARGIN*2 + grid.width * self.cell_size
        grid_px_h = GRID_MARGIN*2 + grid.height* self.cell_size
        win_w = grid_px_w + PANEL_W
        win_h = max(grid_px_h, 620)

        self.screen = pygame.display.set_mode((win_w, win_h), pygame.RESIZABLE)
        pygame.display.set_caption("Grid Search — step by step")

        self.open_set: set = set()
        self.closed_set: set = set()
        self.current: Optional[Cell] = None
        self.path: List[Cell] = []

        self.running = False
        self.clock = pygame.time.Clock()
        self.steps_per_sec = settings.steps_per_sec
        self.state = "Idle"
        self.selected_algo = settings.algorithm
        self._last_step_t = 0.0

        # buttons BEFORE layout (so layout can place them)
        self._buttons: List[UIButton] = []
        self._layout(win_w, win_h)

        self.algo = self._make_algo(self.selected_algo)
        self._reset_overlays()

    # ---------- layout ----------
    def _layout(self, win_w: int, win_h: int):
        """Compute integer cell_size that fits window and center the grid."""
        avail_w = max(1, win_w - PANEL_W - 2 * GRID_MARGIN)
        avail_h = max(1, win_h - 2 * GRID_MARGIN)

        cs_by_w = avail_w // self.grid.width
        cs_by_h = avail_h // self.grid.height
        self.cell_size = int(max(6, min(cs_by_w, cs_by_h)))

        grid_plate_w = self.grid.width  * self.cell_size + 2 * GRID_MARGIN
        grid_plate_h = self.grid.height * self.cell_size + 2 * GRID_MARGIN

        left_x = max(0, (win_w - (grid_plate_w + PANEL_W)) // 2)
        top_y  = max(0, (win_h - grid_plate_h) // 2)

        self.canvas_rect = pygame.Rect(left_x, top_y, grid_plate_w, grid_plate_h)
        self._grid_origin = (self.canvas_rect.x + GRID_MARGIN,
                             self.canvas_rect.y + GRID_MARGIN)
        self._right_band = pygame.Rect(self.canvas_rect.right, 0,
                                       max(PANEL_W, win_w - self.canvas_rect.right),
                                       win_h)
        self._build_buttons()

    def _auto_cell_size(self, grid: Grid) -> int:
        target_h = 720 - GRID_MARGIN*2
        return max(10, min(CELL_SIZE_DEFAULT, target_h // max(grid.width, grid.height)))

    # ---------- loop ----------
    def run(self):
        while True:
            self._handle_events()
            if self.running:
                self._tick_algorithm()
            self._draw()
            self.clock.tick(60)

    def _tick_algorithm(self):
        t0 = time.time()
        step_interval = 1.0 / max(1, self.steps_per_sec)
        if t0 - self._last_step_t >= step_interval:
            self._last_step_t = t0
            self._do_step()

    def _do_step(self):
        res = self.algo.step()
        if res.current is not None:
            self.current = res.current
        for c in res.opened: self.open_set.add(c)
        for c in res.closed:
            self.closed_set.add(c)
            self.open_set.discard(c)
        if res.path is not None: self.path = res.path
        if res.status == Status.DONE:
            self.state = "Done"; self.running = False
        elif res.status == Status.NO_PATH:
            self.state = "No path"; self.running = False
        else:
            self.state = "Running" if self.running else "Paused"
        if res.metrics:
            self._last_metrics = res.metrics
        self._refresh_active_states()

    def _handle_events(self):
        for e in pygame.event.get():
            if e.type == pygame.QUIT:
                pygame.quit(); sys.exit(0)
            elif e.type == pygame.KEYDOWN:
                if e.key in (pygame.K_ESCAPE, pygame.K_q):
                    pygame.quit(); sys.exit(0)
                elif e.key == pygame.K_SPACE:
                    self._toggle_run()
                elif e.key == pygame.K_r:
                    self._reset()
                elif e.key == pygame.K_n:
                    self._do_step()
                elif e.key == pygame.K_g:
                    self._new_grid()
                elif e.key == pygame.K_w:
                    self._toggle_weighted()
                elif e.key == pygame.K_LEFTBRACKET:
                    self._bump_size(-5)
                elif e.key == pygame.K_RIGHTBRACKET:
                    self._bump_size(+5)
                elif e.key in (pygame.K_PLUS, pygame.K_EQUALS):
                    self._bump_speed(+1)
                elif e.key in (pygame.K_MINUS, pygame.K_UNDERSCORE):
                    self._bump_speed(-1)
                elif e.key == pygame.K_b:
                    self._switch_algo("bfs")
                elif e.key == pygame.K_d:
                    self._switch_algo("dijkstra")
                elif e.key == pygame.K_a:
                    self._switch_algo("astar")
                elif pygame.K_1 <= e.key <= pygame.K_9:
                    keys = list(self.maps)
                    idx = e.key - pygame.K_1
                    if idx < len(keys):
                        self._switch_map(keys[idx])
            elif e.type == pygame.VIDEORESIZE:
                self.screen = pygame.display.set_mode((max(640, e.w), max(480, e.h)), pygame.RESIZABLE)
                self._layout(*self.screen.get_size())
            elif e.type in (pygame.MOUSEMOTION, pygame.MOUSEBUTTONDOWN):
                for b in self._buttons:
                    b.handle_mouse(e)

    # ---------- algorithm / grid switching ----------
    def _make_algo(self, key: str) -> StepEngine:
        algo = make_algo(key, trace_memory=self.settings.trace_memory)
        algo.init(self.grid)
        return algo

    def _set_grid(self, grid: Grid) -> bool:
        try:
            algo = make_algo(self.selected_algo, trace_memory=self.settings.trace_memory)
            algo.init(grid)
        except GridError as ex:
            print(f"Grid rejected by {ALGO_LABELS[self.selected_algo]}: {ex}")
            return False
        self.grid = grid
        self.algo = algo
        self.running = False; self.state = "Idle"
        self._reset_overlays()
        self._layout(*self.screen.get_size())
        self._refresh_active_states()
        return True

    def _switch_map(self, key: str):
        if key not in self.maps: return
        try:
            grid = load_map(self.maps[key])
        except (OSError, MapFormatError) as ex:
            print(f"Failed to load map {key}: {ex}")
            return
        if self._set_grid(grid):
            self.selected_map_key = key
            pygame.display.set_caption(f"Grid Search — {key}")

    def _new_grid(self):
        try:
            grid = random_grid(self.grid_size, self.settings.wall_ratio, self.weighted,
                               self.settings.max_cost)
        except GridError as ex:
            print(f"Failed to make grid: {ex}")
            return
        if self._set_grid(grid):
            self.selected_map_key = None
            pygame.display.set_caption("Grid Search — random grid")

    def _switch_algo(self, key: str):
        self.selected_algo = key
        self.algo = self._make_algo(key)
        self.running = False; self.state = "Idle"
        self._reset_overlays()
        self._refresh_active_states()

    def _reset_overlays(self):
        self.open_set.clear()
        self.closed_set.clear()
        self.current = None
        self.path = []
        self._last_metrics = {
            "algo": ALGO_LABELS[self.selected_algo],
            "popped": 0,
            "open_size": 0,
            "closed_count": 0,
            "path_len": 0,
            "total_cost": None,
            "steps": 0,
            "elapsed_ns": 0,
            "memory_delta_bytes": 0,
        }

    def _reset(self):
        self.running = False
        self.state = "Idle"
        self.algo.reset()
        self._reset_overlays()
        self._refresh_active_states()

    def _toggle_run(self):
        if self.state in ("Done", "No path"):
            return
        self.running = not self.running
        self.state = "Running" if self.running else "Paused"
        self._refresh_active_states()

    def _toggle_weighted(self):
        self.weighted = not self.weighted
        self._new_grid()

    def _bump_speed(self, dv: int):
        self.steps_per_sec = int(max(1, min(60, self.steps_per_sec + dv)))

    def _bump_size(self, dv: int):
        self.grid_size = int(max(MIN_SIZE, min(MAX_SIZE, self.grid_size + dv)))
        self._new_grid()

    # ---------- drawing ----------
    def _draw(self):
        self.screen.fill((24, 26, 32))
        self._draw_grid()
        self._draw_metrics_and_buttons()
        pygame.display.flip()

    def _cell_rect(self, c: Cell) -> pygame.Rect:
        cs = self.cell_size
        ox, oy = self._grid_origin
        col, row = c
        return pygame.Rect(ox + col*cs, oy + row*cs, cs, cs)

    def _draw_grid(self):
        cs = self.cell_size
        max_cost = self.settings.max_cost
        overlay_closed = pygame.Surface((cs, cs), pygame.SRCALPHA); overlay_closed.fill(CLOSED_A)
        overlay_open = pygame.Surface((cs, cs), pygame.SRCALPHA); overlay_open.fill(OPEN_A)

        for row in range(self.grid.height):
            for col in range(self.grid.width):
                c = (col, row)
                rect = self._cell_rect(c)
                if self.grid.is_block(c):
                    pygame.draw.rect(self.screen, WALL_BLUE, rect)
                elif self.grid.weighted:
                    pygame.draw.rect(self.screen, cost_shade(self.grid.cost(c), max_cost), rect)
                else:
                    pygame.draw.rect(self.screen, FLOOR, rect)

                if c in self.closed_set:
                    self.screen.blit(overlay_closed, rect.topleft)
                elif c in self.open_set:
                    self.screen.blit(overlay_open, rect.topleft)

                pygame.draw.rect(self.screen, BLACK, rect, 1)

                if self.grid.weighted and cs >= 18 and not self.grid.is_block(c):
                    txt = self.font_small.render(str(self.grid.cost(c)), True, (60, 60, 60))
                    self.screen.blit(txt, txt.get_rect(center=rect.center))

        if self.current is not None and not self.path:
            pygame.draw.rect(self.screen, CURRENT, self._cell_rect(self.current).inflate(-4, -4))

        if len(self.path) >= 2:
            pts = [self._cell_rect(c).center for c in self.path]
            pygame.draw.lines(self.screen, PATH_COLOR, False, pts, max(3, cs // 5))

        self._draw_badge(self.algo.start_cell, START_GREEN, "S")
        self._draw_badge(self.algo.goal_cell, GOAL_RED, "G")

    def _draw_badge(self, cell: Optional[Cell], color: Tuple[int,int,int], label: str):
        if cell is None:
            return
        rect = self._cell_rect(cell)
        pygame.draw.circle(self.screen, color, rect.center, max(4, self.cell_size//2 - 2))
        txt = self.font_small.render(label, True, WHITE)
        self.screen.blit(txt, txt.get_rect(center=rect.center))

    # ---------- buttons + metrics ----------
    def _build_buttons(self):
        self._buttons.clear()
        rb = self._right_band
        x = rb.x + 16
        y = rb.y + 300  # leaves space for metrics card above
        w = max(160, rb.width - 32)
        h = 34
        gap = 8
        half = (w - 8) // 2

        def add(label, cb, *, togglable=False, store_as: Optional[str] = None, rect=None):
            btn = UIButton(label, rect or pygame.Rect(x, y, w, h), cb, togglable=togglable)
            self._buttons.append(btn)
            if store_as:
                setattr(self, store_as, btn)

        add("Run / Pause", self._toggle_run, togglable=True, store_as="btn_run"); y += h + gap
        add("Step Once", self._do_step, rect=pygame.Rect(x, y, half, h))
        add("Reset", self._reset, rect=pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Speed −", lambda: self._bump_speed(-1), rect=pygame.Rect(x, y, half, h))
        add("Speed +", lambda: self._bump_speed(+1), rect=pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("Size −", lambda: self._bump_size(-5), rect=pygame.Rect(x, y, half, h))
        add("Size +", lambda: self._bump_size(+5), rect=pygame.Rect(x + half + 8, y, half, h)); y += h + gap
        add("New Grid", self._new_grid, rect=pygame.Rect(x, y, half, h))
        add("Weighted", self._toggle_weighted, togglable=True, store_as="btn_weighted",
            rect=pygame.Rect(x + half + 8, y, half, h)); y += h + gap

        third = (w - 16) // 3
        for i, key in enumerate(ALGO_LABELS):
            add(ALGO_LABELS[key], lambda k=key: self._switch_algo(k), togglable=True,
                store_as=f"btn_algo_{key}", rect=pygame.Rect(x + i * (third + 8), y, third, h))

        self._refresh_active_states()

    def _refresh_active_states(self):
        if hasattr(self, "btn_run"):
            self.btn_run.set_active(self.running)
        if hasattr(self, "btn_weighted"):
            self.btn_weighted.set_active(self.weighted)
        for key in ALGO_LABELS:
            btn = getattr(self, f"btn_algo_{key}", None)
            if btn is not None:
                btn.set_active(getattr(self, "selected_algo", None) == key)

    def _draw_metrics_and_buttons(self):
        rb = self._right_band

        card_h = 280
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

        m: Dict = self._last_metrics
        line(f"{ALGO_LABELS[self.selected_algo]} — {self.state}", big=True, color=ACCENT_GOLD)
        line(f"Steps: {m.get('steps', 0)}")
        line(f"Popped: {m.get('popped', 0)}")
        line(f"Open: {m.get('open_size', 0)}   Closed: {m.get('closed_count', 0)}")
        line(f"Time: {m.get('elapsed_ns', 0) / 1e6:.3f} ms")
        line(f"Memory: {m.get('memory_delta_bytes', 0) / 1024:.1f} KiB")
        line(f"Path Len: {m.get('path_len', 0)}")
        if m.get("total_cost", None) is not None:
            line(f"Total Cost: {m['total_cost']}")
        line("-" * 26)
        where = self.selected_map_key or f"random {self.grid.width}x{self.grid.height}"
        line(f"Grid: {where}")
        line(f"Speed: {self.steps_per_sec} steps/s")

        for b in self._buttons:
            b.draw(self.screen, self.font)


# ---------- main ----------
def main(argv: Optional[List[str]] = None):
    try:
        settings = load_settings(argv, description="Step-by-step grid search viewer")
    except ValueError as ex:
        print(f"Bad settings: {ex}")
        sys.exit(2)
    try:
        grid = make_grid(settings)
    except (OSError, GridError) as ex:
        print(f"Failed to load map {settings.map_path}: {ex}")
        sys.exit(1)
    try:
        Viewer(settings, grid).run()
    except GridError as ex:
        print(f"Grid rejected: {ex}")
        sys.exit(1)


if __name__ == "__main__":
    main()
