"""
Pygame grid viewer: edit cells and waypoints, then pathfind through them.
"""

from __future__ import annotations
import logging
import pygame
from typing import Callable, Dict, List, Optional, Tuple

import numpy as np

from .config import (
    BACKGROUND_COLOR,
    BUTTON_COLOR,
    BUTTON_HEIGHT,
    BUTTON_SPACING,
    BUTTON_TEXT_COLOR,
    CELL_GAP,
    CELL_SIZE,
    DEFAULT_FILL,
    DEFAULT_GRID_HEIGHT,
    DEFAULT_GRID_WIDTH,
    EMPTY_BORDER_COLOR,
    EMPTY_COLOR,
    END_COLOR,
    FONT_SIZE,
    FPS,
    FULL_COLOR,
    GRID_MARGIN,
    MIN_VISIBLE_CELLS,
    PANEL_WIDTH,
    PATH_COLOR,
    START_COLOR,
    STATUS_COLORS,
    WAYPOINT_COLOR,
    WINDOW_TITLE,
)
from .editor_state import EditorState, Mode
from .grid import Grid
from .input_handler import InputHandler
from .point import Point

logger = logging.getLogger(__name__)

CELL_COLORS = {
    "start": START_COLOR,
    "end": END_COLOR,
    "waypoint": WAYPOINT_COLOR,
    "path": PATH_COLOR,
    "full": FULL_COLOR,
    "empty": EMPTY_COLOR,
}

# Side panel buttons, top to bottom: (label, action)
BUTTONS = (
    ("Pathfind!", "pathfind"),
    ("w/ Heuristic", "pathfind_heuristic"),
    ("Repopulate!", "repopulate"),
    ("Clear!", "clear"),
    ("New Grid!", "new_grid"),
    ("Next Waypoint", "select_next"),
    ("Set Waypoint", "set_waypoint"),
    ("Add Waypoint", "add_waypoint"),
    ("Delete Waypoint", "delete_waypoint"),
)


class Editor:
    """Window, drawing and main loop around an EditorState."""

    def __init__(
        self,
        grid: Optional[Grid] = None,
        rng: Optional[np.random.Generator] = None,
        clock: Optional[pygame.time.Clock] = None,
        fill: int = DEFAULT_FILL,
    ) -> None:
        pygame.init()
        if grid is None:
            grid = Grid(DEFAULT_GRID_WIDTH, DEFAULT_GRID_HEIGHT)
        self.state = EditorState(grid)
        # Random source for repopulation (injectable for testing)
        self.rng = rng if rng is not None else np.random.default_rng()
        # Number of cells filled by "Repopulate!"
        self.fill = fill
        # Size used by "New Grid!"
        self.new_width = grid.width
        self.new_height = grid.height
        self.screen = None
        self._resize()
        pygame.display.set_caption(WINDOW_TITLE)
        self.font = pygame.font.Font(None, FONT_SIZE)
        # Clock for frame rate (injectable for testing)
        self.clock = clock or pygame.time.Clock()
        self.fps = FPS
        self.input = InputHandler()
        self.running = True
        self._handlers: Dict[str, Callable[[], None]] = {
            "pathfind": lambda: self.state.pathfind(use_heuristic=False),
            "pathfind_heuristic": lambda: self.state.pathfind(use_heuristic=True),
            "repopulate": lambda: self.state.repopulate(self.fill, self.rng),
            "clear": self.clear_grid,
            "new_grid": self.new_grid,
            "set_waypoint": lambda: self.state.begin_set_waypoint(),
            "add_waypoint": lambda: self.state.add_waypoint(),
            "delete_waypoint": lambda: self.state.delete_waypoint(),
            "select_next": lambda: self.state.select_next(),
            "select_previous": lambda: self.state.select_previous(),
            "fill_up": lambda: self._adjust("fill", 10),
            "fill_down": lambda: self._adjust("fill", -10),
            "width_up": lambda: self._adjust("new_width", 1),
            "width_down": lambda: self._adjust("new_width", -1),
            "height_up": lambda: self._adjust("new_height", 1),
            "height_down": lambda: self._adjust("new_height", -1),
        }

    # Layout

    def window_size(self) -> Tuple[int, int]:
        """Window size for the current grid; never smaller than a 20x20 grid."""
        cols = max(self.state.grid.width, MIN_VISIBLE_CELLS)
        rows = max(self.state.grid.height, MIN_VISIBLE_CELLS)
        return (
            GRID_MARGIN * 2 + cols * CELL_SIZE + PANEL_WIDTH,
            GRID_MARGIN * 2 + rows * CELL_SIZE,
        )

    def _resize(self) -> None:
        self.screen = pygame.display.set_mode(self.window_size())

    def cell_rect(self, p: Point) -> pygame.Rect:
        return pygame.Rect(
            GRID_MARGIN + p.x * CELL_SIZE,
            GRID_MARGIN + p.y * CELL_SIZE,
            CELL_SIZE - CELL_GAP,
            CELL_SIZE - CELL_GAP,
        )

    def cell_at(self, pos: Tuple[int, int]) -> Optional[Point]:
        """Grid cell under window position `pos`, or None."""
        px, py = pos[0] - GRID_MARGIN, pos[1] - GRID_MARGIN
        if px < 0 or py < 0:
            return None
        p = Point(px // CELL_SIZE, py // CELL_SIZE)
        return p if self.state.grid.in_bounds(p) else None

    def button_rects(self) -> List[Tuple[pygame.Rect, str, str]]:
        """(rect, label, action) for each side panel button."""
        x = self.window_size()[0] - PANEL_WIDTH + GRID_MARGIN
        width = PANEL_WIDTH - GRID_MARGIN * 2
        rects = []
        for i, (label, action) in enumerate(BUTTONS):
            y = GRID_MARGIN + i * (BUTTON_HEIGHT + BUTTON_SPACING)
            rects.append((pygame.Rect(x, y, width, BUTTON_HEIGHT), label, action))
        return rects

    def button_at(self, pos: Tuple[int, int]) -> Optional[str]:
        for rect, _, action in self.button_rects():
            if rect.collidepoint(pos):
                return action
        return None

    # Actions

    def clear_grid(self) -> None:
        self.state.clear()
        logger.info("Cleared grid")

    def new_grid(self) -> None:
        self.state.new_grid(self.new_width, self.new_height)
        self._resize()

    def _adjust(self, name: str, delta: int) -> None:
        setattr(self, name, max(1, getattr(self, name) + delta))

    def perform(self, action: str) -> None:
        """Run the named editor action."""
        handler = self._handlers.get(action)
        if handler is None:
            logger.warning("Unknown editor action: %s", action)
            return
        handler()

    def handle_events(self) -> None:
        """Process input via InputHandler: quit, clicks and keyboard actions."""
        self.input.process_events()
        if self.input.should_quit():
            self.running = False
        for pos in self.input.get_clicks():
            cell = self.cell_at(pos)
            if cell is not None:
                self.state.click(cell)
                continue
            action = self.button_at(pos)
            if action is not None:
                self.perform(action)
        for action in self.input.get_actions():
            self.perform(action)

    # Drawing

    def _text(self, text: str, pos: Tuple[int, int], color=BUTTON_TEXT_COLOR) -> None:
        surface = self.font.render(text, True, color)
        self.screen.blit(surface, pos)

    def render(self) -> None:
        """Draw the grid, waypoint numbers and the side panel."""
        state = self.state
        self.screen.fill(BACKGROUND_COLOR)
        for y in range(state.grid.height):
            for x in range(state.grid.width):
                p = Point(x, y)
                rect = self.cell_rect(p)
                kind = state.cell_kind(p)
                pygame.draw.rect(self.screen, CELL_COLORS[kind], rect)
                if kind == "empty":
                    pygame.draw.rect(self.screen, EMPTY_BORDER_COLOR, rect, 1)
        # Number the waypoints between start and end
        for i in range(1, len(state.waypoints) - 1):
            rect = self.cell_rect(state.waypoints[i])
            self._text(str(i), (rect.x + 4, rect.y + 3))

        for rect, label, _ in self.button_rects():
            pygame.draw.rect(self.screen, BUTTON_COLOR, rect)
            self._text(label, (rect.x + 6, rect.y + 5))

        x = self.window_size()[0] - PANEL_WIDTH + GRID_MARGIN
        y = GRID_MARGIN + len(BUTTONS) * (BUTTON_HEIGHT + BUTTON_SPACING)
        selected = state.waypoint_label(state.selected)
        if state.mode is Mode.SETTING_WAYPOINT:
            selected += " (click a cell)"
        lines = (
            f"Waypoint: {selected}",
            f"Num. to fill: {self.fill}",
            f"New grid: {self.new_width}x{self.new_height}",
        )
        for line in lines:
            self._text(line, (x, y))
            y += FONT_SIZE + 4
        message, kind = state.status
        status_rect = pygame.Rect(x, y, PANEL_WIDTH - GRID_MARGIN * 2, BUTTON_HEIGHT)
        pygame.draw.rect(self.screen, STATUS_COLORS[kind], status_rect)
        if message:
            self._text(message, (status_rect.x + 6, status_rect.y + 5))
        pygame.display.flip()

    def run(self) -> None:
        """Main loop: handle events and redraw."""
        while self.running:
            self.clock.tick(self.fps)
            self.handle_events()
            self.render()
        pygame.quit()
