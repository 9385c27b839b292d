"""
Input handling abstraction to decouple Pygame input from editor logic.
"""

from __future__ import annotations
import pygame
from typing import List, Tuple

# Keyboard shortcuts: key -> editor action
KEY_ACTIONS = {
    pygame.K_RETURN: "pathfind",
    pygame.K_h: "pathfind_heuristic",
    pygame.K_r: "repopulate",
    pygame.K_c: "clear",
    pygame.K_n: "new_grid",
    pygame.K_w: "set_waypoint",
    pygame.K_a: "add_waypoint",
    pygame.K_DELETE: "delete_waypoint",
    pygame.K_BACKSPACE: "delete_waypoint",
    pygame.K_TAB: "select_next",
    pygame.K_EQUALS: "fill_up",
    pygame.K_PLUS: "fill_up",
    pygame.K_KP_PLUS: "fill_up",
    pygame.K_MINUS: "fill_down",
    pygame.K_KP_MINUS: "fill_down",
    pygame.K_RIGHT: "width_up",
    pygame.K_LEFT: "width_down",
    pygame.K_DOWN: "height_up",
    pygame.K_UP: "height_down",
}


class InputHandler:
    """
    Gathers one frame of input. Processes Pygame events and exposes the
    quit request, left-click positions and keyboard actions.
    """

    def __init__(self) -> None:
        self._quit = False
        # Window pixel positions of left clicks this frame
        self._clicks: List[Tuple[int, int]] = []
        self._actions: List[str] = []

    def process_events(self) -> None:
        """
        Poll Pygame events and update the quit flag, clicks and actions for
        this frame.
        """
        self._quit = False
        self._clicks = []
        self._actions = []
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self._quit = True
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self._quit = True
                elif event.key == pygame.K_TAB and (
                    event.mod & pygame.KMOD_SHIFT
                ):
                    self._actions.append("select_previous")
                elif event.key in KEY_ACTIONS:
                    self._actions.append(KEY_ACTIONS[event.key])
            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self._clicks.append(tuple(event.pos))

    def should_quit(self) -> bool:
        """Return True if a quit command was issued this frame."""
        return self._quit

    def get_clicks(self) -> List[Tuple[int, int]]:
        """Return window positions of left clicks this frame."""
        return list(self._clicks)

    def get_actions(self) -> List[str]:
        """Return keyboard actions triggered this frame, in order."""
        return list(self._actions)
