"""Curses renderer: draws the board in the terminal and reads the keyboard."""

import asyncio
import curses
import logging

from .board import Board
from .constants import GRID_ORIGIN, PANEL_WIDTH
from .errors import InputError, RenderError
from .models import Event, Icon

logger = logging.getLogger(__name__)

KEY_ESC = 27
KEY_CTRL_C = 3
POLL_INTERVAL = 0.01

KEY_EVENTS = {
    curses.KEY_UP: Event.MOVE_UP,
    curses.KEY_DOWN: Event.MOVE_DOWN,
    curses.KEY_LEFT: Event.MOVE_LEFT,
    curses.KEY_RIGHT: Event.MOVE_RIGHT,
    ord("p"): Event.PAUSE,
    ord("s"): Event.START,
    ord("r"): Event.RESTART,
    ord("q"): Event.QUIT,
    KEY_ESC: Event.QUIT,
    KEY_CTRL_C: Event.QUIT,
}

ICON_CHARS = {
    Icon.SNAKE_HEAD: ("o", curses.A_BOLD),
    Icon.SNAKE_BODY: ("x", curses.A_NORMAL),
    Icon.FOOD: ("*", curses.A_BOLD),
}


def key_event(key: int):
    """Map a curses key code to a game event, None when unbound."""
    if 0 < key < 256 and chr(key).isupper():
        key = ord(chr(key).lower())
    return KEY_EVENTS.get(key)


class TerminalRenderer:
    def __init__(self, screen):
        self.screen = screen
        self.closed = False
        curses.curs_set(0)
        curses.raw()
        self.screen.keypad(True)
        self.screen.nodelay(True)

    async def listen(self, events: asyncio.Queue):
        while not self.closed:
            try:
                key = self.screen.getch()
            except curses.error as err:
                raise InputError(f"reading keyboard failed: {err}") from err

            if key == -1:
                await asyncio.sleep(POLL_INTERVAL)
                continue

            event = key_event(key)
            if event is None:
                continue
            await events.put(event)
            if event is Event.QUIT:
                return

    async def render(self, board: Board):
        try:
            self.screen.erase()
            self.draw(board)
            self.screen.refresh()
        except curses.error as err:
            raise RenderError(f"drawing failed, is the terminal large enough? ({err})") from err

    def close(self):
        self.closed = True

    def draw(self, b: Board):
        ox, oy = GRID_ORIGIN
        title_height = 2
        game_width = 1 + b.width + PANEL_WIDTH + 1
        game_height = 2 + b.height + 1
        px, py = 1 + b.width + 1, title_height + 1

        scr = self.screen
        scr.hline(0, 0, curses.ACS_HLINE, game_width)
        scr.hline(title_height, 0, curses.ACS_HLINE, game_width)
        scr.hline(game_height, 0, curses.ACS_HLINE, game_width)
        scr.vline(0, 0, curses.ACS_VLINE, game_height)
        scr.vline(0, game_width, curses.ACS_VLINE, game_height)
        scr.vline(py, px, curses.ACS_VLINE, b.height)
        scr.addch(0, 0, curses.ACS_ULCORNER)
        scr.addch(game_height, 0, curses.ACS_LLCORNER)
        scr.addch(0, game_width, curses.ACS_URCORNER)
        scr.addch(game_height, game_width, curses.ACS_LRCORNER)

        scr.addstr(1, game_width // 2 - 5, "Snaky Game")

        hi, hj = b.head.coord()
        panel = [
            (1, f"Size: {b.width} x {b.height}"),
            (2, f"Speed: {b.speed.value}"),
            (3, f"Head: {hi} x {hj}"),
            (5, f"Round: {b.round}"),
            (6, f"Score: {b.score}"),
            (7, f"Length: {b.length}"),
            (9, "Arrow: move"),
            (10, "P: pause  S: start"),
            (11, "R: restart"),
            (12, "ESC: quit"),
        ]
        for row, text in panel:
            scr.addstr(py + row, px + 2, text)

        mid = game_height // 2
        if b.errors:
            self.center(b, mid, b.errors)
            self.center(b, mid + 2, 'press "R" to restart')
            self.center(b, mid + 3, 'or "ESC" to quit')
            return

        if b.is_paused:
            self.center(b, mid, "game paused")
            self.center(b, mid + 2, 'press "S" to start')
            self.center(b, mid + 3, 'or "ESC" to quit')
            return

        # snake and food only while running
        for i, column in enumerate(b.grid):
            for j, icon in enumerate(column):
                if icon is None:
                    continue
                ch, attr = ICON_CHARS[icon]
                scr.addstr(j + oy, i + ox, ch, attr)

    def center(self, b: Board, row: int, text: str):
        self.screen.addstr(row, max(1, (b.width - len(text)) // 2 + 1), text)
