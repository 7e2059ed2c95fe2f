"""Core game state and logic."""

import asyncio
import logging
import random
from typing import Any, Awaitable, Optional, Protocol

from .board import Board
from .constants import FOOD_SCORE, MIN_GRID_H, MIN_GRID_W
from .errors import BoardCleared, InputError, MoveError, SnakeBite, SnakyError, WallHit
from .models import Cell, Direction, Event, Food, Snake, Speed

logger = logging.getLogger(__name__)


class Renderer(Protocol):
    """Draws board snapshots and turns raw input into game events."""

    async def listen(self, events: "asyncio.Queue[Event]") -> None:
        """Push events until the player quits. Raises InputError on input failure."""

    async def render(self, board: Board) -> None:
        """Draw the board. Raises RenderError on failure; must not mutate the board."""


class Game:
    """
    Runs a single snake game.

    Three tasks cooperate while the game runs: the renderer's listener pushes
    events into ``events``, the router applies them under ``lock``, and the
    tick loop in ``run`` moves the snake, paints the board and hands it to the
    renderer. While paused the tick loop waits on ``hold`` until a start,
    restart or quit releases it. Quit sets ``quit``, which every wait observes.
    """

    def __init__(
        self,
        width: int,
        height: int,
        speed: Speed,
        renderer: Renderer,
        rng: Optional[random.Random] = None,
    ):
        if renderer is None:
            raise ValueError("a renderer is required")
        if width < MIN_GRID_W or height < MIN_GRID_H:
            raise ValueError(
                f"board must be at least {MIN_GRID_W}x{MIN_GRID_H}, got {width}x{height}"
            )

        self.width = width
        self.height = height
        self.speed = speed
        self.ui = renderer
        # seeded once; food placement draws from it
        self.rng = rng if rng is not None else random.Random()

        self.snake = Snake.create()
        self.food = Food.create()
        self.board = Board.create(width, height, self.snake, self.food, speed)
        self.paused = True

        self.lock = asyncio.Lock()
        self.events: asyncio.Queue = asyncio.Queue(maxsize=1)
        self.hold: asyncio.Queue = asyncio.Queue(maxsize=1)
        self.quit = asyncio.Event()

        self._listener: Optional[asyncio.Task] = None
        self._router: Optional[asyncio.Task] = None

    @property
    def cancelled(self) -> bool:
        return self.quit.is_set()

    async def run(self) -> None:
        """Play until the player quits.

        Returns None on quit. Raises when the listener fails or when the board
        cannot be drawn after a successful move.
        """
        self._listener = asyncio.create_task(self.ui.listen(self.events), name="snaky-listen")
        self._router = asyncio.create_task(self.route_events(), name="snaky-router")

        try:
            self.board.paint(self.snake, self.food)
            await self.ui.render(self.board)

            while True:
                if self.cancelled:
                    self._drain()
                    logger.info("game stopped, score %d", self.board.score)
                    return None

                self._check_listener()

                if self.paused:
                    self.board.is_paused = True
                    if not await self._try_draw():
                        await self._force_pause()
                        continue
                    await self._until_quit(self.hold.get(), watch_listener=True)
                    continue

                try:
                    async with self.lock:
                        self.move_snake()
                except MoveError as err:
                    logger.info("move failed: %s", err)
                    self.board.errors = str(err)
                    await self._try_draw()
                    await self._force_pause()
                    continue

                self.board.is_paused = False
                self.board.paint(self.snake, self.food)
                await self.ui.render(self.board)

                await self._until_quit(asyncio.sleep(self.speed.delay))
        except BaseException:
            self.quit.set()
            raise
        finally:
            await self._stop_tasks()

    async def send(self, event: Event):
        """Queue an event for the router. Does nothing once the game has quit."""
        await self._until_quit(self.events.put(Event(event)))

    async def route_events(self):
        while not self.cancelled:
            done, event = await self._until_quit(self.events.get())
            if not done:
                return
            await self.handle(event)

    async def handle(self, event: Any):
        try:
            event = Event(event)
        except ValueError:
            logger.debug("ignoring unknown event %r", event)
            return

        async with self.lock:
            if event is Event.QUIT:
                logger.info("quit")
                self.paused = False
                self._release()
                self.quit.set()
            elif event is Event.RESTART:
                logger.info("restart")
                self.paused = False
                self._release()
                self.restart()
            elif event is Event.PAUSE:
                self.paused = True
            elif event is Event.START:
                self.paused = False
                self._release()
            else:
                self.turn(event.direction)

    def turn(self, direction: Direction):
        # only quarter turns are allowed, never straight on or straight back
        if direction.horizontal == self.snake.heading.horizontal:
            return
        self.snake.heading = direction
        self.board.round += 1

    def restart(self):
        self.snake = Snake.create()
        self.food = Food.create()
        self.board = Board.create(self.width, self.height, self.snake, self.food, self.speed)

    def move_snake(self):
        """
        Move the snake one cell along its heading.

        A new head is appended on the next cell and the tail is dropped, unless
        the food was eaten, in which case the tail stays and the snake grows.
        The snake is left untouched when the step hits a wall or the body.
        """
        head = self.snake.head().offset(self.snake.heading)

        if not (0 <= head.i < self.width and 0 <= head.j < self.height):
            raise WallHit()

        # the current head is the only cell the new head cannot reach
        if head in self.snake.body[:-1]:
            raise SnakeBite()

        ate = head == self.food.cell
        if not ate:
            self.snake.body.pop(0)
        self.snake.body.append(head)

        if ate:
            self.board.score += FOOD_SCORE
            self.food.cell = self.place_food()

    def place_food(self) -> Cell:
        """Pick a random free cell for the food.

        Raises BoardCleared when the snake covers the whole board.
        """
        if self.snake.length() >= self.width * self.height:
            raise BoardCleared()

        while True:
            cell = Cell(self.rng.randrange(self.width), self.rng.randrange(self.height))
            if cell != self.food.cell and not self.snake.is_on_body(cell):
                return cell

    async def _try_draw(self) -> bool:
        try:
            self.board.paint(self.snake, self.food)
            await self.ui.render(self.board)
        except SnakyError as err:
            logger.warning("could not draw the board: %s", err)
            return False
        return True

    async def _force_pause(self):
        await self.send(Event.PAUSE)
        # let the router apply it before the next tick
        await asyncio.sleep(0)

    def _release(self):
        # one pending release is enough to wake the tick loop
        if self.hold.empty():
            self.hold.put_nowait(None)

    def _check_listener(self):
        if self._listener is None or not self._listener.done() or self._listener.cancelled():
            return
        err = self._listener.exception()
        if err is None:
            return
        if isinstance(err, SnakyError):
            raise err
        raise InputError(f"input failed: {err}") from err

    async def _until_quit(self, aw: Awaitable, watch_listener: bool = False) -> tuple[bool, Any]:
        """Await ``aw`` unless the game quits first.

        Returns ``(True, result)`` when ``aw`` finished and ``(False, None)``
        otherwise. With ``watch_listener`` a failing listener also ends the wait.
        """
        task = asyncio.ensure_future(aw)
        stop = asyncio.ensure_future(self.quit.wait())

        try:
            while True:
                waiters = {task, stop}
                if watch_listener and self._listener is not None and not self._listener.done():
                    waiters.add(self._listener)
                done, _ = await asyncio.wait(waiters, return_when=asyncio.FIRST_COMPLETED)
                if task in done or stop in done:
                    break
                # a listener that returned cleanly keeps the wait going
                if self._listener.cancelled() or self._listener.exception() is not None:
                    break
        finally:
            for waiter in (task, stop):
                if not waiter.done():
                    waiter.cancel()

        if task.done() and not task.cancelled():
            return True, task.result()
        return False, None

    def _drain(self):
        for queue in (self.events, self.hold):
            while not queue.empty():
                queue.get_nowait()

    async def _stop_tasks(self):
        tasks = [t for t in (self._router, self._listener) if t is not None]
        for task in tasks:
            if not task.done():
                task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
