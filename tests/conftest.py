"""Shared fixtures for the game tests."""

import asyncio
from types import SimpleNamespace

import pytest

from snaky import constants
from snaky.errors import RenderError


def snapshot(board):
    return SimpleNamespace(
        is_paused=board.is_paused,
        errors=board.errors,
        head=board.head,
        length=board.length,
        score=board.score,
        round=board.round,
    )


class ScriptedRenderer:
    """
    Renderer double that records every rendered board.

    ``steps`` is a list of ``(condition, event)`` pairs; each event is pushed
    once ``condition(renderer)`` holds. ``fail_on`` lists 1-based render
    numbers that raise RenderError.
    """

    def __init__(self, steps=(), fail_on=(), listen_error=None):
        self.steps = list(steps)
        self.fail_on = set(fail_on)
        self.listen_error = listen_error
        self.renders = []
        self.attempts = 0

    @property
    def last(self):
        return self.renders[-1]

    async def listen(self, events):
        if self.listen_error is not None:
            raise self.listen_error
        for condition, event in self.steps:
            while not condition(self):
                await asyncio.sleep(0.001)
            await events.put(event)

    async def render(self, board):
        self.attempts += 1
        if self.attempts in self.fail_on:
            raise RenderError(f"render {self.attempts} failed")
        self.renders.append(snapshot(board))


def rendered(count):
    return lambda r: len(r.renders) >= count


def after_error(r):
    return bool(r.renders) and bool(r.last.errors)


@pytest.fixture
def fast_ticks(monkeypatch):
    """Shrink the tick delays so loop tests run quickly."""
    for name in constants.SPEED_DELAYS:
        monkeypatch.setitem(constants.SPEED_DELAYS, name, 0.001)


def paused_with_error(r):
    return bool(r.renders) and bool(r.last.errors) and r.last.is_paused
