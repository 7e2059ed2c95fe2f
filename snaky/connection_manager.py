"""WebSocket connection management and board serialization."""

import json
import logging

from fastapi import WebSocket, WebSocketDisconnect

from .board import Board
from .models import Icon

logger = logging.getLogger(__name__)


class ConnectionManager:
    def __init__(self):
        self.connections: set[WebSocket] = set()

    async def connect(self, ws: WebSocket):
        await ws.accept()
        self.connections.add(ws)

    def disconnect(self, ws: WebSocket):
        self.connections.discard(ws)

    async def broadcast(self, message: str):
        disconnected = []
        for ws in list(self.connections):
            try:
                await ws.send_text(message)
            except (WebSocketDisconnect, RuntimeError, OSError) as err:
                logger.info("dropping websocket: %s", err)
                disconnected.append(ws)
        for ws in disconnected:
            self.connections.discard(ws)

    async def send_personal(self, ws: WebSocket, message: str):
        await ws.send_text(message)


def cells_of(board: Board, icon: Icon) -> list[list[int]]:
    return [
        [i, j]
        for i, column in enumerate(board.grid)
        for j, value in enumerate(column)
        if value == icon
    ]


def build_state_msg(board: Board) -> str:
    heads = cells_of(board, Icon.SNAKE_HEAD)
    return json.dumps({
        "type": "state",
        "grid": [board.width, board.height],
        "round": board.round,
        "score": board.score,
        "length": board.length,
        "speed": board.speed.value,
        "head": list(board.head.coord()),
        "food": list(board.food.coord()),
        "paused": board.is_paused,
        "errors": board.errors,
        "snake_head": heads[0] if heads else None,
        "snake_body": cells_of(board, Icon.SNAKE_BODY),
        "food_cells": cells_of(board, Icon.FOOD),
    })
