"""FastAPI application: serves the browser client and streams the board over a WebSocket."""

import asyncio
import json
import logging
import os
from typing import Optional

import uvicorn
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from .board import Board
from .connection_manager import ConnectionManager, build_state_msg
from .constants import WEB_HOST, WEB_PORT
from .models import Event

logger = logging.getLogger(__name__)

static_dir = os.path.join(os.path.dirname(os.path.abspath(__file__)), "static")
HTML_PATH = os.path.join(static_dir, "index.html")


def create_app(renderer: "WebRenderer") -> FastAPI:
    app = FastAPI()
    app.mount("/static", StaticFiles(directory=static_dir), name="static")

    @app.get("/")
    async def serve_index():
        return FileResponse(HTML_PATH, media_type="text/html")

    @app.websocket("/ws")
    async def websocket_endpoint(ws: WebSocket):
        await renderer.manager.connect(ws)
        try:
            # late joiners see the current board straight away
            if renderer.last_state is not None:
                await renderer.manager.send_personal(ws, renderer.last_state)
            while True:
                message = await ws.receive()
                if message["type"] == "websocket.disconnect":
                    raise WebSocketDisconnect(message.get("code", 1000))
                if message.get("text") is None:
                    logger.warning("ignoring binary frame")
                    continue
                renderer.receive(message["text"])
        except WebSocketDisconnect:
            logger.info("browser disconnected")
        finally:
            renderer.manager.disconnect(ws)

    return app


class WebRenderer:
    """
    Renderer that plays the game in a browser.

    Every rendered board is broadcast as JSON to the connected clients, and
    clients send ``{"type": "event", "event": "<name>"}`` messages, where
    ``<name>`` is one of the game event names (``up``, ``pause``, ``quit``...).
    """

    def __init__(self):
        self.manager = ConnectionManager()
        self.inbox: asyncio.Queue = asyncio.Queue()
        self.last_state: Optional[str] = None
        self.server: Optional[uvicorn.Server] = None
        self.app = create_app(self)

    def receive(self, raw: str):
        try:
            msg = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("ignoring malformed message: %r", raw[:64])
            return
        if not isinstance(msg, dict) or msg.get("type") != "event":
            return
        try:
            event = Event(msg.get("event"))
        except ValueError:
            logger.debug("ignoring unknown event %r", msg.get("event"))
            return
        self.inbox.put_nowait(event)

    async def listen(self, events: asyncio.Queue):
        while True:
            event = await self.inbox.get()
            await events.put(event)
            if event is Event.QUIT:
                return

    async def render(self, board: Board):
        self.last_state = build_state_msg(board)
        await self.manager.broadcast(self.last_state)

    async def serve(self, host: str = WEB_HOST, port: int = WEB_PORT):
        config = uvicorn.Config(self.app, host=host, port=port, log_level="warning")
        self.server = uvicorn.Server(config)
        print(f"Snaky server starting on http://{host}:{port}")
        await self.server.serve()

    def shutdown(self):
        if self.server is not None:
            self.server.should_exit = True
