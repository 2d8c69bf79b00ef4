"""
Game Server - Accepts TCP clients and plays one game with each.

Clients telnet to the server port and play on a line-oriented text
protocol. Every connection gets its own GameSession; games run
concurrently on one event loop and never share state. A failing game
only ever ends its own connection.
"""

from __future__ import annotations
import asyncio
import itertools
import logging
import random

from .bots import create_policy
from .config import ServerConfig
from .session import (
    GameSession,
    SessionManager,
    StreamLineReader,
    StreamLineWriter,
)


logger = logging.getLogger(__name__)


class GameServer:
    """
    Listen for connections and start a new game for each.

    Usage:
        server = GameServer(ServerConfig())
        await server.start()
        await server.serve_forever()
    """

    def __init__(self, config: ServerConfig | None = None, manager: SessionManager | None = None):
        self.config = config or ServerConfig()
        self.manager = manager or SessionManager()
        self._server: asyncio.Server | None = None
        self._connections = itertools.count()

    @property
    def port(self) -> int:
        """The bound port (useful when configured with port 0)."""
        if self._server is None or not self._server.sockets:
            return self.config.port
        return self._server.sockets[0].getsockname()[1]

    async def start(self):
        self._server = await asyncio.start_server(
            self.handle_client,
            host=self.config.host,
            port=self.config.port,
        )
        logger.info("listening on %s:%d", self.config.host, self.port)

    async def serve_forever(self):
        if self._server is None:
            await self.start()
        async with self._server:
            await self._server.serve_forever()

    def close(self):
        if self._server is not None:
            self._server.close()

    async def wait_closed(self):
        if self._server is not None:
            await self._server.wait_closed()

    def _new_rng(self) -> random.Random:
        index = next(self._connections)
        if self.config.seed is None:
            return random.Random()
        return random.Random(self.config.seed + index)

    def create_game(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> GameSession:
        rng = self._new_rng()
        return GameSession(
            StreamLineReader(reader),
            StreamLineWriter(writer),
            rng=rng,
            policy=create_policy(self.config.policy, rng=rng),
            banner=self.config.banner,
        )

    async def handle_client(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter):
        """Run one game on a freshly accepted connection."""
        peer = writer.get_extra_info("peername")
        peer_name = f"{peer[0]}:{peer[1]}" if peer else "unknown"
        logger.info("new client: %s", peer_name)

        game = self.create_game(reader, writer)
        session = self.manager.create_session(game, peer=peer_name)
        reason = "abandoned"
        try:
            result = await game.run()
            reason = "completed"
            if result.winner:
                logger.info("game with %s over: %s win [%s]", peer_name, result.winner, result.line)
            else:
                logger.info("game with %s over: draw", peer_name)
        except OSError as e:
            logger.warning("game with %s aborted: %s", peer_name, e)
        except Exception:
            logger.exception("internal error in game with %s", peer_name)
        finally:
            self.manager.end_session(session.session_id, reason=reason)
            await StreamLineWriter(writer).close()


async def run_server(config: ServerConfig):
    """Run the game server, plus the status API when enabled."""
    server = GameServer(config)
    await server.start()

    if not config.api_enabled:
        await server.serve_forever()
        return

    import uvicorn
    from .api import create_app, APIService

    app = create_app(APIService(session_manager=server.manager))
    api = uvicorn.Server(uvicorn.Config(
        app,
        host=config.api_host,
        port=config.api_port,
        log_level=config.log_level.lower(),
    ))
    await asyncio.gather(server.serve_forever(), api.serve())
