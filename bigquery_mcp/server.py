"""
Stdio transport and entry point for the BigQuery MCP server.

Messages are newline-delimited JSON-RPC on stdin/stdout. Logs go to stderr,
never stdout, since stdout is the protocol channel.
"""

from __future__ import annotations

import asyncio
import json
import logging
import sys
from typing import IO, Any, Dict, Optional, Sequence, Set

from mcp.types import PARSE_ERROR

from .config import ServerConfig, load_environment, parse_args
from .errors import ConfigError
from .gateway import WAREHOUSE_ERRORS, BigQueryGateway, WarehouseGateway
from .router import RequestRouter

logger = logging.getLogger(__name__)


def parse_error_response(message: str) -> Dict[str, Any]:
    return {
        "jsonrpc": "2.0",
        "id": None,
        "error": {"code": PARSE_ERROR, "message": message},
    }


class StdioServer:
    """
    Reads requests line by line and answers each one as soon as it is done.

    Requests are independent, so each is handled in a worker thread and
    several may be in flight at once. Responses may arrive out of order;
    clients correlate them by id.
    """

    def __init__(self, router: RequestRouter, reader: Optional[IO[str]] = None, writer: Optional[IO[str]] = None):
        self.router = router
        self.reader = reader if reader is not None else sys.stdin
        self.writer = writer if writer is not None else sys.stdout
        self._write_lock = asyncio.Lock()
        self._pending: Set[asyncio.Task] = set()

    async def serve(self) -> None:
        while True:
            line = await asyncio.to_thread(self.reader.readline)
            if not line:
                break
            if not line.strip():
                continue
            task = asyncio.create_task(self.handle_line(line))
            self._pending.add(task)
            task.add_done_callback(self._pending.discard)

        if self._pending:
            await asyncio.gather(*self._pending)

    async def handle_line(self, line: str) -> None:
        try:
            message = json.loads(line)
        except json.JSONDecodeError as e:
            logger.warning("Could not parse message: %s", e)
            await self.write(parse_error_response(f"Invalid JSON: {e.msg}"))
            return

        response = await asyncio.to_thread(self.router.handle_message, message)
        if response is not None:
            await self.write(response)

    async def write(self, response: Dict[str, Any]) -> None:
        async with self._write_lock:
            self.writer.write(json.dumps(response) + "\n")
            self.writer.flush()


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        stream=sys.stderr,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def create_router(config: ServerConfig, gateway: Optional[WarehouseGateway] = None) -> RequestRouter:
    return RequestRouter(config, gateway or BigQueryGateway(config))


def main(argv: Optional[Sequence[str]] = None) -> int:
    load_environment()
    try:
        config = parse_args(argv)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    configure_logging(config.log_level)
    logger.info(
        "Initializing BigQuery: project %s, location %s", config.project_id, config.location
    )

    try:
        router = create_router(config)
    except WAREHOUSE_ERRORS as e:
        logger.error("Could not create BigQuery client: %s", e)
        return 1

    logger.info("Server started")
    try:
        asyncio.run(StdioServer(router).serve())
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
