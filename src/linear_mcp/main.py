"""Console entry point: serve the Linear tools over MCP stdio."""

import asyncio
import logging
import sys

from mcp.server.stdio import stdio_server
from pydantic import ValidationError

from .config import Settings, get_settings
from .mcp.server import LinearMCPServer
from .observability.logging import configure_logging
from .services import LinearAPIService
from .upstream.client import LinearClient
from .upstream.http_client import close_http_client

logger = logging.getLogger(__name__)


def build_server(settings: Settings) -> LinearMCPServer:
    client = LinearClient(settings.linear_api_key, endpoint=settings.linear_api_url)
    return LinearMCPServer(LinearAPIService(client), name=settings.app_name)


async def serve(mcp_server: LinearMCPServer) -> None:
    server = mcp_server.server
    try:
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
    finally:
        await close_http_client()


def main() -> None:
    try:
        settings = get_settings()
    except ValidationError:
        configure_logging()
        logger.error("LINEAR_API_KEY environment variable is required")
        sys.exit(1)

    configure_logging(settings.environment, "DEBUG" if settings.debug else settings.log_level)
    logger.info("Starting %s v%s", settings.app_name, settings.app_version)

    asyncio.run(serve(build_server(settings)))


if __name__ == "__main__":
    main()
