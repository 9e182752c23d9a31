"""Code intelligence MCP server."""

import asyncio
import logging
import signal
from typing import Any, Dict, List

from fastmcp import FastMCP
from opentelemetry import trace
from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
from opentelemetry.sdk.trace import TracerProvider
from opentelemetry.sdk.trace.export import SimpleSpanProcessor

from backends import (
    CodeIntelHandler,
    ContentFetcher,
    GraphQLClient,
    GraphQLTransport,
    SearchClient,
    as_dict,
)
from core import CodeIntelError, EnvSettings, ServerConfig

config = ServerConfig()

logging.basicConfig(level=config.log_level)
logger = logging.getLogger(__name__)


class TelemetryManager:
    """Telemetry manager for OTLP tracing."""

    def __init__(self, config: ServerConfig) -> None:
        """Initialize telemetry manager."""
        self.config = config
        self._setup_telemetry()

    def _setup_telemetry(self) -> None:
        """Setup telemetry."""
        if not self.config.otel_enabled:
            return

        trace_provider = TracerProvider()
        trace_provider.add_span_processor(SimpleSpanProcessor(OTLPSpanExporter()))
        trace.set_tracer_provider(trace_provider)

    @staticmethod
    def get_tracer(name: str) -> trace.Tracer:
        """Get tracer instance."""
        return trace.get_tracer(name)


telemetry = TelemetryManager(config)
tracer = telemetry.get_tracer("codeintel-mcp")

server = FastMCP(sse_path="/codeintel/sse", message_path="/codeintel/messages/")

graphql = GraphQLClient(
    GraphQLTransport(
        endpoint=config.sourcegraph_endpoint,
        token=config.sourcegraph_token,
        timeout=config.request_timeout,
    )
)
search_client = SearchClient(graphql, EnvSettings())
content_fetcher = ContentFetcher(graphql)
handler = CodeIntelHandler(search_client, content_fetcher)
logger.info(f"Using Sourcegraph at {config.sourcegraph_endpoint}")

_shutdown_requested = False


def signal_handler(sig: int, frame: Any) -> None:
    """Handle termination signals for graceful shutdown."""
    global _shutdown_requested
    logger.info(f"Received signal {sig}, initiating graceful shutdown...")
    _shutdown_requested = True


@server.tool()
async def definition(uri: str, line: int, character: int) -> List[Dict[str, Any]]:
    """Find definitions of the symbol at a position in a file."""
    if _shutdown_requested:
        logger.info("Shutdown in progress, declining new requests")
        return []

    with tracer.start_as_current_span("CodeIntelMcp:definition") as span:
        span.set_attribute("uri", uri)
        try:
            results = await handler.definition(uri, line, character)
        except CodeIntelError as exc:
            logger.warning(f"Definition lookup failed for {uri}: {exc}")
            return []
        span.set_attribute("result_count", len(results))
        return [as_dict(r) for r in results]


@server.tool()
async def references(uri: str, line: int, character: int) -> List[Dict[str, Any]]:
    """Find references to the symbol at a position in a file."""
    if _shutdown_requested:
        logger.info("Shutdown in progress, declining new requests")
        return []

    with tracer.start_as_current_span("CodeIntelMcp:references") as span:
        span.set_attribute("uri", uri)
        try:
            results = await handler.references(uri, line, character)
        except CodeIntelError as exc:
            logger.warning(f"References lookup failed for {uri}: {exc}")
            return []
        span.set_attribute("result_count", len(results))
        return [as_dict(r) for r in results]


@server.tool()
async def search(query: str) -> List[Dict[str, Any]]:
    """Run a Sourcegraph symbol and text search."""
    if _shutdown_requested:
        logger.info("Shutdown in progress, declining new requests")
        return []

    logger.info(f"Search query: {query}")
    with tracer.start_as_current_span("CodeIntelMcp:search") as span:
        span.set_attribute("query", query)
        try:
            results = await search_client.search(query)
        except CodeIntelError as exc:
            logger.error(f"Search failed: {exc}")
            return []
        span.set_attribute("result_count", len(results))
        return [as_dict(r) for r in results]


@server.tool()
async def fetch_content(uri: str) -> str:
    """Fetch the content of a file given its git://repo?rev#path token.

    Returns an empty string when the repository, revision or file does not
    exist, or when the lookup fails.
    """
    if _shutdown_requested:
        logger.info("Shutdown in progress, declining new requests")
        return ""

    with tracer.start_as_current_span("CodeIntelMcp:fetch_content") as span:
        span.set_attribute("uri", uri)
        try:
            content = await handler.fetch_content(uri)
        except CodeIntelError as exc:
            logger.warning(f"Error fetching content for {uri}: {exc}")
            return ""
        span.set_attribute("found", bool(content))
        return content


async def _run_server() -> None:
    """Run the FastMCP server with both HTTP and SSE transports."""
    tasks = [
        server.run_http_async(
            transport="streamable-http",
            host="0.0.0.0",
            path="/codeintel/mcp",
            port=config.streamable_http_port,
        ),
        server.run_http_async(transport="sse", host="0.0.0.0", port=config.sse_port),
    ]
    await asyncio.gather(*tasks)


def main() -> None:
    """Main entry point."""
    signal.signal(signal.SIGINT, signal_handler)
    signal.signal(signal.SIGTERM, signal_handler)

    try:
        logger.info("Starting Code Intel MCP server...")
        asyncio.run(_run_server())
    except KeyboardInterrupt:
        logger.info("Received keyboard interrupt (CTRL+C)")
    except Exception as exc:
        logger.error(f"Server error: {exc}")
        raise
    finally:
        logger.info("Server has shut down.")


if __name__ == "__main__":
    main()
