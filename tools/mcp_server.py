# =============================================================================
# tools/mcp_server.py  —  FastMCP Tool Server (the caller-facing gateway)
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Exposes the tool catalogue over MCP and runs every tool call through the
#   same pipeline:
#
#     validate (core/catalogue) → dispatch (core/dispatcher) →
#     compose (core/composer)   → JSON text back to the caller
#
#   Every failure along the way comes back as an isError response with a
#   readable message.  The stdio channel itself is never torn down by a
#   failing tool call.
#
# WHY ONE GENERIC TOOL CLASS INSTEAD OF ONE DECORATED FUNCTION PER TOOL?
#   The catalogue (core/catalogue.py) is the single source of truth for tool
#   names, descriptions and schemas.  CatalogueTool registers each entry
#   with FastMCP as-is, so what the caller sees in list_tools is exactly what
#   the validator enforces.
#
# RUNNING THIS SERVER:
#     a) Standalone:  python -m tools.mcp_server   (or: creator-fusion-mcp)
#     b) Spawned by the analyst console (agent/creator_agent.py) over stdio
#   APIFY_TOKEN must be set (environment or .env); startup fails without it.
# =============================================================================

import asyncio
import json
import logging
import sys
from typing import Any, Optional

from dotenv import load_dotenv
from fastmcp import FastMCP
from fastmcp.exceptions import ToolError
from fastmcp.tools.tool import Tool, ToolResult

from core.catalogue import list_tools, validate
from core.composer import compose, render
from core.dispatcher import JobProvider, dispatch
from core.errors import GatewayError, MissingCredentials
from core.models import ToolResponse
from tools.provider import ApifyProvider, ProviderSettings

SERVER_NAME = "creator-fusion-mcp"

# Argument names whose values must never reach a log line.
SECRET_ARGUMENTS = frozenset({"apiKey"})

# =============================================================================
# Logging Setup
# =============================================================================
# Logs go to STDERR.  STDOUT carries the MCP protocol; a stray log line there
# would corrupt the JSON stream and break the client.
#
#   CYAN    incoming tool calls (with secrets redacted)
#   YELLOW  intermediate status
#   GREEN   responses
#   RED     errors
# =============================================================================
_CYAN = "\033[36m"
_GREEN = "\033[32m"
_YELLOW = "\033[33m"
_RED = "\033[31m"
_RESET = "\033[0m"

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [MCP] %(message)s",
    datefmt="%H:%M:%S",
    stream=sys.stderr,
)
logger = logging.getLogger("creator_fusion.mcp")


def _redact(arguments: Any) -> Any:
    if not isinstance(arguments, dict):
        return arguments
    return {k: ("***" if k in SECRET_ARGUMENTS else v) for k, v in arguments.items()}


def _log_request(tool_name: str, arguments: Any) -> None:
    """Log an incoming tool call in CYAN.  Secret arguments are masked."""
    if isinstance(arguments, dict):
        param_str = ", ".join(f"{k}={v!r}" for k, v in _redact(arguments).items())
    else:
        param_str = repr(arguments)
    logger.info(f"{_CYAN}{tool_name} called with: {param_str}{_RESET}")


def _log_status(message: str) -> None:
    logger.info(f"{_YELLOW}  → {message}{_RESET}")


def _log_response(tool_name: str, payload: Any) -> None:
    logger.info(f"{_GREEN}  ← {tool_name} response: "
                f"{json.dumps(payload, separators=(',', ':'), default=str)}{_RESET}")


def _log_error(tool_name: str, message: str) -> None:
    logger.info(f"{_RED}  ✗ {tool_name} failed: {message}{_RESET}")


# =============================================================================
# call_tool — one invocation, start to finish
# =============================================================================
async def call_tool(name: str, arguments: Optional[dict[str, Any]], provider: JobProvider) -> ToolResponse:
    """Validate, dispatch and compose one tool call.

    Never raises.  Gateway errors (unknown tool, bad arguments, profile not
    found, failed or timed-out job) keep their own message; anything else
    (network failures, malformed provider responses) is reported as
    "Error: <message>" and logged with its traceback.
    """
    _log_request(name, arguments)
    try:
        command = validate(name, arguments)
        records = await dispatch(command, provider)
        _log_status(f"Got {len(records)} record(s)")
        payload = compose(name, records)
    except GatewayError as exc:
        _log_error(name, str(exc))
        return ToolResponse(text=str(exc), is_error=True)
    except Exception as exc:
        logger.exception("Unexpected error while running %s", name)
        return ToolResponse(text=f"Error: {exc}", is_error=True)

    _log_response(name, payload)
    return ToolResponse(text=render(payload))


# =============================================================================
# FastMCP wiring
# =============================================================================
class CatalogueTool(Tool):
    """A catalogue entry registered with FastMCP.

    FastMCP reports isError when a tool raises ToolError, so error responses
    are re-raised as ToolError carrying the same text.
    """

    provider: Any

    async def run(self, arguments: dict[str, Any]) -> ToolResult:
        response = await call_tool(self.name, arguments, self.provider)
        if response.is_error:
            raise ToolError(response.text)
        return ToolResult(content=response.text)


def build_server(provider: JobProvider) -> FastMCP:
    """Create the FastMCP server with every catalogue tool registered."""
    mcp = FastMCP(SERVER_NAME)
    for descriptor in list_tools():
        mcp.add_tool(CatalogueTool(
            name=descriptor.name,
            description=descriptor.description,
            parameters=descriptor.input_schema,
            provider=provider,
        ))
    return mcp


async def serve(settings: ProviderSettings) -> None:
    async with ApifyProvider(settings) as provider:
        mcp = build_server(provider)
        logger.info("Creator Fusion MCP server running on stdio")
        await mcp.run_async(transport="stdio")


# =============================================================================
# Server entry point
# =============================================================================
def main() -> None:
    load_dotenv()
    try:
        settings = ProviderSettings.from_env()
    except MissingCredentials as exc:
        print(exc, file=sys.stderr)
        sys.exit(1)
    asyncio.run(serve(settings))


if __name__ == "__main__":
    main()
