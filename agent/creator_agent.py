# =============================================================================
# agent/creator_agent.py  —  Google ADK Analyst Agent
# =============================================================================
#
# WHAT THIS FILE DOES:
#   Builds the Google ADK agent behind the analyst console (main.py).  The
#   agent has no creator logic of its own: it reasons with an LLM and gets
#   every fact from the gateway's MCP tools.
#
#   ┌──────────────────────────┐   stdio (MCP)   ┌───────────────────────┐
#   │ ADK Agent                │ ──────────────▶ │ tools/mcp_server.py   │
#   │  prompt + LiteLlm model  │ ◀────────────── │  catalogue → Apify    │
#   └──────────────────────────┘                 └───────────────────────┘
#
# MCP CONNECTION:
#   ADK spawns the server as a subprocess with the current interpreter
#   (`python -m tools.mcp_server`) from the project root, so the subprocess
#   sees the same packages and the same .env.  The parent's environment is
#   forwarded because the server needs APIFY_TOKEN.
#
# MODEL:
#   Any LiteLlm model string works.  The default routes GPT-4o through
#   OpenRouter (reads OPENROUTER_API_KEY); override with CREATOR_AGENT_MODEL.
# =============================================================================

import os
import sys

from google.adk.agents import Agent
from google.adk.models.lite_llm import LiteLlm
from google.adk.tools.mcp_tool import MCPToolset
from mcp import StdioServerParameters

from agent.prompt import get_creator_analyst_prompt

DEFAULT_MODEL = "openrouter/openai/gpt-4o"

PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))


def server_parameters() -> StdioServerParameters:
    """How ADK launches the gateway subprocess."""
    return StdioServerParameters(
        command=sys.executable,
        args=["-m", "tools.mcp_server"],
        cwd=PROJECT_ROOT,
        env=dict(os.environ),
    )


def create_agent(model: str | None = None) -> Agent:
    """Create the creator-analyst agent wired to the gateway's tools.

    Args:
        model: LiteLlm model string.  Defaults to $CREATOR_AGENT_MODEL, then
               DEFAULT_MODEL.

    Returns:
        A configured Google ADK Agent.
    """
    mcp_tools = MCPToolset(connection_params=server_parameters())

    return Agent(
        name="creator_fusion_analyst",
        model=LiteLlm(model=model or os.environ.get("CREATOR_AGENT_MODEL", DEFAULT_MODEL)),
        instruction=get_creator_analyst_prompt(),
        tools=[mcp_tools],
    )
