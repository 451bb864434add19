# =============================================================================
# tools/__init__.py
# =============================================================================
# The gateway's outer edges.
#
#   mcp_server.py  FastMCP stdio server: registers the catalogue, runs each
#                  call through validate → dispatch → compose, maps errors
#                  to isError responses, logs to stderr.
#   provider.py    Apify REST client implementing the JobProvider contract.
#
# WHAT TOOLS DO NOT DO:
#   - They do NOT contain pricing or validation rules (that's in core/)
#   - They do NOT know about Google ADK (agent/ is just another MCP client)
# =============================================================================
