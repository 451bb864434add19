# =============================================================================
# agent/__init__.py
# =============================================================================
# The analyst console's Google ADK agent.
#
# ARCHITECTURAL ROLE:
#   agent/ is a CALLER of the gateway, not part of it.  It talks to
#   tools/mcp_server.py over stdio exactly as any other MCP client would
#   (Claude Desktop, an IDE, another agent).  Nothing in core/ or tools/
#   imports from here.
#
#   The agent decides WHICH tools to call and how to explain the results.
#   Scraping, auditing and scoring happen in the remote actors; pricing
#   happens in core/pricing.py.
# =============================================================================
