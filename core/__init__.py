# =============================================================================
# core/__init__.py
# =============================================================================
# The gateway's own logic: the tool catalogue, command validation, the job
# table, dispatch, result composition, and the rate-card pricing model.
#
# ARCHITECTURAL RULE:
#   Nothing in this package imports FastMCP, httpx, Google ADK or any other
#   transport.  The provider is reached only through the JobProvider
#   protocol in core/dispatcher.py, so every module here runs offline and is
#   tested with an in-memory fake.
# =============================================================================
