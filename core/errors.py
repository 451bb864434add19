# =============================================================================
# core/errors.py  —  Gateway Error Taxonomy
# =============================================================================
#
# Every failure a tool call can hit is one of these.  The gateway catches
# GatewayError subclasses and turns them into an isError response; anything
# else that escapes a dispatch is treated as a transport failure.
#
#   UnknownTool      → name not in the catalogue
#   SchemaViolation  → arguments don't match the tool's schema
#   NotFound         → a remote lookup came back empty (informational)
#   ExternalJobError → the provider reported failure
#   JobTimedOut      → the provider gave up at the resource envelope
#
# None of these are retried.  Each lives and dies with one invocation.
# =============================================================================


class GatewayError(Exception):
    """Base class for every error the gateway reports to the caller."""


class UnknownTool(GatewayError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class SchemaViolation(GatewayError):
    """Arguments failed validation against the tool's input schema.

    ``issues`` is a list of ``(field_path, message)`` pairs so the caller can
    see exactly which field was wrong.
    """

    def __init__(self, tool_name: str, issues: list[tuple[str, str]]):
        self.tool_name = tool_name
        self.issues = issues
        detail = "; ".join(f"{path}: {message}" for path, message in issues)
        super().__init__(f"Invalid arguments for {tool_name}: {detail}")

    @property
    def fields(self) -> list[str]:
        return [path for path, _ in self.issues]


class NotFound(GatewayError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Could not find TikTok profile: @{identifier}")


class ExternalJobError(GatewayError):
    """The provider finished a job without success."""

    def __init__(self, job_type: str, reason: str, status: str = "FAILED"):
        self.job_type = job_type
        self.reason = reason
        self.status = status
        super().__init__(f"Job {job_type} {status}: {reason}")


class JobTimedOut(ExternalJobError):
    """The provider stopped the job at its timeout ceiling."""

    def __init__(self, job_type: str, reason: str):
        super().__init__(job_type, reason, status="TIMED-OUT")


class MissingCredentials(Exception):
    """Raised at startup when a required credential isn't configured."""
