"""Error kinds raised by a scroll session.

Each kind carries the process exit status the CLI uses for it. Nothing in the
core catches these; they surface at ``escroll.cli.main``.
"""


class ScrollError(Exception):
    exit_code = 1

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class PolicyViolation(ScrollError):
    """The query asks for an operation escroll refuses to run."""

    exit_code = 3


class ValidationError(ScrollError):
    """The request is malformed or can't drive a scroll."""

    exit_code = 2


class ConnectivityError(ScrollError):
    """The liveness probe against the backend failed."""

    exit_code = 4

    def __init__(self, message: str, status: int | None = None):
        super().__init__(message)
        self.status = status


class FetchError(ScrollError):
    """A search or scroll request failed or returned a non-2xx status."""

    exit_code = 5

    def __init__(self, message: str, status: int | None = None, body: str = ""):
        super().__init__(message)
        self.status = status
        self.body = body


class DecodeError(ScrollError):
    """A response or request body isn't the JSON shape we need."""

    exit_code = 6


class ScrollCancelled(ScrollError):
    exit_code = 130
