class DepthChartError(Exception):
    """Base error for depth chart retrieval and parsing."""


class RetrievalError(DepthChartError):
    """The depth chart page could not be obtained.

    Attributes:
        url: The page that was requested.
        cause: The underlying transport or HTTP failure, if any.
    """

    def __init__(self, url: str, cause: Exception | None = None) -> None:
        super().__init__(f"Failed to retrieve {url}")
        self.url = url
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"Failed to retrieve {self.url}: {self.cause}"
        return f"Failed to retrieve {self.url}"


class ParseError(DepthChartError):
    """The page did not contain the expected depth chart table."""


class UnknownTeamError(ValueError):
    """A team code matched neither an NBA abbreviation nor an ESPN slug."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Unknown team code: {code!r}")
        self.code = code


class ConfigError(DepthChartError):
    """A configuration value is missing or out of range."""


class Unavailable(Exception):
    """No depth chart can be served for a team right now.

    This is the only failure cache callers see; retrieval and parse
    failures are folded into it and kept on ``cause`` for logging.
    """

    def __init__(self, team: str, cause: Exception | None = None) -> None:
        super().__init__(f"Depth chart unavailable for {team}")
        self.team = team
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"Depth chart unavailable for {self.team}: {self.cause}"
        return f"Depth chart unavailable for {self.team}"
