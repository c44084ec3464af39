"""Domain errors."""


class MarketDigestError(Exception):
    """Base error for the market digest core."""


class FetchError(MarketDigestError):
    """Source fetch failed after every retry attempt."""

    def __init__(self, source: str, attempts: int, reason: str = "") -> None:
        self.source = source
        self.attempts = attempts
        self.reason = reason
        message = f"{source}: fetch failed after {attempts} attempt(s)"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class CapabilityNotImplementedError(MarketDigestError, NotImplementedError):
    """Adapter variant does not provide the requested capability."""

    def __init__(self, source: str, capability: str) -> None:
        self.source = source
        self.capability = capability
        super().__init__(f"{source} does not implement {capability}()")
