"""Error taxonomy for stable module boundaries."""


class CensusError(Exception):
    """Base exception for subreddit-census."""


class ConfigError(CensusError):
    """Raised when configuration or credentials are invalid or missing."""


class TransportError(CensusError):
    """Raised when a remote listing call fails (network, auth, decode)."""


class CollectError(CensusError):
    """Raised for invalid collection arguments."""


class AggregateError(CensusError):
    """Raised when a tally cannot be derived as requested."""


class EmptyTallyError(AggregateError):
    """Raised when percentages are requested for a tally with a zero total."""


class RenderError(CensusError):
    """Raised when report output fails."""


class DiagnosticsError(CensusError):
    """Raised for progress event logging failures."""
