"""Exception types raised by the solar production tool."""


class SolarProductionError(Exception):
    """Base class for all solar production errors."""


class IngestionFailure(SolarProductionError):
    """Readings could not be retrieved (transport error, bad payload, unreadable file)."""


class AnalysisError(SolarProductionError, ValueError):
    """A metric could not be derived from the readings."""


class EmptySeries(AnalysisError):
    """An average or ratio was requested over zero entries."""


class ZeroBaseline(AnalysisError):
    """A ratio would divide by a zero maximum or baseline value."""
