class UnknownFieldError(ValueError):
    """Raised when an update names a field that does not exist or cannot be edited."""


class AnalysisInProgressError(RuntimeError):
    """Raised when an analysis is requested while another one is still running."""
