# src/gotestadapter/exceptions.py

"""
Exception hierarchy for gotestadapter.
"""


class GoTestAdapterError(Exception):
    """Base class for all gotestadapter errors."""

    pass


class ConfigurationError(GoTestAdapterError):
    """Raised when the configuration file or a configured value is invalid."""

    pass


class DiscoveryError(GoTestAdapterError):
    """Raised when a discovery pass cannot complete."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: Exception | None = None,
    ):
        self.path = path
        self.details = details
        full_message = f"[Discovery] {message}"
        if path:
            full_message += f" (Path: '{path}')"
        super().__init__(full_message)
        if details and hasattr(self, "add_note"):
            self.add_note(f"Original error: {type(details).__name__}: {details}")


class SymbolExtractionError(DiscoveryError):
    """The symbol extractor failed for a source file."""

    pass


class ProcessLaunchError(GoTestAdapterError):
    """The external test runner could not be started."""

    def __init__(self, message: str, executable: str | None = None):
        self.executable = executable
        super().__init__(message)


class RunCancelledError(GoTestAdapterError):
    """Raised at a suspension point once the active run has been cancelled."""

    pass


# 🔼⚙️
