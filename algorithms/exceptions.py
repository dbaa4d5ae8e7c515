"""
Exception classes for the algorithm engines.
"""


class VisualizerError(Exception):
    """Base exception for the step-generation engines."""
    pass


class InputValidationError(VisualizerError, ValueError):
    """Input has the wrong shape; raised before any step is generated."""
    pass


class EngineNotInitializedError(VisualizerError, RuntimeError):
    """generate_steps() / get_metrics() called before initialize()."""
    pass


class EngineStateError(VisualizerError, RuntimeError):
    """An engine instance was asked for a second generation pass."""
    pass


class UnknownAlgorithmError(VisualizerError, KeyError):
    """Registry lookup for an algorithm key that does not exist."""

    def __str__(self) -> str:
        return self.args[0] if self.args else "unknown algorithm"
