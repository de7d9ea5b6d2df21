__version__ = "0.1.0"

__all__ = [
    "__version__",
    "cli",
    "compare",
    "constants",
    "context",
    "count",
    "errors",
    "exit_codes",
    "logging",
    "paths",
    "pipeline",
    "process",
    "snapshot",
]
