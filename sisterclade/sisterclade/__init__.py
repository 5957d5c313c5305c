"""SISTERCLADE package."""

__version__ = "0.1.0"

__all__ = [
    "config",
    "errors",
    "taxa",
    "clades",
    "filenames",
    "support",
    "ppred",
    "reference",
    "normalize",
    "pipeline",
    "plots",
    "cli",
]
