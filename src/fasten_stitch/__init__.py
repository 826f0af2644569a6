from fasten_stitch.config import LoggingConfig, StitchConfig, load_stitch_config

__version__ = "1.0.0"

__all__ = [
    "LoggingConfig",
    "StitchConfig",
    "__version__",
    "load_stitch_config",
]
