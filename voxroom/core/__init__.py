from voxroom.core.config import Settings, settings
from voxroom.core.logging_config import setup_logging

__all__ = ["Settings", "settings", "setup_logging"]
