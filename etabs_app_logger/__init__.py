# ETABS App Logger Package
# Contains:
#   logger.py         - AppLogger facade (structured logging or console fallback)
#   etabs_connect.py  - Scripted ETABS model creation over the COM API
#   com_runtime.py    - pywin32 boundary (helper creation, release, type library)
#   config.py         - Connection settings and model template presets
#   package_check.py  - Console smoke test for the logger and the ETABS API

from .logger import AppLogger, configure_logging, get_app_logger
from .etabs_connect import build_model, create_sample, create_steel_deck_model

__all__ = [
    "AppLogger",
    "configure_logging",
    "get_app_logger",
    "build_model",
    "create_sample",
    "create_steel_deck_model",
]
