from pathlib import Path

from mealplan.utilities.config import DATA_DIR as _CONFIGURED_DATA_DIR

# Centralized path for the JSON store (one <key>.json file per stored document)
DATA_DIR = Path(_CONFIGURED_DATA_DIR).resolve()

__all__ = ['DATA_DIR']
