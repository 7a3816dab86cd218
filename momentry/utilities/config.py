"""Configuration management for Momentry."""
import os
from typing import Final
from pathlib import Path

from dotenv import load_dotenv

from momentry.utilities import constants

# Load environment variables from .env file if it exists
env_path = Path(__file__).parent.parent / '.env'
if env_path.exists():
    load_dotenv(env_path)

# Application Settings
APP_HOST: Final[str] = os.getenv('APP_HOST', '0.0.0.0')
APP_PORT: Final[int] = int(os.getenv('APP_PORT', '8000'))
DEBUG: Final[bool] = os.getenv('DEBUG', 'False').lower() == 'true'
LOG_LEVEL: Final[str] = os.getenv('LOG_LEVEL', 'DEBUG' if DEBUG else 'INFO')

# Goal countdown
GOAL_LOOKAHEAD_YEARS: Final[int] = int(os.getenv('GOAL_LOOKAHEAD_YEARS', str(constants.GOAL_LOOKAHEAD_YEARS)))
MAX_GOALS: Final[int] = int(os.getenv('MAX_GOALS', str(constants.MAX_GOALS)))

# File Paths
BASE_DIR: Final[Path] = Path(__file__).parent.parent
DATA_DIR: Final[Path] = Path(os.getenv('MOMENTRY_DATA_DIR', str(BASE_DIR / 'data'))).resolve()
STORAGE_FILE: Final[Path] = DATA_DIR / os.getenv('MOMENTRY_STORAGE_FILE', 'storage.json')
