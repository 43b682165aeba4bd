import os
from dotenv import load_dotenv
from utils.constants import (
    LOBBY_CODE_LENGTH as DEFAULT_LOBBY_CODE_LENGTH,
    LOBBY_CODE_MAX_ATTEMPTS as DEFAULT_LOBBY_CODE_MAX_ATTEMPTS,
    SWEEP_INTERVAL_SECONDS as DEFAULT_SWEEP_INTERVAL_SECONDS
)

# Only load the .env file if we're not on Render (i.e., we are in a local environment)
if os.environ.get("RENDER") != "true":
    load_dotenv()

def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')

# Flask Configuration
SECRET_KEY = os.getenv('SECRET_KEY', 'a_very_secret_key_that_should_be_changed')
CORS_ORIGINS = os.getenv('CORS_ORIGINS', '*')

# Server Configuration
PORT = int(os.getenv('PORT', 8080))
DEBUG = os.getenv('FLASK_ENV', 'production') == 'development'
ASYNC_MODE = os.getenv('ASYNC_MODE', 'eventlet')
LOG_LEVEL = os.getenv('LOG_LEVEL', 'INFO').upper()

# Stale-connection sweeper
SWEEP_ENABLED = _env_bool('SWEEP_ENABLED', True)
SWEEP_INTERVAL_SECONDS = float(os.getenv('SWEEP_INTERVAL_SECONDS', DEFAULT_SWEEP_INTERVAL_SECONDS))
SWEEP_FULL_LEAVE = _env_bool('SWEEP_FULL_LEAVE', False)

# Lobby codes
LOBBY_CODE_LENGTH = int(os.getenv('LOBBY_CODE_LENGTH', DEFAULT_LOBBY_CODE_LENGTH))
LOBBY_CODE_MAX_ATTEMPTS = int(os.getenv('LOBBY_CODE_MAX_ATTEMPTS', DEFAULT_LOBBY_CODE_MAX_ATTEMPTS))

# Render Configuration
IS_RENDER = os.environ.get("RENDER", "") == "true"
