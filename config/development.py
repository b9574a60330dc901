import os

from config.config import Config

_config = Config()

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = _config.db_config()

RECEIPTS_DIR = Config.RECEIPTS_DIR
STUDENT_PROFILE_URL = Config.STUDENT_PROFILE_URL
STUDENT_PHOTOS = Config.STUDENT_PHOTOS
CENTER_NAME = Config.CENTER_NAME
CENTER_ADDRESS = Config.CENTER_ADDRESS
RECEIPT_LOGO_PATH = Config.RECEIPT_LOGO_PATH

GEMINI_API_KEY = Config.GEMINI_API_KEY
GEMINI_MODEL = Config.GEMINI_MODEL
OPENROUTER_API_KEY = Config.OPENROUTER_API_KEY
OPENROUTER_MODEL = Config.OPENROUTER_MODEL
EXTERNAL_TIMEOUT_SECONDS = Config.EXTERNAL_TIMEOUT_SECONDS
MAX_UPLOAD_BYTES = Config.MAX_UPLOAD_BYTES

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
