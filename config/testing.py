import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "tutoring_center_test"),
}

RECEIPTS_DIR = os.getenv("RECEIPTS_DIR", "receipts")
STUDENT_PROFILE_URL = "https://example.test/student-profile/{fcc_id}"
STUDENT_PHOTOS = ""

GEMINI_API_KEY = ""
OPENROUTER_API_KEY = ""
EXTERNAL_TIMEOUT_SECONDS = 5

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = False
