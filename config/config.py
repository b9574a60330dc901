import os


class Config:
    """Settings shared by every environment, read from the process env."""

    SECRET_KEY = os.environ.get("SECRET_KEY") or "tutoring-center-secret"

    DB_USER = os.environ.get("DB_USER", "root")
    DB_PASSWORD = os.environ.get("DB_PASSWORD", "")
    DB_HOST = os.environ.get("DB_HOST", "localhost")
    DB_PORT = int(os.environ.get("DB_PORT", "3306"))
    DB_NAME = os.environ.get("DB_NAME", os.environ.get("DB_DATABASE", "tutoring_center"))

    RECEIPTS_DIR = os.environ.get("RECEIPTS_DIR", "receipts")
    STUDENT_PROFILE_URL = os.environ.get(
        "STUDENT_PROFILE_URL", "https://fccthegurukul.in/student-profile/{fcc_id}"
    )
    # JSON object: {"<fcc_id>": "<photo url>", ...}
    STUDENT_PHOTOS = os.environ.get("STUDENT_PHOTOS", "")
    CENTER_NAME = os.environ.get("CENTER_NAME", "FCC The Gurukul")
    CENTER_ADDRESS = os.environ.get("CENTER_ADDRESS", "")
    RECEIPT_LOGO_PATH = os.environ.get("RECEIPT_LOGO_PATH") or None

    GEMINI_API_KEY = os.environ.get("GEMINI_API_KEY", "")
    GEMINI_MODEL = os.environ.get("GEMINI_MODEL", "gemini-pro")
    OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY", "")
    OPENROUTER_MODEL = os.environ.get("OPENROUTER_MODEL", "deepseek/deepseek-r1:free")
    EXTERNAL_TIMEOUT_SECONDS = float(os.environ.get("EXTERNAL_TIMEOUT_SECONDS", "30"))

    MAX_UPLOAD_BYTES = int(os.environ.get("MAX_UPLOAD_BYTES", str(16 * 1024 * 1024)))

    def db_config(self) -> dict:
        return {
            "host": self.DB_HOST,
            "port": self.DB_PORT,
            "user": self.DB_USER,
            "password": self.DB_PASSWORD,
            "database": self.DB_NAME,
        }
