import os
from pathlib import Path
from dotenv import load_dotenv

load_dotenv()


class Config:
    BASE_DIR = Path(__file__).resolve().parent.parent
    # Operator-mounted volume; used only when it exists and is writable.
    DATA_DIR = Path(os.getenv("WRITO_DATA_DIR", "/data"))
    # Unset means "local-data" under the working directory at resolution time.
    LOCAL_DATA_DIR = os.getenv("WRITO_LOCAL_DATA_DIR") or None
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")


class DevConfig(Config):
    DEBUG = True
    LOG_LEVEL = "DEBUG"


class ProdConfig(Config):
    DEBUG = False


class TestConfig(Config):
    TESTING = True
