import os
import yaml

ROOT_PATH = os.path.dirname(__file__)
CONFIG_FILE_PATH = os.path.join(ROOT_PATH, "env.yaml")

if os.path.exists(CONFIG_FILE_PATH):
    with open(CONFIG_FILE_PATH, "r") as r_file:
        data = yaml.safe_load(r_file)
else:
    data = dict()


class ApplicationConfig:
    DB_URI = data.get("DB_URI", "sqlite+aiosqlite:///./farm.db")
    DB_ECHO = bool(data.get("DB_ECHO", False))
    API_PREFIX = data.get("API_PREFIX", "/api")
    API_PORT = data.get("API_PORT", 8000)
    API_HOST = data.get("API_HOST", "0.0.0.0")
    CORS_ORIGINS = data.get("CORS_ORIGINS", [])
    CORS_ALLOW_CREDENTIALS = data.get("CORS_ALLOW_CREDENTIALS", True)
    LOG_LEVEL = data.get("LOG_LEVEL", "INFO")
    JWT_SECRET = data.get("JWT_SECRET", "dev-secret-key-change-in-production")
    JWT_ALGORITHM = data.get("JWT_ALGORITHM", "HS256")
    # Upper bound for identity + membership resolution per request
    ACCESS_GUARD_TIMEOUT_SECONDS = float(data.get("ACCESS_GUARD_TIMEOUT_SECONDS", 5.0))
    # Deadline for the composite order write, also applied as a statement timeout
    WRITE_TIMEOUT_SECONDS = float(data.get("WRITE_TIMEOUT_SECONDS", 10.0))
    # One cent; line sums may drift by this amount per line
    AMOUNT_TOLERANCE = str(data.get("AMOUNT_TOLERANCE", "0.01"))
