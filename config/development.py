import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# Path of the persisted document (relative paths resolve against the repo root)
DATA_FILE = os.getenv("DATA_FILE", "data.json")
STORAGE_TIMEOUT_SECONDS = float(os.getenv("STORAGE_TIMEOUT_SECONDS", "5"))

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
PORT = int(os.getenv("PORT", "3000"))

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
