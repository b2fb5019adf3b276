import os

SECRET_KEY = "test-secret"

DATA_FILE = os.getenv("DATA_FILE", "test-data.json")
STORAGE_TIMEOUT_SECONDS = 2.0

CORS_ORIGINS = "*"
PORT = 3000

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
