import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# JSON export of the directory / shift / attendance registry
SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", "data/snapshot.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Clock-out half-day threshold when no shift is bound
DEFAULT_HALF_DAY_THRESHOLD_MINUTES = int(os.getenv("DEFAULT_HALF_DAY_THRESHOLD_MINUTES", "240"))

DEBUG = True
