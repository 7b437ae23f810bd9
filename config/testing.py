import os

SECRET_KEY = "test-secret"

SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", "tests/data/snapshot.json")

LOG_LEVEL = "WARNING"

DEFAULT_HALF_DAY_THRESHOLD_MINUTES = 240

DEBUG = False
TESTING = True
