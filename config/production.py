import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

SNAPSHOT_PATH = os.getenv("SNAPSHOT_PATH", "/var/lib/campus-attendance/snapshot.json")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEFAULT_HALF_DAY_THRESHOLD_MINUTES = int(os.getenv("DEFAULT_HALF_DAY_THRESHOLD_MINUTES", "240"))

DEBUG = False
