import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DEBUG = False

DAILY_BREAK_BUDGET_MINUTES = int(os.getenv("DAILY_BREAK_BUDGET_MINUTES", "70"))

SEED_DEFAULTS = bool(int(os.getenv("SEED_DEFAULTS", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "1")))
