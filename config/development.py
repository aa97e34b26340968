import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DEBUG = True

# Fixed daily break allowance per employee, in minutes.
DAILY_BREAK_BUDGET_MINUTES = int(os.getenv("DAILY_BREAK_BUDGET_MINUTES", "70"))

# Load default departments, break types and the demo user on startup.
SEED_DEFAULTS = bool(int(os.getenv("SEED_DEFAULTS", "1")))

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_JSON = bool(int(os.getenv("LOG_JSON", "0")))
