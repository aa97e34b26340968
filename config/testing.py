SECRET_KEY = "test-secret"

DEBUG = False
TESTING = True

DAILY_BREAK_BUDGET_MINUTES = 70

SEED_DEFAULTS = True

LOG_LEVEL = "WARNING"
LOG_JSON = False
