"""Test settings - uses SQLite for fast local testing."""
import os

os.environ.setdefault(
    "SECRET_KEY",
    "test-only-9f3c1b7e2a4d6f8091b3c5e7a9d2f4b6c8e0a1d3f5b7c9e2a4d6f8",
)

from .base import *  # noqa: E402,F401,F403

DEBUG = True

# Use SQLite for tests (no PostgreSQL dependency)
DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}
DATABASES["default"]["ATOMIC_REQUESTS"] = False

# Faster password hashing in tests
PASSWORD_HASHERS = [
    "django.contrib.auth.hashers.MD5PasswordHasher",
]

# Disable Redis cache in tests
CACHES = {
    "default": {
        "BACKEND": "django.core.cache.backends.locmem.LocMemCache",
    }
}

# Disable Celery in tests
CELERY_TASK_ALWAYS_EAGER = True
CELERY_TASK_EAGER_PROPAGATES = True
CELERY_BROKER_URL = "memory://"
CELERY_RESULT_BACKEND = "cache+memory://"

# Disable API throttling in tests for deterministic runs
REST_FRAMEWORK["DEFAULT_THROTTLE_CLASSES"] = []  # noqa: F405
REST_FRAMEWORK["DEFAULT_THROTTLE_RATES"] = {}  # noqa: F405

# Email
EMAIL_BACKEND = "django.core.mail.backends.locmem.EmailBackend"
DEFAULT_FROM_EMAIL = "reports@example.com"

# Daily report
TIME_ZONE = "Asia/Bangkok"
DAILY_REPORT_BUSINESS_NAME = "Test Burgers"
DAILY_REPORT_RECIPIENTS = ["owner@example.com", "manager@example.com"]
DAILY_REPORT_EMAIL_MAX_ATTEMPTS = 3
DAILY_REPORT_EMAIL_RETRY_DELAY = 0
DAILY_REPORT_DRINK_SKU_POLICY = "union"

# Disable logging noise during tests
LOGGING["root"]["level"] = "WARNING"  # noqa: F405
LOGGING["handlers"].pop("file")  # noqa: F405
LOGGING["loggers"]["backoffice"]["handlers"] = ["console"]  # noqa: F405
LOGGING["loggers"]["backoffice"]["level"] = "WARNING"  # noqa: F405
