# config/settings/test.py
from .base import *  # noqa

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": ":memory:",
    }
}

PASSWORD_HASHERS = ["django.contrib.auth.hashers.MD5PasswordHasher"]

LOGGING["loggers"]["pos_core"]["level"] = "DEBUG"
# let pytest's caplog see pos_core records
LOGGING["loggers"]["pos_core"]["propagate"] = True
