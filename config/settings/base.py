# config/settings/base.py
from pathlib import Path
import os
from dotenv import load_dotenv


BASE_DIR = Path(__file__).resolve().parent.parent.parent  # repo root
load_dotenv(BASE_DIR / ".env")

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "unsafe-dev-key")
DEBUG = os.getenv("DJANGO_DEBUG", "0") == "1"
ALLOWED_HOSTS = ["*"]

INSTALLED_APPS = [
    # Django
    "django.contrib.admin",
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "django.contrib.sessions",
    "django.contrib.messages",
    "django.contrib.staticfiles",

    # Third-party
    "rest_framework",

    # Domain apps (modular monolith)
    "pos_core.common.apps.CommonConfig",
    "pos_core.audit.apps.AuditConfig",
    "pos_core.organizations.apps.OrganizationsConfig",
    "pos_core.workspaces.apps.WorkspacesConfig",
    "pos_core.ledger.apps.LedgerConfig",
    "pos_core.locations.apps.LocationsConfig",
    "pos_core.payments.apps.PaymentsConfig",
    "pos_core.iam.apps.IamConfig",
    "pos_core.provisioning.apps.ProvisioningConfig",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.contrib.sessions.middleware.SessionMiddleware",
    "django.middleware.common.CommonMiddleware",
    "django.middleware.csrf.CsrfViewMiddleware",
    "django.contrib.auth.middleware.AuthenticationMiddleware",
    "django.contrib.messages.middleware.MessageMiddleware",
    "django.middleware.clickjacking.XFrameOptionsMiddleware",
]

ROOT_URLCONF = "config.urls"

TEMPLATES = [
    {
        "BACKEND": "django.template.backends.django.DjangoTemplates",
        "DIRS": [],
        "APP_DIRS": True,
        "OPTIONS": {
            "context_processors": [
                "django.template.context_processors.request",
                "django.contrib.auth.context_processors.auth",
                "django.contrib.messages.context_processors.messages",
            ],
        },
    }
]

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.postgresql",
        "NAME": os.getenv("DB_NAME", "pos"),
        "USER": os.getenv("DB_USER", "pos"),
        "PASSWORD": os.getenv("DB_PASSWORD", "pos"),
        "HOST": os.getenv("DB_HOST", "127.0.0.1"),
        "PORT": os.getenv("DB_PORT", "5432"),
    }
}

AUTH_PASSWORD_VALIDATORS = [
    {"NAME": "django.contrib.auth.password_validation.UserAttributeSimilarityValidator"},
    {"NAME": "django.contrib.auth.password_validation.MinimumLengthValidator"},
    {"NAME": "django.contrib.auth.password_validation.CommonPasswordValidator"},
    {"NAME": "django.contrib.auth.password_validation.NumericPasswordValidator"},
]

LANGUAGE_CODE = "en-us"
TIME_ZONE = "Africa/Nairobi"
USE_I18N = True
USE_TZ = True

STATIC_URL = "static/"
DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

REST_FRAMEWORK = {
    "DEFAULT_PERMISSION_CLASSES": (
        "rest_framework.permissions.IsAuthenticated",
    ),
    # Standard error envelope
    "EXCEPTION_HANDLER": "pos_core.common.api.exceptions.api_exception_handler",
}

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s %(levelname)s %(name)s %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "loggers": {
        "pos_core": {
            "handlers": ["console"],
            "level": os.getenv("POS_LOG_LEVEL", "INFO"),
            "propagate": False,
        },
    },
}

# -------------------------------------------------------------------
# Tenant provisioning
# -------------------------------------------------------------------
POS_DEFAULT_ZONE_NAME = os.getenv("POS_DEFAULT_ZONE_NAME", "Kenya")
POS_SUPPORTED_CURRENCIES = ["KES", "USD", "EUR", "GBP", "UGX", "TZS", "RWF"]
POS_WORKSPACE_CODE_MAX_ATTEMPTS = int(os.getenv("POS_WORKSPACE_CODE_MAX_ATTEMPTS", "20"))
POS_RESERVED_WORKSPACE_CODES = ["admin", "api", "default", "www", "superadmin"]
POS_SUPERADMIN_USERNAME = os.getenv("POS_SUPERADMIN_USERNAME", "")
POS_SENTINEL_EMAIL_DOMAIN = os.getenv("POS_SENTINEL_EMAIL_DOMAIN", "pos.local")

# Dotted path to a tracer factory; empty means no tracing
POS_TRACER = os.getenv("POS_TRACER", "")
