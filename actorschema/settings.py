"""
Django settings for the actorschema backend.

- Loads secrets from environment variables
- No database: resolution is request-scoped and persists nothing
"""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present (for local dev)
if os.environ.get("ACTORSCHEMA_TEST_MODE") != "true":
    load_dotenv()

# Build paths inside the project like this: BASE_DIR / 'subdir'.
BASE_DIR = Path(__file__).resolve().parent.parent


# =============================================================================
# SECURITY SETTINGS (env-driven)
# =============================================================================

SECRET_KEY = os.environ.get(
    "DJANGO_SECRET_KEY",
    "dev-insecure-key-do-not-use-in-production",
)

DEBUG = os.environ.get("DJANGO_DEBUG", "False").lower() in ("true", "1", "yes")

ALLOWED_HOSTS = os.environ.get("ALLOWED_HOSTS", "localhost,127.0.0.1").split(",")


# =============================================================================
# APPLICATION DEFINITION
# =============================================================================

INSTALLED_APPS = [
    # Third-party
    "corsheaders",
    # actorschema apps
    "actorschema.schemas",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "corsheaders.middleware.CorsMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "actorschema.urls"

DATABASES = {}


# =============================================================================
# INTERNATIONALIZATION
# =============================================================================

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = False
USE_TZ = True


# =============================================================================
# CORS SETTINGS
# =============================================================================

CORS_ALLOWED_ORIGINS = os.environ.get(
    "CORS_ALLOWED_ORIGINS",
    "http://localhost:3000",
).split(",")

CORS_EXPOSE_HEADERS = ["X-Schema-Source"]


# =============================================================================
# APIFY
# =============================================================================

# Only used by the resolve_actor_schema command; API callers send their own token.
APIFY_TOKEN = os.environ.get("APIFY_TOKEN", "")

APIFY_BASE_URL = os.environ.get("APIFY_BASE_URL", "https://api.apify.com")
APIFY_HTTP_TIMEOUT_S = float(os.environ.get("APIFY_HTTP_TIMEOUT_S", "30"))

# Public documentation origin, scraped as a last resort
APIFY_DOCS_BASE_URL = os.environ.get("APIFY_DOCS_BASE_URL", "https://apify.com")
APIFY_DOCS_TIMEOUT_S = float(os.environ.get("APIFY_DOCS_TIMEOUT_S", "20"))
APIFY_DOCS_USER_AGENT = os.environ.get(
    "APIFY_DOCS_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)


# =============================================================================
# LOGGING
# =============================================================================

LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "verbose": {
            "format": "{levelname} {asctime} {module} {message}",
            "style": "{",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "verbose",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
        "actorschema": {
            "handlers": ["console"],
            "level": LOG_LEVEL,
            "propagate": False,
        },
    },
}
