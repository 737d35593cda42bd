"""
Django settings for the hyperlocal storefront backend.
Everything environment-specific comes from .env / the environment.
"""

import os
import sys
from pathlib import Path

from dotenv import load_dotenv

BASE_DIR = Path(__file__).resolve().parent.parent

# The pure-Python domain packages (routing/, vendors/, drivers/) live one level up
REPO_ROOT = BASE_DIR.parent
if str(REPO_ROOT) not in sys.path:
    sys.path.append(str(REPO_ROOT))

load_dotenv()

SECRET_KEY = os.getenv("DJANGO_SECRET_KEY", "dev-only-insecure-key")
DEBUG = os.getenv("DJANGO_DEBUG", "false").lower() == "true"
ALLOWED_HOSTS = [host for host in os.getenv("DJANGO_ALLOWED_HOSTS", "localhost,127.0.0.1").split(",") if host]

INSTALLED_APPS = [
    "django.contrib.auth",
    "django.contrib.contenttypes",
    "rest_framework",
    "logistics",
]

MIDDLEWARE = [
    "django.middleware.security.SecurityMiddleware",
    "django.middleware.common.CommonMiddleware",
]

ROOT_URLCONF = "hyperlocal_backend.urls"

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": os.getenv("DATABASE_PATH", str(BASE_DIR / "db.sqlite3")),
    }
}

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

# Business timezone: peak hours are judged in this zone
TIME_ZONE = os.getenv("BUSINESS_TIMEZONE", "Asia/Kolkata")
USE_TZ = True

REST_FRAMEWORK = {
    "DEFAULT_AUTHENTICATION_CLASSES": [],
    "DEFAULT_PERMISSION_CLASSES": ["rest_framework.permissions.AllowAny"],
    "DEFAULT_RENDERER_CLASSES": ["rest_framework.renderers.JSONRenderer"],
    "UNAUTHENTICATED_USER": None,
}

# Nearby-vendor query tuning (see vendors.policy.NearbyPolicy)
NEARBY_DEFAULT_RADIUS_KM = float(os.getenv("NEARBY_DEFAULT_RADIUS_KM", "2"))
NEARBY_LOOKUP_WORKERS = int(os.getenv("NEARBY_LOOKUP_WORKERS", "8"))

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "%(asctime)s %(levelname)s %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "vendors": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
        "routing": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
        "drivers": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
        "logistics": {"handlers": ["console"], "level": os.getenv("LOG_LEVEL", "INFO")},
    },
}
