"""
Django settings for the result template rendering project.

Only what the rendering engine needs is configured here; the host
school-management project contributes its own apps and database.
"""
import os
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent

SECRET_KEY = os.environ.get("DJANGO_SECRET_KEY", "django-insecure-result-templates-dev-key")

DEBUG = os.environ.get("DJANGO_DEBUG", "False") == "True"

ALLOWED_HOSTS = []

INSTALLED_APPS = [
    "django.contrib.contenttypes",
    "django.contrib.auth",
    "result_templates",
]

MIDDLEWARE = []

DATABASES = {
    "default": {
        "ENGINE": "django.db.backends.sqlite3",
        "NAME": BASE_DIR / "db.sqlite3",
    }
}

LANGUAGE_CODE = "en-us"
TIME_ZONE = "UTC"
USE_I18N = True
USE_TZ = True

DEFAULT_AUTO_FIELD = "django.db.models.BigAutoField"

MEDIA_URL = "/media/"
MEDIA_ROOT = BASE_DIR / "media"

# ========== RESULT TEMPLATES ==========
RESULT_TEMPLATE_PAGE_SIZE = "A4"
RESULT_TEMPLATE_REFERENCE_WIDTH = 794
RESULT_TEMPLATE_PUBLIC_ROOT = BASE_DIR / "public"
RESULT_TEMPLATE_IMAGE_TIMEOUT = 10.0
RESULT_TEMPLATE_WATERMARK = None

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "simple": {"format": "[%(levelname)s] %(name)s: %(message)s"},
    },
    "handlers": {
        "console": {"class": "logging.StreamHandler", "formatter": "simple"},
    },
    "loggers": {
        "result_templates": {
            "handlers": ["console"],
            "level": os.environ.get("RESULT_TEMPLATES_LOG_LEVEL", "WARNING"),
        },
    },
}
