from pathlib import Path
import os
BASE_DIR = Path(__file__).resolve().parent.parent
from dotenv import load_dotenv
load_dotenv()


def env_bool(name, default=False):
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


def env_list(name, default=""):
    return [v.strip() for v in os.getenv(name, default).split(",") if v.strip()]


SECRET_KEY = os.getenv("SECRET_KEY", "django-insecure-cyberhub-dev-key-change-me")

DEBUG = env_bool("DEBUG", False)

ALLOWED_HOSTS = env_list("ALLOWED_HOSTS", "localhost,127.0.0.1,testserver")


# Application definition

INSTALLED_APPS = [
    'django.contrib.admin',
    'django.contrib.auth',
    'django.contrib.contenttypes',
    'django.contrib.sessions',
    'django.contrib.messages',
    'django.contrib.staticfiles',
    'channels',
    'rest_framework',
    'rest_framework.authtoken',
    'corsheaders',
    'core',
    'billing',
    'accounts',
    'cases',
    'inventory',
    'backoffice',
]


MIDDLEWARE = [
    'corsheaders.middleware.CorsMiddleware',
    'django.middleware.security.SecurityMiddleware',
    'django.contrib.sessions.middleware.SessionMiddleware',
    'django.middleware.common.CommonMiddleware',
    'django.middleware.csrf.CsrfViewMiddleware',
    'django.contrib.auth.middleware.AuthenticationMiddleware',
    'django.contrib.messages.middleware.MessageMiddleware',
    'django.middleware.clickjacking.XFrameOptionsMiddleware',
]

ROOT_URLCONF = 'cyberhub_app.urls'

TEMPLATES = [
    {
        'BACKEND': 'django.template.backends.django.DjangoTemplates',
        'DIRS': [],
        'APP_DIRS': True,
        'OPTIONS': {
            'context_processors': [
                'django.template.context_processors.request',
                'django.contrib.auth.context_processors.auth',
                'django.contrib.messages.context_processors.messages',
            ],
        },
    },
]

WSGI_APPLICATION = 'cyberhub_app.wsgi.application'
ASGI_APPLICATION = 'cyberhub_app.asgi.application'

# Channels: Redis when configured, in-process otherwise (dev / tests)
REDIS_URL = os.getenv("REDIS_URL", "")
if REDIS_URL:
    CHANNEL_LAYERS = {
        "default": {
            "BACKEND": "channels_redis.core.RedisChannelLayer",
            "CONFIG": {
                "hosts": [REDIS_URL],
            },
        },
    }
else:
    CHANNEL_LAYERS = {
        "default": {"BACKEND": "channels.layers.InMemoryChannelLayer"},
    }

DATABASES = {
    'default': {
        'ENGINE': 'django.db.backends.sqlite3',
        'NAME': os.getenv("DATABASE_PATH", str(BASE_DIR / 'cyberhub.sqlite3')),
    }
}


# SmartShell billing (GraphQL)
SMARTSHELL_API_URL = os.getenv("SMARTSHELL_API_URL", "https://billing.smartshell.gg/api/graphql")
SMARTSHELL_LOGIN = os.getenv("SMARTSHELL_LOGIN", "")
SMARTSHELL_PASSWORD = os.getenv("SMARTSHELL_PASSWORD", "")
SMARTSHELL_CLUB_ID = int(os.getenv("SMARTSHELL_CLUB_ID", "6242"))
SMARTSHELL_CONNECT_TIMEOUT = float(os.getenv("SMARTSHELL_CONNECT_TIMEOUT", "3"))
SMARTSHELL_READ_TIMEOUT = float(os.getenv("SMARTSHELL_READ_TIMEOUT", "5"))
SMARTSHELL_MAX_RETRIES = int(os.getenv("SMARTSHELL_MAX_RETRIES", "1"))
SMARTSHELL_VERIFY_SSL = env_bool("SMARTSHELL_VERIFY_SSL", True)
SMARTSHELL_PAYMENTS_PAGE_SIZE = int(os.getenv("SMARTSHELL_PAYMENTS_PAGE_SIZE", "100"))

# "пополнение" (ru), "papildināšana" (lv), plus English variants
BILLING_DEPOSIT_TITLE_MARKERS = env_list(
    "BILLING_DEPOSIT_TITLE_MARKERS",
    "пополнение,papildin,deposit,top-up,topup",
)

# Day / month boundaries for cases are computed in this zone
REWARDS_TIMEZONE = os.getenv("REWARDS_TIMEZONE", "Europe/Riga")

SESSION_TTL_SECONDS = int(os.getenv("SESSION_TTL_SECONDS", "86400"))

CASE_ENGINE = {
    "DECREMENT_STOCK": env_bool("CASE_DECREMENT_STOCK", True),
    "SKIP_OUT_OF_STOCK": env_bool("CASE_SKIP_OUT_OF_STOCK", True),
    "REQUIRE_ACTIVE_ITEMS": env_bool("CASE_REQUIRE_ACTIVE_ITEMS", True),
    "AUTO_CREDIT_MONEY": env_bool("CASE_AUTO_CREDIT_MONEY", False),
}

RECENT_DROPS_LIMIT = 50


CORS_ALLOW_CREDENTIALS = True

CORS_ALLOWED_ORIGINS = env_list("CORS_ALLOWED_ORIGINS", "http://localhost:5173")

CSRF_TRUSTED_ORIGINS = env_list("CSRF_TRUSTED_ORIGINS", "http://localhost:5173")

REST_FRAMEWORK = {
    'DEFAULT_AUTHENTICATION_CLASSES': [
        'accounts.authentication.ClientSessionAuthentication',
    ],
    'DEFAULT_PERMISSION_CLASSES': [
        'rest_framework.permissions.AllowAny',
    ],
    'EXCEPTION_HANDLER': 'core.exceptions.api_exception_handler',
}


LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

LOGGING = {
    "version": 1,
    "disable_existing_loggers": False,
    "formatters": {
        "standard": {
            "format": "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        },
    },
    "handlers": {
        "console": {
            "class": "logging.StreamHandler",
            "formatter": "standard",
        },
    },
    "root": {
        "handlers": ["console"],
        "level": LOG_LEVEL,
    },
    "loggers": {
        "django": {
            "handlers": ["console"],
            "level": os.getenv("DJANGO_LOG_LEVEL", "WARNING"),
            "propagate": False,
        },
    },
}


AUTH_PASSWORD_VALIDATORS = [
    {
        'NAME': 'django.contrib.auth.password_validation.UserAttributeSimilarityValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.MinimumLengthValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.CommonPasswordValidator',
    },
    {
        'NAME': 'django.contrib.auth.password_validation.NumericPasswordValidator',
    },
]


LANGUAGE_CODE = 'en-us'

TIME_ZONE = 'UTC'

USE_I18N = True

USE_TZ = True


STATIC_URL = 'static/'
STATIC_ROOT = BASE_DIR / "staticfiles"

DEFAULT_AUTO_FIELD = 'django.db.models.BigAutoField'
