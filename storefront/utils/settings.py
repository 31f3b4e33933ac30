# storefront/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

# default: in-memory sqlite, single process
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+pysqlite:///:memory:")
REDIS_URL = os.getenv("REDIS_URL", "")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", REDIS_URL or "memory://")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", REDIS_URL or "cache+memory://")
CELERY_TASK_ALWAYS_EAGER = os.getenv("CELERY_TASK_ALWAYS_EAGER", "true").lower() in ("1", "true", "yes")

DEFAULT_CURRENCY = os.getenv("DEFAULT_CURRENCY", "MXN")
COUPON_LOCK_TTL_SECONDS = int(os.getenv("COUPON_LOCK_TTL_SECONDS", 5))
FEATURED_PRODUCTS_LIMIT = int(os.getenv("FEATURED_PRODUCTS_LIMIT", 4))
SEED_DATA = os.getenv("SEED_DATA", "true").lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
