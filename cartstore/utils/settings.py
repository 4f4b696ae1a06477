# cartstore/utils/settings.py
import os
from dotenv import load_dotenv

load_dotenv()

REDIS_URL = os.getenv("REDIS_URL", "redis://redis:6379/0")
CELERY_BROKER_URL = os.getenv("CELERY_BROKER_URL", "redis://redis:6379/1")
CELERY_RESULT_BACKEND = os.getenv("CELERY_RESULT_BACKEND", "redis://redis:6379/2")

# TTL per etap lejka zakupowego, PaymentCompleted nie wygasa wcale
CART_DEFAULT_TTL_SECONDS = int(os.getenv("CART_DEFAULT_TTL_SECONDS", 24 * 60 * 60))
CART_ORDER_PLACED_TTL_SECONDS = int(os.getenv("CART_ORDER_PLACED_TTL_SECONDS", 7 * 24 * 60 * 60))

SWEEP_INTERVAL_SECONDS = float(os.getenv("SWEEP_INTERVAL_SECONDS", 5 * 60))
REDIS_READ_RETRY_ATTEMPTS = int(os.getenv("REDIS_READ_RETRY_ATTEMPTS", 3))

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
