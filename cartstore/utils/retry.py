# cartstore/utils/retry.py
from redis.exceptions import ConnectionError, TimeoutError
from tenacity import retry, stop_after_attempt, wait_exponential, retry_if_exception_type

from cartstore.utils.settings import REDIS_READ_RETRY_ATTEMPTS


#tylko idempotentne odczyty (GET, SMEMBERS, SCAN), zapisy nigdy nie sa powtarzane
def redis_retry():
    return retry(
        reraise=True,
        stop=stop_after_attempt(REDIS_READ_RETRY_ATTEMPTS),
        wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
        retry=retry_if_exception_type((ConnectionError, TimeoutError)),
    )
