from django.conf import settings
from django.core.cache import cache
from django.http import JsonResponse
import time
import os
import redis as redis_lib
from apps.remote.client import ApiClient
from apps.remote.config import HttpConfig
from apps.remote.exceptions import RemoteAPIError
from .logger import get_logger

logger = get_logger(__name__).bind(component='common', layer='health')

HEALTH_CACHE_KEY = 'health:probe'
HEALTH_GUEST_ID = 'health_probe'


def _redis_ping(url: str, timeout: float = 0.3):
    try:
        client = redis_lib.from_url(url, socket_connect_timeout=timeout, socket_timeout=timeout)
        pong = client.ping()
        result = {'status': 'ok' if pong else 'fail'}
        if result['status'] == 'ok':
            logger.debug('Redis health check succeeded')
        else:
            logger.warning('Redis health check returned unexpected response')
        return result
    except redis_lib.RedisError as e:
        logger.warning('Redis health check failed', error=str(e))
        return {'status': 'fail', 'error': str(e)}


def _cache_check():
    started = time.time()
    token = str(started)
    cache.set(HEALTH_CACHE_KEY, token, timeout=10)
    if cache.get(HEALTH_CACHE_KEY) != token:
        logger.warning('Cache health check could not read back its probe')
        return {'status': 'fail', 'error': 'cache round trip failed'}
    latency = round((time.time() - started) * 1000, 2)
    logger.debug('Cache health check succeeded', latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency}


def _backend_check(timeout: float = 2.0):
    started = time.time()
    config = HttpConfig(guest_id=HEALTH_GUEST_ID).initialize()
    try:
        ApiClient(config, timeout=timeout).get_json('/categories')
    except RemoteAPIError as e:
        logger.warning('Store backend health check failed', error=str(e), status=e.status_code)
        return {'status': 'fail', 'error': str(e), 'remote_status': e.status_code}
    latency = round((time.time() - started) * 1000, 2)
    logger.debug('Store backend health check succeeded', latency_ms=latency)
    return {'status': 'ok', 'latency_ms': latency, 'base_url': config.base_url}


def live_health(request):
    """Liveness probe: process is up and can service requests."""
    logger.debug('Liveness probe served')
    return JsonResponse({'status': 'alive'})


def ready_health(request):
    """Readiness probe: verifies the cache and the store backend are reachable."""
    checks = {}
    checks['cache'] = _cache_check()

    redis_url = os.getenv('REDIS_URL')
    if redis_url:
        checks['redis'] = _redis_ping(redis_url)
    else:
        checks['redis'] = {'status': 'skipped', 'detail': 'REDIS_URL not set'}

    if getattr(settings, 'HEALTH_CHECK_BACKEND', True):
        checks['store_backend'] = _backend_check()
    else:
        checks['store_backend'] = {'status': 'skipped', 'detail': 'disabled'}

    failing = [name for name, r in checks.items() if r.get('status') == 'fail']
    overall_status = 'ok' if not failing else 'degraded'
    http_status = 200 if not failing else 503
    payload = {
        'status': overall_status,
        'checks': checks,
    }
    logger.info('Readiness probe evaluated', status=overall_status, failing_components=failing)
    return JsonResponse(payload, status=http_status)
