from typing import Optional

from django.conf import settings
from django.core import signing
from django.utils.deprecation import MiddlewareMixin

from apps.common import get_logger
from apps.common.i18n import resolve_language
from apps.common.storage import KeyValueStorage
from apps.remote.config import generate_guest_id
from apps.remote.session import build_session

logger = get_logger(__name__).bind(component='api', layer='middleware')

GUEST_ID_HEADER = 'X-Guest-Id'
GUEST_ID_SALT = 'apps.api.middleware.guest-id'


def sign_guest_id(guest_id: str) -> str:
    return signing.Signer(salt=GUEST_ID_SALT).sign(guest_id)


def unsign_guest_id(value: str) -> Optional[str]:
    try:
        return signing.Signer(salt=GUEST_ID_SALT).unsign(value)
    except signing.BadSignature:
        return None


def _bearer_token(request) -> Optional[str]:
    header = request.META.get('HTTP_AUTHORIZATION', '')
    scheme, _, token = header.partition(' ')
    if scheme.lower() != 'bearer' or not token.strip():
        return None
    return token.strip()


class SessionContextMiddleware(MiddlewareMixin):
    """
    Attach a per-request storefront session (guest identity, namespaced
    storage, backend client) as ``request.storefront``.

    The guest id travels signed in ``X-Guest-Id``; the session's storage
    (stored token included) is only reachable through an id this server
    issued. Missing or tampered ids start a fresh guest.
    """

    def _applies_to(self, request) -> bool:
        prefixes = getattr(settings, 'STOREFRONT_PATH_PREFIXES', ('/api/',))
        return request.path.startswith(tuple(prefixes))

    def _guest_id(self, request) -> str:
        presented = request.META.get('HTTP_X_GUEST_ID', '').strip()
        if not presented:
            return generate_guest_id()
        guest_id = unsign_guest_id(presented)
        if guest_id is None:
            logger.warning('Rejected unsigned guest id', path=request.path)
            return generate_guest_id()
        return guest_id

    def process_request(self, request):
        if not self._applies_to(request):
            return None
        guest_id = self._guest_id(request)
        storage = KeyValueStorage(guest_id)
        request.storefront = build_session(
            guest_id,
            token=_bearer_token(request),
            language=resolve_language(request, storage),
            csrf_token=request.META.get('HTTP_X_CSRF_TOKEN') or None,
            storage=storage,
        )
        logger.debug(
            'Storefront session attached',
            path=request.path,
            method=request.method,
            guest_id=guest_id,
            authenticated=request.storefront.is_authenticated,
        )
        return None

    def process_response(self, request, response):
        session = getattr(request, 'storefront', None)
        if session is not None:
            response[GUEST_ID_HEADER] = sign_guest_id(session.guest_id)
        return response
