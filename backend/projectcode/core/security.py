import logging
from functools import lru_cache
from typing import Any

import firebase_admin
from firebase_admin import auth, credentials

from projectcode.core.config import settings

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_firebase_app() -> firebase_admin.App:
    """Initialise the Firebase Admin app once, from a service account file or ambient credentials."""
    if settings.FIREBASE_SERVICE_ACCOUNT_PATH:
        cred = credentials.Certificate(settings.FIREBASE_SERVICE_ACCOUNT_PATH)
        logger.info("Initialising Firebase with service account %s", settings.FIREBASE_SERVICE_ACCOUNT_PATH)
    else:
        cred = credentials.ApplicationDefault()
        logger.info("Initialising Firebase with application default credentials")
    options = {"projectId": settings.FIREBASE_PROJECT_ID} if settings.FIREBASE_PROJECT_ID else None
    return firebase_admin.initialize_app(cred, options)


def verify_id_token(token: str) -> dict[str, Any]:
    """Decode a Firebase ID token; raises firebase_admin auth errors when it is invalid."""
    return auth.verify_id_token(token, app=get_firebase_app())
