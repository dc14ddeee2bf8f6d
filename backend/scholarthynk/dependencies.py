"""
ScholarThynk Backend — Request Dependencies
===========================================

What:  FastAPI dependencies shared by the authenticated routers.
       - get_owner_id:       verifies the bearer token and returns the caller's id
       - get_document_store: wraps the request's DB session in a DocumentStore

Identity:
    Tokens are issued by the login service with a shared secret. We only
    verify the signature and read the owner claim (`userId` by default).
    Any failure is a 401 with the same message, whatever the cause.
"""

import logging
from typing import Optional

import jwt
from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from scholarthynk.config import settings
from scholarthynk.database import get_db_session
from scholarthynk.exceptions import AuthenticationError
from scholarthynk.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

# auto_error=False: we raise our own AuthenticationError so the error body
# has the same shape as every other failure
bearer_scheme = HTTPBearer(auto_error=False)


def decode_owner_id(token: str) -> str:
    """Returns the owner claim of a valid token, or raises AuthenticationError."""
    if not settings.secret_key:
        logger.error("SECRET_KEY is not configured; rejecting bearer token")
        raise AuthenticationError()
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: %s", type(e).__name__)
        raise AuthenticationError()

    owner_id = payload.get(settings.jwt_owner_claim)
    if owner_id is None or owner_id == "":
        raise AuthenticationError(context={"reason": "missing owner claim"})
    return str(owner_id)


async def get_owner_id(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    if credentials is None or not credentials.credentials:
        raise AuthenticationError()
    owner_id = decode_owner_id(credentials.credentials)
    # Picked up by RequestLoggingMiddleware for the access log
    request.state.owner_id = owner_id
    return owner_id


async def get_document_store(db: AsyncSession = Depends(get_db_session)) -> DocumentStore:
    return DocumentStore(db, autocommit=not settings.atomic_tree_mutations)
