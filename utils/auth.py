from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt
from fastapi import Cookie, Header, HTTPException, status

from core.config import settings
from core.logging_config import get_logger

logger = get_logger(__name__)

REQUIRED_CLAIMS = ("user_id", "role")


def create_jwt_token(
    data: Dict[str, Any],
    secret_key: Optional[str] = None,
    expires_in: int = settings.JWT_ACCESS_TOKEN_EXPIRE_SECONDS,
    issuer: Optional[str] = settings.JWT_ISSUER,
    audience: Optional[str] = settings.JWT_AUDIENCE,
) -> str:
    """
    Create a signed JWT carrying the session claims of a user.

    Tokens are normally issued by the auth provider; this helper exists for
    tooling and tests that need a token the API will accept.

    Args:
        data (dict): Payload data (``user_id``, ``role``, ``email``, ``name``).
        secret_key (str, optional): Signing key, defaults to settings.
        expires_in (int): Expiry time in seconds.
        issuer (str, optional): 'iss' claim.
        audience (str, optional): 'aud' claim.

    Returns:
        str: Encoded JWT token.
    """
    if not data:
        raise ValueError("JWT payload cannot be empty.")

    now = datetime.now(timezone.utc)
    payload = {
        **data,
        "exp": now + timedelta(seconds=expires_in),
        "iat": now,
        "nbf": now,
    }
    if issuer:
        payload["iss"] = issuer
    if audience:
        payload["aud"] = audience

    try:
        return jwt.encode(
            payload,
            secret_key or settings.JWT_SECRET_KEY,
            algorithm=settings.JWT_ALGORITHM,
        )
    except Exception as e:
        logger.exception("JWT encoding failed.")
        raise RuntimeError(f"JWT encoding failed: {e}") from e


def verify_jwt_token(
    token: str,
    secret_key: Optional[str] = None,
    audience: Optional[str] = None,
    issuer: Optional[str] = None,
) -> Dict[str, Any]:
    """
    Verify and decode a JWT.

    Raises:
        ValueError: token missing, expired, or with wrong audience/issuer.
        RuntimeError: any other invalid token.
    """
    if not token:
        raise ValueError("JWT token is required.")

    options = {
        "verify_signature": True,
        "verify_exp": True,
        "verify_aud": audience is not None,
        "verify_iss": issuer is not None,
    }

    try:
        return jwt.decode(
            token,
            secret_key or settings.JWT_SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            audience=audience,
            issuer=issuer,
            options=options,
        )

    except jwt.ExpiredSignatureError as exc:
        logger.warning("JWT token has expired.")
        raise ValueError("JWT token has expired.") from exc

    except jwt.InvalidAudienceError as exc:
        logger.warning("Invalid audience in JWT token.")
        raise ValueError("Invalid audience in JWT token.") from exc

    except jwt.InvalidIssuerError as exc:
        logger.warning("Invalid issuer in JWT token.")
        raise ValueError("Invalid issuer in JWT token.") from exc

    except jwt.InvalidTokenError as exc:
        logger.warning(f"Invalid JWT token: {exc}")
        raise RuntimeError(f"Invalid JWT token: {exc}") from exc


def get_current_user(
    access_token: Optional[str] = Cookie(None),
    authorization: Optional[str] = Header(None),
) -> Dict[str, Any]:
    """
    Retrieve and verify the session token from cookie or Authorization header.

    Priority:
        1. Cookie: 'access_token'
        2. Header: 'Authorization: Bearer <token>'

    Returns:
        dict: Decoded JWT payload (``user_id``, ``role``, ...)

    Raises:
        HTTPException 401: If token is missing or invalid.
    """
    token = access_token

    if not token and authorization:
        if authorization.startswith("Bearer "):
            token = authorization[7:]
        else:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid Authorization header format.",
            )

    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )

    try:
        payload = verify_jwt_token(
            token=token,
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
        )
    except ValueError as ve:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED, detail=str(ve)
        ) from ve
    except RuntimeError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Invalid or expired token. {str(e)}",
        ) from e

    missing = [claim for claim in REQUIRED_CLAIMS if not payload.get(claim)]
    if missing:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"Token is missing claims: {', '.join(missing)}.",
        )
    return payload
