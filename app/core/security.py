from jose import JWTError, jwt
from app.config import settings
from app.core.exceptions import UnauthorizedException


def decode_jwt(token: str) -> dict:
    """
    Decode and validate JWT token using shared SECRET_KEY.

    The user identifier claim is not checked here; it is read (and
    validated) by AccessResolver.resolve_user_id so that a malformed
    identifier degrades to a denied user instead of an exception.

    Args:
        token: JWT access token from Authorization header

    Returns:
        Decoded token payload with 'sub' (user_id), 'exp', etc.

    Raises:
        UnauthorizedException: If token invalid, expired, or malformed
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=["HS256"])

        # Validate expiration (jose checks this automatically)
        exp = payload.get("exp")
        if exp is None:
            raise UnauthorizedException("Token missing expiration")

        return payload

    except JWTError as e:
        raise UnauthorizedException(f"Invalid token: {str(e)}")
