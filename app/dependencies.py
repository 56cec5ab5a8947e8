from uuid import UUID

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session
from app.core.security import decode_jwt
from app.core.exceptions import UnauthorizedException
from app.database import get_db
from app.services.access_resolver import AccessResolver, EMPTY_USER_ID

security = HTTPBearer()


async def get_current_user_id(
    credentials: HTTPAuthorizationCredentials = Depends(security), db: Session = Depends(get_db)
) -> UUID:
    """
    FastAPI dependency to validate JWT and resolve the caller's user id.

    Flow:
    1. Extract token from Authorization: Bearer <token>
    2. Validate JWT using shared SECRET_KEY
    3. Resolve user id from the 'sub' claim (soft: bad values become EMPTY_USER_ID)
    4. Reject EMPTY_USER_ID, which no membership could ever match

    Raises:
        HTTPException 401: If token invalid, expired, or has no usable user identifier
    """
    try:
        claims = decode_jwt(credentials.credentials)

        user_id = AccessResolver(db).resolve_user_id(claims)
        if user_id == EMPTY_USER_ID:
            raise UnauthorizedException("Token missing user identifier")

        return user_id

    except UnauthorizedException as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        )
