from typing import Optional

from beanie import PydanticObjectId
from bson import ObjectId
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from quizhub.core.errors import Unauthorized
from quizhub.helpers.jwt_handler import JWT
from quizhub.models.user import User

bearer_scheme = HTTPBearer(auto_error=False)


async def _resolve_user(token: str) -> User:
    payload = JWT().decode(token)
    user_id = payload.get("sub")
    if not ObjectId.is_valid(user_id):
        raise Unauthorized("Invalid token payload")
    # Role comes from the stored user, not from the token claims
    user = await User.get(PydanticObjectId(user_id))
    if not user:
        raise Unauthorized("User no longer exists")
    return user


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> User:
    if credentials is None or not credentials.credentials:
        raise Unauthorized("Not authenticated")
    return await _resolve_user(credentials.credentials)


async def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[User]:
    """Public routes: anonymous callers get None, bad tokens are still rejected."""
    if credentials is None or not credentials.credentials:
        return None
    return await _resolve_user(credentials.credentials)
