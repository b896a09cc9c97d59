from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from quizhub.core.config import Settings, load_settings
from quizhub.core.errors import Unauthorized


class JWT:
    def __init__(self, settings: Settings = None):
        self.settings = settings or load_settings()

    def encode(self, user_id: str, role: str) -> str:
        expire = datetime.now(timezone.utc) + timedelta(minutes=self.settings.jwt_expire_minutes)
        to_encode = {"sub": user_id, "role": role, "exp": expire}
        return jwt.encode(to_encode, self.settings.jwt_secret_key, algorithm=self.settings.jwt_algorithm)

    def decode(self, token: str) -> dict:
        try:
            payload = jwt.decode(token, self.settings.jwt_secret_key, algorithms=[self.settings.jwt_algorithm])
        except JWTError as exc:
            raise Unauthorized("Invalid or expired token") from exc
        if not payload.get("sub"):
            raise Unauthorized("Invalid token payload")
        return payload
