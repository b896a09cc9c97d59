import logging

from beanie.operators import Or
from pymongo.errors import DuplicateKeyError

from quizhub.core.config import load_settings
from quizhub.core.errors import InvalidArgument, Unauthorized
from quizhub.helpers.jwt_handler import JWT
from quizhub.helpers.password import PasswordHandler
from quizhub.models.user import User, UserRoleEnum
from quizhub.schemas.req.user import UserCreateReq, UserLoginReq
from quizhub.schemas.res.user import AuthResponse, UserResponse, build_user_response

logger = logging.getLogger(__name__)


class AuthService:
    def _issue(self, user: User) -> AuthResponse:
        token = JWT().encode(str(user.id), user.role.value)
        return AuthResponse(token=token, user=build_user_response(user))

    async def register(self, user_data: UserCreateReq) -> AuthResponse:
        email = user_data.email.strip().lower()
        existing = await User.find_one(Or(User.email == email, User.username == user_data.username))
        if existing:
            raise InvalidArgument("User already exists", {"email": email, "username": user_data.username})

        role = UserRoleEnum.USER
        if email in load_settings().admin_emails:
            role = UserRoleEnum.ADMIN
        user = User(
            username=user_data.username,
            email=email,
            password=PasswordHandler.hash(user_data.password),
            role=role,
        )
        try:
            await user.insert()
        except DuplicateKeyError as exc:
            raise InvalidArgument("User already exists", {"email": email}) from exc
        logger.info("Registered user %s (%s) as %s", user.id, user.username, role.value)
        return self._issue(user)

    async def login(self, credentials: UserLoginReq) -> AuthResponse:
        user = await User.find_one(User.email == credentials.email.strip().lower())
        if not user or not PasswordHandler.verify(credentials.password, user.password):
            raise Unauthorized("Invalid credentials")
        return self._issue(user)

    async def get_me(self, actor: User) -> UserResponse:
        return build_user_response(actor)
