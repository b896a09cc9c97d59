from pydantic import ConfigDict, Field

from quizhub.models.user import UserRoleEnum
from quizhub.schemas.base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class UserCreateReq(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    username: str = Field(min_length=3, max_length=50)
    email: str = Field(pattern=EMAIL_PATTERN)
    password: str = Field(min_length=6)


class UserLoginReq(CamelModel):
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class RoleUpdateReq(CamelModel):
    role: UserRoleEnum
