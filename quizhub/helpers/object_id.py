from beanie import PydanticObjectId
from bson import ObjectId

from quizhub.core.errors import InvalidArgument


def parse_object_id(value: str, field: str = "id") -> PydanticObjectId:
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidArgument(f"Invalid {field} format", {field: value})
    return PydanticObjectId(value)
