"""
Request/response helpers for API handlers.
"""

from enum import Enum
from typing import Any, Optional, Type, TypeVar
from uuid import UUID

from aiohttp import web
from pydantic import BaseModel

from core.domain.exceptions import FormValidationError

E = TypeVar("E", bound=Enum)


def dump(obj: Any) -> Any:
    """Pydantic models (and lists/dicts of them) to JSON-safe data"""
    if isinstance(obj, BaseModel):
        return obj.model_dump(mode="json")
    if isinstance(obj, dict):
        return {str(k): dump(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [dump(item) for item in obj]
    return obj


def json_ok(obj: Any, status: int = 200) -> web.Response:
    return web.json_response(dump(obj), status=status)


def parse_uuid(value: Optional[str], field: str = "id") -> UUID:
    try:
        return UUID(str(value))
    except ValueError:
        raise FormValidationError({field: "Must be a valid id"})


def parse_enum(enum_cls: Type[E], value: Optional[str], field: str) -> Optional[E]:
    if value in (None, ""):
        return None
    try:
        return enum_cls(value)
    except ValueError:
        allowed = ", ".join(member.value for member in enum_cls)
        raise FormValidationError({field: f"Must be one of: {allowed}"})


def parse_int(value: Optional[str], field: str) -> Optional[int]:
    if value in (None, ""):
        return None
    try:
        return int(value)
    except ValueError:
        raise FormValidationError({field: "Must be a number"})


async def read_json(request: web.Request) -> dict:
    data = await request.json()
    if not isinstance(data, dict):
        raise FormValidationError({"body": "Expected a JSON object"})
    return data
