# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.user import DISPLAY_NAME_MAX, EMAIL_MAX

# Wire format is camelCase (displayName, userId, isAdmin); Python stays snake_case
_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# -- Requests --------------------------------------------------------------


class RegisterRequest(BaseModel):
    model_config = _CAMEL

    email: str = Field(max_length=EMAIL_MAX)
    display_name: str = Field(max_length=DISPLAY_NAME_MAX)
    password: str


class LoginRequest(BaseModel):
    model_config = _CAMEL

    email: str
    password: str


# -- Responses -------------------------------------------------------------


class AuthResponse(BaseModel):
    model_config = _CAMEL

    token: str
    user_id: int
    email: str
    display_name: str
    is_admin: bool


class MeResponse(BaseModel):
    model_config = _CAMEL

    user_id: int
    email: str
    display_name: str
    is_admin: bool
