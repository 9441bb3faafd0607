from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from storekeeper.utils import validation

from . import store_rules


class UserBase(BaseModel):
    name: str
    email: str


class UserWrite(BaseModel):
    """Body of POST /users and PUT /users/{id}: every field is replaced."""
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("name", mode="before")
    @classmethod
    def _validate_name(cls, v: Any):
        return validation.name_rule(v)

    @field_validator("email", mode="before")
    @classmethod
    def _validate_email(cls, v: Any, info: ValidationInfo):
        return store_rules.unique_email(validation.email_address(v), info)

    @field_validator("password", mode="before")
    @classmethod
    def _validate_password(cls, v: Any):
        return validation.password_rule(v)


class User(UserBase):
    id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
