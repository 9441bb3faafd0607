from typing import Any, Optional
from pydantic import BaseModel, Field, ValidationInfo, field_validator, model_validator

from storekeeper.utils import validation

from . import store_rules


class RegisterRequest(BaseModel):
    name: Optional[str] = Field(default=None, validate_default=True)
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)
    password_confirmation: Optional[str] = None

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

    @field_validator("password_confirmation", mode="before")
    @classmethod
    def _coerce_confirmation(cls, v: Any):
        # Compared against password below; a non-string simply never matches
        return v if isinstance(v, str) else None

    @model_validator(mode="after")
    def _password_confirmed(self):
        if self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match.")
        return self


class LoginRequest(BaseModel):
    email: Optional[str] = Field(default=None, validate_default=True)
    password: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("email", mode="before")
    @classmethod
    def _validate_email(cls, v: Any):
        return validation.email_address(v)

    @field_validator("password", mode="before")
    @classmethod
    def _validate_password(cls, v: Any):
        return validation.require_string(v, "password")


class AuthPayload(BaseModel):
    name: str
    email: str
    token: str  # one-time plaintext
