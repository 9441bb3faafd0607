from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from storekeeper.utils import validation

from . import store_rules


class _ItemRules(BaseModel):
    """Shared name/description rules; subclasses declare fields in reporting order."""

    @field_validator("name", mode="before", check_fields=False)
    @classmethod
    def _validate_name(cls, v: Any):
        return validation.name_rule(v)

    @field_validator("description", mode="before", check_fields=False)
    @classmethod
    def _validate_description(cls, v: Any):
        return validation.description_rule(v)


class ItemCreate(_ItemRules):
    storage_id: Optional[int] = Field(default=None, validate_default=True)
    name: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("storage_id", mode="before")
    @classmethod
    def _validate_storage_id(cls, v: Any, info: ValidationInfo):
        return store_rules.existing_storage(validation.reference_id(v, "storage_id"), info)


class ItemUpdate(_ItemRules):
    # Optional on update; validated only when supplied
    storage_id: Optional[int] = None
    name: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = Field(default=None, validate_default=True)

    @field_validator("storage_id", mode="before")
    @classmethod
    def _validate_storage_id(cls, v: Any, info: ValidationInfo):
        return store_rules.existing_storage(validation.optional_reference_id(v, "storage_id"), info)


class UserItemCreate(_ItemRules):
    """Body of POST /users/items; the storage comes from the caller, never the body."""
    name: Optional[str] = Field(default=None, validate_default=True)
    description: Optional[str] = Field(default=None, validate_default=True)


class Item(BaseModel):
    id: int
    storage_id: int
    name: str
    description: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
