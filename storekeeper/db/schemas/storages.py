from datetime import datetime
from typing import Any, Optional
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from storekeeper.utils import validation

from . import store_rules


class StorageWrite(BaseModel):
    user_id: Optional[int] = Field(default=None, validate_default=True)

    @field_validator("user_id", mode="before")
    @classmethod
    def _validate_user_id(cls, v: Any, info: ValidationInfo):
        return store_rules.free_storage_owner(validation.reference_id(v, "user_id"), info)


class Storage(BaseModel):
    id: int
    user_id: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None
    model_config = ConfigDict(from_attributes=True)
