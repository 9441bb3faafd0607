"""
Response envelope: every outcome, success or failure, has the shape
``{msg, isSuccess, statusCode, payload}``.
"""
from typing import Any, Optional, Type

from fastapi.encoders import jsonable_encoder
from pydantic import BaseModel
from starlette.responses import JSONResponse

from storekeeper.db import schemas
from storekeeper.db.repositories.pagination import PageResult


def envelope(
    payload: Any = None,
    msg: str = "",
    *,
    is_success: bool = True,
    status_code: int = 200,
    headers: Optional[dict] = None,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "msg": msg,
            "isSuccess": is_success,
            "statusCode": status_code,
            "payload": jsonable_encoder(payload),
        },
        headers=headers,
    )


def failure(status_code: int, msg: str, headers: Optional[dict] = None) -> JSONResponse:
    return envelope(None, msg, is_success=False, status_code=status_code, headers=headers)


def serialize(record: Any, schema: Type[BaseModel]) -> dict:
    return schema.model_validate(record).model_dump(mode="json")


def page_payload(result: PageResult, schema: Type[BaseModel]) -> dict:
    page = schemas.Page[schema](
        items=[schema.model_validate(row) for row in result.items],
        total_items=result.total_items,
        total_pages=result.total_pages,
        page=result.page,
        per_page=result.per_page,
    )
    return page.model_dump(mode="json")
