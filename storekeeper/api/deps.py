"""
API dependency helpers.

- Realm guards: resolve the bearer token to a principal and reject any caller
  whose token does not belong to the realm the route requires.
- Route-bound lookups: load the resource named by the path id or answer 404
  before the body is looked at.
- Body validation and pagination parameters.
"""
import json
from typing import Any, Callable, Dict, Optional, Tuple, Type

from fastapi import Depends, Header, Path, Query, Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.orm import Session

from storekeeper.api.exception_handlers import first_error_message
from storekeeper.db import models, schemas
from storekeeper.db.database import get_db
from storekeeper.errors import AuthenticationError, NotFoundError, ValidationError
from storekeeper.services.item_service import ItemService
from storekeeper.services.storage_service import StorageService
from storekeeper.services.token_service import TokenService
from storekeeper.services.user_service import UserService
from storekeeper.utils.realms import Principal, Realm
from storekeeper.utils.settings import get_settings
from storekeeper.utils.validation import MAX_ID

# Keeps (page - 1) * per_page within a 64-bit OFFSET
MAX_PAGE = 2**31 - 1


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    if authorization and authorization.lower().startswith("bearer "):
        return authorization[7:].strip() or None
    return None


class RealmGuard:
    """Dependency that admits only principals of one realm.

    Realms are a partition, not a hierarchy: an admin token is as foreign to
    a user route as no token at all.
    """

    def __init__(self, realm: Realm):
        self.realm = realm

    def __call__(
        self,
        db: Session = Depends(get_db),
        authorization: Optional[str] = Header(default=None),
    ) -> Principal:
        token = bearer_token(authorization)
        if not token:
            raise AuthenticationError()
        principal = TokenService(db).validate(token)
        if principal is None or principal.realm != self.realm:
            raise AuthenticationError()
        return principal


# Route policy: each protected route depends on exactly one of these.
REALM_GUARDS: Dict[Realm, RealmGuard] = {realm: RealmGuard(realm) for realm in Realm}
require_admin = REALM_GUARDS[Realm.ADMIN]
require_user = REALM_GUARDS[Realm.USER]


def page_params(
    page: int = Query(default=1, ge=1, le=MAX_PAGE),
    per_page: Optional[int] = Query(default=None, ge=1),
) -> Tuple[int, int]:
    settings = get_settings()
    return page, min(per_page or settings.page_size, settings.max_page_size)


def _resource_id(raw: str) -> int:
    # Anything that cannot name a row is a 404, raised before the body is validated
    if not (raw.isascii() and raw.isdigit()):
        raise NotFoundError()
    resource_id = int(raw)
    if resource_id > MAX_ID:
        raise NotFoundError()
    return resource_id


def bound_user(user_id: str = Path(...), db: Session = Depends(get_db)) -> models.User:
    return UserService(db).read(_resource_id(user_id))


def bound_storage(storage_id: str = Path(...), db: Session = Depends(get_db)) -> models.Storage:
    return StorageService(db).read(_resource_id(storage_id))


def bound_item(item_id: str = Path(...), db: Session = Depends(get_db)) -> models.Item:
    return ItemService(db).read(_resource_id(item_id))


async def json_object_body(request: Request) -> Dict[str, Any]:
    """Read the request body as a JSON object; an absent body reads as ``{}``.

    Parsed only after the realm guard and route-bound lookups have run.
    """
    raw = await request.body()
    try:
        payload = json.loads(raw) if raw else None
    except ValueError:
        raise ValidationError()
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError()
    return payload


def validated_body(
    model: Type[BaseModel],
    *,
    bound: Optional[Callable[..., Any]] = None,
    **context: Any,
) -> Callable[..., BaseModel]:
    """Build a dependency that validates the JSON body against ``model``.

    The session, the record bound to the route (``bound``) and any extra
    ``context`` reach the schema's validators, so rules that need the store
    are checked field by field with the shape rules.
    """

    def _validate(payload: Dict[str, Any], db: Session, current: Any) -> BaseModel:
        try:
            return model.model_validate(payload, context={"db": db, "current": current, **context})
        except PydanticValidationError as e:
            raise ValidationError(first_error_message(e.errors()))

    if bound is None:
        def _dependency(
            payload: Dict[str, Any] = Depends(json_object_body),
            db: Session = Depends(get_db),
        ) -> BaseModel:
            return _validate(payload, db, None)
    else:
        def _dependency(
            current: Any = Depends(bound),
            payload: Dict[str, Any] = Depends(json_object_body),
            db: Session = Depends(get_db),
        ) -> BaseModel:
            return _validate(payload, db, current)

    _dependency.__name__ = f"validated_{model.__name__}"
    return _dependency


login_body = validated_body(schemas.LoginRequest)
user_create_body = validated_body(schemas.UserWrite)
user_update_body = validated_body(schemas.UserWrite, bound=bound_user)
storage_create_body = validated_body(schemas.StorageWrite)
storage_update_body = validated_body(schemas.StorageWrite, bound=bound_storage)
item_create_body = validated_body(schemas.ItemCreate)
item_update_body = validated_body(schemas.ItemUpdate)
user_item_body = validated_body(schemas.UserItemCreate)
