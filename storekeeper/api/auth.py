"""
Register/login/logout endpoints for both realms.

The two realms expose the same three routes under their own prefix; each
router is bound to one realm and its logout only accepts that realm's token.
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from storekeeper.api.deps import REALM_GUARDS, login_body, validated_body
from storekeeper.api.responses import envelope
from storekeeper.db import schemas
from storekeeper.db.database import get_db
from storekeeper.services.auth_service import AuthService
from storekeeper.utils.realms import Principal, Realm


def build_auth_router(realm: Realm, prefix: str) -> APIRouter:
    router = APIRouter(prefix=prefix, tags=[f"{realm.value}-auth"])
    guard = REALM_GUARDS[realm]
    register_body = validated_body(schemas.RegisterRequest, realm=realm)

    @router.post("/register", name=f"{realm.value}s.register")
    def register(
        payload: schemas.RegisterRequest = Depends(register_body),
        db: Session = Depends(get_db),
    ):
        result = AuthService(db, realm).register(payload)
        return envelope(
            result.model_dump(),
            f"The {realm.value} registered successfully",
            status_code=status.HTTP_201_CREATED,
        )

    @router.post("/login", name=f"{realm.value}s.login")
    def login(
        payload: schemas.LoginRequest = Depends(login_body),
        db: Session = Depends(get_db),
    ):
        result = AuthService(db, realm).login(payload)
        return envelope(result.model_dump(), "Login Successfully", status_code=status.HTTP_202_ACCEPTED)

    @router.post("/logout", name=f"{realm.value}s.logout")
    def logout(
        principal: Principal = Depends(guard),
        db: Session = Depends(get_db),
    ):
        AuthService(db, realm).logout(principal)
        return envelope(None, "Logout Successfully", status_code=status.HTTP_202_ACCEPTED)

    return router


admin_auth_router = build_auth_router(Realm.ADMIN, "/admins/auth")
user_auth_router = build_auth_router(Realm.USER, "/users/auth")
