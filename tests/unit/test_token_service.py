from datetime import datetime, timedelta, timezone

import pytest

from storekeeper.db import models
from storekeeper.db.repositories import tokens as token_repo
from storekeeper.services.token_service import TokenService
from storekeeper.utils.realms import AdminPrincipal, Realm, UserPrincipal
from storekeeper.utils.settings import refresh_settings_cache
from storekeeper.utils.token_crypto import parse_token


def test_issue_persists_only_the_hash(db_session, user_account):
    token = TokenService(db_session).issue(Realm.USER, user_account.id)
    parsed = parse_token(token)
    record = token_repo.get_by_token_id(db_session, token_id=parsed.token_id)
    assert record.realm == "user"
    assert record.principal_id == user_account.id
    assert parsed.secret not in record.token_hash
    assert record.expires_at is None


def test_validate_resolves_realm_tagged_principal(db_session, admin_factory, user_account):
    admin = admin_factory()
    service = TokenService(db_session)

    admin_principal = service.validate(service.issue(Realm.ADMIN, admin.id))
    user_principal = service.validate(service.issue(Realm.USER, user_account.id))

    assert isinstance(admin_principal, AdminPrincipal)
    assert admin_principal.id == admin.id
    assert isinstance(user_principal, UserPrincipal)
    assert user_principal.id == user_account.id


def test_validate_stamps_last_used(db_session, user_account):
    service = TokenService(db_session)
    token = service.issue(Realm.USER, user_account.id)
    assert service.validate(token) is not None
    record = token_repo.get_by_token_id(db_session, token_id=parse_token(token).token_id)
    assert record.last_used_at is not None


@pytest.mark.parametrize("presented", [None, "", "garbage", "skt_nounderscore", "skt_0000000000000000_secret"])
def test_validate_rejects_malformed_or_unknown(db_session, presented):
    assert TokenService(db_session).validate(presented) is None


def test_validate_rejects_wrong_secret(db_session, user_account):
    token = TokenService(db_session).issue(Realm.USER, user_account.id)
    parsed = parse_token(token)
    forged = f"skt_{parsed.token_id}_{parsed.secret}x"
    assert TokenService(db_session).validate(forged) is None


def test_validate_rejects_expired(db_session, user_account):
    service = TokenService(db_session)
    token = service.issue(Realm.USER, user_account.id)
    record = token_repo.get_by_token_id(db_session, token_id=parse_token(token).token_id)
    record.expires_at = datetime.now(timezone.utc) - timedelta(minutes=1)
    db_session.commit()
    assert service.validate(token) is None


def test_ttl_setting_sets_expiry(db_session, user_account, monkeypatch):
    monkeypatch.setenv("TOKEN_TTL_MINUTES", "30")
    refresh_settings_cache()
    try:
        token = TokenService(db_session).issue(Realm.USER, user_account.id)
        record = token_repo.get_by_token_id(db_session, token_id=parse_token(token).token_id)
        assert record.expires_at is not None
        assert TokenService(db_session).validate(token) is not None
    finally:
        monkeypatch.delenv("TOKEN_TTL_MINUTES")
        refresh_settings_cache()


def test_validate_rejects_token_of_deleted_principal(db_session, user_factory):
    user = user_factory(email="gone@mail.com")
    service = TokenService(db_session)
    token = service.issue(Realm.USER, user.id)
    db_session.delete(user)
    db_session.commit()
    assert service.validate(token) is None


def test_principals_keep_their_realm(db_session, admin_factory, user_account):
    admin = admin_factory()
    service = TokenService(db_session)
    user_principal = service.validate(service.issue(Realm.USER, user_account.id))
    admin_principal = service.validate(service.issue(Realm.ADMIN, admin.id))
    assert user_principal.realm == Realm.USER
    assert admin_principal.realm == Realm.ADMIN
    assert user_principal != admin_principal


def test_revoke_deletes_only_that_token(db_session, user_account):
    service = TokenService(db_session)
    first = service.issue(Realm.USER, user_account.id)
    second = service.issue(Realm.USER, user_account.id)

    assert service.revoke(parse_token(first).token_id) is True
    assert service.validate(first) is None
    assert service.validate(second) is not None
    assert service.revoke(parse_token(first).token_id) is False


def test_revoke_all_for_principal(db_session, admin_factory, user_account):
    admin = admin_factory()
    service = TokenService(db_session)
    user_tokens = [service.issue(Realm.USER, user_account.id) for _ in range(2)]
    admin_token = service.issue(Realm.ADMIN, admin.id)

    assert service.revoke_all(Realm.USER, user_account.id) == 2
    assert all(service.validate(t) is None for t in user_tokens)
    assert service.validate(admin_token) is not None
    assert db_session.query(models.AccessToken).count() == 1
