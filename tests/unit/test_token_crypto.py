from storekeeper.utils.token_crypto import (
    TOKEN_PREFIX,
    build_token_string,
    generate_token,
    hash_secret,
    parse_token,
    verify_secret,
)


def test_parse_token_and_build_roundtrip():
    tid = "abc123def4567890"
    secret = "s3cr3t_part_with_underscores"
    token = build_token_string(tid, secret)
    parsed = parse_token(token)
    assert parsed and parsed.token_id == tid and parsed.secret == secret

    assert parse_token("") is None
    assert parse_token("notvalid") is None
    assert parse_token(TOKEN_PREFIX + "nounderscore") is None
    assert parse_token(TOKEN_PREFIX + "_secretonly") is None
    assert parse_token(TOKEN_PREFIX + "tid_") is None


def test_hash_and_verify_secret():
    secret = "topsecret"
    h = hash_secret(secret)
    assert h != secret
    assert verify_secret(secret, h) is True
    assert verify_secret("wrong", h) is False
    assert verify_secret("", h) is False
    assert verify_secret(secret, "") is False


def test_generate_token_is_parseable_and_unique():
    tid, sec, token = generate_token()
    assert token.startswith(TOKEN_PREFIX)
    parsed = parse_token(token)
    assert parsed.token_id == tid
    assert parsed.secret == sec
    assert generate_token()[2] != token
