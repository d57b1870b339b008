from geed_api.app.core.security import (
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)


def test_password_hash_roundtrip():
    hashed = hash_password("s3cret!")
    assert hashed != "s3cret!"
    assert verify_password("s3cret!", hashed)
    assert not verify_password("wrong", hashed)


def test_password_hashes_are_salted():
    assert hash_password("same") != hash_password("same")


def test_verify_password_rejects_malformed_hashes():
    assert not verify_password("x", None)
    assert not verify_password("x", "")
    assert not verify_password("x", "no-separator")
    assert not verify_password("x", "zz$zz")


def test_token_roundtrip():
    token = create_access_token({"sub": "42", "role": "admin"})
    payload = decode_access_token(token)
    assert payload["sub"] == "42"
    assert payload["role"] == "admin"
    assert "exp" in payload


def test_tampered_token_is_rejected():
    token = create_access_token({"sub": "42"})
    header, payload, signature = token.split(".")
    forged = create_access_token({"sub": "1"}).split(".")[1]
    assert decode_access_token(f"{header}.{forged}.{signature}") is None
    assert decode_access_token("not-a-token") is None
    assert decode_access_token("a.b.c") is None


def test_expired_token_is_rejected():
    token = create_access_token({"sub": "42"}, expires_delta=-10)
    assert decode_access_token(token) is None
