from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from phoneauth.application.use_cases.users.get_current_user import GetCurrentUserUseCase
from phoneauth.application.use_cases.users.login_user import LoginUserUseCase
from phoneauth.application.use_cases.users.logout_user import LogoutUserUseCase
from phoneauth.application.use_cases.users.refresh_token import RefreshTokenUseCase
from phoneauth.application.use_cases.users.register_user import (
    RegisterUserUseCase, RegistrationInput)
from phoneauth.domain.users.exceptions import (InvalidCredentialsError,
                                               TokenInvalidError,
                                               UnauthorizedError,
                                               UserAlreadyExistsError,
                                               UserNotFoundError)


def _registration(phone: str = "312345678", email: str | None = None) -> RegistrationInput:
    return RegistrationInput(
        first_name="A",
        last_name="B",
        phone=phone,
        email=email,
        password="abc123!",
    )


@pytest.fixture()
def register(users, tokens, hasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


@pytest.fixture()
def login(users, tokens, hasher) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, tokens=tokens, password_hasher=hasher)


@pytest.fixture()
def logout(tokens) -> LogoutUserUseCase:
    return LogoutUserUseCase(tokens=tokens)


@pytest.fixture()
def refresh(users, tokens) -> RefreshTokenUseCase:
    return RefreshTokenUseCase(users=users, tokens=tokens)


@pytest.fixture()
def me(users, tokens) -> GetCurrentUserUseCase:
    return GetCurrentUserUseCase(users=users, tokens=tokens)


def test_register_user_success(register, users, tokens) -> None:
    result = register.execute(_registration())

    assert result.user.phone == "312345678"
    assert result.user.password_hash == "hashed:abc123!"
    assert result.token
    assert users.find_by_phone("312345678") is not None
    assert tokens.resolve(result.token).user_id == result.user.id


def test_register_user_duplicate_phone_raises(register) -> None:
    register.execute(_registration())

    with pytest.raises(UserAlreadyExistsError) as exc_info:
        register.execute(_registration())

    assert exc_info.value.status == 409


def test_register_user_duplicate_email_raises(register) -> None:
    register.execute(_registration(phone="312345678", email="a@example.com"))

    with pytest.raises(UserAlreadyExistsError):
        register.execute(_registration(phone="512345678", email="a@example.com"))


def test_login_user_success(register, login) -> None:
    register.execute(_registration())

    envelope = login.execute("312345678", "abc123!")

    assert envelope.token_type == "bearer"
    assert envelope.expires_in == 60 * 60
    assert envelope.user.phone == "312345678"
    assert "password_hash" not in envelope.to_dict()["user"]


def test_login_expires_in_is_minutes_times_sixty(users, tokens, register, login) -> None:
    tokens.ttl_minutes = 15
    register.execute(_registration())

    assert login.execute("312345678", "abc123!").expires_in == 900


def test_login_wrong_password_and_unknown_phone_look_the_same(register, login) -> None:
    register.execute(_registration())

    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("312345678", "wrong1!")
    with pytest.raises(InvalidCredentialsError) as unknown_phone:
        login.execute("912345678", "abc123!")

    assert wrong_password.value.to_dict() == unknown_phone.value.to_dict() == {
        "error": "Unauthorized"
    }
    assert wrong_password.value.status == 401


def test_logout_user_revokes_token(register, logout, me) -> None:
    result = register.execute(_registration())

    logout.execute(result.token)

    with pytest.raises(TokenInvalidError):
        me.execute(result.token)


def test_logout_is_idempotent(register, logout) -> None:
    result = register.execute(_registration())

    logout.execute(result.token)
    logout.execute(result.token)
    logout.execute("never-issued")


def test_logout_without_token_is_unauthorized(logout) -> None:
    with pytest.raises(UnauthorizedError):
        logout.execute(None)


def test_refresh_rotates_token(register, refresh, me) -> None:
    result = register.execute(_registration())

    envelope = refresh.execute(result.token)

    assert envelope.access_token != result.token
    assert envelope.user.id == result.user.id
    assert me.execute(envelope.access_token).id == result.user.id
    with pytest.raises(TokenInvalidError):
        me.execute(result.token)


def test_refresh_rejects_revoked_token(register, logout, refresh) -> None:
    result = register.execute(_registration())
    logout.execute(result.token)

    with pytest.raises(UnauthorizedError):
        refresh.execute(result.token)


def test_refresh_rejects_expired_token(register, tokens, refresh) -> None:
    result = register.execute(_registration())
    tokens.expire(result.token)

    with pytest.raises(UnauthorizedError):
        refresh.execute(result.token)


def test_refresh_without_token_is_unauthorized(refresh) -> None:
    with pytest.raises(UnauthorizedError):
        refresh.execute("")


def test_me_returns_owner(register, me) -> None:
    result = register.execute(_registration(email="a@example.com"))

    user = me.execute(result.token)

    assert user.id == result.user.id
    assert user.email == "a@example.com"


@pytest.mark.parametrize("token", [None, "", "garbage"])
def test_me_rejects_missing_or_unknown_token(me, token) -> None:
    with pytest.raises(TokenInvalidError) as exc_info:
        me.execute(token)

    assert exc_info.value.to_dict() == {"error": "Token is invalid"}


def test_me_rejects_expired_token(register, tokens, me) -> None:
    result = register.execute(_registration())
    tokens.expire(result.token)

    with pytest.raises(TokenInvalidError):
        me.execute(result.token)


def test_me_reports_missing_owner_separately(register, users, me) -> None:
    result = register.execute(_registration())
    users.remove(result.user.id)

    with pytest.raises(UserNotFoundError) as exc_info:
        me.execute(result.token)

    assert exc_info.value.status == 404
    assert exc_info.value.to_dict() == {"error": "User not found"}


def test_login_unknown_phone_still_runs_password_check(users, tokens, hasher) -> None:
    spy = MagicMock(wraps=hasher)
    login = LoginUserUseCase(users=users, tokens=tokens, password_hasher=spy)

    with pytest.raises(InvalidCredentialsError):
        login.execute("912345678", "abc123!")

    spy.verify.assert_called_once()


def test_register_removes_user_when_token_issue_fails(users, tokens, hasher) -> None:
    failing_tokens = MagicMock(wraps=tokens)
    failing_tokens.issue_for_user.side_effect = RuntimeError("db down")
    register = RegisterUserUseCase(users=users, tokens=failing_tokens, password_hasher=hasher)

    with pytest.raises(RuntimeError):
        register.execute(_registration())

    assert users.find_by_phone("312345678") is None
    retry = RegisterUserUseCase(users=users, tokens=tokens, password_hasher=hasher)
    assert retry.execute(_registration()).token
