from __future__ import annotations

from typing import cast

import pytest

from bareddit.application.use_cases.users import (ChangePasswordUseCase,
                                                  CurrentUserUseCase,
                                                  ForgotPasswordUseCase,
                                                  LoginUserUseCase,
                                                  LogoutUserUseCase,
                                                  RegisterUserUseCase)
from bareddit.application.use_cases.users.forgot_password import RESET_SUBJECT
from bareddit.application.use_cases.users.register_user import (GENERIC_FAILURE,
                                                                USERNAME_TAKEN)
from bareddit.domain.users.entities import FieldError, User
from bareddit.domain.users.exceptions import KeyValueStoreError, MailDeliveryError
from fakes import (DeterministicHasher, FakeSession, InMemoryResetTokens,
                   InMemoryUserRepository, RecordingMailNotifier)


@pytest.fixture()
def register(users: InMemoryUserRepository, hasher: DeterministicHasher) -> RegisterUserUseCase:
    return RegisterUserUseCase(users=users, password_hasher=hasher)


@pytest.fixture()
def login(users: InMemoryUserRepository, hasher: DeterministicHasher) -> LoginUserUseCase:
    return LoginUserUseCase(users=users, password_hasher=hasher)


@pytest.fixture()
def alice(register: RegisterUserUseCase) -> User:
    result = register.execute("alice", "alice@x.com", "password1", FakeSession())
    return cast(User, result.user)


def test_register_user_success_establishes_session(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    session = FakeSession()

    result = register.execute("alice", "alice@x.com", "password1", session)

    assert result.ok
    assert result.errors == []
    user = cast(User, result.user)
    assert user.username == "alice"
    assert user.password_hash == "hashed:password1"
    assert session.user_id == user.id
    assert len(users) == 1


def test_register_validation_error_does_not_persist(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    session = FakeSession()

    result = register.execute("al", "al@x.com", "password1", session)

    assert result.user is None
    assert result.errors == [FieldError("username", "Length must be greater than 2")]
    assert session.user_id is None
    assert len(users) == 0


def test_register_duplicate_username_reports_taken(
    register: RegisterUserUseCase, users: InMemoryUserRepository, alice: User
) -> None:
    session = FakeSession()

    result = register.execute("alice", "other@x.com", "another1", session)

    assert result.errors == [FieldError("username", USERNAME_TAKEN)]
    assert session.user_id is None
    assert users.find_by_username("alice") == alice


def test_register_duplicate_email_reports_taken(
    register: RegisterUserUseCase, alice: User
) -> None:
    result = register.execute("bob", "alice@x.com", "password1", FakeSession())

    assert result.errors == [FieldError("username", USERNAME_TAKEN)]


def test_register_persistence_failure_is_generic(
    register: RegisterUserUseCase, users: InMemoryUserRepository
) -> None:
    users.fail_next_add = "OperationalError"
    session = FakeSession()

    result = register.execute("alice", "alice@x.com", "password1", session)

    assert result.errors == [FieldError("username", GENERIC_FAILURE)]
    assert session.user_id is None


@pytest.mark.parametrize("identifier", ["alice", "alice@x.com"])
def test_login_user_success(login: LoginUserUseCase, alice: User, identifier: str) -> None:
    session = FakeSession()

    result = login.execute(identifier, "password1", session)

    assert result.user == alice
    assert session.user_id == alice.id


def test_login_unknown_identifier(login: LoginUserUseCase, alice: User) -> None:
    session = FakeSession()

    result = login.execute("bob@x.com", "password1", session)

    assert result.errors == [FieldError("usernameOrEmail", "That username doesn't exist")]
    assert session.user_id is None


def test_login_username_lookup_does_not_match_email(login: LoginUserUseCase, alice: User) -> None:
    result = login.execute("alice@x.co", "password1", FakeSession())

    assert result.errors[0].field == "usernameOrEmail"


def test_login_wrong_password_sets_no_session(login: LoginUserUseCase, alice: User) -> None:
    session = FakeSession()

    result = login.execute("alice", "wrong-password", session)

    assert result.errors == [FieldError("password", "Incorrect password")]
    assert session.user_id is None


def test_logout_destroys_session() -> None:
    session = FakeSession(user_id=1)

    assert LogoutUserUseCase().execute(session) is True
    assert session.destroyed
    assert session.user_id is None


def test_logout_anonymous_is_ok() -> None:
    assert LogoutUserUseCase().execute(FakeSession()) is True


def test_logout_store_failure_returns_false() -> None:
    session = FakeSession(user_id=1, fail_destroy=True)

    assert LogoutUserUseCase().execute(session) is False
    assert session.user_id == 1


def test_current_user(users: InMemoryUserRepository, alice: User) -> None:
    use_case = CurrentUserUseCase(users=users)

    assert use_case.execute(FakeSession(user_id=alice.id)) == alice
    assert use_case.execute(FakeSession()) is None
    assert use_case.execute(FakeSession(user_id=999)) is None


def _forgot(
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    mailer: RecordingMailNotifier,
) -> ForgotPasswordUseCase:
    return ForgotPasswordUseCase(
        users=users,
        reset_tokens=reset_tokens,
        mailer=mailer,
        frontend_url="http://localhost:3000",
    )


def test_forgot_password_sends_link(
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    mailer: RecordingMailNotifier,
    alice: User,
) -> None:
    assert _forgot(users, reset_tokens, mailer).execute("alice@x.com") is True

    assert reset_tokens.tokens == {"token-1": alice.id}
    assert mailer.sent == [
        (
            "alice@x.com",
            RESET_SUBJECT,
            '<a href="http://localhost:3000/change-password/token-1">reset password</a>',
        )
    ]


def test_forgot_password_unknown_email_has_no_side_effects(
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    mailer: RecordingMailNotifier,
) -> None:
    assert _forgot(users, reset_tokens, mailer).execute("nobody@x.com") is True

    assert reset_tokens.tokens == {}
    assert mailer.sent == []


def test_forgot_password_swallows_delivery_failure(
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    alice: User,
) -> None:
    class BrokenMailer:
        def send(self, to: str, subject: str, html: str) -> None:
            raise MailDeliveryError()

    use_case = ForgotPasswordUseCase(
        users=users,
        reset_tokens=reset_tokens,
        mailer=BrokenMailer(),
        frontend_url="http://localhost:3000",
    )

    assert use_case.execute("alice@x.com") is True


@pytest.fixture()
def change_password(
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    hasher: DeterministicHasher,
) -> ChangePasswordUseCase:
    return ChangePasswordUseCase(users=users, reset_tokens=reset_tokens, password_hasher=hasher)


def test_change_password_success_consumes_token(
    change_password: ChangePasswordUseCase,
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    alice: User,
) -> None:
    token = reset_tokens.issue(alice.id)
    session = FakeSession()

    result = change_password.execute(token, "newpass1", session)

    user = cast(User, result.user)
    assert user.id == alice.id
    assert user.password_hash == "hashed:newpass1"
    assert session.user_id == alice.id
    assert token not in reset_tokens.tokens

    second = change_password.execute(token, "newpass2", FakeSession())
    assert second.errors == [FieldError("token", "token expired")]
    assert cast(User, users.find_by_id(alice.id)).password_hash == "hashed:newpass1"


def test_change_password_short_password_keeps_token(
    change_password: ChangePasswordUseCase,
    reset_tokens: InMemoryResetTokens,
    alice: User,
) -> None:
    token = reset_tokens.issue(alice.id)

    result = change_password.execute(token, "abc", FakeSession())

    assert result.errors == [FieldError("newPassword", "Length must be greater than 3")]
    assert token in reset_tokens.tokens


def test_change_password_unknown_token(change_password: ChangePasswordUseCase) -> None:
    session = FakeSession()

    result = change_password.execute("missing", "newpass1", session)

    assert result.errors == [FieldError("token", "token expired")]
    assert session.user_id is None


def test_change_password_user_removed(
    change_password: ChangePasswordUseCase,
    users: InMemoryUserRepository,
    reset_tokens: InMemoryResetTokens,
    alice: User,
) -> None:
    token = reset_tokens.issue(alice.id)
    users.remove(alice.id)

    result = change_password.execute(token, "newpass1", FakeSession())

    assert result.errors == [FieldError("token", "user no longer exists")]


def test_forgot_password_store_outage_looks_like_unknown_email(
    users: InMemoryUserRepository,
    mailer: RecordingMailNotifier,
    alice: User,
) -> None:
    class UnavailableResetTokens(InMemoryResetTokens):
        def issue(self, user_id: int) -> str:
            raise KeyValueStoreError("set")

    use_case = ForgotPasswordUseCase(
        users=users,
        reset_tokens=UnavailableResetTokens(),
        mailer=mailer,
        frontend_url="http://localhost:3000",
    )

    assert use_case.execute("alice@x.com") is True
    assert use_case.execute("nobody@x.com") is True
    assert mailer.sent == []
