"""Application dependency container."""

from __future__ import annotations

from functools import cached_property

from bareddit.application.services.password_hashing import WerkzeugPasswordHasher
from bareddit.application.use_cases.users import (ChangePasswordUseCase,
                                                  CurrentUserUseCase,
                                                  ForgotPasswordUseCase,
                                                  LoginUserUseCase,
                                                  LogoutUserUseCase,
                                                  RegisterUserUseCase)
from bareddit.domain.users.repositories import (KeyValueStore, MailNotifier,
                                                PasswordHasher, UserRepository)
from bareddit.infrastructure.db import Database
from bareddit.infrastructure.kv_store import build_kv_store
from bareddit.infrastructure.mail import build_mail_notifier
from bareddit.infrastructure.repositories.users.sqlalchemy_user_repository import \
    SqlAlchemyUserRepository
from bareddit.infrastructure.reset_tokens import ResetTokenStore
from bareddit.infrastructure.sessions import ServerSessionStore
from bareddit.interfaces.http.controllers.auth_controller import AuthController
from bareddit.interfaces.http.controllers.misc_controller import MiscController
from bareddit.interfaces.http.sessions import SessionCookie
from bareddit.shared.config import AppConfig


class Container:
    """Builds every collaborator once per application from an explicit config.

    Tests replace collaborators by assigning to the cached attribute before
    first use, e.g. ``container.mailer = RecordingMailer()``.
    """

    def __init__(self, config: AppConfig) -> None:
        self.config = config

    @cached_property
    def database(self) -> Database:
        return Database.from_config(self.config.database)

    @cached_property
    def kv_store(self) -> KeyValueStore:
        return build_kv_store(self.config.redis)

    @cached_property
    def session_store(self) -> ServerSessionStore:
        return ServerSessionStore(
            self.kv_store,
            secret_key=self.config.secret_key,
            ttl=self.config.session.max_age,
        )

    @cached_property
    def session_cookie(self) -> SessionCookie:
        return SessionCookie.from_config(self.config)

    @cached_property
    def reset_token_store(self) -> ResetTokenStore:
        return ResetTokenStore(self.kv_store, ttl=self.config.session.reset_token_ttl)

    @cached_property
    def password_hasher(self) -> PasswordHasher:
        return WerkzeugPasswordHasher()

    @cached_property
    def user_repository(self) -> UserRepository:
        return SqlAlchemyUserRepository(self.database)

    @cached_property
    def mailer(self) -> MailNotifier:
        return build_mail_notifier(self.config.mail)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def forgot_password_use_case(self) -> ForgotPasswordUseCase:
        return ForgotPasswordUseCase(
            users=self.user_repository,
            reset_tokens=self.reset_token_store,
            mailer=self.mailer,
            frontend_url=self.config.frontend_url,
        )

    @cached_property
    def change_password_use_case(self) -> ChangePasswordUseCase:
        return ChangePasswordUseCase(
            users=self.user_repository,
            reset_tokens=self.reset_token_store,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def current_user_use_case(self) -> CurrentUserUseCase:
        return CurrentUserUseCase(users=self.user_repository)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            forgot_password_use_case=self.forgot_password_use_case,
            change_password_use_case=self.change_password_use_case,
            current_user_use_case=self.current_user_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database, kv_store=self.kv_store)
