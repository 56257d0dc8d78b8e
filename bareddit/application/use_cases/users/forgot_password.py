# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from html import escape

from bareddit.application.interfaces import ResetTokenPort
from bareddit.domain.users.exceptions import KeyValueStoreError, MailDeliveryError
from bareddit.domain.users.repositories import MailNotifier, UserRepository
from bareddit.shared.logging import logger

RESET_SUBJECT = "Change password"


def reset_link(frontend_url: str, token: str) -> str:
    return f"{frontend_url.rstrip('/')}/change-password/{token}"


class ForgotPasswordUseCase:
    """Issue a reset token and mail it, without revealing whether the email is known."""

    def __init__(
        self,
        *,
        users: UserRepository,
        reset_tokens: ResetTokenPort,
        mailer: MailNotifier,
        frontend_url: str,
    ) -> None:
        self._users = users
        self._reset_tokens = reset_tokens
        self._mailer = mailer
        self._frontend_url = frontend_url

    def execute(self, email: str) -> bool:
        user = self._users.find_by_email(email)
        if user is None:
            logger.info("auth.forgot_password: no account for address")
            return True

        try:
            token = self._reset_tokens.issue(user.id)
        except KeyValueStoreError as exc:
            # Same answer as an unknown address.
            logger.error(f"auth.forgot_password: token store failure user_id={user.id} error={exc}")
            return True

        link = escape(reset_link(self._frontend_url, token), quote=True)
        try:
            self._mailer.send(user.email, RESET_SUBJECT, f'<a href="{link}">reset password</a>')
        except MailDeliveryError:
            logger.error(f"auth.forgot_password: mail delivery failed user_id={user.id}")
            return True

        logger.info(f"auth.forgot_password: token issued user_id={user.id}")
        return True
