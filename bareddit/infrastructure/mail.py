# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Outgoing mail for password reset links."""

from __future__ import annotations

import smtplib
from email.message import EmailMessage

from bareddit.domain.users.exceptions import MailDeliveryError
from bareddit.domain.users.repositories import MailNotifier
from bareddit.shared.config import MailConfig
from bareddit.shared.logging import logger


class SmtpMailNotifier(MailNotifier):
    """Opens one SMTP connection per message."""

    def __init__(self, config: MailConfig) -> None:
        self._config = config

    def _new_connection(self) -> smtplib.SMTP:
        return smtplib.SMTP(
            host=self._config.smtp_host,
            port=self._config.smtp_port,
            timeout=self._config.smtp_timeout,
        )

    def _build_message(self, to: str, subject: str, html: str) -> EmailMessage:
        message = EmailMessage()
        message["From"] = self._config.sender
        message["To"] = to
        message["Subject"] = subject
        message.set_content(html, subtype="html")
        return message

    def send(self, to: str, subject: str, html: str) -> None:
        message = self._build_message(to, subject, html)
        try:
            with self._new_connection() as conn:
                if self._config.smtp_use_tls:
                    conn.starttls()
                if self._config.smtp_username:
                    conn.login(self._config.smtp_username, self._config.smtp_password or "")
                conn.send_message(message)
        except (smtplib.SMTPException, OSError) as exc:
            logger.error(f"mail: delivery via {self._config.smtp_host} failed: {type(exc).__name__}")
            raise MailDeliveryError() from exc
        logger.info(f"mail: sent subject={subject!r}")


class LoggingMailNotifier(MailNotifier):
    """Development notifier: the message body goes to the log instead of SMTP."""

    def send(self, to: str, subject: str, html: str) -> None:
        logger.info(f"mail (not sent): to={to} subject={subject!r} body={html}")


def build_mail_notifier(config: MailConfig) -> MailNotifier:
    if config.enabled:
        return SmtpMailNotifier(config)
    return LoggingMailNotifier()


__all__ = ["LoggingMailNotifier", "SmtpMailNotifier", "build_mail_notifier"]
