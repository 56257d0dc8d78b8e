# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for ending the caller's session."""

from __future__ import annotations

from bareddit.application.interfaces import SessionContext
from bareddit.domain.users.exceptions import KeyValueStoreError
from bareddit.shared.logging import logger


class LogoutUserUseCase:
    def execute(self, session: SessionContext) -> bool:
        user_id = session.user_id
        try:
            session.destroy()
        except KeyValueStoreError as exc:
            logger.error(f"auth.logout: session store failure user_id={user_id} error={exc}")
            return False
        logger.info(f"auth.logout: ok user_id={user_id}")
        return True
