# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Exceptions that the HTTP layer turns into ``{"error": code}`` responses.

Business outcomes such as a taken username are returned as field errors and
never raised; these classes cover malformed requests and unreachable
backing services.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    @property
    def is_server_error(self) -> bool:
        return self.status >= HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        # Server-side context is logged, never returned.
        if self.context and not self.is_server_error:
            payload["context"] = dict(self.context)
        return payload


class InfrastructureError(AppError):
    """A backing service (database, key-value store, mail relay) failed."""

    def __init__(
        self,
        code: str = "service_unavailable",
        *,
        status: HTTPStatus = HTTPStatus.SERVICE_UNAVAILABLE,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(code=code, status=status, context=context)


class ValidationError(AppError):
    """The request body did not match the expected shape."""

    def __init__(self, *, context: Mapping[str, Any] | None = None) -> None:
        super().__init__(
            code="validation_error",
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )
