# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .base import AppError, InfrastructureError, ValidationError
from .http import register_error_handler
from .validation import format_pydantic_errors, raise_validation_error

__all__ = [
    "AppError",
    "InfrastructureError",
    "ValidationError",
    "format_pydantic_errors",
    "raise_validation_error",
    "register_error_handler",
]
