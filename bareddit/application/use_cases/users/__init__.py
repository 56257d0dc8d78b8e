# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .change_password import ChangePasswordUseCase
from .current_user import CurrentUserUseCase
from .forgot_password import ForgotPasswordUseCase
from .login_user import LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .register_user import RegisterUserUseCase

__all__ = [
    "ChangePasswordUseCase",
    "CurrentUserUseCase",
    "ForgotPasswordUseCase",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
]
