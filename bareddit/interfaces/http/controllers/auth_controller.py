# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from typing import TypeVar

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from bareddit.application.use_cases.users import (ChangePasswordUseCase,
                                                  CurrentUserUseCase,
                                                  ForgotPasswordUseCase,
                                                  LoginUserUseCase,
                                                  LogoutUserUseCase,
                                                  RegisterUserUseCase)
from bareddit.interfaces.http.dto.auth import (ChangePasswordRequestDTO,
                                               ForgotPasswordRequestDTO,
                                               LoginRequestDTO, MeResponseDTO,
                                               OkDTO, RegisterRequestDTO,
                                               UserResponseDTO)
from bareddit.interfaces.http.sessions import current_session
from bareddit.shared.errors.validation import raise_validation_error

_DTO = TypeVar("_DTO", bound=BaseModel)


def _parse(model: type[_DTO]) -> _DTO:
    try:
        return model.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        forgot_password_use_case: ForgotPasswordUseCase,
        change_password_use_case: ChangePasswordUseCase,
        current_user_use_case: CurrentUserUseCase,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._forgot_password_use_case = forgot_password_use_case
        self._change_password_use_case = change_password_use_case
        self._current_user_use_case = current_user_use_case

    def register(self) -> tuple[Response, int]:
        dto = _parse(RegisterRequestDTO)
        result = self._register_use_case.execute(
            dto.username, dto.email, dto.password, current_session()
        )
        return jsonify(UserResponseDTO.from_domain(result).dump()), 200

    def login(self) -> tuple[Response, int]:
        dto = _parse(LoginRequestDTO)
        result = self._login_use_case.execute(
            dto.username_or_email, dto.password, current_session()
        )
        return jsonify(UserResponseDTO.from_domain(result).dump()), 200

    def logout(self) -> tuple[Response, int]:
        ok = self._logout_use_case.execute(current_session())
        return jsonify(OkDTO(ok=ok).model_dump()), 200

    def forgot_password(self) -> tuple[Response, int]:
        dto = _parse(ForgotPasswordRequestDTO)
        ok = self._forgot_password_use_case.execute(dto.email)
        return jsonify(OkDTO(ok=ok).model_dump()), 200

    def change_password(self) -> tuple[Response, int]:
        dto = _parse(ChangePasswordRequestDTO)
        result = self._change_password_use_case.execute(
            dto.token, dto.new_password, current_session()
        )
        return jsonify(UserResponseDTO.from_domain(result).dump()), 200

    def me(self) -> tuple[Response, int]:
        user = self._current_user_use_case.execute(current_session())
        response = jsonify(MeResponseDTO.from_domain(user).dump())
        response.headers["Cache-Control"] = "no-store"
        return response, 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/forgot-password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule("/change-password", view_func=self.change_password, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        return bp
