# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request, session
from pydantic import BaseModel, ValidationError

from authcore.application.services.session_binding import (
    session_auth_hash,
    session_hash_matches,
)
from authcore.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from authcore.application.use_cases.users.confirm_password_reset import (
    ConfirmPasswordResetUseCase,
)
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.application.use_cases.users.request_password_reset import (
    RequestPasswordResetUseCase,
)
from authcore.domain.users.entities import Credentials, User
from authcore.domain.users.exceptions import InvalidCredentialsError, PasswordUpgradeError
from authcore.interfaces.http.dto.auth import (
    AuthSuccessDTO,
    ForgotPasswordRequestDTO,
    LoginRequestDTO,
    RegisterRequestDTO,
    ResetPasswordRequestDTO,
    UserDTO,
)
from authcore.shared.errors.validation import raise_validation_error
from authcore.shared.logging import logger

SESSION_USER_ID = "_auth_user_id"
SESSION_AUTH_HASH = "_auth_user_hash"


def _parse(dto_cls: type[BaseModel]):
    try:
        return dto_cls.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        authenticate_use_case: AuthenticateUserUseCase,
        request_reset_use_case: RequestPasswordResetUseCase,
        confirm_reset_use_case: ConfirmPasswordResetUseCase,
        secret_key: bytes,
    ) -> None:
        self._register_use_case = register_use_case
        self._authenticate_use_case = authenticate_use_case
        self._request_reset_use_case = request_reset_use_case
        self._confirm_reset_use_case = confirm_reset_use_case
        self._secret_key = secret_key

    def _login(self, user: User) -> None:
        session.clear()
        session[SESSION_USER_ID] = user.require_id()
        session[SESSION_AUTH_HASH] = session_auth_hash(user, self._secret_key)

    def current_user(self) -> User | None:
        """User bound to the session, or ``None`` if absent or the password changed."""
        user_id = session.get(SESSION_USER_ID)
        if not isinstance(user_id, int):
            return None
        user = self._authenticate_use_case.get_by_id(user_id)
        if user is None or not session_hash_matches(
            user, self._secret_key, session.get(SESSION_AUTH_HASH)
        ):
            logger.info(f"auth.session: stale session user_id={user_id}")
            session.clear()
            return None
        return user

    def register(self) -> tuple[Response, int]:
        dto = _parse(RegisterRequestDTO)
        user = self._register_use_case.execute(
            name=dto.name,
            email=dto.email,
            username=dto.username,
            password=dto.password,
            password_confirm=dto.password_confirm,
        )
        payload = AuthSuccessDTO(user=UserDTO.from_user(user)).model_dump()
        return jsonify(payload), 201

    def login(self) -> tuple[Response, int]:
        dto = _parse(LoginRequestDTO)
        try:
            user = self._authenticate_use_case.execute(Credentials(dto.username, dto.password))
        except PasswordUpgradeError as exc:
            # credentials are good, only the rehash write failed
            user = exc.user

        if user is None:
            raise InvalidCredentialsError()

        self._login(user)
        logger.info(f"auth.login: ok user_id={user.id}")
        payload = AuthSuccessDTO(user=UserDTO.from_user(user)).model_dump()
        return jsonify(payload), 200

    def logout(self) -> tuple[Response, int]:
        session.clear()
        logger.info("auth.logout: ok")
        return jsonify(AuthSuccessDTO().model_dump(exclude_none=True)), 200

    def me(self) -> tuple[Response, int]:
        user = self.current_user()
        if user is None:
            return jsonify({"error": "unauthorized"}), 401
        return jsonify(AuthSuccessDTO(user=UserDTO.from_user(user)).model_dump()), 200

    def forgot_password(self) -> tuple[Response, int]:
        dto = _parse(ForgotPasswordRequestDTO)
        self._request_reset_use_case.execute(dto.username)
        return jsonify(AuthSuccessDTO().model_dump(exclude_none=True)), 202

    def check_reset_link(self, uidb64: str, token: str) -> tuple[Response, int]:
        self._confirm_reset_use_case.validate(uidb64, token)
        return jsonify(AuthSuccessDTO().model_dump(exclude_none=True)), 200

    def reset_password(self, uidb64: str, token: str) -> tuple[Response, int]:
        dto = _parse(ResetPasswordRequestDTO)
        self._confirm_reset_use_case.execute(uidb64, token, dto.password, dto.password_confirm)
        session.clear()
        return jsonify(AuthSuccessDTO().model_dump(exclude_none=True)), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule("/forgot-password", view_func=self.forgot_password, methods=["POST"])
        bp.add_url_rule(
            "/reset-password/<uidb64>/<token>",
            view_func=self.check_reset_link,
            methods=["GET"],
        )
        bp.add_url_rule(
            "/reset-password/<uidb64>/<token>",
            endpoint="reset_password",
            view_func=self.reset_password,
            methods=["POST"],
        )
        return bp
