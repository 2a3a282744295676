# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from functools import cached_property

from authcore.application.services.password_hashing import WerkzeugPasswordHasher
from authcore.application.services.reset_tokens import ResetTokenCodec
from authcore.application.use_cases.users.authenticate_user import AuthenticateUserUseCase
from authcore.application.use_cases.users.confirm_password_reset import (
    ConfirmPasswordResetUseCase,
)
from authcore.application.use_cases.users.register_user import RegisterUserUseCase
from authcore.application.use_cases.users.request_password_reset import (
    RequestPasswordResetUseCase,
)
from authcore.domain.users.repositories import ResetNotifier, UserRepository
from authcore.infrastructure.notifications import LoggingResetNotifier
from authcore.infrastructure.repositories.users.sqlalchemy_user_repository import (
    SqlAlchemyUserRepository,
)
from authcore.interfaces.http.controllers.auth_controller import AuthController
from authcore.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        config: AppConfig | None = None,
        *,
        user_repository: UserRepository | None = None,
        notifier: ResetNotifier | None = None,
        password_hasher: WerkzeugPasswordHasher | None = None,
    ) -> None:
        self.config = config or load_config()
        if user_repository is not None:
            self.__dict__["user_repository"] = user_repository
        if notifier is not None:
            self.__dict__["reset_notifier"] = notifier
        if password_hasher is not None:
            self.__dict__["password_hasher"] = password_hasher

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(method=self.config.passwords.hash_method)

    @cached_property
    def user_repository(self) -> UserRepository:
        return SqlAlchemyUserRepository()

    @cached_property
    def reset_notifier(self) -> ResetNotifier:
        return LoggingResetNotifier(self.config.reset.url_base)

    @cached_property
    def reset_token_codec(self) -> ResetTokenCodec:
        return ResetTokenCodec(
            secret=self.config.secret_bytes,
            timeout_seconds=self.config.reset.timeout_seconds,
        )

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def request_password_reset_use_case(self) -> RequestPasswordResetUseCase:
        return RequestPasswordResetUseCase(
            users=self.user_repository,
            codec=self.reset_token_codec,
            notifier=self.reset_notifier,
        )

    @cached_property
    def confirm_password_reset_use_case(self) -> ConfirmPasswordResetUseCase:
        return ConfirmPasswordResetUseCase(
            users=self.user_repository,
            codec=self.reset_token_codec,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            authenticate_use_case=self.authenticate_user_use_case,
            request_reset_use_case=self.request_password_reset_use_case,
            confirm_reset_use_case=self.confirm_password_reset_use_case,
            secret_key=self.config.secret_bytes,
        )
