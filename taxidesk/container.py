"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from taxidesk.application.services.password_hashing import WerkzeugPasswordHasher
from taxidesk.application.use_cases.reservations.create_reservation import (
    CreateReservationUseCase,
)
from taxidesk.application.use_cases.reservations.export_store import ExportStoreUseCase
from taxidesk.application.use_cases.reservations.list_reservations import (
    ListReservationsUseCase,
)
from taxidesk.application.use_cases.users.login_user import LoginUserUseCase
from taxidesk.infrastructure.auth.tokens import FernetTokenService
from taxidesk.infrastructure.repositories.reservations.spreadsheet_reservation_repository import (
    SpreadsheetReservationRepository,
)
from taxidesk.infrastructure.repositories.users.spreadsheet_user_repository import (
    SpreadsheetUserRepository,
)
from taxidesk.infrastructure.spreadsheet import WorkbookStore
from taxidesk.interfaces.http.auth import AccessControl
from taxidesk.interfaces.http.controllers.auth_controller import AuthController
from taxidesk.interfaces.http.controllers.misc_controller import MiscController
from taxidesk.interfaces.http.controllers.reservations_controller import (
    ReservationsController,
)
from taxidesk.shared.config import AppConfig
from taxidesk.shared.middleware.rate_limit import InMemoryRateLimiter


class Container:
    def __init__(self, config: AppConfig) -> None:
        self._config = config

    @property
    def config(self) -> AppConfig:
        return self._config

    @cached_property
    def store(self) -> WorkbookStore:
        return WorkbookStore(self._config.store.path)

    @cached_property
    def password_hasher(self) -> WerkzeugPasswordHasher:
        return WerkzeugPasswordHasher(self._config.password_hash_method)

    @cached_property
    def token_service(self) -> FernetTokenService:
        return FernetTokenService(
            self._config.secret_key,
            ttl=timedelta(seconds=self._config.tokens.ttl_seconds),
        )

    @cached_property
    def user_repository(self) -> SpreadsheetUserRepository:
        return SpreadsheetUserRepository(self.store)

    @cached_property
    def reservation_repository(self) -> SpreadsheetReservationRepository:
        return SpreadsheetReservationRepository(self.store)

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            tokens=self.token_service,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def list_reservations_use_case(self) -> ListReservationsUseCase:
        return ListReservationsUseCase(reservations=self.reservation_repository)

    @cached_property
    def create_reservation_use_case(self) -> CreateReservationUseCase:
        return CreateReservationUseCase(reservations=self.reservation_repository)

    @cached_property
    def export_store_use_case(self) -> ExportStoreUseCase:
        return ExportStoreUseCase(exporter=self.store)

    @cached_property
    def access_control(self) -> AccessControl:
        return AccessControl(self.token_service)

    @cached_property
    def login_rate_limiter(self) -> InMemoryRateLimiter | None:
        security = self._config.security
        if not security.enable_rate_limit:
            return None
        return InMemoryRateLimiter(security.rate_limit_requests, security.rate_limit_window)

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            login_use_case=self.login_user_use_case,
            limiter=self.login_rate_limiter,
        )

    @cached_property
    def reservations_controller(self) -> ReservationsController:
        return ReservationsController(
            access=self.access_control,
            list_use_case=self.list_reservations_use_case,
            create_use_case=self.create_reservation_use_case,
            export_use_case=self.export_store_use_case,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(store=self.store)
