from __future__ import annotations

from collections.abc import Sequence

import pytest

from taxidesk.application.use_cases.reservations.create_reservation import (
    CreateReservationUseCase,
    ReservationDraft,
)
from taxidesk.application.use_cases.reservations.export_store import ExportStoreUseCase
from taxidesk.application.use_cases.reservations.list_reservations import (
    ListReservationsUseCase,
)
from taxidesk.application.use_cases.users.login_user import LoginUserUseCase
from taxidesk.domain.reservations import PaymentMethod, Reservation, ReservationRepository
from taxidesk.domain.users import (
    InvalidCredentialsError,
    PasswordHasher,
    Role,
    TokenClaims,
    TokenService,
    User,
    UserRepository,
)
from taxidesk.shared.errors import ValidationError


class InMemoryUserRepository(UserRepository):
    def __init__(self, users: Sequence[User]) -> None:
        self._users = list(users)

    def find_by_username(self, username: str) -> User | None:
        return next((u for u in self._users if u.matches(username)), None)

    def add(self, user: User) -> User:
        self._users.append(user)
        return user


class InMemoryReservationRepository(ReservationRepository):
    def __init__(self) -> None:
        self.rows: list[Reservation] = []

    def list_all(self) -> Sequence[Reservation]:
        return list(self.rows)

    def append(self, reservation: Reservation) -> Reservation:
        self.rows.append(reservation)
        return reservation


class DeterministicHasher(PasswordHasher):
    def __init__(self) -> None:
        self.verify_calls = 0

    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        self.verify_calls += 1
        return hashed == f"hashed:{password}"


class RecordingTokens(TokenService):
    def issue(self, username: str, role: Role) -> str:
        return f"token:{username}:{role.value}"

    def verify(self, token: str) -> TokenClaims:  # pragma: no cover - unused
        raise NotImplementedError


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def login(hasher: DeterministicHasher) -> LoginUserUseCase:
    users = InMemoryUserRepository(
        [
            User(username="admin", password_hash="hashed:admin123", role=Role.ADMIN),
            User(username="taxista", password_hash="hashed:taxista123", role=Role.DRIVER),
        ]
    )
    return LoginUserUseCase(users=users, tokens=RecordingTokens(), password_hasher=hasher)


def _draft(**overrides) -> ReservationDraft:
    fields = dict(
        fecha="2024-06-01",
        horario="10:00",
        origen="A",
        destino="B",
        pasajero="Juan",
        contacto="+56911111111",
        num_pasajeros=2,
        valor=5000.0,
        medio_pago=PaymentMethod.CASH,
    )
    fields.update(overrides)
    return ReservationDraft(**fields)


def test_login_returns_token_with_stored_role(login: LoginUserUseCase) -> None:
    result = login.execute("taxista", "taxista123")

    assert result.username == "taxista"
    assert result.role is Role.DRIVER
    assert result.token == "token:taxista:taxista"


def test_login_username_is_case_insensitive(login: LoginUserUseCase) -> None:
    result = login.execute("ADMIN", "admin123")
    assert result.username == "admin"
    assert result.role is Role.ADMIN


def test_login_failures_are_indistinguishable(
    login: LoginUserUseCase, hasher: DeterministicHasher
) -> None:
    with pytest.raises(InvalidCredentialsError) as wrong_password:
        login.execute("admin", "nope")
    with pytest.raises(InvalidCredentialsError) as unknown_user:
        login.execute("ghost", "nope")

    assert wrong_password.value.to_dict() == unknown_user.value.to_dict()
    assert wrong_password.value.status == unknown_user.value.status == 401
    # The unknown user still went through a password check.
    assert hasher.verify_calls == 2


def test_create_reservation_stamps_owner() -> None:
    repo = InMemoryReservationRepository()

    stored = CreateReservationUseCase(reservations=repo).execute("admin", _draft())

    assert stored.owner == "admin"
    assert repo.rows == [stored]


def test_create_reservation_reports_wire_field_and_does_not_append() -> None:
    repo = InMemoryReservationRepository()

    with pytest.raises(ValidationError) as excinfo:
        CreateReservationUseCase(reservations=repo).execute("admin", _draft(num_pasajeros=0))

    assert excinfo.value.context["fields"] == ["numPasajeros"]
    assert repo.rows == []


def test_list_reservations_returns_everything_in_order() -> None:
    repo = InMemoryReservationRepository()
    create = CreateReservationUseCase(reservations=repo)
    first = create.execute("admin", _draft(pasajero="Uno"))
    second = create.execute("admin", _draft(pasajero="Dos"))

    assert ListReservationsUseCase(reservations=repo).execute() == [first, second]


def test_export_returns_snapshot_bytes() -> None:
    class Exporter:
        def snapshot(self) -> bytes:
            return b"xlsx-bytes"

    assert ExportStoreUseCase(exporter=Exporter()).execute() == b"xlsx-bytes"
