from __future__ import annotations

from collections.abc import Callable

from flask.testing import FlaskClient

from taxidesk.app import create_app
from taxidesk.shared.config import AppConfig


def test_seed_accounts_can_log_in(client: FlaskClient) -> None:
    admin = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    driver = client.post(
        "/api/auth/login", json={"username": "taxista", "password": "taxista123"}
    )

    assert admin.status_code == 200
    assert admin.get_json()["role"] == "admin"
    assert admin.get_json()["token"]
    assert driver.status_code == 200
    assert driver.get_json()["role"] == "taxista"


def test_login_errors_do_not_reveal_which_part_was_wrong(client: FlaskClient) -> None:
    wrong_password = client.post(
        "/api/auth/login", json={"username": "admin", "password": "nope"}
    )
    unknown_user = client.post("/api/auth/login", json={"username": "ghost", "password": "nope"})

    assert wrong_password.status_code == unknown_user.status_code == 401
    assert wrong_password.get_json() == unknown_user.get_json()


def test_end_to_end_reservation_flow(client: FlaskClient, reservation_payload) -> None:
    login = client.post("/api/auth/login", json={"username": "admin", "password": "admin123"})
    headers = {"Authorization": f"Bearer {login.get_json()['token']}"}

    created = client.post(
        "/api/reservas", json=reservation_payload | {"username": "someone-else"}, headers=headers
    )
    assert created.status_code == 201

    rows = client.get("/api/reservas", headers=headers).get_json()
    assert len(rows) == 1
    row = rows[0]
    assert row["username"] == "admin"
    for key in ("fecha", "horario", "origen", "destino", "pasajero", "contacto", "medioPago"):
        assert row[key] == reservation_payload[key]
    assert row["numPasajeros"] == 2
    assert row["valor"] == 5000


def test_reservations_survive_restart(
    make_config: Callable[..., AppConfig], reservation_payload
) -> None:
    first = create_app(make_config()).test_client()
    token = first.post(
        "/api/auth/login", json={"username": "admin", "password": "admin123"}
    ).get_json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    assert first.post("/api/reservas", json=reservation_payload, headers=headers).status_code == 201

    second = create_app(make_config()).test_client()

    assert len(second.get("/api/reservas", headers=headers).get_json()) == 1


def test_reset_on_start_discards_reservations(
    make_config: Callable[..., AppConfig], reservation_payload
) -> None:
    first = create_app(make_config()).test_client()
    token = first.post(
        "/api/auth/login", json={"username": "admin", "password": "admin123"}
    ).get_json()["token"]
    headers = {"Authorization": f"Bearer {token}"}
    first.post("/api/reservas", json=reservation_payload, headers=headers)

    second = create_app(make_config(reset=True)).test_client()

    assert second.get("/api/reservas", headers=headers).get_json() == []


def test_login_rate_limit_enabled_from_config(
    make_config: Callable[..., AppConfig],
) -> None:
    client = create_app(make_config(rate_limit=True, rl_limit=2)).test_client()
    body = {"username": "admin", "password": "wrong"}

    statuses = [client.post("/api/auth/login", json=body).status_code for _ in range(3)]

    assert statuses == [401, 401, 429]


def test_forwarded_client_address_is_used_behind_trusted_proxy(
    make_config: Callable[..., AppConfig],
) -> None:
    client = create_app(make_config(rate_limit=True, rl_limit=1, proxies=1)).test_client()
    body = {"username": "admin", "password": "wrong"}

    def _attempt(addr: str) -> int:
        return client.post(
            "/api/auth/login", json=body, headers={"X-Forwarded-For": addr}
        ).status_code

    assert _attempt("203.0.113.1") == 401
    assert _attempt("203.0.113.2") == 401
    assert _attempt("203.0.113.1") == 429
