from __future__ import annotations

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient

from taxidesk.app import create_app
from taxidesk.shared.config import AppConfig, SecurityConfig, StoreConfig

TEST_SECRET = "test-secret-key"


@pytest.fixture()
def store_path(tmp_path: Path) -> Path:
    return tmp_path / "taxi_data.xlsx"


@pytest.fixture()
def make_config(tmp_path: Path, store_path: Path) -> Callable[..., AppConfig]:
    def _make(
        *, rate_limit: bool = False, reset: bool = False, rl_limit: int = 10, proxies: int = 0
    ) -> AppConfig:
        return AppConfig(  # type: ignore[call-arg]
            SECRET_KEY=TEST_SECRET,
            LOG_FILE=tmp_path / "app.log",
            PASSWORD_HASH_METHOD="pbkdf2:sha256:1000",
            store=StoreConfig(  # type: ignore[call-arg]
                STORE_PATH=store_path,
                STORE_RESET_ON_START=reset,
            ),
            security=SecurityConfig(  # type: ignore[call-arg]
                ENABLE_RATE_LIMIT=rate_limit,
                RL_LIMIT=rl_limit,
                TRUSTED_PROXY_COUNT=proxies,
            ),
        )

    return _make


@pytest.fixture()
def app(make_config: Callable[..., AppConfig]) -> Flask:
    return create_app(make_config())


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def login(client: FlaskClient) -> Callable[[str, str], dict[str, str]]:
    def _login(username: str, password: str) -> dict[str, str]:
        response = client.post(
            "/api/auth/login", json={"username": username, "password": password}
        )
        assert response.status_code == 200, response.get_json()
        return {"Authorization": f"Bearer {response.get_json()['token']}"}

    return _login


@pytest.fixture()
def admin_headers(login) -> dict[str, str]:
    return login("admin", "admin123")


@pytest.fixture()
def driver_headers(login) -> dict[str, str]:
    return login("taxista", "taxista123")


@pytest.fixture()
def reservation_payload() -> dict[str, Any]:
    return {
        "fecha": "2024-06-01",
        "horario": "10:00",
        "origen": "A",
        "destino": "B",
        "pasajero": "Juan",
        "contacto": "+56911111111",
        "numPasajeros": 2,
        "valor": 5000,
        "medioPago": "Efectivo",
    }
