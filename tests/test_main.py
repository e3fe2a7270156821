import pytest
from fastapi import Depends, Request
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from laundry_api.auth import TokenService, get_current_user
from laundry_api.main import create_app

from .conftest import TEST_SECRET, auth_header, make_settings


def test_unreachable_database_halts_startup(tmp_path):
    app = create_app(make_settings(DATABASE_URL=f"sqlite:///{tmp_path}/missing/dir/laundry.db"))

    with pytest.raises(OperationalError):
        with TestClient(app):
            pass


def test_app_state_is_built_from_settings(app, settings):
    assert app.state.settings is settings
    assert isinstance(app.state.token_service, TokenService)
    assert app.state.token_service.expires_in.total_seconds() == 3600


def test_guard_attaches_identity_to_the_request(app, client, login):
    token, user_id = login("alice")

    @app.get("/whoami")
    def whoami(request: Request, current_user=Depends(get_current_user)):
        return {"state": str(request.state.user.user_id), "resolved": current_user.username}

    resp = client.get("/whoami", headers=auth_header(token))

    assert resp.json() == {"state": user_id, "resolved": "alice"}


def test_token_from_another_deployment_is_rejected(client):
    foreign = TokenService(TEST_SECRET + "-other")
    token = foreign.issue("00000000-0000-0000-0000-000000000001", "alice")

    resp = client.get("/bookings", headers=auth_header(token))

    assert resp.status_code == 401
    assert resp.json() == {"message": "Invalid token"}
