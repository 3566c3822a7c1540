"""
Tests for the Passport strategy helpers.
"""

import pytest

from connectors.base import ConnectorBase
from connectors.passport import PassportStrategy, authorization_params, finalize_passport_auth
from utils.schemas import ConnectorResult


class _Strategy:
    name = "dropbox-oauth2"


class DropboxConnector(ConnectorBase):
    """Stores the access token returned by the strategy on the pipe."""

    def get_passport_strategy(self, pipe):
        return _Strategy()

    def get_passport_authorization_params(self):
        return {"force_reapprove": True, "scope": "files.read"}

    async def passport_auth_callback_post_processing(self, info, pipe):
        if "accessToken" not in info:
            return ConnectorResult.failure("missing access token")
        return ConnectorResult.success({**pipe, "oAuth": {"accessToken": info["accessToken"]}})


class TestAuthorizationParams:
    def test_default_connector(self):
        assert authorization_params(ConnectorBase()) == {}

    def test_overrides_win(self):
        params = authorization_params(DropboxConnector(), scope="files.write", state="s")
        assert params == {"force_reapprove": True, "scope": "files.write", "state": "s"}


class TestStrategy:
    def test_strategy_protocol(self):
        conn = DropboxConnector()
        strategy = conn.get_passport_strategy({"_id": "p1"})
        assert isinstance(strategy, PassportStrategy)
        assert conn.uses_passport({"_id": "p1"})


class TestFinalize:
    @pytest.mark.asyncio
    async def test_default_connector_persists_nothing(self):
        assert await finalize_passport_auth(ConnectorBase(), {}, {"_id": "p1"}) is None

    @pytest.mark.asyncio
    async def test_updated_pipe_returned(self):
        pipe = {"_id": "p1", "name": "orders"}
        updated = await finalize_passport_auth(DropboxConnector(), {"accessToken": "t0k"}, pipe)
        assert updated == {"_id": "p1", "name": "orders", "oAuth": {"accessToken": "t0k"}}

    @pytest.mark.asyncio
    async def test_failure_persists_nothing(self):
        pipe = {"_id": "p1"}
        assert await finalize_passport_auth(DropboxConnector(), {}, pipe) is None
        assert pipe == {"_id": "p1"}

    @pytest.mark.asyncio
    async def test_hook_skipped_without_strategy(self):
        calls = []

        class NoStrategyConnector(ConnectorBase):
            async def passport_auth_callback_post_processing(self, info, pipe):
                calls.append(info)
                return ConnectorResult.success({**pipe, "token": "t"})

        conn = NoStrategyConnector()
        assert conn.uses_passport({"_id": "p1"}) is False
        assert await finalize_passport_auth(conn, {"accessToken": "t"}, {"_id": "p1"}) is None
        assert calls == []
