"""
Tests for the connector option bag and result schemas.
"""

from utils.schemas import ConnectorError, ConnectorOptions, ConnectorResult


class TestConnectorOptions:
    def test_as_dict_uses_public_names(self):
        opts = ConnectorOptions.model_validate({"custom": 1})
        assert opts.as_dict() == {
            "useOAuth": True,
            "extraRequiredFields": [],
            "custom": 1,
        }

    def test_from_mapping_keeps_values_as_given(self):
        opts = ConnectorOptions.from_mapping({"useOAuth": "yes", "custom": 1})
        assert opts.get("useOAuth") == "yes"
        assert opts.get("extraRequiredFields") == []
        assert opts.get("custom") == 1

    def test_as_json_dict_renders_unknown_types(self):
        class Client:
            def __repr__(self):
                return "<Client eu-1>"

        opts = ConnectorOptions()
        opts.set("client", Client())
        opts.set("nested", {"hosts": ["a", "b"]})
        data = opts.as_json_dict()
        assert data["client"] == "<Client eu-1>"
        assert data["nested"] == {"hosts": ["a", "b"]}
        assert data["useOAuth"] is True

    def test_get_default(self):
        assert ConnectorOptions().get("missing", "fallback") == "fallback"


class TestConnectorResult:
    def test_success(self):
        result = ConnectorResult.success({"_id": "p"})
        assert result.ok
        assert result.value == {"_id": "p"}
        assert not result.is_unauthorized

    def test_failure(self):
        result = ConnectorResult.failure("boom", 500)
        assert not result.ok
        assert result.error == ConnectorError(message="boom", code=500)
        assert not result.is_unauthorized

    def test_unauthorized(self):
        result = ConnectorResult.unauthorized()
        assert result.is_unauthorized
        assert result.error == ConnectorError.unauthorized()
