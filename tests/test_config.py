"""Tests for settings loading."""

from core.config import DEFAULT_ODOO_URL, OdooSettings, load_settings


class TestLoadSettings:
    def test_defaults(self):
        settings = load_settings({})

        assert settings == OdooSettings()
        assert settings.url == DEFAULT_ODOO_URL
        assert settings.database == "your_db"
        assert settings.github_token is None
        assert settings.source_branch == "18.0"

    def test_environment_overrides(self):
        settings = load_settings(
            {
                "ODOO_URL": "https://erp.example.com/jsonrpc",
                "ODOO_DB": "prod",
                "ODOO_USER": "bot",
                "ODOO_PASSWORD": "hunter2",
                "GITHUB_TOKEN": "ghp_x",
                "ODOO_SOURCE_BRANCH": "17.0",
                "EXPLORER_MODEL": "openrouter/openai/gpt-4o-mini",
            }
        )

        assert settings.url == "https://erp.example.com/jsonrpc"
        assert (settings.database, settings.username, settings.password) == ("prod", "bot", "hunter2")
        assert settings.github_token == "ghp_x"
        assert settings.source_branch == "17.0"
        assert settings.explorer_model == "openrouter/openai/gpt-4o-mini"

    def test_empty_values_fall_back_to_defaults(self):
        settings = load_settings({"ODOO_URL": "", "GITHUB_TOKEN": ""})

        assert settings.url == DEFAULT_ODOO_URL
        assert settings.github_token is None

    def test_repr_hides_password(self):
        assert "hunter2" not in repr(OdooSettings(password="hunter2"))
