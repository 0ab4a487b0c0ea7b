"""
End-to-end tests for FieldTranslationFacade.

The facade fixture wires the real provider chain to a scripted fake HTTP
session, so every route runs exactly as in production without touching the
network:

  Chinese input  → zh→en translation → identifiers from the translation
  English input  → en→zh translation → identifiers from the input
  nothing enabled / everything failing → dictionary fallback

Coverage:
  - Dictionary-only translation (用户名 → user名)
  - Naming variants: labels, order, values, direction by script
  - translate_to_target(), provenance, input validation
  - toggle_provider() / save_baidu_credentials() persistence
  - get_status() shape and secrecy
  - load_facade_from_config(): settings file, missing file, broken YAML,
    non-mapping sections, unknown log level, non-numeric timeout
"""

import json
import logging

import pytest

from src.naming.converter import decision_sentinel
from src.pipeline import FieldTranslationFacade, NamingVariant, load_facade_from_config
from src.translation.chain import TranslationProviderChain
from src.translation.config_store import DEFAULT_STORAGE_KEY, ConfigStore
from src.translation.errors import EmptyInputError, InvalidCredentials
from src.translation.providers import BAIDU_URL, DEFAULT_TIMEOUT, MYMEMORY_URL, default_backends
from src.translation.schema import ProviderName
from tests.conftest import FakeSession, baidu_ok, mymemory_ok

_LABELS = ["translation", "camelCase", "snake_case", "lowercase", "UPPERCASE"]


@pytest.fixture
def facade(store, session) -> FieldTranslationFacade:
    """Facade on the fake session with default provider settings."""
    chain = TranslationProviderChain(default_backends(session=session))
    return FieldTranslationFacade(store, chain=chain)


@pytest.fixture
def offline(facade) -> FieldTranslationFacade:
    """Facade with every network backend switched off."""
    facade.toggle_provider(ProviderName.MYMEMORY, False)
    return facade


def _values(variants):
    return [v.value for v in variants]


# ===========================================================================
# Translation
# ===========================================================================

class TestTranslate:

    def test_dictionary_only_partial_translation(self, offline, session):
        out = offline.translate("用户名", "zh", "en")
        assert "user" in out
        assert out.endswith("名")
        assert session.calls == []

    def test_network_answer_preferred(self, facade, session):
        session.routes[MYMEMORY_URL] = mymemory_ok("username")
        assert facade.translate("用户名", "zh", "en") == "username"
        assert session.calls[0][2]["params"]["langpair"] == "zh|en"

    def test_network_failure_falls_back(self, facade, session):
        assert facade.translate("用户名", "zh", "en") == "user名"
        assert len(session.calls) == 1

    def test_translate_to_target_infers_source(self, offline):
        assert offline.translate_to_target("user", "zh") == "用户"
        assert offline.translate_to_target("用户名称", "en") == "username"

    def test_provenance(self, facade, session):
        session.routes[MYMEMORY_URL] = mymemory_ok("username")
        result = facade.translate_with_provenance("用户名", "zh", "en")
        assert result.provider is ProviderName.MYMEMORY
        assert result.degraded is False

    def test_degraded_provenance(self, offline):
        result = offline.translate_with_provenance("用户名", "zh", "en")
        assert result.provider is None
        assert result.degraded is True

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_empty_input_rejected(self, facade, session, text):
        with pytest.raises(EmptyInputError):
            facade.translate(text, "zh", "en")
        assert session.calls == []

    def test_empty_input_is_value_error(self, facade):
        with pytest.raises(ValueError):
            facade.translate_to_target("", "en")

    def test_same_language_rejected(self, facade):
        with pytest.raises(ValueError):
            facade.translate("user", "en", "en")

    def test_unknown_language_rejected(self, facade):
        with pytest.raises(ValueError):
            facade.translate("user", "en", "fr")

    def test_input_is_stripped(self, facade, session):
        session.routes[MYMEMORY_URL] = mymemory_ok("username")
        facade.translate("  用户名  ", "zh", "en")
        assert session.calls[0][2]["params"]["q"] == "用户名"


# ===========================================================================
# Naming variants
# ===========================================================================

class TestNamingVariants:

    def test_labels_and_order(self, offline):
        variants = offline.suggest_naming_variants("user name")
        assert [v.label for v in variants] == _LABELS
        assert all(isinstance(v, NamingVariant) for v in variants)

    def test_english_input_builds_from_input(self, offline):
        variants = offline.suggest_naming_variants("user name")
        assert _values(variants) == ["用户 名称", "userName", "user_name", "username", "USERNAME"]

    def test_chinese_input_builds_from_translation(self, facade, session):
        session.routes[MYMEMORY_URL] = mymemory_ok("User Name")
        variants = facade.suggest_naming_variants("用户名")

        assert session.calls[0][2]["params"]["langpair"] == "zh|en"
        assert _values(variants) == ["User Name", "userName", "user_name", "username", "USERNAME"]

    def test_english_input_translated_to_chinese(self, facade, session):
        session.routes[MYMEMORY_URL] = mymemory_ok("用户名")
        variants = facade.suggest_naming_variants("user name")

        assert session.calls[0][2]["params"]["langpair"] == "en|zh"
        assert variants[0].value == "用户名"
        assert variants[1].value == "userName"

    def test_lowercase_token_kept_by_default(self, offline):
        variants = offline.suggest_naming_variants("用户名称")
        assert variants[0].value == "username"
        assert variants[2].value == "username"

    def test_lowercase_token_ask(self, offline):
        variants = offline.suggest_naming_variants("用户名称", handle_lowercase="ask")
        assert variants[2].value == decision_sentinel("username")

    def test_lowercase_token_split(self, offline):
        variants = offline.suggest_naming_variants("userid", handle_lowercase="split")
        assert variants[2].value == "user_id"

    def test_empty_input_rejected(self, offline):
        with pytest.raises(EmptyInputError):
            offline.suggest_naming_variants("  ")

    def test_format_variants(self):
        text = FieldTranslationFacade.format_variants([
            NamingVariant("camelCase", "userName"),
            NamingVariant("snake_case", "user_name"),
        ])
        assert text == "camelCase: userName\nsnake_case: user_name"


# ===========================================================================
# Configuration
# ===========================================================================

class TestConfiguration:

    def test_toggle_persists(self, facade, memory_storage):
        facade.toggle_provider("libre", True)
        stored = json.loads(memory_storage.get(DEFAULT_STORAGE_KEY))
        assert stored["libre"]["enabled"] is True

    def test_new_facade_sees_saved_config(self, facade, store):
        facade.toggle_provider("mymemory", False)
        reloaded = FieldTranslationFacade(store, chain=facade.chain)
        assert reloaded.config.get("mymemory").enabled is False

    def test_toggle_unknown_provider(self, facade):
        with pytest.raises(ValueError):
            facade.toggle_provider("google", True)

    def test_save_baidu_credentials(self, facade, memory_storage):
        facade.save_baidu_credentials("  20240101 ", " s3cret ")
        stored = json.loads(memory_storage.get(DEFAULT_STORAGE_KEY))
        assert stored["baidu"]["appId"] == "20240101"
        assert stored["baidu"]["secretKey"] == "s3cret"

    @pytest.mark.parametrize("app_id, secret_key", [("", "k"), ("id", "  "), (None, None)])
    def test_blank_credentials_rejected(self, facade, memory_storage, app_id, secret_key):
        with pytest.raises(InvalidCredentials):
            facade.save_baidu_credentials(app_id, secret_key)
        assert memory_storage.get(DEFAULT_STORAGE_KEY) is None
        assert facade.config.get("baidu").credentials.app_id == ""

    def test_baidu_used_after_configuration(self, offline, session):
        session.routes[BAIDU_URL] = baidu_ok("user name")
        offline.toggle_provider("baidu", True)
        offline.save_baidu_credentials("app", "key")

        assert offline.translate("用户名", "zh", "en") == "user name"
        assert [c[1] for c in session.calls] == [BAIDU_URL]


class TestStatus:

    def test_default_status(self, facade):
        status = facade.get_status()
        assert list(status["providers"]) == ["mymemory", "libre", "baidu"]
        assert status["providers"]["mymemory"] == {"enabled": True, "ready": True}
        assert status["providers"]["baidu"] == {"enabled": False, "ready": False}
        assert status["storage_key"] == DEFAULT_STORAGE_KEY

    def test_credentials_not_exposed(self, facade):
        facade.save_baidu_credentials("app-id-value", "secret-value")
        status = facade.get_status()
        assert status["providers"]["baidu"]["ready"] is True
        assert "secret-value" not in repr(status)


# ===========================================================================
# load_facade_from_config
# ===========================================================================

class TestLoadFromConfig:

    def test_settings_applied(self, tmp_path):
        settings_file = tmp_path / "settings.json"
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "translation:\n"
            "  timeout: 3\n"
            f"  storage_path: {settings_file}\n"
            "  storage_key: customKey\n"
            "  endpoints:\n"
            "    mymemory: https://mm.example/get\n",
            encoding="utf-8",
        )
        session = FakeSession()
        facade = load_facade_from_config(config_file, session=session)

        assert facade.chain.backends[0].url == "https://mm.example/get"
        assert all(b.timeout == 3 for b in facade.chain.backends)
        assert all(b.session is session for b in facade.chain.backends)

        facade.toggle_provider("libre", True)
        saved = json.loads(settings_file.read_text(encoding="utf-8"))
        assert "customKey" in saved

    def test_saved_config_reloaded(self, tmp_path):
        settings_file = tmp_path / "settings.json"
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"translation:\n  storage_path: {settings_file}\n", encoding="utf-8")

        load_facade_from_config(config_file, session=FakeSession()).toggle_provider("mymemory", False)
        facade = load_facade_from_config(config_file, session=FakeSession())
        assert facade.config.get("mymemory").enabled is False

    def test_missing_file_uses_defaults(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        facade = load_facade_from_config(tmp_path / "absent.yaml", session=FakeSession())
        assert facade.store.key == DEFAULT_STORAGE_KEY
        assert facade.chain.backends[0].url == MYMEMORY_URL

    def test_invalid_yaml_uses_defaults(self, tmp_path, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("translation: [unclosed\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="src.pipeline"):
            facade = load_facade_from_config(config_file, session=FakeSession())
        assert "Failed to load config" in caplog.text
        assert facade.store.key == DEFAULT_STORAGE_KEY

    @pytest.mark.parametrize("body", [
        "translation: 5\n",
        "translation: [a, b]\n",
        "just a string\n",
        "translation:\n  endpoints: nope\n",
    ])
    def test_malformed_sections_use_defaults(self, tmp_path, monkeypatch, caplog, body):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(body, encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="src.pipeline"):
            facade = load_facade_from_config(config_file, session=FakeSession())
        assert "not a mapping" in caplog.text
        assert facade.store.key == DEFAULT_STORAGE_KEY
        assert facade.chain.backends[0].url == MYMEMORY_URL

    def test_unknown_log_level_ignored(self, tmp_path, monkeypatch, caplog):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: verbose\n", encoding="utf-8")

        src_logger = logging.getLogger("src")
        previous = src_logger.level
        try:
            with caplog.at_level(logging.WARNING, logger="src.pipeline"):
                facade = load_facade_from_config(config_file, session=FakeSession())
            assert src_logger.level == previous
        finally:
            src_logger.setLevel(previous)
        assert "Invalid logging level" in caplog.text
        assert isinstance(facade, FieldTranslationFacade)

    @pytest.mark.parametrize("value", ["soon", "[1, 2]"])
    def test_bad_timeout_uses_default(self, tmp_path, monkeypatch, caplog, value):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"translation:\n  timeout: {value}\n", encoding="utf-8")

        with caplog.at_level(logging.WARNING, logger="src.pipeline"):
            facade = load_facade_from_config(config_file, session=FakeSession())
        assert "Invalid translation timeout" in caplog.text
        assert all(b.timeout == DEFAULT_TIMEOUT for b in facade.chain.backends)

    def test_log_level_applied(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        config_file = tmp_path / "config.yaml"
        config_file.write_text("logging:\n  level: warning\n", encoding="utf-8")

        src_logger = logging.getLogger("src")
        previous = src_logger.level
        try:
            load_facade_from_config(config_file, session=FakeSession())
            assert src_logger.level == logging.WARNING
        finally:
            src_logger.setLevel(previous)

    def test_store_is_json_file(self, tmp_path):
        settings_file = tmp_path / "nested" / "settings.json"
        config_file = tmp_path / "config.yaml"
        config_file.write_text(f"translation:\n  storage_path: {settings_file}\n", encoding="utf-8")

        facade = load_facade_from_config(config_file, session=FakeSession())
        assert isinstance(facade.store, ConfigStore)
        assert not settings_file.exists()
        facade.save_baidu_credentials("a", "b")
        assert settings_file.exists()
