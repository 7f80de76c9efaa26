import pytest

from debugrepl.config.settings import CLEAR_SCREEN_SEQUENCE, Settings, load_settings
from debugrepl.core import nls


def test_defaults():
    settings = Settings()
    assert settings.repl.max_length == 10000
    assert settings.repl.max_children == 1000
    assert settings.repl.clear_sequence == CLEAR_SCREEN_SEQUENCE
    assert settings.console.styles["error"] == "red"


def test_from_yaml_partial(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text(
        "repl:\n"
        "  max_length: 50\n"
        "  clear_sequence: \"\\e[2J\"\n"
        "console:\n"
        "  prompt: 'py>'\n"
        "  styles:\n"
        "    Warning: magenta\n"
    )

    settings = load_settings(str(path))
    assert settings.repl.max_length == 50
    assert settings.repl.max_children == 1000
    assert settings.repl.clear_sequence == "\u001b[2J"
    assert settings.console.prompt == "py>"
    assert settings.console.styles["warning"] == "magenta"
    assert settings.console.styles["error"] == "red"


def test_env_vars_are_expanded(tmp_path, monkeypatch):
    monkeypatch.setenv("DEBUGREPL_MESSAGES", "/etc/messages.yaml")
    path = tmp_path / "config.yaml"
    path.write_text("locale:\n  catalog: ${DEBUGREPL_MESSAGES}\n")

    assert load_settings(str(path)).locale.catalog == "/etc/messages.yaml"


def test_blank_sections_give_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("repl:\nlocale:\nconsole:\n  prompt: '>'\n  styles:\n")

    settings = load_settings(str(path))
    assert settings.repl == Settings().repl
    assert settings.locale == Settings().locale
    assert settings.console.prompt == ">"
    assert settings.console.styles == Settings().console.styles


def test_empty_file_gives_defaults(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert load_settings(str(path)) == Settings()


def test_missing_file_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_settings(str(tmp_path / "nope.yaml"))


@pytest.fixture
def catalog(tmp_path):
    path = tmp_path / "messages.yaml"
    path.write_text("consoleCleared: Konsole wurde geleert\ngreeting: 'Hallo {0}, {1}'\n")
    yield path
    nls.reset_catalog()


def test_localize_defaults_and_placeholders():
    assert nls.localize("consoleCleared", "Console was cleared") == "Console was cleared"
    assert nls.localize("k", "{0} of {1}", 1, 5) == "1 of 5"
    assert nls.localize("k", "{0} and {2}", "a") == "a and {2}"


def test_load_catalog_overrides(catalog):
    assert nls.load_catalog(str(catalog)) == 2
    assert nls.localize("consoleCleared", "Console was cleared") == "Konsole wurde geleert"
    assert nls.localize("greeting", "Hi {0}", "Ada", "Bob") == "Hallo Ada, Bob"
