import pytest

from schemesync.config import Config, load_config
from schemesync.errors import ConfigError


def test_defaults_without_file(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config = load_config()
    assert config.theme.slug == "theme"
    assert config.editor.port == 3000
    assert config.editor.lock_timeout == 10.0
    assert config.paths.scheme == tmp_path.resolve() / "theme.xml"


def test_load_config(tmp_path):
    path = tmp_path / "schemesync.toml"
    path.write_text(
        '[theme]\nname = "Cyan Harbor"\ntype = "dark"\nslug = "cyan-harbor"\nversion = "2.0.1"\n'
        '[paths]\nscheme = "cyan-harbor.xml"\noutput = "/tmp/out"\n'
        '[editor]\nport = 8080\nlock_timeout = 5\nunknown = true\n',
        encoding="utf-8",
    )
    config = load_config(path)

    assert isinstance(config, Config)
    assert config.theme.name == "Cyan Harbor"
    assert config.paths.scheme == tmp_path.resolve() / "cyan-harbor.xml"
    assert str(config.paths.output) == "/tmp/out"
    assert config.editor.port == 8080
    assert config.editor.lock_timeout == 5.0
    assert config.archive.name == "cyan-harbor-2.0.1.jar"
    assert config.theme_json.name == "cyan-harbor-theme.json"
    assert config.editor_html.name == "theme-editor.html"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.toml")


@pytest.mark.parametrize("content", [
    "[theme\nname = 1",
    "[theme]\nslug = 3\n",
    "[theme]\ntype = \"sepia\"\n",
    "[editor]\nport = \"3000\"\n",
    "[editor]\nport = true\n",
    "theme = 1\n",
])
def test_invalid_config(tmp_path, content):
    path = tmp_path / "schemesync.toml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)
