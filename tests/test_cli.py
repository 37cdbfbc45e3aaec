import json
import zipfile

import pytest

from schemesync.cli import main


@pytest.fixture
def project(tmp_path, scheme_file):
    (tmp_path / "META-INF").mkdir()
    (tmp_path / "META-INF" / "plugin.xml").write_text("<idea-plugin/>", encoding="utf-8")
    (tmp_path / "cyan-harbor.theme.json").write_text("{}", encoding="utf-8")
    config = tmp_path / "schemesync.toml"
    config.write_text(
        '[theme]\nslug = "cyan-harbor"\nversion = "1.2.3"\n'
        '[paths]\nscheme = "cyan-harbor.xml"\nui_theme = "cyan-harbor.theme.json"\n',
        encoding="utf-8",
    )
    return tmp_path, str(config)


def test_build(project, capsys):
    root, config = project
    assert main(["-c", config, "build"]) == 0

    theme = json.loads((root / "build" / "cyan-harbor-theme.json").read_text(encoding="utf-8"))
    assert theme["name"] == "Cyan Harbor"
    assert theme["type"] == "dark"
    data = json.loads((root / "build" / "theme-data.json").read_text(encoding="utf-8"))
    assert "General" in data["languageConfigs"]
    assert (root / "build" / "theme-editor.html").exists()
    assert "Generated interactive editor" in capsys.readouterr().out


def test_convert_to_custom_output(project):
    root, config = project
    output = root / "custom.json"
    assert main(["-c", config, "convert", "-o", str(output)]) == 0
    assert json.loads(output.read_text(encoding="utf-8"))["tokenColors"]


def test_package(project):
    root, config = project
    assert main(["-c", config, "package"]) == 0
    with zipfile.ZipFile(root / "releases" / "cyan-harbor-1.2.3.jar") as archive:
        assert "cyan-harbor.xml" in archive.namelist()
        assert "META-INF/plugin.xml" in archive.namelist()


def test_errors_exit_with_status_one(project, capsys):
    root, config = project
    (root / "cyan-harbor.xml").unlink()
    assert main(["-c", config, "convert"]) == 1
    assert capsys.readouterr().out.startswith("Error:")
