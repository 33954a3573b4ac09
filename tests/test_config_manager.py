"""Tests for TOML configuration handling."""

from pathlib import Path

import pytest

from depgraph_cli import config_manager
from depgraph_cli.classifier import SystemPolicy, classify_name
from depgraph_cli.config import DEFAULT_TOOL_TIMEOUT


def test_defaults_without_config_file(isolated_config: Path):
    settings = config_manager.load_settings()

    assert not isolated_config.exists()
    assert settings.dumpbin_path is None
    assert settings.timeout == DEFAULT_TOOL_TIMEOUT
    assert settings.show_system is False
    assert settings.tree is False
    assert settings.name_prefixes == []


def test_save_and_load_roundtrip(isolated_config: Path, temp_dir: Path):
    tool = temp_dir / "dumpbin.exe"

    assert config_manager.save_dumpbin_path(tool)
    assert config_manager.save_timeout(12.5)
    settings = config_manager.load_settings()

    assert settings.dumpbin_path == tool
    assert settings.timeout == 12.5


def test_saving_preserves_other_sections(isolated_config: Path):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text(
        '[display]\nshow_system = true\ntree = true\n\n[filters]\nname_prefixes = ["Qt5"]\npath_patterns = ["C:/Tools"]\n',
        encoding="utf-8",
    )

    config_manager.save_timeout(3)
    settings = config_manager.load_settings()

    assert settings.timeout == 3
    assert settings.show_system is True
    assert settings.tree is True
    assert settings.name_prefixes == ["Qt5"]
    assert settings.path_patterns == ["C:/Tools"]


def test_malformed_config_falls_back_to_defaults(isolated_config: Path):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text("[dumpbin\npath = ", encoding="utf-8")

    settings = config_manager.load_settings()

    assert settings.dumpbin_path is None
    assert settings.timeout == DEFAULT_TOOL_TIMEOUT


def test_invalid_timeout_is_ignored(isolated_config: Path):
    isolated_config.parent.mkdir(parents=True)
    isolated_config.write_text('[dumpbin]\ntimeout = "soon"\n', encoding="utf-8")

    assert config_manager.load_settings().timeout == DEFAULT_TOOL_TIMEOUT


def test_clear_config(isolated_config: Path):
    config_manager.save_timeout(1)

    assert config_manager.clear_config()
    assert not isolated_config.exists()
    # clearing twice is fine
    assert config_manager.clear_config()


def _write(config_file: Path, text: str) -> None:
    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(text, encoding="utf-8")


def test_scalar_in_place_of_section_is_ignored(isolated_config: Path):
    _write(isolated_config, 'dumpbin = "C:/Tools/dumpbin.exe"\ndisplay = 1\n')

    settings = config_manager.load_settings()

    assert settings.dumpbin_path is None
    assert settings.timeout == DEFAULT_TOOL_TIMEOUT
    assert settings.show_system is False


def test_saving_over_scalar_section_replaces_it(isolated_config: Path):
    _write(isolated_config, 'dumpbin = "C:/Tools/dumpbin.exe"\n')

    assert config_manager.save_timeout(5)
    assert config_manager.load_settings().timeout == 5


def test_filter_string_is_not_split_into_characters(isolated_config: Path):
    _write(isolated_config, '[filters]\nname_prefixes = "Qt5"\npath_patterns = ["C:/Tools", 3]\n')

    settings = config_manager.load_settings()

    assert settings.name_prefixes == []
    assert settings.path_patterns == []
    policy = SystemPolicy.with_extras(settings.name_prefixes, settings.path_patterns)
    assert classify_name("QuickLib.dll", policy).accepted


def test_display_flags_must_be_booleans(isolated_config: Path):
    _write(isolated_config, '[display]\nshow_system = "false"\ntree = 1\n')

    settings = config_manager.load_settings()

    assert settings.show_system is False
    assert settings.tree is False


@pytest.mark.parametrize("value", ["0", "-5", "true"])
def test_non_positive_timeout_is_ignored(isolated_config: Path, value: str):
    _write(isolated_config, f"[dumpbin]\ntimeout = {value}\n")

    assert config_manager.load_settings().timeout == DEFAULT_TOOL_TIMEOUT


def test_non_string_dumpbin_path_is_ignored(isolated_config: Path):
    _write(isolated_config, "[dumpbin]\npath = 42\n")

    assert config_manager.load_settings().dumpbin_path is None
