"""
Unit tests for releasereport.config module
"""
import json
import logging
import pytest
from click.testing import CliRunner

from releasereport.cli import cli
from releasereport.config import (
    apply_env_overrides,
    configure_logging,
    get_config_path,
    get_default_config,
    load_config,
    merge_configs,
)
from releasereport.exit_codes import ConfigError


@pytest.fixture(autouse=True)
def isolated_home(tmp_path, monkeypatch):
    home = tmp_path / "home"
    home.mkdir()
    monkeypatch.setenv("HOME", str(home))
    monkeypatch.delenv("RELEASEREPORT_CONFIG", raising=False)
    for key in ("RELEASEREPORT_GIT_TIMEOUT_SECONDS", "RELEASEREPORT_GIT_FETCH",
                "RELEASEREPORT_TAGS_SORT", "RELEASEREPORT_TAGS_LIMIT",
                "RELEASEREPORT_TAGS_PREFIX", "RELEASEREPORT_LOGGING_LEVEL"):
        monkeypatch.delenv(key, raising=False)
    return home


class TestDefaults:

    def test_default_config(self):
        config = get_default_config()

        assert config['git'] == {'timeout_seconds': 30, 'remote': "", 'fetch': True}
        assert config['tags'] == {'prefix': "v", 'limit': 10, 'sort': "numeric"}
        assert config['logging']['level'] == "INFO"

    def test_load_config_no_file(self):
        assert load_config() == get_default_config()

    def test_default_path(self, isolated_home):
        assert get_config_path() == isolated_home / ".releasereport" / "config.json"


class TestConfigFiles:

    def test_json_file(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps({"tags": {"limit": 5}}))

        config = load_config()

        assert config['tags']['limit'] == 5
        assert config['tags']['prefix'] == "v"

    def test_toml_file(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text('[tags]\nsort = "lexicographic"\n')

        assert load_config()['tags']['sort'] == "lexicographic"

    def test_yaml_file(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("git:\n  fetch: false\n  remote: upstream\n")

        config = load_config()

        assert config['git']['fetch'] is False
        assert config['git']['remote'] == "upstream"

    def test_empty_yaml_file(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.yaml").write_text("")

        assert load_config() == get_default_config()

    def test_env_config_path(self, tmp_path, monkeypatch):
        path = tmp_path / "custom.json"
        path.write_text(json.dumps({"tags": {"prefix": "release-"}}))
        monkeypatch.setenv("RELEASEREPORT_CONFIG", str(path))

        assert get_config_path() == path
        assert load_config()['tags']['prefix'] == "release-"

    def test_invalid_json(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("{broken")

        with pytest.raises(ConfigError):
            load_config()

    def test_non_mapping(self, isolated_home):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.json").write_text("[1, 2]")

        with pytest.raises(ConfigError):
            load_config()

    @pytest.mark.parametrize("override", [
        {"tags": {"sort": "random"}},
        {"tags": {"limit": 0}},
        {"tags": {"limit": "ten"}},
        {"logging": {"level": "LOUD"}},
    ])
    def test_invalid_values(self, isolated_home, override):
        config_dir = isolated_home / ".releasereport"
        config_dir.mkdir()
        (config_dir / "config.json").write_text(json.dumps(override))

        with pytest.raises(ConfigError):
            load_config()


class TestEnvOverrides:

    def test_multi_word_key(self, monkeypatch):
        monkeypatch.setenv("RELEASEREPORT_GIT_TIMEOUT_SECONDS", "60")

        assert load_config()['git']['timeout_seconds'] == 60

    def test_boolean(self, monkeypatch):
        monkeypatch.setenv("RELEASEREPORT_GIT_FETCH", "false")

        assert load_config()['git']['fetch'] is False

    def test_string(self, monkeypatch):
        monkeypatch.setenv("RELEASEREPORT_TAGS_SORT", "lexicographic")

        assert load_config()['tags']['sort'] == "lexicographic"

    def test_unknown_key_ignored(self, monkeypatch):
        monkeypatch.setenv("RELEASEREPORT_NOPE_THING", "1")

        assert apply_env_overrides(get_default_config()) == get_default_config()


class TestMergeAndLogging:

    def test_merge_nested(self):
        merged = merge_configs({"a": {"b": 1, "c": 2}}, {"a": {"c": 3}, "d": 4})

        assert merged == {"a": {"b": 1, "c": 3}, "d": 4}

    def test_merge_leaves_defaults_untouched(self):
        defaults = get_default_config()

        merged = merge_configs(defaults, {"tags": {"limit": 3}})

        assert merged["tags"] == {"prefix": "v", "limit": 3, "sort": "numeric"}
        assert defaults["tags"]["limit"] == 10

    def test_configure_logging_verbose(self):
        configure_logging(get_default_config(), verbose=True)

        assert logging.getLogger("releasereport").level == logging.DEBUG

    def test_configure_logging_from_config(self):
        config = get_default_config()
        config['logging']['level'] = "warning"

        configure_logging(config)

        assert logging.getLogger("releasereport").level == logging.WARNING


class TestConfigShow:

    def test_show(self):
        result = CliRunner().invoke(cli, ['config', 'show'])

        assert result.exit_code == 0
        assert json.loads(result.output) == get_default_config()

    def test_show_path(self, isolated_home):
        result = CliRunner().invoke(cli, ['config', 'show', '--path'])

        assert result.exit_code == 0
        assert json.loads(result.output)['config_path'].startswith(str(isolated_home))

    def test_show_pretty(self):
        result = CliRunner().invoke(cli, ['config', 'show', '--pretty'])

        assert result.exit_code == 0
        assert '\n  "git": {' in result.output
        assert json.loads(result.output) == get_default_config()
