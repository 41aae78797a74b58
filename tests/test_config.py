"""Config loading."""
from pathlib import Path

import pytest

from paydate.pipeline.resolver import ResolverConfig
from paydate.utils.config import holidays_path, load_config, resolve_config_path
from paydate.utils.errors import ConfigError, PaydateError

_REPO_CONFIG = Path(__file__).parent.parent / "config" / "config.yaml"


@pytest.fixture(autouse=True)
def _no_env_config(monkeypatch):
    monkeypatch.delenv("PAYDATE_CONFIG", raising=False)


class TestResolveConfigPath:
    def test_unset_is_none(self):
        assert resolve_config_path() is None

    def test_env_var(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PAYDATE_CONFIG", str(tmp_path / "c.yaml"))
        assert resolve_config_path() == tmp_path / "c.yaml"

    def test_explicit_wins_over_env(self, tmp_path, monkeypatch):
        monkeypatch.setenv("PAYDATE_CONFIG", str(tmp_path / "env.yaml"))
        assert resolve_config_path(tmp_path / "cli.yaml") == tmp_path / "cli.yaml"


class TestLoadConfig:
    def test_repo_config(self):
        cfg = load_config(_REPO_CONFIG)
        assert cfg["due_date"]["minimum_days"] == 10
        assert ResolverConfig.from_dict(cfg) == ResolverConfig()

    def test_nothing_configured_is_empty(self):
        assert load_config() == {}

    def test_env_var(self, tmp_path, monkeypatch):
        p = tmp_path / "c.yaml"
        p.write_text("due_date:\n  minimum_days: 14\n")
        monkeypatch.setenv("PAYDATE_CONFIG", str(p))
        assert load_config()["due_date"]["minimum_days"] == 14

    def test_empty_file_is_empty_dict(self, tmp_path):
        p = tmp_path / "c.yaml"
        p.write_text("")
        assert load_config(p) == {}

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.yaml")

    def test_malformed_yaml(self, tmp_path):
        p = tmp_path / "c.yaml"
        p.write_text("due_date: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            load_config(p)

    def test_non_mapping_document(self, tmp_path):
        p = tmp_path / "c.yaml"
        p.write_text("- 1\n- 2\n")
        with pytest.raises(PaydateError, match="mapping"):
            load_config(p)


class TestHolidaysPath:
    def test_relative_resolves_against_base(self, tmp_path):
        assert holidays_path({"holidays": {"path": "h.csv"}}, base=tmp_path) == tmp_path / "h.csv"

    def test_absolute_kept(self, tmp_path):
        p = tmp_path / "h.csv"
        assert holidays_path({"holidays": {"path": str(p)}}, base=Path("/elsewhere")) == p

    def test_unset(self):
        assert holidays_path({}) is None
        assert holidays_path({"holidays": None}) is None

    def test_repo_config_points_at_existing_file(self):
        cfg = load_config(_REPO_CONFIG)
        assert holidays_path(cfg, base=_REPO_CONFIG.parent).exists()
