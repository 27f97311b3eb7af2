import pytest
from pydantic import ValidationError

from feedbrief.config import (
    Config,
    ConfigModel,
    SourceConfig,
    SummarizerConfig,
    default_config_path,
    load_config,
    save_config,
)
from feedbrief.exceptions import ConfigError


class TestDefaults:
    def test_defaults(self):
        config = ConfigModel()

        assert len(config.sources) == 3
        assert config.pipeline.batch_size == 3
        assert config.pipeline.batch_delay_ms == 2000
        assert config.extraction.timeout_ms == 15000
        assert config.summarizer.min_words == 55
        assert config.summarizer.max_words == 60
        assert config.server.port == 3000
        assert "Chrome" in config.extraction.user_agent

    def test_enabled_sources(self):
        config = ConfigModel(sources=[
            SourceConfig(url="https://a.example.com/rss"),
            SourceConfig(url="https://b.example.com/rss", enabled=False),
        ])
        assert config.source_urls == ["https://a.example.com/rss"]

    def test_frozen(self):
        config = ConfigModel()
        with pytest.raises(ValidationError):
            config.log_level = "DEBUG"

    def test_bad_word_bounds(self):
        with pytest.raises(ValidationError):
            SummarizerConfig(min_words=70, max_words=60)

    def test_log_level_normalized(self):
        assert ConfigModel(log_level=" debug ").log_level == "DEBUG"

    def test_unknown_log_level(self):
        with pytest.raises(ValidationError):
            ConfigModel(log_level="verbose")

    def test_source_url_must_be_http(self):
        with pytest.raises(ValidationError):
            SourceConfig(url="ftp://example.com/feed")


class TestLoading:
    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_config(tmp_path / "absent.yaml") == ConfigModel()

    def test_yaml_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text(
            "sources:\n"
            "  - url: https://news.example.com/rss\n"
            "    name: Example\n"
            "pipeline:\n"
            "  batch_size: 5\n"
            "summarizer:\n"
            "  min_words: 30\n"
            "  max_words: 40\n"
        )
        config = load_config(path)

        assert config.sources == [SourceConfig(url="https://news.example.com/rss", name="Example")]
        assert config.pipeline.batch_size == 5
        assert config.pipeline.batch_delay_ms == 2000
        assert config.summarizer.max_words == 40

    def test_empty_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert load_config(path) == ConfigModel()

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("sources: [unclosed\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("- just\n- a list\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_invalid_values(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("summarizer:\n  min_words: 80\n  max_words: 60\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_unknown_log_level_in_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("log_level: verbose\n")
        with pytest.raises(ConfigError):
            load_config(path)

    def test_save_and_reload(self, tmp_path):
        path = tmp_path / "nested" / "config.yaml"
        config = ConfigModel(sources=[SourceConfig(url="https://news.example.com/rss")])

        save_config(config, path)

        assert load_config(path) == config

    def test_manager_save(self, tmp_path):
        manager = Config(tmp_path / "config.yaml")
        assert not manager.exists

        updated = manager.config.model_copy(update={"log_level": "DEBUG"})
        manager.save(updated)

        assert manager.exists
        assert Config(tmp_path / "config.yaml").config.log_level == "DEBUG"

    def test_env_var_path(self, tmp_path, monkeypatch):
        monkeypatch.setenv("FEEDBRIEF_CONFIG", str(tmp_path / "custom.yaml"))
        assert default_config_path() == tmp_path / "custom.yaml"
