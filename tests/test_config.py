"""Tests for Settings.from_env."""

from fewshot.config import Settings


class TestSettings:
    def test_defaults(self) -> None:
        s = Settings.from_env({})
        assert s.enabled is True
        assert s.max_examples == 3
        assert s.min_rating == 7
        assert s.debug is False
        assert s.corpus_path.endswith("examples.json")
        assert s.log_level == "WARNING"

    def test_overrides(self) -> None:
        s = Settings.from_env({
            "FEWSHOT_ENABLED": "false",
            "FEWSHOT_MAX_EXAMPLES": "5",
            "FEWSHOT_MIN_RATING": "9",
            "FEWSHOT_DEBUG": "true",
            "FEWSHOT_CORPUS_PATH": "/tmp/ex.json",
            "FEWSHOT_DEBUG_LOG": "/tmp/debug.log",
            "FEWSHOT_LOG_FORMAT": "JSON",
            "FEWSHOT_LOG_LEVEL": "debug",
        })
        assert s.enabled is False
        assert s.max_examples == 5
        assert s.min_rating == 9
        assert s.debug is True
        assert s.corpus_path == "/tmp/ex.json"
        assert s.debug_log_path == "/tmp/debug.log"
        assert s.log_format == "json"
        assert s.log_level == "DEBUG"

    def test_only_explicit_false_disables(self) -> None:
        assert Settings.from_env({"FEWSHOT_ENABLED": "yes please"}).enabled is True
        assert Settings.from_env({"FEWSHOT_ENABLED": "0"}).enabled is False

    def test_bad_integers_fall_back(self) -> None:
        s = Settings.from_env({"FEWSHOT_MAX_EXAMPLES": "lots", "FEWSHOT_MIN_RATING": ""})
        assert s.max_examples == 3
        assert s.min_rating == 7

    def test_reads_os_environ(self, monkeypatch) -> None:
        monkeypatch.setenv("FEWSHOT_MAX_EXAMPLES", "1")
        assert Settings.from_env().max_examples == 1
