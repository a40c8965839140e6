"""settings のテスト。"""

from pathlib import Path

from project_rules.rules import DEFAULT_RULES_PATH
from project_rules.settings import load_settings


def test_load_default_settings_missing_file(tmp_path: Path) -> None:
    s = load_settings(tmp_path / "missing.toml")
    assert s.rules_path == DEFAULT_RULES_PATH
    assert s.log_level == "WARNING"
    assert s.log_file is None


def test_load_settings_from_file(tmp_path: Path) -> None:
    p = tmp_path / "rules-server.toml"
    p.write_text(
        """
[server]
rules_path = "conf/rules.yml"
log_level = "DEBUG"
log_file = "logs/rules.log"
""",
        encoding="utf-8",
    )
    s = load_settings(p)
    assert s.rules_path == Path("conf/rules.yml")
    assert s.log_level == "DEBUG"
    assert s.log_file == Path("logs/rules.log")


def test_empty_log_file_means_stderr_only(tmp_path: Path) -> None:
    p = tmp_path / "rules-server.toml"
    p.write_text('[server]\nlog_file = ""\n', encoding="utf-8")
    assert load_settings(p).log_file is None


def test_invalid_settings_fall_back(tmp_path: Path) -> None:
    p = tmp_path / "rules-server.toml"
    p.write_text("[server\nbroken", encoding="utf-8")
    s = load_settings(p)
    assert s.rules_path == DEFAULT_RULES_PATH
