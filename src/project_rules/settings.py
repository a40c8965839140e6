"""サーバ設定: `.vscode/rules-server.toml`（任意）。

```toml
[server]
rules_path = ".vscode/rules.json"
log_level = "WARNING"
log_file = ""   # 空なら stderr のみ
```

ファイルが無ければデフォルト。CLIオプションが指定されればそちらを優先する。
"""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass
from pathlib import Path

from project_rules.rules import DEFAULT_RULES_PATH

log = logging.getLogger(__name__)

DEFAULT_SETTINGS_PATH = Path(".vscode") / "rules-server.toml"


@dataclass
class ServerSettings:
    rules_path: Path = DEFAULT_RULES_PATH
    log_level: str = "WARNING"
    log_file: Path | None = None


def load_settings(path: Path | None = None) -> ServerSettings:
    if path is None:
        path = DEFAULT_SETTINGS_PATH
    if not path.exists():
        return ServerSettings()

    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        log.warning("settings file is invalid; using defaults: %s (%s)", path, e)
        return ServerSettings()

    server = raw.get("server", {})
    if not isinstance(server, dict):
        server = {}

    log_file = str(server.get("log_file", "") or "")
    return ServerSettings(
        rules_path=Path(str(server.get("rules_path", "") or DEFAULT_RULES_PATH)),
        log_level=str(server.get("log_level", "WARNING")),
        log_file=Path(log_file) if log_file else None,
    )
