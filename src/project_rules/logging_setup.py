"""logging の初期化。

- stdout は JSON-RPC のレスポンス専用なので、コンソール出力は stderr に出す
- log_file を指定すると RotatingFileHandler で詳細ログも残す
"""

from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(*, level: str = "WARNING", log_file: Path | None = None) -> None:
    # 既に設定済みなら二重設定しない
    if getattr(setup_logging, "_configured", False):
        return

    numeric_level = getattr(logging, level.upper(), logging.WARNING)
    fmt = logging.Formatter(fmt=FORMAT, datefmt=DATEFMT)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(fmt)
    root_logger.addHandler(console)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler = RotatingFileHandler(
            log_file,
            maxBytes=2_000_000,
            backupCount=3,
            encoding="utf-8",
        )
        handler.setFormatter(fmt)
        root_logger.addHandler(handler)

    setup_logging._configured = True  # type: ignore[attr-defined]
