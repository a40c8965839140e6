"""project-rules CLI エントリポイント。"""

from __future__ import annotations

from pathlib import Path

import typer
from rich.console import Console

from project_rules.content import build_rule_content
from project_rules.logging_setup import setup_logging
from project_rules.rules import RuleStore, load_rules
from project_rules.server import serve as serve_stdio
from project_rules.settings import load_settings
from project_rules.validate import classify, validate_code

APP_HELP = "📏 プロジェクトルールを JSON-RPC (stdio) で配信するサーバ"

app = typer.Typer(add_completion=False, help=APP_HELP)
console = Console()


def _load_store(rules_path: Path | None) -> RuleStore:
    return load_rules(rules_path or load_settings().rules_path)


def _serve(rules_path: Path | None, log_level: str | None, log_file: Path | None) -> int:
    settings = load_settings()
    setup_logging(
        level=log_level or settings.log_level,
        log_file=log_file or settings.log_file,
    )
    store = load_rules(rules_path or settings.rules_path)
    return serve_stdio(store)


@app.callback(invoke_without_command=True)
def main(ctx: typer.Context) -> None:
    """サブコマンド省略時は serve として動く。"""
    if ctx.invoked_subcommand is None:
        raise typer.Exit(code=_serve(None, None, None))


@app.command()
def serve(
    rules: Path | None = typer.Option(None, "--rules", help="ルールファイル (既定: .vscode/rules.json)"),
    log_level: str | None = typer.Option(None, "--log-level", help="ログレベル (例: INFO / DEBUG)"),
    log_file: Path | None = typer.Option(None, "--log-file", help="詳細ログの出力先"),
) -> None:
    """stdin/stdout で JSON-RPC サーバを起動。"""
    raise typer.Exit(code=_serve(rules, log_level, log_file))


@app.command("rules")
def show_rules(
    section: str = typer.Argument("all", help="セクション (composition-api, styling, reusability, examples, all)"),
    rules: Path | None = typer.Option(None, "--rules", help="ルールファイル"),
) -> None:
    """ルール本文を表示。"""
    store = _load_store(rules)
    console.print(build_rule_content(store, section), markup=False, highlight=False, soft_wrap=True)


@app.command()
def prompt(
    rules: Path | None = typer.Option(None, "--rules", help="ルールファイル"),
) -> None:
    """クイックプロンプトを表示。"""
    store = _load_store(rules)
    console.print(store.get_quick_prompt(), markup=False, highlight=False, soft_wrap=True)


@app.command()
def check(
    file: Path = typer.Argument(..., help="検査するファイル"),
    code_type: str = typer.Option("vue", "--type", help="コード種別 (vue, css, js)"),
) -> None:
    """ファイルをルールに照らして検査（ヒューリスティック）。"""
    if not file.exists():
        console.print(f"❌ ファイルが見つかりません: {file}", style="red")
        raise typer.Exit(code=1)

    try:
        code = file.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        console.print(f"❌ ファイルを読み込めません: {file} ({type(e).__name__})", style="red")
        raise typer.Exit(code=1) from e

    result = classify(validate_code(code, code_type))

    for e in result.errors:
        console.print(f"  {e}", style="red", markup=False)
    for w in result.warnings:
        console.print(f"  {w}", style="yellow", markup=False)
    if not result.errors and not result.warnings:
        console.print("  ✅ ルール違反は見つかりませんでした。", style="green")
    if not result.ok:
        raise typer.Exit(code=1)
