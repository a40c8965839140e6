"""JSON-RPC 2.0 stdio server.

目的:
- エディタ/エージェントから stdin/stdout だけでプロジェクトルールを引けるようにする
- 1行=1リクエスト（JSON Lines）。1リクエストにつき最大1行のレスポンスを返す

リクエスト例:
{"jsonrpc":"2.0","id":1,"method":"tools/call","params":{"name":"get_quick_prompt"}}

レスポンス例:
{"jsonrpc":"2.0","id":1,"result":{"content":[{"type":"text","text":"..."}]}}

注意:
- stdout はレスポンス専用。ログは stderr / ログファイルへ
- 1行の失敗は、その行のエラーレスポンスにとどめる（他の行は巻き込まない）
- initialize / ping / tools/list / tools/call は id が無くても応答する（id は null）
- それ以外の method で id を持たないもの（notification）には応答しない
- 1行が MAX_LINE_BYTES を超えたら、その行は捨てて -32700 を返す
"""

from __future__ import annotations

import json
import logging
import signal
import sys
from collections.abc import Iterator
from typing import Any, BinaryIO, TextIO

from project_rules.content import ALL_SECTIONS, build_rule_content
from project_rules.rules import RuleStore
from project_rules.tools import (
    GET_PROJECT_RULES,
    GET_QUICK_PROMPT,
    TOOLS,
    VALIDATE_CODE,
    initialize_result,
)
from project_rules.validate import render_validation_report, validate_code

log = logging.getLogger(__name__)

PARSE_ERROR = -32700
INVALID_REQUEST = -32600
METHOD_NOT_FOUND = -32601
INVALID_PARAMS = -32602
INTERNAL_ERROR = -32603

CHUNK_SIZE = 65536
MAX_LINE_BYTES = 4 * 1024 * 1024


class RpcError(Exception):
    def __init__(self, code: int, message: str, data: Any = None) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.data = data

    def to_dict(self) -> dict:
        err: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            err["data"] = self.data
        return err


class LineBuffer:
    """バイト列のチャンクを受け取り、完結した行だけを返す。

    改行で終わらない末尾は次のチャンクまで持ち越す。
    max_line_bytes を超えた行は中身を捨て、None として返す。
    """

    def __init__(self, max_line_bytes: int = MAX_LINE_BYTES) -> None:
        self._buf = bytearray()
        self._max = max_line_bytes
        self._discarding = False

    def feed(self, chunk: bytes) -> list[str | None]:
        self._buf.extend(chunk)
        *complete, rest = self._buf.split(b"\n")

        lines: list[str | None] = []
        for b in complete:
            if self._discarding:
                # 長すぎた行の終端
                self._discarding = False
                lines.append(None)
            elif len(b) > self._max:
                lines.append(None)
            else:
                lines.append(_decode(b))

        if len(rest) > self._max:
            self._discarding = True
            rest = bytearray()
        self._buf = bytearray(rest)
        return lines

    def flush(self) -> list[str | None]:
        """EOF時に残っている未完の行を返す。"""
        if self._discarding:
            self._discarding = False
            self._buf.clear()
            return [None]
        if not self._buf:
            return []
        line = _decode(bytes(self._buf))
        self._buf.clear()
        return [line]

    @property
    def pending(self) -> int:
        return len(self._buf)


def _decode(b: bytes) -> str:
    return b.decode("utf-8", errors="replace")


def _text_result(text: str) -> dict:
    return {"content": [{"type": "text", "text": text}]}


def _string_arg(args: dict, name: str, default: str) -> str:
    v = args.get(name)
    if not v:
        return default
    if not isinstance(v, str):
        raise RpcError(INVALID_PARAMS, "Invalid params", f"'{name}' must be a string")
    return v


def encode(resp: dict) -> str:
    return json.dumps(resp, ensure_ascii=False, separators=(",", ":"))


class RulesServer:
    def __init__(self, store: RuleStore, *, out: TextIO | None = None) -> None:
        self.store = store
        self._out = out

    # --- per-line handling -------------------------------------------------

    def handle_line(self, line: str) -> dict | None:
        """1行を処理してレスポンス（なければ None）を返す。"""
        if not line.strip():
            return None

        try:
            req = json.loads(line)
        except (ValueError, RecursionError) as e:
            # JSONDecodeError のほか、巨大な整数リテラルや深いネストもここで受ける
            log.warning("parse error: %s", e)
            return _error_response(None, RpcError(PARSE_ERROR, "Parse error", str(e)))

        if not isinstance(req, dict):
            return _error_response(None, RpcError(INVALID_REQUEST, "Invalid Request"))

        rid = req.get("id")
        try:
            return self.handle_request(req)
        except RpcError as e:
            return _error_response(rid, e)
        except Exception:
            log.exception("internal error while handling method=%r", req.get("method"))
            return _error_response(rid, RpcError(INTERNAL_ERROR, "Internal error"))

    def handle_request(self, req: dict) -> dict | None:
        rid = req.get("id")
        method = req.get("method")
        log.debug("request id=%r method=%r", rid, method)

        if method == "initialize":
            return _result_response(rid, initialize_result())
        if method == "ping":
            return _result_response(rid, {})
        if method == "tools/list":
            return _result_response(rid, {"tools": TOOLS})
        if method == "tools/call":
            params = req.get("params")
            if not isinstance(params, dict):
                params = {}
            args = params.get("arguments")
            if args is None:
                args = {}
            if not isinstance(args, dict):
                raise RpcError(INVALID_PARAMS, "Invalid params", "'arguments' must be an object")
            return _result_response(rid, self._dispatch(params.get("name"), args))

        # notification: 応答しない
        if "id" not in req:
            log.debug("ignored notification: %r", method)
            return None
        raise RpcError(METHOD_NOT_FOUND, "Method not found", method)

    def _dispatch(self, name: object, args: dict) -> dict:
        if name == GET_PROJECT_RULES:
            section = _string_arg(args, "section", ALL_SECTIONS)
            return _text_result(build_rule_content(self.store, section))
        if name == VALIDATE_CODE:
            code = _string_arg(args, "code", "")
            code_type = _string_arg(args, "type", "vue")
            violations = validate_code(code, code_type)
            log.info("validate_code type=%s violations=%d", code_type, len(violations))
            return _text_result(render_validation_report(violations))
        if name == GET_QUICK_PROMPT:
            return _text_result(self.store.get_quick_prompt())
        raise RpcError(METHOD_NOT_FOUND, "Method not found")

    # --- stream loop ---------------------------------------------------------

    def run(self, stdin: BinaryIO | None = None, *, max_line_bytes: int = MAX_LINE_BYTES) -> None:
        """stdin を EOF まで読み、1行ごとに応答する。"""
        if stdin is None:
            stdin = sys.stdin.buffer
        buf = LineBuffer(max_line_bytes)
        for chunk in _read_chunks(stdin):
            for line in buf.feed(chunk):
                self._handle_and_write(line, max_line_bytes)
        for line in buf.flush():
            self._handle_and_write(line, max_line_bytes)
        log.info("stdin closed")

    def _handle_and_write(self, line: str | None, max_line_bytes: int) -> None:
        if line is None:
            log.warning("line exceeds %d bytes; dropped", max_line_bytes)
            err = RpcError(PARSE_ERROR, "Parse error", f"line exceeds {max_line_bytes} bytes")
            self._write(_error_response(None, err))
            return
        resp = self.handle_line(line)
        if resp is not None:
            self._write(resp)

    def _write(self, resp: dict) -> None:
        out = self._out if self._out is not None else sys.stdout
        out.write(encode(resp) + "\n")
        out.flush()


def _result_response(rid: Any, result: dict) -> dict:
    return {"jsonrpc": "2.0", "id": rid, "result": result}


def _error_response(rid: Any, err: RpcError) -> dict:
    return {"jsonrpc": "2.0", "id": rid, "error": err.to_dict()}


def _read_chunks(stream: BinaryIO) -> Iterator[bytes]:
    read = getattr(stream, "read1", None) or stream.read
    while True:
        chunk = read(CHUNK_SIZE)
        if not chunk:
            return
        yield chunk


def _exit_cleanly(signum: int, _frame: object) -> None:
    log.info("received signal %d, exiting", signum)
    raise SystemExit(0)


def install_signal_handlers() -> None:
    signal.signal(signal.SIGINT, _exit_cleanly)
    signal.signal(signal.SIGTERM, _exit_cleanly)


def serve(store: RuleStore, *, stdin: BinaryIO | None = None, stdout: TextIO | None = None) -> int:
    install_signal_handlers()
    log.info("project-rules server started")
    RulesServer(store, out=stdout).run(stdin)
    return 0
