"""ルール定義（.vscode/rules.json）のロードと保持。

起動時に1回だけ読み込み、プロセス終了まで読み取り専用で使う。

### 推奨JSON（keyed sections）

```json
{
  "sections": {
    "styling": {"title": "Styling", "rules": ["Use utilities"]}
  },
  "quickPrompt": "...",
  "codeExamples": {
    "button": {"description": "...", "good": "...", "bad": "..."}
  }
}
```

### 互換JSON（旧形式 / projectRules）

`projectRules.vue3Development.rules` の `[{category, rules}]` を読み込み、
内部のsectionsに変換する。

ファイルが無い/壊れている場合も例外は出さず、空のルールで動かす。
"""

from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

import yaml

log = logging.getLogger(__name__)

DEFAULT_RULES_PATH = Path(".vscode") / "rules.json"

DEFAULT_QUICK_PROMPT = (
    "🚨 CRITICAL PROJECT RULES: Use Vue 3 Composition API only, "
    "Vuetify utilities for styling, extend existing components."
)

# "all" で並べる順序。ここに無いキーはドキュメント順で後ろに付く。
KNOWN_SECTIONS = ("composition-api", "styling", "reusability")

# 旧形式の category 名 -> section key
LEGACY_CATEGORIES = {
    "Composition API": "composition-api",
    "Styling and CSS Guidelines": "styling",
    "Reusable Techniques": "reusability",
}


@dataclass(frozen=True)
class RuleSection:
    key: str
    title: str | None = None
    rules: tuple[str, ...] = ()


@dataclass(frozen=True)
class CodeExample:
    key: str
    description: str = ""
    good: str | None = None
    bad: str | None = None
    code: str | None = None


@dataclass(frozen=True)
class RuleDocument:
    sections: dict[str, RuleSection] = field(default_factory=dict)
    quick_prompt: str | None = None
    examples: dict[str, CodeExample] = field(default_factory=dict)


class RuleStore:
    """読み込み済みのルール（読み取り専用）。"""

    def __init__(self, document: RuleDocument | None = None) -> None:
        self._doc = document or RuleDocument()

    @property
    def document(self) -> RuleDocument:
        return self._doc

    def get_section(self, key: str) -> tuple[str, ...]:
        sec = self._doc.sections.get(key)
        return sec.rules if sec is not None else ()

    def get_title(self, key: str) -> str | None:
        sec = self._doc.sections.get(key)
        return sec.title if sec is not None else None

    def section_keys(self) -> list[str]:
        keys = list(KNOWN_SECTIONS)
        keys.extend(k for k in self._doc.sections if k not in KNOWN_SECTIONS)
        return keys

    def get_quick_prompt(self) -> str:
        return self._doc.quick_prompt or DEFAULT_QUICK_PROMPT

    def get_examples(self) -> dict[str, CodeExample]:
        return self._doc.examples


def slugify(name: str) -> str:
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def _str_or_none(v: object) -> str | None:
    if isinstance(v, str) and v:
        return v
    return None


def _rule_list(raw: object) -> tuple[str, ...]:
    if not isinstance(raw, list):
        return ()
    return tuple(r for r in raw if isinstance(r, str))


def _parse_sections(raw: object) -> dict[str, RuleSection]:
    if not isinstance(raw, dict):
        return {}
    sections: dict[str, RuleSection] = {}
    for key, v in raw.items():
        key = str(key)
        if isinstance(v, list):
            sections[key] = RuleSection(key=key, rules=_rule_list(v))
        elif isinstance(v, dict):
            sections[key] = RuleSection(
                key=key,
                title=_str_or_none(v.get("title")),
                rules=_rule_list(v.get("rules")),
            )
    return sections


def _parse_legacy_categories(raw: object) -> dict[str, RuleSection]:
    """旧形式 `[{category, rules}]` を sections に変換する。"""
    if not isinstance(raw, list):
        return {}
    sections: dict[str, RuleSection] = {}
    for item in raw:
        if not isinstance(item, dict):
            continue
        category = item.get("category")
        if not isinstance(category, str) or not category:
            continue
        key = LEGACY_CATEGORIES.get(category) or slugify(category)
        if not key:
            continue
        sections[key] = RuleSection(key=key, title=category, rules=_rule_list(item.get("rules")))
    return sections


def _parse_examples(raw: object) -> dict[str, CodeExample]:
    if not isinstance(raw, dict):
        return {}
    examples: dict[str, CodeExample] = {}
    for key, v in raw.items():
        if not isinstance(v, dict):
            continue
        key = str(key)
        desc = v.get("description")
        examples[key] = CodeExample(
            key=key,
            description=desc if isinstance(desc, str) else "",
            good=_str_or_none(v.get("good")),
            bad=_str_or_none(v.get("bad")),
            code=_str_or_none(v.get("code")),
        )
    return examples


def parse_rule_document(raw: object) -> RuleDocument:
    """デコード済みの値から RuleDocument を作る（best-effort）。"""
    if not isinstance(raw, dict):
        return RuleDocument()

    legacy = raw.get("projectRules")
    if not isinstance(legacy, dict):
        legacy = {}

    vue3 = legacy.get("vue3Development")
    sections = _parse_legacy_categories(vue3.get("rules") if isinstance(vue3, dict) else None)
    sections.update(_parse_sections(raw.get("sections")))

    quick = _str_or_none(raw.get("quickPrompt"))
    if quick is None:
        qr = legacy.get("quickReferencePrompt")
        if isinstance(qr, dict):
            quick = _str_or_none(qr.get("prompt"))

    examples = _parse_examples(legacy.get("codeExamples"))
    examples.update(_parse_examples(raw.get("codeExamples")))

    return RuleDocument(sections=sections, quick_prompt=quick, examples=examples)


def load_rules(path: Path | None = None) -> RuleStore:
    """ルールファイルを読み込む。無い/壊れている場合は空のストア。"""
    if path is None:
        path = DEFAULT_RULES_PATH
    if not path.exists():
        log.info("rules file not found: %s (serving empty rules)", path)
        return RuleStore()

    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        log.warning("rules file unreadable: %s (%s)", path, type(e).__name__)
        return RuleStore()

    try:
        if path.suffix.lower() in {".yml", ".yaml"}:
            raw = yaml.safe_load(text)
        else:
            raw = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        log.warning("rules file is invalid; using empty rules: %s (%s)", path, e)
        return RuleStore()

    if not isinstance(raw, dict):
        log.warning("rules file root is not an object; using empty rules: %s", path)
        return RuleStore()

    doc = parse_rule_document(raw)
    log.info(
        "rules loaded: %s sections=%d examples=%d",
        path,
        len(doc.sections),
        len(doc.examples),
    )
    return RuleStore(doc)
