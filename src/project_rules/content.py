"""Render rule sections as Markdown-like text blocks."""

from __future__ import annotations

from project_rules.rules import RuleStore

NO_RULES_FOUND = "No rules found for the specified section."

ALL_SECTIONS = "all"
EXAMPLES = "examples"


def render_section(heading: str, rules: tuple[str, ...] | list[str]) -> str:
    lines = [f"## {heading}"]
    lines.extend(f"- {r}" for r in rules)
    return "\n".join(lines)


def _section_block(store: RuleStore, key: str) -> str:
    rules = store.get_section(key)
    if not rules:
        return ""
    return render_section(store.get_title(key) or key.upper(), rules)


def render_examples(store: RuleStore) -> str:
    examples = store.get_examples()
    if not examples:
        return ""

    out: list[str] = ["## Code Examples"]
    for key, ex in examples.items():
        out.append("")
        out.append(f"### {key}")
        if ex.description:
            out.append(ex.description)
        if ex.good is not None:
            out.extend(["✅ GOOD:", "```", ex.good, "```"])
        if ex.bad is not None:
            out.extend(["❌ BAD:", "```", ex.bad, "```"])
        if ex.code is not None:
            out.extend(["```", ex.code, "```"])
    return "\n".join(out)


def build_rule_content(store: RuleStore, section: str = ALL_SECTIONS) -> str:
    """section に対応するルール本文を返す。

    - "all": 既知セクションを順に並べる（ルール0件のセクションは出さない）
    - "examples": codeExamples があればコード例
    - それ以外: 該当セクションのみ。無ければ NO_RULES_FOUND
    """

    if section == ALL_SECTIONS:
        blocks = [_section_block(store, k) for k in store.section_keys()]
        content = "\n\n".join(b for b in blocks if b)
    elif section == EXAMPLES and store.get_examples():
        content = render_examples(store)
    else:
        content = _section_block(store, section)

    return content or NO_RULES_FOUND
