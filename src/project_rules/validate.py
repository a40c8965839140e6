"""コード片のヒューリスティック検査。

構文解析はしない。文字列の包含と正規表現だけで、よくあるルール違反を拾う。
検査するのは type="vue" のときだけ（他の type は常に違反なし）。
"""

from __future__ import annotations

import re
from dataclasses import dataclass

ERROR_MARK = "❌"
ADVISORY_MARK = "⚠️"

OPTIONS_API = f"{ERROR_MARK} Using Options API instead of Composition API"
CUSTOM_CSS = f"{ERROR_MARK} Using custom CSS instead of Vuetify utilities"
MISSING_UTILITIES = f"{ADVISORY_MARK} Consider using Vuetify utility classes for styling"

_UTILITY_CLASS = re.compile(
    r"""class=['"][^'"]*(?:ma-|pa-|mt-|pt-|ml-|pl-|mr-|pr-|mb-|pb-|d-|text-|primary|secondary|success|error|elevation-)"""
)

QUICK_FIXES = (
    "• Use `<script setup>` instead of Options API",
    "• Replace custom CSS with Vuetify classes: `ma-4`, `pa-2`, `text-h5`, etc.",
    "• Extend existing components with props instead of creating new files",
)


@dataclass
class ValidationResult:
    ok: bool
    warnings: list[str]
    errors: list[str]


def validate_code(code: str, type: str = "vue") -> list[str]:  # noqa: A002
    """違反メッセージを検査の宣言順で返す（重複除去なし）。"""
    violations: list[str] = []
    if type != "vue":
        return violations

    if "export default {" in code and "<script setup>" not in code:
        violations.append(OPTIONS_API)

    if "<style" in code and ("scoped" in code or "module" in code):
        violations.append(CUSTOM_CSS)

    if "class=" in code and not _UTILITY_CLASS.search(code):
        violations.append(MISSING_UTILITIES)

    return violations


def classify(violations: list[str]) -> ValidationResult:
    errors = [v for v in violations if v.startswith(ERROR_MARK)]
    warnings = [v for v in violations if not v.startswith(ERROR_MARK)]
    return ValidationResult(ok=len(errors) == 0, warnings=warnings, errors=errors)


def render_validation_report(violations: list[str]) -> str:
    out = "## CODE VALIDATION RESULTS:\n\n"
    if not violations:
        out += "✅ **Code follows project rules!**\n\n"
    else:
        out += "**Issues found:**\n" + "\n".join(violations) + "\n\n"

    out += "**Quick fixes:**\n"
    out += "".join(f"{line}\n" for line in QUICK_FIXES)
    return out
