from __future__ import annotations

import json
from pathlib import Path

import pytest

from project_rules.rules import RuleStore, load_rules


@pytest.fixture()
def rules_path(tmp_path: Path) -> Path:
    """keyed sections 形式のルールファイル。"""
    p = tmp_path / ".vscode" / "rules.json"
    p.parent.mkdir()
    p.write_text(
        json.dumps(
            {
                "sections": {
                    "styling": {"title": "Styling", "rules": ["Use utilities"]},
                    "composition-api": {"rules": ["Use <script setup>", "Prefer ref()"]},
                    "reusability": {"title": "Reuse", "rules": []},
                    "backend": {"title": "Backend", "rules": ["Use typed APIs"]},
                },
                "quickPrompt": "Follow the house style.",
                "codeExamples": {
                    "button": {
                        "description": "Buttons use Vuetify",
                        "good": '<v-btn class="ma-2">OK</v-btn>',
                        "bad": '<button style="margin: 8px">OK</button>',
                    },
                    "layout": {"description": "Grid", "code": "<v-row><v-col /></v-row>"},
                },
            }
        ),
        encoding="utf-8",
    )
    return p


@pytest.fixture()
def legacy_rules_path(tmp_path: Path) -> Path:
    """旧形式（projectRules）のルールファイル。"""
    p = tmp_path / "legacy-rules.json"
    p.write_text(
        json.dumps(
            {
                "projectRules": {
                    "quickReferencePrompt": {"prompt": "Legacy prompt"},
                    "vue3Development": {
                        "rules": [
                            {"category": "Composition API", "rules": ["Use composables"]},
                            {"category": "Styling and CSS Guidelines", "rules": ["No scoped CSS"]},
                            {"category": "Reusable Techniques", "rules": ["Extend components"]},
                            {"category": "State Management", "rules": ["Use Pinia"]},
                        ]
                    },
                    "codeExamples": {"card": {"description": "Cards", "good": "<v-card />"}},
                }
            }
        ),
        encoding="utf-8",
    )
    return p


@pytest.fixture()
def store(rules_path: Path) -> RuleStore:
    return load_rules(rules_path)
