"""rules（ルールストア）のテスト。"""

import logging
from pathlib import Path

from project_rules.rules import DEFAULT_QUICK_PROMPT, KNOWN_SECTIONS, RuleStore, load_rules, slugify


def test_load_missing_file_is_empty(tmp_path: Path) -> None:
    store = load_rules(tmp_path / "nope.json")
    assert store.document.sections == {}
    assert store.get_section("styling") == ()
    assert store.get_quick_prompt() == DEFAULT_QUICK_PROMPT


def test_load_malformed_json_falls_back_and_logs(tmp_path: Path, caplog) -> None:
    p = tmp_path / "rules.json"
    p.write_text("{not json", encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="project_rules.rules"):
        store = load_rules(p)
    assert store.document.sections == {}
    assert "invalid" in caplog.text


def test_load_non_object_root_is_empty(tmp_path: Path) -> None:
    p = tmp_path / "rules.json"
    p.write_text("[1, 2, 3]", encoding="utf-8")
    assert load_rules(p).document.sections == {}


def test_keyed_sections(store: RuleStore) -> None:
    assert store.get_section("styling") == ("Use utilities",)
    assert store.get_title("styling") == "Styling"
    assert store.get_title("composition-api") is None
    assert store.get_section("unknown") == ()
    assert store.get_quick_prompt() == "Follow the house style."


def test_section_keys_known_first(store: RuleStore) -> None:
    keys = store.section_keys()
    assert keys[: len(KNOWN_SECTIONS)] == list(KNOWN_SECTIONS)
    assert keys[len(KNOWN_SECTIONS) :] == ["backend"]


def test_examples_parsed(store: RuleStore) -> None:
    ex = store.get_examples()
    assert list(ex) == ["button", "layout"]
    assert ex["button"].good is not None
    assert ex["button"].code is None
    assert ex["layout"].code == "<v-row><v-col /></v-row>"


def test_legacy_shape(legacy_rules_path: Path) -> None:
    store = load_rules(legacy_rules_path)
    assert store.get_section("composition-api") == ("Use composables",)
    assert store.get_section("styling") == ("No scoped CSS",)
    assert store.get_section("reusability") == ("Extend components",)
    assert store.get_section("state-management") == ("Use Pinia",)
    assert store.get_title("styling") == "Styling and CSS Guidelines"
    assert store.get_quick_prompt() == "Legacy prompt"
    assert "card" in store.get_examples()


def test_non_string_rules_are_skipped(tmp_path: Path) -> None:
    p = tmp_path / "rules.json"
    p.write_text('{"sections": {"styling": {"rules": ["a", 1, null, "b"]}}}', encoding="utf-8")
    assert load_rules(p).get_section("styling") == ("a", "b")


def test_list_section_is_untitled(tmp_path: Path) -> None:
    p = tmp_path / "rules.json"
    p.write_text('{"sections": {"backend": ["x"]}}', encoding="utf-8")
    store = load_rules(p)
    assert store.get_section("backend") == ("x",)
    assert store.get_title("backend") is None


def test_yaml_rules_file(tmp_path: Path) -> None:
    p = tmp_path / "rules.yml"
    p.write_text(
        """
sections:
  styling:
    title: Styling
    rules:
      - Use utilities
quickPrompt: yaml prompt
""",
        encoding="utf-8",
    )
    store = load_rules(p)
    assert store.get_section("styling") == ("Use utilities",)
    assert store.get_quick_prompt() == "yaml prompt"


def test_empty_quick_prompt_uses_default(tmp_path: Path) -> None:
    p = tmp_path / "rules.json"
    p.write_text('{"quickPrompt": ""}', encoding="utf-8")
    assert load_rules(p).get_quick_prompt() == DEFAULT_QUICK_PROMPT


def test_slugify() -> None:
    assert slugify("State Management") == "state-management"
    assert slugify("  A/B  test ") == "a-b-test"
