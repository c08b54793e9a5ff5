"""Tests for the category and motor prompt builders."""

from todaybrief.modules.today.application.prompts import (
    EMPTY_RESULT_PROMPT,
    build_category_prompt,
    build_motor_prompt,
)
from todaybrief.modules.today.domain.entities import Category


def test_category_prompt_is_deterministic() -> None:
    for category in Category:
        assert build_category_prompt(category) == build_category_prompt(category)


def test_category_prompts_differ_and_demand_json() -> None:
    prompts = {build_category_prompt(category) for category in Category}
    assert len(prompts) == len(Category)
    for prompt in prompts:
        assert "JSON" in prompt


def test_string_tag_matches_enum() -> None:
    assert build_category_prompt("luck") == build_category_prompt(Category.LUCK)


def test_unknown_category_yields_empty_result_prompt() -> None:
    assert build_category_prompt("weather") == EMPTY_RESULT_PROMPT == "[]"


def test_motor_prompt_embeds_message() -> None:
    prompt = build_motor_prompt('오른쪽으로 30도 "돌려"')
    assert "오른쪽으로 30도 '돌려'" in prompt
    assert '"angle": int' in prompt
