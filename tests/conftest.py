# SPDX-License-Identifier: Apache-2.0
"""Shared fixtures for year-review tests."""

from __future__ import annotations

import base64
import json
from typing import Any

import pytest


def encode_text(text: str) -> str:
    """Base64-encode UTF-8 text the way uploads arrive."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def make_summary_payload(**overrides: Any) -> dict[str, Any]:
    """Build a valid summary response in the wire format."""
    payload: dict[str, Any] = {
        "cards": [
            {"title": "步履不停", "content": "旅程内容", "keyword": "GROWTH", "style": "ticket"},
            {"title": "且听风吟", "content": "情绪内容", "keyword": "HEART", "style": "paper"},
            {"title": "瞬息宇宙", "content": "品味内容", "keyword": "TASTE", "style": "note"},
            {"title": "未完待续", "content": "未来内容", "keyword": "DREAM", "style": "polaroid"},
        ],
        "visualTags": ["coffee", "camera", "cat"],
        "poem": "第一行\n第二行\n第三行\n第四行",
        "analysis": "这是一段分析。",
        "keyword": "REBIRTH",
        "animal": "Fox",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def sample_answers() -> dict[int, str]:
    """Answers touching every bucket."""
    return {
        1: "第一次一个人去露营",
        5: "东京、京都",
        8: "完成了第一个半程马拉松",
        9: "考研失利",
        17: "《晴天》",
        22: "学会了先爱自己",
        25: "《百年孤独》",
        27: "《奥本海默》",
        6: "一只小猫",
        39: "慢慢来比较快",
    }


@pytest.fixture
def summary_json() -> str:
    """Valid summary response text."""
    return json.dumps(make_summary_payload(), ensure_ascii=False)
