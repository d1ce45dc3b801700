from __future__ import annotations

from typing import List

import pytest


class FakeGenerator:
    """Deterministic stand-in for the generation service."""

    def __init__(self, fail_on: int = 0):
        self.prompts: List[str] = []
        self.fail_on = fail_on

    def __call__(self, prompt: str) -> str:
        self.prompts.append(prompt)
        n = len(self.prompts)
        if self.fail_on and n == self.fail_on:
            from srtsum.core.llm_client import ServiceError

            raise ServiceError(f"boom on call {n}")
        if "FINAL SUMMARY:" in prompt:
            return "- final point"
        return f"- point {n}"


@pytest.fixture
def fake_generate():
    return FakeGenerator()


def words(n: int) -> List[str]:
    return [f"w{i}" for i in range(n)]
