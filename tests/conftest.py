import asyncio
import logging
from collections.abc import Iterator
from pathlib import Path
from typing import Callable, Optional

import pytest

from chief_summarizer.errors import ConnectivityError, OracleError


class FakeOracle:
    """In-memory oracle recording every generate call."""

    def __init__(
        self,
        models: Optional[list[str]] = None,
        list_error: Optional[OracleError] = None,
        fail_on: Optional[set[int]] = None,
        reply: Optional[Callable[[str, Optional[str], int], str]] = None,
        delays: Optional[dict[str, float]] = None,
    ):
        self.models = models if models is not None else ["qwen3:14b"]
        self.list_error = list_error
        self.fail_on = fail_on or set()
        self.reply = reply
        self.delays = delays or {}
        self.calls: list[tuple[str, str, Optional[str]]] = []
        self.list_calls = 0
        self.in_flight = 0
        self.max_in_flight = 0

    async def list_models(self) -> list[str]:
        self.list_calls += 1
        if self.list_error is not None:
            raise self.list_error
        return list(self.models)

    async def generate(self, model: str, prompt: str, task: Optional[str] = None) -> str:
        self.calls.append((model, prompt, task))
        number = len(self.calls)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            delay = self.delays.get(task or "", 0)
            if delay:
                await asyncio.sleep(delay)
            if number in self.fail_on:
                raise ConnectivityError("connection refused")
            if self.reply is not None:
                return self.reply(prompt, task, number)
            if task == "merge":
                return "<think>combining</think>\n## Ultra-Kurzfassung\nThema.\nErgebnis."
            return f"<think>reading</think>summary of {task}"
        finally:
            self.in_flight -= 1

    @property
    def tasks(self) -> list[Optional[str]]:
        return [task for _, _, task in self.calls]


@pytest.fixture
def fake_oracle() -> FakeOracle:
    return FakeOracle()


@pytest.fixture
def missing_config(tmp_path: Path) -> str:
    return str(tmp_path / "no-such-config.yaml")


@pytest.fixture(autouse=True)
def reset_package_logger() -> Iterator[None]:
    logger = logging.getLogger("chief_summarizer")
    yield
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
