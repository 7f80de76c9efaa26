import asyncio
from typing import Any, List, Optional

import pytest

from debugrepl.config.settings import ReplConfig
from debugrepl.core.entries import SourceRef
from debugrepl.core.evaluation import EvaluationResponse
from debugrepl.core.repl_log import ReplLog
from debugrepl.core.session import DebugSession


class FakeSession(DebugSession):
    """Session answering evaluate requests from a queue of canned responses."""

    def __init__(self, name: str = "fake", responses: Optional[List[Any]] = None):
        super().__init__(name)
        self.responses = list(responses or [])
        self.requests = []
        self.gate: Optional[asyncio.Event] = None
        self.on_evaluate = None

    async def evaluate(self, expression, frame, context):
        self.requests.append((expression, frame, context))
        if self.on_evaluate is not None:
            self.on_evaluate(expression)
        if self.gate is not None:
            await self.gate.wait()
        if self.responses:
            response = self.responses.pop(0)
            if isinstance(response, Exception):
                raise response
            return response
        return EvaluationResponse(success=True, result=expression, value=repr(expression), type="str")

    def get_source(self, location_ref: str) -> SourceRef:
        return SourceRef(name=location_ref.rsplit("/", 1)[-1], path=location_ref)


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def other_session():
    return FakeSession(name="other")


@pytest.fixture
def repl_log():
    return ReplLog()


@pytest.fixture
def small_log():
    return ReplLog(ReplConfig(max_length=3))
