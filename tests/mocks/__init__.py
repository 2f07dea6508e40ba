"""Test doubles and record builders."""

from tests.mocks.factories import make_plan, make_result, make_task
from tests.mocks.stubs import FailingVectorIndex, StubTextGenerator

__all__ = ["FailingVectorIndex", "StubTextGenerator", "make_plan", "make_result", "make_task"]
