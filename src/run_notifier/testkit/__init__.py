from .directory import FakeDirectory, FakeTeam
from .engine import EngineCall, FakeExecutionEngine

__all__ = [
    "EngineCall",
    "FakeDirectory",
    "FakeExecutionEngine",
    "FakeTeam",
]
