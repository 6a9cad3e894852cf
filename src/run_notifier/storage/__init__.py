from .fakes import FakeArtifactStore, StoreCall
from .local import LocalArtifactStore

__all__ = [
    "FakeArtifactStore",
    "LocalArtifactStore",
    "StoreCall",
]
