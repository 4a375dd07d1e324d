"""Test fakes for the amazee.ai backend."""
from .fake_backend import FakeBackend, RecordingLogger

__all__ = ["FakeBackend", "RecordingLogger"]
