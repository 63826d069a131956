"""Mock providers for testing."""

from .mail import MockMailerProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockMailerProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
