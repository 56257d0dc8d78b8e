from __future__ import annotations

import pytest

from fakes import (DeterministicHasher, InMemoryResetTokens,
                   InMemoryUserRepository, RecordingMailNotifier)


@pytest.fixture()
def users() -> InMemoryUserRepository:
    return InMemoryUserRepository()


@pytest.fixture()
def hasher() -> DeterministicHasher:
    return DeterministicHasher()


@pytest.fixture()
def reset_tokens() -> InMemoryResetTokens:
    return InMemoryResetTokens()


@pytest.fixture()
def mailer() -> RecordingMailNotifier:
    return RecordingMailNotifier()
