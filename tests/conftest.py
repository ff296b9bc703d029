from __future__ import annotations

import pytest

from reelchat import sessions


@pytest.fixture(autouse=True)
def _fresh_sessions():
    sessions.clear_all()
    yield
    sessions.clear_all()
