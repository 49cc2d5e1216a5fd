import sys
from pathlib import Path
from typing import List

import pytest

# Ensure 'src' is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
src = ROOT / "src"
if str(src) not in sys.path:
    sys.path.insert(0, str(src))

from observable_collections import settings as settings_module  # noqa: E402
from observable_collections.events import Event  # noqa: E402

ALL_TOPICS = "add change remove replace clear sort"


class EventRecorder:
    """Collects every event a collection triggers, in order."""

    def __init__(self, collection) -> None:
        self.events: List[Event] = []
        collection.on(ALL_TOPICS, self.events.append)

    @property
    def topics(self) -> List[str]:
        return [e.topic for e in self.events]

    def of(self, topic: str) -> List[Event]:
        return [e for e in self.events if e.topic == topic]

    def reset(self) -> None:
        self.events.clear()


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    # Keep the developer's own config out of the tests
    monkeypatch.delenv(settings_module.CONFIG_ENV_VAR, raising=False)
    monkeypatch.setattr(settings_module, "user_config_dir", lambda appname: str(tmp_path / "user_config"))
    settings_module.reset_settings()
    yield
    settings_module.reset_settings()


@pytest.fixture()
def record():
    return EventRecorder
