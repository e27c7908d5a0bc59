# Shared pytest fixtures
from __future__ import annotations
import os
import tempfile
from pathlib import Path
import pytest

from csvtable.logging.init import reset_logging
from csvtable.models import FileMeta, PickedFile

SAMPLE_CSV = "id,name,parentId\n1,Alpha,\n2,Beta,1\n3,Gamma,1\n"


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in list(os.environ):
        if key.startswith("CSVTABLE_"):
            monkeypatch.delenv(key, raising=False)
    reset_logging()
    yield
    reset_logging()


@pytest.fixture()
def temp_workdir(monkeypatch) -> Path:
    with tempfile.TemporaryDirectory() as d:
        p = Path(d)
        (p / "config").mkdir()
        monkeypatch.chdir(p)
        yield p


@pytest.fixture()
def sample_csv() -> str:
    return SAMPLE_CSV


class FakeFile:
    """PickedFile source that counts reads; ``content`` may be an exception to raise."""

    def __init__(self, content, name: str, content_type: str, size: int | None) -> None:
        self.content = content
        self.reads = 0
        if size is None:
            size = len(content) if isinstance(content, bytes) else 0
        self.picked = PickedFile(meta=FileMeta(name=name, size=size, content_type=content_type), read=self.read)

    async def read(self) -> bytes:
        self.reads += 1
        if isinstance(self.content, BaseException):
            raise self.content
        return self.content


class FakePicker:
    """Returns the queued files one per call, then None (picker closed)."""

    def __init__(self) -> None:
        self.queue: list[PickedFile | None] = []
        self.calls = 0

    def will_pick(self, picked: PickedFile | None) -> None:
        self.queue.append(picked)

    async def __call__(self) -> PickedFile | None:
        self.calls += 1
        if not self.queue:
            return None
        return self.queue.pop(0)


@pytest.fixture()
def make_file():
    def _make(content=SAMPLE_CSV.encode("utf-8"), *, name: str = "data.csv",
              content_type: str = "text/csv", size: int | None = None) -> FakeFile:
        return FakeFile(content, name, content_type, size)
    return _make


@pytest.fixture()
def picker() -> FakePicker:
    return FakePicker()
