import os
import tempfile
from typing import List, TypeVar
import unittest
from unittest.mock import patch

from nodelib.plumbing.common import Collect, Context, Result, Runner, State, Unset


T = TypeVar("T")


def default() -> Result[Unset]:
    return Result()


def unchanged() -> Result[Unset]:
    return Result(State.unchanged)


def success() -> Result[Unset]:
    return Result(State.success)


def success_value(value: T) -> Result[T]:
    return Result(State.success, value)


@Result.collect
def collect_pair() -> Collect[None]:
    yield unchanged()
    yield success()


@Result.collect
def collect_all() -> Collect[str]:
    yield unchanged()
    yield success()
    result = yield from success_value("test")
    return result.value


class RecordingRunner(Runner):
    """
    Runner that keeps the commands it's given instead of running them.
    """

    def __init__(self, ok: bool = True):
        self.ok = ok
        self.commands: List[str] = []

    def run(self, ctx: Context, args: List[str]) -> bool:
        self.commands.append(" ".join(args))
        return self.ok

    @property
    def last(self) -> str:
        return self.commands[-1]


class SnapDataTestCase(unittest.TestCase):
    """
    Base test case that points `$SNAP_DATA` at a fresh temporary directory.
    """

    def setUp(self):
        self.tempdir = tempfile.TemporaryDirectory()
        self.snap_data = self.tempdir.name
        env = patch.dict(os.environ, {"SNAP_DATA": self.snap_data})
        env.start()
        self.addCleanup(env.stop)
        self.addCleanup(self.tempdir.cleanup)

    def write_args(self, service: str, contents: str, mode: int = 0o644) -> str:
        path = os.path.join(self.snap_data, "args", service)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        with open(path, "w") as f:
            f.write(contents)
        os.chmod(path, mode)
        return path

    def read_args(self, service: str) -> str:
        with open(os.path.join(self.snap_data, "args", service)) as f:
            return f.read()

    def create_kubelite_lock(self) -> str:
        path = os.path.join(self.snap_data, "var", "lock", "lite.lock")
        os.makedirs(os.path.dirname(path), exist_ok=True)
        open(path, "w").close()
        return path
