"""
Shared helper methods and base classes.
"""

from enum import Enum
from functools import wraps
import inspect
import logging
import subprocess
import time
from typing import Any, Callable, Generator, Generic, Iterable, List, Optional, TypeVar, Union


LOG = logging.getLogger(__name__)

T = TypeVar("T")

Collect = Generator["Result[Any]", None, T]
"""
Generic type for the return value of functions using `Result.collect`.
"""


class Unset:
    """
    Constructor of generic default values for optional but nullable parameters.
    """

    def __repr__(self):
        return "UNSET"


UNSET = Unset()
"""
Global generic default value.
"""


class State(Enum):
    """
    Enumeration used by `Result` to declare whether the action happened.
    """

    unchanged = 0
    """
    No action required, the request and current state are consistent.
    """
    success = 1
    """
    The action was completed without issues.
    """

    def __bool__(self):
        return bool(self.value)


class Result(Generic[T]):
    """
    State and optional accompanying value from a unit of work.

    For a simple plumbing action, just create a new result directly with the resulting `State` and
    a value if relevant:

        def unit():
            # Rewrite a file, call an external command etc.
            return Result(State.success, True)

    For a task that combines multiple results, see `Result.collect`.  The state of such a result is
    based on all of its parts -- if any changes were made, the outer result also reports a change.

    A result can be checked for truthiness, which is `False` if no changes were made.

    A result can also be converted to a string, which produces a tree-like summary of changes:

        module:task success True
            module:unit1 unchanged
            module:unit2 success
    """

    @classmethod
    def collect(cls, fn: Callable[..., Collect[T]]) -> Callable[..., "Result[T]"]:
        """
        Decorator: build a `Result` from multiple sub-tasks:

            def plumb_b() -> Result[str]: ...

            @Result.collect
            def task() -> Collect[str]:
                yield plumb_a()
                result = yield from plumb_b()
                if result:
                    yield plumb_c()
                return result.value

        The inner function this decorator wraps should be a generator of `Result` objects.

        The return value of the wrapper function will be a new `Result` object, whose `parts` will
        be those collected sub-task results, and whose `value` will be set to the return value of
        the inner function (i.e. the example above will return a `Result[str]`).
        """
        @wraps(fn)
        def inner(*args: Any, **kwargs: Any) -> Result[T]:
            state = None
            value = None
            parts: List[Result[Any]] = []
            gen = fn(*args, **kwargs)
            try:
                while True:
                    result = next(gen)
                    parts.append(result)
            except StopIteration as ex:
                value = ex.value
            return cls(state, value, parts, fn)
        return inner

    def __init__(self, state: Optional[State] = None, value: Union[T, Unset] = UNSET,
                 parts: Iterable["Result[Any]"] = (), caller: Optional[Callable[..., Any]] = None):
        self._state = state
        self._value = value
        self.parts = tuple(parts)
        self.caller = "<unknown>"
        # Inspection magic to log the calling method, e.g. `module.sub:Class.method`.
        name = None
        if not caller:
            frame = inspect.currentframe()
            try:
                name = frame.f_back.f_code.co_name
                caller = frame.f_back.f_globals[name]
            except (AttributeError, KeyError):
                pass
        if caller:
            self.caller = "{}:{}".format(caller.__module__, caller.__qualname__)
        elif name:
            self.caller = name

    @property
    def state(self) -> State:
        """
        Modification state of the unit of work.

        This may be set directly, computed from `parts`, or defaulted to `State.unchanged`.
        """
        if self._state:
            return self._state
        elif any(self.parts):
            return State.success
        else:
            return State.unchanged

    @state.setter
    def state(self, state: State) -> None:
        self._state = state

    @property
    def value(self) -> T:
        """
        Return value produced by the unit of work.

        Accessing this attribute will raise `ValueError` if no value has been set.
        """
        if isinstance(self._value, Unset):
            raise ValueError("No value set")
        return self._value

    @value.setter
    def value(self, value: T) -> None:
        self._value = value

    def __bool__(self) -> bool:
        return bool(self.state)

    def __iter__(self) -> Generator["Result[T]", None, "Result[T]"]:
        # Syntactic sugar used by `yield from` expressions in `Result.collect()`.
        yield self
        return self

    def __repr__(self) -> str:
        params = [str(self.state)]
        if not isinstance(self._value, Unset):
            params.append(repr(self._value))
        if self.parts:
            params.append("<{} parts>".format(len(self.parts)))
        return "{}({})".format(self.__class__.__name__, ", ".join(params))

    def __str__(self) -> str:
        tree = "{}: {}".format(self.caller, self.state.name)
        if not isinstance(self._value, Unset) and self._value is not None:
            tree = "{} {!r}".format(tree, self._value)
        if self.parts:
            for result in self.parts:
                tree += "\n    {}".format(str(result).replace("\n", "\n    "))
        return tree


class Context:
    """
    Cancellation scope for external commands, with an optional deadline:

        ctx = Context(timeout=30)
        restart(ctx, "apiserver")

    A context is cancelled once `cancel()` has been called or its deadline has passed.  Work that
    has not yet started should check `cancelled` and skip itself.
    """

    def __init__(self, timeout: Optional[float] = None):
        self._deadline = None if timeout is None else time.monotonic() + timeout
        self._cancelled = False

    @classmethod
    def background(cls) -> "Context":
        """
        Create a context that never expires, for callers with no deadline of their own.
        """
        return cls()

    def cancel(self) -> None:
        self._cancelled = True

    @property
    def cancelled(self) -> bool:
        if self._cancelled:
            return True
        remaining = self.remaining()
        return remaining is not None and remaining <= 0

    def remaining(self) -> Optional[float]:
        """
        Seconds until the deadline, or `None` if the context has no deadline.
        """
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - time.monotonic())

    def __repr__(self):
        if self._cancelled:
            status = "cancelled"
        elif self._deadline is None:
            status = "background"
        else:
            status = "{:.1f}s left".format(self.remaining())
        return "<{}: {}>".format(self.__class__.__name__, status)


def command(args: List[str], input_: Optional[str] = None, output: bool = False,
            timeout: Optional[float] = None) -> "subprocess.CompletedProcess[bytes]":
    """
    Create a subprocess to execute an external command.
    """
    if input_:
        LOG.debug("Exec: %r <<< %r", args, input_)
    else:
        LOG.debug("Exec: %r", args)
    return subprocess.run(args, input=input_.encode("utf-8") if input_ else None,
                          stdout=subprocess.PIPE if output else None, check=True,
                          timeout=timeout)


class Runner:
    """
    Capability to execute an external command within a `Context`.

    Implementations decide their own failure policy: `run` reports whether the command succeeded,
    but callers issuing fire-and-forget commands are free to ignore it.
    """

    def run(self, ctx: Context, args: List[str]) -> bool:
        raise NotImplementedError


class CommandRunner(Runner):
    """
    Runner backed by `command`, bounded by the context's remaining time.

    Failures (non-zero exit, timeout, or a missing executable) are logged rather than raised.
    """

    def run(self, ctx: Context, args: List[str]) -> bool:
        if ctx.cancelled:
            LOG.warning("Not running %r, context cancelled", args)
            return False
        try:
            command(args, timeout=ctx.remaining())
        except subprocess.CalledProcessError as ex:
            LOG.error("Command %r failed with exit code %d", args, ex.returncode)
        except subprocess.TimeoutExpired:
            LOG.error("Command %r timed out", args)
        except OSError as ex:
            LOG.error("Command %r could not be started: %s", args, ex)
        else:
            return True
        return False
