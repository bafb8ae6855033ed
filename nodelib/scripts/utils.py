"""
Helpers for converting methods into scripts, and filling in arguments from the command line.
"""

from functools import wraps
from inspect import cleandoc, signature
import logging
import sys
from typing import Any, Callable, Dict, List, Optional, Union

from docopt import docopt

from ..plumbing.common import Context


DocOptArgs = Dict[str, Union[bool, str, List[str], None]]


ENTRYPOINTS: List[str] = []


def entrypoint(fn: Callable[..., Any]) -> Callable[..., Any]:
    """
    Decorator to make an entrypoint out of a generic function.

    This uses `docopt` to parse arguments according to the method docstring, and will be formatted
    with `{script}` set to the script name.  At minimum, it should contain `Usage: {script}`.

    Functions may optionally accept arguments, but they must be annotated with a recognised type in
    order to be filled in.  The following types are fixed and always available:

    - `DocOptArgs` (a `dict` of input parameters parsed from the usage line)
    - `Context` (a cancellation context, bounded by `--timeout=SECS` if the usage line declares it)

    The types `str` and `List[str]` are filled in from an input parameter matching the variable
    name (the name must be declared in the usage line, either in upper case or surrounded by arrow
    brackets, e.g. `SERVICE` or `<service>`).

    An example function:

        @entrypoint
        def get(service: str, key: str):
            \"""
            Print the value of a service argument.

            Usage: {script} SERVICE KEY
            \"""
    """
    label = "nodelib-{}-{}".format(fn.__module__.rsplit(".", 1)[-1],
                                   fn.__qualname__).replace("_", "-")

    @wraps(fn)
    def wrap(opts: Optional[DocOptArgs] = None):
        extra: Dict[str, Any] = {}
        script = "{} [--debug]".format(label)
        if opts is None:
            doc = cleandoc(fn.__doc__.format(script=script))
            opts = docopt(doc)
        if opts.pop("--debug", False):
            logging.basicConfig(level=logging.DEBUG)
        # Detect resolvable-typed arguments and fill in their values.
        sig = signature(fn)
        for param in sig.parameters.values():
            name = param.name
            cls = param.annotation
            if cls is DocOptArgs:
                extra[name] = opts
                continue
            elif cls is Context:
                extra[name] = _context(opts.get("--timeout"))
                continue
            try:
                try:
                    value = opts[name.upper()]
                except KeyError:
                    value = opts["<{}>".format(name)]
            except KeyError:
                raise RuntimeError("Missing argument {!r}".format(name))
            if cls in (str, List[str]):
                extra[name] = value
            else:
                raise RuntimeError("Bad parameter {!r} type {!r}".format(name, cls))
        fn(**extra)
    wrap.__doc__ = wrap.__doc__.format(script=label)
    # Create a console script line for setup.
    target = "{}:{}".format(fn.__module__, fn.__qualname__)
    ENTRYPOINTS.append("{}={}".format(label, target))
    return wrap


def _context(timeout: Optional[str]) -> Context:
    if not timeout:
        return Context.background()
    try:
        seconds = float(timeout)
    except ValueError:
        error("Timeout must be a number of seconds, not {!r}".format(timeout), exit=1)
    return Context(seconds)


def error(msg: Optional[str] = None, *, exit: Optional[int] = None, colour: Optional[str] = None):
    """
    Print an error message and/or exit.
    """
    if msg:
        colour = colour or ("1" if exit else "3")
        print("\033[9{}m{}\033[0m".format(colour, msg), file=sys.stderr)
    if exit is not None:
        sys.exit(exit)
