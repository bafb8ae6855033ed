"""
Scripts to inspect and change service arguments.
"""

from typing import Dict, List

from .utils import DocOptArgs, entrypoint, error
from ..plumbing import args
from ..plumbing.common import Context
from ..tasks import services


@entrypoint
def get(service: str, key: str):
    """
    Print the value of a service argument, or an empty line if it's unset.

    Usage: {script} SERVICE KEY
    """
    print(args.get_service_argument(service, key))


@entrypoint
def show(service: str):
    """
    Print all arguments of a service.

    Usage: {script} SERVICE
    """
    for key, value in args.get_service_arguments(service).items():
        print(args.render_line(key, value) if value else key)


def _parse_updates(pairs: List[str]) -> Dict[str, str]:
    updates: Dict[str, str] = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            error("Expected KEY=VALUE, got {!r}".format(pair), exit=1)
        updates[key] = value
    return updates


@entrypoint
def update(opts: DocOptArgs, ctx: Context, service: str):
    """
    Set or remove arguments of a service, and optionally restart it if anything changed.

    Usage: {script} SERVICE [--set=ARG]... [--delete=KEY]... [--restart] [--timeout=SECS]

    Options:
        --set=ARG       Argument to set, as KEY=VALUE (e.g. --set=--v=4).
        --delete=KEY    Argument to remove (e.g. --delete=--v).
        --restart       Restart the service if its arguments changed.
        --timeout=SECS  Give up restarting after this many seconds.
    """
    updates = _parse_updates(opts["--set"])
    try:
        result = services.configure_service(ctx, service, updates, opts["--delete"],
                                            restart=bool(opts["--restart"]))
    except (OSError, ValueError) as ex:
        error("Couldn't update arguments of {}: {}".format(service, ex), exit=1)
    print(result)
