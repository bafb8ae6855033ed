"""
Scripts to control node services.
"""

from typing import List

from .utils import entrypoint
from ..plumbing import services as services_p
from ..plumbing.common import Context
from ..tasks import services


@entrypoint
def restart(ctx: Context, service: List[str]):
    """
    Restart the daemons serving one or more services.

    Usage: {script} SERVICE... [--timeout=SECS]

    Options:
        --timeout=SECS  Skip any restarts not yet issued after this many seconds.
    """
    print(services.restart_services(ctx, *service))


@entrypoint
def daemon(service: str):
    """
    Print the name of the daemon serving a service, accounting for kubelite mode.

    Usage: {script} SERVICE
    """
    print(services_p.get_daemon_name(service))
