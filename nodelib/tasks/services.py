"""
Reconfiguration of node services.
"""

import logging
from typing import Iterable, Mapping, Optional

from ..plumbing import args, services
from ..plumbing.common import Collect, Context, Result, Runner


LOG = logging.getLogger(__name__)


@Result.collect
def configure_service(ctx: Context, service: str, updates: Optional[Mapping[str, str]] = None,
                      deletions: Iterable[str] = (), restart: bool = True,
                      runner: Optional[Runner] = None) -> Collect[None]:
    """
    Update the arguments of a service, and restart it to apply them if anything changed.
    """
    res_args = yield from args.update_service_arguments(service, updates, deletions)
    if res_args and restart:
        yield services.restart(ctx, service, runner)
    elif res_args:
        LOG.info("Arguments of %r changed, restart pending", service)


@Result.collect
def restart_services(ctx: Context, *names: str, runner: Optional[Runner] = None) -> Collect[None]:
    """
    Restart several services in turn, skipping any remaining once the context is cancelled.

    Services sharing a daemon (e.g. all control plane services in kubelite mode) only cause a
    single restart.
    """
    seen = set()
    for service in names:
        daemon = services.get_daemon_name(service)
        if daemon in seen:
            LOG.debug("Daemon %r already restarted, skipping %r", daemon, service)
            continue
        seen.add(daemon)
        yield services.restart(ctx, service, runner)
