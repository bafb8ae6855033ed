"""
Restarting of the node's daemons through snapctl.

The Kubernetes control plane services either run as individual daemons, or together as a single
`kubelite` daemon when the node has a kubelite lock file.  Callers always refer to the logical
service; the lock is checked on every call, as the mode may change at any time.
"""

import logging
import os
from typing import List, Optional

from .common import CommandRunner, Context, Result, Runner, State
from .snap import DAEMON_PREFIX, SNAPCTL, snap_data_path


LOG = logging.getLogger(__name__)

KUBELITE = "kubelite"
"""
Daemon serving all of the control plane services in combined mode.
"""

_DAEMONS = {
    "apiserver": "apiserver",
    "kube-apiserver": "apiserver",
    "proxy": "proxy",
    "kube-proxy": "proxy",
    "kubelet": "kubelet",
    "scheduler": "scheduler",
    "kube-scheduler": "scheduler",
    "controller-manager": "controller-manager",
    "kube-controller-manager": "controller-manager",
}

KUBELITE_DAEMONS = frozenset(_DAEMONS.values())
"""
Daemons replaced by `KUBELITE` in combined mode.  All other services are never redirected.
"""

RUNNER: Runner = CommandRunner()
"""
Default runner used to issue restart commands.
"""


def get_kubelite_lock_path() -> str:
    return snap_data_path("var", "lock", "lite.lock")


def has_kubelite_lock() -> bool:
    """
    Check whether the node runs the control plane as a single `kubelite` daemon.

    Errors while checking (e.g. permission denied) are treated as no lock.
    """
    try:
        os.stat(get_kubelite_lock_path())
    except OSError:
        return False
    else:
        return True


def get_daemon_name(service: str, combined: Optional[bool] = None) -> str:
    """
    Resolve a logical service name (e.g. `kube-apiserver`) to the daemon that serves it.

    Unknown services are assumed to be daemon names already.  If `combined` isn't given, the
    kubelite lock is checked.
    """
    daemon = _DAEMONS.get(service, service)
    if daemon not in KUBELITE_DAEMONS:
        return daemon
    if combined is None:
        combined = has_kubelite_lock()
    return KUBELITE if combined else daemon


def get_restart_command(daemon: str) -> List[str]:
    return [SNAPCTL, "restart", "{}{}".format(DAEMON_PREFIX, daemon)]


def restart(ctx: Context, service: str, runner: Optional[Runner] = None) -> Result[None]:
    """
    Issue a restart of the daemon serving the given service.

    This doesn't wait for the daemon to come back, and the outcome of the command is left to the
    runner to report.  Nothing is issued if the context is already cancelled.
    """
    if ctx.cancelled:
        LOG.warning("Not restarting %r, context cancelled", service)
        return Result(State.unchanged)
    daemon = get_daemon_name(service)
    LOG.info("Restarting %r via daemon %r", service, daemon)
    (runner or RUNNER).run(ctx, get_restart_command(daemon))
    return Result(State.success)
