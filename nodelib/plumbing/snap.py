"""
Locations of the snap installation on this node.

The data directory can be overridden by `$SNAP_DATA`, as set by snapd for hooks and daemons.  The
environment is read on every call, so that changes (e.g. in tests) take effect immediately.
"""

import os


SNAP_DATA = "/var/snap/microk8s/current"
"""
Default revision-specific writable data directory, holding service arguments and locks.
"""

SNAPCTL = "snapctl"
"""
Command used to control the snap's services.
"""

DAEMON_PREFIX = "microk8s.daemon-"
"""
Prefix of the snap application name for each daemon.
"""


def snap_data_path(*parts: str) -> str:
    return os.path.join(os.environ.get("SNAP_DATA") or SNAP_DATA, *parts)
