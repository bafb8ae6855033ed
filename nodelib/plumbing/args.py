"""
Service argument files.

Each service reads its command-line arguments at startup from a plain text file, one directive per
line, in any of these forms:

    --key=value
    --key value
    --flag

Only the first directive on a line is understood; anything following it on the same line is not
available to lookups.  The first line for a given key wins, for both reads and updates.
"""

import errno
import logging
import os
import re
import stat
import tempfile
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

from .common import Result, State
from .snap import snap_data_path


LOG = logging.getLogger(__name__)

FLAG_PREFIX = "-"

_WHITESPACE = re.compile(r"\s+")


def parse_line(line: str) -> Optional[Tuple[str, str]]:
    """
    Parse a single argument line into a `(key, value)` pair, or `None` if the line holds no flag:

        >>> parse_line("   --key=value")
        ('--key', 'value')
        >>> parse_line("--key value lost")
        ('--key', 'value')
        >>> parse_line("--key=value --other=lost")
        ('--key', 'value')
        >>> parse_line("--flag")
        ('--flag', '')
    """
    line = line.strip()
    if not line.startswith(FLAG_PREFIX):
        return None
    if "=" in line:
        key, value = line.split("=", 1)
        return (key.strip(), _WHITESPACE.split(value.strip(), 1)[0])
    parts = _WHITESPACE.split(line, 2)
    if len(parts) > 1:
        return (parts[0], parts[1])
    return (line, "")


def render_line(key: str, value: str) -> str:
    return "{}={}".format(key, value)


def get_args_path(service: str) -> str:
    """
    Path to the argument file of the given service.
    """
    return snap_data_path("args", service)


def _read_lines(path: str) -> List[str]:
    # Only split on newlines, so that other line breaks (e.g. form feeds) in unrecognised lines
    # survive a rewrite.
    with open(path, encoding="utf-8", newline="") as f:
        lines = f.read().split("\n")
    if lines[-1] == "":
        lines.pop()
    return lines


def _lookup_lines(service: str) -> List[str]:
    path = get_args_path(service)
    try:
        return _read_lines(path)
    except (OSError, UnicodeDecodeError) as ex:
        LOG.debug("Treating arguments of %r as unset: %s", service, ex)
        return []


def get_service_argument(service: str, key: str) -> str:
    """
    Look up the value of an argument for a service, or an empty string if the argument is unset.

    A missing or unreadable file counts as having no arguments set.
    """
    for line in _lookup_lines(service):
        pair = parse_line(line)
        if pair and pair[0] == key:
            return pair[1]
    return ""


def get_service_arguments(service: str) -> Dict[str, str]:
    """
    Collect all arguments of a service, keeping the first value of any repeated key.
    """
    args: Dict[str, str] = {}
    for line in _lookup_lines(service):
        pair = parse_line(line)
        if pair:
            args.setdefault(*pair)
    return args


def _encoding_error(path: str, ex: UnicodeError) -> OSError:
    return OSError(errno.EILSEQ, "Arguments are not valid UTF-8 ({})".format(ex.reason), path)


def _write_lines(path: str, lines: List[str]) -> None:
    try:
        data = "".join("{}\n".format(line) for line in lines).encode("utf-8")
    except UnicodeEncodeError as ex:
        raise _encoding_error(path, ex) from ex
    # Write to a sibling file and swap it in, so readers never see a partial file.
    mode = stat.S_IMODE(os.stat(path).st_mode)
    fd, tmp = tempfile.mkstemp(prefix=".{}.".format(os.path.basename(path)),
                               dir=os.path.dirname(path))
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.chmod(tmp, mode)
        os.replace(tmp, path)
    except BaseException:
        try:
            os.unlink(tmp)
        except FileNotFoundError:
            pass
        raise


def _check_key(key: str) -> None:
    # Keys that wouldn't parse back from their rendered line would be appended on every update.
    if not key.startswith(FLAG_PREFIX) or "=" in key or _WHITESPACE.search(key):
        raise ValueError("Invalid argument key {!r}".format(key))


def update_service_arguments(service: str, updates: Optional[Mapping[str, str]] = None,
                             deletions: Iterable[str] = ()) -> Result[None]:
    """
    Set and remove arguments of a service, rewriting its argument file in place.

    The first line of each updated key is replaced, and keys not yet present are appended.  Lines
    of deleted keys are dropped, which takes priority over an update of the same key.  All other
    lines are kept as they are.

    Raises `ValueError` for an updated key that isn't a single flag token, and `OSError` if the
    file can't be read or written (including content that isn't valid UTF-8).
    """
    path = get_args_path(service)
    deletions = set(deletions)
    pending = {key: value for key, value in (updates or {}).items() if key not in deletions}
    for key in pending:
        _check_key(key)
    try:
        before = _read_lines(path)
    except UnicodeDecodeError as ex:
        raise _encoding_error(path, ex) from ex
    after: List[str] = []
    for line in before:
        pair = parse_line(line)
        if pair:
            key = pair[0]
            if key in deletions:
                continue
            elif key in pending:
                line = render_line(key, pending.pop(key))
        after.append(line)
    after.extend(render_line(key, value) for key, value in pending.items())
    if after == before:
        return Result(State.unchanged)
    LOG.info("Rewriting arguments of %r at %r", service, path)
    _write_lines(path, after)
    return Result(State.success)
