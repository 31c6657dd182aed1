"""Detached process launching across the WSL2 host boundary.

A project whose path lives under the Windows drive mounts (``/mnt/c/...``)
is started through PowerShell on the Windows side; anything else runs
through the Linux shell. Either way the child gets its own session and
process group, so quitting the dashboard (or a Ctrl+C reaching its group)
does not take launched projects down with it. The launcher never waits on
the child and never reads its output.

Example:
    >>> ForeignHost.from_path("/mnt/c/Users/x/app", "c").windows_path
    'C:\\\\Users\\\\x\\\\app'
"""

from __future__ import annotations

import logging
import re
import shlex
import subprocess
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable, Optional, Union

from project_launcher.config import (
    DEFAULT_FOREIGN_CMD,
    DEFAULT_FOREIGN_SHELL,
    DEFAULT_MOUNT_ROOT,
    DEFAULT_NATIVE_SHELL,
)
from project_launcher.models import Record


logger = logging.getLogger(__name__)

Spawner = Callable[..., object]

WINDOWS_EXECUTABLE_SUFFIX = ".exe"

# cmd.exe metacharacters that must be caret-escaped inside `start`
_CMD_METACHARS = re.compile(r"([\^&|<>])")


class LaunchMethod(str, Enum):
    """How a project was started; reported back to the user."""

    NATIVE_SHELL = "bash"
    FOREIGN_SHELL = "PowerShell"
    FOREIGN_START_PROCESS = "PowerShell Start-Process"
    FOREIGN_OPEN = "cmd start"


@dataclass(frozen=True)
class LaunchOutcome:
    """Result of one launch attempt."""

    ok: bool
    message: str
    method: Optional[LaunchMethod] = None
    argv: tuple[str, ...] = field(default_factory=tuple)

    @property
    def severity(self) -> str:
        return "information" if self.ok else "error"


def _ps_quote(value: str) -> str:
    """Quote a PowerShell single-quoted literal."""
    return "'" + value.replace("'", "''") + "'"


def _cmd_escape(value: str) -> str:
    return _CMD_METACHARS.sub(r"^\1", value)


@dataclass(frozen=True)
class NativeHost:
    """Run in the Linux shell after changing into the project directory."""

    path: str
    shell: str = DEFAULT_NATIVE_SHELL

    def method(self, command: str) -> LaunchMethod:
        return LaunchMethod.NATIVE_SHELL

    def shell_command(self, command: str) -> str:
        return f"cd {shlex.quote(self.path)} && {command}"

    def build_argv(self, record: Record) -> list[str]:
        return [self.shell, "-c", self.shell_command(record.command)]

    @property
    def cwd(self) -> Optional[str]:
        return self.path


@dataclass(frozen=True)
class ForeignHost:
    """Run through PowerShell on the Windows side of WSL2 interop."""

    windows_path: str
    shell: str = DEFAULT_FOREIGN_SHELL

    @classmethod
    def from_path(
        cls,
        path: str,
        drive: str,
        mount_root: str = DEFAULT_MOUNT_ROOT,
        shell: str = DEFAULT_FOREIGN_SHELL,
    ) -> "ForeignHost":
        """Translate ``<mount_root>/<drive>/a/b`` into ``<DRIVE>:\\a\\b``."""
        prefix = f"{mount_root.rstrip('/')}/{drive}"
        remainder = path[len(prefix):].lstrip("/")
        windows_path = f"{drive.upper()}:\\" + remainder.replace("/", "\\")
        return cls(windows_path=windows_path, shell=shell)

    @staticmethod
    def is_windows_executable(command: str) -> bool:
        return command.strip().lower().endswith(WINDOWS_EXECUTABLE_SUFFIX)

    def method(self, command: str) -> LaunchMethod:
        if self.is_windows_executable(command):
            return LaunchMethod.FOREIGN_START_PROCESS
        return LaunchMethod.FOREIGN_SHELL

    def shell_command(self, command: str) -> str:
        location = f"Set-Location {_ps_quote(self.windows_path)}"
        if self.is_windows_executable(command):
            # Start-Process detaches the program from the PowerShell host
            return f"{location}; Start-Process {_ps_quote(command.strip())}"
        return f"{location}; {command}"

    def build_argv(self, record: Record) -> list[str]:
        return [self.shell, "-NoProfile", "-Command", self.shell_command(record.command)]

    @property
    def cwd(self) -> Optional[str]:
        return None


HostTarget = Union[NativeHost, ForeignHost]


def foreign_drive(path: str, mount_root: str = DEFAULT_MOUNT_ROOT) -> Optional[str]:
    """Return the drive letter if ``path`` is under a Windows drive mount."""
    root = mount_root.rstrip("/")
    match = re.match(rf"^{re.escape(root)}/([A-Za-z])(?:/|$)", path)
    if match:
        return match.group(1).lower()
    return None


def resolve_host(
    record: Record,
    mount_root: str = DEFAULT_MOUNT_ROOT,
    native_shell: str = DEFAULT_NATIVE_SHELL,
    foreign_shell: str = DEFAULT_FOREIGN_SHELL,
) -> HostTarget:
    """Pick the host that should run ``record``."""
    drive = foreign_drive(record.path, mount_root)
    if drive is not None:
        return ForeignHost.from_path(record.path, drive, mount_root, shell=foreign_shell)
    return NativeHost(path=record.path, shell=native_shell)


def _spawn_detached(spawn: Spawner, argv: list[str], cwd: Optional[str] = None) -> None:
    # The handle is dropped: no waiting, no output, no supervision
    spawn(
        argv,
        cwd=cwd,
        stdin=subprocess.DEVNULL,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
        close_fds=True,
        start_new_session=True,
    )


def launch(
    record: Record,
    *,
    mount_root: str = DEFAULT_MOUNT_ROOT,
    native_shell: str = DEFAULT_NATIVE_SHELL,
    foreign_shell: str = DEFAULT_FOREIGN_SHELL,
    spawn: Spawner = subprocess.Popen,
) -> LaunchOutcome:
    """Start a project's command as a detached background process.

    Args:
        record: Project to start
        mount_root: Where Windows drives are mounted (``/mnt`` on WSL2)
        native_shell: Linux shell used for native projects
        foreign_shell: Windows shell used for projects on a drive mount
        spawn: Process factory; ``subprocess.Popen`` unless testing

    Returns:
        Outcome with a user-facing status message; spawn failures are
        reported here, never raised.
    """
    host = resolve_host(record, mount_root, native_shell, foreign_shell)
    argv = host.build_argv(record)
    method = host.method(record.command)

    logger.info("Launching %s via %s: %s", record.name, method.value, argv)
    try:
        _spawn_detached(spawn, argv, cwd=host.cwd)
    except (OSError, ValueError) as e:
        logger.warning("Failed to launch %s: %s", record.name, e)
        return LaunchOutcome(
            ok=False,
            message=f"❌ Failed to launch {record.name}: {e}",
            method=method,
            argv=tuple(argv),
        )

    if isinstance(host, ForeignHost):
        message = f"🚀 Launched {record.name} (Windows via {method.value})"
    else:
        message = f"🚀 Launched {record.name}"
    return LaunchOutcome(ok=True, message=message, method=method, argv=tuple(argv))


def open_link(
    record: Record,
    *,
    foreign_cmd: str = DEFAULT_FOREIGN_CMD,
    spawn: Spawner = subprocess.Popen,
) -> LaunchOutcome:
    """Open a project's link in the Windows default browser."""
    link = record.link.strip()
    if not link:
        return LaunchOutcome(ok=True, message="📭 No Link Associated")

    # Empty title argument so `start` never mistakes a quoted link for one
    argv = [foreign_cmd, "/c", "start", "", _cmd_escape(link)]
    logger.info("Opening link for %s: %s", record.name, link)
    try:
        _spawn_detached(spawn, argv)
    except (OSError, ValueError) as e:
        logger.warning("Failed to open link %s: %s", link, e)
        return LaunchOutcome(
            ok=False,
            message=f"❌ Failed to open link: {e}",
            method=LaunchMethod.FOREIGN_OPEN,
            argv=tuple(argv),
        )

    return LaunchOutcome(
        ok=True,
        message=f"🌐 Opened {record.name} link in browser",
        method=LaunchMethod.FOREIGN_OPEN,
        argv=tuple(argv),
    )
