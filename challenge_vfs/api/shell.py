"""
VFSShell - Command Interface over the Virtual Filesystem

Text commands for humans (the interactive CLI) and scripted callers.

Commands:
    pwd             - Print working directory
    ls [path]       - List a directory (default: current)
    cd <path>       - Change directory; "/" is the root, ".." goes up
    cat <path>      - Print a file
    open <name>     - Browse: enter a directory, or show a file in place
    back            - Go up one level (no-op at the root)
    history         - Previously executed commands

Paths starting with "/" are absolute; anything else is relative to the
working directory. The shell only moves the Navigator through open(),
back() and reset().

Example:
    >>> shell = repo.shell()
    >>> print(shell.execute("ls"))
    API/
    Web/
    >>> shell.execute("cd Web")
    '/Web'
    >>> print(shell.execute("cat mock-challenge-12"))
"""

from __future__ import annotations

import shlex

from challenge_vfs.exceptions import NotADirectory
from challenge_vfs.vfs.navigator import Navigator, list_directory, resolve, split_path

PARENT = ".."


class VFSShell:
    """Interactive shell over a Navigator."""

    def __init__(self, navigator: Navigator) -> None:
        self._nav = navigator
        self._history: list[str] = []

    @property
    def navigator(self) -> Navigator:
        return self._nav

    # === Navigation ===

    def pwd(self) -> str:
        return self._nav.pwd()

    def cd(self, path: str = "/") -> str:
        """
        Change directory.

        Raises:
            PathNotFound: If the target does not exist
            NotADirectory: If the target is a file
        """
        target = self._absolute(path)
        node = resolve(self._nav.root, target)
        if not node.is_branch:
            raise NotADirectory("/".join(target))

        self._nav.reset()
        for segment in target:
            self._nav.open(segment)
        return self.pwd()

    def back(self) -> str:
        self._nav.back()
        return self.pwd()

    def open(self, name: str) -> str:
        """Open an entry of the working directory (browsing semantics)."""
        result = self._nav.open(name)
        if isinstance(result, list):
            return self._format_listing(self._nav.current_path, result)
        return result

    # === Content Access ===

    def ls(self, path: str | None = None) -> str:
        """List directory contents; directories get a trailing "/"."""
        target = self._absolute(path) if path else self._nav.current_path
        return self._format_listing(target, list_directory(self._nav.root, target))

    def cat(self, path: str) -> str:
        return self._nav.get_file_content(self._absolute(path))

    # === Session Management ===

    def history(self, limit: int = 20) -> list[str]:
        """Get command history for this session."""
        return self._history[-limit:]

    # === Execution ===

    def execute(self, command: str) -> str:
        """
        Execute a shell command string.

        Raises:
            ValueError: On unknown commands or wrong arity
            VFSError: On path errors (see the individual commands)
        """
        args = shlex.split(command)
        if not args:
            return ""
        self._history.append(command)
        name, rest = args[0], args[1:]

        if name == "pwd" and not rest:
            return self.pwd()
        if name == "ls" and len(rest) <= 1:
            return self.ls(rest[0] if rest else None)
        if name == "cd" and len(rest) <= 1:
            return self.cd(rest[0] if rest else "/")
        if name == "cat" and len(rest) == 1:
            return self.cat(rest[0])
        if name == "open" and len(rest) == 1:
            return self.open(rest[0])
        if name == "back" and not rest:
            return self.back()
        if name == "history" and not rest:
            return "\n".join(self.history())
        raise ValueError(f"Unknown command or wrong arguments: {command!r}")

    def execute_batch(self, commands: list[str]) -> list[str]:
        """Execute multiple commands, returning all outputs."""
        return [self.execute(cmd) for cmd in commands]

    # === Helpers ===

    def _absolute(self, path: str) -> tuple[str, ...]:
        """Resolve "/"-rooted or relative paths (with "..") to segments."""
        segments: list[str] = [] if path.startswith("/") else list(self._nav.current_path)
        for segment in split_path(path):
            if segment == PARENT:
                if segments:
                    segments.pop()
            elif segment != ".":
                segments.append(segment)
        return tuple(segments)

    def _format_listing(self, directory: tuple[str, ...], names: list[str]) -> str:
        node = resolve(self._nav.root, directory)
        lines = []
        for name in names:
            child = node.child(name)
            lines.append(f"{name}/" if child is not None and child.is_branch else name)
        return "\n".join(lines)
