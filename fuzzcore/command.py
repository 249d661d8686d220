"""A command line to run in a subprocess, with output redirection settings."""

from collections.abc import Iterable


class Command:
    """Argument list plus stdout/stderr redirection for a child process.

    Arguments after :attr:`IGNORE_REMAINING_ARGS` are immutable: lookups and
    edits only touch the part of the list before it.
    """

    IGNORE_REMAINING_ARGS = "-ignore_remaining_args=1"

    def __init__(self, args: Iterable[str] = ()) -> None:
        self.args: list[str] = list(args)
        self.out_and_err_combined = False
        self.output_file = ""

    def copy(self) -> "Command":
        """Return an independent copy of this command."""
        other = Command(self.args)
        other.out_and_err_combined = self.out_and_err_combined
        other.output_file = self.output_file
        return other

    def _end_mutable(self) -> int:
        try:
            return self.args.index(self.IGNORE_REMAINING_ARGS)
        except ValueError:
            return len(self.args)

    def _mutable(self) -> list[str]:
        return self.args[: self._end_mutable()]

    def has_argument(self, arg: str) -> bool:
        """Whether ``arg`` appears among the mutable arguments."""
        return arg in self._mutable()

    def add_argument(self, arg: str) -> None:
        """Add ``arg`` at the end of the mutable arguments."""
        self.args.insert(self._end_mutable(), arg)

    def add_arguments(self, args: Iterable[str]) -> None:
        """Add every argument at the end of the mutable arguments."""
        end = self._end_mutable()
        self.args[end:end] = list(args)

    def remove_argument(self, arg: str) -> None:
        """Remove every mutable occurrence of ``arg``."""
        end = self._end_mutable()
        self.args[:end] = [a for a in self.args[:end] if a != arg]

    @staticmethod
    def _flag_prefix(flag: str) -> str:
        return f"-{flag}="

    def has_flag(self, flag: str) -> bool:
        """Whether a mutable ``-flag=...`` argument is present."""
        prefix = self._flag_prefix(flag)
        return any(a.startswith(prefix) for a in self._mutable())

    def get_flag_value(self, flag: str) -> str:
        """Value of the first mutable ``-flag=...`` argument, or ``""``."""
        prefix = self._flag_prefix(flag)
        return next(
            (a[len(prefix):] for a in self._mutable() if a.startswith(prefix)), ""
        )

    def add_flag(self, flag: str, value: str) -> None:
        """Add ``-flag=value`` to the mutable arguments."""
        self.add_argument(f"{self._flag_prefix(flag)}{value}")

    def remove_flag(self, flag: str) -> None:
        """Remove every mutable ``-flag=...`` argument."""
        prefix = self._flag_prefix(flag)
        end = self._end_mutable()
        self.args[:end] = [a for a in self.args[:end] if not a.startswith(prefix)]

    def has_output_file(self) -> bool:
        """Whether stdout is redirected to a file."""
        return bool(self.output_file)

    def combine_out_and_err(self, combine: bool = True) -> None:
        """Set whether stderr is redirected to stdout."""
        self.out_and_err_combined = combine

    def __str__(self) -> str:
        parts = list(self.args)
        if self.has_output_file():
            parts.append(f">{self.output_file}")
        if self.out_and_err_combined:
            parts.append("2>&1")
        return " ".join(parts)

    def __repr__(self) -> str:
        return f"Command({self.args!r})"