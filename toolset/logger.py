# Copyright 2025 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Console and transcript logging for benchmark runs."""

from __future__ import annotations

from dataclasses import dataclass
import enum
from pathlib import Path
import re
import threading
from typing import Any
from typing import Optional
from typing import Union

from colorama import Fore
from colorama import Style

from core.logging_utils import get_logger
from toolset.config import TOOLSET_CONFIG
from toolset.data_models import Named
from toolset.errors import ToolsetIOError
from toolset.errors import TranscriptOwnershipError

diagnostics = get_logger(__name__)

_ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


def strip_ansi(text: str) -> str:
    """Strips ANSI escape codes from the text."""
    return _ANSI_ESCAPE.sub("", text)


_LINE_BREAK = re.compile(r"\r?\n")


def _visible_lines(text: Any) -> list[str]:
    """Splits on newlines only and drops lines that are blank once unstyled."""
    return [
        line for line in _LINE_BREAK.split(str(text)) if strip_ansi(line).strip()
    ]


class UpdateStatus(str, enum.Enum):
    """Whether a best-effort Logger reconfiguration took effect."""

    APPLIED = "applied"

    SKIPPED = "skipped"


@dataclass(frozen=True)
class LoggerUpdate:
    """Result of `Logger.set_test` or `Logger.set_log_file`."""

    status: UpdateStatus
    reason: Optional[str] = None

    @property
    def applied(self) -> bool:
        return self.status is UpdateStatus.APPLIED

    @classmethod
    def ok(cls) -> "LoggerUpdate":
        return cls(UpdateStatus.APPLIED)

    @classmethod
    def skipped(cls, reason: str) -> "LoggerUpdate":
        return cls(UpdateStatus.SKIPPED, reason)


class TranscriptFile:
    """An append-only, plain-text log file owned by a single thread.

    The thread that creates the transcript is its owner; appends from any
    other thread raise `TranscriptOwnershipError`. A worker that needs its
    own transcript should take `Logger.clone()` and bind a file on the clone.
    """

    def __init__(self, path: Path):
        self.path = Path(path)
        self._owner = threading.get_ident()

    @property
    def owner(self) -> int:
        """Identifier of the owning thread."""
        return self._owner

    def append_line(self, line: str) -> None:
        """Appends the line with escape codes removed, followed by a newline."""
        if threading.get_ident() != self._owner:
            raise TranscriptOwnershipError(
                f"Log file {self.path} belongs to another thread; clone the Logger"
                " and bind a separate file instead."
            )
        # The file is created at bind time; a missing file is not re-created.
        if not self.path.is_file():
            raise ToolsetIOError(f"Log file {self.path} no longer exists", self.path)
        try:
            with open(self.path, "a", encoding="utf-8") as f:
                f.write(strip_ansi(line) + "\n")
        except OSError as e:
            raise ToolsetIOError(
                f"Failed to write to log file {self.path}: {e}", self.path
            ) from e

    def __repr__(self) -> str:
        return f"TranscriptFile({str(self.path)!r})"


class Logger:
    """Logs to standard out and optionally to a transcript file.

    Note: `Logger` is not threadsafe. The transcript belongs to the thread
    that bound it. To log to a file from another unit of work, `clone()` the
    Logger and call `set_log_file` on the clone.
    """

    def __init__(
        self,
        prefix: Optional[str] = None,
        log_dir: Union[str, Path, None] = None,
        quiet: bool = False,
    ):
        self.prefix = prefix
        self.log_dir = Path(log_dir) if log_dir is not None else None
        self.quiet = quiet
        self._transcript: Optional[TranscriptFile] = None

    @classmethod
    def default(cls) -> "Logger":
        """A Logger which only prints to standard out."""
        return cls()

    @classmethod
    def with_prefix(cls, prefix: str) -> "Logger":
        """A console Logger whose lines are prefixed with `prefix`."""
        return cls(prefix=prefix)

    @classmethod
    def in_dir(cls, log_dir: Union[str, Path]) -> "Logger":
        """A Logger rooted at `log_dir`, ready for `set_test`/`set_log_file`."""
        return cls(log_dir=log_dir)

    @property
    def log_file(self) -> Optional[Path]:
        """Path of the bound transcript, if any."""
        return self._transcript.path if self._transcript is not None else None

    def clone(self) -> "Logger":
        """Returns an independent Logger with the same settings and no transcript."""
        return Logger(prefix=self.prefix, log_dir=self.log_dir, quiet=self.quiet)

    def __copy__(self) -> "Logger":
        return self.clone()

    def __deepcopy__(self, memo: dict) -> "Logger":
        return self.clone()

    def set_test(self, test: Union[Named, str]) -> LoggerUpdate:
        """Sets the prefix to the test's name and moves `log_dir` beneath it.

        Example: If `log_dir` was `results/20200619191252` and this function
        was passed `gemini`, `log_dir` becomes `results/20200619191252/gemini`.

        The prefix is always updated. If the subdirectory cannot be created,
        `log_dir` is left unchanged and the returned update is SKIPPED.
        """
        test_name = test if isinstance(test, str) else test.get_name()
        self.prefix = test_name

        if self.log_dir is None:
            return LoggerUpdate.skipped("no log directory configured")

        test_dir = self.log_dir / test_name
        try:
            test_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            diagnostics.debug("Not logging %s to a file: %s", test_name, e)
            return LoggerUpdate.skipped(f"could not create {test_dir}: {e}")

        self.log_dir = test_dir
        return LoggerUpdate.ok()

    def set_log_file(self, file_name: str = TOOLSET_CONFIG.LOG_FILE_NAME) -> LoggerUpdate:
        """Binds `log_dir/file_name` as the transcript, creating it if needed.

        Existing files are appended to, never truncated. Without a `log_dir`
        this is a no-op that returns SKIPPED.
        """
        if self.log_dir is None:
            return LoggerUpdate.skipped("no log directory configured")

        log_file = self.log_dir / file_name
        try:
            if not log_file.exists():
                log_file.touch()
        except OSError as e:
            diagnostics.debug("Could not create log file %s: %s", log_file, e)
            return LoggerUpdate.skipped(f"could not create {log_file}: {e}")

        if not log_file.is_file():
            diagnostics.debug("Log file %s is not a regular file", log_file)
            return LoggerUpdate.skipped(f"{log_file} is not a regular file")

        self._transcript = TranscriptFile(log_file)
        return LoggerUpdate.ok()

    def log(self, text: Any) -> None:
        """Logs each non-blank line of `text` to the transcript and standard out.

        Raises:
            ToolsetIOError: If a transcript is bound and cannot be written.
        """
        for line in _visible_lines(text):
            line = line.rstrip()
            if self._transcript is not None:
                self._transcript.append_line(line)
            if not self.quiet:
                self._print(line)

    def error(self, text: Any) -> None:
        """Like `log`, but the console copy is rendered in red."""
        self.log(
            "\n".join(
                f"{Fore.RED}{line.rstrip()}{Style.RESET_ALL}"
                for line in _visible_lines(text)
            )
        )

    def _print(self, line: str) -> None:
        if self.prefix is not None:
            print(f"{Style.BRIGHT}{Fore.WHITE}{self.prefix}{Style.RESET_ALL}: {line}")
        else:
            print(line)

    def __repr__(self) -> str:
        return (
            f"Logger(prefix={self.prefix!r}, log_dir={self.log_dir!r},"
            f" log_file={self.log_file!r}, quiet={self.quiet!r})"
        )
