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

"""Resolution of the FrameworkBenchmarks root and the per-run results directory."""

import abc
from datetime import datetime
from datetime import timezone
import os
from pathlib import Path
from typing import Callable
from typing import Mapping
from typing import Optional

from core.logging_utils import get_logger
from toolset.config import TOOLSET_CONFIG
from toolset.config import ToolsetConfig
from toolset.errors import InvalidFrameworkBenchmarksDirError
from toolset.errors import ToolsetIOError

diagnostics = get_logger(__name__)


class DirectoryResolver(abc.ABC):
    """Strategy for locating the candidate FrameworkBenchmarks root."""

    @abc.abstractmethod
    def resolve(self) -> Path:
        """Returns the candidate root. It is validated by `get_tfb_dir`."""
        raise NotImplementedError


class EnvironmentDirectoryResolver(DirectoryResolver):
    """Resolves the root from `TFB_HOME`, then `~/.tfb`, then the working directory.

    The environment mapping and the home/cwd lookups are injectable so that
    tests never touch the real process state.
    """

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        home: Optional[Callable[[], Path]] = None,
        cwd: Optional[Callable[[], Path]] = None,
        config: ToolsetConfig = TOOLSET_CONFIG,
    ):
        self.environ = os.environ if environ is None else environ
        self.home = home or Path.home
        self.cwd = cwd or Path.cwd
        self.config = config

    def resolve(self) -> Path:
        tfb_home = self.environ.get(self.config.TFB_HOME_ENV)
        if tfb_home is not None:
            diagnostics.debug("Using %s=%s", self.config.TFB_HOME_ENV, tfb_home)
            return Path(tfb_home)

        try:
            home_dir = self.home() / self.config.TFB_HOME_DIR_NAME
        except (RuntimeError, KeyError) as e:
            diagnostics.debug("No home directory (%s); falling back to cwd", e)
            return self.cwd()

        if home_dir.exists():
            return home_dir

        diagnostics.debug("%s does not exist; falling back to cwd", home_dir)
        return self.cwd()


class StaticDirectoryResolver(DirectoryResolver):
    """Always resolves to the given directory."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def resolve(self) -> Path:
        return self.path


def get_tfb_dir(
    resolver: Optional[DirectoryResolver] = None,
    config: ToolsetConfig = TOOLSET_CONFIG,
) -> Path:
    """Gets the FrameworkBenchmarks directory for the running context.

    Raises:
        InvalidFrameworkBenchmarksDirError: If the resolved root has no
            `frameworks` subdirectory.
    """
    resolver = resolver or EnvironmentDirectoryResolver(config=config)
    tfb_path = resolver.resolve()

    if not (tfb_path / config.FRAMEWORKS_DIR_NAME).is_dir():
        raise InvalidFrameworkBenchmarksDirError(tfb_path)

    return tfb_path


def create_results_dir(
    root: Optional[Path] = None,
    now: Optional[datetime] = None,
    config: ToolsetConfig = TOOLSET_CONFIG,
) -> Path:
    """Creates the result directory and timestamp subdirectory for this run.

    Args:
        root: Directory in which `results/` lives. Defaults to the working directory.
        now: Timestamp of the run. Defaults to the current UTC time.

    Returns:
        Path: `<root>/results/<YYYYMMDDHHMMSS>`.
    """
    now = now or datetime.now(timezone.utc)
    if now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    results_dir = Path(config.RESULTS_ROOT) / now.strftime(config.RESULTS_TIMESTAMP_FORMAT)
    if root is not None:
        results_dir = Path(root) / results_dir

    try:
        results_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise ToolsetIOError(
            f"Failed to create results directory {results_dir}: {e}", results_dir
        ) from e

    return results_dir
