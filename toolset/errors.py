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

"""Exceptions raised by the toolset."""

from pathlib import Path
from typing import Optional


class ToolsetError(Exception):
    """Base class for every error the toolset surfaces to its caller."""


class InvalidFrameworkBenchmarksDirError(ToolsetError):
    """The resolved FrameworkBenchmarks root has no `frameworks` directory."""

    def __init__(self, path: Optional[Path] = None):
        self.path = path
        if path is None:
            message = "Could not resolve a FrameworkBenchmarks directory"
        else:
            message = (
                f"Invalid FrameworkBenchmarks directory: {path} "
                "(missing 'frameworks' subdirectory)"
            )
        super().__init__(message)


class ToolsetIOError(ToolsetError):
    """Wraps an OSError raised while writing output or creating directories."""

    def __init__(self, message: str, path: Optional[Path] = None):
        self.path = path
        super().__init__(message)


class TranscriptOwnershipError(ToolsetError):
    """A transcript file was written from a thread that does not own it."""


class BenchmarkConfigError(ToolsetError):
    """A benchmark_config.json file could not be read or validated."""

    def __init__(self, path: Path, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Invalid benchmark config {path}: {reason}")
