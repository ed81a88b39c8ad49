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

"""Configuration constants for the toolset."""

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional


@dataclass(frozen=True)
class ToolsetConfig:
    """Configuration settings for output, reporting and path resolution."""
    # Environment variable naming the FrameworkBenchmarks root.
    TFB_HOME_ENV: str = "TFB_HOME"

    # Fallback root under the user's home directory.
    TFB_HOME_DIR_NAME: str = ".tfb"

    # Every valid root must contain this directory.
    FRAMEWORKS_DIR_NAME: str = "frameworks"

    BENCHMARK_CONFIG_FILE_NAME: str = "benchmark_config.json"

    # Results layout: <RESULTS_ROOT>/<UTC timestamp>/<test>/<LOG_FILE_NAME>
    RESULTS_ROOT: str = "results"
    RESULTS_TIMESTAMP_FORMAT: str = "%Y%m%d%H%M%S"
    LOG_FILE_NAME: str = "benchmark.txt"

    # Verification summary layout
    SUMMARY_TITLE: str = "Verification Summary"
    SUMMARY_WIDTH: int = 79
    SUMMARY_INDENT_WIDTH: int = 8
    SUMMARY_TYPE_WIDTH: int = 13
    SUMMARY_STATUS_WIDTH: int = 5

    # Diagnostic logging
    LOG_LEVEL_ENV: str = "TFB_LOG_LEVEL"
    LOG_LEVEL: str = "WARNING"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "ToolsetConfig":
        """Builds a config, overriding the diagnostic log level from the environment."""
        environ = os.environ if environ is None else environ
        config = cls()
        level = environ.get(config.LOG_LEVEL_ENV)
        if level:
            config = replace(config, LOG_LEVEL=level)
        return config


# Instantiate for usage
TOOLSET_CONFIG = ToolsetConfig()
