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

"""Discovery of frameworks and tests from benchmark_config.json files.

The expected layout is::

    <tfb_dir>/frameworks/<Language>/<framework>/benchmark_config.json

where each config looks like::

    {
      "framework": "gemini",
      "tests": [{
        "default": {"json_url": "/json", "tags": ["broken"]},
        "postgres": {"db_url": "/db"}
      }]
    }

The `default` entry is named after the framework; every other entry is
named `<framework>-<key>`.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Optional

import pydantic

from core.logging_utils import get_logger
from toolset.config import TOOLSET_CONFIG
from toolset.config import ToolsetConfig
from toolset.data_models import Framework
from toolset.data_models import Test
from toolset.errors import BenchmarkConfigError
from toolset.paths import DirectoryResolver
from toolset.paths import get_tfb_dir

diagnostics = get_logger(__name__)

DEFAULT_TEST_KEY = "default"


class BenchmarkConfig(pydantic.BaseModel):
    """Schema of a benchmark_config.json file."""

    framework: Optional[str] = None
    tests: List[Dict[str, Dict[str, Any]]] = pydantic.Field(default_factory=list)


def _test_name(framework_name: str, key: str) -> str:
    if key == DEFAULT_TEST_KEY:
        return framework_name
    return f"{framework_name}-{key}"


def load_framework(config_path: Path) -> Framework:
    """Parses one benchmark_config.json into a Framework and its tests."""
    try:
        raw = json.loads(config_path.read_text(encoding="utf-8"))
    except OSError as e:
        raise BenchmarkConfigError(config_path, f"unreadable: {e}") from e
    except json.JSONDecodeError as e:
        raise BenchmarkConfigError(config_path, f"invalid JSON: {e}") from e

    try:
        config = BenchmarkConfig.model_validate(raw)
    except pydantic.ValidationError as e:
        raise BenchmarkConfigError(config_path, str(e)) from e

    framework_dir = config_path.parent
    framework_name = config.framework or framework_dir.name

    tests = []
    for entry in config.tests:
        for key, test_config in entry.items():
            tags = test_config.get("tags") or []
            if not isinstance(tags, list):
                raise BenchmarkConfigError(config_path, f"tags of '{key}' must be a list")
            tests.append(
                Test(
                    name=_test_name(framework_name, key),
                    framework_name=framework_name,
                    tags=[str(tag) for tag in tags],
                    config=test_config,
                )
            )

    return Framework(
        name=framework_name,
        language=framework_dir.parent.name,
        directory=framework_dir,
        tests=tests,
    )


class MetadataProvider:
    """Lists frameworks and tests found under a FrameworkBenchmarks directory."""

    def __init__(self, tfb_dir: Path, config: ToolsetConfig = TOOLSET_CONFIG):
        self.tfb_dir = Path(tfb_dir)
        self.config = config

    @classmethod
    def from_environment(
        cls, resolver: Optional[DirectoryResolver] = None
    ) -> "MetadataProvider":
        """Builds a provider rooted at the resolved FrameworkBenchmarks directory."""
        return cls(get_tfb_dir(resolver))

    def _config_paths(self) -> List[Path]:
        frameworks_dir = self.tfb_dir / self.config.FRAMEWORKS_DIR_NAME
        return sorted(frameworks_dir.glob(f"*/*/{self.config.BENCHMARK_CONFIG_FILE_NAME}"))

    def list_all_frameworks(self) -> List[Framework]:
        frameworks = [load_framework(path) for path in self._config_paths()]
        diagnostics.debug("Found %d frameworks under %s", len(frameworks), self.tfb_dir)
        return sorted(frameworks, key=lambda framework: framework.name)

    def list_all_tests(self) -> List[Test]:
        tests = [test for framework in self.list_all_frameworks() for test in framework.tests]
        return sorted(tests, key=lambda test: test.name)

    def list_tests_by_tag(self, tag: str) -> List[Test]:
        return [test for test in self.list_all_tests() if tag in test.tags]

    def list_tests_for_framework(self, framework_name: str) -> List[Test]:
        return [
            test
            for framework in self.list_all_frameworks()
            if framework.name == framework_name
            for test in framework.tests
        ]
