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

"""User-facing output: verification summaries and name listings."""

from typing import Dict
from typing import Iterable
from typing import List
from typing import Optional

from colorama import Fore
from colorama import Style

from toolset.config import TOOLSET_CONFIG
from toolset.config import ToolsetConfig
from toolset.data_models import Named
from toolset.data_models import Verification
from toolset.data_models import VerificationStatus
from toolset.logger import Logger
from toolset.metadata import MetadataProvider

STATUS_COLORS = {
    VerificationStatus.PASS: Fore.GREEN,
    VerificationStatus.WARN: Fore.YELLOW,
    VerificationStatus.ERROR: Fore.RED,
}


def _cyan(text: str) -> str:
    return f"{Fore.CYAN}{text}{Style.RESET_ALL}"


def group_by_framework(
    verifications: Iterable[Verification],
) -> Dict[str, List[Verification]]:
    """Groups verifications by framework name, sorted by name.

    Within a framework, verifications keep the order they were supplied in.
    """
    frameworks: Dict[str, List[Verification]] = {}
    for verification in verifications:
        frameworks.setdefault(verification.framework_name, []).append(verification)
    return {name: frameworks[name] for name in sorted(frameworks)}


def format_verification_line(
    verification: Verification, config: ToolsetConfig = TOOLSET_CONFIG
) -> str:
    """Formats the colored summary line for one verification.

    Only the first error (or, failing that, the first warning) is shown; the
    full detail is in the per-test log written during the run.
    """
    status = verification.status
    headline = verification.headline

    indent = "|".ljust(config.SUMMARY_INDENT_WIDTH)
    type_name = verification.type_name.ljust(config.SUMMARY_TYPE_WIDTH)
    status_text = status.value
    if headline is not None:
        status_text = status_text.ljust(config.SUMMARY_STATUS_WIDTH)

    line = f"{_cyan(indent)}{_cyan(type_name)}: {STATUS_COLORS[status]}{status_text}{Style.RESET_ALL}"
    if headline is not None:
        line += f" - {headline.short_message}"
    return line


def report_verifications(
    verifications: Iterable[Verification],
    logger: Logger,
    config: ToolsetConfig = TOOLSET_CONFIG,
) -> None:
    """Produces user-consumable output for the given verifications.

    The summary is printed through `logger` and appended to `benchmark.txt`
    in the logger's log directory, when it has one.

    Raises:
        ToolsetIOError: If the bound log file cannot be written.
    """
    logger.set_log_file(config.LOG_FILE_NAME)
    frameworks = group_by_framework(verifications)

    border = "=" * config.SUMMARY_WIDTH
    mid_line = "-" * config.SUMMARY_WIDTH

    logger.log(_cyan(border))
    logger.log(_cyan(config.SUMMARY_TITLE))
    logger.log(_cyan(mid_line))

    for framework_name, framework_verifications in frameworks.items():
        logger.log(f"{_cyan('|')} {_cyan(framework_name)}")
        for verification in framework_verifications:
            logger.log(format_verification_line(verification, config))

    logger.log(_cyan(border))


#
# Listings
#


def _print_all(entities: Iterable[Named]) -> None:
    """Prints the name of each entity to standard out."""
    for entity in entities:
        print(entity.get_name())


def print_all_frameworks(metadata: Optional[MetadataProvider] = None) -> None:
    """Prints the name of every framework found in the FrameworkBenchmarks directory."""
    metadata = metadata or MetadataProvider.from_environment()
    _print_all(metadata.list_all_frameworks())


def print_all_tests(metadata: Optional[MetadataProvider] = None) -> None:
    """Prints the name of every test implementation."""
    metadata = metadata or MetadataProvider.from_environment()
    _print_all(metadata.list_all_tests())


def print_all_tests_with_tag(tag: str, metadata: Optional[MetadataProvider] = None) -> None:
    """Prints the name of every test carrying `tag`."""
    metadata = metadata or MetadataProvider.from_environment()
    _print_all(metadata.list_tests_by_tag(tag))


def print_all_tests_for_framework(
    framework: str, metadata: Optional[MetadataProvider] = None
) -> None:
    """Prints the name of every test belonging to `framework`."""
    metadata = metadata or MetadataProvider.from_environment()
    _print_all(metadata.list_tests_for_framework(framework))
