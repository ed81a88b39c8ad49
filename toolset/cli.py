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

"""
Command line entry point for the toolset output layer.

- frameworks: Lists every framework in the FrameworkBenchmarks directory.
- tests: Lists tests, optionally filtered by tag or framework.
- report: Renders a verification summary from a JSON file of verifications.
"""

import sys
from pathlib import Path
from typing import List, Optional

import click
from colorama import init
from dotenv import load_dotenv
import pydantic
from rich.console import Console

from core.logging_utils import ROOT_LOGGER_NAME, setup_logger
from toolset.config import ToolsetConfig
from toolset.data_models import Verification
from toolset.errors import ToolsetError, ToolsetIOError
from toolset.logger import Logger
from toolset.metadata import MetadataProvider
from toolset.paths import StaticDirectoryResolver, create_results_dir
from toolset import reporting

console = Console(stderr=True)

_VERIFICATIONS = pydantic.TypeAdapter(List[Verification])


def _fail(message: str) -> None:
    console.print(message, style="red", markup=False, highlight=False, soft_wrap=True)
    sys.exit(1)


def _metadata(ctx: click.Context) -> MetadataProvider:
    tfb_dir: Optional[Path] = ctx.obj.get("tfb_dir")
    resolver = StaticDirectoryResolver(tfb_dir) if tfb_dir else None
    return MetadataProvider.from_environment(resolver)


@click.group()
@click.option(
    "--tfb-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="FrameworkBenchmarks directory. Defaults to $TFB_HOME, ~/.tfb or the cwd.",
)
@click.option("--log-level", default=None, help="Diagnostic log level (e.g. DEBUG).")
@click.pass_context
def cli(ctx: click.Context, tfb_dir: Optional[Path], log_level: Optional[str]):
    """FrameworkBenchmarks toolset: listings and verification summaries."""
    load_dotenv()
    config = ToolsetConfig.from_env()
    try:
        setup_logger(ROOT_LOGGER_NAME, log_level or config.LOG_LEVEL)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="--log-level") from e

    ctx.ensure_object(dict)
    ctx.obj["tfb_dir"] = tfb_dir
    ctx.obj["config"] = config


@cli.command()
@click.pass_context
def frameworks(ctx: click.Context):
    """Print the name of every framework."""
    try:
        reporting.print_all_frameworks(_metadata(ctx))
    except ToolsetError as e:
        _fail(str(e))


@cli.command()
@click.option("--tag", default=None, help="Only tests carrying this tag.")
@click.option("--framework", default=None, help="Only tests of this framework.")
@click.pass_context
def tests(ctx: click.Context, tag: Optional[str], framework: Optional[str]):
    """Print the name of every test."""
    if tag and framework:
        raise click.UsageError("--tag and --framework are mutually exclusive.")

    try:
        metadata = _metadata(ctx)
        if tag:
            reporting.print_all_tests_with_tag(tag, metadata)
        elif framework:
            reporting.print_all_tests_for_framework(framework, metadata)
        else:
            reporting.print_all_tests(metadata)
    except ToolsetError as e:
        _fail(str(e))


@cli.command()
@click.argument(
    "verifications_json",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)
@click.option(
    "--results-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Directory for benchmark.txt. Defaults to a new results/<timestamp> directory.",
)
@click.option("--quiet", is_flag=True, help="Only write the summary to the log file.")
@click.pass_context
def report(
    ctx: click.Context,
    verifications_json: Path,
    results_dir: Optional[Path],
    quiet: bool,
):
    """Render the verification summary for VERIFICATIONS_JSON."""
    config: ToolsetConfig = ctx.obj["config"]
    try:
        verifications = _VERIFICATIONS.validate_json(
            verifications_json.read_text(encoding="utf-8")
        )
    except (OSError, UnicodeDecodeError) as e:
        _fail(f"Could not read verifications file {verifications_json}: {e}")
    except pydantic.ValidationError as e:
        _fail(f"Invalid verifications file {verifications_json}:\n{e}")

    try:
        if results_dir is None:
            results_dir = create_results_dir(config=config)
        else:
            try:
                results_dir.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise ToolsetIOError(
                    f"Failed to create results directory {results_dir}: {e}", results_dir
                ) from e

        logger = Logger.in_dir(results_dir)
        logger.quiet = quiet
        reporting.report_verifications(verifications, logger, config)
    except ToolsetError as e:
        _fail(str(e))

    if logger.log_file is not None:
        console.print(
            f"Summary written to {logger.log_file}", markup=False, highlight=False, soft_wrap=True
        )


def main():
    # Initialize colorama
    init()
    cli(obj={})


if __name__ == "__main__":
    main()
