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

"""Tests for the verification summary and name listings."""

from unittest.mock import MagicMock, patch

import pytest
from colorama import Fore

from toolset.data_models import Framework, Test, Verification, VerificationMessage
from toolset.errors import BenchmarkConfigError, ToolsetIOError
from toolset.logger import Logger, strip_ansi
from toolset import reporting

BORDER = "=" * 79
MID_LINE = "-" * 79


def _verification(framework, type_name, errors=(), warnings=()):
    return Verification(
        framework_name=framework,
        type_name=type_name,
        errors=[VerificationMessage(short_message=m) for m in errors],
        warnings=[VerificationMessage(short_message=m) for m in warnings],
    )


def _row(type_name, status, message=None):
    line = "|".ljust(8) + type_name.ljust(13) + ": "
    if message is None:
        return line + status
    return line + status.ljust(5) + " - " + message


class TestFormatVerificationLine:

    def test_pass_has_no_trailing_message(self):
        line = strip_ansi(reporting.format_verification_line(_verification("gemini", "json")))

        assert line == "|       json         : PASS"
        assert " - " not in line

    def test_error_shows_first_error(self):
        verification = _verification("gemini", "db", errors=["timeout", "bad body"])
        line = strip_ansi(reporting.format_verification_line(verification))

        assert line == "|       db           : ERROR - timeout"

    def test_error_takes_priority_over_warnings(self):
        verification = _verification(
            "gemini", "query", errors=["wrong count"], warnings=["slow"]
        )
        line = reporting.format_verification_line(verification)

        assert "ERROR - wrong count" in strip_ansi(line)
        assert "WARN" not in line
        assert Fore.RED in line

    def test_warning_shows_first_warning(self):
        verification = _verification("gemini", "fortune", warnings=["charset", "headers"])
        line = reporting.format_verification_line(verification)

        assert strip_ansi(line) == _row("fortune", "WARN", "charset")
        assert Fore.YELLOW in line

    def test_pass_is_green(self):
        assert Fore.GREEN in reporting.format_verification_line(_verification("gemini", "json"))

    def test_long_type_names_are_not_truncated(self):
        line = strip_ansi(
            reporting.format_verification_line(_verification("gemini", "cached-queries-long"))
        )
        assert line == "|       cached-queries-long: PASS"


class TestGroupByFramework:

    def test_preserves_order_within_framework(self):
        verifications = [
            _verification("gemini", "json"),
            _verification("aspnet", "json"),
            _verification("gemini", "plaintext"),
            _verification("gemini", "db"),
        ]

        grouped = reporting.group_by_framework(verifications)

        assert [v.type_name for v in grouped["gemini"]] == ["json", "plaintext", "db"]
        assert [v.type_name for v in grouped["aspnet"]] == ["json"]

    def test_frameworks_are_sorted_by_name(self):
        verifications = [
            _verification("zend", "json"),
            _verification("actix", "json"),
            _verification("gemini", "json"),
        ]
        assert list(reporting.group_by_framework(verifications)) == ["actix", "gemini", "zend"]

    def test_empty(self):
        assert reporting.group_by_framework([]) == {}


class TestReportVerifications:

    def test_gemini_scenario(self, tmp_path, capsys):
        verifications = [
            _verification("gemini", "json"),
            _verification("gemini", "plaintext", errors=["timeout"]),
        ]
        logger = Logger.in_dir(tmp_path)

        reporting.report_verifications(verifications, logger)

        expected = [
            BORDER,
            "Verification Summary",
            MID_LINE,
            "| gemini",
            _row("json", "PASS"),
            _row("plaintext", "ERROR", "timeout"),
            BORDER,
        ]
        transcript = (tmp_path / "benchmark.txt").read_text(encoding="utf-8")
        assert transcript.splitlines() == expected
        assert transcript.endswith("\n")
        assert strip_ansi(capsys.readouterr().out) == transcript

    def test_banner_is_cyan_on_console(self, tmp_path, capsys):
        reporting.report_verifications([], Logger.in_dir(tmp_path))
        lines = capsys.readouterr().out.splitlines()

        assert lines[0].startswith(Fore.CYAN)
        assert strip_ansi(lines[0]) == BORDER
        assert [strip_ansi(line) for line in lines] == [
            BORDER,
            "Verification Summary",
            MID_LINE,
            BORDER,
        ]

    def test_multiple_frameworks(self, tmp_path, capsys):
        verifications = [
            _verification("gemini", "json", warnings=["missing Server header"]),
            _verification("actix", "db", errors=["500"], warnings=["slow"]),
        ]
        logger = Logger.in_dir(tmp_path)
        logger.quiet = True

        reporting.report_verifications(verifications, logger)

        lines = (tmp_path / "benchmark.txt").read_text().splitlines()
        assert lines[3:7] == [
            "| actix",
            _row("db", "ERROR", "500"),
            "| gemini",
            _row("json", "WARN", "missing Server header"),
        ]
        assert capsys.readouterr().out == ""

    def test_summary_lands_in_test_directory(self, tmp_path):
        logger = Logger.in_dir(tmp_path)
        logger.quiet = True
        logger.set_test("gemini")

        reporting.report_verifications([_verification("gemini", "json")], logger)

        assert (tmp_path / "gemini" / "benchmark.txt").is_file()

    def test_appends_to_existing_transcript(self, tmp_path):
        (tmp_path / "benchmark.txt").write_text("Verifying gemini\n")
        logger = Logger.in_dir(tmp_path)
        logger.quiet = True

        reporting.report_verifications([_verification("gemini", "json")], logger)

        lines = (tmp_path / "benchmark.txt").read_text().splitlines()
        assert lines[0] == "Verifying gemini"
        assert lines[1] == BORDER

    def test_console_only_without_log_dir(self, capsys):
        logger = Logger.default()

        reporting.report_verifications([_verification("gemini", "json")], logger)

        assert logger.log_file is None
        assert _row("json", "PASS") in strip_ansi(capsys.readouterr().out)

    def test_write_failure_propagates(self, tmp_path):
        logger = Logger.in_dir(tmp_path)
        logger.quiet = True

        with patch(
            "toolset.logger.TranscriptFile.append_line",
            side_effect=ToolsetIOError("disk full"),
        ):
            with pytest.raises(ToolsetIOError, match="disk full"):
                reporting.report_verifications([_verification("gemini", "json")], logger)


class TestListings:

    @pytest.fixture
    def metadata(self):
        gemini_tests = [
            Test(name="gemini", framework_name="gemini"),
            Test(name="gemini-postgres", framework_name="gemini", tags=["broken"]),
        ]
        provider = MagicMock()
        provider.list_all_frameworks.return_value = [
            Framework(name="gemini", language="Java", directory="frameworks/Java/gemini"),
        ]
        provider.list_all_tests.return_value = gemini_tests
        provider.list_tests_by_tag.return_value = gemini_tests[1:]
        provider.list_tests_for_framework.return_value = gemini_tests
        return provider

    def test_print_all_frameworks(self, metadata, capsys):
        reporting.print_all_frameworks(metadata)
        assert capsys.readouterr().out == "gemini\n"

    def test_print_all_tests(self, metadata, capsys):
        reporting.print_all_tests(metadata)
        assert capsys.readouterr().out == "gemini\ngemini-postgres\n"

    def test_print_all_tests_with_tag(self, metadata, capsys):
        reporting.print_all_tests_with_tag("broken", metadata)

        metadata.list_tests_by_tag.assert_called_once_with("broken")
        assert capsys.readouterr().out == "gemini-postgres\n"

    def test_print_all_tests_for_framework(self, metadata, capsys):
        reporting.print_all_tests_for_framework("gemini", metadata)

        metadata.list_tests_for_framework.assert_called_once_with("gemini")
        assert capsys.readouterr().out == "gemini\ngemini-postgres\n"

    def test_query_errors_propagate_unchanged(self, metadata, capsys):
        error = BenchmarkConfigError("frameworks/Java/gemini/benchmark_config.json", "invalid JSON")
        metadata.list_all_tests.side_effect = error

        with pytest.raises(BenchmarkConfigError) as exc_info:
            reporting.print_all_tests(metadata)

        assert exc_info.value is error
        assert capsys.readouterr().out == ""

    def test_default_provider_is_resolved_from_environment(self, metadata, capsys):
        with patch(
            "toolset.reporting.MetadataProvider.from_environment", return_value=metadata
        ) as from_environment:
            reporting.print_all_frameworks()

        from_environment.assert_called_once_with()
        assert capsys.readouterr().out == "gemini\n"
