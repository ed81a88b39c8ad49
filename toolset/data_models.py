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

"""Pydantic data models for the toolset."""

import enum
from pathlib import Path
from typing import Any
from typing import Optional
from typing import Protocol
from typing import runtime_checkable

import pydantic
from pydantic import Field


@runtime_checkable
class Named(Protocol):
    """Anything that can be listed by name."""

    def get_name(self) -> str:
        ...


class VerificationStatus(str, enum.Enum):
    """The summarized status of a single verification."""

    PASS = "PASS"

    WARN = "WARN"

    ERROR = "ERROR"


class VerificationMessage(pydantic.BaseModel):
    """A single error or warning produced while verifying a test."""

    short_message: str = Field(
        ..., description="One-line summary shown in the verification summary."
    )
    message: Optional[str] = Field(
        None, description="Full detail, written to the per-test log during execution."
    )


class Verification(pydantic.BaseModel):
    """The outcome of verifying one test type of one framework."""

    framework_name: str
    type_name: str
    errors: list[VerificationMessage] = Field(default_factory=list)
    warnings: list[VerificationMessage] = Field(default_factory=list)

    @property
    def status(self) -> VerificationStatus:
        """Errors take priority over warnings; PASS only when both are empty."""
        if self.errors:
            return VerificationStatus.ERROR
        if self.warnings:
            return VerificationStatus.WARN
        return VerificationStatus.PASS

    @property
    def headline(self) -> Optional[VerificationMessage]:
        """The first error, else the first warning, else None."""
        if self.errors:
            return self.errors[0]
        if self.warnings:
            return self.warnings[0]
        return None


class Test(pydantic.BaseModel):
    """A single test implementation declared in a benchmark_config.json."""

    # Keeps pytest from collecting this model as a test class.
    __test__ = False

    name: str
    framework_name: str
    tags: list[str] = Field(default_factory=list)
    config: dict[str, Any] = Field(default_factory=dict)

    def get_name(self) -> str:
        return self.name


class Framework(pydantic.BaseModel):
    """A framework directory under frameworks/<Language>/."""

    name: str
    language: str
    directory: Path
    tests: list[Test] = Field(default_factory=list)

    def get_name(self) -> str:
        return self.name
