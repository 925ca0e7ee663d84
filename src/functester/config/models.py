"""Runner configuration schema."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class RunnerConfig(BaseModel):
    """Settings for executing case plans outside pytest.

    All fields are optional; a missing config file means all defaults.
    """

    model_config = {"extra": "forbid"}

    verbosity: Literal["quiet", "normal", "verbose"] = Field(
        default="normal", description="Console log verbosity"
    )
    log_file: str | None = Field(
        default=None, description="Write DEBUG-level logs of every run to this file"
    )
    stop_on_failure: bool = Field(
        default=False, description="Stop executing a group after its first failing case"
    )
    show_passed: bool = Field(
        default=True, description="List passing cases in the CLI results table"
    )

    @field_validator("log_file")
    @classmethod
    def validate_log_file(cls, value: str | None) -> str | None:
        if value is not None and not value.strip():
            raise ValueError("log_file must not be empty; omit it to disable file logging")
        return value
