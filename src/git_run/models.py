"""Invocation model and commit message derivation."""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator, model_validator

COMMIT_MESSAGE_PREFIX = "run: "


class Invocation(BaseModel):
    """Parsed command-line arguments."""

    shell: bool = Field(default=False, description="Run COMMAND through $SHELL -i -c.")
    yes: bool = Field(default=False, description="Commit without asking for confirmation.")
    command: list[str] = Field(min_length=1, description="Program and arguments, or one shell string.")

    @field_validator("command", mode="before")
    @classmethod
    def _utf8_tokens(cls, value: object) -> object:
        # Undecodable argv bytes arrive as surrogate escapes.
        for token in value if isinstance(value, list | tuple) else ():
            if isinstance(token, str):
                try:
                    token.encode("utf-8")
                except UnicodeEncodeError as e:
                    msg = f"COMMAND argument {token!r} is not valid UTF-8"
                    raise ValueError(msg) from e
        return value

    @model_validator(mode="after")
    def _single_shell_string(self) -> Invocation:
        if self.shell and len(self.command) != 1:
            msg = "when --shell is supplied, COMMAND must be a single string"
            raise ValueError(msg)
        return self


def commit_message(invocation: Invocation) -> str:
    """Build the commit message for *invocation*.

    Format: ``run: <shell string>`` or ``run: <program> <args...>``.
    """
    if invocation.shell:
        return f"{COMMIT_MESSAGE_PREFIX}{invocation.command[0]}"
    return COMMIT_MESSAGE_PREFIX + " ".join(invocation.command)


def confirmation_prompt(message: str) -> str:
    return f"commit with message `{message}`"
