"""
Settings for the chat-bot runtime. Values come from the environment or a .env file.
"""

from typing import Annotated, Any, Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, NoDecode

from wabot_core.identity import normalize_number, normalize_numbers

UnknownCommandPolicy = Literal["silent", "reply", "suggest"]


class Settings(BaseSettings):
    """
    Settings for the chat-bot runtime.

    Identity config:
        owner_number (env: OWNER_NUMBER)  single owner identity
        dev_numbers  (env: DEV_NUMBERS)   comma-separated developer allow-list
    Runtime config:
        command_prefix, data_dir, plugin_package, handler_timeout_s,
        max_concurrent_messages, unknown_command_policy
    """

    owner_number: str = ""
    dev_numbers: Annotated[list[str], NoDecode] = []

    command_prefix: str = "."
    data_dir: str = "database"
    plugin_package: str = "wabot_plugins.commands"

    handler_timeout_s: float = 30.0
    max_concurrent_messages: int = 6  # bounded fan-out of message tasks
    unknown_command_policy: UnknownCommandPolicy = "silent"

    log_level: str | None = None

    model_config = {
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }

    @field_validator("owner_number", mode="before")
    @classmethod
    def _normalize_owner(cls, v: Any) -> str:
        return normalize_number(v)

    @field_validator("dev_numbers", mode="before")
    @classmethod
    def _split_csv(cls, v: Any) -> list[str]:  # noqa: D401
        """
        Allow simple comma-separated strings in .env:

            DEV_NUMBERS=2349032578690,2348166337692
        """
        if isinstance(v, str):
            return normalize_numbers(part for part in v.split(",") if part.strip())
        if isinstance(v, (list, tuple, set, frozenset)):
            return normalize_numbers(v)
        return []

    @field_validator("command_prefix")
    @classmethod
    def _single_symbol(cls, v: str) -> str:
        if len(v) != 1 or v.isalnum() or v.isspace():
            raise ValueError("command_prefix must be exactly one non-alphanumeric character")
        return v

    @field_validator("handler_timeout_s")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("handler_timeout_s must be positive")
        return v

    @field_validator("max_concurrent_messages")
    @classmethod
    def _positive_concurrency(cls, v: int) -> int:
        if v < 1:
            raise ValueError("max_concurrent_messages must be at least 1")
        return v


settings: "Settings" = Settings()
