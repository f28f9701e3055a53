"""
File: tests/core/test_settings.py
---------------------------------
Settings parsing from the environment.
"""

import pytest
from pydantic import ValidationError

from wabot_core.settings import Settings


def test_defaults(monkeypatch):
    for var in ("OWNER_NUMBER", "DEV_NUMBERS", "COMMAND_PREFIX", "DATA_DIR", "UNKNOWN_COMMAND_POLICY"):
        monkeypatch.delenv(var, raising=False)
    settings = Settings(_env_file=None)
    assert settings.command_prefix == "."
    assert settings.data_dir == "database"
    assert settings.plugin_package == "wabot_plugins.commands"
    assert settings.handler_timeout_s == 30.0
    assert settings.max_concurrent_messages == 6
    assert settings.unknown_command_policy == "silent"


def test_numbers_are_normalized_from_env(monkeypatch):
    monkeypatch.setenv("OWNER_NUMBER", "+1 (555) 123-0000")
    monkeypatch.setenv("DEV_NUMBERS", "2349032578690, +234 816 633 7692,junk,2349032578690")
    settings = Settings(_env_file=None)
    assert settings.owner_number == "15551230000"
    assert settings.dev_numbers == ["2349032578690", "2348166337692"]


def test_env_file_is_read(tmp_path, monkeypatch):
    monkeypatch.delenv("COMMAND_PREFIX", raising=False)
    env = tmp_path / ".env"
    env.write_text("COMMAND_PREFIX=!\nUNKNOWN_COMMAND_POLICY=suggest\n", encoding="utf-8")
    settings = Settings(_env_file=str(env))
    assert settings.command_prefix == "!"
    assert settings.unknown_command_policy == "suggest"


@pytest.mark.parametrize(
    "kwargs",
    [
        {"command_prefix": "ab"},
        {"command_prefix": "a"},
        {"handler_timeout_s": 0},
        {"max_concurrent_messages": 0},
        {"unknown_command_policy": "shout"},
    ],
)
def test_invalid_values_rejected(kwargs):
    with pytest.raises(ValidationError):
        Settings(_env_file=None, **kwargs)

# End of tests/core/test_settings.py
