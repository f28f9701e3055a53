"""
wabot_core package bootstrap.
Re-exports the light-weight public sub-modules so external code can simply
`import wabot_core as wc`. Settings are *not* imported here; reading the
environment waits until `wabot_core.settings` is used.
"""

# ----- standard libs -----
from importlib import import_module
from types import ModuleType

# ----- public re-exports -----
__all__: list[str] = []

for _name in ["parsers", "logger_setup"]:
    mod: ModuleType = import_module(f".{_name}", __name__)
    globals()[_name] = mod
    __all__.append(_name)

del _name, mod
