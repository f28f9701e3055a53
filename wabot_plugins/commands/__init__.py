"""
plugins/commands/__init__.py
----------------------------
Command plugin modules. Every public submodule is discovered and (re)imported
by PackagePluginSource; modules starting with ``_`` are skipped.
"""
