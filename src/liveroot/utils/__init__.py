"""Shared utilities — message templates, unit formatting, and helpers.

Rules
-----
* No mount logic.
* No external commands.
* Importable by any layer.
"""
