"""User-facing message templates.

Templates use :meth:`str.format` placeholders so that callers fill in
the offending target explicitly.
"""

from __future__ import annotations

UMOUNT_FAILED: str = "Could not unmount {target}"
"""Raised and logged when ``umount`` exits with a non-zero status."""

MOUNT_FAILED: str = "Could not mount {source} on {target} (exit status {status})"
"""Raised when a loop or union mount exits with a non-zero status."""

CREATE_DIR_FAILED: str = "can not create {path}: {reason}"
"""Logged when a temporary directory cannot be created."""
