"""Allow ``python -m liveroot`` invocation.

This module simply delegates to the CLI error-boundary entry point so
that ``python -m liveroot`` behaves identically to the ``liveroot``
console script.
"""

from __future__ import annotations

from liveroot.cli.app import cli

if __name__ == "__main__":
    cli()
