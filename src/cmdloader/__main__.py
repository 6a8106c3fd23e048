"""Allow ``python -m cmdloader`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m cmdloader`` behaves identically to the ``cmdloader``
console script.
"""

from __future__ import annotations

from cmdloader.cli.app import cli

if __name__ == "__main__":
    cli()
