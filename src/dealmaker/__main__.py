"""Allow ``python -m dealmaker`` invocation.

Delegates to the CLI error-boundary entry point so that
``python -m dealmaker`` behaves identically to the ``dealmaker``
console script.
"""

from __future__ import annotations

from dealmaker.cli.app import cli

if __name__ == "__main__":
    cli()
