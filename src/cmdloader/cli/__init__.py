"""CLI layer — process entry point, console output, and error boundary.

This package is the outermost layer.  It may import from ``core``,
``infra`` and ``api``, but no other layer may import from ``cli``
(command modules excepted; they render through :mod:`.console`).
"""
