"""Infrastructure: manual-file lookup.

A manual is a plain UTF-8 text file named exactly after its command,
kept in the configured manuals directory.
"""

from __future__ import annotations

import logging
from pathlib import Path

LOG = logging.getLogger(__name__)


class FileManualReader:
    """Read manuals straight off disk.

    Satisfies :class:`~cmdloader.core.protocols.ManualReader`.
    """

    def read(self, directory: Path, name: str) -> str | None:
        """Return the full text of ``directory/name``, or ``None``.

        Undecodable bytes are replaced rather than raising.  Anything
        that is not a regular file counts as absent.
        """
        path = Path(directory) / name
        if not path.is_file():
            return None
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            LOG.warning('Could not read manual "%s": %s', path, exc)
            return None
