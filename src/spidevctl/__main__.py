"""Console entrypoint for spidevctl.

Delegates to :mod:`spidevctl.cli` so that ``python -m spidevctl`` and the
installed ``spidevctl`` console script run the same code.
"""

from __future__ import annotations

import sys

from spidevctl.cli import main as cli_main


def main() -> None:
    """Application entrypoint (delegates to :func:`spidevctl.cli.main`)."""
    sys.exit(cli_main())


if __name__ == "__main__":
    main()
