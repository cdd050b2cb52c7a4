"""Command-line interface for spidevctl.

Opens one spidev device, applies any requested parameters in the order
mode, speed, bits-per-word, bit justification, re-reads the device and
prints the resulting configuration. The device is always released before
returning.
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from typing import TextIO

from spidevctl import __version__
from spidevctl.config import RuntimeConfig, make_runtime_config, settings_from_runtime
from spidevctl.core.controller import ConfigurationController
from spidevctl.core.driver import SpiDriver
from spidevctl.core.errors import SpiConfigError
from spidevctl.core.models import Summary
from spidevctl.core.params import REFRESH_ORDER
from spidevctl.platform import DRIVERS, make_driver
from spidevctl.settings.store import SettingsStore
from spidevctl.settings.values import LOG_LEVELS

logger = logging.getLogger(__name__)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse CLI arguments.

    When ``argv`` is None the values are read from ``sys.argv`` as usual.
    """
    p = argparse.ArgumentParser(
        prog="spidevctl",
        description="Inspect and configure a Linux spidev device",
    )
    p.add_argument("--bus", default=None, help="SPI bus number (default: saved)")
    p.add_argument(
        "--cs",
        default=None,
        help="SPI chip select number (default: saved)",
    )
    p.add_argument(
        "--mode",
        default=None,
        help="Clock polarity/phase: MODE_0, MODE_1, MODE_2 or MODE_3",
    )
    p.add_argument("--speed", default=None, help="Maximum clock speed in Hz")
    p.add_argument(
        "--bpw",
        default=None,
        help="Bits per word",
    )
    p.add_argument(
        "--bit-just",
        dest="bit_just",
        default=None,
        help="Bit justification: MSB_FIRST or LSB_FIRST",
    )
    p.add_argument(
        "--driver",
        choices=list(DRIVERS),
        default=None,
        help="Device driver (default: saved, spidev)",
    )
    p.add_argument(
        "--simulate",
        action="store_true",
        help="Shorthand for --driver simulated",
    )
    p.add_argument(
        "--json",
        action="store_true",
        help="Print the resulting configuration as JSON",
    )
    p.add_argument(
        "--save-defaults",
        dest="save_defaults",
        action="store_true",
        help="Remember bus, chip select, driver and log level for next time",
    )
    p.add_argument(
        "--log-level",
        dest="log_level",
        type=str.upper,
        choices=list(LOG_LEVELS),
        default=None,
        help="Logging verbosity (default: saved, WARNING)",
    )
    p.add_argument("--version", action="store_true", help="Print version and exit")
    return p.parse_args(argv)


def _emit(summary: Summary, as_json: bool, out: TextIO) -> None:
    if as_json:
        out.write(json.dumps(summary.as_dict(), indent=2) + "\n")
        return
    for line in summary.lines():
        out.write(line + "\n")


def run(
    cfg: RuntimeConfig,
    *,
    driver: SpiDriver | None = None,
    out: TextIO | None = None,
    err: TextIO | None = None,
) -> int:
    """Execute one configuration session described by *cfg*.

    Returns the process exit code: 0 on success, 1 when any request was
    rejected or any parameter could not be read.
    """
    out = out if out is not None else sys.stdout
    err = err if err is not None else sys.stderr
    if driver is None:
        driver = make_driver(cfg.driver)

    failed = False
    with ConfigurationController(driver) as ctl:
        try:
            summary = ctl.initialize(cfg.bus, cfg.chip_select)
        except SpiConfigError as e:
            err.write(f"error: {e}\n")
            return 1

        for kind in REFRESH_ORDER:
            raw = cfg.requests.get(kind)
            if raw is None:
                continue
            try:
                ctl.apply(kind, raw)
            except SpiConfigError as e:
                err.write(f"error: {e}\n")
                failed = True
        if cfg.requests:
            summary = ctl.refresh_all()

        for e in summary.errors.values():
            err.write(f"error: {e}\n")
        _emit(summary, cfg.output_json, out)

        if cfg.save_defaults:
            ident = summary.identity
            try:
                SettingsStore.save(
                    settings_from_runtime(cfg, ident.bus, ident.chip_select)
                )
            except OSError as e:
                err.write(f"error: saving defaults: {e}\n")
                failed = True
            else:
                logger.info("saved defaults to %s", SettingsStore.settings_path())

        failure = ctl.shutdown()
        if failure is not None:
            err.write(f"warning: {failure}\n")

    return 1 if failed or not summary.ok else 0


def main(argv: list[str] | None = None) -> int:
    """Synchronous entrypoint for the spidevctl CLI."""
    args = parse_args(argv)
    if args.version:
        print(f"spidevctl {__version__}")
        return 0

    cfg = make_runtime_config(args=args)
    logging.basicConfig(
        level=getattr(logging, cfg.log_level, logging.WARNING),
        format="%(levelname)s %(name)s: %(message)s",
    )
    logger.debug("runtime config: %s", cfg)
    try:
        return run(cfg)
    except KeyboardInterrupt:
        return 130


if __name__ == "__main__":
    sys.exit(main())
