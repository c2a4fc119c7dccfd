"""Command-line executable component.

Responsible for parsing the command-line arguments and the (optional)
configuration file, and for either encoding a command and writing it to
standard output, or looking up numerics.

Provides a run() function, used by __main__ or directly.
"""

# SPDX-FileCopyrightText: Faidon Liambotis
# SPDX-FileCopyrightText: Wikimedia Foundation
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import argparse
import configparser
import errno
import inspect
import logging
import pathlib
import sys
from collections.abc import Sequence

import prometheus_client
import structlog

from . import numerics
from ._version import __version__
from .commands import ENCODERS
from .ctcp import ctcp
from .text import DEFAULT_ENCODING, normalize
from .transport import SinkMetrics, StreamSink, send

logger = structlog.get_logger()


def parse_args(argv: Sequence[str] | None) -> argparse.Namespace:
    """Parse and return the parsed command line arguments."""
    parser = argparse.ArgumentParser(
        prog="ircwire",
        description="IRC command encoder and numeric lookup",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--config-file", "-c", type=pathlib.Path, help="Path to configuration file")

    log_levels = ("DEBUG", "INFO", "WARNING", "ERROR")
    parser.add_argument("--log-level", choices=log_levels, type=str.upper, help="Log level (overrides config)")
    log_formats = ("plain", "console", "json")
    log_dflt = "console" if sys.stderr.isatty() else "plain"
    parser.add_argument("--log-format", default=log_dflt, choices=log_formats, help="Log format")

    actions = parser.add_subparsers(dest="action", required=True)

    encode = actions.add_parser("encode", help="Encode a command and write it to standard output")
    encode.add_argument("verb", type=str.upper, choices=sorted(ENCODERS), help="Command to encode")
    encode.add_argument("args", nargs="*", help="Command parameters")
    encode.add_argument("--ctcp", action="store_true", help="Send the last parameter as a CTCP message")
    encode.add_argument("--metrics-file", type=pathlib.Path, help="Write Prometheus metrics to this file")

    numeric = actions.add_parser("numeric", help="Look up numeric replies and errors")
    numeric.add_argument("codes", nargs="+", help="Three-digit numerics, e.g. 433")

    options = parser.parse_args(argv)

    if options.action == "encode":
        try:
            inspect.signature(ENCODERS[options.verb]).bind(*options.args)
        except TypeError:
            parser.error(f"invalid number of parameters for {options.verb}")
        if options.ctcp and not options.args:
            parser.error("--ctcp requires at least one parameter")

    return options


def configure_logging(log_format: str) -> None:
    """Configure logging parameters."""
    renderer: structlog.typing.Processor
    if log_format == "plain":
        timestamper = None
        renderer = structlog.dev.ConsoleRenderer(colors=False)
    elif log_format == "console":
        timestamper = structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=False)
        renderer = structlog.dev.ConsoleRenderer(colors=True)
    elif log_format == "json":
        timestamper = structlog.processors.TimeStamper(fmt="iso")
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        raise ValueError(f"Invalid logging format specified: {log_format}")

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if timestamper:
        processors.append(timestamper)

    structlog.configure(
        processors=[
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # stderr, as stdout carries the encoded commands
    handler = logging.StreamHandler(sys.stderr)
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            *processors,
            structlog.stdlib.ExtraAdder(),
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    )
    handler.setFormatter(formatter)
    root_logger = logging.getLogger()
    root_logger.addHandler(handler)
    # default level, only for events emitted before the config is parsed
    root_logger.setLevel(logging.WARN)


def configure_log_levels(override_level: str | int | None, config: configparser.SectionProxy | None = None) -> None:
    """Configure logging levels, using the config file and an override, typically given by a CLI argument."""
    if config:
        for key, level in config.items():
            this_logger_name = key if key != "root" else None
            this_logger = logging.getLogger(this_logger_name)
            this_logger.setLevel(level.upper())

    if override_level:
        # set the level for the entire package
        logging.getLogger("ircwire").setLevel(override_level)


def read_config(config_file: pathlib.Path | None) -> configparser.ConfigParser:
    """Read the configuration file, if one was given. Exits on errors."""
    config = configparser.ConfigParser(strict=True)
    if config_file is None:
        return config

    try:
        with config_file.open(encoding="utf-8") as config_fh:
            config.read_file(config_fh)
    except OSError as exc:
        logger.critical(f"Cannot open configuration file: {exc.strerror}", errno=errno.errorcode[exc.errno])
        raise SystemExit(-1) from exc
    except configparser.Error as exc:
        msg = repr(exc).replace("\n", " ")  # configparser exceptions sometimes include newlines
        logger.critical(f"Invalid configuration, {msg}")
        raise SystemExit(-1) from exc

    return config


def encode(options: argparse.Namespace, encoding: str) -> bytes:
    """Encode the command given on the command line."""
    try:
        args = [normalize(arg, encoding) for arg in options.args]
    except UnicodeEncodeError as exc:
        logger.critical(f"Cannot encode parameters: {exc.reason}", encoding=encoding)
        raise SystemExit(-1) from exc
    except LookupError as exc:
        logger.critical(f"Invalid configuration, unknown encoding {encoding}")
        raise SystemExit(-1) from exc

    if options.ctcp:
        args[-1] = ctcp(args[-1])
    return ENCODERS[options.verb](*args)


def describe_numeric(code: str) -> str:
    """Return a one-line description of a numeric, e.g. "433 ERR_NICKNAMEINUSE error logon_errors"."""
    numeric = numerics.lookup(code)
    name = repr(numeric) if numeric else "-"
    groups = [group for group in numerics.GROUPS if numerics.in_group(code, group)]
    return " ".join([code, name, str(numerics.category(code)), *groups])


def run(argv: Sequence[str] | None = None) -> None:
    """Entry point."""
    options = parse_args(argv)

    configure_logging(options.log_format)
    configure_log_levels(options.log_level or logging.INFO)
    logger.debug("Starting ircwire", version=__version__, action=options.action)

    config = read_config(options.config_file)

    # now that we've read the config, configure with the levels defined there (but CLI option takes precedence)
    if "loggers" in config:
        configure_log_levels(options.log_level, config["loggers"])

    if options.action == "numeric":
        for code in options.codes:
            print(describe_numeric(code))
        return

    encoding = config.get("ircwire", "encoding", fallback=DEFAULT_ENCODING)
    data = encode(options, encoding)

    metrics = SinkMetrics()
    try:
        send(StreamSink(sys.stdout.buffer), data, metrics)
    except OSError as exc:
        logger.critical(f"System error: {exc.strerror}", errno=errno.errorcode.get(exc.errno or 0, "unknown"))
        raise SystemExit(-2) from exc

    if options.metrics_file:
        prometheus_client.write_to_textfile(str(options.metrics_file), metrics.registry)
