# -*- coding: utf-8 -*-
#
# This file is part of `glmkit`, a library for GridLAB-D `.glm` feeder models
#
# Copyright © 2026 by the glmkit authors
#
# This module is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# This module is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <https://www.gnu.org/licenses/>.


"""
Command line interface.

Usage::

    glmkit in_file.glm out_file.glm [COMMAND ...]
    glmkit --batch [--rename SUB] in_dir out_dir [COMMAND ...]

Put commands that contain spaces or parentheses in quotes, e.g.::

    glmkit in.glm out.glm "remove_classes('player', 'recorder')" remove_extra_blanks

"""

import argparse
import logging
import sys

from . import wrangle
from .config import get_config
from .errors import GlmError
from .pkginfo import version_string


_handler = None


def setup_logging(level="INFO", log_format=None):
    """Send the log messages of glmkit to stderr."""
    global _handler
    if log_format is None:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(fmt=log_format, datefmt="%Y-%m-%d %H:%M:%S"))

    logger = logging.getLogger("glmkit")
    logger.setLevel(level.upper())
    if _handler is not None:
        logger.removeHandler(_handler)
    logger.addHandler(handler)
    _handler = handler

    # Prevent the logging from propagating to the root logger
    logger.propagate = False


def parse_args(args=None):
    """Parse command line arguments."""
    get_config()

    parser = argparse.ArgumentParser(
        prog="glmkit",
        description="Read a GridLAB-D model, run commands on it, sign it and write it out",
    )

    parser.add_argument(
        "source",
        help="Input .glm file (with --batch: input directory)",
    )

    parser.add_argument(
        "destination",
        help="Output .glm file (with --batch: output directory)",
    )

    parser.add_argument(
        "commands",
        nargs="*",
        metavar="COMMAND",
        help="Commands to run, like remove_extra_blanks or \"remove_classes('player')\"",
    )

    parser.add_argument(
        "--batch",
        "-b",
        action="store_true",
        help="Process all .glm files in the source directory",
    )

    parser.add_argument(
        "--rename",
        "-r",
        default="",
        help="With --batch: suffix to add to the file names, or PATTERN/REPLACEMENT",
    )

    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log debugging information",
    )

    parser.add_argument(
        "--quiet",
        "-q",
        action="store_true",
        help="Only log errors",
    )

    parser.add_argument(
        "--version",
        action="version",
        version="%(prog)s " + version_string,
    )

    return parser.parse_args(args)


def main(args=None):
    """Main entry point."""
    parsed = parse_args(args)

    setup_logging("DEBUG" if parsed.verbose else "ERROR" if parsed.quiet else "INFO")

    try:
        if parsed.batch:
            wrangle.batch(parsed.source, parsed.destination, parsed.rename, parsed.commands)
        else:
            wrangle.process(parsed.source, parsed.destination, parsed.commands)
    except (GlmError, OSError) as e:
        print("error: {}".format(e), file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
