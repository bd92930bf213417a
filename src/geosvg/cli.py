"""Command line renderer for TOML scene files."""

from __future__ import annotations

import argparse
import datetime
import gettext
import logging
import os
import pathlib
import sys
from typing import TYPE_CHECKING, Any

from . import __version__, config

if TYPE_CHECKING:
    from collections.abc import Sequence

_ = gettext.gettext
logger = logging.getLogger(__name__)

PROG = 'geosvg'


def errormsg(
    *args: Any,  # noqa: ANN401
    exit_status: int | None = None,
    **kwargs: Any,  # noqa: ANN401
) -> None:
    """Write an error msg to stderr.

    Exits with `exit_status` if it isn't None.
    """
    print(*args, file=sys.stderr, **kwargs)  # noqa: T201
    if exit_status is not None:
        sys.exit(exit_status)


def output_path(
    path: str | os.PathLike,
    default_parent: str | pathlib.Path | None = None,
    default_stem: str = 'output',
    default_suffix: str | None = None,
) -> pathlib.Path:
    """Generates an absolute file path name based on the specified path.

    Args:
        path: Name or path of output file.
        default_parent: Default parent directory if filepath does not have one.
            Default is none (current directory).
        default_stem: Default filename stem. Default is 'output'.
        default_suffix: Default file extension if filepath does not have one.
            Default is no extension.

    Returns:
        An absolute Path.
    """
    path = pathlib.Path(path)

    # Fix missing parts with defaults
    if not path.stem:
        path = path.with_stem(default_stem)
    if not path.suffix and default_suffix:
        path = path.with_suffix(default_suffix)
    if not path.parent.parts and default_parent:
        path = pathlib.Path(default_parent, path)

    return path.expanduser().resolve()


def create_log(log_path: str | os.PathLike | None, log_level: str | None) -> None:
    """Create a log file for debug output.

    Args:
        log_path: Path to log file. If None or empty
            the log file will be the program name with
            a '.log' suffix in the user's home directory.
        log_level: Log level:
            'DEBUG', 'INFO', 'WARNING', 'ERROR', or 'CRITICAL'.
            Default is 'INFO'.
    """
    if not log_path:
        log_path = PROG
    if not log_level:
        log_level = 'INFO'
    log_path = output_path(log_path, default_parent='~', default_suffix='.log')
    logging.basicConfig(
        filename=log_path,
        filemode='w',
        level=log_level.upper(),
    )
    logger.info(
        'Log started %s, level=%s',
        datetime.datetime.now(tz=datetime.timezone.utc),
        logging.getLevelName(logger.getEffectiveLevel()),
    )
    logger.info('%s version: %s', PROG, __version__)
    logger.info('Python version: %s', sys.version)


def process_options(argv: Sequence[str] | None) -> argparse.Namespace:
    """Set up option spec and parse command line options."""
    parser = argparse.ArgumentParser(
        prog=PROG, description=_('Render a TOML scene file as SVG.')
    )
    parser.add_argument(
        'input_file', type=pathlib.Path, help=_('Path name of scene file')
    )
    parser.add_argument(
        '--output-file', '-o', type=pathlib.Path, help=_('Output file.')
    )
    parser.add_argument(
        '--width', help=_('Document width (i.e. 10cm), overrides the scene')
    )
    parser.add_argument(
        '--height', help=_('Document height, overrides the scene')
    )
    parser.add_argument(
        '--margin', type=float, help=_('Extra viewport margin in user units')
    )
    parser.add_argument(
        '--pretty-print', action='store_true', help=_('Indent the output')
    )
    parser.add_argument(
        '--log-create', action='store_true', help=_('Create log file')
    )
    parser.add_argument('--log-level', default='DEBUG', help=_('Log level'))
    parser.add_argument(
        '--log-filename',
        default=None,
        help=_('Full pathname of log file'),
    )
    parser.add_argument(
        '--version', action='version', version=f'%(prog)s {__version__}'
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    """Render a scene file.

    Returns:
        The process exit status.
    """
    options = process_options(argv)

    if options.log_create:
        create_log(options.log_filename, options.log_level)
        logger.info('Invocation: %s', ' '.join(argv or sys.argv))

    try:
        scene = config.load_scene(options.input_file)
        document = config.scene_to_document(
            scene,
            margin=options.margin,
            width=options.width,
            height=options.height,
        )
    except (config.ConfigError, OSError) as e:
        logger.exception('Scene error')
        errormsg(_('Error: ') + str(e))
        return 1

    try:
        if options.output_file:
            with options.output_file.open('w', encoding='utf-8') as f:
                document.write(f, pretty_print=options.pretty_print)
            logger.info('Wrote %s', options.output_file)
        else:
            document.write(sys.stdout, pretty_print=options.pretty_print)
    except OSError as e:
        logger.exception('Output error')
        errormsg(_('Error: ') + str(e))
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
