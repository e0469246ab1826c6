"""Command line interface of scriptgif"""

import argparse
import logging
import os
import sys
import tempfile
import time

import scriptgif.config
from scriptgif.anim import AnimationAssembler
from scriptgif.capture import (CAPTURE_PROGRAM, ENCODER_PROGRAM, VIEWER_PROGRAM,
                               XwdCapture, check_dependencies, execute, open_viewer)
from scriptgif.errors import InputError, ScriptGifError
from scriptgif.replay import replay
from scriptgif.typescript import ChunkReader, read_timing_records

logger = logging.getLogger('scriptgif')

USAGE = """scriptgif timing_file typescript [-o OUTPUT_DIR] [-w WINDOW_ID]
                 [--no-view] [-v] [-h]

Replay a terminal session recorded with 'script --timing' and render it as an
animated GIF
"""


def parse(args, default_output_dir):
    """Parse command line arguments

    :param args: Arguments to parse
    :param default_output_dir: Directory where images and animation are
    saved when none is given
    :return: Parsed arguments
    """
    parser = argparse.ArgumentParser(prog='scriptgif', usage=USAGE)
    parser.add_argument(
        'timing_file',
        help="timing file of the session (written by 'script --timing')"
    )
    parser.add_argument(
        'typescript',
        help='typescript of the session'
    )
    parser.add_argument(
        '-o', '--output-dir',
        help=('directory where captured images and the animation are saved '
              '(default: {})').format(default_output_dir),
        default=default_output_dir,
        metavar='OUTPUT_DIR'
    )
    parser.add_argument(
        '-w', '--window-id',
        help=('identifier of the X window to capture (default: value of ${})'
              .format(scriptgif.config.WINDOW_ID_VARIABLE)),
        type=scriptgif.config.validate_window_id,
        metavar='WINDOW_ID'
    )
    parser.add_argument(
        '--no-view',
        help='do not open the animation once rendered',
        action='store_true'
    )
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='log debugging messages to a temporary file'
    )
    return parser.parse_args(args)


def open_input(filename, description, mode='r', **kwargs):
    """Open an input file, raise InputError on failure"""
    try:
        return open(filename, mode, **kwargs)
    except OSError as exc:
        raise InputError('Could not open {} "{}": {}'
                         .format(description, filename, exc.strerror)) from exc


def render_animation(timing_filename, script_filename, output_dir, capture,
                     terminal=None, encoder=execute, sleep=time.sleep):
    """Replay the session, capture frames and encode the animation

    :return: Path of the animation
    """
    with open_input(timing_filename, 'timing file', encoding='utf-8',
                    errors='replace') as timing_file:
        records = read_timing_records(timing_file)

    output_path = os.path.join(output_dir, scriptgif.config.ANIMATION_FILENAME)
    assembler = AnimationAssembler(output_path, encoder)
    logger.debug('Replaying {} records from {}'.format(len(records), script_filename))
    # Nothing must be written to the terminal (print, console logger...)
    # during the replay since the terminal window is what is being captured
    with open_input(script_filename, 'script file', 'rb') as script_file:
        reader = ChunkReader(script_file)
        reader.skip_header()
        assembler.add_frames(replay(records, reader, output_dir, capture,
                                    terminal, sleep))

    logger.info('Rendering {} frames'.format(len(assembler.frames)))
    return assembler.assemble()


def main(args=None, terminal=None, environ=None):
    if args is None:
        args = sys.argv
    if environ is None:
        environ = os.environ

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.INFO)
    console_formatter = logging.Formatter('%(message)s')
    console_handler.setFormatter(console_formatter)
    logger.handlers = [console_handler]
    logger.setLevel(logging.DEBUG)

    args = parse(args[1:], scriptgif.config.DEFAULT_OUTPUT_DIR)

    if args.verbose:
        _, log_filename = tempfile.mkstemp(prefix='scriptgif_', suffix='.log')
        file_handler = logging.FileHandler(filename=log_filename, mode='w')
        file_handler.setLevel(logging.DEBUG)
        file_formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        file_handler.setFormatter(file_formatter)
        logger.handlers.append(file_handler)
        logger.info('Logging to {}'.format(log_filename))

    programs = [CAPTURE_PROGRAM, ENCODER_PROGRAM]
    if not args.no_view:
        programs.append(VIEWER_PROGRAM)

    exit_status = 0
    try:
        check_dependencies(programs)
        window_id = scriptgif.config.resolve_window_id(args.window_id, environ)
        output_dir = scriptgif.config.make_output_dir(args.output_dir)
        animation_path = render_animation(args.timing_file, args.typescript, output_dir,
                                          XwdCapture(window_id), terminal)
        logger.info('Rendering ended, animation is {}'.format(animation_path))
        if not args.no_view:
            open_viewer(animation_path)
    except (ScriptGifError, OSError) as exc:
        logger.error('Error: {}'.format(exc))
        exit_status = 1
    finally:
        for handler in logger.handlers:
            handler.close()

    return exit_status
