"""External programs

Screen captures, encoding and display of the animation are delegated to
external programs (xwd, ImageMagick and exo-open). This module runs them
synchronously and turns their failures into ExternalToolFailure.
"""
import logging
import shutil
import subprocess

from scriptgif.errors import ExternalToolFailure

logger = logging.getLogger(__name__)

CAPTURE_PROGRAM = 'xwd'
ENCODER_PROGRAM = 'convert'
VIEWER_PROGRAM = 'exo-open'


def execute(args):
    """Run a program and wait for it to terminate

    Raise ExternalToolFailure if the program cannot be started or exits
    with a non zero status"""
    logger.debug('Running {}'.format(' '.join(args)))
    try:
        subprocess.run(args, stdout=subprocess.DEVNULL, stderr=subprocess.DEVNULL,
                       check=True)
    except FileNotFoundError as exc:
        raise ExternalToolFailure('Failed to execute process "{}": program not found'
                                  .format(args[0])) from exc
    except (subprocess.CalledProcessError, OSError) as exc:
        raise ExternalToolFailure('Failed to execute process "{}": {}'
                                  .format(args[0], exc)) from exc


def check_dependencies(programs, which=shutil.which):
    """Raise ExternalToolFailure if one of the programs is not installed"""
    missing = [program for program in programs if which(program) is None]
    if missing:
        raise ExternalToolFailure('Missing dependencies: {}'.format(', '.join(missing)))


class XwdCapture:
    """Capture the content of an X window with xwd

    The window is identified once and for all when the object is created."""
    extension = 'xwd'

    def __init__(self, window_id, runner=execute):
        self.window_id = window_id
        self.runner = runner

    def capture(self, image_path):
        self.runner([CAPTURE_PROGRAM, '-id', self.window_id, '-out', image_path])


def open_viewer(path, runner=execute):
    """Open a file with the default web browser of the desktop session"""
    runner([VIEWER_PROGRAM, '--launch', 'WebBrowser', path])
