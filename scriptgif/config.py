import os

from scriptgif.errors import CaptureTargetUnresolved

DEFAULT_OUTPUT_DIR = 'output'
ANIMATION_FILENAME = 'output.gif'

# Variable set by X terminal emulators (xterm, urxvt...) to the identifier of
# their window
WINDOW_ID_VARIABLE = 'WINDOWID'


def validate_window_id(window_id):
    """Raise ValueError if 'window_id' is not a decimal or hexadecimal X window identifier"""
    value = int(window_id, 0)
    if value <= 0:
        raise ValueError('Invalid window identifier: "{}"'.format(window_id))
    return window_id


def resolve_window_id(window_id=None, environ=None):
    """Return the identifier of the window to capture

    The identifier given on the command line takes precedence over the
    environment. Raise CaptureTargetUnresolved if neither provides one."""
    if window_id is not None:
        return window_id
    if environ is None:
        environ = os.environ

    try:
        return validate_window_id(environ[WINDOW_ID_VARIABLE])
    except KeyError as exc:
        raise CaptureTargetUnresolved('Could not determine window ID: ${} is not set'
                                      .format(WINDOW_ID_VARIABLE)) from exc
    except ValueError as exc:
        raise CaptureTargetUnresolved('Could not determine window ID: invalid value for '
                                      '${}'.format(WINDOW_ID_VARIABLE)) from exc


def make_output_dir(path):
    """Create the output directory and its parents if needed"""
    try:
        os.makedirs(path)
    except FileExistsError:
        if not os.path.isdir(path):
            raise
    return path
