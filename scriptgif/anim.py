"""Assembly of captured frames into an animated GIF"""
import logging

from scriptgif.capture import ENCODER_PROGRAM, execute
from scriptgif.errors import EmptyAnimation

logger = logging.getLogger(__name__)


class AnimationAssembler:
    """Collect frames and encode them as a single animation with ImageMagick

    Frames are encoded in the order they were added, each image being
    preceded by the delay it must be displayed for.
    """
    def __init__(self, output_path, encoder=execute):
        self.output_path = output_path
        self.encoder = encoder
        self._frames = ()

    @property
    def frames(self):
        return self._frames

    def add_frames(self, frames):
        """Add every frame of the iterable to the animation

        The iterable is consumed entirely before returning so that an error
        raised while producing frames prevents any encoding."""
        self._frames = self._frames + tuple(frames)
        return self._frames

    def encoder_args(self):
        args = [ENCODER_PROGRAM]
        for frame in self._frames:
            args.extend(['-delay', frame.delay, frame.image_path])
        args.extend(['-layers', 'Optimize', self.output_path])
        return args

    def assemble(self):
        """Encode the animation

        Raise EmptyAnimation if no frame was added and ExternalToolFailure
        if the encoder fails"""
        if not self._frames:
            raise EmptyAnimation('No frame was captured: the timing file must contain at '
                                 'least two records')
        logger.debug('Encoding {} frames'.format(len(self._frames)))
        self.encoder(self.encoder_args())
        return self.output_path
