"""Errors raised while converting a terminal session to an animation"""


class ScriptGifError(Exception):
    pass


class InputError(ScriptGifError):
    pass


class MalformedTimingLine(ScriptGifError):
    pass


class ScriptLengthMismatch(ScriptGifError):
    pass


class TruncatedScript(ScriptLengthMismatch):
    pass


class UndecodableOutput(ScriptGifError):
    pass


class CaptureTargetUnresolved(ScriptGifError):
    pass


class ExternalToolFailure(ScriptGifError):
    pass


class EmptyAnimation(ScriptGifError):
    pass
