class OcrCliError(Exception):
    """Base class for every error the CLI reports to the operator."""


class InputError(OcrCliError):
    """Missing or unreadable input: bad path, bad arguments, undecodable image."""


class EngineError(OcrCliError):
    """Engine initialization, detection or recognition failed, or returned inconsistent results."""


class OutputError(OcrCliError):
    """The final report could not be serialized."""
