"""Exceptions raised by the parsing and generation pipeline."""


class CuppaError(Exception):
    """Base class for errors reported to the user as a single line."""


class SpecError(CuppaError):
    """A spec document (or the project config) is missing or has the wrong shape."""


class UnsupportedPlatformError(CuppaError):
    """No generator exists for the requested spec kind and platform."""

    def __init__(self, kind: str, platform: str):
        self.kind = kind
        self.platform = platform
        super().__init__(f"Platform {platform} not yet supported for {kind} generation")
