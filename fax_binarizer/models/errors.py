class BinarizationError(Exception):
    """Base class for every failure raised by the binarization package."""


class UnsupportedPixelFormat(BinarizationError, ValueError):
    """Channel count outside {1, 3, 4} or samples that are not 8-bit."""

    def __init__(self, channels, detail: str = ""):
        self.channels = channels
        msg = f"Unsupported pixel format: {channels} channel(s)"
        if detail:
            msg = f"{msg} ({detail})"
        super().__init__(msg)


class InvalidParameter(BinarizationError, ValueError):
    """A conversion parameter is outside its accepted range."""

    def __init__(self, name: str, value, expected: str):
        self.name = name
        self.value = value
        super().__init__(f"Invalid {name}={value!r}: expected {expected}")


class EncoderNotFound(BinarizationError, LookupError):
    """No encoder is registered for the requested output container."""

    def __init__(self, container: str):
        self.container = container
        super().__init__(f"Image format not found: no encoder for {container}")
