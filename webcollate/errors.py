"""Exceptions raised by the bundling pipeline."""


class WebcollateError(Exception):
    """Base class for every pipeline failure."""


class AcquisitionError(WebcollateError):
    """A location could not be fetched or read."""


class ExtractionError(WebcollateError):
    """No readable main content was found in a document."""


class RenderingError(WebcollateError):
    """The headless browser failed to load the document or print it."""


class PackagingError(WebcollateError):
    """The e-book package could not be written."""


class ResourceError(WebcollateError):
    """A template or stylesheet could not be read."""
