"""
Exceptions raised while negotiating content.

A negotiation that completes without finding an acceptable formatter is not
an error: it produces a :class:`~conneg.negotiator.ContentNegotiationResult`
whose ``formatter`` is ``None``.  The exceptions here are reserved for
problems that the caller has to act on immediately.
"""


class NegotiationError(ValueError):
    """
    Base class for all errors raised by :mod:`conneg`.

    This subclasses :class:`ValueError`, which is what header parsers have
    traditionally raised for invalid header values.
    """


class ConfigurationError(NegotiationError):
    """
    The content negotiator was constructed with an unusable configuration,
    such as an empty list of media type formatters.
    """


class MalformedHeaderError(NegotiationError):
    """
    A media type or quality value could not be parsed.

    This normally means the client sent a bad request, and should become an
    HTTP ``400 Bad Request`` response.
    """

    def __init__(self, message, header_value=None):
        super().__init__(message)
        self.header_value = header_value
