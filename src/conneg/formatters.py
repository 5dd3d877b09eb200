"""
Media type formatters describe what a content handler can do: which media
types and character encodings it supports, and which Python types it can read
from a request body or write to a response body.

The negotiator only ever queries these capabilities; reading and writing
bodies is left to the application.
"""


class MediaTypeFormatter(object):
    """
    Base class for media type formatters.

    Subclasses set :attr:`media_types` and :attr:`encodings`, or override
    :meth:`supported_media_types` and :meth:`supported_encodings`, and
    override :meth:`can_read_type` and :meth:`can_write_type`.
    """

    media_types = ()
    encodings = ()

    def supported_media_types(self):
        """Media types this formatter supports, in order of preference."""
        return list(self.media_types)

    def supported_encodings(self):
        """Character encodings this formatter supports, in order of
        preference."""
        return list(self.encodings)

    def can_read_type(self, type):
        return False

    def can_write_type(self, type):
        return False

    @property
    def default_media_type(self):
        """
        The media type used when the client expresses no preference; the
        first supported media type, or ``None``.
        """
        media_types = self.supported_media_types()
        return media_types[0] if media_types else None

    @property
    def default_encoding(self):
        """
        The encoding used when the client expresses no preference; the first
        supported encoding, or ``None``.
        """
        encodings = self.supported_encodings()
        return encodings[0] if encodings else None

    def __repr__(self):
        return '<%s %s>' % (
            self.__class__.__name__, ', '.join(self.supported_media_types()),
        )


def _type_matches(data_type, allowed):
    if allowed is None:
        return True
    for candidate in allowed:
        if data_type == candidate:
            return True
        if isinstance(data_type, type) and isinstance(candidate, type) and \
                issubclass(data_type, candidate):
            return True
    return False


class SimpleMediaTypeFormatter(MediaTypeFormatter):
    """
    A formatter whose capabilities are given as data.

    :param media_types: supported media types, most preferred first
    :param encodings: supported character encodings, most preferred first
    :param readable_types: types that can be read, or ``None`` for any type.
                           Classes also cover their subclasses.
    :param writable_types: types that can be written, or ``None`` for any
                           type
    :param default_media_type: overrides the first media type as the default
    :param default_encoding: overrides the first encoding as the default
    """

    def __init__(self, media_types, encodings=(), readable_types=None,
                 writable_types=None, default_media_type=None,
                 default_encoding=None):
        self.media_types = tuple(media_types)
        self.encodings = tuple(encodings)
        self.readable_types = None if readable_types is None \
            else tuple(readable_types)
        self.writable_types = None if writable_types is None \
            else tuple(writable_types)
        self._default_media_type = default_media_type
        self._default_encoding = default_encoding

    def can_read_type(self, type):
        return _type_matches(type, self.readable_types)

    def can_write_type(self, type):
        return _type_matches(type, self.writable_types)

    @property
    def default_media_type(self):
        if self._default_media_type is not None:
            return self._default_media_type
        return super().default_media_type

    @property
    def default_encoding(self):
        if self._default_encoding is not None:
            return self._default_encoding
        return super().default_encoding


class JsonMediaTypeFormatter(MediaTypeFormatter):
    media_types = ('application/json', 'text/json')
    encodings = ('utf-8',)

    def can_read_type(self, type):
        return True

    def can_write_type(self, type):
        return True


class PlainTextMediaTypeFormatter(MediaTypeFormatter):
    """Reads and writes ``str``."""

    media_types = ('text/plain',)
    encodings = ('utf-8', 'utf-16', 'iso-8859-1')

    def can_read_type(self, type):
        return _type_matches(type, (str,))

    def can_write_type(self, type):
        return _type_matches(type, (str,))


class HtmlMediaTypeFormatter(PlainTextMediaTypeFormatter):
    """Writes already rendered ``str`` markup."""

    media_types = ('text/html', 'application/xhtml+xml')

    def can_read_type(self, type):
        return False


class FormUrlEncodedMediaTypeFormatter(MediaTypeFormatter):
    """Reads HTML form submissions into a ``dict``; cannot write."""

    media_types = ('application/x-www-form-urlencoded',)
    encodings = ('utf-8', 'iso-8859-1')

    def can_read_type(self, type):
        return _type_matches(type, (dict,))


class OctetStreamMediaTypeFormatter(MediaTypeFormatter):
    """Reads and writes raw ``bytes``; has no character encoding."""

    media_types = ('application/octet-stream',)

    def can_read_type(self, type):
        return _type_matches(type, (bytes, bytearray))

    def can_write_type(self, type):
        return _type_matches(type, (bytes, bytearray))
