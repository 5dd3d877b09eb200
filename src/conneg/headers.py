"""
Access to the request headers that take part in content negotiation, in
already parsed form.
"""

from multipart import parse_options_header

from conneg.acceptparse import (
    MediaTypeRange,
    _split_media_type,
    parse_accept,
    parse_accept_charset,
    parse_accept_language,
)
from conneg.exc import MalformedHeaderError
from conneg.util import key_to_header


class RequestHeaders(object):
    """
    A read-only, case-insensitive view of a request's headers.

    `headers` may be a mapping or an iterable of (name, value) pairs.  A
    header given more than once is combined into one comma separated value,
    as allowed by :rfc:`RFC 7230, section 3.2.2 <7230#section-3.2.2>`.  A
    header whose value is empty is treated as absent.
    """

    def __init__(self, headers=None):
        self._headers = {}
        if headers is None:
            headers = {}
        if hasattr(headers, 'items'):
            headers = headers.items()
        for name, value in headers:
            if isinstance(value, (list, tuple)):
                value = ', '.join(value)
            key = name.strip().lower()
            if key in self._headers:
                self._headers[key] = self._headers[key] + ', ' + value
            else:
                self._headers[key] = value

    @classmethod
    def from_environ(cls, environ):
        """
        Create an instance from the ``HTTP_*`` and ``CONTENT_*`` keys of a
        WSGI environment.
        """
        headers = []
        for key, value in environ.items():
            name = key_to_header(key)
            if name is not None:
                headers.append((name, value))
        return cls(headers)

    @classmethod
    def coerce(cls, request):
        """
        Return `request` as a :class:`RequestHeaders`.

        `request` may already be one, an object with a ``headers`` mapping
        (such as a WebOb request), a WSGI environ ``dict``, or a plain mapping
        of header names to values.
        """
        if isinstance(request, cls):
            return request
        if hasattr(request, 'headers') and hasattr(request.headers, 'items'):
            return cls(request.headers)
        if hasattr(request, 'keys') and (
            'wsgi.version' in request or 'REQUEST_METHOD' in request
        ):
            return cls.from_environ(request)
        return cls(request)

    def get(self, name, default=None):
        value = self._headers.get(name.lower())
        if value is None or not value.strip():
            return default
        return value.strip()

    def has(self, name):
        return self.get(name) is not None

    __contains__ = has

    def __repr__(self):
        return '<%s(%r)>' % (self.__class__.__name__, self._headers)

    def content_type(self):
        """
        The ``Content-Type`` header as a :class:`MediaTypeRange`, or ``None``
        if it is absent.

        A ``q`` parameter means nothing on a ``Content-Type`` and is dropped,
        so the quality is always 1.

        :raises MalformedHeaderError: if the media type is malformed, or is a
                                      wildcard range such as ``text/*``
        """
        value = self.get('Content-Type')
        if value is None:
            return None
        media_type, options = parse_options_header(value)
        type_, subtype = _split_media_type(media_type, value)
        if type_ == '*' or subtype == '*':
            raise MalformedHeaderError(
                'Content-Type must be a media type, not a media range, got %r'
                % (media_type,),
                header_value=value,
            )
        options.pop('q', None)
        return MediaTypeRange(type_, subtype, 1.0, options)

    def accept(self):
        """
        The ``Accept`` media ranges in header order, or ``None`` if the
        header is absent.
        """
        value = self.get('Accept')
        if value is None:
            return None
        return parse_accept(value)

    def accept_charset(self):
        value = self.get('Accept-Charset')
        if value is None:
            return []
        return parse_accept_charset(value)

    def accept_language(self):
        value = self.get('Accept-Language')
        if value is None:
            return []
        return parse_accept_language(value)

    def content_language(self):
        """The ``Content-Language`` header verbatim, or ``None``."""
        return self.get('Content-Language')
