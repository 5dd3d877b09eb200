"""
Content negotiation for request and response bodies.

:class:`ContentNegotiator` combines the media type, encoding and language
matchers into one result per body:

    >>> from conneg.formatters import JsonMediaTypeFormatter
    >>> negotiator = ContentNegotiator([JsonMediaTypeFormatter()], ['en-US'])
    >>> result = negotiator.negotiate_response(
    ...     dict, {'Accept': 'application/json', 'Accept-Language': 'en'})
    >>> result.media_type, result.encoding, result.language
    ('application/json', 'utf-8', 'en-US')
"""

import logging

from conneg.exc import ConfigurationError
from conneg.headers import RequestHeaders
from conneg.matching import (
    EncodingMatcher,
    LanguageMatcher,
    MediaTypeFormatterMatcher,
)

log = logging.getLogger(__name__)

# RFC 7231 Section 3.1.1.5: a recipient may assume "application/octet-stream"
# for a body without a Content-Type.
DEFAULT_MEDIA_TYPE = 'application/octet-stream'


class ContentNegotiationResult(object):
    """
    The formatter, media type, encoding and language chosen for a body.

    When no formatter could be chosen, :attr:`formatter` is ``None`` and the
    result is false.  For a request without a ``Content-Type``,
    :attr:`formatter` is also ``None`` but :attr:`media_type` is the default
    media type (see :attr:`is_default`): the body should be handled as an
    opaque stream of bytes.

    This object should not be modified.
    """

    __slots__ = ('_formatter', '_media_type', '_encoding', '_language')

    def __init__(self, formatter=None, media_type=None, encoding=None,
                 language=None):
        self._formatter = formatter
        self._media_type = media_type
        self._encoding = encoding
        self._language = language

    @property
    def formatter(self):
        return self._formatter

    @property
    def media_type(self):
        return self._media_type

    @property
    def encoding(self):
        return self._encoding

    @property
    def language(self):
        return self._language

    @property
    def is_match(self):
        """Whether a formatter was chosen."""
        return self._formatter is not None

    @property
    def is_default(self):
        """
        Whether this is the default result for a request body without a
        ``Content-Type``.
        """
        return self._formatter is None and self._media_type is not None

    def __bool__(self):
        return self.is_match

    def _key(self):
        return (self._formatter, self._media_type, self._encoding,
                self._language)

    def __eq__(self, other):
        if not isinstance(other, ContentNegotiationResult):
            return NotImplemented
        return self._key() == other._key()

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __hash__(self):
        return hash(self._key())

    def __repr__(self):
        return '<%s formatter=%r media_type=%r encoding=%r language=%r>' % (
            (self.__class__.__name__,) + self._key()
        )


class ContentNegotiator(object):
    """
    Chooses how to read request bodies and write response bodies.

    :param formatters: the registered
                       :class:`~conneg.formatters.MediaTypeFormatter`
                       objects, in order of preference
    :param supported_languages: language tags responses can be written in,
                                in order of preference
    :param media_type_formatter_matcher: replaces the default
                                         :class:`~conneg.matching.MediaTypeFormatterMatcher`
    :param encoding_matcher: replaces the default
                             :class:`~conneg.matching.EncodingMatcher`
    :param language_matcher: replaces the default
                             :class:`~conneg.matching.LanguageMatcher`
    :param default_media_type: the media type assumed for a request body
                               without a ``Content-Type``
    :raises ConfigurationError: if `formatters` is empty

    The formatters and languages are copied on construction, and the
    negotiator keeps no other state, so one instance can be shared between
    threads.
    """

    def __init__(self, formatters, supported_languages=(),
                 media_type_formatter_matcher=None, encoding_matcher=None,
                 language_matcher=None, default_media_type=DEFAULT_MEDIA_TYPE):
        formatters = tuple(formatters)
        if not formatters:
            raise ConfigurationError('List of formatters cannot be empty')
        self.formatters = formatters
        self.supported_languages = tuple(supported_languages)
        self.media_type_formatter_matcher = (
            media_type_formatter_matcher or MediaTypeFormatterMatcher()
        )
        self.encoding_matcher = encoding_matcher or EncodingMatcher()
        self.language_matcher = language_matcher or LanguageMatcher()
        self.default_media_type = default_media_type

    def __repr__(self):
        return '<%s formatters=%r supported_languages=%r>' % (
            self.__class__.__name__, self.formatters, self.supported_languages,
        )

    def negotiate_request(self, type, request):
        """
        Choose how to read the body of `request` into a `type`.

        :param type: the type the body should be read into
        :param request: a :class:`~conneg.headers.RequestHeaders`, an object
                        with a ``headers`` mapping, a WSGI environ, or a
                        mapping of headers
        :return: :class:`ContentNegotiationResult`
        :raises MalformedHeaderError: if the ``Content-Type`` is malformed

        The ``Content-Language`` header, if any, is copied into the result
        as it describes a body the client has already sent.
        """
        headers = RequestHeaders.coerce(request)
        content_type = headers.content_type()
        language = headers.content_language()

        if content_type is None:
            log.debug('no Content-Type; defaulting to %s',
                      self.default_media_type)
            return ContentNegotiationResult(
                None, self.default_media_type, None, language,
            )

        formatters = [
            formatter for formatter in self.formatters
            if formatter.can_read_type(type)
        ]
        match = self.media_type_formatter_matcher.get_best_match(
            formatters, [content_type],
        )
        if match is None:
            log.debug('no formatter can read %r as %s', type,
                      content_type.media_type)
            return ContentNegotiationResult()

        encoding = self.encoding_matcher.get_best_match(
            match.formatter, [], content_type.charset,
        )
        log.debug('reading %r with %r as %s (encoding %s)', type,
                  match.formatter, match.media_type, encoding)
        return ContentNegotiationResult(
            match.formatter, match.media_type, encoding, language,
        )

    def negotiate_response(self, type, request):
        """
        Choose how to write a `type` in the response to `request`.

        :param type: the type of the value to be written
        :param request: see :meth:`negotiate_request`
        :return: :class:`ContentNegotiationResult`
        :raises MalformedHeaderError: if a media range or quality value in
                                      the ``Accept*`` headers is malformed

        Without an ``Accept`` header, the first formatter that can write
        `type` is used with its default media type.  An explicit ``charset``
        parameter on the matched ``Accept`` media range takes precedence over
        ``Accept-Charset``.
        """
        headers = RequestHeaders.coerce(request)
        accepted_charsets = headers.accept_charset()
        language = self.language_matcher.get_best_match(
            self.supported_languages, headers.accept_language(),
        )
        formatters = [
            formatter for formatter in self.formatters
            if formatter.can_write_type(type)
        ]
        media_type_ranges = headers.accept()

        if media_type_ranges is None:
            if not formatters:
                log.debug('no formatter can write %r', type)
                return ContentNegotiationResult()
            formatter = formatters[0]
            encoding = self.encoding_matcher.get_best_match(
                formatter, accepted_charsets,
            )
            log.debug('no Accept; writing %r with %r', type, formatter)
            return ContentNegotiationResult(
                formatter, formatter.default_media_type, encoding, language,
            )

        match = self.media_type_formatter_matcher.get_best_match(
            formatters, media_type_ranges,
        )
        if match is None:
            log.debug('no formatter can write %r as any of %s', type,
                      ', '.join(str(r) for r in media_type_ranges))
            return ContentNegotiationResult()

        encoding = self.encoding_matcher.get_best_match(
            match.formatter, accepted_charsets,
            match.media_type_range.charset,
        )
        log.debug('writing %r with %r as %s (encoding %s, language %s)',
                  type, match.formatter, match.media_type, encoding, language)
        return ContentNegotiationResult(
            match.formatter, match.media_type, encoding, language,
        )

    def get_acceptable_response_media_types(self, type):
        """
        Return the media types a `type` can be written as, in order of
        preference and without duplicates.
        """
        media_types = []
        for formatter in self.formatters:
            if not formatter.can_write_type(type):
                continue
            for media_type in formatter.supported_media_types():
                if media_type not in media_types:
                    media_types.append(media_type)
        return media_types
