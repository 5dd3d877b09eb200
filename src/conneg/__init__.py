from conneg.acceptparse import LanguageRange, MediaTypeRange, QualityValue
from conneg.exc import (
    ConfigurationError,
    MalformedHeaderError,
    NegotiationError,
)
from conneg.formatters import (
    FormUrlEncodedMediaTypeFormatter,
    HtmlMediaTypeFormatter,
    JsonMediaTypeFormatter,
    MediaTypeFormatter,
    OctetStreamMediaTypeFormatter,
    PlainTextMediaTypeFormatter,
    SimpleMediaTypeFormatter,
)
from conneg.headers import RequestHeaders
from conneg.matching import (
    EncodingMatcher,
    LanguageMatcher,
    MediaTypeFormatterMatch,
    MediaTypeFormatterMatcher,
)
from conneg.negotiator import (
    DEFAULT_MEDIA_TYPE,
    ContentNegotiationResult,
    ContentNegotiator,
)

__all__ = [
    'ContentNegotiator', 'ContentNegotiationResult', 'DEFAULT_MEDIA_TYPE',
    'RequestHeaders',
    'MediaTypeFormatter', 'SimpleMediaTypeFormatter',
    'JsonMediaTypeFormatter', 'PlainTextMediaTypeFormatter',
    'HtmlMediaTypeFormatter', 'FormUrlEncodedMediaTypeFormatter',
    'OctetStreamMediaTypeFormatter',
    'MediaTypeFormatterMatcher', 'MediaTypeFormatterMatch',
    'EncodingMatcher', 'LanguageMatcher',
    'QualityValue', 'MediaTypeRange', 'LanguageRange',
    'NegotiationError', 'ConfigurationError', 'MalformedHeaderError',
]

__version__ = '1.0.0dev0'
