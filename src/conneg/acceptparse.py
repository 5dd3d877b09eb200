"""
Parses media types and ``Accept-*`` style header values into the structured
values used for content negotiation.

These headers generally take the form of::

    value1; q=0.5, value2; q=0

Where the ``q`` parameter is optional and defaults to ``1``.  Other
parameters are kept, so that for example the ``charset`` of a media range
can take part in encoding negotiation.
"""

import re

from conneg.exc import MalformedHeaderError

# RFC 7230 Section 3.2.3 "Whitespace"
# OWS            = *( SP / HTAB )
#                ; optional whitespace
OWS_re = '[ \t]*'

# RFC 7230 Section 3.2.6 "Field Value Components":
# tchar          = "!" / "#" / "$" / "%" / "&" / "'" / "*"
#                / "+" / "-" / "." / "^" / "_" / "`" / "|" / "~"
#                / DIGIT / ALPHA
tchar_re = r"[!#$%&'*+\-.^_`|~0-9A-Za-z]"

# token          = 1*tchar
token_re = tchar_re + '+'
token_compiled_re = re.compile('^' + token_re + '$')

# quoted-string  = DQUOTE *( qdtext / quoted-pair ) DQUOTE
quoted_string_re = r'"(?:[^"\\]|\\.)*"'

# parameter      = token "=" ( token / quoted-string )
# An empty value is captured so that "q=" can be rejected as a bad qvalue.
parameter_compiled_re = re.compile(
    OWS_re + ';' + OWS_re + '(' + token_re + ')' + OWS_re + '=' + OWS_re +
    '((?:' + token_re + ')|(?:' + quoted_string_re + '))?',
)

# One element of a comma separated list; commas inside quoted strings do not
# end the element.
list_element_compiled_re = re.compile(
    '(?:[^,"]|' + quoted_string_re + ')+',
)

# Specificity of a media range, lowest value first when ranking.
EXACT = 0
SUBTYPE_WILDCARD = 1
FULL_WILDCARD = 2


def _process_quoted_string_token(token):
    """
    Return unescaped and unquoted value from quoted token.
    """
    # RFC 7230, section 3.2.6 "Field Value Components": "Recipients that
    # process the value of a quoted-string MUST handle a quoted-pair as if
    # it were replaced by the octet following the backslash."
    return re.sub(r'\\(?![\\])', '', token[1:-1]).replace('\\\\', '\\')


def _escape_and_quote_parameter_value(param_value):
    if param_value == '':
        return '""'
    param_value = param_value.replace('\\', '\\\\').replace('"', r'\"')
    if not token_compiled_re.match(param_value):
        param_value = '"' + param_value + '"'
    return param_value


def _split_list(value):
    """
    Split a ``#rule`` list into its non-empty elements, left to right.
    """
    elements = []
    for match in list_element_compiled_re.finditer(value):
        element = match.group(0).strip(' \t')
        if element:
            elements.append(element)
    return elements


def _split_parameters(element):
    """
    Split a header element into its leading value and a list of (lowercased
    parameter name, value) tuples.
    """
    value, sep, tail = element.partition(';')
    parameters = []
    if sep:
        for match in parameter_compiled_re.finditer(sep + tail):
            name, param_value = match.groups()
            if param_value is None:
                param_value = ''
            elif param_value.startswith('"') and param_value.endswith('"'):
                param_value = _process_quoted_string_token(param_value)
            parameters.append((name.lower(), param_value))
    return value.strip(' \t'), parameters


def _split_media_type(media_type, header_value):
    parts = media_type.split('/')
    if len(parts) != 2 or not parts[0].strip() or not parts[1].strip():
        raise MalformedHeaderError(
            'Media type must be in the format type/subtype, got %r'
            % (media_type,),
            header_value=header_value,
        )
    return parts[0].strip().lower(), parts[1].strip().lower()


def _format_element(value, quality, parameters):
    element = value
    for name, param_value in parameters:
        element += ';%s=%s' % (
            name, _escape_and_quote_parameter_value(param_value),
        )
    if quality == 1.0:
        return element
    elif quality == 0.0:
        return '{};q=0'.format(element)
    return '{};q={}'.format(element, quality)


def parse_quality(value):
    """
    Parse a ``q`` parameter value.

    :param value: (``str``) the text after ``q=``
    :return: (``float``) the quality value, clamped to the range 0 to 1
    :raises MalformedHeaderError: if `value` is not a number
    """
    try:
        quality = float(value)
    except (TypeError, ValueError):
        raise MalformedHeaderError(
            'Invalid quality value %r' % (value,), header_value=value,
        )
    if quality != quality:  # NaN
        raise MalformedHeaderError(
            'Invalid quality value %r' % (value,), header_value=value,
        )
    return max(min(quality, 1.0), 0.0)


class QualityValue(object):
    """
    A header value with a quality value, such as one item of an
    ``Accept-Charset`` header.

    This object should not be modified.
    """

    def __init__(self, value, quality=1.0, parameters=None):
        self._value = value
        self._quality = float(quality)
        if parameters is None:
            parameters = ()
        elif hasattr(parameters, 'items'):
            parameters = parameters.items()
        self._parameters = tuple(parameters)

    @property
    def value(self):
        """(``str``) The header value, without parameters."""
        return self._value

    @property
    def quality(self):
        """(``float``) The quality value, between 0 and 1."""
        return self._quality

    @property
    def parameters(self):
        """(``dict``) Parameters other than ``q``."""
        return dict(self._parameters)

    @classmethod
    def parse(cls, element):
        """
        Parse a single header element such as ``'utf-8;q=0.7'``.

        :raises MalformedHeaderError: if the element has no value, or its
                                      quality value is not a number
        """
        value, parameters = _split_parameters(element)
        if not value:
            raise MalformedHeaderError(
                'Missing value in header element %r' % (element,),
                header_value=element,
            )
        quality = 1.0
        others = []
        for name, param_value in parameters:
            if name == 'q':
                quality = parse_quality(param_value)
            else:
                others.append((name, param_value))
        return cls(value, quality, others)

    def _key(self):
        return (self.__class__, self._value, self._quality, self._parameters)

    def __eq__(self, other):
        if not isinstance(other, QualityValue):
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
        return '<%s(%r)>' % (self.__class__.__name__, str(self))

    def __str__(self):
        return _format_element(self._value, self._quality, self._parameters)


class MediaTypeRange(QualityValue):
    """
    A media type, or a media range with ``*`` wildcards, with a quality value
    and media type parameters.

    The type, subtype and parameter names are case-insensitive, and are
    stored lowercased (:rfc:`RFC 7231, section 3.1.1.1 <7231#section-3.1.1.1>`).
    A ``*`` type makes the subtype irrelevant for matching.
    """

    def __init__(self, type, subtype, quality=1.0, parameters=None):
        self._type = type.lower()
        self._subtype = subtype.lower()
        super().__init__(
            self._type + '/' + self._subtype, quality, parameters,
        )
        self._parameters = tuple(
            (name.lower(), value) for name, value in self._parameters
        )

    @property
    def type(self):
        return self._type

    @property
    def subtype(self):
        return self._subtype

    @property
    def media_type(self):
        """(``str``) ``type/subtype``, without parameters."""
        return self._value

    @property
    def charset(self):
        """(``str`` or ``None``) The ``charset`` parameter, if any."""
        for name, value in self._parameters:
            if name == 'charset':
                return value
        return None

    @property
    def specificity(self):
        """
        (``int``) :data:`EXACT`, :data:`SUBTYPE_WILDCARD` or
        :data:`FULL_WILDCARD`.
        """
        if self._type == '*':
            return FULL_WILDCARD
        if self._subtype == '*':
            return SUBTYPE_WILDCARD
        return EXACT

    @classmethod
    def parse(cls, value):
        """
        Parse a media type such as ``'text/html; charset=utf-8; q=0.5'``.

        :param value: (``str``) media type or media range, with optional
                      parameters
        :return: :class:`MediaTypeRange`
        :raises MalformedHeaderError: if the media type does not split into
                                      exactly two non-empty segments around a
                                      ``/``, or the quality value is not a
                                      number
        """
        media_type, parameters = _split_parameters(value)
        type_, subtype = _split_media_type(media_type, value)
        quality = 1.0
        others = []
        for name, param_value in parameters:
            if name == 'q':
                quality = parse_quality(param_value)
            else:
                others.append((name, param_value))
        return cls(type_, subtype, quality, others)

    def matches(self, supported_media_type):
        """
        Return whether this range covers `supported_media_type`.

        A range matches if its type is ``*``, if its subtype is ``*`` and the
        types are equal, or if both type and subtype are equal.  Parameters
        are not considered.
        """
        supported_media_type = supported_media_type.partition(';')[0]
        supported_type, __, supported_subtype = \
            supported_media_type.strip().lower().partition('/')
        if self._type == '*':
            return True
        if self._type != supported_type:
            return False
        return self._subtype == '*' or self._subtype == supported_subtype


class LanguageRange(QualityValue):
    """
    A basic language range from an ``Accept-Language`` header
    (:rfc:`RFC 4647, section 2.1 <4647#section-2.1>`).
    """

    def __init__(self, tag, quality=1.0):
        super().__init__(tag, quality)

    @property
    def tag(self):
        """(``str``) The language range, for example ``'en-US'`` or ``'*'``."""
        return self._value

    @classmethod
    def parse(cls, element):
        item = QualityValue.parse(element)
        return cls(item.value, item.quality)

    def matches(self, language):
        """
        Return whether `language` falls within this range.

        ``*`` matches any language, and a range matches a tag that is equal to
        it or that starts with it followed by ``-`` (``en`` matches ``en-US``,
        but ``en-GB`` does not match ``en-US``).  Comparison is
        case-insensitive.
        """
        tag = self._value.lower()
        language = language.lower()
        return (
            tag == '*' or tag == language or language.startswith(tag + '-')
        )


def parse_accept(value):
    """
    Parse an ``Accept`` header.

    :param value: (``str``) header value
    :return: list of :class:`MediaTypeRange`, in header order
    :raises MalformedHeaderError: if any media range is malformed
    """
    return [MediaTypeRange.parse(element) for element in _split_list(value)]


def parse_accept_charset(value):
    """
    Parse an ``Accept-Charset`` header.

    :return: list of :class:`QualityValue`, in header order
    """
    return [QualityValue.parse(element) for element in _split_list(value)]


def parse_accept_language(value):
    """
    Parse an ``Accept-Language`` header.

    :return: list of :class:`LanguageRange`, in header order
    """
    return [LanguageRange.parse(element) for element in _split_list(value)]
