"""
Ranks media ranges, charsets and language ranges from the request against
what the application supports, and picks the best match.
"""

from collections import namedtuple

MediaTypeFormatterMatch = namedtuple(
    'MediaTypeFormatterMatch', ['formatter', 'media_type', 'media_type_range'],
)
MediaTypeFormatterMatch.__doc__ = """
The formatter chosen for a media range, with the supported media type that
matched and the media range from the request that it matched.
"""


def _by_quality(items):
    """
    Drop items with a quality of 0, and (stable) sort the rest by quality,
    highest first.
    """
    ranked = [
        (-item.quality, index, item)
        for index, item in enumerate(items) if item.quality > 0
    ]
    ranked.sort(key=lambda entry: (entry[0], entry[1]))
    return [entry[2] for entry in ranked]


def rank_media_type_ranges(media_type_ranges):
    """
    Rank media ranges by preference.

    Ranges with a quality of 0 are explicit rejections and are dropped.  The
    rest are ordered by quality, highest first; then by specificity, so that
    ``text/html`` comes before ``text/*``, which comes before ``*/*``; and
    then by their order in the header.
    """
    ranked = [
        ((-media_type_range.quality, media_type_range.specificity, index),
         media_type_range)
        for index, media_type_range in enumerate(media_type_ranges)
        if media_type_range.quality > 0
    ]
    ranked.sort(key=lambda entry: entry[0])
    return [media_type_range for __, media_type_range in ranked]


class MediaTypeFormatterMatcher(object):
    """
    Finds the formatter and supported media type that best satisfy a list of
    media ranges.
    """

    def get_best_match(self, formatters, media_type_ranges):
        """
        Return the best :class:`MediaTypeFormatterMatch`, or ``None``.

        The ranked media ranges are tried in turn.  For each, the formatters
        are checked in registration order, and the first supported media type
        of a formatter that the range matches wins.  A more preferred range
        therefore always beats a less preferred one, and among equally
        preferred ranges the formatter registered first wins.
        """
        for media_type_range in rank_media_type_ranges(media_type_ranges):
            for formatter in formatters:
                for media_type in formatter.supported_media_types():
                    if media_type_range.matches(media_type):
                        return MediaTypeFormatterMatch(
                            formatter, media_type, media_type_range,
                        )
        return None


class EncodingMatcher(object):
    """
    Chooses the character encoding of a body for a formatter.
    """

    def get_best_match(self, formatter, accepted_charsets,
                       content_type_charset=None):
        """
        Return the best encoding for `formatter`, or ``None``.

        :param formatter: the chosen :class:`~conneg.formatters.MediaTypeFormatter`
        :param accepted_charsets: ``Accept-Charset`` values, as
                                  :class:`~conneg.acceptparse.QualityValue`
                                  objects in header order
        :param content_type_charset: an explicit charset, such as the
                                     ``charset`` parameter of a media type.
                                     If the formatter supports it, it is
                                     returned without looking at
                                     `accepted_charsets`.

        ``*`` in `accepted_charsets` stands for the formatter's default
        encoding, unless that encoding is rejected with ``q=0``.  With no `accepted_charsets` at all, the default encoding is
        returned.  Encodings are compared case-insensitively, and the
        formatter's own spelling is returned.
        """
        supported = formatter.supported_encodings()

        if content_type_charset is not None:
            encoding = self._find(supported, content_type_charset)
            if encoding is not None:
                return encoding

        if not accepted_charsets:
            return formatter.default_encoding

        rejected = set(
            charset.value.lower() for charset in accepted_charsets
            if charset.quality == 0
        )
        for charset in _by_quality(accepted_charsets):
            if charset.value == '*':
                # "*" stands for any charset not mentioned elsewhere
                encoding = formatter.default_encoding
                if encoding is not None and encoding.lower() in rejected:
                    encoding = None
            else:
                encoding = self._find(supported, charset.value)
            if encoding is not None:
                return encoding
        return None

    @staticmethod
    def _find(supported, charset):
        charset = charset.lower()
        for encoding in supported:
            if encoding.lower() == charset:
                return encoding
        return None


class LanguageMatcher(object):
    """
    Chooses the language of a response body.
    """

    def get_best_match(self, supported_languages, accepted_ranges):
        """
        Return the best language in `supported_languages`, or ``None``.

        The accepted language ranges are tried from highest to lowest quality
        (in header order where qualities are equal); for each, the supported
        languages are scanned in order and the first one in the range is
        returned.  A range such as ``en`` matches ``en-US``.
        """
        for language_range in _by_quality(accepted_ranges):
            for language in supported_languages:
                if language_range.matches(language):
                    return language
        return None
