key2header = {
    'CONTENT_TYPE': 'Content-Type',
    'CONTENT_LENGTH': 'Content-Length',
    'HTTP_CONTENT_TYPE': 'Content_Type',
    'HTTP_CONTENT_LENGTH': 'Content_Length',
}


def key_to_header(key):
    """
    Translate a WSGI environ key into a header name, e.g. ``'HTTP_ACCEPT'``
    to ``'Accept'`` and ``'CONTENT_TYPE'`` to ``'Content-Type'``; ``None``
    for environ keys that are not headers.
    """
    if key in key2header:
        return key2header[key]
    elif key.startswith('HTTP_'):
        return key[5:].replace('_', '-').title()
    else:
        return None
