def is_blank(value):
    return isinstance(value, str) and not value.strip()


def blank_to_null(data, keep=()):
    """
    Return a copy of ``data`` with blank strings replaced by ``None``.

    Forms send ``""`` for "no value"; the data model stores null. Keys listed
    in ``keep`` (required fields) are left untouched so their own "is
    required" rule reports the problem. Applying it twice gives the same
    result.
    """
    return {
        key: None if key not in keep and is_blank(value) else value
        for key, value in data.items()
    }


def truncate(text, length=100, marker='...'):
    if text is None:
        return ''
    if len(text) <= length:
        return text
    return text[:length] + marker
