"""XML utility functions - single source of truth."""


def xml_escape(text) -> str:
    """Escape special XML characters.

    Tag keys and values are escaped exactly once, before they are stored
    on a primitive. Writers emit them verbatim.

    Args:
        text: Raw text to escape (non-strings are converted with str())

    Returns:
        XML-safe escaped string

    Examples:
        >>> xml_escape("Tom & Jerry")
        'Tom &amp; Jerry'
        >>> xml_escape("<script>")
        '&lt;script&gt;'
        >>> xml_escape("it's")
        'it&apos;s'
    """
    return (str(text)
            .replace('&', '&amp;')
            .replace('<', '&lt;')
            .replace('>', '&gt;')
            .replace('"', '&quot;')
            .replace("'", '&apos;'))
