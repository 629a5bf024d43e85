"""Title to filename conversion."""

STRIPPED_CHARACTERS = ("/", "(", ")", "\\", "'")


def sanitize_title(title: str) -> str:
    """Turn a page title into a filesystem-safe slug.

    Spaces become hyphens, the characters in STRIPPED_CHARACTERS are
    deleted and the result is lower-cased. Distinct titles may collide.

    Examples:
        >>> sanitize_title("My Post (v2)/test")
        'my-post-v2test'
    """
    slug = title.replace(" ", "-")
    for char in STRIPPED_CHARACTERS:
        slug = slug.replace(char, "")
    return slug.lower()
