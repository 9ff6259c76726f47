"""Split identifiers into the words a user perceives when typing."""

from collections.abc import Iterator

__all__ = ["split_words"]


def split_words(text: str) -> Iterator[str]:
    """Yield the sub-words of ``text``.

    A word ends where a non-uppercase character is followed by an uppercase
    one, or where a non-alphanumeric character is followed by an alphanumeric
    one. Separators stay attached to the word before them::

        >>> list(split_words("HelloWorld"))
        ['Hello', 'World']
        >>> list(split_words("_hello_world_"))
        ['_', 'hello_', 'world_']
    """
    start = 0
    previous: str | None = None
    for index, char in enumerate(text):
        if previous is not None:
            if (not previous.isupper() and char.isupper()) or (
                not previous.isalnum() and char.isalnum()
            ):
                yield text[start:index]
                start = index
        previous = char
    if text:
        yield text[start:]
