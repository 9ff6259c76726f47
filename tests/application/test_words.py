"""Tests for split_words."""

import pytest

from codemenu.application.words import split_words


@pytest.mark.parametrize(
    "text,expected",
    [
        ("HelloWorld", ["Hello", "World"]),
        ("hello_world", ["hello_", "world"]),
        ("_hello_world_", ["_", "hello_", "world_"]),
        ("Hello_World", ["Hello_", "World"]),
        ("helloWOrld", ["hello", "WOrld"]),
        ("helloworld", ["helloworld"]),
        (":do_the_thing", [":", "do_", "the_", "thing"]),
        ("create_all", ["create_", "all"]),
        ("x", ["x"]),
        ("", []),
    ],
)
def test_split_words(text, expected):
    assert list(split_words(text)) == expected


def test_words_concatenate_back_to_text():
    text = "parseHTTP_response2Body"
    assert "".join(split_words(text)) == text
