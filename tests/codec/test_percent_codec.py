import pytest

from vrfcodec.codec import percent_codec


@pytest.mark.unit
def test_encode_space_as_percent_twenty():
    assert percent_codec.encode(" ") == "%20"


@pytest.mark.unit
def test_decode_leaves_plus_alone():
    assert percent_codec.decode("+") == "+"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,expected",
    [
        ("12345", "12345"),
        ("one piece + movie", "one%20piece%20%2B%20movie"),
        ("a.b-c_d*e", "a.b-c_d*e"),
        ("~", "%7E"),
        ("a/b?c=d&e", "a%2Fb%3Fc%3Dd%26e"),
        ("é", "%C3%A9"),
        ("東京", "%E6%9D%B1%E4%BA%AC"),
        ("", ""),
    ],
)
def test_encode_form_rules(text, expected):
    assert percent_codec.encode(text) == expected


@pytest.mark.unit
def test_encode_replaces_lone_surrogate():
    assert percent_codec.encode("a\ud800b") == "a%3Fb"


@pytest.mark.unit
@pytest.mark.parametrize(
    "text,expected",
    [
        ("one%20piece%20%2B%20movie", "one piece + movie"),
        ("%C3%A9", "é"),
        ("100%", "100%"),
        ("%zz", "%zz"),
        ("a+b", "a+b"),
    ],
)
def test_decode_plain_percent_rules(text, expected):
    assert percent_codec.decode(text) == expected


@pytest.mark.unit
@pytest.mark.parametrize("text", ["one piece + movie", "a~b*c", "東京 2024", "%41"])
def test_round_trip(text):
    assert percent_codec.decode(percent_codec.encode(text)) == text
