import threading

import pytest

from vrfcodec.codec import (
    ALPHABET,
    CIPHER_KEY,
    BadInputError,
    decode_token,
    encode_token,
)
from vrfcodec.codec import percent_codec


def _round_trip(plaintext: str) -> str:
    # Tokens leave encode_token percent-encoded; decode_token takes the raw form
    return decode_token(percent_codec.decode(encode_token(plaintext)))


@pytest.mark.unit
def test_constants_are_distinct():
    assert len(ALPHABET) == 64
    assert len(set(ALPHABET)) == 64
    assert CIPHER_KEY != ALPHABET


@pytest.mark.unit
def test_encode_token_golden_value():
    assert encode_token("12345") == "9%2FGa%2BuM%3D"


@pytest.mark.unit
def test_decode_token_golden_value():
    assert decode_token("9/Ga+uM=") == "12345"


@pytest.mark.unit
def test_encode_token_search_query():
    assert encode_token("one piece + movie") == "qa3M6%2BQEUmbxILWaFFS5rVFto3l7O529OA%3D%3D"


@pytest.mark.unit
def test_search_query_round_trip():
    assert _round_trip("one piece + movie") == "one piece + movie"


@pytest.mark.unit
@pytest.mark.parametrize(
    "plaintext",
    [
        "",
        "12345",
        "abc123",
        "Naruto: Shippuden",
        "".join(chr(i) for i in range(256)),
        "東京 グール",
    ],
)
def test_round_trip(plaintext):
    assert _round_trip(plaintext) == plaintext


@pytest.mark.unit
def test_decode_token_does_not_unquote_first():
    with pytest.raises(BadInputError):
        decode_token("9%2FGa%2BuM%3D")


@pytest.mark.unit
def test_decode_token_propagates_bad_input():
    with pytest.raises(BadInputError):
        decode_token("abcde")


@pytest.mark.unit
def test_decode_token_returns_stream_url():
    url = "https://vidstream.pro/e/ABCDEF?t=1&autostart=true"
    token = percent_codec.decode(encode_token(url))
    assert decode_token(token) == url


@pytest.mark.unit
def test_concurrent_calls_are_independent():
    inputs = [str(i) for i in range(200)]
    expected = {value: encode_token(value) for value in inputs}
    results = {}
    lock = threading.Lock()

    def worker(chunk):
        for value in chunk:
            token = encode_token(value)
            with lock:
                results[value] = token

    threads = [threading.Thread(target=worker, args=(inputs[i::4],)) for i in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert results == expected
