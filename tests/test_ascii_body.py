import random

import pytest

from pnm_viewer.codec.ascii_body import MAX_LINE_LENGTH, decode_ascii_body, tokenize
from pnm_viewer.codec.decoder import decode
from pnm_viewer.codec.header import parse_header
from pnm_viewer.models.pnm_model import DecodeError, PNMFormat

BLACK = [0, 0, 0, 255]
WHITE = [255, 255, 255, 255]


def _pixels(data):
    outcome = decode(data)
    assert outcome.ok, outcome.error
    return outcome.image.pixels.tolist()


def _pbm_file(width, height, bits, per_line=30):
    tokens = [str(b) for b in bits]
    lines = [" ".join(tokens[i:i + per_line]) for i in range(0, len(tokens), per_line)]
    return b"P1\n%d %d\n" % (width, height) + "\n".join(lines).encode("ascii") + b"\n"


def test_pbm_concrete_scenario():
    assert _pixels(b"P1 2 2\n1 0\n0 1\n") == [BLACK, WHITE, WHITE, BLACK]


def test_pbm_digits_without_whitespace():
    assert _pixels(b"P1 4 1\n1001\n") == [BLACK, WHITE, WHITE, BLACK]


def test_pbm_nonzero_digit_is_black():
    assert _pixels(b"P1 2 1\n7 0\n") == [BLACK, WHITE]


@pytest.mark.parametrize("width, height", [(1, 1), (3, 5), (17, 4), (64, 3)])
def test_pbm_random_bits_polarity(width, height):
    rng = random.Random(width * 1000 + height)
    bits = [rng.randint(0, 1) for _ in range(width * height)]
    image = decode(_pbm_file(width, height, bits)).image
    assert (image.width, image.height) == (width, height)
    assert not image.is_truncated
    gray = image.pixels[:, 0].tolist()
    assert gray == [0 if b else 255 for b in bits]
    assert set(gray) <= {0, 255}


def test_pgm_scaling_every_value():
    for max_value in range(1, 256):
        for value in range(max_value + 1):
            outcome = decode(b"P2 1 1 %d\n%d\n" % (max_value, value))
            expected = round(255 * value / max_value)
            assert outcome.image.pixels[0].tolist() == [expected, expected, expected, 255]


def test_pgm_boundaries():
    assert _pixels(b"P2 2 1 7\n0 7\n") == [[0, 0, 0, 255], WHITE]


@pytest.mark.parametrize(
    "data, expected",
    [
        # 255 * 1 / 6 = 42.5, 255 * 3 / 6 = 127.5: половины к чётному
        (b"P2 1 1 6\n1\n", 42),
        (b"P2 1 1 6\n3\n", 128),
        (b"P5 1 1 6\n\x01", 42),
        (b"P5 1 1 6\n\x03", 128),
    ],
)
def test_half_way_samples_round_to_even(data, expected):
    assert _pixels(data) == [[expected, expected, expected, 255]]


def test_pgm_value_above_max_saturates():
    assert _pixels(b"P2 1 1 10\n20\n") == [WHITE]


def test_pgm_last_token_without_newline_is_kept():
    assert _pixels(b"P2 1 1 255\n128") == [[128, 128, 128, 255]]


def test_ppm_lossless_at_255():
    assert _pixels(b"P3\n2 1\n255\n12 200 77\n0 255 1\n") == [[12, 200, 77, 255], [0, 255, 1, 255]]


def test_ppm_scaled_channels():
    assert _pixels(b"P3 1 1 15\n15 0 5\n") == [[255, 0, 85, 255]]


def test_ppm_drops_trailing_incomplete_triple():
    image = decode(b"P3 2 1 255\n1 2 3 4 5\n").image
    assert image.pixels.tolist() == [[1, 2, 3, 255]]
    assert image.is_truncated


def test_short_body_is_truncated_not_failed():
    image = decode(b"P2 2 2 255\n0 255\n").image
    assert image.pixel_count == 2
    assert image.is_truncated
    grid = image.as_array()
    assert grid.shape == (2, 2, 4)
    assert grid[0].tolist() == [[0, 0, 0, 255], WHITE]
    assert grid[1].tolist() == [[0, 0, 0, 0], [0, 0, 0, 0]]


def test_extra_samples_are_ignored():
    assert _pixels(b"P1 1 1\n1 0 1\n") == [BLACK]


def test_crlf_and_tabs_are_delimiters():
    assert _pixels(b"P2 3 1 255\r\n10\t20\r\n30\r\n") == [
        [10, 10, 10, 255],
        [20, 20, 20, 255],
        [30, 30, 30, 255],
    ]


def test_comment_in_body_is_invalid():
    assert decode(b"P2 1 1 255\n# note\n7\n").error is DecodeError.INVALID_FORMAT


def test_non_digit_in_body_is_invalid():
    assert decode(b"P1 2 1\n1 x\n").error is DecodeError.INVALID_FORMAT


def test_comments_in_header_are_allowed():
    data = b"P1\n# " + b"x" * 100 + b"\n2\n# more\n2\n1 0\n0 1\n"
    assert _pixels(data) == [BLACK, WHITE, WHITE, BLACK]


def test_first_body_line_limit():
    # the line right after the header is counted without its leading LF
    ok = b"P1 71 1\n" + b"0" * 71 + b"\n"
    assert decode(ok).ok
    too_long = b"P1 72 1\n" + b"0" * 72 + b"\n"
    assert decode(too_long).error is DecodeError.LINE_TOO_LONG


def test_following_line_limit():
    ok = b"P1 70 2\n" + b"0" * 70 + b"\n" + b"1" * 70 + b"\n"
    assert decode(ok).image.pixel_count == 140
    too_long = b"P1 71 2\n" + b"0" * 71 + b"\n" + b"1" * 71 + b"\n"
    assert decode(too_long).error is DecodeError.LINE_TOO_LONG


def test_long_line_aborts_whole_decode():
    data = b"P2 40 2 255\n" + b"1 " * 40 + b"\n" + b"2 " * 40 + b"\n"
    outcome = decode(data)
    assert not outcome.ok
    assert outcome.image is None
    assert outcome.error is DecodeError.LINE_TOO_LONG


def test_header_line_too_long():
    data = b"P1" + b" " * 75 + b"2 2\n1 0\n0 1\n"
    assert decode(data).error is DecodeError.LINE_TOO_LONG


def test_header_line_continuing_into_body_too_long():
    data = b"P1 2 2" + b" " * 80 + b"\n1 0\n0 1\n"
    assert decode(data).error is DecodeError.LINE_TOO_LONG


def test_line_without_trailing_newline_is_not_checked():
    data = b"P1 100 1\n" + b"0" * 100
    assert decode(data).image.pixel_count == 100


def test_tokenize_caps_at_max_value():
    data = b"P2 3 1 9\n1 99 " + b"9" * 40 + b"\n"
    header = parse_header(data, PNMFormat.PGM)
    assert tokenize(data, header) == [1, 9, 9]


def test_decode_ascii_body_returns_samples():
    data = b"P3 1 1 255\n1 2 3\n"
    header = parse_header(data, PNMFormat.PPM)
    assert decode_ascii_body(data, header).tolist() == [[1, 2, 3]]
    assert MAX_LINE_LENGTH == 70
