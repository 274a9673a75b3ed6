import pytest

from streamcat import constants


def test_parse_filesize():
    assert constants._parse_filesize("0") == 0
    assert constants._parse_filesize("100") == 100
    assert constants._parse_filesize("100b") == 100
    assert constants._parse_filesize(" 64K ") == 64 * 1024
    assert constants._parse_filesize("2M") == 2 * 1024 * 1024
    assert constants._parse_filesize("1g") == 1024 * 1024 * 1024
    assert constants._parse_filesize("inf") is None

    with pytest.raises(ValueError):
        constants._parse_filesize("100t")

    with pytest.raises(ValueError):
        constants._parse_filesize("lots")


def test_yes_or_no():
    assert constants._yes_or_no("YES")
    assert constants._yes_or_no(" true ")
    assert constants._yes_or_no("1")
    assert not constants._yes_or_no("NO")
    assert not constants._yes_or_no("")
