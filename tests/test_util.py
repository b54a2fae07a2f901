import pytest

from mycrib.util import get_file_size, load_file, small_crc16_8005

EXPECTED = "Hello, Sailor!\n"


@pytest.fixture
def sample_file(tmp_path):
    path = tmp_path / "test.txt"
    path.write_bytes(EXPECTED.encode())
    return path


def test_load_file(sample_file):
    assert load_file(sample_file) == EXPECTED.encode()


def test_load_file_accepts_str_path(sample_file):
    assert load_file(str(sample_file)).decode() == EXPECTED


def test_get_file_size(sample_file):
    assert get_file_size(sample_file) == len(EXPECTED)


def test_get_file_size_missing_file_is_zero(tmp_path):
    assert get_file_size(tmp_path / "missing.txt") == 0


def test_get_file_size_empty_file_is_zero(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    assert get_file_size(path) == 0


def test_load_file_missing_raises(tmp_path):
    with pytest.raises(FileNotFoundError):
        load_file(tmp_path / "missing.txt")


def test_load_file_empty_raises(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_bytes(b"")
    with pytest.raises(ValueError):
        load_file(path)


def test_crc_check_value():
    # Standard check value of CRC-16/ARC over "123456789".
    assert small_crc16_8005("123456789") == 0xBB3D


def test_crc_of_empty_input_is_zero():
    assert small_crc16_8005(b"") == 0


def test_crc_str_and_bytes_agree():
    assert small_crc16_8005("/movies") == small_crc16_8005(b"/movies")


@pytest.mark.parametrize("text", ["/", "/movies", "x" * 64, "ünïcode"])
def test_crc_fits_in_sixteen_bits(text):
    assert 0 <= small_crc16_8005(text) <= 0xFFFF


def test_crc_distinguishes_routes():
    assert small_crc16_8005("/") != small_crc16_8005("/movies")