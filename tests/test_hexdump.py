import hashlib

from cryptbreak.hexdump import hexdump, sha256_dump


def _parse(dump):
    out = bytearray()
    for line in dump.splitlines():
        out += bytes.fromhex(line[7:7 + 48].replace("-", " "))
    return bytes(out)


def test_empty_data_gives_empty_dump():
    assert hexdump(b"") == ""


def test_full_line_layout():
    expected = (
        "0000 - 00 01 02 03 04 05 06 07-08 09 0a 0b 0c 0d 0e 0f   "
        "................\n"
    )
    assert hexdump(bytes(range(16))) == expected


def test_short_line_is_padded():
    line = hexdump(b"ABC")
    assert line.startswith("0000 - 41 42 43 ")
    assert line.endswith("  ABC\n")
    assert len(line) == len(hexdump(bytes(range(16)))) - 13


def test_second_line_offset():
    lines = hexdump(bytes(17)).splitlines()
    assert len(lines) == 2
    assert lines[1].startswith("0010 - 00 ")


def test_dump_round_trip():
    data = bytes(range(200, 256)) + b"hello world"
    assert _parse(hexdump(data)) == data


def test_sha256_dump_holds_digest():
    data = b"some data"
    assert _parse(sha256_dump(data)) == hashlib.sha256(data).digest()


def test_sha256_dump_default_message():
    assert _parse(sha256_dump()) == hashlib.sha256(b"\x01\x02\x03\x05").digest()
    assert len(sha256_dump().splitlines()) == 2