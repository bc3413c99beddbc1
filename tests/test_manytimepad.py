import pytest

from cryptbreak.manytimepad import (
    decrypt_all,
    encrypt_with_key,
    guess_plaintexts,
    recover_key,
    render_guesses,
    xor_bytes,
)

SPACED_MESSAGES = [b" BCD", b"E GH", b"IJ L", b"MNO "]
SHARED_KEY = bytes([0x11, 0x22, 0x33, 0x44])

SOURCE_KEY = "9y-J$iJYU!Gf>n`rW05g>,+X0I6_iHN)4'ngU'jB_Mfj&kO>sJX);x|g0R4"
SOURCE_MESSAGES = [
    "I have seen the tender love that God has for His people and",
    " it is very great I saw angels over the saints with their w",
    "ings spread about them Each saint had an attending angel If",
]


def test_xor_bytes_combines_bytewise():
    assert xor_bytes(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"


def test_xor_bytes_stops_at_shorter_input():
    assert xor_bytes(b"abc", b"\x00") == b"a"


def test_xor_bytes_is_its_own_inverse():
    data = b"attack at dawn"
    pad = b"0123456789abcd"
    assert xor_bytes(xor_bytes(data, pad), pad) == data


def test_encrypt_then_decrypt_round_trip():
    ciphertexts = encrypt_with_key(SOURCE_MESSAGES, SOURCE_KEY)
    plain = decrypt_all(ciphertexts, SOURCE_KEY.encode())
    assert plain == [m.encode() for m in SOURCE_MESSAGES]


def test_encrypt_uses_only_key_length():
    ciphertexts = encrypt_with_key([b"abcdef"], b"\x00\x00\x00")
    assert ciphertexts == [b"abc"]


def test_encrypt_rejects_short_message():
    with pytest.raises(ValueError):
        encrypt_with_key([b"ab"], b"key")


def test_recover_key_finds_key_from_spaces():
    ciphertexts = encrypt_with_key(SPACED_MESSAGES, SHARED_KEY)
    assert recover_key(ciphertexts) == SHARED_KEY


def test_recovered_key_decrypts_messages():
    ciphertexts = encrypt_with_key(SPACED_MESSAGES, SHARED_KEY)
    key = recover_key(ciphertexts)
    assert decrypt_all(ciphertexts, key) == SPACED_MESSAGES


def test_recover_key_leaves_undecided_columns_zero():
    ciphertexts = encrypt_with_key([b"AB", b"AC", b"AD"], b"\x55\x66")
    key = recover_key(ciphertexts)
    assert key == b"\x00\x00"


def test_recover_key_rejects_ragged_input():
    with pytest.raises(ValueError):
        recover_key([b"abc", b"ab"])


def test_recover_key_of_nothing_is_empty():
    assert recover_key([]) == b""


def test_guess_plaintexts_shape_matches_input():
    ciphertexts = encrypt_with_key(SPACED_MESSAGES, SHARED_KEY)
    guesses = guess_plaintexts(ciphertexts)
    assert len(guesses) == len(SPACED_MESSAGES)
    assert all(len(row) == len(SHARED_KEY) for row in guesses)


def test_guess_plaintexts_identical_column_stays_unknown():
    ciphertexts = encrypt_with_key([b"Q", b"Q", b"Q"], b"\x07")
    assert guess_plaintexts(ciphertexts) == [[None], [None], [None]]


def test_guess_plaintexts_worked_column():
    ciphertexts = encrypt_with_key([b" ", b"A", b"B"], b"\x5a")
    guesses = guess_plaintexts(ciphertexts)
    assert [row[0] for row in guesses] == [None, "A", " "]


def test_guess_plaintexts_rejects_ragged_input():
    with pytest.raises(ValueError):
        guess_plaintexts([b"abc", b"a"])


def test_render_guesses_marks_unknowns():
    assert render_guesses([[None, "a"], ["b", None]]) == "?a\nb?\n"


def test_render_of_guessed_rows_has_one_line_per_row():
    ciphertexts = encrypt_with_key(SPACED_MESSAGES, SHARED_KEY)
    text = render_guesses(guess_plaintexts(ciphertexts))
    lines = text.splitlines()
    assert len(lines) == len(SPACED_MESSAGES)
    assert all(len(line) == len(SHARED_KEY) for line in lines)