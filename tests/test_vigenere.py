import pytest

from cryptbreak.vigenere import (
    Frequencies,
    coincidence_by_column,
    column_frequencies,
    decrypt,
    english_frequencies,
    find_key,
    hex_to_bytes,
    main,
    matches_english,
    sum_squared_probabilities,
)

PLAIN = (
    b"it was the best of times it was the worst of times it was the age of "
    b"wisdom it was the age of foolishness it was the epoch of belief it was "
    b"the epoch of incredulity it was the season of light it was the season "
    b"of darkness it was the spring of hope it was the winter of despair we "
    b"had everything before us we had nothing before us we were all going "
    b"direct to heaven we were all going direct the other way in short the "
    b"period was so far like the present period that some of its noisiest "
    b"authorities insisted on its being received for good or for evil in the "
    b"superlative degree of comparison only there were a king with a large "
    b"jaw and a queen with a plain face on the throne of england"
)
KEY = b"KEY"


def test_hex_to_bytes_decodes_ascii():
    assert hex_to_bytes("48656c6c6f") == b"Hello"


def test_hex_to_bytes_ignores_whitespace():
    assert hex_to_bytes("48 65\n6c6c6f\n") == b"Hello"


def test_hex_to_bytes_rejects_odd_length():
    with pytest.raises(ValueError):
        hex_to_bytes("abc")


def test_decrypt_round_trip():
    data = b"attack at dawn"
    assert decrypt(decrypt(data, KEY), KEY) == data


def test_decrypt_rejects_empty_key():
    with pytest.raises(ValueError):
        decrypt(b"data", b"")


def test_english_frequencies_folds_case():
    freqs = english_frequencies(b"AaB")
    assert freqs.counts[ord("a")] == 2
    assert freqs.counts[ord("b")] == 1
    assert freqs.total == 3


def test_probabilities_sum_to_one():
    freqs = english_frequencies(PLAIN)
    assert sum(freqs.probability(b) for b in freqs.counts) == pytest.approx(1.0)


def test_probability_of_empty_is_zero():
    assert Frequencies().probability(ord("a")) == 0.0


def test_sum_squared_single_letter():
    assert sum_squared_probabilities(english_frequencies(b"aaaa")) == pytest.approx(1.0)


def test_sum_squared_two_letters():
    assert sum_squared_probabilities(english_frequencies(b"abab")) == pytest.approx(0.5)


def test_column_frequencies_interval_one_counts_everything():
    columns = column_frequencies(b"hello", 1)
    assert list(columns) == [0]
    assert columns[0].total == 5
    assert columns[0].counts[ord("l")] == 2


def test_column_frequencies_first_column_covers_every_stride():
    data = bytes(range(10))
    columns = column_frequencies(data, 3)
    assert columns[0].total == 4
    assert sum(c.total for c in columns.values()) <= len(data)


def test_column_frequencies_rejects_zero_interval():
    with pytest.raises(ValueError):
        column_frequencies(b"abc", 0)


def test_coincidence_of_constant_data():
    assert coincidence_by_column(b"z" * 12, 3) == [pytest.approx(1.0)] * 3


def test_matches_english_identical_distribution():
    assert matches_english(english_frequencies(b"a" * 10), english_frequencies(b"a" * 10))


def test_matches_english_disjoint_distribution():
    assert not matches_english(english_frequencies(b"a" * 10), english_frequencies(b"b" * 10))


def test_find_key_recovers_key():
    english = english_frequencies(PLAIN)
    cipher = decrypt(PLAIN, KEY)
    key = find_key(cipher, len(KEY), english)
    assert key == KEY
    assert decrypt(cipher, key) == PLAIN


def test_main_writes_plaintext(tmp_path, capsys):
    sample = tmp_path / "sample.txt"
    sample.write_bytes(PLAIN)
    cipher = tmp_path / "cipher.txt"
    cipher.write_text(decrypt(PLAIN, KEY).hex() + "\n")
    output = tmp_path / "out.txt"
    assert main([str(sample), str(cipher), str(output), "--key-length", "3"]) == 0
    assert output.read_bytes() == PLAIN
    out = capsys.readouterr().out
    assert PLAIN.decode() in out
    assert "Total Char:" in out