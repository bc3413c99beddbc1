# cryptbreak

A small toolkit of worked attacks on ciphers that are broken by design or
broken by misuse. Each module covers one technique and is usable as a
library; two of them also ship as commands.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

| Module | Technique |
| --- | --- |
| `cryptbreak.manytimepad` | Recovering a one-time pad key reused across equal-length messages by spotting spaces through XOR bit patterns (`recover_key`, `decrypt_all`, `guess_plaintexts`, `render_guesses`, `encrypt_with_key`, `xor_bytes`). |
| `cryptbreak.spacepad` | A many-time-pad attack for ciphertexts of different lengths that yields a partial key (`recover_partial_key`, `apply_partial_key`, `decrypt_with_partial_key`). |
| `cryptbreak.aesmodes` | AES in CBC mode with PKCS#5 padding and in CTR mode, built on the raw block cipher (`cbc_encrypt`, `cbc_decrypt`, `ctr_encrypt`, `ctr_decrypt`, `pkcs5_pad`, `pkcs5_unpad`, `increment_counter`). |
| `cryptbreak.vigenere` | Breaking a repeating-key XOR cipher with letter-frequency statistics (`Frequencies`, `english_frequencies`, `find_key`, `decrypt`, `coincidence_by_column`, ...). |
| `cryptbreak.hexdump` | Offset/hex/ASCII dumps of byte strings (`hexdump`) and a dump of a SHA-256 digest (`sha256_dump`). |
| `cryptbreak.timing` | AES-128-CBC with a zero IV and no padding, and a timed comparison of two byte strings (`encrypt_block_cbc`, `decrypt_block_cbc`, `timed_compare`). |
| `cryptbreak.rsafactor` | Factoring RSA moduli whose primes lie close together and decrypting a PKCS#1 v1.5 message once the factors are known. |
| `cryptbreak.dlog` | Discrete logarithms modulo a prime by meet in the middle, plus a brute-force search and a checker. |
| `cryptbreak.paddingoracle` | A CBC padding-oracle attack, with an oracle that asks a web server over HTTP. |

## Library use

Reusing a pad key:

```python
from cryptbreak.manytimepad import encrypt_with_key, recover_key, decrypt_all

key = b"placeholder"
ciphertexts = encrypt_with_key(messages, key)
guessed_key = recover_key(ciphertexts)
plaintexts = decrypt_all(ciphertexts, guessed_key)
```

Every message must be at least as long as the key; only the first
`len(key)` bytes of each are encrypted. Key bytes that `recover_key` could
not decide are left as 0.

AES modes:

```python
from cryptbreak.aesmodes import cbc_encrypt, cbc_decrypt, ctr_encrypt, ctr_decrypt

data = cbc_encrypt(key, plaintext)          # random IV, prepended
assert cbc_decrypt(key, data) == plaintext  # padding removed
```

An IV may be passed as the third argument; otherwise a random one is used.
`cbc_decrypt(key, data, unpad=False)` keeps the padding.

Factoring close primes:

```python
from cryptbreak.rsafactor import fermat_factor, private_exponent

p, q = fermat_factor(n)
d = private_exponent(65537, p, q)
```

`fermat_factor_scan(n, limit)` scans upward from the square root (by default
for up to 2^20 steps) when the primes are further apart, and
`factor_unbalanced` handles moduli whose primes satisfy
`|3p - 2q| < N^(1/4)`. `decrypt_pkcs1(ciphertext, n, p, q)` computes the
private exponent, decrypts and strips the PKCS#1 v1.5 encoding. Each raises
`ValueError` when the modulus does not have the expected shape.

Discrete logarithms:

```python
from cryptbreak.dlog import discrete_log, check_log

x = discrete_log(p, g, h, 2 ** 20)
assert check_log(p, g, h, x)
```

`discrete_log` finds the smallest `x` below `base ** 2`; `brute_force_log`
tries every exponent below a limit.

Padding oracles:

```python
from cryptbreak.paddingoracle import HttpPaddingOracle, padding_oracle_decrypt

oracle = HttpPaddingOracle("localhost", port=8080)
plaintext = padding_oracle_decrypt(ciphertext_hex, oracle)
```

The oracle may be any callable that takes a ciphertext and returns whether
its padding is valid. `HttpPaddingOracle` sends `GET /po?er=<hex>` and reads
403 as invalid padding and 200 or 404 as valid. The recovered plaintext
keeps the padding of its last block.

## Commands

`cryptbreak-vigenere [sample] [ciphertext] [output] [-k KEY_LENGTH]` reads an
English sample (default `ptext.txt`) for its frequency table and a
hex-encoded ciphertext (default `ctest.txt`), finds the key for the given
key length (default 7), prints the decryption and writes it to the output
file (default `ttest.txt`). See `cryptbreak-vigenere --help`.

`cryptbreak-timing` encrypts a fixed block with AES-128-CBC, decrypts it
again, dumps both, and reports how long comparing the ciphertext against a
block of zeros took.

```
cryptbreak-timing
```

## What it does not do

The package does not find the key length of a repeating-key XOR cipher on
its own; `coincidence_by_column` gives the figures to judge it by, and the
length is then passed to `find_key` or `--key-length`. `cryptbreak.timing`
only measures a single comparison; it does not mount a timing attack
against a remote service.