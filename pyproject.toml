[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "cryptbreak"
version = "0.1.0"
description = "Worked attacks on weak and misused ciphers: many-time pads, repeating-key XOR, AES modes, close-prime RSA, discrete logs and CBC padding oracles."
requires-python = ">=3.10"
dependencies = [
    "cryptography",
]
keywords = [
    "cryptanalysis",
    "many-time pad",
    "repeating-key xor",
    "vigenere",
    "aes",
    "cbc",
    "ctr",
    "rsa",
    "fermat factorization",
    "discrete logarithm",
    "padding oracle",
]
classifiers = [
    "Development Status :: 4 - Beta",
    "Intended Audience :: Education",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Education",
    "Topic :: Security :: Cryptography",
]

[project.optional-dependencies]
test = [
    "pytest",
]

[project.scripts]
cryptbreak-vigenere = "cryptbreak.vigenere:main"
cryptbreak-timing = "cryptbreak.timing:main"

[tool.hatch.build.targets.wheel]
packages = ["cryptbreak"]

[tool.pytest.ini_options]
addopts = "-ra"
testpaths = ["tests"]
