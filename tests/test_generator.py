"""Tests for the password generator."""

from __future__ import annotations

import itertools
from unittest.mock import MagicMock

import pytest

from core.domain.charset import ALPHABET, has_required_complexity
from core.domain.errors import GenerationExhaustedError, RandomSourceError
from core.services.generator import (
    SEED_BUFFER_SIZE,
    PasswordGenerator,
    generate_password,
    mix_passphrase,
)


class TestLength:
    @pytest.mark.parametrize("length", [12, 13, 20, 64, 128, 255])
    def test_exact_length(self, length):
        assert len(generate_password(length)) == length

    @pytest.mark.parametrize("length", [-1, 0, 5, 11])
    def test_short_is_clamped_to_minimum(self, length):
        assert len(generate_password(length)) == 12

    @pytest.mark.parametrize("length", [256, 300, 5000])
    def test_long_is_clamped_to_maximum(self, length):
        assert len(generate_password(length)) == 255


class TestOutput:
    def test_complexity_always_holds(self):
        gen = PasswordGenerator()
        for _ in range(200):
            assert has_required_complexity(gen.generate(12))

    def test_only_alphabet_characters(self):
        pw = generate_password(255, "seasoning")
        assert set(pw) <= set(ALPHABET)

    def test_same_passphrase_is_not_deterministic(self):
        first = generate_password(16, "my secret passphrase")
        second = generate_password(16, "my secret passphrase")
        assert first != second

    def test_uniqueness(self):
        passwords = {generate_password(16) for _ in range(50)}
        assert len(passwords) == 50

    def test_empty_passphrase_is_accepted(self):
        assert len(generate_password(16, "")) == 16


class TestBoundedRetry:
    def test_degenerate_alphabet_exhausts(self):
        gen = PasswordGenerator(alphabet="abc", max_attempts=5)
        with pytest.raises(GenerationExhaustedError) as info:
            gen.generate(12)
        assert info.value.attempts == 5

    def test_full_regeneration_per_attempt(self):
        randbelow = MagicMock(return_value=0)
        gen = PasswordGenerator(
            alphabet="abc",
            max_attempts=3,
            randbelow=randbelow,
            token_bytes=lambda n: bytes(n),
            clock_ns=lambda: 0,
        )
        with pytest.raises(GenerationExhaustedError):
            gen.generate(12)
        assert randbelow.call_count == 3 * 12

    def test_invalid_construction(self):
        with pytest.raises(ValueError):
            PasswordGenerator(alphabet="")
        with pytest.raises(ValueError):
            PasswordGenerator(max_attempts=0)


class TestRandomSourceFailure:
    def test_randbelow_failure_is_not_retried(self):
        randbelow = MagicMock(side_effect=OSError("entropy pool unavailable"))
        gen = PasswordGenerator(randbelow=randbelow)
        with pytest.raises(RandomSourceError):
            gen.generate(16)
        assert randbelow.call_count == 1

    def test_token_bytes_failure(self):
        gen = PasswordGenerator(token_bytes=MagicMock(side_effect=NotImplementedError("no urandom")))
        with pytest.raises(RandomSourceError):
            gen.generate(16, "passphrase")


class TestSeedFolding:
    def test_seed_xor_selects_character(self):
        draws = itertools.cycle([0, 1, 2, 3])
        gen = PasswordGenerator(
            alphabet="aB3!",
            max_attempts=1,
            randbelow=lambda n: next(draws),
            token_bytes=lambda n: bytes(n),
            clock_ns=lambda: 1,
        )
        assert gen.generate(12) == "Ba!3" * 3

    def test_seed_buffer_size(self):
        token_bytes = MagicMock(side_effect=lambda n: bytes(n))
        PasswordGenerator(token_bytes=token_bytes).generate(12)
        token_bytes.assert_called_with(SEED_BUFFER_SIZE)


class TestMixPassphrase:
    def test_no_passphrase_returns_buffer(self):
        buf = b"\x01\x02\x03"
        assert mix_passphrase(buf, None) is buf
        assert mix_passphrase(buf, "") is buf

    def test_cyclic_xor(self):
        assert mix_passphrase(bytes(5), "ab") == b"ababa"

    def test_involution(self):
        buf = bytes(range(64))
        assert mix_passphrase(mix_passphrase(buf, "key"), "key") == buf

    def test_preserves_size(self):
        assert len(mix_passphrase(bytes(64), "x" * 200)) == 64
