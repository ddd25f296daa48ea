"""Unit tests for codec and binding configuration."""

from __future__ import annotations

import pytest

from cloakid import (
    BindingOptions,
    CloakIdConfig,
    CodecOptions,
    FieldBindingPolicy,
    NumericKind,
    OptionsError,
    SqidsStringCodec,
)

SQIDS_DEFAULT_ALPHABET = "abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"


class TestCodecOptions:
    """Test CodecOptions validation."""

    def test_defaults(self) -> None:
        """Test default values."""
        options = CodecOptions()
        assert options.min_length == 0
        assert options.alphabet is None

    @pytest.mark.parametrize("min_length", [0, 1, 5, 100])
    def test_valid_min_length(self, min_length: int) -> None:
        """Test valid minimum lengths."""
        assert CodecOptions(min_length=min_length).min_length == min_length

    @pytest.mark.parametrize("min_length", [-1, -10, -100])
    def test_negative_min_length(self, min_length: int) -> None:
        """Test negative minimum lengths are rejected."""
        with pytest.raises(OptionsError, match="min_length must be 0 or greater"):
            CodecOptions(min_length=min_length)

    @pytest.mark.parametrize("min_length", [1.5, "3", True])
    def test_non_integer_min_length(self, min_length: object) -> None:
        """Test non-integer minimum lengths are rejected."""
        with pytest.raises(OptionsError):
            CodecOptions(min_length=min_length)  # type: ignore[arg-type]

    @pytest.mark.parametrize(
        "alphabet",
        ["abc", "abcdefghijklmnopqrstuvwxyz", "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789", "!@#$%^&*()"],
    )
    def test_valid_alphabet(self, alphabet: str) -> None:
        """Test valid alphabets."""
        assert CodecOptions(alphabet=alphabet).alphabet == alphabet

    def test_sqids_default_alphabet(self) -> None:
        """Test the sqids default alphabet is accepted."""
        assert CodecOptions(alphabet=SQIDS_DEFAULT_ALPHABET).alphabet == SQIDS_DEFAULT_ALPHABET

    @pytest.mark.parametrize("alphabet", ["", "   ", "\t", "\n"])
    def test_empty_or_whitespace_alphabet(self, alphabet: str) -> None:
        """Test empty and whitespace-only alphabets are rejected."""
        with pytest.raises(OptionsError, match="Alphabet cannot be empty or whitespace"):
            CodecOptions(alphabet=alphabet)

    @pytest.mark.parametrize("alphabet", ["a", "ab"])
    def test_short_alphabet(self, alphabet: str) -> None:
        """Test alphabets under 3 characters are rejected."""
        with pytest.raises(OptionsError, match="at least 3 characters"):
            CodecOptions(alphabet=alphabet)

    @pytest.mark.parametrize("alphabet", ["aab", "abca", "AAA", "123321"])
    def test_duplicate_characters(self, alphabet: str) -> None:
        """Test alphabets with duplicates are rejected."""
        with pytest.raises(OptionsError, match="duplicate character"):
            CodecOptions(alphabet=alphabet)

    @pytest.mark.parametrize("alphabet", ["ab c", "abc\t", "ab\nc", "a\rb\nc"])
    def test_whitespace_characters(self, alphabet: str) -> None:
        """Test alphabets with whitespace are rejected."""
        with pytest.raises(OptionsError, match="whitespace character"):
            CodecOptions(alphabet=alphabet)

    def test_non_printable_character(self) -> None:
        """Test alphabets with control characters are rejected."""
        with pytest.raises(OptionsError, match="non-printable"):
            CodecOptions(alphabet="abc\x00")

    def test_options_error_is_value_error(self) -> None:
        """Test OptionsError can be caught as ValueError."""
        with pytest.raises(ValueError):
            CodecOptions(alphabet="ab")

    def test_immutable(self) -> None:
        """Test options cannot be changed after construction."""
        options = CodecOptions(min_length=4)
        with pytest.raises(AttributeError):
            options.min_length = 8  # type: ignore[misc]

    def test_merged(self) -> None:
        """Test overrides replace only the given values."""
        base = CodecOptions(min_length=4, alphabet="abcdef")
        assert base.merged(min_length=10) == CodecOptions(min_length=10, alphabet="abcdef")
        assert base.merged(alphabet="xyz") == CodecOptions(min_length=4, alphabet="xyz")
        assert base.merged() == base


class TestSqidsConstraints:
    """Test options the sqids library itself rejects fail at construction."""

    def test_min_length_above_library_limit(self) -> None:
        """Test sqids' minimum length limit surfaces as OptionsError."""
        with pytest.raises(OptionsError):
            SqidsStringCodec(NumericKind.INT32, CodecOptions(min_length=1000))

    def test_multibyte_alphabet(self) -> None:
        """Test sqids rejects multibyte alphabets."""
        with pytest.raises(OptionsError):
            SqidsStringCodec(NumericKind.INT32, CodecOptions(alphabet="abcé"))


class TestBindingOptions:
    """Test BindingOptions."""

    def test_fallback_disabled_by_default(self) -> None:
        """Test numeric fallback is off unless configured."""
        assert BindingOptions().allow_numeric_fallback is False
        assert FieldBindingPolicy().allow_numeric_fallback is False

    def test_non_bool_rejected(self) -> None:
        """Test truthy non-bool values are rejected."""
        with pytest.raises(OptionsError):
            BindingOptions(allow_numeric_fallback="yes")  # type: ignore[arg-type]


class TestCloakIdConfig:
    """Test the bundled configuration surface."""

    def test_defaults(self) -> None:
        """Test defaults build default options and a strict policy."""
        config = CloakIdConfig()
        assert config.codec_options() == CodecOptions()
        assert config.binding_policy().allow_numeric_fallback is False

    def test_fails_fast(self) -> None:
        """Test invalid values fail at construction."""
        with pytest.raises(OptionsError):
            CloakIdConfig(alphabet="aab")
        with pytest.raises(OptionsError):
            CloakIdConfig(min_length=-1)

    def test_from_env(self) -> None:
        """Test reading all variables."""
        config = CloakIdConfig.from_env(
            {
                "CLOAKID_MIN_LENGTH": "8",
                "CLOAKID_ALPHABET": "abcdefghij",
                "CLOAKID_ALLOW_NUMERIC_FALLBACK": "true",
            }
        )
        assert config.min_length == 8
        assert config.alphabet == "abcdefghij"
        assert config.allow_numeric_fallback is True
        assert config.binding_policy().allow_numeric_fallback is True

    def test_from_env_empty(self) -> None:
        """Test missing variables fall back to defaults."""
        assert CloakIdConfig.from_env({}) == CloakIdConfig()

    @pytest.mark.parametrize("value", ["1", "yes", "ON", "True"])
    def test_from_env_truthy(self, value: str) -> None:
        """Test accepted truthy spellings."""
        config = CloakIdConfig.from_env({"CLOAKID_ALLOW_NUMERIC_FALLBACK": value})
        assert config.allow_numeric_fallback is True

    @pytest.mark.parametrize(
        "environ",
        [
            {"CLOAKID_MIN_LENGTH": "six"},
            {"CLOAKID_MIN_LENGTH": "-2"},
            {"CLOAKID_ALPHABET": "ab"},
            {"CLOAKID_ALLOW_NUMERIC_FALLBACK": "maybe"},
        ],
    )
    def test_from_env_malformed(self, environ: dict) -> None:
        """Test malformed variables raise OptionsError."""
        with pytest.raises(OptionsError):
            CloakIdConfig.from_env(environ)
