"""
cryptorand Configuration and Error Tests
"""

import json
import logging
from logging.handlers import RotatingFileHandler

import pytest
from unittest.mock import patch

from cryptorand.config import (
    LatticeConfig,
    LogConfig,
    PrimeConfig,
    RandConfig,
    SieveConfig,
    setup_logging,
)
from cryptorand.errors import (
    AttemptsExhaustedError,
    CryptoRandError,
    DeadlineExceededError,
    EntropyUnavailableError,
    ErrorCode,
    InvalidBitLengthError,
    InvalidIterationsError,
    InvalidParameterError,
    NoInverseError,
    UnknownSigmaError,
)
from cryptorand.generator import CryptoRand


# =============================================================================
# Test: Configuration
# =============================================================================

class TestRandConfig:
    """Tests for RandConfig."""

    def test_defaults(self):
        config = RandConfig()
        assert config.prime.iterations == 40
        assert config.prime.policy == "standard"
        assert config.sieve.limit == 65536
        assert config.sieve.reuse_threshold == 1000
        assert config.lattice.dimension == 512
        assert config.lattice.modulus == 12289
        assert config.lattice.sigma == 3.2
        assert config.lattice.output_mode == "normalized"
        assert config.validate() == []

    def test_validation_errors(self):
        config = RandConfig(
            prime=PrimeConfig(iterations=0, policy="fips", max_attempts=0, deadline=-1.0),
            sieve=SieveConfig(limit=1, reuse_threshold=-5),
            lattice=LatticeConfig(dimension=0, modulus=1, sigma=0.0, output_mode="hex"),
            log=LogConfig(level="LOUD"),
        )
        errors = config.validate()
        assert len(errors) == 11
        assert any("policy" in e for e in errors)
        assert any("output mode" in e for e in errors)

    def test_wrongly_typed_file_is_listed(self, tmp_path):
        path = tmp_path / "typed.json"
        path.write_text(json.dumps({
            "prime": {"iterations": "40", "max_attempts": True, "deadline": "soon"},
            "sieve": {"limit": "big", "reuse_threshold": 1.5},
            "lattice": {"dimension": "512", "modulus": 12289.0, "sigma": "3.2"},
            "log": {"level": 5},
        }))
        config = RandConfig.load(str(path))

        errors = config.validate()
        assert len(errors) == 9
        assert any("'40'" in e for e in errors)
        assert any("Unknown log level: 5" in e for e in errors)

        with pytest.raises(InvalidParameterError):
            CryptoRand(config)

    def test_save_load_round_trip(self, tmp_path):
        path = tmp_path / "cryptorand.json"
        config = RandConfig(
            prime=PrimeConfig(iterations=24, policy="enhanced", max_attempts=500, deadline=2.5),
            lattice=LatticeConfig(dimension=1024, modulus=16777213, sigma=178.56),
        )
        config.save(str(path))

        loaded = RandConfig.load(str(path))
        assert loaded == config
        assert loaded.to_dict() == config.to_dict()

    def test_load_partial_file(self, tmp_path):
        path = tmp_path / "partial.json"
        path.write_text(json.dumps({"sieve": {"limit": 10000}}))
        loaded = RandConfig.load(str(path))
        assert loaded.sieve.limit == 10000
        assert loaded.sieve.reuse_threshold == 1000
        assert loaded.prime == PrimeConfig()

    def test_to_dict_sections(self):
        assert set(RandConfig().to_dict()) == {"prime", "sieve", "lattice", "log"}


class TestSetupLogging:
    """Tests for setup_logging."""

    def test_stream_only(self):
        with patch("logging.basicConfig") as basic:
            setup_logging(LogConfig(level="debug"))
        kwargs = basic.call_args.kwargs
        assert kwargs["level"] == logging.DEBUG
        assert len(kwargs["handlers"]) == 1

    def test_rotating_file(self, tmp_path):
        log_file = tmp_path / "cryptorand.log"
        with patch("logging.basicConfig") as basic:
            setup_logging(LogConfig(file=str(log_file), max_size_mb=1, backup_count=2))
        handlers = basic.call_args.kwargs["handlers"]
        file_handler = handlers[-1]
        try:
            assert isinstance(file_handler, RotatingFileHandler)
            assert file_handler.maxBytes == 1024 * 1024
            assert file_handler.backupCount == 2
        finally:
            file_handler.close()

    def test_unknown_level_falls_back_to_info(self):
        with patch("logging.basicConfig") as basic:
            setup_logging(LogConfig(level="nonsense"))
        assert basic.call_args.kwargs["level"] == logging.INFO


# =============================================================================
# Test: Errors
# =============================================================================

class TestErrors:
    """Tests for the error taxonomy."""

    @pytest.mark.parametrize("error, code", [
        (InvalidParameterError("x"), ErrorCode.INVALID_PARAMETER),
        (InvalidBitLengthError(1), ErrorCode.INVALID_BIT_LENGTH),
        (InvalidIterationsError(0), ErrorCode.INVALID_ITERATIONS),
        (NoInverseError(4, 8), ErrorCode.NO_INVERSE),
        (EntropyUnavailableError(), ErrorCode.ENTROPY_UNAVAILABLE),
        (AttemptsExhaustedError("prime", 10), ErrorCode.ATTEMPTS_EXHAUSTED),
        (DeadlineExceededError("prime", 1.0, 3), ErrorCode.DEADLINE_EXCEEDED),
        (UnknownSigmaError(1.0, [3.2]), ErrorCode.UNKNOWN_SIGMA),
    ])
    def test_codes(self, error, code):
        assert isinstance(error, CryptoRandError)
        assert error.code == code
        assert str(error).startswith(f"[{code.value}]")

    def test_code_values(self):
        assert ErrorCode.INVALID_PARAMETER == 1001
        assert ErrorCode.NO_INVERSE == 2001
        assert ErrorCode.ENTROPY_UNAVAILABLE == 3001
        assert ErrorCode.DEADLINE_EXCEEDED == 4002
        assert ErrorCode.UNKNOWN_SIGMA == 5001

    def test_to_dict(self):
        data = InvalidParameterError("modulus", "must be positive").to_dict()
        assert data == {
            "code": 1001,
            "name": "INVALID_PARAMETER",
            "message": "Invalid parameter: modulus - must be positive",
            "details": {"parameter": "modulus"},
        }

    def test_to_dict_without_details(self):
        assert "details" not in EntropyUnavailableError().to_dict()

    def test_json_serializable(self):
        json.dumps(NoInverseError(4, 8).to_dict())
        json.dumps(UnknownSigmaError(1.0, [178.56, 3.2]).to_dict())
