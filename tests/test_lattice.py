"""
cryptorand Lattice Tests
CDT registry, discrete Gaussian sampling and the LWE-style sampler
"""

import pytest

from cryptorand.constants import DEFAULT_CDT_TABLES
from cryptorand.core.driver import run_sync
from cryptorand.errors import (
    EntropyUnavailableError,
    ErrorCode,
    InvalidParameterError,
    UnknownSigmaError,
)
from cryptorand.lattice.cdt import CDTRegistry, DiscreteGaussianSampler, get_default_registry
from cryptorand.lattice.sampler import OutputMode, rand_lattice, rand_lattice_async


# =============================================================================
# Test: CDT Registry
# =============================================================================

class TestRegistry:
    """Tests for CDTRegistry."""

    def test_default_tables(self):
        registry = get_default_registry()
        assert registry.sigmas() == [3.2, 178.56]
        assert registry.get(3.2) == DEFAULT_CDT_TABLES[3.2]
        assert 178.56 in registry

    def test_default_tables_non_increasing(self):
        for table in DEFAULT_CDT_TABLES.values():
            assert all(a >= b for a, b in zip(table, table[1:]))

    def test_unknown_sigma(self):
        with pytest.raises(UnknownSigmaError) as exc:
            get_default_registry().get(1.0)
        assert exc.value.code == ErrorCode.UNKNOWN_SIGMA
        assert exc.value.details["available"] == [3.2, 178.56]

    def test_register(self):
        registry = CDTRegistry()
        registry.register(2, [100, 50, 10])
        assert registry.get(2.0) == (100, 50, 10)
        assert registry.sigmas() == [2.0]

    @pytest.mark.parametrize("table", [[], [10, 20], [10, -1], [0, 0], [10, 5.5]])
    def test_register_rejects_bad_tables(self, table):
        with pytest.raises(InvalidParameterError):
            CDTRegistry().register(1.5, table)

    @pytest.mark.parametrize("sigma", [0, -1.0, "3.2", True])
    def test_register_rejects_bad_sigma(self, sigma):
        with pytest.raises(InvalidParameterError):
            CDTRegistry().register(sigma, [10, 5])

    def test_contains_non_number(self):
        assert "abc" not in get_default_registry()


# =============================================================================
# Test: Discrete Gaussian Sampler
# =============================================================================

class TestDiscreteGaussian:
    """Tests for CDT inversion."""

    def test_magnitude_lookup(self):
        sampler = DiscreteGaussianSampler([10, 6, 3, 1])
        assert sampler.sample_magnitude_from(0) == 3
        assert sampler.sample_magnitude_from(1) == 2
        assert sampler.sample_magnitude_from(2) == 2
        assert sampler.sample_magnitude_from(3) == 1
        assert sampler.sample_magnitude_from(5) == 1
        assert sampler.sample_magnitude_from(6) == 0
        assert sampler.sample_magnitude_from(9) == 0

    def test_magnitude_lookup_with_ties(self):
        sampler = DiscreteGaussianSampler([8, 4, 4, 2])
        assert sampler.sample_magnitude_from(3) == 2
        assert sampler.sample_magnitude_from(4) == 0

    def test_magnitude_out_of_range(self):
        sampler = DiscreteGaussianSampler([10, 6, 3, 1])
        with pytest.raises(InvalidParameterError):
            sampler.sample_magnitude_from(10)
        with pytest.raises(InvalidParameterError):
            sampler.sample_magnitude_from(-1)

    def test_samples_bounded_and_signed(self, counting_source):
        sampler = DiscreteGaussianSampler.for_sigma(3.2)
        tail = len(DEFAULT_CDT_TABLES[3.2]) - 1
        samples = [run_sync(sampler.sample(), counting_source) for _ in range(2000)]
        assert all(-tail <= s <= tail for s in samples)
        assert any(s > 0 for s in samples) and any(s < 0 for s in samples)
        assert abs(sum(samples) / len(samples)) < 1.0

    def test_for_unknown_sigma(self):
        with pytest.raises(UnknownSigmaError):
            DiscreteGaussianSampler.for_sigma(7.7)


# =============================================================================
# Test: Lattice Sampler
# =============================================================================

class TestRandLattice:
    """Tests for rand_lattice."""

    def test_unknown_sigma_fails_deterministically(self, failing_source):
        for _ in range(3):
            with pytest.raises(UnknownSigmaError):
                rand_lattice(sigma=2.5, source=failing_source)

    @pytest.mark.timeout(120)
    def test_1000_samples_in_unit_interval(self):
        samples = [rand_lattice() for _ in range(1000)]
        assert all(isinstance(s, float) and 0.0 <= s < 1.0 for s in samples)
        assert len(set(samples)) > 1

    def test_integer_mode(self):
        for _ in range(50):
            value = rand_lattice(dimension=64, modulus=97, output_mode="integer")
            assert isinstance(value, int)
            assert 0 <= value < 97

    def test_lattice_scale_parameters(self):
        value = rand_lattice(1024, 16777213, 178.56, OutputMode.NORMALIZED)
        assert 0.0 <= value < 1.0

    def test_zero_entropy_is_deterministic(self, zero_source):
        """
        Zero bytes give s = (-1, ...), a = (0, ...), u = 0 -> magnitude 13,
        positive sign: b = 13.
        """
        assert rand_lattice(output_mode="integer", source=zero_source) == 13
        assert rand_lattice(source=zero_source) == 13 / 12289

    def test_custom_registry(self, zero_source):
        registry = CDTRegistry({5.0: [100, 40, 10]})
        value = rand_lattice(16, 101, 5.0, "integer", registry=registry, source=zero_source)
        assert value == 2
        with pytest.raises(UnknownSigmaError):
            rand_lattice(sigma=3.2, registry=registry)

    def test_normalized_below_one_for_huge_modulus(self, stream_source):
        """
        s = (-1,), a = (1,), u = 1 -> magnitude 0: b = q - 1, which a plain
        float division rounds up to 1.0 when q > 2^53.
        """
        modulus = (1 << 60) + 1
        registry = CDTRegistry({5.0: [2, 1]})
        entropy = b"\x00" + (1).to_bytes(8, "big") + b"\x01\x00"

        b = rand_lattice(1, modulus, 5.0, "integer", registry=registry,
                         source=stream_source(entropy))
        assert b == modulus - 1

        value = rand_lattice(1, modulus, 5.0, "normalized", registry=registry,
                             source=stream_source(entropy))
        assert 0.0 <= value < 1.0

    @pytest.mark.parametrize("kwargs", [
        {"dimension": 0},
        {"dimension": 2.0},
        {"modulus": 1},
        {"modulus": True},
        {"output_mode": "hex"},
    ])
    def test_invalid_parameters(self, kwargs, failing_source):
        with pytest.raises(InvalidParameterError):
            rand_lattice(source=failing_source, **kwargs)

    def test_entropy_failure_propagates(self, failing_source):
        with pytest.raises(EntropyUnavailableError):
            rand_lattice(source=failing_source)

    @pytest.mark.asyncio
    async def test_async_matches_sync(self, zero_source):
        assert await rand_lattice_async(output_mode="integer", source=zero_source) == 13

    @pytest.mark.asyncio
    async def test_async_range(self):
        for _ in range(20):
            value = await rand_lattice_async(dimension=128)
            assert 0.0 <= value < 1.0

    @pytest.mark.asyncio
    async def test_async_unknown_sigma(self):
        with pytest.raises(UnknownSigmaError):
            await rand_lattice_async(sigma=0.5)
