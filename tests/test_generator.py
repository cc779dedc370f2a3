import numpy as np
import pytest
from scipy import stats

from brownsim.generator import generate_paths, make_rng, simulate_log_increments
from brownsim.params import InvalidArgument, SimulationRequest


class TestMakeRng:
    """Test random source resolution"""

    def test_generator_passthrough(self):
        """Test an existing Generator is returned unchanged"""
        g = np.random.default_rng(1)
        assert make_rng(g) is g

    def test_int_seed_reproducible(self):
        """Test integer seeds build equal streams"""
        assert make_rng(7).random() == make_rng(7).random()

    def test_seed_sequence(self):
        """Test SeedSequence builds a Generator"""
        assert isinstance(make_rng(np.random.SeedSequence(3)), np.random.Generator)

    def test_none_builds_fresh_generator(self):
        """Test None gives a new generator each time"""
        assert make_rng(None) is not make_rng(None)

    @pytest.mark.parametrize("bad", ["seed", 1.5, True, -1])
    def test_invalid_sources(self, bad):
        """Test unsupported random sources are rejected"""
        with pytest.raises(InvalidArgument):
            make_rng(bad)


class TestGeneratePaths:
    """Test lognormal path generation"""

    def test_path_count_and_length(self, basic_request):
        """Test number and length of paths"""
        paths = generate_paths(basic_request, rng=1)
        assert len(paths) == basic_request.num_paths
        for p in paths:
            assert p.shape == (basic_request.num_steps + 1,)
            assert p.dtype == np.float64

    def test_first_value_is_initial(self, basic_request):
        """Test every path starts at the initial value"""
        for p in generate_paths(basic_request, rng=2):
            assert p[0] == basic_request.initial_value

    def test_values_strictly_positive(self):
        """Test a high-volatility walk never crosses zero"""
        req = SimulationRequest(1.0, -0.5, 2.0, num_steps=200, num_paths=20)
        paths = np.array(generate_paths(req, rng=3))
        assert np.all(paths > 0)

    def test_deterministic_under_seed(self, basic_request):
        """Test same seed gives byte-identical output"""
        a = generate_paths(basic_request, rng=42)
        b = generate_paths(basic_request, rng=42)
        for x, y in zip(a, b):
            assert x.tobytes() == y.tobytes()

    def test_different_seeds_differ(self, basic_request):
        """Test different seeds give different paths"""
        a = generate_paths(basic_request, rng=1)
        b = generate_paths(basic_request, rng=2)
        assert not np.array_equal(a[0], b[0])

    def test_paths_are_independent(self, basic_request):
        """Test paths within a batch are not copies of each other"""
        paths = generate_paths(basic_request, rng=5)
        assert not np.array_equal(paths[0], paths[1])

    def test_zero_variance_is_flat(self):
        """Test zero mean and volatility keep the initial value"""
        req = SimulationRequest(initial_value=100.0, step_mean=0.0, step_volatility=0.0, num_steps=5, num_paths=1)
        (path,) = generate_paths(req, rng=0)
        assert path.tolist() == [100.0] * 6

    def test_pure_drift(self):
        """Test zero volatility gives exponential growth"""
        req = SimulationRequest(10.0, 0.1, 0.0, num_steps=4, num_paths=2)
        for p in generate_paths(req, rng=0):
            np.testing.assert_allclose(p, 10.0 * np.exp(0.1 * np.arange(5)))

    def test_recurrence_matches_increments(self, basic_request):
        """Test value[t] = value[t-1] * exp(m + s*Z) with the same draws"""
        inc = simulate_log_increments(basic_request, np.random.default_rng(11))
        paths = generate_paths(basic_request, rng=11)
        for p, row in zip(paths, inc):
            expected = [basic_request.initial_value]
            for d in row:
                expected.append(expected[-1] * np.exp(d))
            np.testing.assert_allclose(p, expected, rtol=1e-12)

    def test_paths_are_read_only(self, basic_request):
        """Test returned series cannot be mutated"""
        (p, *_) = generate_paths(basic_request, rng=1)
        with pytest.raises(ValueError):
            p[0] = 1.0

    def test_log_returns_are_normal(self):
        """Test log increments follow N(m, s^2)"""
        req = SimulationRequest(50.0, 0.001, 0.02, num_steps=5000, num_paths=1)
        (p,) = generate_paths(req, rng=123)
        log_ret = np.diff(np.log(p))
        _, pvalue = stats.kstest(log_ret, "norm", args=(0.001, 0.02))
        assert pvalue > 0.001

    def test_rejects_non_request(self):
        """Test a plain dict is not accepted"""
        with pytest.raises(InvalidArgument, match="SimulationRequest"):
            generate_paths({"initial_value": 1.0}, rng=0)

    def test_shared_generator_advances(self, basic_request):
        """Test a passed Generator is consumed, not copied"""
        g = np.random.default_rng(9)
        a = generate_paths(basic_request, rng=g)
        b = generate_paths(basic_request, rng=g)
        assert not np.array_equal(a[0], b[0])
