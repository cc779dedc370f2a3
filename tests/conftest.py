import numpy as np
import pytest

from brownsim.params import SimulationRequest, UserParameters
from brownsim.transform import ChartRequest, Rect


@pytest.fixture(autouse=True)
def _stable_seed():
    # Keep global state stable for any code that still touches np.random.*
    np.random.seed(42)


@pytest.fixture
def plot_area():
    """Plot area matching an 800x480 canvas with default margins."""
    return Rect(64.0, 20.0, 716.0, 416.0)


@pytest.fixture
def basic_request():
    """Small annual-scale request with three paths."""
    return SimulationRequest(
        initial_value=100.0,
        step_mean=0.0002,
        step_volatility=0.01,
        num_steps=50,
        num_paths=3,
    )


@pytest.fixture
def user_params():
    """Default user parameters."""
    return UserParameters()


@pytest.fixture
def three_series():
    """Three short series with distinct ranges."""
    return [
        [1.0, 2.0, 3.0, 4.0],
        [4.0, 3.0, 2.0, 1.0],
        [2.0, 2.5, 2.0, 2.5],
    ]


@pytest.fixture
def chart_request(three_series, plot_area):
    """Chart request over three series with a two-color palette."""
    return ChartRequest(
        series=three_series,
        plot_area=plot_area,
        colors=("#111111", "#222222"),
    )
