import numpy as np
import pytest

from catlearn.core import (
    ArchitecturalModel,
    BackwardError,
    DimensionMismatchError,
    FeedForwardNN,
    ForwardError,
    InputRangeError,
    LinearModel,
    Model,
    ModelError,
    TrainableModel,
    UpdateError,
)


@pytest.fixture
def rng():
    return np.random.default_rng(7)


@pytest.mark.parametrize("cls", [Model, TrainableModel, ArchitecturalModel])
def test_abstract_models_cannot_be_instantiated(cls):
    with pytest.raises(TypeError):
        cls()


@pytest.mark.parametrize(
    "cls, prefix",
    [
        (ModelError, "Model error"),
        (DimensionMismatchError, "Dimension mismatch"),
        (ForwardError, "Forward computation error"),
        (BackwardError, "Backward computation error"),
        (UpdateError, "Parameter update error"),
        (InputRangeError, "Input range error"),
    ],
)
def test_error_messages(cls, prefix):
    err = cls("details")
    assert str(err) == f"{prefix}: details"
    assert err.message == "details"
    assert isinstance(err, ModelError)


def test_linear_model_dimensions_and_count(rng):
    model = LinearModel(3, 2, rng=rng)
    assert model.dimensions == (3, 2)
    assert model.parameter_count() == 8
    assert len(model.parameters) == model.parameter_count()


def test_linear_model_initial_values(rng):
    model = LinearModel(4, 3, rng=rng)
    params = model.parameters
    assert np.all(np.abs(params[:12]) <= 0.005)
    assert np.array_equal(params[12:], np.zeros(3))


def test_linear_model_predict_with_set_parameters(rng):
    model = LinearModel(2, 2, rng=rng)
    model.parameters = [1.0, 0.0, 0.0, 1.0, 1.0, 2.0]
    assert np.allclose(model.predict([3.0, 4.0]), [4.0, 6.0])


def test_linear_model_zero_parameters_predict_zero(rng):
    model = LinearModel(3, 2, rng=rng)
    model.parameters = np.zeros(model.parameter_count())
    assert np.array_equal(model.predict([1.0, -2.0, 3.0]), np.zeros(2))


def test_parameters_round_trip(rng):
    model = LinearModel(2, 3, rng=rng)
    values = np.linspace(-1.0, 1.0, model.parameter_count())
    model.parameters = values
    assert np.array_equal(model.parameters, values)


def test_parameters_returns_copy(rng):
    model = FeedForwardNN(2, [3], 1, rng=rng)
    model.parameters = np.arange(model.parameter_count(), dtype=float)
    returned = model.parameters
    returned[:] = 99.0
    assert np.array_equal(model.parameters, np.arange(13, dtype=float))


def test_wrong_parameter_count_raises(rng):
    model = LinearModel(2, 1, rng=rng)
    before = model.parameters
    with pytest.raises(DimensionMismatchError, match="Expected 3 parameters, got 2"):
        model.parameters = [1.0, 2.0]
    assert np.array_equal(model.parameters, before)


def test_linear_model_wrong_input_dim(rng):
    model = LinearModel(3, 1, rng=rng)
    with pytest.raises(DimensionMismatchError, match="Expected input dim 3, got 2"):
        model.predict([1.0, 2.0])


def test_feedforward_parameter_count(rng):
    model = FeedForwardNN(2, [3], 1, rng=rng)
    assert model.parameter_count() == 13
    assert model.dimensions == (2, 1)


def test_feedforward_initial_biases_zero_and_weights_bounded(rng):
    model = FeedForwardNN(4, [], 2, rng=rng)
    params = model.parameters
    weights, biases = params[:8], params[8:]
    assert np.all(np.abs(weights) <= 1.0 / np.sqrt(4))
    assert np.array_equal(biases, np.zeros(2))


def test_feedforward_hidden_relu_clamps_negative(rng):
    model = FeedForwardNN(1, [1], 1, rng=rng)
    model.parameters = [-1.0, 0.0, 1.0, 5.0]
    assert np.allclose(model.predict([2.0]), [5.0])


def test_feedforward_output_layer_is_linear(rng):
    model = FeedForwardNN(1, [], 1, rng=rng)
    model.parameters = [1.0, -5.0]
    assert np.allclose(model.predict([0.0]), [-5.0])


def test_feedforward_round_trip(rng):
    model = FeedForwardNN(3, [4, 2], 2, rng=rng)
    values = np.arange(model.parameter_count(), dtype=float)
    model.parameters = values
    assert np.array_equal(model.parameters, values)


def test_feedforward_wrong_input_dim(rng):
    model = FeedForwardNN(3, [2], 1, rng=rng)
    with pytest.raises(DimensionMismatchError):
        model.predict([1.0])


def test_predict_batch_matches_predict(rng):
    model = FeedForwardNN(2, [3], 2, rng=rng)
    inputs = [np.array([0.1, 0.2]), np.array([-0.5, 0.7]), np.array([1.0, 1.0])]
    batch = model.predict_batch(inputs)
    assert len(batch) == 3
    for x, y in zip(inputs, batch):
        assert np.array_equal(model.predict(x), y)


def test_predict_batch_propagates_errors(rng):
    model = LinearModel(2, 1, rng=rng)
    with pytest.raises(DimensionMismatchError):
        model.predict_batch([[1.0, 2.0], [1.0]])


def test_seeded_models_are_reproducible():
    a = FeedForwardNN(3, [4], 2, rng=np.random.default_rng(1))
    b = FeedForwardNN(3, [4], 2, rng=np.random.default_rng(1))
    assert np.array_equal(a.parameters, b.parameters)