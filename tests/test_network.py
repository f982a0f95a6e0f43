"""
test_network.py
~~~~~~~~~~~~~~~

Unit and integration tests for the multilayer perceptron.
"""

import logging

import numpy as np
import pytest

from neurs.nn.errors import DimensionMismatch
from neurs.nn.matrix import Matrix
from neurs.nn.network import Network, with_bias


XOR_FEATURES = [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]]
XOR_LABELS = [[0.0], [1.0], [1.0], [0.0]]


@pytest.fixture
def xor_data():
    features = [Matrix.from_vector(x) for x in XOR_FEATURES]
    labels = [Matrix.from_vector(y) for y in XOR_LABELS]
    return features, labels


@pytest.fixture
def small_network():
    """A seeded 2-2-1 network, the same one every time."""
    return Network([2, 2, 1], 0.5, rng=np.random.default_rng(42))


def snapshot(network):
    return [w.copy() for w in network.weights]


def reference_step(weights, x, y, alpha):
    """Textbook single sample backprop in float64, to check fit_partial against."""
    ws = [w.data.reshape(w.shape).astype(np.float64) for w in weights]
    activations = [x.data.reshape(x.shape).astype(np.float64)]
    for w in ws:
        activations.append(1 / (1 + np.exp(-(activations[-1] @ w))))

    out = activations[-1]
    target = y.data.reshape(y.shape).astype(np.float64)
    deltas = [(out - target) * out * (1 - out)]
    for i in range(len(activations) - 2, 0, -1):
        a = activations[i]
        deltas.append((deltas[-1] @ ws[i].T) * a * (1 - a))
    deltas.reverse()

    return [w - alpha * (a.T @ d) for w, a, d in zip(ws, activations, deltas)]


@pytest.mark.unit
class TestConstruction:
    """Architecture and weight shapes."""

    def test_weight_shapes_follow_bias_padding(self):
        network = Network([1, 3, 3, 1], 0.2, rng=0)
        assert [w.shape for w in network.weights] == [(2, 4), (4, 4), (4, 1)]

    def test_two_layer_network_has_one_weight_matrix(self):
        network = Network([3, 2], 0.1, rng=0)
        assert [w.shape for w in network.weights] == [(4, 2)]

    def test_keeps_layers_and_alpha(self):
        network = Network((2, 5, 1), 0.3, rng=0)
        assert network.layers == [2, 5, 1]
        assert network.alpha == 0.3

    def test_same_seed_same_weights(self):
        a = Network([2, 4, 1], 0.5, rng=np.random.default_rng(3))
        b = Network([2, 4, 1], 0.5, rng=3)
        assert a.weights == b.weights

    def test_weights_start_in_range(self, small_network):
        for w in small_network.weights:
            assert np.all(w.data >= -1.0)
            assert np.all(w.data < 1.0)

    @pytest.mark.parametrize('layers', [[], [3], [2, 0, 1]])
    def test_bad_architecture_raises(self, layers):
        with pytest.raises(ValueError):
            Network(layers, 0.5)

    @pytest.mark.parametrize('alpha', [0.0, -0.1, float('nan')])
    def test_bad_learning_rate_raises(self, alpha):
        with pytest.raises(ValueError):
            Network([2, 1], alpha)


@pytest.mark.unit
class TestPredict:
    """Forward pass and loss."""

    def test_output_shape(self, small_network):
        prediction = small_network.predict(Matrix.from_vector([0.0, 1.0, 1.0]))
        assert prediction.shape == (1, 1)
        assert 0.0 < prediction.data[0] < 1.0

    def test_predict_does_not_change_weights(self, small_network):
        before = snapshot(small_network)
        small_network.predict(Matrix.from_vector([1.0, 1.0, 1.0]))
        assert small_network.weights == before

    def test_missing_bias_column_raises(self, small_network):
        with pytest.raises(DimensionMismatch):
            small_network.predict(Matrix.from_vector([1.0, 1.0]))

    def test_with_bias_copies(self):
        x = Matrix.from_vector([0.5, 0.25])
        biased = with_bias(x)
        assert biased == Matrix.from_vector([0.5, 0.25, 1.0])
        assert x.cols == 2

    def test_loss_is_zero_when_predictions_match(self, small_network, xor_data):
        features, _ = xor_data
        inputs = [with_bias(x) for x in features]
        targets = [small_network.predict(x) for x in inputs]
        assert small_network.calculate_loss(inputs, targets) == 0.0

    def test_loss_is_positive_otherwise(self, small_network, xor_data):
        features, labels = xor_data
        inputs = [with_bias(x) for x in features]
        assert small_network.calculate_loss(inputs, labels) > 0.0

    def test_loss_is_half_sum_of_squares(self, small_network):
        x = Matrix.from_vector([1.0, 0.0, 1.0])
        y = Matrix.from_vector([1.0])
        prediction = float(small_network.predict(x).data[0])
        expected = 0.5 * (prediction - 1.0) ** 2
        assert small_network.calculate_loss([x], [y]) == pytest.approx(expected, rel=1e-5)

    def test_loss_with_missing_targets_raises(self, small_network, xor_data):
        features, labels = xor_data
        inputs = [with_bias(x) for x in features]
        with pytest.raises(ValueError):
            small_network.calculate_loss(inputs, labels[:2])

    def test_loss_is_summed_not_averaged(self, small_network):
        x = Matrix.from_vector([1.0, 0.0, 1.0])
        y = Matrix.from_vector([1.0])
        single = small_network.calculate_loss([x], [y])
        assert small_network.calculate_loss([x, x, x], [y, y, y]) == pytest.approx(3 * single, rel=1e-5)


@pytest.mark.unit
class TestFit:
    """Backpropagation and the training loop."""

    def test_fit_partial_matches_textbook_backprop(self):
        network = Network([2, 3, 2], 0.5, rng=11)
        x = Matrix.from_vector([0.3, -0.7, 1.0])
        y = Matrix.from_vector([1.0, 0.0])
        expected = reference_step(network.weights, x, y, network.alpha)

        network.fit_partial(x, y)

        for w, e in zip(network.weights, expected):
            np.testing.assert_allclose(w.data.reshape(w.shape), e, rtol=1e-4, atol=1e-6)

    def test_fit_partial_deep_network_matches_textbook_backprop(self):
        network = Network([1, 3, 3, 1], 0.2, rng=5)
        x = Matrix.from_vector([0.25, 1.0])
        y = Matrix.from_vector([0.8])
        expected = reference_step(network.weights, x, y, network.alpha)

        network.fit_partial(x, y)

        for w, e in zip(network.weights, expected):
            np.testing.assert_allclose(w.data.reshape(w.shape), e, rtol=1e-4, atol=1e-6)

    def test_zero_epochs_changes_nothing(self, small_network, xor_data):
        features, labels = xor_data
        inputs = [with_bias(x) for x in features]
        before = snapshot(small_network)
        loss_before = small_network.calculate_loss(inputs, labels)

        small_network.fit(features, labels, epochs=0, display_update=1)

        assert small_network.weights == before
        assert small_network.calculate_loss(inputs, labels) == loss_before

    def test_fit_does_not_touch_inputs(self, small_network, xor_data):
        features, labels = xor_data
        small_network.fit(features, labels, epochs=1)
        assert all(x.cols == 2 for x in features)

    def test_fit_twice_continues_training(self, xor_data):
        """Two calls of n epochs are the same as one call of 2n."""
        features, labels = xor_data
        a = Network([2, 2, 1], 0.5, rng=8)
        b = Network([2, 2, 1], 0.5, rng=8)

        a.fit(features, labels, epochs=3)
        a.fit(features, labels, epochs=3)
        b.fit(features, labels, epochs=6)

        assert a.weights == b.weights

    def test_reporting_does_not_change_results(self, xor_data):
        features, labels = xor_data
        quiet = Network([2, 2, 1], 0.5, rng=21)
        chatty = Network([2, 2, 1], 0.5, rng=21)

        quiet.fit(features, labels, epochs=4)
        chatty.fit(features, labels, epochs=4, display_update=1, callback=lambda epoch, loss: None)

        assert quiet.weights == chatty.weights

    def test_report_cadence(self, small_network, xor_data):
        features, labels = xor_data
        reports = []
        small_network.fit(features, labels, epochs=7, display_update=3,
                          callback=lambda epoch, loss: reports.append(epoch))
        assert reports == [0, 2, 5]

    def test_report_is_logged(self, small_network, xor_data, caplog):
        features, labels = xor_data
        with caplog.at_level(logging.INFO, logger='neurs.nn.network'):
            small_network.fit(features, labels, epochs=2, display_update=2)
        messages = [r.getMessage() for r in caplog.records]
        assert len(messages) == 2
        assert messages[0].startswith('epoch=0, loss=')

    def test_training_lowers_the_loss(self, small_network):
        features = [Matrix.from_vector([0.0, 0.0]), Matrix.from_vector([1.0, 1.0])]
        labels = [Matrix.from_vector([0.0]), Matrix.from_vector([1.0])]
        inputs = [with_bias(x) for x in features]
        before = small_network.calculate_loss(inputs, labels)
        small_network.fit(features, labels, epochs=500)
        assert small_network.calculate_loss(inputs, labels) < before

    def test_mismatched_samples_raise(self, small_network, xor_data):
        features, labels = xor_data
        with pytest.raises(ValueError):
            small_network.fit(features, labels[:3], epochs=1)


def _learns_xor(seed, features, labels, rounds=8, epochs=5000):
    network = Network([2, 2, 1], 0.5, rng=seed)
    for _ in range(rounds):
        network.fit(features, labels, epochs)
        errors = [abs(float(network.predict(with_bias(x)).data[0]) - float(y.data[0]))
                  for x, y in zip(features, labels)]
        if max(errors) < 0.1:
            return True
    return False


@pytest.mark.slow
def test_learns_xor(xor_data):
    """Some starting weights get stuck in a local minimum, so allow a few seeds."""
    features, labels = xor_data
    assert any(_learns_xor(seed, features, labels) for seed in range(5))
