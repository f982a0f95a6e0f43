"""A NN is a stack of weight matrices; in this case, it is called a multilayer perceptron because
every node in a layer is connected to every node in the next one.

Node biases are not stored separately. Instead the input gets an extra column
of 1s and every weight matrix gets an extra row, so the bias is just another
weight. Hidden layers also get an extra column in their weight matrix so the
next layer has an extra row to use as a bias too. That extra hidden value is
sigmoid(weighted sum), NOT a constant 1, so it's only an approximation of a
real bias. It works well enough for small networks and is kept as-is.
"""

import logging
from typing import Callable, Optional, Sequence, Union

import numpy as np

from neurs.nn import batch, loss, optimizer
from neurs.nn.activation import sigmoid, sigmoid_deriv
from neurs.nn.matrix import Matrix

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[int, float], None]


def with_bias(x: Matrix) -> Matrix:
    """Copy of x with a column of 1s on the end, ready to be fed to predict"""
    x = x.copy()
    x.add_col(1.0)
    return x


class Network():
    def __init__(self,
                 layers: Sequence[int],
                 alpha: float,
                 rng: Union[np.random.Generator, int, None] = None):
        """Create a new network with random weights

        Args:
            layers (Sequence[int]): width of every layer, input first and output last. e.g. [2, 2, 1]
            alpha (float): learning rate, how much the weights move on every training sample
            rng (np.random.Generator | int, optional): randomness for the starting weights, or a seed.
                Defaults to a fresh generator.
        """
        if len(layers) < 2:
            raise ValueError('a network needs at least an input and an output layer')
        if any(width < 1 for width in layers):
            raise ValueError(f'every layer needs at least one node, got {list(layers)}')
        if not alpha > 0:
            raise ValueError(f'learning rate must be positive, got {alpha}')

        rng = np.random.default_rng(rng)
        self.layers = list(layers)
        self.alpha = alpha
        self.loss = loss.HalfSquaredError()
        self.weights = []

        # one weight matrix for every pair of layers except the last,
        # each with an extra row and column for the biases
        for i in range(len(self.layers) - 2):
            self.weights.append(Matrix.from_dim(self.layers[i] + 1, self.layers[i + 1] + 1, rng))

        # the output layer has no bias of its own, so no extra column
        self.weights.append(Matrix.from_dim(self.layers[-2] + 1, self.layers[-1], rng))

    def predict(self, x: Matrix) -> Matrix:
        """Forward pass through the whole network

        x must already have the bias column on the end (see with_bias)
        """
        activation = x
        for weight in self.weights:
            activation = (activation @ weight).apply(sigmoid)
        return activation

    def calculate_loss(self, x_data: Sequence[Matrix], y_data: Sequence[Matrix]) -> float:
        """Sum of the loss over every sample, to measure how accurate the network is.

        The inputs must already have their bias column, like predict.
        """
        if len(x_data) != len(y_data):
            raise ValueError(f'got {len(x_data)} samples but {len(y_data)} targets')

        total = 0.0
        for x, y in zip(x_data, y_data):
            total += self.loss.loss(self.predict(x), y)
        return total

    def fit_partial(self, x: Matrix, y: Matrix):
        """One training step on a single sample: forward, backpropagate, update the weights.

        X = a @ w
        a' = sigmoid(X)
        dL/da' = a' - y                       (output layer)
        delta = dL/da' * sigmoid'(a')
        delta_prev = (delta @ w.T) * sigmoid'(a)
        dL/dw = a.T @ delta
        """
        # the first activation is the input itself
        activations = [x]
        for weight in self.weights:
            activations.append((activations[-1] @ weight).apply(sigmoid))

        prediction = activations[-1]
        deltas = [self.loss.grad(prediction, y) * prediction.apply(sigmoid_deriv)]

        # work backwards from the last hidden layer to the first
        for i in reversed(range(1, len(activations) - 1)):
            delta = deltas[-1] @ self.weights[i].T
            deltas.append(delta * activations[i].apply(sigmoid_deriv))
        deltas.reverse()

        optimizer.GradientDescent(self.alpha).step(self.weights, activations, deltas)

    def fit(self,
            x: Sequence[Matrix],
            y_data: Sequence[Matrix],
            epochs: int,
            display_update: int = 0,
            callback: Optional[ProgressCallback] = None):
        """Train the network on every sample, in order, for a number of epochs.

        Calling this again carries on from the current weights.

        Args:
            x (Sequence[Matrix]): inputs, WITHOUT the bias column, it's added here
            y_data (Sequence[Matrix]): targets, one per input
            epochs (int): number of passes over the whole dataset
            display_update (int, optional): report the loss on the first epoch and every
                display_update epochs after that. 0 turns it off. Defaults to 0.
            callback (ProgressCallback, optional): called with (epoch, loss) on every report
        """
        if len(x) != len(y_data):
            raise ValueError(f'got {len(x)} samples but {len(y_data)} targets')

        # a column of 1s on every input lets the biases train like any other weight
        x_data = [with_bias(item) for item in x]
        samples = batch.SampleIterator()

        for epoch in range(epochs):
            for features, target in samples(x_data, y_data):
                self.fit_partial(features, target)

            if display_update and (epoch == 0 or (epoch + 1) % display_update == 0):
                self._report(epoch, x_data, y_data, callback)

    def _report(self, epoch: int, x_data: list[Matrix], y_data: Sequence[Matrix],
                callback: Optional[ProgressCallback]):
        if callback is None and not logger.isEnabledFor(logging.INFO):
            return
        current = self.calculate_loss(x_data, y_data)
        logger.info('epoch=%d, loss=%f', epoch, current)
        if callback is not None:
            callback(epoch, current)
