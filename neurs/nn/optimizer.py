"""An optimizer updates the weights of the network based on the backpropagated deltas"""

from neurs.nn.matrix import Matrix


class Optimizer():
    def __init__(self, learning_rate: float = 0.01):
        self.lr = learning_rate

    def step(self, weights: list[Matrix], activations: list[Matrix], deltas: list[Matrix]):
        raise NotImplementedError


class GradientDescent(Optimizer):
    def step(self, weights: list[Matrix], activations: list[Matrix], deltas: list[Matrix]):
        """One gradient descent step, changing every weight matrix in place.

        The gradient for weights[i] is activations[i].T @ deltas[i], where
        activations[i] is whatever was fed into that weight matrix.
        """
        for weight, activation, delta in zip(weights, activations, deltas):
            weight += (activation.T @ delta).apply(lambda x: x * -self.lr)
