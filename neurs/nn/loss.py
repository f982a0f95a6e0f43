"""Loss functions are used to train a NN, measuring the difference between predictions and targets."""

from neurs.nn.matrix import Matrix


class Loss():
    def loss(self, prediction: Matrix, target: Matrix) -> float:
        """From a prediction and its target, figure out how wrong we are

        Returns:
            float: wrongness
        """
        raise NotImplementedError

    def grad(self, prediction: Matrix, target: Matrix) -> Matrix:
        """The gradient of loss function with respect to the prediction"""
        raise NotImplementedError


class HalfSquaredError(Loss):
    def loss(self, prediction: Matrix, target: Matrix) -> float:
        # half the sum, not the mean, so the gradient is just the error
        return 0.5 * (prediction - target).apply(lambda x: x * x).sum()

    def grad(self, prediction: Matrix, target: Matrix) -> Matrix:
        return prediction - target
