"""The activation used by every layer of the network, and its derivative."""

import numpy as np

from neurs.nn.matrix import DTYPE


def sigmoid(x: float) -> np.float32:
    """1 / (1 + e^-x), squashing any input into (0, 1)

    Very negative inputs overflow e^-x to inf, which just gives 0.
    """
    with np.errstate(over='ignore'):
        return DTYPE(1.0) / (DTYPE(1.0) + np.exp(-DTYPE(x)))


def sigmoid_deriv(y: float) -> np.float32:
    """Derivative of the sigmoid, given y that has ALREADY been through sigmoid.

    if y = sigmoid(x) then dy/dx = y * (1 - y), so there's no need to keep the
    weighted sums around during training, only the activations.
    """
    y = DTYPE(y)
    return y * (DTYPE(1.0) - y)
