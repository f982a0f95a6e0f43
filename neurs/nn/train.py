"""Drive a network through many rounds of training, keeping track of the loss as it goes"""

import logging
from typing import Optional, Sequence

from neurs.nn import network
from neurs.nn.matrix import Matrix

logger = logging.getLogger(__name__)


def train(nn: network.Network,
          features: Sequence[Matrix],
          labels: Sequence[Matrix],
          iterations: int = 5000,
          epochs: int = 1,
          display_update: int = 0,
          callback: Optional[network.ProgressCallback] = None) -> list[float]:
    """Train a network a few epochs at a time, recording the loss after every round.

    This is the loop a front-end would run once per frame, drawing the
    network and the loss curve in between calls.

    Args:
        nn (network.Network): the network to train, in place
        features (Sequence[Matrix]): inputs without a bias column
        labels (Sequence[Matrix]): targets, one per input
        iterations (int, optional): rounds of training. Defaults to 5000.
        epochs (int, optional): epochs per round. Defaults to 1.
        display_update (int, optional): passed through to Network.fit. Defaults to 0.
        callback (network.ProgressCallback, optional): called with (iteration, loss) after every round

    Returns:
        list[float]: the loss after every round
    """
    with_bias = [network.with_bias(x) for x in features]
    history = []
    for i in range(iterations):
        nn.fit(features, labels, epochs, display_update)
        current = nn.calculate_loss(with_bias, labels)
        logger.debug('[%d] current loss: %f', i, current)
        history.append(current)
        if callback is not None:
            callback(i, current)
    return history
