"""Teach a network one period of a sine wave, then plot the network and its loss curve.

With --interactive it keeps going afterwards: type an angle in radians and
the network answers with its guess for sin(angle).
"""

import argparse
import logging

import matplotlib.pyplot as plt

from neurs.demo import prompt, weight_style
from neurs.nn import network, train
from neurs.nn.matrix import Matrix
from neurs.settings import SineSettings, configure_logging

logger = logging.getLogger(__name__)


def draw_network(ax, nn: network.Network):
    """Every weight is a line between two nodes, every node is a dot"""
    x_spacing = 2.0
    y_spacing = 1.0

    for i, weights in enumerate(nn.weights):
        for source in range(weights.rows):
            for dest in range(weights.cols):
                colour, brightness = weight_style(float(weights.get_row(source)[dest]))
                ax.plot([x_spacing * i, x_spacing * (i + 1)],
                        [-y_spacing * source, -y_spacing * dest],
                        color=colour, linewidth=8 * brightness)

    for i, width in enumerate(nn.layers):
        ax.scatter([x_spacing * i] * width, [-y_spacing * j for j in range(width)],
                   s=100, color='white', zorder=3)

    ax.set_facecolor('black')
    ax.set_xticks([])
    ax.set_yticks([])


def draw_loss(ax, history: list[float]):
    ax.plot(history, color='red')
    ax.set_xlabel('iteration')
    ax.set_ylabel('loss')


def build_parser() -> argparse.ArgumentParser:
    defaults = SineSettings()
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument('--iterations', type=int, default=defaults.iterations)
    parser.add_argument('--samples', type=int, default=defaults.samples)
    parser.add_argument('--alpha', type=float, default=defaults.alpha)
    parser.add_argument('--seed', type=int, default=defaults.seed)
    parser.add_argument('--interactive', action='store_true', help='ask for angles once training is done')
    return parser


if __name__ == '__main__':
    configure_logging()
    args = build_parser().parse_args()
    settings = SineSettings(alpha=args.alpha, samples=args.samples,
                            iterations=args.iterations, seed=args.seed)

    x_data, y_data = settings.dataset()
    features = [Matrix.from_vector(x) for x in x_data]
    labels = [Matrix.from_vector(y) for y in y_data]

    sine = network.Network(settings.layers, settings.alpha, settings.seed)
    history = train.train(sine, features, labels,
                          iterations=settings.iterations,
                          callback=lambda i, loss: logger.info('|%d| current loss: %f', i, loss))

    fig, (net_ax, loss_ax) = plt.subplots(1, 2, figsize=(12, 5))
    draw_network(net_ax, sine)
    draw_loss(loss_ax, history)
    plt.show()

    if args.interactive:
        prompt(sine)
