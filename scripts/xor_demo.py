"""Train a tiny network on XOR and print what it learned"""

from neurs.nn import network
from neurs.nn.matrix import Matrix
from neurs.settings import XorSettings, configure_logging


def run(settings: XorSettings) -> network.Network:
    features = [Matrix.from_vector(x) for x in settings.features]
    labels = [Matrix.from_vector(y) for y in settings.labels]

    xor = network.Network(settings.layers, settings.alpha, settings.seed)
    xor.fit(features, labels, settings.epochs, settings.display_update)

    for x in features:
        x = network.with_bias(x)
        print(f'[RESULT] input={x}, prediction={xor.predict(x)}')
    return xor


if __name__ == '__main__':
    configure_logging()
    run(XorSettings())
