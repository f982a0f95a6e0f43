"""Need a mechanism for feeding training data to the NN"""

from typing import Iterator, Sequence

from neurs.nn.matrix import Matrix


class DataIterator():
    def __call__(self, features: Sequence[Matrix], labels: Sequence[Matrix]) -> Iterator[tuple[Matrix, Matrix]]:
        """pair up a set of features and labels"""
        raise NotImplementedError


class SampleIterator(DataIterator):
    """Hand out one (feature, label) pair at a time, always in the same order.

    The network trains on a single sample per step, so there is no batching
    and no shuffling here.
    """

    def __call__(self, features: Sequence[Matrix], labels: Sequence[Matrix]) -> Iterator[tuple[Matrix, Matrix]]:
        if len(features) != len(labels):
            raise ValueError(f'got {len(features)} samples but {len(labels)} targets')

        for i in range(len(features)):
            yield (features[i], labels[i])
