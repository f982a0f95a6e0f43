"""Settings for the demos, and the logging setup every entry point shares"""

import logging
import math
import os
from dataclasses import dataclass, field
from typing import Optional


def configure_logging() -> None:
    """
    Set up logging for a script.

    The level comes from NEURS_LOG_LEVEL (DEBUG, INFO, WARNING...), INFO if it isn't set.
    Library modules only ever call logging.getLogger(__name__), they never configure it.
    """
    log_level_str = os.getenv('NEURS_LOG_LEVEL', 'INFO').upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


@dataclass
class XorSettings():
    """The classic XOR problem: not linearly separable, so it needs a hidden layer"""
    layers: list[int] = field(default_factory=lambda: [2, 2, 1])
    alpha: float = 0.5
    epochs: int = 200000
    display_update: int = 10000
    seed: Optional[int] = None
    features: list[list[float]] = field(default_factory=lambda: [[0.0, 0.0], [0.0, 1.0], [1.0, 0.0], [1.0, 1.0]])
    labels: list[list[float]] = field(default_factory=lambda: [[0.0], [1.0], [1.0], [0.0]])


@dataclass
class SineSettings():
    """Learn one period of a sine wave, squashed into [0, 1] so the sigmoid can reach it"""
    layers: list[int] = field(default_factory=lambda: [1, 3, 3, 1])
    alpha: float = 0.2
    samples: int = 3000
    iterations: int = 200
    seed: Optional[int] = None

    def dataset(self) -> tuple[list[list[float]], list[list[float]]]:
        """x runs from 0 to 1 over one period, y = (sin(2 pi x) + 1) / 2"""
        features = []
        labels = []
        for i in range(self.samples):
            x = i / self.samples
            features.append([x])
            labels.append([(math.sin(x * math.pi * 2) + 1) / 2])
        return features, labels
