"""Helpers the demo scripts share: how to colour a weight, and asking a trained sine network for answers"""

import math

from neurs.nn import network
from neurs.nn.matrix import Matrix


def weight_style(weight: float) -> tuple[tuple[float, float, float], float]:
    """Red for positive weights, blue for negative, stronger the bigger the weight

    Returns:
        tuple: (rgb colour, brightness in [0, 1))
    """
    brightness = abs(weight) / (abs(weight) + 5.0)
    partial = 1.0 - brightness
    if weight > 0:
        return (1.0, partial, partial), brightness
    return (partial, partial, 1.0), brightness


def sine_output(nn: network.Network, angle: float) -> float:
    """The network's guess for sin(angle), back in [-1, 1]"""
    # the network was trained on x in [0, 1) and y squashed into [0, 1]
    x = Matrix.from_vector([angle / (math.pi * 2), 1.0])
    return float(nn.predict(x).data[0]) * 2 - 1


def prompt(nn: network.Network):
    """Read angles from stdin until EOF, printing the network's sin() for each"""
    while True:
        try:
            text = input(' Input a number in radians > ')
        except EOFError:
            break
        try:
            angle = float(text)
        except ValueError:
            print(f'{text!r} is not a number')
            continue
        print(f'Output: {sine_output(nn, angle)}')
