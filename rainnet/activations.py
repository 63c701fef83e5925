"""Activation functions and their derivatives."""

from __future__ import annotations

from enum import Enum

import numpy as np

LEAKY_SLOPE = np.float32(0.01)


def _array(values) -> np.ndarray:
    return np.asarray(values, dtype=np.float32)


def relu(z):
    """Rectified linear unit."""
    z = _array(z)
    return np.where(z > 0, z, np.float32(0.0)).astype(np.float32)


def relu_derivative(s):
    """Derivative of relu, given the activated output."""
    s = _array(s)
    return np.where(s > 0, np.float32(1.0), np.float32(0.0)).astype(np.float32)


def sigmoid(z):
    """Logistic function."""
    z = _array(z)
    with np.errstate(over="ignore"):
        return (np.float32(1.0) / (np.float32(1.0) + np.exp(-z))).astype(np.float32)


def sigmoid_derivative(s):
    """Derivative of the logistic function, given its output."""
    s = _array(s)
    return (s * (np.float32(1.0) - s)).astype(np.float32)


def leaky_relu(z):
    """Rectified linear unit with a small slope for negative inputs."""
    z = _array(z)
    return np.where(z > 0, z, LEAKY_SLOPE * z).astype(np.float32)


def leaky_relu_derivative(s):
    """Derivative of leaky_relu, given the activated output."""
    s = _array(s)
    return np.where(s > 0, np.float32(1.0), LEAKY_SLOPE).astype(np.float32)


class Activation(Enum):
    """An activation function paired with its derivative."""

    RELU = "relu"
    SIGMOID = "sigmoid"
    LEAKY_RELU = "leaky_relu"

    def apply(self, z):
        """Activate pre-activation values."""
        return _FUNCTIONS[self][0](z)

    def derivative(self, s):
        """Derivative with respect to the input, given activated outputs."""
        return _FUNCTIONS[self][1](s)


_FUNCTIONS = {
    Activation.RELU: (relu, relu_derivative),
    Activation.SIGMOID: (sigmoid, sigmoid_derivative),
    Activation.LEAKY_RELU: (leaky_relu, leaky_relu_derivative),
}