"""Fully connected layers trained by stochastic gradient descent."""

from __future__ import annotations

from collections.abc import Iterable
from itertools import pairwise

import numpy as np

from rainnet.activations import Activation, sigmoid_derivative


class Layer:
    """A dense layer of `size` neurons each taking `input_size` inputs.

    A layer without an activation only holds values set with set_input and
    serves as the input layer of a network.
    """

    def __init__(
        self,
        size: int,
        input_size: int,
        activation: Activation | None = None,
        *,
        rng: np.random.Generator | None = None,
        weights=None,
        bias=None,
    ):
        if size < 0 or input_size < 0:
            raise ValueError("layer dimensions must not be negative")
        self.size = size
        self.input_size = input_size
        self.activation = activation

        if weights is None:
            rng = rng if rng is not None else np.random.default_rng()
            weights = rng.uniform(-1.0, 1.0, (size, input_size))
        self.weights = np.array(weights, dtype=np.float32).reshape(size, input_size)
        self.bias = (
            np.zeros(size, dtype=np.float32)
            if bias is None
            else np.array(bias, dtype=np.float32).reshape(size)
        )

        self.weight_grad = np.zeros((size, input_size), dtype=np.float32)
        self.bias_grad = np.zeros(size, dtype=np.float32)
        self.delta = np.zeros(size, dtype=np.float32)
        self.pre_activation = np.zeros(size, dtype=np.float32)
        self.output = np.zeros(size, dtype=np.float32)
        self.inputs = np.zeros(input_size, dtype=np.float32)

    def __repr__(self) -> str:
        name = self.activation.value if self.activation else "input"
        return f"Layer(size={self.size}, input_size={self.input_size}, {name})"

    def _require_activation(self) -> Activation:
        if self.activation is None:
            raise ValueError("layer has no activation function")
        return self.activation

    def set_input(self, values) -> None:
        """Use the first `size` of the given values as this layer's output."""
        values = np.asarray(values, dtype=np.float32).ravel()
        if values.size < self.size:
            raise ValueError(f"expected at least {self.size} values, got {values.size}")
        self.output = values[: self.size].copy()

    def forward(self, previous: Layer) -> None:
        """Compute this layer's output from the output of the previous layer."""
        activation = self._require_activation()
        if previous.size < self.input_size:
            raise ValueError(
                f"previous layer has {previous.size} outputs, need {self.input_size}"
            )
        self.inputs = previous.output[: self.input_size].copy()
        self.pre_activation = (self.weights @ self.inputs + self.bias).astype(np.float32)
        self.output = activation.apply(self.pre_activation)

    def update_parameters(self, eta: float) -> None:
        """Step the weights and bias against their gradients."""
        step = np.float32(eta)
        self.weights -= step * self.weight_grad
        self.bias -= step * self.bias_grad

    def _backward(self, eta: float) -> None:
        self.weight_grad = np.outer(self.delta, self.inputs).astype(np.float32)
        self.bias_grad = self.delta.copy()
        self.update_parameters(eta)

    def backward_hidden(self, ahead: Layer, eta: float) -> None:
        """Back-propagate the deltas of the following layer and update."""
        activation = self._require_activation()
        if ahead.input_size < self.size:
            raise ValueError("following layer does not take this layer's outputs")
        propagated = ahead.delta @ ahead.weights[:, : self.size]
        self.delta = (propagated * activation.derivative(self.output)).astype(np.float32)
        self._backward(eta)

    def backward_output(self, eta: float, target) -> float:
        """Update an output layer towards `target`; return the squared error halved."""
        target = np.asarray(target, dtype=np.float32).ravel()
        if target.size < self.size:
            raise ValueError(f"expected at least {self.size} targets, got {target.size}")
        error = target[: self.size] - self.output
        self.delta = (-error * sigmoid_derivative(self.output)).astype(np.float32)
        total = float(np.sum(error * error) * np.float32(0.5))
        self._backward(eta)
        return total


class Network:
    """A stack of layers whose first layer holds the input values."""

    def __init__(self, layers: Iterable[Layer]):
        self.layers = list(layers)
        if len(self.layers) < 2:
            raise ValueError("a network needs an input layer and at least one more")
        for previous, layer in pairwise(self.layers):
            if layer.activation is None:
                raise ValueError("only the first layer may lack an activation")
            if layer.input_size != previous.size:
                raise ValueError(
                    f"layer takes {layer.input_size} inputs but previous has {previous.size}"
                )

    @property
    def input_size(self) -> int:
        return self.layers[0].size

    @property
    def output_layer(self) -> Layer:
        return self.layers[-1]

    def predict(self, features) -> np.ndarray:
        """Run the features through the network and return the output values."""
        self.layers[0].set_input(features)
        for previous, layer in pairwise(self.layers):
            layer.forward(previous)
        return self.output_layer.output.copy()

    def train_step(self, features, target, eta: float) -> float:
        """Train on one sample; return the halved squared error before the update."""
        self.predict(features)
        error = self.output_layer.backward_output(eta, target)
        hidden = list(pairwise(self.layers[1:]))
        for layer, ahead in reversed(hidden):
            layer.backward_hidden(ahead, eta)
        return error