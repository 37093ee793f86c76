"""Model interfaces and classical reference models."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence

import numpy as np


class ModelError(Exception):
    """Base error raised by models."""

    prefix = "Model error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f"{self.prefix}: {self.message}"


class DimensionMismatchError(ModelError):
    """Input, output or parameter sizes do not agree."""

    prefix = "Dimension mismatch"


class ForwardError(ModelError):
    """The forward computation failed."""

    prefix = "Forward computation error"


class BackwardError(ModelError):
    """Gradient computation failed."""

    prefix = "Backward computation error"


class UpdateError(ModelError):
    """A parameter update failed."""

    prefix = "Parameter update error"


class InputRangeError(ModelError):
    """Input values lie outside the accepted range."""

    prefix = "Input range error"


class Model(ABC):
    """A model with a flat vector of trainable parameters that makes predictions."""

    def parameter_count(self) -> int:
        """Number of trainable parameters."""
        return len(self.parameters)

    @property
    @abstractmethod
    def parameters(self) -> np.ndarray:
        """A copy of the flat parameter vector."""

    @property
    @abstractmethod
    def dimensions(self) -> tuple[int, int]:
        """The ``(input_dim, output_dim)`` pair."""

    @abstractmethod
    def predict(self, input) -> np.ndarray:
        """Predict the output for one input."""

    def predict_batch(self, inputs: Iterable) -> list[np.ndarray]:
        """Predict the output for each input in turn."""
        return [self.predict(x) for x in inputs]


class TrainableModel(Model):
    """A model that can be fitted to data."""

    @abstractmethod
    def train(self, inputs: Sequence, targets: Sequence, optimizer, loss_fn) -> float:
        """Train on the dataset and return the resulting loss."""

    @abstractmethod
    def calculate_gradients(self, input, target, loss_fn) -> list[float]:
        """Return the loss gradient with respect to each parameter."""


class ArchitecturalModel(Model):
    """A model that can describe its own layer structure."""

    @abstractmethod
    def architecture_description(self) -> str:
        """A readable summary of the architecture."""

    @abstractmethod
    def layer_information(self) -> list[tuple[str, int]]:
        """``(layer name, size)`` pairs."""


def _check_input(input, input_dim: int) -> np.ndarray:
    x = np.asarray(input, dtype=float)
    if x.ndim != 1 or len(x) != input_dim:
        size = len(x) if x.ndim == 1 else x.size
        raise DimensionMismatchError(f"Expected input dim {input_dim}, got {size}")
    return x


def _check_parameter_count(values, expected: int) -> np.ndarray:
    flat = np.asarray(values, dtype=float).ravel()
    if len(flat) != expected:
        raise DimensionMismatchError(f"Expected {expected} parameters, got {len(flat)}")
    return flat


def _make_rng(rng) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


class FeedForwardNN(Model):
    """Fully connected network with ReLU on hidden layers and a linear output layer.

    Parameters are laid out layer by layer: the weight matrix in row-major
    order, followed by that layer's biases.
    """

    def __init__(
        self,
        input_dim: int,
        hidden_layers: Sequence[int],
        output_dim: int,
        rng: np.random.Generator | None = None,
    ) -> None:
        rng = _make_rng(rng)
        self.input_dim = input_dim
        self.output_dim = output_dim
        self.hidden_layers = list(hidden_layers)
        sizes = [input_dim, *self.hidden_layers, output_dim]
        self._weights: list[np.ndarray] = []
        self._biases: list[np.ndarray] = []
        for cols, rows in zip(sizes, sizes[1:]):
            scale = 1.0 / math.sqrt(cols) if cols else 0.0
            self._weights.append(rng.uniform(-1.0, 1.0, size=(rows, cols)) * scale)
            self._biases.append(np.zeros(rows))

    @property
    def parameters(self) -> np.ndarray:
        parts = []
        for weight, bias in zip(self._weights, self._biases):
            parts.append(weight.ravel())
            parts.append(bias)
        return np.concatenate(parts).copy()

    @parameters.setter
    def parameters(self, values) -> None:
        flat = _check_parameter_count(values, self.parameter_count())
        offset = 0
        for layer, (weight, bias) in enumerate(zip(self._weights, self._biases)):
            self._weights[layer] = flat[offset:offset + weight.size].reshape(weight.shape).copy()
            offset += weight.size
            self._biases[layer] = flat[offset:offset + bias.size].copy()
            offset += bias.size

    def parameter_count(self) -> int:
        return sum(w.size + b.size for w, b in zip(self._weights, self._biases))

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.input_dim, self.output_dim)

    def predict(self, input) -> np.ndarray:
        current = _check_input(input, self.input_dim)
        last = len(self._weights) - 1
        for layer, (weight, bias) in enumerate(zip(self._weights, self._biases)):
            current = weight @ current + bias
            if layer != last:
                current = np.maximum(current, 0.0)
        return current


class LinearModel(Model):
    """Affine map ``W x + b``; weights come first in row-major order, then biases."""

    def __init__(
        self,
        input_dim: int,
        output_dim: int,
        rng: np.random.Generator | None = None,
    ) -> None:
        rng = _make_rng(rng)
        self.input_dim = input_dim
        self.output_dim = output_dim
        self._weight = (rng.random((output_dim, input_dim)) - 0.5) * 0.01
        self._bias = np.zeros(output_dim)

    @property
    def parameters(self) -> np.ndarray:
        return np.concatenate([self._weight.ravel(), self._bias]).copy()

    @parameters.setter
    def parameters(self, values) -> None:
        flat = _check_parameter_count(values, self.parameter_count())
        split = self._weight.size
        self._weight = flat[:split].reshape(self._weight.shape).copy()
        self._bias = flat[split:].copy()

    def parameter_count(self) -> int:
        return self._weight.size + self._bias.size

    @property
    def dimensions(self) -> tuple[int, int]:
        return (self.input_dim, self.output_dim)

    def predict(self, input) -> np.ndarray:
        x = _check_input(input, self.input_dim)
        return self._weight @ x + self._bias