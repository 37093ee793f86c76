"""Loss functions comparing prediction vectors with target vectors."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np

_CLIP = 1e-15


def _as_vector(values) -> np.ndarray:
    return np.asarray(values, dtype=float)


def softmax(x) -> np.ndarray:
    """Return softmax probabilities of ``x``, shifted by its maximum for stability."""
    x = _as_vector(x)
    exp_x = np.exp(x - np.max(x))
    return exp_x / exp_x.sum()


class LossFunction(ABC):
    """A differentiable loss between predictions and targets."""

    @abstractmethod
    def calculate_loss(self, predictions, targets) -> float:
        """Return the scalar loss."""

    @abstractmethod
    def calculate_gradients(self, predictions, targets) -> np.ndarray:
        """Return the gradient of the loss with respect to the predictions."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))


class MeanSquaredError(LossFunction):
    """Mean of squared differences."""

    def calculate_loss(self, predictions, targets) -> float:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        diff = predictions - targets
        return float(np.sum(diff * diff) / len(predictions))

    def calculate_gradients(self, predictions, targets) -> np.ndarray:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        return 2.0 * (predictions - targets) / len(predictions)


class BinaryCrossEntropy(LossFunction):
    """Cross-entropy for independent binary outputs."""

    def calculate_loss(self, predictions, targets) -> float:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        p = np.clip(predictions, _CLIP, 1.0 - _CLIP)
        terms = targets * np.log(p) + (1.0 - targets) * np.log(1.0 - p)
        return float(-np.sum(terms) / len(predictions))

    def calculate_gradients(self, predictions, targets) -> np.ndarray:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        p = np.clip(predictions, _CLIP, 1.0 - _CLIP)
        return -(targets / p - (1.0 - targets) / (1.0 - p)) / len(predictions)


class CrossEntropy(LossFunction):
    """Cross-entropy for multi-class probability vectors."""

    def calculate_loss(self, predictions, targets) -> float:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        active = targets > 0.0
        p = np.maximum(predictions[active], _CLIP)
        return float(-np.sum(targets[active] * np.log(p)) / len(predictions))

    def calculate_gradients(self, predictions, targets) -> np.ndarray:
        predictions, targets = _as_vector(predictions), _as_vector(targets)
        grads = np.zeros(len(predictions))
        active = targets > 0.0
        p = np.maximum(predictions[active], _CLIP)
        grads[active] = -targets[active] / p / len(predictions)
        return grads


class SoftmaxCrossEntropy(LossFunction):
    """Categorical cross-entropy applied to the softmax of raw logits."""

    def calculate_loss(self, logits, targets) -> float:
        targets = _as_vector(targets)
        probs = softmax(logits)
        active = targets > 0.0
        p = np.maximum(probs[active], _CLIP)
        return float(-np.sum(targets[active] * np.log(p)) / len(probs))

    def calculate_gradients(self, logits, targets) -> np.ndarray:
        targets = _as_vector(targets)
        probs = softmax(logits)
        return (probs - targets) / len(probs)