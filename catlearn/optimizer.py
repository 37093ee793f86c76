"""Gradient-based optimisers over flat parameter vectors."""

from __future__ import annotations

from abc import ABC, abstractmethod

import numpy as np


def _prepare(parameters, gradients) -> tuple[np.ndarray, np.ndarray]:
    params = np.array(parameters, dtype=float)
    grads = np.asarray(gradients, dtype=float)
    if params.shape != grads.shape:
        raise ValueError("Parameter and gradient dimensions must match")
    return params, grads


def _state_for(state: np.ndarray | None, size: int) -> np.ndarray:
    if state is None:
        return np.zeros(size)
    if len(state) != size:
        raise ValueError(
            f"Optimizer state holds {len(state)} values but {size} parameters were given"
        )
    return state


class Optimizer(ABC):
    """Turns parameters and their gradients into updated parameters."""

    @abstractmethod
    def update(self, parameters, gradients) -> np.ndarray:
        """Return the parameters after one step against ``gradients``."""

    @abstractmethod
    def reset(self) -> None:
        """Forget any state accumulated by earlier steps."""


class GradientDescent(Optimizer):
    """Plain gradient descent with a fixed learning rate."""

    def __init__(self, learning_rate: float) -> None:
        self.learning_rate = learning_rate

    def __repr__(self) -> str:
        return f"GradientDescent(learning_rate={self.learning_rate})"

    def update(self, parameters, gradients) -> np.ndarray:
        params, grads = _prepare(parameters, gradients)
        return params - self.learning_rate * grads

    def reset(self) -> None:
        """Gradient descent keeps no state."""


class Adam(Optimizer):
    """Adaptive moment estimation with bias-corrected moments."""

    def __init__(
        self,
        learning_rate: float = 0.001,
        beta1: float = 0.9,
        beta2: float = 0.999,
        epsilon: float = 1e-8,
    ) -> None:
        self.learning_rate = learning_rate
        self.beta1 = beta1
        self.beta2 = beta2
        self.epsilon = epsilon
        self._m: np.ndarray | None = None
        self._v: np.ndarray | None = None
        self._t = 0

    def __repr__(self) -> str:
        return (
            f"Adam(learning_rate={self.learning_rate}, beta1={self.beta1}, "
            f"beta2={self.beta2}, epsilon={self.epsilon})"
        )

    @property
    def timestep(self) -> int:
        """Number of updates since creation or the last reset."""
        return self._t

    def update(self, parameters, gradients) -> np.ndarray:
        params, grads = _prepare(parameters, gradients)
        m = _state_for(self._m, len(params))
        v = _state_for(self._v, len(params))
        self._t += 1
        self._m = self.beta1 * m + (1.0 - self.beta1) * grads
        self._v = self.beta2 * v + (1.0 - self.beta2) * grads * grads
        m_hat = self._m / (1.0 - self.beta1 ** self._t)
        v_hat = self._v / (1.0 - self.beta2 ** self._t)
        return params - self.learning_rate * m_hat / (np.sqrt(v_hat) + self.epsilon)

    def reset(self) -> None:
        self._m = None
        self._v = None
        self._t = 0


class SGDMomentum(Optimizer):
    """Stochastic gradient descent with a velocity term."""

    def __init__(self, learning_rate: float, momentum: float) -> None:
        self.learning_rate = learning_rate
        self.momentum = momentum
        self._velocity: np.ndarray | None = None

    def __repr__(self) -> str:
        return f"SGDMomentum(learning_rate={self.learning_rate}, momentum={self.momentum})"

    def update(self, parameters, gradients) -> np.ndarray:
        params, grads = _prepare(parameters, gradients)
        velocity = _state_for(self._velocity, len(params))
        self._velocity = self.momentum * velocity - self.learning_rate * grads
        return params + self._velocity

    def reset(self) -> None:
        self._velocity = None


class RMSProp(Optimizer):
    """Scales each step by a running average of squared gradients."""

    def __init__(
        self,
        learning_rate: float = 0.001,
        decay_rate: float = 0.9,
        epsilon: float = 1e-8,
    ) -> None:
        self.learning_rate = learning_rate
        self.decay_rate = decay_rate
        self.epsilon = epsilon
        self._cache: np.ndarray | None = None

    def __repr__(self) -> str:
        return (
            f"RMSProp(learning_rate={self.learning_rate}, "
            f"decay_rate={self.decay_rate}, epsilon={self.epsilon})"
        )

    def update(self, parameters, gradients) -> np.ndarray:
        params, grads = _prepare(parameters, gradients)
        cache = _state_for(self._cache, len(params))
        self._cache = self.decay_rate * cache + (1.0 - self.decay_rate) * grads * grads
        return params - self.learning_rate * grads / (np.sqrt(self._cache) + self.epsilon)

    def reset(self) -> None:
        self._cache = None