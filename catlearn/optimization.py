"""Optimisation procedures as morphisms that turn training data into trained models."""

from __future__ import annotations

import copy
from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from catlearn.categories import IdentityTransformation, ModelDimension, ModelTransformation
from catlearn.core import Model
from catlearn.loss import LossFunction
from catlearn.optimizer import Optimizer
from catlearn.transformations import OptimizedModelTransformation

_FINITE_DIFFERENCE_STEP = 1e-5


def _split_training_data(input) -> tuple[np.ndarray, list[np.ndarray]]:
    x_data, y_data = input
    features = np.asarray(x_data, dtype=float)
    if features.ndim != 2:
        raise ValueError(f"Training inputs must form a 2-D array, got {features.ndim} dimensions")
    targets = [np.asarray(y, dtype=float) for y in y_data]
    if len(targets) != features.shape[0]:
        raise ValueError(
            f"Got {features.shape[0]} training inputs but {len(targets)} targets"
        )
    return features, targets


class OptimizationTransformation(ABC):
    """A morphism that optimises a model on ``(inputs, targets)`` training data."""

    @abstractmethod
    def domain(self) -> ModelDimension:
        """The model dimension before optimisation."""

    @abstractmethod
    def codomain(self) -> ModelDimension:
        """The model dimension after optimisation."""

    @abstractmethod
    def apply(self, input) -> ModelTransformation:
        """Optimise on ``(inputs, targets)`` and return the resulting model transformation."""


class GradientOptimizationTransformation(OptimizationTransformation):
    """Trains a copy of a model with finite-difference gradients.

    Each epoch visits every sample in order; for each one the loss gradient is
    estimated by central differences and handed to the optimiser. The original
    model and optimiser are left untouched.
    """

    def __init__(
        self,
        model: Model,
        optimizer: Optimizer,
        loss_fn: LossFunction,
        epochs: int,
    ) -> None:
        if epochs < 0:
            raise ValueError(f"Number of epochs must not be negative, got {epochs}")
        self.model = model
        self.optimizer = optimizer
        self.loss_fn = loss_fn
        self.epochs = epochs

    def __repr__(self) -> str:
        return (
            f"GradientOptimizationTransformation(model={self.model!r}, "
            f"optimizer={self.optimizer!r}, loss_fn={self.loss_fn!r}, epochs={self.epochs})"
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptimizationTransformation):
            return NotImplemented
        return type(other) is type(self)

    __hash__ = None  # type: ignore[assignment]

    def _dimension(self) -> ModelDimension:
        input_dim, output_dim = self.model.dimensions
        return ModelDimension(input_dim, output_dim)

    def domain(self) -> ModelDimension:
        return self._dimension()

    def codomain(self) -> ModelDimension:
        return self._dimension()

    def _loss_at(self, model: Model, params: np.ndarray, x: np.ndarray, y: np.ndarray) -> float:
        model.parameters = params
        return self.loss_fn.calculate_loss(model.predict(x), y)

    def _gradients(self, model: Model, x: np.ndarray, y: np.ndarray) -> np.ndarray:
        base = model.parameters
        gradients = np.zeros(len(base))
        for j, step in enumerate(np.eye(len(base)) * _FINITE_DIFFERENCE_STEP):
            loss_plus = self._loss_at(model, base + step, x, y)
            loss_minus = self._loss_at(model, base - step, x, y)
            gradients[j] = (loss_plus - loss_minus) / (2.0 * _FINITE_DIFFERENCE_STEP)
        model.parameters = base
        return gradients

    def apply(self, input) -> ModelTransformation:
        features, targets = _split_training_data(input)
        model = copy.deepcopy(self.model)
        optimizer = copy.deepcopy(self.optimizer)
        for _ in range(self.epochs):
            for x, y in zip(features, targets):
                gradients = self._gradients(model, x, y)
                model.parameters = optimizer.update(model.parameters, gradients)
        return OptimizedModelTransformation(model)


@dataclass(frozen=True)
class IdentityOptimizationTransformation(OptimizationTransformation):
    """Leaves the model as it is: yields the identity transformation."""

    dimension: ModelDimension

    def domain(self) -> ModelDimension:
        return self.dimension

    def codomain(self) -> ModelDimension:
        return self.dimension

    def apply(self, input) -> ModelTransformation:
        return IdentityTransformation(self.dimension)


@dataclass(frozen=True, eq=False)
class ComposedOptimizationTransformation(OptimizationTransformation):
    """Runs ``first`` and then ``second`` on the same training data.

    The result of ``first`` is computed but the returned transformation is the
    one produced by ``second``.
    """

    first: OptimizationTransformation
    second: OptimizationTransformation

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComposedOptimizationTransformation):
            return NotImplemented
        return self.first == other.first and self.second == other.second

    __hash__ = None  # type: ignore[assignment]

    def domain(self) -> ModelDimension:
        return self.first.domain()

    def codomain(self) -> ModelDimension:
        return self.second.codomain()

    def apply(self, input) -> ModelTransformation:
        self.first.apply(input)
        return self.second.apply(input)


class OptimizationCategory:
    """Category of model dimensions with optimisation transformations as morphisms."""

    def domain(self, f: OptimizationTransformation) -> ModelDimension:
        return f.domain()

    def codomain(self, f: OptimizationTransformation) -> ModelDimension:
        return f.codomain()

    def identity(self, obj: ModelDimension) -> OptimizationTransformation:
        return IdentityOptimizationTransformation(obj)

    def compose(
        self, f: OptimizationTransformation, g: OptimizationTransformation
    ) -> OptimizationTransformation | None:
        """Return ``g`` after ``f``, or ``None`` when their dimensions do not meet."""
        if f.codomain() != g.domain():
            return None
        return ComposedOptimizationTransformation(f, g)