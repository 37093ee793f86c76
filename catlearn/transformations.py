"""Transformations that act on whole categories of models."""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from catlearn.categories import ModelDimension, ModelTransformation
from catlearn.core import Model
from catlearn.loss import LossFunction
from catlearn.optimizer import Optimizer

MAX_OPTIMIZATION_LEVEL = 3


@dataclass(eq=False)
class TrainingTransformation:
    """A training setup viewed as a natural transformation on models.

    Training does not change a model's dimensions, so each component is the
    identity on the given object.
    """

    model: Model
    optimizer: Optimizer
    loss: LossFunction

    def component(self, category, obj):
        """The component at ``obj``: the identity morphism of ``category``."""
        return category.identity(obj)


@dataclass(frozen=True)
class CircuitOptimizationTransformation:
    """Circuit optimisation at a level from 0 to 3; higher levels are clamped to 3."""

    level: int = field(default=0)

    def __post_init__(self) -> None:
        if self.level < 0:
            raise ValueError(f"Optimization level must not be negative, got {self.level}")
        object.__setattr__(self, "level", min(self.level, MAX_OPTIMIZATION_LEVEL))

    def component(self, category, obj):
        """The component at ``obj``; optimisation keeps dimensions, so the identity."""
        return category.identity(obj)


class OptimizedModelTransformation(ModelTransformation):
    """A model transformation that predicts with a (trained) model."""

    def __init__(self, model: Model) -> None:
        self.model = model

    def __repr__(self) -> str:
        return f"OptimizedModelTransformation(model={self.model!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, OptimizedModelTransformation):
            return NotImplemented
        return type(self.model) is type(other.model)

    __hash__ = None  # type: ignore[assignment]

    def _dimension(self) -> ModelDimension:
        input_dim, output_dim = self.model.dimensions
        return ModelDimension(input_dim, output_dim)

    def domain(self) -> ModelDimension:
        return self._dimension()

    def codomain(self) -> ModelDimension:
        return self._dimension()

    def apply(self, input) -> np.ndarray:
        return self.model.predict(input)


@dataclass(frozen=True)
class IdentityModelTransformation(ModelTransformation):
    """Returns its input unchanged, without checking its size."""

    dim: ModelDimension

    def domain(self) -> ModelDimension:
        return self.dim

    def codomain(self) -> ModelDimension:
        return self.dim

    def apply(self, input) -> np.ndarray:
        return np.array(input, dtype=float)