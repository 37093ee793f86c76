"""Categories whose morphisms are model transformations or linear data maps."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

import numpy as np

from catlearn.core import DimensionMismatchError


@dataclass(frozen=True)
class ModelDimension:
    """The input and output sizes of a model."""

    input_dim: int
    output_dim: int

    def __add__(self, other: ModelDimension) -> ModelDimension:
        return ModelDimension(
            self.input_dim + other.input_dim,
            self.output_dim + other.output_dim,
        )


def _check_vector(input, expected: int) -> np.ndarray:
    x = np.array(input, dtype=float)
    if x.ndim != 1 or len(x) != expected:
        raise DimensionMismatchError(
            f"Input dimension mismatch: expected {expected}, got {x.size}"
        )
    return x


class ModelTransformation(ABC):
    """A morphism between model dimensions that acts on input vectors."""

    @abstractmethod
    def domain(self) -> ModelDimension:
        """The dimension the transformation starts from."""

    @abstractmethod
    def codomain(self) -> ModelDimension:
        """The dimension the transformation ends in."""

    @abstractmethod
    def apply(self, input) -> np.ndarray:
        """Transform one input vector."""


@dataclass(frozen=True)
class IdentityTransformation(ModelTransformation):
    """Returns its input unchanged."""

    dimension: ModelDimension

    def domain(self) -> ModelDimension:
        return self.dimension

    def codomain(self) -> ModelDimension:
        return self.dimension

    def apply(self, input) -> np.ndarray:
        return _check_vector(input, self.dimension.input_dim)


@dataclass(frozen=True)
class ComposedTransformation(ModelTransformation):
    """Applies ``first`` and then ``second``."""

    first: ModelTransformation
    second: ModelTransformation

    def domain(self) -> ModelDimension:
        return self.first.domain()

    def codomain(self) -> ModelDimension:
        return self.second.codomain()

    def apply(self, input) -> np.ndarray:
        return self.second.apply(self.first.apply(input))


@dataclass(frozen=True)
class TensorProductTransformation(ModelTransformation):
    """Applies two transformations side by side to the two parts of an input."""

    first: ModelTransformation
    second: ModelTransformation

    def domain(self) -> ModelDimension:
        return self.first.domain() + self.second.domain()

    def codomain(self) -> ModelDimension:
        return self.first.codomain() + self.second.codomain()

    def apply(self, input) -> np.ndarray:
        split = self.first.domain().input_dim
        x = _check_vector(input, split + self.second.domain().input_dim)
        return np.concatenate([self.first.apply(x[:split]), self.second.apply(x[split:])])


@dataclass(frozen=True)
class LeftUnitorTransformation(ModelTransformation):
    """The unitor from ``unit ⊗ a`` to ``a``; acts as the identity."""

    object: ModelDimension

    def domain(self) -> ModelDimension:
        return self.object

    def codomain(self) -> ModelDimension:
        return self.object

    def apply(self, input) -> np.ndarray:
        return _check_vector(input, self.object.input_dim)


@dataclass(frozen=True)
class RightUnitorTransformation(ModelTransformation):
    """The unitor from ``a ⊗ unit`` to ``a``; acts as the identity."""

    object: ModelDimension

    def domain(self) -> ModelDimension:
        return self.object

    def codomain(self) -> ModelDimension:
        return self.object

    def apply(self, input) -> np.ndarray:
        return _check_vector(input, self.object.input_dim)


@dataclass(frozen=True)
class AssociatorTransformation(ModelTransformation):
    """Regroups ``(a ⊗ b) ⊗ c`` as ``a ⊗ (b ⊗ c)``; acts as the identity."""

    a: ModelDimension
    b: ModelDimension
    c: ModelDimension

    def domain(self) -> ModelDimension:
        return self.a + self.b + self.c

    def codomain(self) -> ModelDimension:
        return self.a + self.b + self.c

    def apply(self, input) -> np.ndarray:
        return _check_vector(input, self.a.input_dim + self.b.input_dim + self.c.input_dim)


@dataclass(frozen=True)
class BraidingTransformation(ModelTransformation):
    """Swaps the ``a`` and ``b`` parts of an input vector."""

    a: ModelDimension
    b: ModelDimension

    def domain(self) -> ModelDimension:
        return self.a + self.b

    def codomain(self) -> ModelDimension:
        return self.b + self.a

    def apply(self, input) -> np.ndarray:
        split = self.a.input_dim
        x = _check_vector(input, split + self.b.input_dim)
        return np.concatenate([x[split:], x[:split]])


class ModelCategory:
    """Symmetric monoidal category of model dimensions and transformations."""

    def domain(self, f: ModelTransformation) -> ModelDimension:
        return f.domain()

    def codomain(self, f: ModelTransformation) -> ModelDimension:
        return f.codomain()

    def identity(self, obj: ModelDimension) -> ModelTransformation:
        return IdentityTransformation(obj)

    def compose(self, f: ModelTransformation, g: ModelTransformation) -> ModelTransformation | None:
        """Return ``g`` after ``f``, or ``None`` when their dimensions do not meet."""
        if f.codomain() != g.domain():
            return None
        return ComposedTransformation(f, g)

    def unit(self) -> ModelDimension:
        return ModelDimension(0, 0)

    def tensor_objects(self, a: ModelDimension, b: ModelDimension) -> ModelDimension:
        return a + b

    def tensor_morphisms(self, f: ModelTransformation, g: ModelTransformation) -> ModelTransformation:
        return TensorProductTransformation(f, g)

    def left_unitor(self, a: ModelDimension) -> ModelTransformation:
        return LeftUnitorTransformation(a)

    def right_unitor(self, a: ModelDimension) -> ModelTransformation:
        return RightUnitorTransformation(a)

    def associator(self, a: ModelDimension, b: ModelDimension, c: ModelDimension) -> ModelTransformation:
        return AssociatorTransformation(a, b, c)

    def braiding(self, a: ModelDimension, b: ModelDimension) -> ModelTransformation:
        return BraidingTransformation(a, b)


class DataCategory:
    """Symmetric monoidal category of vector sizes and matrices between them.

    A morphism from size ``n`` to size ``m`` is an ``m × n`` matrix; the tensor
    product is the direct sum.
    """

    def domain(self, f) -> int:
        return np.shape(f)[1]

    def codomain(self, f) -> int:
        return np.shape(f)[0]

    def identity(self, obj: int) -> np.ndarray:
        return np.eye(obj)

    def compose(self, f, g) -> np.ndarray | None:
        """Return ``g @ f``, or ``None`` when the shapes do not chain."""
        f, g = np.asarray(f, dtype=float), np.asarray(g, dtype=float)
        if f.shape[0] != g.shape[1]:
            return None
        return g @ f

    def unit(self) -> int:
        return 0

    def tensor_objects(self, a: int, b: int) -> int:
        return a + b

    def tensor_morphisms(self, f, g) -> np.ndarray:
        """Block-diagonal matrix with ``f`` top left and ``g`` bottom right."""
        f, g = np.asarray(f, dtype=float), np.asarray(g, dtype=float)
        rows, cols = f.shape
        result = np.zeros((rows + g.shape[0], cols + g.shape[1]))
        result[:rows, :cols] = f
        result[rows:, cols:] = g
        return result

    def left_unitor(self, a: int) -> np.ndarray:
        return np.eye(a)

    def right_unitor(self, a: int) -> np.ndarray:
        return np.eye(a)

    def associator(self, a: int, b: int, c: int) -> np.ndarray:
        return np.eye(a + b + c)

    def braiding(self, a: int, b: int) -> np.ndarray:
        """Permutation matrix sending ``[x_a, x_b]`` to ``[x_b, x_a]``."""
        result = np.zeros((a + b, a + b))
        for i in range(b):
            result[i, i + a] = 1.0
        for i in range(a):
            result[i + b, i] = 1.0
        return result