# catlearn

Small machine-learning building blocks (models, loss functions, optimizers and
datasets) together with the categories and transformations that let them be
composed. All arrays are NumPy arrays.

## Installation

```
pip install .
```

To run the test suite:

```
pip install ".[test]"
pytest
```

## What is inside

- `catlearn.core`: the abstract `Model` base (a `parameters` property holding a
  flat parameter vector, a `dimensions` property, `predict` and `predict_batch`),
  the abstract `TrainableModel` and `ArchitecturalModel` interfaces, and two
  concrete models: `FeedForwardNN` (ReLU hidden layers, linear output layer) and
  `LinearModel` (`W x + b`). Both take an optional `numpy.random.Generator` for
  their initial weights. Errors derive from `ModelError`, for example
  `DimensionMismatchError`, raised for wrongly sized inputs or parameter vectors.
- `catlearn.loss`: `MeanSquaredError`, `BinaryCrossEntropy`, `CrossEntropy`,
  `SoftmaxCrossEntropy` and the `softmax` helper. Each loss offers
  `calculate_loss` and `calculate_gradients`.
- `catlearn.optimizer`: `GradientDescent`, `Adam`, `SGDMomentum` and `RMSProp`.
  `update(parameters, gradients)` returns the new parameter array and leaves the
  one passed in untouched; stateful optimizers keep their moments between calls
  until `reset()`. Mismatched sizes raise `ValueError`.
- `catlearn.dataset`: `TabularDataset` (built from feature and target matrices or
  loaded with `TabularDataset.from_csv`, and normalised in place with
  `normalize_min_max` or `normalize_z_score`), `TrainTestSplit` and `DataLoader`,
  whose iteration runs one epoch of batches. Bad indices raise
  `IndexOutOfBoundsError`, other problems `DatasetError`.
- `catlearn.categories`: `ModelCategory` and `DataCategory`, both symmetric
  monoidal. `ModelCategory` has `ModelDimension` objects and
  `ModelTransformation` morphisms (identity, composition, tensor product,
  unitors, associator, braiding); `DataCategory` has vector sizes as objects and
  matrices as morphisms, with block-diagonal tensor products. `compose` returns
  `None` when the morphisms do not chain.
- `catlearn.transformations`: `TrainingTransformation` and
  `CircuitOptimizationTransformation` (whose `component` is the identity of the
  given category at the given object), `OptimizedModelTransformation` (applies a
  model's `predict`) and `IdentityModelTransformation`.
- `catlearn.optimization`: `GradientOptimizationTransformation`, which trains a
  copy of a model with central finite-difference gradients and returns an
  `OptimizedModelTransformation`, and the `OptimizationCategory` that composes
  such steps.

## Example

```python
import numpy as np

from catlearn.core import LinearModel
from catlearn.loss import MeanSquaredError
from catlearn.optimizer import GradientDescent
from catlearn.optimization import GradientOptimizationTransformation

model = LinearModel(2, 1, rng=np.random.default_rng(0))
x = np.array([[0.0, 1.0], [1.0, 0.0]])
y = [np.array([1.0]), np.array([-1.0])]

step = GradientOptimizationTransformation(model, GradientDescent(0.1), MeanSquaredError(), 50)
trained = step.apply((x, y))
print(trained.apply(np.array([0.0, 1.0])))
```

The categorical structure works on plain data as well:

```python
from catlearn.categories import DataCategory

cat = DataCategory()
swap = cat.braiding(1, 2)       # 3x3 permutation matrix
print(cat.compose(cat.identity(3), swap))
```

## What it does not do

- There are no quantum circuits, state encodings or circuit-backed models; the
  categories here cover models and data only, and
  `CircuitOptimizationTransformation` only records an optimisation level.
- `FeedForwardNN` and `LinearModel` do not implement `TrainableModel`; training
  goes through `GradientOptimizationTransformation` or an optimizer used by hand.
- Models cannot be saved or loaded, and the package has no command-line tool.