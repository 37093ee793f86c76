"""Datasets of feature and target rows, with splitting and batching helpers."""

from __future__ import annotations

import math
from abc import ABC, abstractmethod
from collections.abc import Iterator, Sequence
from os import PathLike

import numpy as np

Batch = tuple[list[np.ndarray], list[np.ndarray]]

_RANGE_TOLERANCE = 1e-10


class DatasetError(Exception):
    """Base error raised by datasets."""


class IndexOutOfBoundsError(DatasetError, IndexError):
    """A sample index lies outside the dataset."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"Index {index} out of bounds for dataset of length {length}")
        self.index = index
        self.length = length


class Dataset(ABC):
    """An indexable collection of ``(input, target)`` samples."""

    @abstractmethod
    def __len__(self) -> int:
        """Number of samples."""

    def is_empty(self) -> bool:
        """Whether the dataset holds no samples."""
        return len(self) == 0

    @abstractmethod
    def get_batch(self, indices: Sequence[int]) -> Batch:
        """Return the inputs and targets at ``indices``, in that order."""

    @abstractmethod
    def get_sample(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        """Return the input and target at ``index``."""


def _as_matrix(values, name: str) -> np.ndarray:
    matrix = np.array(values, dtype=float)
    if matrix.ndim != 2:
        raise DatasetError(f"Dimension mismatch: {name} must be a 2-D array, got {matrix.ndim} dimensions")
    return matrix


def _pick_columns(values: list[str], columns: Sequence[int], kind: str) -> list[float]:
    row = []
    for col in columns:
        if not 0 <= col < len(values):
            raise DatasetError(f"{kind} column index {col} out of bounds")
        row.append(float(values[col]))
    return row


class TabularDataset(Dataset):
    """Rows of numeric features paired with rows of numeric targets."""

    def __init__(self, features, targets) -> None:
        self.features = _as_matrix(features, "features")
        self.targets = _as_matrix(targets, "targets")
        n_features, n_targets = self.features.shape[0], self.targets.shape[0]
        if n_features != n_targets:
            raise DatasetError(
                f"Number of feature rows ({n_features}) does not match "
                f"number of target rows ({n_targets})"
            )

    @classmethod
    def from_csv(
        cls,
        path: str | PathLike,
        has_header: bool,
        feature_cols: Sequence[int],
        target_cols: Sequence[int],
        delimiter: str = ",",
    ) -> TabularDataset:
        """Load a dataset from a delimited text file.

        Every line after the optional header becomes one sample; the listed
        columns are parsed as floats.
        """
        feature_rows: list[list[float]] = []
        target_rows: list[list[float]] = []
        with open(path, encoding="utf-8") as handle:
            if has_header:
                next(handle, None)
            for line in handle:
                values = line.removesuffix("\n").split(delimiter)
                feature_rows.append(_pick_columns(values, feature_cols, "Feature"))
                target_rows.append(_pick_columns(values, target_cols, "Target"))

        if not feature_rows:
            return cls(np.zeros((0, 0)), np.zeros((0, 0)))
        return cls(np.array(feature_rows, dtype=float), np.array(target_rows, dtype=float))

    def normalize_min_max(self) -> None:
        """Rescale each feature column to [0, 1]; near-constant columns are left alone."""
        if self.features.shape[0] == 0:
            return
        low = self.features.min(axis=0)
        span = self.features.max(axis=0) - low
        scale = span > _RANGE_TOLERANCE
        self.features[:, scale] = (self.features[:, scale] - low[scale]) / span[scale]

    def normalize_z_score(self) -> None:
        """Standardise each feature column to mean 0 and standard deviation 1.

        Near-constant columns are left alone.
        """
        if self.features.shape[0] == 0:
            return
        mean = self.features.mean(axis=0)
        std = self.features.std(axis=0)
        scale = std > _RANGE_TOLERANCE
        self.features[:, scale] = (self.features[:, scale] - mean[scale]) / std[scale]

    def __len__(self) -> int:
        return self.features.shape[0]

    def _check_index(self, index: int) -> None:
        if not 0 <= index < len(self):
            raise IndexOutOfBoundsError(index, len(self))

    def get_batch(self, indices: Sequence[int]) -> Batch:
        inputs: list[np.ndarray] = []
        targets: list[np.ndarray] = []
        for index in indices:
            self._check_index(index)
            inputs.append(self.features[index].copy())
            targets.append(self.targets[index].copy())
        return inputs, targets

    def get_sample(self, index: int) -> tuple[np.ndarray, np.ndarray]:
        self._check_index(index)
        return self.features[index].copy(), self.targets[index].copy()


def _make_rng(rng) -> np.random.Generator:
    return rng if rng is not None else np.random.default_rng()


class TrainTestSplit:
    """A fixed partition of a dataset's indices into training and test parts."""

    def __init__(
        self,
        dataset: Dataset,
        test_ratio: float,
        shuffle: bool = True,
        rng: np.random.Generator | None = None,
    ) -> None:
        n_samples = len(dataset)
        # Round half away from zero.
        n_test = int(math.floor(n_samples * test_ratio + 0.5))
        if not 0 <= n_test <= n_samples:
            raise ValueError(f"Test ratio {test_ratio} does not fit a dataset of {n_samples} samples")
        n_train = n_samples - n_test

        indices = np.arange(n_samples)
        if shuffle:
            _make_rng(rng).shuffle(indices)

        self._dataset = dataset
        self._train_indices = [int(i) for i in indices[:n_train]]
        self._test_indices = [int(i) for i in indices[n_train:]]

    def train_set(self) -> Batch:
        """Inputs and targets of the training part."""
        return self._dataset.get_batch(self._train_indices)

    def test_set(self) -> Batch:
        """Inputs and targets of the test part."""
        return self._dataset.get_batch(self._test_indices)

    def train_len(self) -> int:
        """Number of training samples."""
        return len(self._train_indices)

    def test_len(self) -> int:
        """Number of test samples."""
        return len(self._test_indices)

    def dataset(self) -> Dataset:
        """The underlying dataset."""
        return self._dataset


class DataLoader:
    """Walks a dataset in batches; iterating runs one full epoch."""

    def __init__(
        self,
        dataset: Dataset,
        batch_size: int,
        shuffle: bool = False,
        rng: np.random.Generator | None = None,
    ) -> None:
        if batch_size < 1:
            raise ValueError(f"Batch size must be positive, got {batch_size}")
        self._dataset = dataset
        self.batch_size = batch_size
        self.shuffle = shuffle
        self._rng = _make_rng(rng)
        self._indices = list(range(len(dataset)))
        self._position = 0

    def reset(self) -> None:
        """Start a new epoch, reshuffling the order if shuffling is enabled."""
        self._position = 0
        if self.shuffle:
            self._rng.shuffle(self._indices)

    def next_batch(self) -> Batch | None:
        """Return the next batch, or ``None`` once the epoch is exhausted."""
        total = len(self._dataset)
        if self._position >= total:
            return None
        end = min(self._position + self.batch_size, total)
        batch_indices = self._indices[self._position:end]
        self._position = end
        return self._dataset.get_batch(batch_indices)

    def __iter__(self) -> Iterator[Batch]:
        self.reset()
        while (batch := self.next_batch()) is not None:
            yield batch