"""Machine-learning models, losses, optimizers and datasets, with the categories that compose them."""

__version__ = "0.1.0"

__all__ = [
    "categories",
    "core",
    "dataset",
    "loss",
    "optimization",
    "optimizer",
    "transformations",
]