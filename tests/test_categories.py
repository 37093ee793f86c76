import numpy as np
import pytest

from catlearn.categories import (
    AssociatorTransformation,
    BraidingTransformation,
    ComposedTransformation,
    DataCategory,
    IdentityTransformation,
    LeftUnitorTransformation,
    ModelCategory,
    ModelDimension,
    RightUnitorTransformation,
    TensorProductTransformation,
)
from catlearn.core import DimensionMismatchError


def test_model_tensor_objects_adds_dimensions():
    cat = ModelCategory()
    dim = cat.tensor_objects(ModelDimension(3, 1), ModelDimension(2, 2))
    assert dim.input_dim == 5
    assert dim.output_dim == 3


def test_data_identity_shape():
    cat = DataCategory()
    identity = cat.identity(3)
    assert identity.shape == (3, 3)
    np.testing.assert_array_equal(identity, np.eye(3))


def test_model_unit_is_zero():
    assert ModelCategory().unit() == ModelDimension(0, 0)


def test_model_identity_returns_input():
    cat = ModelCategory()
    ident = cat.identity(ModelDimension(3, 3))
    assert cat.domain(ident) == ModelDimension(3, 3)
    assert cat.codomain(ident) == ModelDimension(3, 3)
    np.testing.assert_array_equal(ident.apply([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])


def test_identity_rejects_wrong_size():
    with pytest.raises(DimensionMismatchError):
        IdentityTransformation(ModelDimension(2, 2)).apply([1.0, 2.0, 3.0])


def test_model_compose_matching_and_mismatch():
    cat = ModelCategory()
    f = IdentityTransformation(ModelDimension(2, 2))
    g = IdentityTransformation(ModelDimension(2, 2))
    composed = cat.compose(f, g)
    assert composed == ComposedTransformation(f, g)
    np.testing.assert_array_equal(composed.apply([4.0, 5.0]), [4.0, 5.0])
    assert cat.compose(f, IdentityTransformation(ModelDimension(3, 3))) is None


def test_tensor_product_transformation_splits_and_concatenates():
    cat = ModelCategory()
    t = cat.tensor_morphisms(
        IdentityTransformation(ModelDimension(2, 2)),
        IdentityTransformation(ModelDimension(1, 1)),
    )
    assert isinstance(t, TensorProductTransformation)
    assert t.domain() == ModelDimension(3, 3)
    assert t.codomain() == ModelDimension(3, 3)
    np.testing.assert_array_equal(t.apply([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])
    with pytest.raises(DimensionMismatchError):
        t.apply([1.0, 2.0])


def test_braiding_transformation_swaps_parts():
    cat = ModelCategory()
    b = cat.braiding(ModelDimension(2, 1), ModelDimension(1, 3))
    assert b.domain() == ModelDimension(3, 4)
    assert b.codomain() == ModelDimension(3, 4)
    np.testing.assert_array_equal(b.apply([1.0, 2.0, 3.0]), [3.0, 1.0, 2.0])


def test_unitors_and_associator_are_identity_like():
    cat = ModelCategory()
    a = ModelDimension(2, 2)
    assert cat.left_unitor(a) == LeftUnitorTransformation(a)
    assert cat.right_unitor(a) == RightUnitorTransformation(a)
    np.testing.assert_array_equal(cat.left_unitor(a).apply([1.0, 2.0]), [1.0, 2.0])
    np.testing.assert_array_equal(cat.right_unitor(a).apply([1.0, 2.0]), [1.0, 2.0])
    assoc = cat.associator(ModelDimension(1, 1), ModelDimension(1, 2), ModelDimension(1, 3))
    assert isinstance(assoc, AssociatorTransformation)
    assert assoc.domain() == ModelDimension(3, 6)
    np.testing.assert_array_equal(assoc.apply([1.0, 2.0, 3.0]), [1.0, 2.0, 3.0])
    with pytest.raises(DimensionMismatchError):
        assoc.apply([1.0])


def test_transformation_equality():
    a = ModelDimension(1, 1)
    assert IdentityTransformation(a) == IdentityTransformation(ModelDimension(1, 1))
    assert IdentityTransformation(a) != LeftUnitorTransformation(a)
    assert BraidingTransformation(a, a) == BraidingTransformation(a, a)


def test_data_compose_and_mismatch():
    cat = DataCategory()
    f = np.array([[1.0, 2.0], [3.0, 4.0], [5.0, 6.0]])  # 2 -> 3
    g = np.array([[1.0, 0.0, 1.0]])  # 3 -> 1
    composed = cat.compose(f, g)
    np.testing.assert_array_equal(composed, [[6.0, 8.0]])
    assert cat.domain(composed) == 2
    assert cat.codomain(composed) == 1
    assert cat.compose(g, f) is None


def test_data_tensor_morphisms_block_diagonal():
    cat = DataCategory()
    result = cat.tensor_morphisms([[1.0, 2.0]], [[3.0], [4.0]])
    expected = np.array([
        [1.0, 2.0, 0.0],
        [0.0, 0.0, 3.0],
        [0.0, 0.0, 4.0],
    ])
    np.testing.assert_array_equal(result, expected)


def test_data_braiding_swaps_blocks():
    cat = DataCategory()
    perm = cat.braiding(2, 1)
    np.testing.assert_array_equal(perm @ np.array([1.0, 2.0, 3.0]), [3.0, 1.0, 2.0])
    twice = cat.braiding(1, 2) @ perm
    np.testing.assert_array_equal(twice, np.eye(3))


def test_data_monoidal_structure():
    cat = DataCategory()
    assert cat.unit() == 0
    assert cat.tensor_objects(2, 3) == 5
    np.testing.assert_array_equal(cat.left_unitor(2), np.eye(2))
    np.testing.assert_array_equal(cat.right_unitor(2), np.eye(2))
    np.testing.assert_array_equal(cat.associator(1, 2, 3), np.eye(6))