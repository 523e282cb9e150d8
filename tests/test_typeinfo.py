import pytest

from assertkit.typeinfo import type_id, type_name


class First:
    pass


class Second:
    pass


def test_type_id_stable_for_same_type():
    direct = type_id(First)
    from_instance = type_id(type(First()))
    assert direct == from_instance
    assert len({direct, from_instance}) == 1
    assert direct is not None


def test_type_id_differs_between_types():
    assert type_id(First) != type_id(Second)
    assert type_id(int) != type_id(str)


def test_type_id_of_no_type():
    assert type_id(None) is None


def test_type_id_rejects_instances():
    with pytest.raises(TypeError):
        type_id(First())


def test_type_name_builtin():
    assert type_name(int) == "int"


def test_type_name_of_no_type():
    assert type_name(None) == "None"


def test_type_name_user_class_is_qualified():
    name = type_name(First)
    assert name.endswith(".First")
    assert name.startswith(First.__module__)
    assert name != type_name(Second)


def test_type_name_nested_class():
    class Inner:
        pass

    assert type_name(Inner).endswith(Inner.__qualname__)


def test_type_name_rejects_instances():
    with pytest.raises(TypeError):
        type_name(3)