from __future__ import annotations

import pytest
from repokit.repositories import GenericRepository, InvariantViolation, create_parameter_map
from repokit.repositories.parameters import bind_parameters


def test_alternating_arguments_build_mapping():
    assert create_parameter_map("a", 1, "b", 2) == {"a": 1, "b": 2}


def test_empty_argument_list_builds_empty_mapping():
    assert create_parameter_map() == {}


def test_mapping_keeps_argument_order_and_none_values():
    params = create_parameter_map("z", None, "a", [1, 2])
    assert list(params) == ["z", "a"]
    assert params["z"] is None


def test_non_string_keys_are_stringified():
    assert create_parameter_map(7, "seven") == {"7": "seven"}


def test_later_key_overrides_earlier():
    assert create_parameter_map("a", 1, "a", 2) == {"a": 2}


@pytest.mark.parametrize("params", [("a",), ("a", 1, "b")])
def test_odd_argument_count_is_invariant_violation(params):
    with pytest.raises(InvariantViolation):
        create_parameter_map(*params)


def test_none_key_is_invariant_violation():
    with pytest.raises(InvariantViolation) as exc_info:
        create_parameter_map(None, 1)
    assert exc_info.value.details == {"position": 0}


def test_repository_exposes_parameter_map_builder():
    assert GenericRepository.create_parameter_map("a", 1) == {"a": 1}


def test_bind_parameters_treats_none_as_no_bindings():
    assert bind_parameters(None) == {}
    assert bind_parameters({"a": 1}) == {"a": 1}


def test_bind_parameters_rejects_none_key():
    with pytest.raises(InvariantViolation):
        bind_parameters({None: 1})
