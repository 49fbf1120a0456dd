from hypothesis import given, strategies as st
import pytest

from cststub.naming import (
    ConventionNameClassifier,
    NameClassifier,
    is_private_name,
    is_protected_name,
)

identifiers = st.from_regex(r"[A-Za-z][A-Za-z0-9]{0,12}", fullmatch=True)


def _is_public(name: str) -> bool:
    return not is_private_name(name) and not is_protected_name(name)


@given(identifiers)
def test_plain_names_are_public(name: str) -> None:
    assert _is_public(name)
    assert not is_private_name(name)
    assert not is_protected_name(name)


@given(identifiers)
def test_single_underscore_is_protected(name: str) -> None:
    assert is_protected_name("_" + name)
    assert not is_private_name("_" + name)


@given(identifiers)
def test_double_underscore_is_private(name: str) -> None:
    assert is_private_name("__" + name)
    assert not is_protected_name("__" + name)


@given(identifiers)
def test_dunder_names_are_public(name: str) -> None:
    assert _is_public(f"__{name}__")


@pytest.mark.parametrize("name", ["_", "__", "___", "init"])
def test_short_underscore_names(name: str) -> None:
    # "___" ends with "__" so it is neither private nor protected.
    assert _is_public(name)


def test_default_classifier_satisfies_protocol() -> None:
    classifier = ConventionNameClassifier()
    assert isinstance(classifier, NameClassifier)
    assert classifier.is_private_name("__secret")
    assert classifier.is_protected_name("_internal")
    assert not classifier.is_protected_name("__init__")
