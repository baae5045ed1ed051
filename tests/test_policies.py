"""Tests for field policy tables."""

import pytest

from cloakstruct.core.categories import MaskCategory
from cloakstruct.core.exceptions import PolicyError
from cloakstruct.core.policies import EMPTY_POLICY, FieldPolicy


class TestFieldPolicy:
    """Test the FieldPolicy dataclass."""

    def test_tags_are_resolved(self) -> None:
        policy = FieldPolicy.from_mapping(
            {"name": "name", "contact.phone": "tel", "card": MaskCategory.CREDIT_CARD}
        )

        assert policy.fields == {
            "name": MaskCategory.NAME,
            "contact.phone": MaskCategory.TELEPHONE,
            "card": MaskCategory.CREDIT_CARD,
        }

    def test_frozen_immutability(self) -> None:
        policy = FieldPolicy.from_mapping({"name": "name"})
        with pytest.raises(Exception):  # FrozenInstanceError
            policy.name = "other"  # type: ignore

    def test_equal_policies_hash_equal(self) -> None:
        first = FieldPolicy.from_mapping({"name": "name", "tel": "telephone"})
        second = FieldPolicy.from_mapping({"tel": "tel", "name": MaskCategory.NAME})

        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second, EMPTY_POLICY}) == 2

    def test_unknown_category(self) -> None:
        with pytest.raises(PolicyError, match="Unknown mask category 'ssn'"):
            FieldPolicy.from_mapping({"ssn": "ssn"})

    @pytest.mark.parametrize("key", ["", "  ", "a..b", ".a", "a."])
    def test_invalid_keys(self, key: str) -> None:
        with pytest.raises(PolicyError):
            FieldPolicy.from_mapping({key: "name"})

    def test_path_lookup_prefers_full_path(self) -> None:
        policy = FieldPolicy.from_mapping(
            {"email": "email", "contact.email": "password"}
        )

        assert policy.category_for("contact.email", "email") is MaskCategory.PASSWORD
        assert policy.category_for("other.email", "email") is MaskCategory.EMAIL
        assert policy.category_for("phone", "phone") is None

    def test_merge_layers_entries(self) -> None:
        base = FieldPolicy.from_mapping({"name": "name", "pin": "password"}, name="base")
        override = FieldPolicy.from_mapping({"name": "password"})

        merged = base.merge(override)

        assert merged.fields["name"] is MaskCategory.PASSWORD
        assert merged.fields["pin"] is MaskCategory.PASSWORD
        assert merged.name == "base"
        assert base.fields["name"] is MaskCategory.NAME

    def test_container_protocol(self) -> None:
        policy = FieldPolicy.from_mapping({"a": "name", "b.c": "email"})

        assert "a" in policy
        assert "b" not in policy
        assert list(policy) == ["a", "b.c"]
        assert len(policy) == 2
        assert len(EMPTY_POLICY) == 0
