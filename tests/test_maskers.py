"""Tests for the leaf maskers."""

import pytest

from cloakstruct.core.categories import MaskCategory
from cloakstruct.core.maskers import (
    LEAF_MASKERS,
    PASSWORD_MASK,
    address,
    apply_mask,
    credit_card,
    email,
    id_number,
    mobile,
    name,
    overlay,
    password,
    telephone,
)


class TestOverlay:
    """Test the character-range overlay primitive."""

    def test_replaces_range(self) -> None:
        assert overlay("A123456789", "****", 6, 10) == "A12345****"

    def test_end_is_clamped(self) -> None:
        assert overlay("abcdefgh", "##", 6, 100) == "abcdef##"

    def test_mask_length_is_independent_of_range(self) -> None:
        assert overlay("abcdefghij", "*", 2, 8) == "ab*ij"

    def test_start_past_end_of_text_is_unchanged(self) -> None:
        assert overlay("abc", "**", 5, 9) == "abc"

    def test_empty_range_is_unchanged(self) -> None:
        """A range that is empty after clamping leaves the text alone."""
        assert overlay("abcdef", "**", 6, 10) == "abcdef"
        assert overlay("", "**", 0, 4) == ""

    def test_uses_character_offsets(self) -> None:
        assert overlay("台北市內湖區內湖路", "**", 2, 4) == "台北**湖區內湖路"


class TestPassword:
    @pytest.mark.parametrize("value", ["x", "", "correct horse battery staple", "密碼"])
    def test_always_fixed_mask(self, value: str) -> None:
        assert password(value) == "************"
        assert len(password(value)) == 12

    def test_constant(self) -> None:
        assert PASSWORD_MASK == "************"


class TestName:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("ABCD", "A**D"),
            ("ABCDE", "A**DE"),
            ("ABC", "A**C"),
            ("AB", "A**"),
            ("A", "**"),
            ("", "**"),
            ("王小明", "王**明"),
        ],
    )
    def test_rules_by_length(self, value: str, expected: str) -> None:
        assert name(value) == expected


class TestIdNumber:
    def test_masks_last_four(self) -> None:
        assert id_number("A123456789") == "A12345****"

    def test_short_id_keeps_prefix(self) -> None:
        assert id_number("A1234567") == "A12345****"

    def test_too_short_is_unchanged(self) -> None:
        assert id_number("A1234") == "A1234"

    def test_longer_id_keeps_tail(self) -> None:
        assert id_number("A12345678901") == "A12345****01"


class TestAddress:
    def test_multibyte_address(self) -> None:
        """Offsets count characters, not UTF-8 bytes."""
        assert address("台北市內湖區內湖路一段737巷1號1樓") == "台北市內湖區******"

    def test_ascii_address(self) -> None:
        assert address("Somewhere Road 12") == "Somewh******"

    def test_mask_length_is_fixed(self) -> None:
        assert address("1234567") == "123456******"

    @pytest.mark.parametrize("value", ["", "台北", "123456"])
    def test_short_address_fully_masked(self, value: str) -> None:
        assert address(value) == "******"


class TestCreditCard:
    def test_sixteen_digits(self) -> None:
        assert credit_card("1234567890123456") == "123456******3456"

    def test_fifteen_digits(self) -> None:
        assert credit_card("123456789012345") == "123456******345"

    def test_short_number(self) -> None:
        assert credit_card("12345678") == "123456******"


class TestEmail:
    def test_masks_local_part(self) -> None:
        assert email("ggw.chang@gmail.com") == "ggw****@gmail.com"

    def test_short_local_part_is_unchanged(self) -> None:
        assert email("ab@example.com") == "ab@example.com"

    def test_long_local_part_is_fully_masked(self) -> None:
        assert email("abcdefghij@example.com") == "abc****@example.com"

    def test_four_character_local_part(self) -> None:
        assert email("abcd@example.com") == "abc****@example.com"

    def test_splits_on_first_at_only(self) -> None:
        assert email("abcdefgh@host@example.com") == "abc****@host@example.com"

    def test_missing_at_returns_input(self) -> None:
        assert email("not-an-email") == "not-an-email"
        assert email("") == ""


class TestMobile:
    def test_masks_middle_digits(self) -> None:
        assert mobile("0987654321") == "0987***321"

    def test_short_value(self) -> None:
        assert mobile("09876") == "0987***"


class TestTelephone:
    @pytest.mark.parametrize(
        "value",
        ["0227993078", "(02) 2799-3078", "(02)2799-3078", "02-2799-3078"],
    )
    def test_ten_digits(self, value: str) -> None:
        assert telephone(value) == "(02)2799-****"

    def test_eight_digits(self) -> None:
        assert telephone("2799-3078") == "2799-****"

    def test_other_lengths_are_stripped_but_unmasked(self) -> None:
        assert telephone("12345") == "12345"
        assert telephone("(02) 123") == "02123"


class TestApplyMask:
    def test_every_leaf_category_is_registered(self) -> None:
        leaf_categories = {c for c in MaskCategory if c.is_leaf}
        assert set(LEAF_MASKERS) == leaf_categories

    @pytest.mark.parametrize(
        "category, value, expected",
        [
            (MaskCategory.NAME, "ABCD", "A**D"),
            (MaskCategory.ID, "A123456789", "A12345****"),
            (MaskCategory.EMAIL, "ggw.chang@gmail.com", "ggw****@gmail.com"),
            (MaskCategory.TELEPHONE, "0227993078", "(02)2799-****"),
        ],
    )
    def test_dispatch(self, category: MaskCategory, value: str, expected: str) -> None:
        assert apply_mask(category, value) == expected

    def test_struct_is_not_a_leaf(self) -> None:
        with pytest.raises(ValueError, match="not a leaf mask category"):
            apply_mask(MaskCategory.STRUCT, "value")
