"""Leaf maskers: fixed redaction rules for single string values.

Each masker takes one string and returns a new masked string. Offsets are
character (code point) offsets, so multi-byte text such as Chinese
addresses is sliced by visible characters rather than by encoded bytes.
None of the maskers raise for malformed input; they mask on a best-effort
basis.
"""

import logging
from typing import Callable, Dict

from .categories import MaskCategory

logger = logging.getLogger(__name__)

PASSWORD_MASK = "************"
NAME_MASK = "**"
ID_MASK = "****"
ADDRESS_MASK = "******"
CREDIT_CARD_MASK = "******"
EMAIL_MASK = "****"
MOBILE_MASK = "***"
TELEPHONE_MASK = "****"

_TELEPHONE_SEPARATORS = str.maketrans("", "", "() -")


def overlay(text: str, mask: str, start: int, end: int) -> str:
    """Replace the characters in ``[start, end)`` with ``mask``.

    ``end`` is clamped to the length of ``text``. When the clamped range is
    empty (including when ``start`` lies past the end of the string) the
    text is returned unchanged.

    Examples:
        >>> overlay("A123456789", "****", 6, 10)
        'A12345****'
        >>> overlay("abc", "**", 5, 9)
        'abc'
    """
    end = min(end, len(text))
    if start >= end:
        return text
    return text[:start] + mask + text[end:]


def password(text: str) -> str:
    """Always return a fixed 12 character mask, whatever the input."""
    return PASSWORD_MASK


def name(text: str) -> str:
    """Mask the second and third characters of a personal name.

    Examples:
        >>> name("ABCD")
        'A**D'
        >>> name("AB")
        'A**'
    """
    length = len(text)
    if length in (2, 3):
        return overlay(text, NAME_MASK, 1, 2)
    if length > 3:
        return overlay(text, NAME_MASK, 1, 3)
    return NAME_MASK


def id_number(text: str) -> str:
    """Mask the last four characters of a ten character ID number.

    Examples:
        >>> id_number("A123456789")
        'A12345****'
    """
    return overlay(text, ID_MASK, 6, 10)


def address(text: str) -> str:
    """Keep the first six characters of an address and mask the rest.

    The mask is always six characters long regardless of how much text it
    replaces.

    Examples:
        >>> address("台北市內湖區內湖路一段737巷1號1樓")
        '台北市內湖區******'
    """
    if len(text) <= 6:
        return ADDRESS_MASK
    return overlay(text, ADDRESS_MASK, 6, len(text))


def credit_card(text: str) -> str:
    """Mask six digits starting from the seventh character.

    Examples:
        >>> credit_card("1234567890123456")
        '123456******3456'
        >>> credit_card("123456789012345")
        '123456******345'
    """
    return overlay(text, CREDIT_CARD_MASK, 6, 12)


def email(text: str) -> str:
    """Keep the first three characters of the local part and the domain.

    Everything after the third character of the local part is replaced by
    a single four character mask, whatever its length.

    Input without an ``@`` is returned unchanged.

    Examples:
        >>> email("ggw.chang@gmail.com")
        'ggw****@gmail.com'
    """
    local, sep, domain = text.partition("@")
    if not sep:
        logger.debug("Email value has no '@' separator, leaving it unmasked")
        return text
    return overlay(local, EMAIL_MASK, 3, len(local)) + "@" + domain


def mobile(text: str) -> str:
    """Mask three digits starting from the fifth character.

    Examples:
        >>> mobile("0987654321")
        '0987***321'
    """
    return overlay(text, MOBILE_MASK, 4, 7)


def telephone(text: str) -> str:
    """Normalize a landline number and mask its last four digits.

    Parentheses, spaces and dashes are stripped first. Ten digit numbers
    are formatted as ``(AA)BBBB-****`` and eight digit numbers as
    ``BBBB-****``; any other length is returned stripped but unmasked.

    Examples:
        >>> telephone("0227993078")
        '(02)2799-****'
        >>> telephone("(02) 2799-3078")
        '(02)2799-****'
    """
    digits = text.translate(_TELEPHONE_SEPARATORS)
    length = len(digits)

    if length == 10:
        return f"({digits[:2]}){digits[2:6]}-{TELEPHONE_MASK}"
    if length == 8:
        return f"{digits[:4]}-{TELEPHONE_MASK}"
    return digits


LEAF_MASKERS: Dict[MaskCategory, Callable[[str], str]] = {
    MaskCategory.PASSWORD: password,
    MaskCategory.NAME: name,
    MaskCategory.ADDRESS: address,
    MaskCategory.EMAIL: email,
    MaskCategory.MOBILE: mobile,
    MaskCategory.TELEPHONE: telephone,
    MaskCategory.ID: id_number,
    MaskCategory.CREDIT_CARD: credit_card,
}


def apply_mask(category: MaskCategory, text: str) -> str:
    """Apply the leaf masker registered for ``category`` to ``text``.

    Raises:
        ValueError: If ``category`` is not a leaf category.
    """
    try:
        masker = LEAF_MASKERS[category]
    except KeyError:
        raise ValueError(f"{category} is not a leaf mask category") from None
    return masker(text)
