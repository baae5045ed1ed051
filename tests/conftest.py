"""Shared fixtures for CloakStruct tests."""

from collections.abc import Generator

import pytest

from cloakstruct import MaskingConfig, StructWalker, reset_masking_config
from tests.utils.records import Card, Customer, Profile


@pytest.fixture(autouse=True)
def _fresh_masking_config() -> Generator[None, None, None]:
    """Make every test read the global configuration from a clean slate."""
    reset_masking_config()
    yield
    reset_masking_config()


@pytest.fixture
def walker() -> StructWalker:
    """Walker with default behavior, independent of the environment."""
    return StructWalker(config=MaskingConfig())


@pytest.fixture
def skipping_walker() -> StructWalker:
    """Walker that copies non-text leaf fields instead of failing."""
    return StructWalker(config=MaskingConfig(non_text_fields="skip"))


@pytest.fixture
def profile() -> Profile:
    """Profile with realistic values for every category."""
    return Profile(
        name="王小明",
        email="ggw.chang@gmail.com",
        password="hunter2",
        id="A123456789",
        address="台北市內湖區內湖路一段737巷1號1樓",
        mobile="0987654321",
        telephone="(02) 2799-3078",
        credit="1234567890123456",
        nickname="ming",
        tags=["vip"],
    )


@pytest.fixture
def three_level_profile(profile: Profile) -> Profile:
    """Profile nested two levels deep inside other profiles."""
    middle = Profile(
        name="ABCD",
        email="middle.person@example.com",
        password="pw",
        id="B987654321",
        address="Somewhere Road 12",
        mobile="0911222333",
        telephone="27993078",
        credit="123456789012345",
        profile=profile,
    )
    return Profile(
        name="Top",
        email="top.level@example.org",
        password="secret",
        id="C111222333",
        address="Another Street 99",
        mobile="0922333444",
        telephone="0227993078",
        credit="4000123412341234",
        profile=middle,
    )


@pytest.fixture
def card() -> Card:
    return Card(holder="Jane Doe", number="1234567890123456")


@pytest.fixture
def customer() -> Customer:
    return Customer(
        name="Alice",
        phone="0987654321",
        note="prefers email",
        referrer=Customer(name="Bob", phone="0911222333"),
    )
