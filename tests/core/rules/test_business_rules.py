"""
Tests for business identifier rules.
"""

import pytest

from valora.core.exceptions import ConfigurationError
from valora.core.rules import credit_card, iban, phone, ssn, url_slug
from valora.core.rules.business import detect_card_type, iban_checksum_valid, luhn_checksum_valid


@pytest.mark.parametrize(
    "number,card_type",
    [
        ("4111111111111111", "visa"),
        ("5555555555554444", "mastercard"),
        ("378282246310005", "amex"),
        ("6011111111111117", "discover"),
        ("1234567812345670", "unknown"),
    ],
)
def test_detect_card_type(number, card_type):
    """Test card network detection."""
    assert detect_card_type(number) == card_type


def test_luhn():
    """Test the Luhn checksum."""
    assert luhn_checksum_valid("4111111111111111")
    assert not luhn_checksum_valid("4111111111111112")


@pytest.mark.parametrize(
    "rule,value,passes",
    [
        (credit_card(), "4111 1111 1111 1111", True),
        (credit_card(), "4111-1111-1111-1112", False),
        (credit_card(), "4111abcd11111111", False),
        (credit_card(["amex"]), "4111111111111111", False),
        (credit_card(["AMEX"]), "378282246310005", True),
        (iban(), "GB82 WEST 1234 5698 7654 32", True),
        (iban(), "de89370400440532013000", True),
        (iban(), "DE89370400440532013001", False),
        (iban(), "DE8937040044053201300", False),
        (iban(), "ZZ89370400440532013000", False),
        (iban(["FR"]), "DE89370400440532013000", False),
        (phone(), "+1 (555) 123-4567", True),
        (phone(), "12345", False),
        (phone(country="US"), "+1 555 123 4567", True),
        (phone(country="GB"), "+1 555 123 4567", False),
        (phone(country="XX"), "+1 555 123 4567", True),
        (phone(allow_extension=True), "555-123-4567 ext 89", True),
        (phone(), "555-123-4567 ext 89", False),
        (ssn(), "219-09-9999", True),
        (ssn(), "219099999", True),
        (ssn(), "000-12-3456", False),
        (ssn(), "666-12-3456", False),
        (ssn(), "900-12-3456", False),
        (ssn(), "219-00-9999", False),
        (ssn(), "219-09-0000", False),
        (ssn(), "078-05-1120", False),
        (ssn(), "123-45-6789", False),
        (url_slug(), "hello-world-2", True),
        (url_slug(), "Hello-world", False),
        (url_slug(), "-hello", False),
        (url_slug(), "hello--world", False),
        (url_slug(), "hello_world", False),
        (url_slug(allow_underscores=True), "hello_world", True),
        (url_slug(min_length=6), "hello", False),
        (url_slug(max_length=3), "hello", False),
    ],
)
def test_business_rules(run, rule, value, passes):
    """Test each business rule against passing and failing values."""
    assert (run(rule, value) is None) is passes


def test_iban_checksum():
    """Test the mod-97 checksum on a normalized IBAN."""
    assert iban_checksum_valid("GB82WEST12345698765432")
    assert not iban_checksum_valid("GB83WEST12345698765432")


def test_override_and_default_messages(run):
    """Test business rules honor overrides like every other family."""
    assert run(credit_card(), "1").message == "Must be a valid credit card number"
    assert run(iban(message="Bad IBAN"), "x").message == "Bad IBAN"


def test_non_strings_fail(run):
    """Test identifiers given as numbers fail instead of raising."""
    assert run(credit_card(), 4111111111111111) is not None


def test_unknown_card_type():
    """Test restricting to an unknown card network is a configuration error."""
    with pytest.raises(ConfigurationError):
        credit_card(["bitcoin"])
