"""
Business Identifier Rules for the Valora validation engine

This module provides rules for identifiers with checksums or structural
constraints beyond a plain regular expression:

- credit_card: Luhn checksum, optional restriction to card networks
- iban: per-country length and ISO 7064 mod-97 checksum
- phone: international numbers, optional extension and country check
- ssn: U.S. Social Security Numbers, including the never-issued ranges
- url_slug: lowercase URL slugs

Each rule accepts the usual human formatting (spaces, hyphens, parentheses)
and normalizes it before checking. Non-string values fail.
"""

import re
from typing import Dict, Iterable, Optional

from ..exceptions import ConfigurationError
from .string import StringRule

CARD_PATTERNS: Dict[str, re.Pattern] = {
    "visa": re.compile(r"^4[0-9]{12}(?:[0-9]{3})?$"),
    "mastercard": re.compile(r"^5[1-5][0-9]{14}$"),
    "amex": re.compile(r"^3[47][0-9]{13}$"),
    "discover": re.compile(r"^6(?:011|5[0-9]{2})[0-9]{12}$"),
    "diners": re.compile(r"^3(?:0[0-5]|[68][0-9])[0-9]{11}$"),
    "jcb": re.compile(r"^(?:2131|1800|35\d{3})\d{11}$"),
}
UNKNOWN_CARD = "unknown"

IBAN_LENGTHS: Dict[str, int] = {
    "AD": 24, "AE": 23, "AL": 28, "AT": 20, "AZ": 28, "BA": 20, "BE": 16, "BG": 22,
    "BH": 22, "BR": 29, "BY": 28, "CH": 21, "CR": 22, "CY": 28, "CZ": 24, "DE": 22,
    "DK": 18, "DO": 28, "EE": 20, "EG": 29, "ES": 24, "FI": 18, "FO": 18, "FR": 27,
    "GB": 22, "GE": 22, "GI": 23, "GL": 18, "GR": 27, "GT": 28, "HR": 21, "HU": 28,
    "IE": 22, "IL": 23, "IS": 26, "IT": 27, "JO": 30, "KW": 30, "KZ": 20, "LB": 28,
    "LC": 32, "LI": 21, "LT": 20, "LU": 20, "LV": 21, "MC": 27, "MD": 24, "ME": 22,
    "MK": 19, "MR": 27, "MT": 31, "MU": 30, "NL": 18, "NO": 15, "PK": 24, "PL": 28,
    "PS": 29, "PT": 25, "QA": 29, "RO": 24, "RS": 22, "SA": 24, "SE": 24, "SI": 19,
    "SK": 24, "SM": 27, "TN": 24, "TR": 26, "UA": 29, "VA": 22, "VG": 24, "XK": 20,
}
IBAN_FORMAT = re.compile(r"^[A-Z]{2}\d{2}[A-Z0-9]+$")

PHONE_SEPARATORS = re.compile(r"[\s\-().]")
PHONE_EXTENSION = re.compile(r"^(.+?)(?:ext?|x)(\d+)$", re.IGNORECASE)
PHONE_NUMBER = re.compile(r"^\+?\d{7,15}$")
E164_NUMBER = re.compile(r"^\+\d{1,3}\d{4,14}$")
PHONE_COUNTRY_PATTERNS: Dict[str, re.Pattern] = {
    "US": re.compile(r"^\+?1\d{10}$"),
    "GB": re.compile(r"^\+?44\d{10}$"),
    "VN": re.compile(r"^\+?84\d{9,10}$"),
    "CN": re.compile(r"^\+?86\d{11}$"),
    "JP": re.compile(r"^\+?81\d{10}$"),
    "KR": re.compile(r"^\+?82\d{9,10}$"),
    "AU": re.compile(r"^\+?61\d{9}$"),
    "FR": re.compile(r"^\+?33\d{9}$"),
    "DE": re.compile(r"^\+?49\d{10,11}$"),
    "IT": re.compile(r"^\+?39\d{9,10}$"),
}

# Numbers publicly known to be invalid or misused
KNOWN_INVALID_SSNS = frozenset(
    [
        "123456789",
        "111111111",
        "222222222",
        "333333333",
        "444444444",
        "555555555",
        "777777777",
        "888888888",
        "999999999",
        "078051120",
    ]
)


def luhn_checksum_valid(digits: str) -> bool:
    """Return True if a digit string passes the Luhn checksum."""
    total = 0
    for position, char in enumerate(reversed(digits)):
        digit = int(char)
        if position % 2 == 1:
            digit *= 2
            if digit > 9:
                digit -= 9
        total += digit
    return total % 10 == 0


def detect_card_type(digits: str) -> str:
    """Return the card network for a normalized card number, or ``"unknown"``."""
    for card_type, pattern in CARD_PATTERNS.items():
        if pattern.match(digits):
            return card_type
    return UNKNOWN_CARD


def iban_checksum_valid(iban: str) -> bool:
    """Return True if a normalized IBAN passes the mod-97 check."""
    rearranged = iban[4:] + iban[:4]
    numeric = "".join(str(int(char, 36)) for char in rearranged)
    return int(numeric) % 97 == 1


class CreditCardRule(StringRule):
    """
    Rule for credit card numbers.

    Spaces and hyphens are ignored. The remaining characters must be digits
    passing the Luhn checksum and, if ``card_types`` is given, the detected
    network must be one of them.
    """

    name = "creditCard"
    default_message = "Must be a valid credit card number"

    def __init__(self, card_types: Optional[Iterable[str]] = None, message: Optional[str] = None):
        types = None
        if card_types is not None:
            types = tuple(t.lower() for t in card_types)
            unknown = [t for t in types if t not in CARD_PATTERNS and t != UNKNOWN_CARD]
            if unknown:
                raise ConfigurationError(f"unknown card type(s): {', '.join(unknown)}")
        super().__init__(message, card_types=types)

    def test(self, value: str) -> bool:
        digits = re.sub(r"[\s-]", "", value)
        if not digits.isdigit() or not digits.isascii():
            return False
        if not luhn_checksum_valid(digits):
            return False
        if self.card_types is not None:
            return detect_card_type(digits) in self.card_types
        return True


class IbanRule(StringRule):
    """
    Rule for International Bank Account Numbers.

    Spaces are ignored and letters are upper-cased before checking the
    country code, the country's fixed length and the mod-97 checksum.
    """

    name = "iban"
    default_message = "Must be a valid IBAN"

    def __init__(self, countries: Optional[Iterable[str]] = None, message: Optional[str] = None):
        allowed = tuple(c.upper() for c in countries) if countries is not None else None
        super().__init__(message, countries=allowed)

    def test(self, value: str) -> bool:
        iban = re.sub(r"\s", "", value).upper()
        if not IBAN_FORMAT.match(iban):
            return False
        country = iban[:2]
        expected_length = IBAN_LENGTHS.get(country)
        if expected_length is None:
            return False
        if self.countries is not None and country not in self.countries:
            return False
        if len(iban) != expected_length:
            return False
        return iban_checksum_valid(iban)


class PhoneRule(StringRule):
    """
    Rule for international phone numbers.

    Separators (spaces, hyphens, dots, parentheses) are ignored. The number
    must hold 7 to 15 digits, optionally led by ``+``, in which case it must
    also be E.164 shaped. With ``country`` set to a known ISO code the country
    prefix and length are checked as well; unknown codes skip that check.
    """

    name = "phone"
    default_message = "Must be a valid phone number"

    def __init__(
        self,
        country: Optional[str] = None,
        allow_extension: bool = False,
        message: Optional[str] = None,
    ):
        super().__init__(message, country=country.upper() if country else None, allow_extension=allow_extension)

    def test(self, value: str) -> bool:
        number = PHONE_SEPARATORS.sub("", value)
        if self.allow_extension:
            match = PHONE_EXTENSION.match(number)
            if match:
                number = match.group(1)
        if not PHONE_NUMBER.match(number):
            return False
        if number.startswith("+") and not E164_NUMBER.match(number):
            return False
        if self.country is not None:
            pattern = PHONE_COUNTRY_PATTERNS.get(self.country)
            if pattern is not None and not pattern.match(number):
                return False
        return True


class SsnRule(StringRule):
    """Rule for U.S. Social Security Numbers, with or without hyphens."""

    name = "ssn"
    default_message = "Must be a valid SSN"

    def test(self, value: str) -> bool:
        digits = value.replace("-", "")
        if len(digits) != 9 or not digits.isdigit() or not digits.isascii():
            return False
        area, group, serial = int(digits[:3]), digits[3:5], digits[5:]
        if area == 0 or area == 666 or area >= 900:
            return False
        if group == "00" or serial == "0000":
            return False
        return digits not in KNOWN_INVALID_SSNS


class UrlSlugRule(StringRule):
    """
    Rule for URL slugs.

    Lowercase letters, digits and single hyphens (and underscores when
    ``allow_underscores`` is set), never leading or trailing.
    """

    name = "urlSlug"
    default_message = "Must be a valid URL slug"

    def __init__(
        self,
        min_length: Optional[int] = None,
        max_length: Optional[int] = None,
        allow_underscores: bool = False,
        message: Optional[str] = None,
    ):
        if min_length is not None and max_length is not None and min_length > max_length:
            raise ConfigurationError("url_slug min_length exceeds max_length")
        chars = r"[a-z0-9_-]" if allow_underscores else r"[a-z0-9-]"
        super().__init__(
            message,
            min_length=min_length,
            max_length=max_length,
            allow_underscores=allow_underscores,
            regex=re.compile(rf"^{chars}+$"),
        )

    def test(self, value: str) -> bool:
        if not self.regex.match(value):
            return False
        if value[0] in "-_" or value[-1] in "-_":
            return False
        if re.search(r"[-_]{2,}", value):
            return False
        if self.min_length is not None and len(value) < self.min_length:
            return False
        if self.max_length is not None and len(value) > self.max_length:
            return False
        return True


def credit_card(card_types: Optional[Iterable[str]] = None, message: Optional[str] = None) -> CreditCardRule:
    return CreditCardRule(card_types, message)


def iban(countries: Optional[Iterable[str]] = None, message: Optional[str] = None) -> IbanRule:
    return IbanRule(countries, message)


def phone(country: Optional[str] = None, allow_extension: bool = False, message: Optional[str] = None) -> PhoneRule:
    return PhoneRule(country, allow_extension, message)


def ssn(message: Optional[str] = None) -> SsnRule:
    return SsnRule(message)


def url_slug(
    min_length: Optional[int] = None,
    max_length: Optional[int] = None,
    allow_underscores: bool = False,
    message: Optional[str] = None,
) -> UrlSlugRule:
    return UrlSlugRule(min_length, max_length, allow_underscores, message)
