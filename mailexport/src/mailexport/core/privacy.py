"""mailexport.core.privacy

What:
  Category-based redaction of personal and security-sensitive data in export
  text. Each :class:`Category` owns an ordered list of patterns and a fixed
  placeholder such as ``[REDACTED_CARD]``.

Why:
  Exported bodies end up in spreadsheets and analysis tools that should never
  see card numbers, one-time codes or street addresses. Operators still need
  to keep some data (order numbers, amounts) for analysis, so every category
  can be toggled independently.

How:
  The registry is an immutable tuple of :class:`CategorySpec` objects,
  declared and applied in a fixed order. :func:`sanitize` walks the registry,
  skips disabled categories and, for every pattern, counts and replaces all
  matches in one ``subn`` pass over the current text. Later patterns therefore
  see the output of earlier ones.

Interfaces:
  :class:`Category`, :class:`CategorySpec`, :class:`SanitizeConfig`,
  :class:`RedactionResult`, :data:`REGISTRY`, :func:`sanitize`,
  :func:`default_categories`, :func:`all_categories`, :func:`category_spec`,
  :func:`parse_categories`.

Invariants & Safety:
  - Patterns are compiled once at import and carry no scan state, so the
    registry is shared freely across threads.
  - Placeholders contain no digits and form a single word inside brackets,
    so no pattern matches inside one and sanitized output is stable under a
    second pass.
  - :attr:`RedactionResult.per_category` always lists every category.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Iterable, Mapping, Optional, Pattern, Tuple

from ..utils.regex import compile_pattern
from .addresses import address_patterns


class Category(str, Enum):
    """Redaction categories in application order."""

    CREDIT_CARDS = "credit_cards"
    BANK_ACCOUNTS = "bank_accounts"
    TAX_IDS = "tax_ids"
    PASSWORDS = "passwords"
    API_KEYS = "api_keys"
    OTP_CODES = "otp_codes"
    PHONE_NUMBERS = "phone_numbers"
    PHYSICAL_ADDRESSES = "physical_addresses"
    IP_ADDRESSES = "ip_addresses"
    GOVERNMENT_IDS = "government_ids"
    TOKEN_URLS = "token_urls"
    CASE_NUMBERS = "case_numbers"
    CLAIM_NUMBERS = "claim_numbers"
    AUTH_CODES = "auth_codes"
    DEVICE_IDS = "device_ids"
    EMPLOYEE_IDS = "employee_ids"
    EMAIL_ADDRESSES = "email_addresses"
    DATES_OF_BIRTH = "dates_of_birth"
    AGES = "ages"
    ORDER_NUMBERS = "order_numbers"
    TRACKING_NUMBERS = "tracking_numbers"
    BOOKING_REFERENCES = "booking_references"
    MEMBER_IDS = "member_ids"
    VEHICLE_IDS = "vehicle_ids"
    MEDICAL_IDS = "medical_ids"
    FINANCIAL_AMOUNTS = "financial_amounts"
    REGULAR_URLS = "regular_urls"


@dataclass(frozen=True)
class CategorySpec:
    """Static description of one redaction category.

    Attributes:
      category: Category key.
      name: Short human-readable title.
      description: What the category covers.
      default_enabled: Whether the category is on when none are configured.
      patterns: Compiled patterns, applied in order.
      replacement: Placeholder substituted for every match.
    """

    category: Category
    name: str
    description: str
    default_enabled: bool
    patterns: Tuple[Pattern[str], ...]
    replacement: str


@dataclass(frozen=True)
class SanitizeConfig:
    """Whether redaction runs and which categories it applies."""

    enabled: bool = False
    categories: FrozenSet[Category] = field(default_factory=lambda: default_categories())


@dataclass(frozen=True)
class RedactionResult:
    """Redacted text plus match counts."""

    text: str
    total_count: int
    per_category: Mapping[Category, int]


_I = re.IGNORECASE | re.ASCII
_CS = re.ASCII

# Shared "#", "number", "no." suffix used by the contextual patterns.
_NUM = r"(?:#|number|no\.?)"


def _compile(sources: Iterable[Tuple[str, int]]) -> Tuple[Pattern[str], ...]:
    return tuple(compile_pattern(source, flags) for source, flags in sources)


_CREDIT_CARD_PATTERNS = (
    (r"\b4[0-9]{3}[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}\b", _CS),
    (r"\b(?:5[1-5][0-9]{2}|2[2-7][0-9]{2})[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}\b", _CS),
    (r"\b3[47][0-9]{2}[\s\-]?[0-9]{6}[\s\-]?[0-9]{5}\b", _CS),
    (r"\b6(?:011|5[0-9]{2}|4[4-9][0-9])[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}[\s\-]?[0-9]{4}\b", _CS),
    (r"\b[0-9]{4}[\s\-][0-9]{4}[\s\-][0-9]{4}[\s\-][0-9]{4}\b", _CS),
    (r"\b(?:card|ending|ends|last\s*4)(?:\s+(?:in|digits?|number)?:?\s*)[0-9]{4}\b", _I),
    # masked forms: ..1234, **1234, xx1234, (...1234), ************1234
    (r"\.{2,}[0-9]{4}\b", _CS),
    (r"\*{2,}[0-9]{4}\b", _CS),
    (r"[xX]{2,}[0-9]{4}\b", _CS),
    (r"\(\.\.\.[0-9]{4}\)", _CS),
    (r"[\*xX]{4,}[0-9]{4}\b", _I),
    (r"\b(?:your|my|the)\s+(?:\w+\s+)?card\s+[0-9]{8,20}\b", _I),
    (rf"\bcard\s*{_NUM}?:?\s*[0-9]{{8,20}}\b", _I),
    (rf"\bcontrol\s*{_NUM}?:?\s*[0-9]{{8,20}}\b", _I),
    (rf"\b(?:\w+\s+)?agreement\s*{_NUM}?:?\s*[0-9]{{8,20}}\b", _I),
    (r"\bnumber:?\s*[0-9]{8,20}\b", _I),
)

_BANK_ACCOUNT_PATTERNS = (
    (rf"\b(?:routing|aba|transit)(?:\s*{_NUM}?:?\s*)[0-9]{{9}}\b", _I),
    (rf"\b(?:account|acct)(?:\s*{_NUM}?:?\s*)[0-9]{{6,17}}\b", _I),
    (r"\b[A-Z]{2}[0-9]{2}[\s]?[A-Z0-9]{4}[\s]?[0-9]{4}[\s]?[0-9]{4}[\s]?[0-9]{4}[\s]?[0-9]{0,4}\b", _CS),
    (r"\b[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}(?:[A-Z0-9]{3})?\b", _CS),
)

_TAX_ID_PATTERNS = (
    (r"\b[0-9]{3}[\s\-][0-9]{2}[\s\-][0-9]{4}\b", _CS),
    (r"\b[0-9]{2}[\s\-][0-9]{7}\b", _CS),
    (rf"\b(?:ssn|social\s*security|tin|tax\s*id|ein|itin)(?:\s*{_NUM}?:?\s*)[0-9\-\s]{{9,11}}\b", _I),
    (r"\b[0-9]{3}[\s\-][0-9]{3}[\s\-][0-9]{3}\b", _CS),
    (r"\b[A-Z]{2}[0-9]{6}[A-Z]\b", _CS),
    (rf"\b(?:tfn|tax\s*file)(?:\s*{_NUM}?:?\s*)[0-9]{{3}}[\s]?[0-9]{{3}}[\s]?[0-9]{{3}}\b", _I),
)

_PASSWORD_PATTERNS = (
    (r"\b(?:password|passwd|pwd|pin|passcode|secret)(?:\s*(?:is|was|:)\s*)[\"']?[^\s\"']{4,50}[\"']?", _I),
    (
        r"\b(?:temporary|temp|new|initial|default)\s+(?:password|pwd|pin)(?:\s*(?:is|was|:)\s*)"
        r"[\"']?[^\s\"']{4,50}[\"']?",
        _I,
    ),
    (r"(?:your|the)\s+(?:password|pin|passcode)\s+(?:is|was|:)\s*[\"']?[^\s\"'\n]{4,50}[\"']?", _I),
)

_API_KEY_PATTERNS = (
    (r"\b(?:AKIA|ABIA|ACCA|ASIA)[A-Z0-9]{16}\b", _CS),
    (r"\b(?:aws[_\-]?secret|secret[_\-]?key)[\"']?\s*[:=]\s*[\"']?[A-Za-z0-9/+=]{40}[\"']?", _I),
    (r"\bAIza[A-Za-z0-9_-]{35}\b", _CS),
    (r"\b(?:sk|pk|rk)_(?:live|test)_[A-Za-z0-9]{24,}\b", _CS),
    (r"\b(?:ghp|gho|ghu|ghs|ghr)_[A-Za-z0-9]{36,}\b", _CS),
    (r"\bxox[baprs]-[A-Za-z0-9\-]{10,}\b", _CS),
    (
        r"\b(?:api[_\-]?key|apikey|access[_\-]?token|auth[_\-]?token|bearer)[\"']?\s*[:=]\s*[\"']?"
        r"[A-Za-z0-9_\-]{20,}[\"']?",
        _I,
    ),
    (r"\bBearer\s+[A-Za-z0-9_\-.]+", _CS),
    (r"\beyJ[A-Za-z0-9_-]*\.eyJ[A-Za-z0-9_-]*\.[A-Za-z0-9_-]*", _CS),
)

_OTP_CODE_PATTERNS = (
    (r"\b(?:verification|confirmation|security|authentication|otp)\s+code\s*(?:is|was)?:?\s*[0-9]{4,8}\b", _I),
    (r"\bone[\s\-]?time\s+(?:code|password|passcode)[^0-9]*[0-9]{4,8}\b", _I),
    (r"\bcode\s+(?:is\s+)?(?:only\s+)?valid[^0-9]*[0-9]{4,8}\b", _I),
    (r"\b(?:your|the)\s+(?:code|pin|otp|passcode)\s*(?:is|was)?:?\s*[0-9]{4,8}\b", _I),
    (r"\bcode\s*(?:is|was)?:?\s*[0-9]{4,8}\b", _I),
    (r"\b(?:pin|otp)\s*:?\s*[0-9]{4,8}\b", _I),
    (r"\b(?:2fa|two[\s\-]?factor|mfa)\s*(?:code)?\s*(?:is|was)?:?\s*[0-9]{4,8}\b", _I),
    (r"\benter\s+(?:code\s+)?[0-9]{4,8}\b", _I),
    (r"\bis\s*:\s*[0-9]{6}\b", _I),
    (r"\bvalid\s+(?:for\s+)?[0-9]+\s*(?:minutes?|mins?|hours?|hrs?)[^0-9]*[0-9]{4,8}\b", _I),
)

_PHONE_NUMBER_PATTERNS = (
    (r"\+1[0-9]{10}\b", _CS),
    (r"\b(?:\+?1[\s\-.]?)?\(?[0-9]{3}\)?[\s\-.][0-9]{3}[\s\-.][0-9]{4}\b", _CS),
    (r"\b[2-9][0-9]{2}[2-9][0-9]{6}\b", _CS),
    (r"\+[0-9]{1,3}[\s\-.][0-9]{1,4}[\s\-.][0-9]{1,4}[\s\-.][0-9]{1,4}[\s\-.]?[0-9]{0,4}\b", _CS),
    (r"\+[0-9]{11,15}\b", _CS),
    (r"\b(?:\+44|0)[\s\-.]?[0-9]{4}[\s\-.]?[0-9]{6}\b", _CS),
    (rf"\b(?:phone|tel|mobile|cell|fax|call)(?:\s*{_NUM}?:?\s*)[+]?[0-9\s\-.()]{{7,20}}\b", _I),
)

_IP_ADDRESS_PATTERNS = (
    (r"\b(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\.){3}(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\b", _CS),
    (r"\b(?:[0-9a-fA-F]{1,4}:){7}[0-9a-fA-F]{1,4}\b", _CS),
    (r"\b(?:[0-9a-fA-F]{1,4}:){1,7}:\b", _CS),
    (r"\b::(?:[0-9a-fA-F]{1,4}:){0,6}[0-9a-fA-F]{1,4}\b", _CS),
)

_GOVERNMENT_ID_PATTERNS = (
    (rf"\b(?:passport)(?:\s*{_NUM}?:?\s*)[A-Z0-9]{{6,12}}\b", _I),
    (rf"\b(?:driver'?s?\s*licen[sc]e|dl|license)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{5,20}}\b", _I),
    (rf"\b(?:national\s*id|id\s*card|identity\s*card)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{5,20}}\b", _I),
    (rf"\b(?:medicare)(?:\s*{_NUM}?:?\s*)[0-9]{{10,11}}\b", _I),
    (rf"\b(?:nhs)(?:\s*{_NUM}?:?\s*)[0-9]{{3}}[\s\-]?[0-9]{{3}}[\s\-]?[0-9]{{4}}\b", _I),
)

_TOKEN_URL_PATTERNS = (
    (
        r"https?://[^\s]*(?:reset|password|recover|forgot)[^\s]*[?&][^\s]*(?:token|key|code|hash|id)="
        r"[^\s&\"']{10,}[^\s]*",
        _I,
    ),
    (
        r"https?://[^\s]*(?:verify|confirm|activate|validate)[^\s]*[?&][^\s]*(?:token|key|code|hash|id)="
        r"[^\s&\"']{10,}[^\s]*",
        _I,
    ),
    (r"https?://[^\s]*(?:unsubscribe|optout|opt-out|preferences)[^\s]*[?&][^\s]*=[^\s&\"']{20,}[^\s]*", _I),
    (r"https?://[^\s]*(?:magic|login|signin|auth)[^\s]*[?&][^\s]*(?:token|key|code)=[^\s&\"']{10,}[^\s]*", _I),
    (r"https?://[^\s]*[?&](?:track|click|open|view|pixel)[^\s]*=[^\s&\"']{20,}[^\s]*", _I),
    (
        r"https?://[^\s<>\"']*[?&][a-z_]*(?:token|key|hash|signature|sig|auth|session)="
        r"[A-Za-z0-9_\-.%]{30,}[^\s<>\"']*",
        _I,
    ),
    (
        r"https?://[^\s<>\"']*[?&;](?:payeeId|bu|uid|userId|user_id|trkId|euid|cnvId|mesgId|osub|segname|"
        r"plmtId|ndid|_ei_|username|pcid)=[A-Za-z0-9_\-.%]+[^\s<>\"']*",
        _I,
    ),
    (r"https?://[^\s<>\"']*[?&][a-z_]*[iI]d=[0-9]{8,}[^\s<>\"']*", _I),
)

_CASE_NUMBER_PATTERNS = (
    (r"\b(?:case|ticket|incident|issue)(?:\s*(?:#|number|no\.?|id)?:?\s*)[0-9]{5,}\b", _I),
    (
        r"\b(?:support|service|help)(?:\s*(?:ticket|case|request))?(?:\s*(?:#|number|no\.?|id)?:?\s*)"
        r"[0-9]{5,}\b",
        _I,
    ),
)

_CLAIM_NUMBER_PATTERNS = (
    (r"\b(?:claim)(?:\s*(?:#|number|no\.?|id)?:?\s*)[0-9]{5,}\b", _I),
    (
        r"\b(?:warranty|dispute|refund)(?:\s*(?:claim|case|request))?(?:\s*(?:#|number|no\.?|id)?:?\s*)"
        r"[0-9]{5,}\b",
        _I,
    ),
)

_AUTH_CODE_PATTERNS = (
    (r"\b(?:auth(?:orization)?|approval)(?:\.?\s*(?:code|#|number|no\.?)?:?\s*)[A-Z0-9]{4,}\b", _I),
    (r"\b(?:transaction|trans|txn)(?:\s*(?:auth|code|#|id)?:?\s*)[A-Z0-9]{5,}\b", _I),
)

_DEVICE_ID_PATTERNS = (
    (r"\b(?:device|hardware|serial|imei|udid|uuid)(?:[\s\-_]*(?:id|number|#)?:?\s*)[A-Z0-9\-]{6,}\b", _I),
    (r"\b(?:[0-9A-Fa-f]{2}[:\-]){5}[0-9A-Fa-f]{2}\b", _CS),
)

_EMPLOYEE_ID_PATTERNS = (
    (
        r"\b(?:employee|emp|staff|worker)(?:\s*(?:id|#|number|no\.?)?(?:\s*(?:is|number|:))?\s*)"
        r"[A-Z0-9]{5,}\b",
        _I,
    ),
    (r"\b(?:student)(?:\s*(?:id|#|number|no\.?)?:?\s*)[A-Z0-9]{5,}\b", _I),
    (rf"\b(?:badge|id)(?:\s*{_NUM}?:?\s*)[A-Z0-9]{{5,}}\b", _I),
)

_EMAIL_ADDRESS_PATTERNS = ((r"\b[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Z|a-z]{2,}\b", _CS),)

_DATE_OF_BIRTH_PATTERNS = (
    (
        r"\b(?:dob|date\s*of\s*birth|birth\s*date|born|birthday)(?:\s*(?:is|was|:)\s*)"
        r"[0-9]{1,2}[\s/\-.][0-9]{1,2}[\s/\-.][0-9]{2,4}\b",
        _I,
    ),
    (r"\b(?:born\s+(?:on\s+)?)[A-Za-z]+\s+[0-9]{1,2},?\s+[0-9]{4}\b", _I),
    (r"\b(?:birthday|dob)(?:\s*:?\s*)[0-9]{1,2}[\s/\-][0-9]{1,2}[\s/\-][0-9]{2,4}\b", _I),
)

_AGE_PATTERNS = (
    (
        r"\b(?:i\s+am|i'm|he\s+is|she\s+is|they\s+are)\s+[0-9]{1,3}\s+(?:years?\s+old|yrs?\s+old|y\.?o\.?)\b",
        _I,
    ),
    (r"\b(?:age[d]?|age\s*:)\s*[0-9]{1,3}\b", _I),
    (r"\b[0-9]{1,3}[\s\-]?year[\s\-]?old\b", _I),
)

_ORDER_NUMBER_PATTERNS = (
    (
        r"\b(?:order|confirmation|invoice|receipt|transaction|purchase)(?:\s*(?:#|number|no\.?|id)?:?\s*)"
        r"\(?[A-Z0-9\-]{6,20}\)?\b",
        _I,
    ),
    (r"\b(?:order|conf|inv)(?:\s*#?\s*)\(?[A-Z0-9\-]{6,20}\)?\b", _I),
    (rf"\b(?:reference|ref)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{6,20}}\b", _I),
)

_TRACKING_NUMBER_PATTERNS = (
    (r"\b1Z[A-Z0-9]{16}\b", _I),
    (r"\b(?:fedex|fed\s*ex)(?:\s*(?:#|tracking)?:?\s*)[0-9]{12,34}\b", _I),
    (r"\b(?:usps|postal)(?:\s*(?:#|tracking)?:?\s*)[0-9]{20,22}\b", _I),
    (rf"\b(?:tracking|shipment)(?:\s*{_NUM}?:?\s*)[A-Z0-9]{{10,30}}\b", _I),
    (r"\b(?:dhl)(?:\s*(?:#|tracking)?:?\s*)[0-9]{10,11}\b", _I),
)

_BOOKING_REFERENCE_PATTERNS = (
    (r"\b(?:pnr|booking|confirmation|reservation)(?:\s*(?:#|code|number|ref)?:?\s*)[A-Z0-9]{6}\b", _I),
    (r"\b(?:flight|airline)(?:\s*(?:confirmation|booking|ref)?:?\s*)[A-Z0-9]{6}\b", _I),
    (r"\b(?:hotel|resort|airbnb)(?:\s*(?:confirmation|booking|reservation)?:?\s*)[A-Z0-9]{6,12}\b", _I),
    (r"\b(?:record\s*locator|locator)(?:\s*:?\s*)[A-Z0-9]{6}\b", _I),
)

_MEMBER_ID_PATTERNS = (
    (r"\b(?:member|membership)(?:\s*(?:#|number|no\.?|id)?:?\s*)[A-Z0-9\-]{6,20}\b", _I),
    (r"\b(?:loyalty|rewards?|points)(?:\s*(?:#|number|no\.?|id)?:?\s*)[A-Z0-9\-]{6,20}\b", _I),
    (r"\b(?:customer|client|user)(?:\s*(?:#|number|no\.?|id)?:?\s*)[A-Z0-9\-]{6,20}\b", _I),
    (rf"\b(?:account|acct)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{6,15}}\b", _I),
    (r"\b(?:subscriber|subscription)(?:\s*(?:#|number|no\.?|id)?:?\s*)[A-Z0-9\-]{6,20}\b", _I),
    (r"\b(?:RR|FF|MP|SK|AA|UA|DL|WN)(?:\s*#?\s*)[0-9]{8,12}\b", _I),
    (
        r"\b(?:rapid\s*rewards?|mileage\s*plus|sky\s*miles?|aadvantage|frequent\s*flyer)"
        r"(?:\s*(?:#|number|no\.?|id|account)?:?\s*)[0-9]{8,12}\b",
        _I,
    ),
    (r"\b[A-Za-z]+\s*ID:?\s*[A-Z0-9\-]{4,20}\b", _I),
)

_VEHICLE_ID_PATTERNS = (
    (rf"\b(?:vin|vehicle\s*identification)(?:\s*{_NUM}?:?\s*)[A-HJ-NPR-Z0-9]{{17}}\b", _I),
    (r"\b[A-HJ-NPR-Z0-9]{17}\b", _CS),
    (r"\b(?:license\s*plate|plate\s*(?:#|number)|registration)(?:\s*:?\s*)[A-Z0-9\-\s]{4,10}\b", _I),
)

_MEDICAL_ID_PATTERNS = (
    (rf"\b(?:mrn|medical\s*record|patient\s*id)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{6,20}}\b", _I),
    (r"\b(?:insurance\s*id|policy\s*(?:#|number)|member\s*id)(?:\s*:?\s*)[A-Z0-9\-]{6,20}\b", _I),
    (rf"\b(?:prescription|rx)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{6,15}}\b", _I),
    (rf"\b(?:group)(?:\s*{_NUM}?:?\s*)[A-Z0-9\-]{{4,15}}\b", _I),
)

_FINANCIAL_AMOUNT_PATTERNS = (
    (r"\$[0-9,]+\.[0-9]{2}\b", _CS),
    (r"\$[0-9,]+\b", _CS),
    (r"\$\s*[0-9]+\s*\.\s*[0-9]{2}\b", _CS),
    (
        r"\b(?:amount|balance|total|payment|price|cost|fee|charge)(?:\s*(?:of|is|was|:)?\s*)"
        r"\$[0-9,]+(?:\.[0-9]{2})?\b",
        _I,
    ),
)

_REGULAR_URL_PATTERNS = ((r"https?://[^\s<>\"']+", _I),)


def _spec(
    category: Category,
    name: str,
    description: str,
    default_enabled: bool,
    patterns: Tuple[Pattern[str], ...],
    token: str,
) -> CategorySpec:
    return CategorySpec(
        category=category,
        name=name,
        description=description,
        default_enabled=default_enabled,
        patterns=patterns,
        replacement=f"[REDACTED_{token}]",
    )


REGISTRY: Tuple[CategorySpec, ...] = (
    _spec(Category.CREDIT_CARDS, "Credit/Debit Cards", "Visa, Mastercard, Amex, Discover card numbers",
          True, _compile(_CREDIT_CARD_PATTERNS), "CARD"),
    _spec(Category.BANK_ACCOUNTS, "Bank Accounts", "Bank account numbers, routing numbers, IBAN",
          True, _compile(_BANK_ACCOUNT_PATTERNS), "BANK"),
    _spec(Category.TAX_IDS, "Tax IDs", "SSN, EIN, TIN, and international tax IDs",
          True, _compile(_TAX_ID_PATTERNS), "TAX_ID"),
    _spec(Category.PASSWORDS, "Passwords", "Passwords, PINs, and security credentials",
          True, _compile(_PASSWORD_PATTERNS), "PASSWORD"),
    _spec(Category.API_KEYS, "API Keys & Tokens", "API keys, access tokens, secret keys",
          True, _compile(_API_KEY_PATTERNS), "API_KEY"),
    _spec(Category.OTP_CODES, "Verification Codes", "2FA codes, OTPs, verification codes",
          True, _compile(_OTP_CODE_PATTERNS), "CODE"),
    _spec(Category.PHONE_NUMBERS, "Phone Numbers", "Phone numbers in various formats",
          True, _compile(_PHONE_NUMBER_PATTERNS), "PHONE"),
    _spec(Category.PHYSICAL_ADDRESSES, "Physical Addresses", "Street addresses and postal codes",
          True, address_patterns(), "ADDRESS"),
    _spec(Category.IP_ADDRESSES, "IP Addresses", "IPv4 and IPv6 addresses",
          True, _compile(_IP_ADDRESS_PATTERNS), "IP"),
    _spec(Category.GOVERNMENT_IDS, "Government IDs", "Passport, driver's license, national ID numbers",
          True, _compile(_GOVERNMENT_ID_PATTERNS), "GOV_ID"),
    _spec(Category.TOKEN_URLS, "URLs with Tokens", "Password reset links, unsubscribe links, tracking URLs",
          True, _compile(_TOKEN_URL_PATTERNS), "URL"),
    _spec(Category.CASE_NUMBERS, "Case/Ticket Numbers", "Support case numbers, ticket IDs, incident numbers",
          True, _compile(_CASE_NUMBER_PATTERNS), "CASE"),
    _spec(Category.CLAIM_NUMBERS, "Claim Numbers", "Insurance claims, warranty claims, dispute IDs",
          True, _compile(_CLAIM_NUMBER_PATTERNS), "CLAIM"),
    _spec(Category.AUTH_CODES, "Authorization Codes", "Transaction auth codes, approval codes",
          True, _compile(_AUTH_CODE_PATTERNS), "AUTH"),
    _spec(Category.DEVICE_IDS, "Device IDs", "Device identifiers, hardware IDs",
          True, _compile(_DEVICE_ID_PATTERNS), "DEVICE"),
    _spec(Category.EMPLOYEE_IDS, "Employee/Student IDs", "Employee ID numbers, student IDs",
          True, _compile(_EMPLOYEE_ID_PATTERNS), "EMP_ID"),
    _spec(Category.EMAIL_ADDRESSES, "Email Addresses (in body)", "Email addresses mentioned in email body text",
          False, _compile(_EMAIL_ADDRESS_PATTERNS), "EMAIL"),
    _spec(Category.DATES_OF_BIRTH, "Dates of Birth", "Birth dates and DOB references",
          True, _compile(_DATE_OF_BIRTH_PATTERNS), "DOB"),
    _spec(Category.AGES, "Ages", 'Specific age mentions (e.g., "I am 34 years old")',
          True, _compile(_AGE_PATTERNS), "AGE"),
    _spec(Category.ORDER_NUMBERS, "Order Numbers", "Order IDs, confirmation numbers, invoice numbers",
          False, _compile(_ORDER_NUMBER_PATTERNS), "ORDER"),
    _spec(Category.TRACKING_NUMBERS, "Tracking Numbers", "Package tracking numbers (UPS, FedEx, USPS, etc.)",
          False, _compile(_TRACKING_NUMBER_PATTERNS), "TRACKING"),
    _spec(Category.BOOKING_REFERENCES, "Booking References", "Flight, hotel, and travel confirmation codes",
          False, _compile(_BOOKING_REFERENCE_PATTERNS), "BOOKING"),
    _spec(Category.MEMBER_IDS, "Member/Loyalty IDs", "Membership numbers, loyalty program IDs, customer IDs",
          True, _compile(_MEMBER_ID_PATTERNS), "MEMBER_ID"),
    _spec(Category.VEHICLE_IDS, "Vehicle IDs", "License plates, VIN numbers",
          True, _compile(_VEHICLE_ID_PATTERNS), "VEHICLE"),
    _spec(Category.MEDICAL_IDS, "Medical IDs", "Medical record numbers, insurance IDs, prescription numbers",
          True, _compile(_MEDICAL_ID_PATTERNS), "MEDICAL"),
    _spec(Category.FINANCIAL_AMOUNTS, "Financial Amounts", "Dollar amounts, prices, balances, payments",
          False, _compile(_FINANCIAL_AMOUNT_PATTERNS), "AMOUNT"),
    _spec(Category.REGULAR_URLS, "All URLs", "All URLs (not just those with tokens)",
          False, _compile(_REGULAR_URL_PATTERNS), "URL"),
)

_BY_CATEGORY: Dict[Category, CategorySpec] = {spec.category: spec for spec in REGISTRY}


def all_categories() -> Tuple[Category, ...]:
    """Every category in application order."""

    return tuple(spec.category for spec in REGISTRY)


def default_categories() -> FrozenSet[Category]:
    """Categories enabled when no explicit selection is configured."""

    return frozenset(spec.category for spec in REGISTRY if spec.default_enabled)


def category_spec(category: Category) -> CategorySpec:
    return _BY_CATEGORY[Category(category)]


def parse_categories(names: Iterable[str]) -> FrozenSet[Category]:
    """Map category keys to :class:`Category` members.

    Raises:
      ValueError: If any name is not a known category key.
    """

    selected = set()
    for raw in names:
        name = raw.strip().lower()
        if not name:
            continue
        try:
            selected.add(Category(name))
        except ValueError:
            raise ValueError(f"unknown redaction category: {raw!r}") from None
    return frozenset(selected)


def _zero_counts() -> Dict[Category, int]:
    return {category: 0 for category in all_categories()}


def sanitize(text: Optional[str], config: SanitizeConfig) -> RedactionResult:
    """Redact ``text`` according to ``config``.

    What:
      Replaces every match of every enabled category's patterns with the
      category placeholder and counts the replacements.

    Why:
      Export consumers must never receive the raw values, while operators
      still want to know how much was removed and from which categories.

    How:
      Categories are visited in registry order and patterns in declared
      order. Each pattern performs one ``subn`` on the current text, so a
      value consumed by an earlier pattern is never counted twice across
      categories, while overlaps inside a category are accepted.

    Args:
      text: Text to scan. ``None`` and ``""`` yield an empty result.
      config: Whether redaction runs and which categories it applies.

    Returns:
      :class:`RedactionResult` with every category present in
      ``per_category``.
    """

    counts = _zero_counts()
    value = text or ""
    if not config.enabled or not value:
        return RedactionResult(text=value, total_count=0, per_category=counts)
    total = 0
    for spec in REGISTRY:
        if spec.category not in config.categories:
            continue
        for pattern in spec.patterns:
            value, found = pattern.subn(spec.replacement, value)
            counts[spec.category] += found
            total += found
    return RedactionResult(text=value, total_count=total, per_category=counts)
