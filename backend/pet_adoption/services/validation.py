"""
Pet Adoption Backend — Resource Validators
============================================

What:  Pure functions turning a raw, untyped request body into a typed model.
How:   Each `validate_*` function checks required fields in a fixed order,
       coerces numbers and dates, applies defaults for optional fields and
       returns the matching schema model. The first failing field raises
       `ValidationError` naming that field.
Who:   Called by the services before any store access.

Presence rule:
    A required field is missing when it is absent, null, an empty string,
    numeric zero or false. "0" (a non-empty string) counts as present.

Server-assigned fields (`_id`, `adopted`, `createdAt`, `donatedAmount`,
`paused`, `status`, `role`) are never taken from input.
"""

import math
import re
from datetime import date, datetime, timezone
from typing import Any, Dict, Iterable, Mapping, Optional, Type, TypeVar, Union

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from pet_adoption.exceptions import ValidationError
from pet_adoption.schemas.adoption import AdoptionRequestCreate, AdoptionStatus
from pet_adoption.schemas.donation import DonationCampaignCreate
from pet_adoption.schemas.pet import PetCreate
from pet_adoption.schemas.user import Role, UserUpsert

ModelT = TypeVar("ModelT", bound=BaseModel)
Number = Union[int, float]

MISSING_FIELDS = "Missing required fields"

PET_REQUIRED = ("name", "age", "category", "image", "location")
ADOPTION_REQUIRED = ("petId", "petName", "requesterName", "requesterEmail")
ADOPTION_OPTIONAL = ("petImage", "requesterPhone", "requesterAddress", "ownerEmail")
CAMPAIGN_REQUIRED = (
    "petName",
    "image",
    "maxDonation",
    "lastDate",
    "shortDescription",
    "longDescription",
    "creatorEmail",
)
USER_REQUIRED = ("email", "name")

SERVER_ASSIGNED = frozenset({"_id", "adopted", "createdAt", "donatedAmount", "paused", "status", "role"})

_LEADING_INT = re.compile(r"^\s*([+-]?)(\d+)")

# Largest integer BSON can encode (int64)
MAX_INT64 = 2**63 - 1


# ── Primitive Checks ──────────────────────────────────────────────────────

def is_present(value: Any) -> bool:
    if value is None or value is False:
        return False
    if isinstance(value, str):
        return value != ""
    if isinstance(value, (int, float)):
        return value != 0 and not math.isnan(value)
    return True


def require_fields(
    payload: Mapping[str, Any],
    fields: Iterable[str],
    message: str = MISSING_FIELDS,
) -> None:
    """Raise ValidationError for the first field in `fields` that is missing."""
    for field in fields:
        if not is_present(payload.get(field)):
            raise ValidationError(message=message, field=field)


def parse_number(value: Any) -> Optional[Number]:
    """
    Best-effort numeric parse.

    Returns an int when the value is integral, a float otherwise, or None
    when the value is not a finite number. Booleans are not numbers here.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number: float = float(value)
    elif isinstance(value, str):
        try:
            number = float(value.strip())
        except ValueError:
            return None
    else:
        return None
    if not math.isfinite(number):
        return None
    return int(number) if number.is_integer() else number


def parse_date(value: Any) -> Optional[datetime]:
    """
    Calendar-date parse for ISO-8601 dates and datetimes.

    Naive values are taken as UTC, so "2025-12-31" is midnight UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime(value.year, value.month, value.day)
    elif isinstance(value, str):
        text = value.strip()
        if text.endswith(("Z", "z")):
            text = text[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(text)
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def parse_positive_int(value: Any, default: int, maximum: int = MAX_INT64) -> int:
    """
    Leading-integer parse for query parameters ("2abc" → 2).

    Anything non-numeric, zero or negative falls back to `default`; values
    above `maximum` are clamped to it.
    """
    if value is None:
        return default
    match = _LEADING_INT.match(str(value))
    if not match:
        return default
    sign, digits = match.groups()
    digits = digits.lstrip("0")
    if sign == "-" or not digits:
        return default
    # int() refuses very long digit strings; anything this long is over int64 anyway
    if len(digits) > len(str(MAX_INT64)):
        return maximum
    return min(int(digits), maximum)


def _build(model: Type[ModelT], data: Dict[str, Any]) -> ModelT:
    """Instantiate `model`, reporting the first type error as a ValidationError."""
    try:
        return model(**data)
    except PydanticValidationError as e:
        first = e.errors()[0]
        # loc[0] is the body field; deeper parts name pydantic union branches
        loc = first.get("loc") or (None,)
        field = str(loc[0]) if loc[0] is not None else None
        raise ValidationError(
            message=f"Invalid value for '{field}'" if field else "Invalid request body",
            field=field,
            context={"reason": first.get("msg")},
        ) from e


def _as_payload(raw: Any) -> Dict[str, Any]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        raise ValidationError(message="Request body must be a JSON object")
    return dict(raw)


# ── Resource Validators ───────────────────────────────────────────────────

def validate_pet(raw: Any) -> PetCreate:
    payload = _as_payload(raw)
    require_fields(payload, PET_REQUIRED)

    age = parse_number(payload["age"])
    if age is None:
        raise ValidationError(message="Age must be a valid number", field="age")

    data = {key: value for key, value in payload.items() if key not in SERVER_ASSIGNED}
    data["age"] = age
    return _build(PetCreate, data)


def validate_adoption_request(raw: Any) -> AdoptionRequestCreate:
    payload = _as_payload(raw)
    require_fields(payload, ADOPTION_REQUIRED)

    data = {field: payload[field] for field in ADOPTION_REQUIRED}
    for field in ADOPTION_OPTIONAL:
        data[field] = payload.get(field) or ""
    return _build(AdoptionRequestCreate, data)


def validate_donation_campaign(raw: Any) -> DonationCampaignCreate:
    payload = _as_payload(raw)
    require_fields(payload, CAMPAIGN_REQUIRED)

    max_donation = parse_number(payload["maxDonation"])
    if max_donation is None:
        raise ValidationError(message="maxDonation must be a valid number", field="maxDonation")

    last_date = parse_date(payload["lastDate"])
    if last_date is None:
        raise ValidationError(message="lastDate must be a valid date", field="lastDate")

    data = {field: payload[field] for field in CAMPAIGN_REQUIRED}
    data["maxDonation"] = max_donation
    data["lastDate"] = last_date
    data["location"] = payload.get("location") or ""
    return _build(DonationCampaignCreate, data)


def validate_user(raw: Any) -> UserUpsert:
    payload = _as_payload(raw)
    require_fields(payload, USER_REQUIRED, message="Name and email are required")
    return _build(
        UserUpsert,
        {
            "name": payload["name"],
            "email": payload["email"],
            "profileImage": payload.get("profileImage"),
        },
    )


def validate_role(raw: Any) -> Role:
    role = _as_payload(raw).get("role")
    try:
        return Role(role)
    except ValueError:
        raise ValidationError(message="Invalid role", field="role") from None


def validate_status(raw: Any) -> AdoptionStatus:
    status = _as_payload(raw).get("status")
    try:
        return AdoptionStatus(status)
    except ValueError:
        raise ValidationError(message="Invalid status value", field="status") from None


def validate_amount(raw: Any) -> Number:
    """Donation amounts must be positive finite numbers (numeric strings allowed)."""
    amount = parse_number(_as_payload(raw).get("amount"))
    if amount is None or amount <= 0:
        raise ValidationError(message="Amount must be a valid number", field="amount")
    return amount
