"""
Domain models for Creem webhook payloads.

Only the fields the reconciler reads are modelled; everything else Creem
sends is ignored. ``eventType`` stays a plain string so unknown event types
still parse and can be acknowledged.
"""

from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field, field_validator

from packages.billing.models.domain.enums import BillingInterval, BillingType

DEFAULT_ONE_TIME_CREDIT = 100
DEFAULT_SUBSCRIPTION_CREDIT = 1000
DEFAULT_SUBSCRIPTION_PLAN_ID = 1
DEFAULT_AMOUNT = Decimal("0")
DEFAULT_INTERVAL = BillingInterval.MONTH.value

MetadataValue = Optional[Union[int, float, str]]


def _is_blank(value: MetadataValue) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_int(value: MetadataValue, default: int) -> int:
    """Parse an integer, truncating decimal strings such as "50.0" or "12.5"."""
    if _is_blank(value):
        return default
    if isinstance(value, str):
        try:
            parsed = Decimal(value.strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid integer in metadata: {value!r}") from e
        if not parsed.is_finite():
            raise ValueError(f"Invalid integer in metadata: {value!r}")
        return int(parsed)
    return int(value)


class CreemMetadata(BaseModel):
    """
    Metadata attached at checkout.

    Every field is optional. The accessor methods substitute the documented
    default for a missing, null or empty value and raise ``ValueError`` for a
    value that is present but does not parse.
    """

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    user_id: Optional[str] = Field(default=None, alias="userId")
    credit: MetadataValue = None
    subscription_plan_id: MetadataValue = Field(
        default=None, alias="subscriptionPlanId"
    )
    amount: MetadataValue = None
    currency: Optional[str] = None
    interval: Optional[str] = None

    @field_validator("user_id", mode="before")
    @classmethod
    def validate_user_id(cls, v):
        if isinstance(v, int):
            return str(v)
        return v

    @field_validator("credit", "subscription_plan_id", "amount", mode="before")
    @classmethod
    def reject_booleans(cls, v):
        if isinstance(v, bool):
            raise ValueError("Boolean is not a valid metadata number")
        return v

    def credit_or(self, default: int) -> int:
        return _parse_int(self.credit, default)

    def plan_id_or_default(self) -> int:
        return _parse_int(self.subscription_plan_id, DEFAULT_SUBSCRIPTION_PLAN_ID)

    def amount_or_default(self) -> Decimal:
        if _is_blank(self.amount):
            return DEFAULT_AMOUNT
        try:
            return Decimal(str(self.amount).strip())
        except InvalidOperation as e:
            raise ValueError(f"Invalid amount in metadata: {self.amount!r}") from e

    def interval_or_default(self) -> str:
        return self.interval or DEFAULT_INTERVAL


class CreemCustomer(BaseModel):
    id: Optional[str] = None


class CreemProduct(BaseModel):
    id: Optional[str] = None
    billing_type: Optional[str] = None  # Anything but "recurring" is one-time


class CreemEventObject(BaseModel):
    """The checkout or subscription object carried by an event."""

    request_id: Optional[str] = None  # Our user id, set when creating a one-time checkout
    object: Optional[str] = None
    id: str  # Creem payment or subscription id
    customer: Optional[CreemCustomer] = None
    product: CreemProduct
    status: Optional[str] = None
    metadata: CreemMetadata = Field(default_factory=CreemMetadata)

    @field_validator("request_id", mode="before")
    @classmethod
    def validate_request_id(cls, v):
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("metadata", mode="before")
    @classmethod
    def validate_metadata(cls, v):
        return {} if v is None else v

    @property
    def customer_id(self) -> Optional[str]:
        return self.customer.id if self.customer else None

    @property
    def is_recurring(self) -> bool:
        return self.product.billing_type == BillingType.RECURRING.value


class CreemWebhookEvent(BaseModel):
    """Complete Creem webhook payload."""

    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    event_type: str = Field(alias="eventType")
    object: CreemEventObject
