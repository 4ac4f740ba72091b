"""Models for the subscriptions data source."""

from typing import Any, Dict, Optional

from pydantic import BaseModel, field_validator


class MatchCriteria(BaseModel):
    """Display-name filter for the subscriptions data source.

    ``exact_match`` is compared case-sensitively and, when set, disables the
    other two checks. Otherwise ``display_name_prefix`` and
    ``display_name_contains`` are compared case-insensitively and a display
    name must satisfy each one that is set.
    """

    display_name_prefix: str = ""
    display_name_contains: str = ""
    exact_match: str = ""

    @field_validator(
        "display_name_prefix", "display_name_contains", "exact_match", mode="before"
    )
    @classmethod
    def convert_none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v

    @property
    def mode(self) -> str:
        if self.exact_match:
            return "exact"
        if self.display_name_prefix or self.display_name_contains:
            return "filtered"
        return "all"

    def matches(self, display_name: Optional[str]) -> bool:
        if self.exact_match:
            return self.exact_match == display_name

        lowered = (display_name or "").lower()
        prefix = self.display_name_prefix.lower()
        if prefix and not lowered.startswith(prefix):
            return False

        contains = self.display_name_contains.lower()
        if contains and contains not in lowered:
            return False

        return True

    def describe(self) -> str:
        if self.exact_match:
            return f"display name == {self.exact_match!r}"
        parts = []
        if self.display_name_prefix:
            parts.append(f"starts with {self.display_name_prefix!r}")
        if self.display_name_contains:
            parts.append(f"contains {self.display_name_contains!r}")
        return " and ".join(parts) or "all subscriptions"


class SubscriptionRecord(BaseModel):
    """Flattened view of a subscription.

    Fields the service did not return stay ``None`` and are left out of
    ``to_state()``.
    """

    id: Optional[str] = None
    subscription_id: Optional[str] = None
    tenant_id: Optional[str] = None
    display_name: Optional[str] = None
    state: str = ""
    location_placement_id: Optional[str] = None
    quota_id: Optional[str] = None
    spending_limit: Optional[str] = None
    tags: Optional[Dict[str, str]] = None

    def to_state(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)
