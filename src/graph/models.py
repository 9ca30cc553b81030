"""Pydantic models for directory tool IO."""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, field_validator

DEFAULT_TOP = 10
MAX_TOP = 100


def split_select(select: Optional[str]) -> Optional[List[str]]:
    """Split a comma separated property list, dropping blank entries."""
    if not select or not select.strip():
        return None
    fields = [name.strip() for name in select.split(",") if name.strip()]
    return fields or None


class UserSummary(BaseModel):
    """A user as returned by the users collection."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: Optional[str] = None
    display_name: Optional[str] = Field(None, alias="displayName")
    mail: Optional[str] = None
    user_principal_name: Optional[str] = Field(None, alias="userPrincipalName")
    department: Optional[str] = None
    job_title: Optional[str] = Field(None, alias="jobTitle")
    office_location: Optional[str] = Field(None, alias="officeLocation")
    mobile_phone: Optional[str] = Field(None, alias="mobilePhone")
    business_phones: Optional[List[str]] = Field(None, alias="businessPhones")
    account_enabled: Optional[bool] = Field(None, alias="accountEnabled")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True)


class UserDetail(UserSummary):
    """A single user with sign-in and organization details."""

    created_date_time: Optional[str] = Field(None, alias="createdDateTime")
    last_sign_in_date_time: Optional[str] = Field(None, alias="lastSignInDateTime")
    city: Optional[str] = None
    country: Optional[str] = None
    company_name: Optional[str] = Field(None, alias="companyName")

    _has_sign_in_activity: bool = PrivateAttr(default=False)

    @classmethod
    def from_graph(cls, record: Dict[str, Any]) -> "UserDetail":
        activity = record.get("signInActivity")
        detail = cls.model_validate(record)
        if isinstance(activity, dict):
            detail.last_sign_in_date_time = activity.get("lastSignInDateTime")
            detail._has_sign_in_activity = True
        return detail

    def to_payload(self) -> Dict[str, Any]:
        payload = self.model_dump(by_alias=True)
        if not self._has_sign_in_activity:
            payload.pop("lastSignInDateTime", None)
        return payload


class QuerySpec(BaseModel):
    """Normalized query for the users collection."""

    filter: Optional[str] = None
    search: Optional[str] = None
    top: int = DEFAULT_TOP
    select: Optional[List[str]] = None

    @field_validator("top", mode="before")
    @classmethod
    def clamp_top(cls, v: Any) -> int:
        try:
            top = int(v)
        except (TypeError, ValueError):
            return DEFAULT_TOP
        if top < 1 or top > MAX_TOP:
            return DEFAULT_TOP
        return top

    @field_validator("filter", "search", mode="before")
    @classmethod
    def blank_to_none(cls, v: Optional[str]) -> Optional[str]:
        if v is None or not str(v).strip():
            return None
        return v

    @field_validator("select", mode="before")
    @classmethod
    def parse_select(cls, v: Any) -> Optional[List[str]]:
        if v is None or isinstance(v, str):
            return split_select(v)
        return split_select(",".join(v))

    @property
    def headers(self) -> Dict[str, str]:
        # $search on directory objects requires the eventual consistency index
        if self.search:
            return {"ConsistencyLevel": "eventual"}
        return {}

    def to_params(self) -> Dict[str, Any]:
        params: Dict[str, Any] = {"$top": self.top}
        if self.filter:
            params["$filter"] = self.filter
        if self.search:
            params["$search"] = f'"{self.search}"'
        if self.select:
            params["$select"] = ",".join(self.select)
        return params
