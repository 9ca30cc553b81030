"""Stub Graph client and fabricated user records shared by the tests."""

from typing import Any, Dict, List, Optional


class StubGraphClient:
    """Records GET calls and replays a canned response or raises a fault."""

    def __init__(self, response: Optional[Any] = None, error: Optional[BaseException] = None):
        self.response = response
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def get(self, endpoint, params=None, headers=None):
        self.calls.append({"endpoint": endpoint, "params": params, "headers": headers})
        if self.error is not None:
            raise self.error
        return self.response


def make_graph_user(index: int = 1, **overrides: Any) -> Dict[str, Any]:
    """Fabricate a Graph user record."""
    user = {
        "id": f"00000000-0000-0000-0000-{index:012d}",
        "displayName": f"Test User {index}",
        "mail": f"user{index}@contoso.com",
        "userPrincipalName": f"user{index}@contoso.com",
        "department": "Sales",
        "jobTitle": "Account Manager",
        "officeLocation": "Building 1",
        "mobilePhone": "+1 555 0100",
        "businessPhones": ["+1 555 0101"],
        "accountEnabled": True,
    }
    user.update(overrides)
    return user
