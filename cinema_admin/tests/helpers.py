from datetime import datetime, timezone

from httpx import AsyncClient


ADMIN_EMAIL = "admin@test.com"
ADMIN_PASSWORD = "admin-password"
USER_PASSWORD = "user-password"


class FakeClock:
    """Settable clock for SessionManager."""

    def __init__(self, now: datetime | None = None):
        self.now = now or datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta):
        self.now = self.now + delta


def simple_layout(rows: int = 2, columns: int = 5) -> dict:
    return {
        "rows": rows,
        "columns": columns,
        "layout": [[{"type": "normal", "price": 150} for _ in range(columns)] for _ in range(rows)],
    }


def parse_datetime(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


async def login(client: AsyncClient, email: str, password: str, admin: bool = True) -> str:
    path = "/api/admin/v1/auth/login" if admin else "/api/v1/auth/login"
    response = await client.post(path, json={"email": email, "password": password})
    assert response.status_code == 200, response.text
    return response.json()["data"]["token"]
