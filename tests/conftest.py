"""Shared fixtures: an in-memory stand-in for the Supabase client.

Only the slice of the PostgREST query builder the repositories use is
implemented (select/eq/neq/in_/gte/lt/or_/order/limit and the write verbs),
so every test runs the real repositories and services against plain dicts.
"""

import copy
import threading
import uuid
from datetime import datetime, timezone
from types import SimpleNamespace
from typing import Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

from core.domain.models import DevicePlatform, PushToken, PushMessage
from core.interfaces.messaging import INotificationSender
from adapters.loader import build_services


def _as_datetime(value):
    if not isinstance(value, str) or "T" not in value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


def _norm(value):
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return None
    return str(value)


def _compare_key(value):
    parsed = _as_datetime(value)
    if parsed is not None:
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=timezone.utc)
        return parsed.timestamp()
    return value


class FakeQuery:
    def __init__(self, client: "FakeSupabase", table: str):
        self.client = client
        self.table_name = table
        self.action = "select"
        self.payload = None
        self.on_conflict = "id"
        self.filters = []
        self.ordering = []
        self.row_limit = None

    # === verbs ===

    def select(self, *columns):
        self.action = "select"
        return self

    def insert(self, data):
        self.action, self.payload = "insert", data
        return self

    def update(self, data):
        self.action, self.payload = "update", data
        return self

    def delete(self):
        self.action = "delete"
        return self

    def upsert(self, data, on_conflict: str = "id"):
        self.action, self.payload, self.on_conflict = "upsert", data, on_conflict
        return self

    # === filters ===

    def eq(self, column, value):
        self.filters.append(lambda row: _norm(row.get(column)) == _norm(value))
        return self

    def neq(self, column, value):
        self.filters.append(lambda row: _norm(row.get(column)) != _norm(value))
        return self

    def in_(self, column, values):
        allowed = {_norm(v) for v in values}
        self.filters.append(lambda row: _norm(row.get(column)) in allowed)
        return self

    def gte(self, column, value):
        self.filters.append(
            lambda row: row.get(column) is not None
            and _compare_key(row[column]) >= _compare_key(value)
        )
        return self

    def lt(self, column, value):
        self.filters.append(
            lambda row: row.get(column) is not None
            and _compare_key(row[column]) < _compare_key(value)
        )
        return self

    def or_(self, expression: str):
        # "a.eq.1,b.eq.2"
        clauses = []
        for clause in expression.split(","):
            column, op, value = clause.split(".", 2)
            assert op == "eq", f"unsupported or_ operator {op}"
            clauses.append((column, value))
        self.filters.append(
            lambda row: any(_norm(row.get(c)) == _norm(v) for c, v in clauses)
        )
        return self

    def order(self, column, desc: bool = False):
        self.ordering.append((column, desc))
        return self

    def limit(self, count: int):
        self.row_limit = count
        return self

    # === execution ===

    def _matches(self, row) -> bool:
        return all(check(row) for check in self.filters)

    def execute(self):
        with self.client.lock:
            error = self.client.failures.pop(self.table_name, None)
            if error:
                raise error
            rows = self.client.tables.setdefault(self.table_name, [])
            data = getattr(self, f"_{self.action}")(rows)
            self.client.calls.append((self.table_name, self.action))
            return SimpleNamespace(data=copy.deepcopy(data))

    def _select(self, rows):
        result = [row for row in rows if self._matches(row)]
        for column, desc in reversed(self.ordering):
            present = [r for r in result if r.get(column) is not None]
            missing = [r for r in result if r.get(column) is None]
            present.sort(key=lambda r: _compare_key(r[column]), reverse=desc)
            result = present + missing
        if self.row_limit is not None:
            result = result[:self.row_limit]
        return result

    def _new_row(self, data: dict) -> dict:
        row = copy.deepcopy(data)
        row.setdefault("id", str(uuid.uuid4()))
        row.setdefault("created_at", self.client.now().isoformat())
        return row

    def _insert(self, rows):
        items = self.payload if isinstance(self.payload, list) else [self.payload]
        created = [self._new_row(item) for item in items]
        rows.extend(created)
        return created

    def _update(self, rows):
        updated = []
        for row in rows:
            if self._matches(row):
                row.update(copy.deepcopy(self.payload))
                updated.append(row)
        return updated

    def _delete(self, rows):
        removed = [row for row in rows if self._matches(row)]
        rows[:] = [row for row in rows if not self._matches(row)]
        return removed

    def _upsert(self, rows):
        keys = [k.strip() for k in self.on_conflict.split(",")]
        items = self.payload if isinstance(self.payload, list) else [self.payload]
        result = []
        for item in items:
            existing = next(
                (r for r in rows if all(_norm(r.get(k)) == _norm(item.get(k)) for k in keys)),
                None,
            )
            if existing:
                existing.update(copy.deepcopy(item))
                result.append(existing)
            else:
                row = self._new_row(item)
                rows.append(row)
                result.append(row)
        return result


class FakeAuth:
    def __init__(self):
        self.users: Dict[str, SimpleNamespace] = {}

    def add_user(self, token: str, user_id: Optional[str] = None, email: str = "admin@example.com"):
        user = SimpleNamespace(id=user_id or str(uuid.uuid4()), email=email)
        self.users[token] = user
        return user

    def get_user(self, token: str):
        if token not in self.users:
            raise ValueError("invalid JWT")
        return SimpleNamespace(user=self.users[token])


class FakeSupabase:
    """Just enough of supabase.Client for the repositories"""

    def __init__(self):
        self.tables: Dict[str, List[dict]] = {}
        self.failures: Dict[str, Exception] = {}
        self.calls: List[tuple] = []
        self.auth = FakeAuth()
        self.lock = threading.RLock()
        self.now = lambda: datetime.now(timezone.utc)

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, name: str) -> List[dict]:
        return self.tables.setdefault(name, [])

    def seed(self, name: str, *rows: dict) -> List[dict]:
        created = []
        for data in rows:
            row = copy.deepcopy(data)
            row.setdefault("id", str(uuid.uuid4()))
            self.rows(name).append(row)
            created.append(row)
        return created

    def fail_next(self, table: str, code: str = "23505", message: str = "duplicate key value",
                  details: str = ""):
        self.failures[table] = APIError({"message": message, "code": code, "details": details, "hint": ""})

    def add_admin(self, token: str = "admin-token", is_admin: bool = True) -> SimpleNamespace:
        user = self.auth.add_user(token)
        self.seed("user_profiles", {"id": user.id, "is_admin": is_admin})
        return user


class RecordingSender(INotificationSender):
    """Collects deliveries; tokens listed in `failing` are rejected"""

    def __init__(self, platforms=None, failing=()):
        self._platforms = platforms or [DevicePlatform.IOS, DevicePlatform.ANDROID, DevicePlatform.WEB]
        self.failing = set(failing)
        self.sent: List[tuple] = []

    @property
    def platforms(self):
        return self._platforms

    async def send(self, token: PushToken, message: PushMessage) -> bool:
        if token.push_token in self.failing:
            return False
        self.sent.append((token.push_token, message))
        return True


@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def sender():
    return RecordingSender()


@pytest.fixture
def services(db, sender):
    return build_services(client=db, senders=[sender])


SEASON_START = datetime(2025, 7, 5, 18, 0, tzinfo=timezone.utc)


@pytest.fixture
async def league_data(services):
    """Two kickball teams, one dodgeball team, a park and a few games"""
    from datetime import timedelta
    from core.domain.models import (
        SportType, GameStatus, TeamCreate, PlayerCreate, LocationCreate, GameCreate,
    )

    league = services.league
    rockets = await league.create_team(TeamCreate(name="Rainbow Rockets", sport=SportType.KICKBALL))
    bombers = await league.create_team(TeamCreate(name="Glitter Bombers", sport=SportType.KICKBALL))
    dodgers = await league.create_team(TeamCreate(name="Dodge This", sport=SportType.DODGEBALL))
    park = await league.create_location(LocationCreate(name="Dolores Park", address="Dolores St & 19th St"))

    await league.create_player(PlayerCreate(
        name="Sam Chen", jersey_number=12, team_id=rockets.id, sport_type=SportType.KICKBALL,
    ))
    await league.create_player(PlayerCreate(
        name="Alex Rivera", jersey_number=7, team_id=rockets.id, sport_type=SportType.KICKBALL,
    ))

    def game(home, away, week, offset_days, **extra):
        return GameCreate(
            home_team_id=home.id,
            away_team_id=away.id,
            location_id=park.id,
            scheduled_at=SEASON_START + timedelta(days=offset_days),
            sport_type=SportType.KICKBALL,
            week_number=week,
            **extra,
        )

    week1 = await league.create_game(game(
        rockets, bombers, 1, 0, status=GameStatus.COMPLETED, home_score=7, away_score=3,
    ))
    week1_late = await league.create_game(game(
        bombers, rockets, 1, 2, status=GameStatus.COMPLETED, home_score=5, away_score=5,
    ))
    week2 = await league.create_game(game(bombers, rockets, 2, 7))

    return SimpleNamespace(
        rockets=rockets, bombers=bombers, dodgers=dodgers, park=park,
        week1=week1, week1_late=week1_late, week2=week2,
    )
