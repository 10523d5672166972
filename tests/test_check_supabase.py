from typing import Any, List

import pytest
from postgrest.exceptions import APIError

import check_supabase
from database import db_client


class _Query:
    def __init__(self, outcome: Any, calls: List[str], table: str) -> None:
        self._outcome = outcome
        self._calls = calls
        self._table = table

    def select(self, *columns: str) -> "_Query":
        self._calls.append(f"select:{','.join(columns)}")
        return self

    def limit(self, n: int) -> "_Query":
        self._calls.append(f"limit:{n}")
        return self

    def execute(self):
        if isinstance(self._outcome, Exception):
            raise self._outcome
        return type("Response", (), {"data": self._outcome})()


class _Client:
    def __init__(self, outcome: Any, calls: List[str]) -> None:
        self._outcome = outcome
        self._calls = calls

    def table(self, name: str) -> _Query:
        self._calls.append(f"table:{name}")
        return _Query(self._outcome, self._calls, name)


@pytest.fixture
def env(monkeypatch, tmp_path):
    for name in ("SUPABASE_URL", "SUPABASE_KEY", "SUPABASE_ANON_KEY"):
        monkeypatch.delenv(name, raising=False)
    return str(tmp_path / "missing.env")


def _patch_client(monkeypatch, outcome: Any) -> List[str]:
    calls: List[str] = []

    def factory(url: str, key: str) -> _Client:
        calls.append(f"create:{url}")
        return _Client(outcome, calls)

    monkeypatch.setattr(db_client, "create_client", factory)
    return calls


def _api_error(code: str, message: str) -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


@pytest.mark.asyncio
@pytest.mark.parametrize("present", [{}, {"SUPABASE_URL": "https://x.supabase.co"}, {"SUPABASE_KEY": "k" * 40}])
async def test_missing_configuration_exits_without_network(monkeypatch, env, capsys, present) -> None:
    for name, value in present.items():
        monkeypatch.setenv(name, value)
    calls = _patch_client(monkeypatch, [])

    code = await check_supabase.check_connection(env_file=env)

    assert code == 1
    assert calls == []
    assert "Missing Supabase credentials" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_successful_probe(monkeypatch, env, capsys) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_ANON_KEY", "anon-key-0123456789abcdef")
    calls = _patch_client(monkeypatch, [{"count": 3}])

    code = await check_supabase.check_connection(env_file=env)

    out = capsys.readouterr().out
    assert code == 0
    assert calls == ["create:https://x.supabase.co", "table:leaderboard", "select:count", "limit:1"]
    assert "anon-key-0123456789a..." in out
    assert "anon-key-0123456789abcdef" not in out
    assert "connection successful" in out


@pytest.mark.asyncio
@pytest.mark.parametrize("error_code", sorted(check_supabase.MISSING_TABLE_CODES))
async def test_missing_table_is_not_fatal(monkeypatch, env, capsys, error_code) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "service-key")
    _patch_client(monkeypatch, _api_error(error_code, 'relation "public.leaderboard" does not exist'))

    code = await check_supabase.check_connection(env_file=env)

    assert code == 0
    assert "Tables not created yet" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_other_query_error_fails(monkeypatch, env, capsys) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "service-key")
    _patch_client(monkeypatch, _api_error("42501", "permission denied for table leaderboard"))

    code = await check_supabase.check_connection(env_file=env)

    out = capsys.readouterr().out
    assert code == 1
    assert "permission denied for table leaderboard" in out
    assert "42501" in out


@pytest.mark.asyncio
async def test_transport_failure_fails(monkeypatch, env, capsys) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "service-key")
    _patch_client(monkeypatch, ConnectionError("Name or service not known"))

    code = await check_supabase.check_connection(env_file=env)

    assert code == 1
    assert "Name or service not known" in capsys.readouterr().out


def test_main_passes_table_and_exit_code(monkeypatch, env) -> None:
    monkeypatch.setenv("SUPABASE_URL", "https://x.supabase.co")
    monkeypatch.setenv("SUPABASE_KEY", "service-key")
    calls = _patch_client(monkeypatch, [])

    assert check_supabase.main(["--table", "quiz_submissions", "--env-file", env]) == 0
    assert "table:quiz_submissions" in calls
