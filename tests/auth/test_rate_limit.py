# -*- coding: utf-8 -*-
import pytest

from services.rate_limit_service import LoginRateLimiter
from services.session_service import SessionService
from utils.exceptions import InvalidCredentials, LockedOut

T0 = 1_700_000_000.0


def test_sixth_failure_is_locked_out(api, make_user):
    make_user("alice")
    statuses = []
    for _ in range(6):
        resp = api.login("alice", "wrong-password", remote_addr="192.168.1.10")
        statuses.append((resp["_http_status"], resp.get("error")))

    assert statuses[:5] == [(401, "InvalidCredentials")] * 5
    assert statuses[5][0] == 429
    assert statuses[5][1] == "LockedOut"


def test_lockout_reports_remaining_wait(api, make_user):
    make_user("alice")
    for _ in range(5):
        api.login("alice", "wrong-password", remote_addr="192.168.1.11")
    resp = api.login("alice", "wrong-password", remote_addr="192.168.1.11")
    assert resp["_http_status"] == 429
    assert 0 < resp["data"]["retry_after_seconds"] <= 900
    assert 1 <= resp["data"]["retry_after_minutes"] <= 15


def test_lockout_ignores_correct_password(api, make_user):
    make_user("alice")
    for _ in range(5):
        api.login("alice", "wrong-password", remote_addr="192.168.1.12")
    resp = api.login("alice", "Passw0rd!", remote_addr="192.168.1.12")
    assert resp["_http_status"] == 429


def test_other_address_is_unaffected(api, make_user):
    make_user("alice")
    for _ in range(6):
        api.login("alice", "wrong-password", remote_addr="192.168.1.13")
    resp = api.login("alice", "Passw0rd!", remote_addr="192.168.1.14")
    assert resp["_http_status"] == 200
    assert resp["data"]["token"]


def test_lockout_is_shared_across_usernames(api, make_user):
    make_user("alice")
    make_user("bob")
    for _ in range(5):
        api.login("alice", "wrong-password", remote_addr="192.168.1.15")
    resp = api.login("bob", "Passw0rd!", remote_addr="192.168.1.15")
    assert resp["_http_status"] == 429


def test_success_clears_failures(app, make_user):
    make_user("alice")
    for i in range(4):
        with pytest.raises(InvalidCredentials):
            SessionService.login("alice", "nope", "10.1.1.1", now=T0 + i)
    SessionService.login("alice", "Passw0rd!", "10.1.1.1", now=T0 + 5)
    # 计数已清零，再失败 4 次仍不会被锁
    for i in range(4):
        with pytest.raises(InvalidCredentials):
            SessionService.login("alice", "nope", "10.1.1.1", now=T0 + 10 + i)


def test_lockout_ends_when_window_elapses(app, make_user):
    make_user("alice")
    for i in range(5):
        with pytest.raises(InvalidCredentials):
            SessionService.login("alice", "nope", "10.1.1.2", now=T0 + i)
    with pytest.raises(LockedOut):
        SessionService.login("alice", "Passw0rd!", "10.1.1.2", now=T0 + 899)

    session = SessionService.login("alice", "Passw0rd!", "10.1.1.2", now=T0 + 901)
    assert session.user.username == "alice"


def test_failure_after_window_starts_new_count(app):
    limiter = LoginRateLimiter("10.1.1.3", max_attempts=5, lockout_seconds=900)
    for i in range(3):
        limiter.record_failure(now=T0 + i)
    assert limiter.record_failure(now=T0 + 900) == 1
    limiter.ensure_not_locked(now=T0 + 901)
