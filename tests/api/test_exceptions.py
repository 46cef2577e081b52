"""
Tests for the safe_endpoint error translation
"""

import asyncio
import threading

import pytest
from fastapi import HTTPException

from api.exceptions import EXCEPTION_MAPPING, WriteError, safe_endpoint


def run(coro):
    return asyncio.run(coro)


class TestSafeEndpoint:
    """Tests for safe_endpoint decorator"""

    @pytest.mark.parametrize(
        "error,status_code",
        [
            (ValueError("bad value"), 400),
            (FileNotFoundError("gone.png"), 404),
            (PermissionError("locked"), 403),
        ],
    )
    def test_builtin_errors_translated(self, error, status_code):
        @safe_endpoint
        async def endpoint():
            raise error

        with pytest.raises(HTTPException) as exc_info:
            run(endpoint())

        assert exc_info.value.status_code == status_code
        assert exc_info.value.detail["error"] == EXCEPTION_MAPPING[type(error)][1]

    def test_domain_errors_pass_through(self):
        @safe_endpoint
        async def endpoint():
            raise WriteError("/out/x.png", "disk full")

        with pytest.raises(WriteError):
            run(endpoint())

    def test_unexpected_error_is_500(self):
        @safe_endpoint
        def endpoint():
            raise RuntimeError("boom")

        with pytest.raises(HTTPException) as exc_info:
            run(endpoint())

        assert exc_info.value.status_code == 500

    def test_sync_result_returned(self):
        @safe_endpoint
        def endpoint():
            return {"ok": True}

        assert run(endpoint()) == {"ok": True}

    def test_sync_endpoint_runs_off_loop_thread(self):
        caller = threading.get_ident()

        @safe_endpoint
        def endpoint():
            return threading.get_ident()

        assert run(endpoint()) != caller
