"""Tests for the sync context."""

import asyncio
import threading

import pytest

from modelsync.application import (
    current_render_context,
    disable,
    enable,
    is_enabled,
    reset,
    sync_disabled,
    sync_enabled,
)


class TestSyncContext:
    """Test enabling and disabling syncing."""

    def test_disabled_by_default(self):
        assert not is_enabled()

    def test_default_from_settings(self, monkeypatch):
        monkeypatch.setenv("MODELSYNC_ENABLED_BY_DEFAULT", "true")
        assert is_enabled()

    def test_enable_and_reset(self):
        token = enable(render_context={"user": "ada"})

        assert is_enabled()
        assert current_render_context() == {"user": "ada"}

        reset(token)
        assert not is_enabled()
        assert current_render_context() is None

    def test_disable_inside_enabled(self):
        with sync_enabled():
            token = disable()
            assert not is_enabled()
            reset(token)
            assert is_enabled()

    def test_nested_guards_restore_previous_state(self):
        with sync_enabled(render_context="outer"):
            with sync_disabled():
                assert not is_enabled()
                with sync_enabled(render_context="inner"):
                    assert current_render_context() == "inner"
                assert not is_enabled()
            assert is_enabled()
            assert current_render_context() == "outer"
        assert not is_enabled()

    def test_guard_restores_on_error(self):
        with pytest.raises(RuntimeError):
            with sync_enabled():
                raise RuntimeError("boom")

        assert not is_enabled()

    def test_guard_yields_context(self):
        with sync_enabled(render_context="view") as context:
            assert context.enabled
            assert context.render_context == "view"


class TestContextIsolation:
    """Test that each thread and task sees its own activation."""

    def test_threads_do_not_share_state(self):
        seen: list[bool] = []

        def worker():
            seen.append(is_enabled())

        with sync_enabled():
            thread = threading.Thread(target=worker)
            thread.start()
            thread.join()

        assert seen == [False]

    @pytest.mark.asyncio
    async def test_tasks_do_not_leak_state(self):
        entered = asyncio.Event()
        release = asyncio.Event()

        async def enabled_task():
            with sync_enabled():
                entered.set()
                await release.wait()
                return is_enabled()

        async def observer_task():
            await entered.wait()
            observed = is_enabled()
            release.set()
            return observed

        enabled_result, observed = await asyncio.gather(enabled_task(), observer_task())

        assert enabled_result is True
        assert observed is False
