from liveresilience.context import SessionContext
from liveresilience.models import SessionConfig, WindowType
from liveresilience.scheduler import EventLoopTimer


def test_defaults():
    context = SessionContext()
    assert context.config == SessionConfig()
    assert isinstance(context.timer, EventLoopTimer)
    assert context.server_offset_ms == 0


def test_server_offset(timer):
    context = SessionContext(timer=timer, clock=timer.now_ms)
    offset = context.set_server_offset(timer.now + 2500)

    assert offset == 2500
    assert context.client_now_ms() == timer.now
    assert context.now_ms() == timer.now + 2500


def test_close_runs_closers_once_in_reverse(timer):
    context = SessionContext(SessionConfig(window_type=WindowType.SLIDING), timer=timer)
    calls = []
    context.on_close(lambda: calls.append("first"))
    context.on_close(lambda: calls.append("second"))

    context.close()
    context.close()

    assert calls == ["second", "first"]
    assert context.closed


def test_sessions_do_not_share_state(timer):
    first = SessionContext(timer=timer, clock=timer.now_ms)
    second = SessionContext(timer=timer, clock=timer.now_ms)
    first.set_server_offset(timer.now + 1000)
    first.config.disable_auto_resume = True

    assert second.server_offset_ms == 0
    assert second.config.disable_auto_resume is False
