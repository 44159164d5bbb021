"""Tests for the server entry point."""

import pytest

from theme_mcp import server


class TestMain:
    """Tests for main()."""

    @pytest.fixture
    def shutdown_calls(self, monkeypatch) -> list[str]:
        calls: list[str] = []

        async def fake_shutdown() -> None:
            calls.append("shutdown")

        monkeypatch.setattr(server, "shutdown_executor", fake_shutdown)
        return calls

    def test_executor_shut_down_after_run(self, monkeypatch, shutdown_calls) -> None:
        monkeypatch.setattr(server.mcp, "run", lambda *args, **kwargs: None)
        server.main()
        assert shutdown_calls == ["shutdown"]

    def test_executor_shut_down_on_interrupt(self, monkeypatch, shutdown_calls) -> None:
        """Ctrl-C still releases the fetch executor."""

        def interrupted(*args, **kwargs) -> None:
            raise KeyboardInterrupt

        monkeypatch.setattr(server.mcp, "run", interrupted)
        with pytest.raises(KeyboardInterrupt):
            server.main()
        assert shutdown_calls == ["shutdown"]
