"""Unit tests for the session manager."""

import json

import pytest
from unittest.mock import AsyncMock, patch

from pagecrawler.browser.factory import BrowserConfig
from pagecrawler.browser.manager import SessionManager
from pagecrawler.errors import (
    ListenerNotFoundError,
    MissingInstanceError,
    ServiceNotFoundError,
    SessionStateError,
)
from pagecrawler.listeners import (
    ListenerName,
    RequestInterceptorListener,
    ResponseInterceptorListener,
)
from pagecrawler.models.state import SessionState
from pagecrawler.services import CookiesService, NavigationService, ServiceName


class TestSessionManagerBeforeInitialize:
    """Accessors on an uninitialized session."""

    def test_missing_page(self):
        manager = SessionManager()

        with pytest.raises(MissingInstanceError, match="Missing page instance"):
            _ = manager.page

    def test_missing_browser(self):
        manager = SessionManager()

        with pytest.raises(MissingInstanceError, match="Missing browser instance"):
            _ = manager.browser

    def test_get_before_initialize(self):
        manager = SessionManager()

        with pytest.raises(MissingInstanceError):
            manager.get(ServiceName.NAVIGATION)

    def test_initial_state(self):
        manager = SessionManager()

        assert manager.state is SessionState.UNINITIALIZED
        assert len(manager.event_log) == 0
        assert manager.listeners == []


class TestSessionManagerInitialize:
    """Tests for SessionManager.initialize."""

    @pytest.mark.asyncio
    async def test_connects_when_endpoint_configured(self, mock_playwright):
        manager = SessionManager()

        await manager.initialize(BrowserConfig(
            remote_endpoint="http://localhost:3030",
            executable_path="/usr/bin/google-chrome",
        ))

        mock_playwright['playwright'].chromium.connect_over_cdp.assert_awaited_once_with(
            endpoint_url="http://localhost:3030"
        )
        mock_playwright['playwright'].chromium.launch.assert_not_called()
        assert manager.browser is mock_playwright['browser']
        assert manager.page is mock_playwright['page']
        assert manager.state is SessionState.INITIALIZED

    @pytest.mark.asyncio
    async def test_launches_without_endpoint(self, mock_playwright):
        manager = SessionManager()

        await manager.initialize(BrowserConfig(executable_path="/usr/bin/google-chrome"))

        mock_playwright['playwright'].chromium.launch.assert_awaited_once()
        mock_playwright['playwright'].chromium.connect_over_cdp.assert_not_called()

    @pytest.mark.asyncio
    async def test_listeners_attached_in_registry_order(self, mock_playwright):
        manager = SessionManager()

        await manager.initialize(BrowserConfig())

        assert [type(listener) for listener in manager.listeners] == [
            RequestInterceptorListener,
            ResponseInterceptorListener,
        ]
        page = mock_playwright['page']
        page.route.assert_awaited_once()
        page.on.assert_called_once()
        assert page.on.call_args.args[0] == "response"

    @pytest.mark.asyncio
    async def test_listeners_attached_before_navigation(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        await manager.get(ServiceName.NAVIGATION).navigate("https://www.example.com")

        call_names = [call[0] for call in mock_playwright['page'].mock_calls]
        assert call_names.index("route") < call_names.index("goto")
        assert call_names.index("on") < call_names.index("goto")

    @pytest.mark.asyncio
    async def test_initialize_twice_rejected(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        with pytest.raises(SessionStateError) as exc_info:
            await manager.initialize(BrowserConfig())

        assert exc_info.value.state == "initialized"
        assert mock_playwright['playwright'].chromium.launch.await_count == 1

    @pytest.mark.asyncio
    async def test_initialize_after_close_rejected(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())
        await manager.close()

        with pytest.raises(SessionStateError):
            await manager.initialize(BrowserConfig())

    @pytest.mark.asyncio
    async def test_initialize_failure_cleans_up(self, mock_playwright):
        mock_playwright['browser'].new_page.side_effect = Exception("Target closed")
        manager = SessionManager()

        with pytest.raises(Exception, match="Target closed"):
            await manager.initialize(BrowserConfig())

        mock_playwright['browser'].close.assert_awaited_once()
        mock_playwright['playwright'].stop.assert_awaited_once()
        assert manager.state is SessionState.UNINITIALIZED
        with pytest.raises(MissingInstanceError):
            _ = manager.page

    @pytest.mark.asyncio
    async def test_browser_start_failure_propagates(self, mock_playwright):
        mock_playwright['playwright'].chromium.connect_over_cdp.side_effect = Exception("connect ECONNREFUSED")
        manager = SessionManager()

        with pytest.raises(Exception, match="ECONNREFUSED"):
            await manager.initialize(BrowserConfig(remote_endpoint="http://localhost:3030"))

        assert manager.state is SessionState.UNINITIALIZED


class TestSessionManagerLookup:
    """Tests for service and listener lookup."""

    @pytest.mark.asyncio
    async def test_get_by_enum_and_string(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        assert isinstance(manager.get(ServiceName.NAVIGATION), NavigationService)
        assert isinstance(manager.get("cookies"), CookiesService)

    @pytest.mark.asyncio
    async def test_get_returns_fresh_instances_sharing_log(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        first = manager.get(ServiceName.COOKIES)
        second = manager.get(ServiceName.COOKIES)

        assert first is not second
        assert first.event_log is manager.event_log
        assert second.event_log is manager.event_log
        assert first.page is manager.page

    @pytest.mark.asyncio
    async def test_get_unknown_service(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        with pytest.raises(ServiceNotFoundError) as exc_info:
            manager.get("teleport")

        assert str(exc_info.value) == "Service 'teleport' not found"
        assert isinstance(exc_info.value, KeyError)

    @pytest.mark.asyncio
    async def test_listen(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        listener = manager.listen(ListenerName.RESPONSE_INTERCEPTOR)

        assert isinstance(listener, ResponseInterceptorListener)
        assert listener not in manager.listeners
        assert listener.event_log is manager.event_log

    @pytest.mark.asyncio
    async def test_listen_unknown(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        with pytest.raises(ListenerNotFoundError, match="Listener 'websocket' not found"):
            manager.listen("websocket")


class TestSessionManagerExportAndClose:
    """Tests for export_state and close."""

    @pytest.mark.asyncio
    async def test_export_state(self, mock_playwright, tmp_path):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())
        await manager.get(ServiceName.NAVIGATION).navigate("https://www.example.com")
        path = tmp_path / "output" / "output.json"

        assert await manager.export_state(path) is True

        data = json.loads(path.read_text(encoding='utf-8'))
        assert data == manager.event_log.snapshot()
        assert list(data[0]) == ["navigation"]

    @pytest.mark.asyncio
    async def test_export_state_overwrites(self, mock_playwright, tmp_path):
        path = tmp_path / "output.json"
        path.write_text('[{"stale": []}]', encoding='utf-8')
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        await manager.export_state(path)

        assert json.loads(path.read_text(encoding='utf-8')) == []

    @pytest.mark.asyncio
    async def test_export_state_failure_returns_false(self, mock_playwright, tmp_path):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())

        with patch(
            'pagecrawler.browser.manager.write_snapshot',
            AsyncMock(side_effect=OSError("No space left on device"))
        ):
            result = await manager.export_state(tmp_path / "output.json")

        assert result is False

    @pytest.mark.asyncio
    async def test_close_order(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig())
        order = []
        mock_playwright['page'].close.side_effect = lambda: order.append("page")
        mock_playwright['browser'].close.side_effect = lambda: order.append("browser")

        await manager.close()

        assert order == ["page", "browser"]
        mock_playwright['playwright'].stop.assert_awaited_once()
        assert manager.state is SessionState.CLOSED

    @pytest.mark.asyncio
    async def test_close_before_initialize(self):
        manager = SessionManager()

        with pytest.raises(MissingInstanceError):
            await manager.close()

    @pytest.mark.asyncio
    async def test_context_manager_closes(self, mock_playwright):
        async with SessionManager() as manager:
            await manager.initialize(BrowserConfig())

        mock_playwright['page'].close.assert_awaited_once()
        assert manager.state is SessionState.CLOSED

    @pytest.mark.asyncio
    async def test_context_manager_without_initialize(self, mock_playwright):
        async with SessionManager() as manager:
            pass

        assert manager.state is SessionState.UNINITIALIZED

    @pytest.mark.asyncio
    async def test_close_releases_browser_when_page_close_fails(self, mock_playwright):
        manager = SessionManager()
        await manager.initialize(BrowserConfig(remote_endpoint="http://localhost:3030"))
        mock_playwright['page'].close.side_effect = Exception("Target page, context or browser has been closed")

        with pytest.raises(Exception, match="has been closed"):
            await manager.close()

        mock_playwright['browser'].close.assert_awaited_once()
        mock_playwright['playwright'].stop.assert_awaited_once()
        assert manager.state is SessionState.CLOSED
