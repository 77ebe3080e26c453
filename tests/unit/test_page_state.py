"""Unit tests for chat page state and session cleanup helpers."""

from unittest.mock import AsyncMock, MagicMock, patch

import httpx
import pytest

from docchat.ui.chat_page import PageState, release_session, scroll_to_latest


class TestPageStateProcessing:
    """Tests for PageState.processing."""

    def test_busy_inside_block_idle_after(self) -> None:
        state = PageState()
        seen = []
        state.on_busy_change = seen.append

        with state.processing():
            assert state.is_busy is True

        assert state.is_busy is False
        assert seen == [True, False]

    def test_idle_after_unexpected_error(self) -> None:
        """A malformed reply raising inside the block does not leave the page locked."""
        state = PageState()
        seen = []
        state.on_busy_change = seen.append

        with pytest.raises(KeyError), state.processing():
            raise KeyError("reply")

        assert state.is_busy is False
        assert seen[-1] is False

    def test_works_without_callback(self) -> None:
        state = PageState()

        with state.processing():
            pass

        assert state.is_busy is False


class TestReleaseSession:
    """Tests for release_session, run when a page is closed."""

    async def test_deletes_api_session(self) -> None:
        state = PageState()
        state.session_id = "abc"

        with patch("docchat.ui.chat_page._request", new_callable=AsyncMock) as request:
            await release_session(state)

        request.assert_awaited_once_with("DELETE", "/sessions/abc")
        assert state.session_id is None

    async def test_no_request_without_session(self) -> None:
        state = PageState()

        with patch("docchat.ui.chat_page._request", new_callable=AsyncMock) as request:
            await release_session(state)

        request.assert_not_awaited()

    async def test_api_error_is_logged_not_raised(self) -> None:
        state = PageState()
        state.session_id = "gone"
        error = httpx.ConnectError("Connection refused")

        with patch("docchat.ui.chat_page._request", new_callable=AsyncMock, side_effect=error):
            await release_session(state)

        assert state.session_id is None


class TestScrollToLatest:
    """Tests for scroll_to_latest."""

    def test_scrolls_to_bottom(self) -> None:
        area = MagicMock()

        scroll_to_latest(area)

        area.scroll_to.assert_called_once_with(percent=1.0)
