"""Headless tests for the textual front end (driven through the pilot)."""

import pytest

from pacdex.config import Settings
from pacdex.main import pacdex
from pacdex.models import Pane, SearchDirection, SortMode
from pacdex.widgets import PackageColumn, SearchInput, render_package_list, visible_window

from conftest import make_record


@pytest.fixture
def app(graph):
    return pacdex(graph=graph, settings=Settings(explicit_only=False, show_help=False))


@pytest.mark.asyncio
async def test_mounts_with_three_columns(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.pause()
        main = app.query_one("#main", PackageColumn)
        assert main.border_title == "All 1/7"
        assert main.has_class("active")
        assert app.query_one("#dependencies", PackageColumn).border_title == "Dependencies 1/2"
        assert app.query_one("#dependents", PackageColumn).border_title == "Dependents 0/0"
        assert app.query_one("#help").display is False


@pytest.mark.asyncio
async def test_keys_reach_the_app_after_mount(app):
    async with app.run_test(size=(160, 50)) as pilot:
        assert app.focused is None
        await pilot.press("right", "s")
        assert app.state.active_pane is Pane.DEPENDENCIES
        assert app.state.sort_mode is SortMode.SIZE_DESCENDING
        assert app.query_one("#search-input", SearchInput).value == ""


@pytest.mark.asyncio
async def test_keys_move_and_focus(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("right")
        assert app.state.active_pane is Pane.DEPENDENCIES
        assert app.query_one("#dependencies", PackageColumn).has_class("active")
        await pilot.press("enter")
        assert app.state.main_package == "bash"
        assert app.state.active_pane is Pane.MAIN
        await pilot.press("down", "down")
        assert app.state.main_package == "glibc"
        await pilot.press("end")
        assert app.state.main_package == "vim"
        await pilot.press("1")
        assert app.state.main_package == "alpha"


@pytest.mark.asyncio
async def test_toggles(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("s")
        assert app.state.sort_mode is SortMode.SIZE_DESCENDING
        await pilot.press("e")
        assert app.state.filter_explicit_only is True
        assert app.query_one("#main", PackageColumn).border_title.startswith("Explicit")
        await pilot.press("question_mark")
        assert app.show_help is True
        assert app.query_one("#help").display is True


@pytest.mark.asyncio
async def test_search_prompt(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("slash")
        assert app.state.searching is True
        assert app.query_one("#search-input").display is True
        await pilot.press("r", "e", "a", "d", "enter")
        await pilot.pause()
        assert app.state.searching is False
        assert app.state.search_query == "read"
        assert app.state.main_package == "readline"
        assert app.query_one("#search-input").display is False
        await pilot.press("n")
        assert app.state.main_package == "readline"
        assert app.state.search_status is not None


@pytest.mark.asyncio
async def test_search_previous_key(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("slash", "a", "enter")
        await pilot.pause()
        assert app.state.main_package == "bash"
        await pilot.press("N")
        assert app.state.main_package == "alpha"
        assert app.state.search_direction is SearchDirection.BACKWARD
        await pilot.press("N")
        assert app.state.main_package == "readline"
        assert app.query_one("#main", PackageColumn).border_title == "All 6/7"


@pytest.mark.asyncio
async def test_search_cancel(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("slash", "v", "i", "escape")
        await pilot.pause()
        assert app.state.searching is False
        assert app.state.search_query is None
        assert app.state.main_package == "alpha"


@pytest.mark.asyncio
async def test_quit(app):
    async with app.run_test(size=(160, 50)) as pilot:
        await pilot.press("q")
        await pilot.pause()
    assert app.return_code == 0


def test_visible_window_keeps_selection_in_view():
    assert visible_window(5, 2, 10) == range(0, 5)
    assert visible_window(100, 0, 10) == range(0, 10)
    assert visible_window(100, 50, 10) == range(45, 55)
    assert visible_window(100, 99, 10) == range(90, 100)
    assert visible_window(100, None, 10) == range(0, 10)


def test_render_package_list():
    records = [make_record("a", explicit=True), make_record("b"), make_record("c")]
    text = render_package_list(records, 1, 10, True)
    assert text.plain == "a\nb\nc"
    assert render_package_list([], None, 10, True).plain == "(empty)"
