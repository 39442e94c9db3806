import asyncio

from myquran.exceptions import Failure, FailureReason
from myquran.jump import AyatJumpController, JumpState
from myquran.views import ChapterDetailView, ChapterListView

from tests.conftest import FakeRepository, FakeScheduler, make_detail, make_summary


def make_detail_view(repository, scheduler=None):
    jump = AyatJumpController(scheduler=scheduler or FakeScheduler())
    return ChapterDetailView(repository, jump)


async def settle():
    for _ in range(3):
        await asyncio.sleep(0)


def test_stale_detail_response_is_discarded():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)

        first = view.show(2)
        await settle()
        second = view.show(5)
        await settle()

        repository.resolve_detail(2, make_detail(2, 10))
        await first
        assert view.chapter_number == 5
        assert view.detail is None
        assert view.loading is True

        repository.resolve_detail(5, make_detail(5, 12))
        await second
        return view

    view = asyncio.run(scenario())
    assert view.detail.number == 5
    assert view.loading is False


def test_late_response_after_newer_one_does_not_overwrite():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        first = view.show(2)
        await settle()
        second = view.show(5)
        await settle()

        repository.resolve_detail(5, make_detail(5, 12))
        await second
        repository.resolve_detail(2, make_detail(2, 10))
        await first
        return view

    view = asyncio.run(scenario())
    assert view.detail.number == 5


def test_response_after_leaving_detail_is_discarded():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        task = view.show(3)
        await settle()
        view.close()
        repository.resolve_detail(3, make_detail(3, 7))
        await task
        return view

    view = asyncio.run(scenario())
    assert view.detail is None
    assert view.chapter_number is None
    assert view.loading is False


def test_failed_detail_clears_loading_and_can_be_retried():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        task = view.show(4)
        await settle()
        repository.resolve_detail(4, Failure(FailureReason.NETWORK_ERROR, "down", 4))
        await task
        assert view.loading is False
        assert view.detail is None
        assert view.failure.reason is FailureReason.NETWORK_ERROR

        retry = view.retry()
        await settle()
        repository.resolve_detail(4, make_detail(4, 9))
        await retry
        return view, repository

    view, repository = asyncio.run(scenario())
    assert view.detail.number == 4
    assert view.failure is None
    assert repository.detail_requests == [4, 4]


def test_out_of_range_chapter_fails_without_request():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        await view.show(200)
        return view, repository

    view, repository = asyncio.run(scenario())
    assert view.failure.reason is FailureReason.NOT_FOUND
    assert view.loading is False
    assert repository.detail_requests == []


def test_showing_same_chapter_again_does_not_refetch():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        task = view.show(1)
        await settle()
        assert view.show(1) is task
        repository.resolve_detail(1, make_detail(1))
        await task
        assert view.show(1) is task
        return repository

    repository = asyncio.run(scenario())
    assert repository.detail_requests == [1]


def test_switching_chapter_resets_jump_state():
    async def scenario():
        repository = FakeRepository()
        scheduler = FakeScheduler()
        view = make_detail_view(repository, scheduler)
        task = view.show(1)
        await settle()
        repository.resolve_detail(1, make_detail(1, 7))
        await task

        view.jump_to(4)
        view.jump.open_dropdown()
        assert view.jump.state == JumpState(selected_verse=4, highlighted_verse=4, dropdown_open=True)

        view.show(2)
        return view, scheduler

    view, scheduler = asyncio.run(scenario())
    assert view.jump.state == JumpState()
    assert scheduler.pending == []


def test_jump_uses_loaded_verse_count():
    async def scenario():
        repository = FakeRepository()
        view = make_detail_view(repository)
        assert view.jump_to(1) is False
        task = view.show(112)
        await settle()
        repository.resolve_detail(112, make_detail(112))
        await task
        return view

    view = asyncio.run(scenario())
    assert view.jump_to(5) is False
    assert view.jump_to(4) is True
    assert view.jump.state.selected_verse == 4


def test_chapter_list_loads_and_filters():
    async def scenario():
        repository = FakeRepository()
        changes = []
        view = ChapterListView(repository, on_change=lambda: changes.append(view.loading))
        task = asyncio.ensure_future(view.load())
        await settle()
        assert view.loading is True
        repository.resolve_list([make_summary(1), make_summary(2), make_summary(55)])
        await task
        view.set_query("rahman")
        return view, changes

    view, changes = asyncio.run(scenario())
    assert view.loading is False
    assert [s.number for s in view.visible] == [55]
    assert changes[:2] == [True, False]


def test_chapter_list_failure_renders_empty():
    async def scenario():
        repository = FakeRepository()
        view = ChapterListView(repository)
        task = asyncio.ensure_future(view.load())
        await settle()
        repository.resolve_list(Failure(FailureReason.PARSE_ERROR, "bad"))
        await task
        return view

    view = asyncio.run(scenario())
    assert view.loading is False
    assert view.summaries == []
    assert view.visible == []
    assert view.failure.reason is FailureReason.PARSE_ERROR
    assert view.loaded is False


def test_chapter_list_is_loaded_once():
    async def scenario():
        repository = FakeRepository()
        view = ChapterListView(repository)
        task = asyncio.ensure_future(view.load())
        await settle()
        repository.resolve_list([make_summary(1)])
        await task
        await view.load()
        return repository

    repository = asyncio.run(scenario())
    assert repository.list_requests == 1
