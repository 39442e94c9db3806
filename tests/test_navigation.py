from myquran.location import ChapterDetailState, ChapterListState, Location
from myquran.navigation import NavigationController


def test_initial_state_comes_from_location():
    assert NavigationController(Location("#/chapter/12")).state == ChapterDetailState(12)
    assert NavigationController(Location("#/nope")).state == ChapterListState()
    assert NavigationController(Location("")).state == ChapterListState()


def test_select_chapter_writes_location():
    location = Location()
    nav = NavigationController(location)
    nav.select_chapter(36)
    assert nav.state == ChapterDetailState(36)
    assert location.href == "#/chapter/36"


def test_go_back_writes_root_location():
    location = Location("#/chapter/2")
    nav = NavigationController(location)
    nav.go_back()
    assert nav.state == ChapterListState()
    assert location.href == "#/"


def test_select_from_detail_switches_chapter():
    nav = NavigationController(Location("#/chapter/1"))
    nav.select_chapter(2)
    assert nav.state == ChapterDetailState(2)


def test_external_changes_are_adopted():
    location = Location()
    nav = NavigationController(location)
    seen = []
    nav.subscribe(seen.append)

    location.assign("#/chapter/5")
    location.assign("#/garbage")
    location.back()

    assert seen == [ChapterDetailState(5), ChapterListState(), ChapterDetailState(5)]
    assert nav.state == ChapterDetailState(5)


def test_two_controllers_on_one_location_agree():
    location = Location()
    first = NavigationController(location)
    second = NavigationController(location)

    first.select_chapter(9)
    assert second.state == first.state == ChapterDetailState(9)
    second.go_back()
    assert first.state == second.state == ChapterListState()


def test_listeners_not_called_when_state_unchanged():
    location = Location("#/chapter/3")
    nav = NavigationController(location)
    seen = []
    nav.subscribe(seen.append)
    location.assign("#/chapter/3/")
    assert seen == []


def test_close_detaches_from_location():
    location = Location()
    nav = NavigationController(location)
    nav.close()
    location.assign("#/chapter/4")
    assert nav.state == ChapterListState()
