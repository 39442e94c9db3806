import asyncio
from typing import Dict, List

import pytest

from myquran.models import ChapterDetail, ChapterSummary

SURAH_NAMES = {
    1: ("Al-Fatihah", "الفاتحة", "Pembukaan", "Mekah", 7),
    2: ("Al-Baqarah", "البقرة", "Sapi", "Madinah", 286),
    3: ("Ali 'Imran", "اٰل عمران", "Keluarga Imran", "Madinah", 200),
    36: ("Yasin", "يٰسۤ", "Yasin", "Mekah", 83),
    55: ("Ar-Rahman", "الرحمن", "Yang Maha Pengasih", "Madinah", 78),
    112: ("Al-Ikhlas", "الاخلاص", "Ikhlas", "Mekah", 4),
    114: ("An-Nas", "الناس", "Manusia", "Mekah", 6),
}


def summary_payload(number: int, verse_count: int = None) -> dict:
    name_latin, name_native, meaning, place, count = SURAH_NAMES.get(
        number, (f"Surah-{number}", "سورة", "Arti", "Mekah", 10)
    )
    return {
        "nomor": number,
        "nama": name_native,
        "namaLatin": name_latin,
        "jumlahAyat": verse_count or count,
        "tempatTurun": place,
        "arti": meaning,
        "deskripsi": f"<i>Surah {name_latin}</i> terdiri atas {verse_count or count} ayat.",
        "audioFull": {},
    }


def detail_payload(number: int, verse_count: int = None) -> dict:
    payload = summary_payload(number, verse_count)
    count = payload["jumlahAyat"]
    payload["ayat"] = [
        {
            "nomorAyat": i,
            "teksArab": f"نص {i}",
            "teksLatin": f"teks latin {i}",
            "teksIndonesia": f"terjemahan ayat {i}",
            "audio": {},
        }
        for i in range(1, count + 1)
    ]
    payload["suratSelanjutnya"] = (
        {"nomor": number + 1, "nama": "", "namaLatin": f"Surah-{number + 1}", "jumlahAyat": 10}
        if number < 114 else False
    )
    payload["suratSebelumnya"] = (
        {"nomor": number - 1, "nama": "", "namaLatin": f"Surah-{number - 1}", "jumlahAyat": 10}
        if number > 1 else False
    )
    return payload


def make_summary(number: int) -> ChapterSummary:
    return ChapterSummary.model_validate(summary_payload(number))


def make_detail(number: int, verse_count: int = None) -> ChapterDetail:
    return ChapterDetail.model_validate(detail_payload(number, verse_count))


class FakeTimer:
    def __init__(self, scheduler: "FakeScheduler", when: float, callback):
        self.scheduler = scheduler
        self.when = when
        self.callback = callback
        self.cancelled = False

    def cancel(self):
        self.cancelled = True


class FakeScheduler:
    """Stands in for the event loop's call_later with a manual clock."""

    def __init__(self):
        self.now = 0.0
        self.timers: List[FakeTimer] = []

    def call_later(self, delay, callback):
        timer = FakeTimer(self, self.now + delay, callback)
        self.timers.append(timer)
        return timer

    @property
    def pending(self) -> List[FakeTimer]:
        return [t for t in self.timers if not t.cancelled]

    def advance(self, seconds: float):
        target = self.now + seconds
        while True:
            due = sorted((t for t in self.pending if t.when <= target), key=lambda t: t.when)
            if not due:
                break
            timer = due[0]
            self.timers.remove(timer)
            self.now = timer.when
            timer.callback()
        self.now = target


class FakeScrollContainer:
    def __init__(self, scroll_top: float = 0):
        self.scroll_top = scroll_top
        self.calls = []

    def scroll_to(self, top, smooth=True):
        self.calls.append((top, smooth))
        self.scroll_top = top


class FakeRepository:
    """Repository whose responses are released by the test, in any order."""

    def __init__(self):
        self.detail_requests: List[int] = []
        self.list_requests = 0
        self._details: Dict[int, List[asyncio.Future]] = {}
        self._lists: List[asyncio.Future] = []

    async def fetch_chapter_list(self):
        self.list_requests += 1
        future = asyncio.get_running_loop().create_future()
        self._lists.append(future)
        return await future

    async def fetch_chapter_detail(self, chapter_number):
        self.detail_requests.append(chapter_number)
        future = asyncio.get_running_loop().create_future()
        self._details.setdefault(chapter_number, []).append(future)
        return await future

    def resolve_list(self, result):
        self._lists.pop(0).set_result(result)

    def resolve_detail(self, chapter_number, result):
        self._details[chapter_number].pop(0).set_result(result)

    async def close(self):
        pass


@pytest.fixture
def scheduler():
    return FakeScheduler()


@pytest.fixture
def container():
    return FakeScrollContainer()


@pytest.fixture
def summaries():
    return [make_summary(n) for n in sorted(SURAH_NAMES)]
