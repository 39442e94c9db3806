# myquran/surah_repository.py
import asyncio
import json
from typing import Dict, List, Optional, Union

import aiohttp
from pydantic import ValidationError

from ._logging import get_logger
from .exceptions import (
    Failure,
    QuranAPIError,
    QuranNetworkError,
    QuranParseError,
    SurahNotFoundError,
)
from .models import ChapterDetail, ChapterSummary
from .surah_cache import SurahCache

logger = get_logger(__name__)

ChapterListResult = Union[List[ChapterSummary], Failure]
ChapterDetailResult = Union[ChapterDetail, Failure]


class SurahRepository:
    """
    Read-only access to chapter data on the remote Quran API.

    ``fetch_*`` coroutines never raise for remote problems: they return the
    data or a Failure. Successful results are kept in a session cache, and
    concurrent requests for the same key share a single outbound request.
    """

    BASE_URL = "https://equran.id/api/v2/"
    TIMEOUT = 10

    def __init__(
        self,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[aiohttp.ClientSession] = None,
        cache: Optional[SurahCache] = None,
    ):
        base_url = base_url or self.BASE_URL
        self.base_url = base_url if base_url.endswith("/") else base_url + "/"
        self.timeout = timeout if timeout is not None else self.TIMEOUT
        self.cache = cache if cache is not None else SurahCache()
        self._session = session
        self._owns_session = session is None
        self._list_request: Optional[asyncio.Task] = None
        self._detail_requests: Dict[int, asyncio.Task] = {}

    async def __aenter__(self) -> "SurahRepository":
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    async def close(self):
        if self._owns_session and self._session is not None and not self._session.closed:
            await self._session.close()
        self._session = None

    def _get_session(self) -> aiohttp.ClientSession:
        # Created lazily: aiohttp sessions must be built inside a running loop
        if self._session is None or self._session.closed:
            self._session = aiohttp.ClientSession(
                headers={"User-Agent": "MyQuranReader/1.0"},
                timeout=aiohttp.ClientTimeout(total=self.timeout),
            )
            self._owns_session = True
        return self._session

    # --- Public operations ---

    async def fetch_chapter_list(self) -> ChapterListResult:
        cached = self.cache.get_chapter_list()
        if cached is not None:
            return cached
        if self._list_request is None or self._list_request.done():
            self._list_request = asyncio.ensure_future(self._load_chapter_list())
        # Shielded so that one cancelled caller does not cancel the others
        return await asyncio.shield(self._list_request)

    async def fetch_chapter_detail(self, chapter_number: int) -> ChapterDetailResult:
        cached = self.cache.get_surah(chapter_number)
        if cached is not None:
            return cached
        request = self._detail_requests.get(chapter_number)
        if request is None or request.done():
            request = asyncio.ensure_future(self._load_chapter_detail(chapter_number))
            self._detail_requests[chapter_number] = request
            request.add_done_callback(lambda _: self._forget_request(chapter_number, request))
        return await asyncio.shield(request)

    # --- Internals ---

    def _forget_request(self, chapter_number: int, request: asyncio.Task):
        if self._detail_requests.get(chapter_number) is request:
            del self._detail_requests[chapter_number]

    async def _load_chapter_list(self) -> ChapterListResult:
        try:
            data = await self._get_data("surat")
            if not isinstance(data, list):
                raise QuranParseError("Chapter list is not an array")
            try:
                summaries = [ChapterSummary.model_validate(item) for item in data]
            except ValidationError as e:
                raise QuranParseError(f"Invalid chapter summary: {e}")
        except QuranAPIError as e:
            logger.warning("Fetching chapter list failed: %s", e.message)
            return Failure.from_error(e)
        logger.debug("Fetched %d chapter summaries", len(summaries))
        return self.cache.save_chapter_list(summaries)

    async def _load_chapter_detail(self, chapter_number: int) -> ChapterDetailResult:
        try:
            data = await self._get_data(f"surat/{chapter_number}", chapter_number)
            if not isinstance(data, dict):
                raise QuranParseError("Chapter detail is not an object", chapter_number)
            try:
                detail = ChapterDetail.model_validate(data)
            except ValidationError as e:
                raise QuranParseError(f"Invalid chapter detail: {e}", chapter_number)
            if detail.number != chapter_number:
                raise QuranParseError(
                    f"Asked for chapter {chapter_number}, received chapter {detail.number}", chapter_number
                )
        except QuranAPIError as e:
            logger.warning("Fetching chapter %s failed: %s", chapter_number, e.message)
            return Failure.from_error(e)
        logger.debug("Fetched chapter %d (%d ayahs)", chapter_number, detail.verse_count)
        return self.cache.save_surah(chapter_number, detail)

    async def _get_data(self, path: str, chapter_number: Optional[int] = None):
        """GET base_url + path and return the ``data`` field of the JSON envelope."""
        url = f"{self.base_url}{path}"
        logger.debug("GET %s", url)
        try:
            async with self._get_session().get(url) as response:
                if response.status == 404:
                    raise SurahNotFoundError(f"No data at {url}", chapter_number)
                if response.status >= 400:
                    raise QuranNetworkError(f"Request failed: HTTP {response.status} for {url}", chapter_number)
                body = await response.read()
                encoding = response.charset or "utf-8"
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise QuranNetworkError(f"Request failed: {e!r}", chapter_number)

        try:
            payload = json.loads(body.decode(encoding))
        except (UnicodeDecodeError, LookupError) as e:
            raise QuranParseError(f"Response is not valid {encoding}: {e}", chapter_number)
        except json.JSONDecodeError as e:
            raise QuranParseError(f"Invalid JSON response: {e}", chapter_number)

        if not isinstance(payload, dict) or "data" not in payload:
            raise QuranParseError("Response has no 'data' field", chapter_number)
        if payload.get("code") == 404 or payload["data"] is None:
            raise SurahNotFoundError(f"No data at {url}", chapter_number)
        return payload["data"]
