# myquran/models.py
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

TOTAL_SURAHS = 114


class RevelationPlace(str, Enum):
    # Wire values as sent by the equran.id API
    MECCA = "Mekah"
    MEDINA = "Madinah"

    @property
    def label(self) -> str:
        """Short label used in the chapter list."""
        return "Makkah" if self is RevelationPlace.MECCA else "Madinah"

    @property
    def adjective(self) -> str:
        """Label used in the chapter hero block."""
        return "Makkiyah" if self is RevelationPlace.MECCA else "Madaniyah"


class ChapterSummary(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    number: int = Field(alias="nomor", ge=1)
    name_native: str = Field(alias="nama")         # Arabic name
    name_latin: str = Field(alias="namaLatin")     # e.g., "Al-Fatihah"
    meaning: str = Field(alias="arti")
    revelation_place: RevelationPlace = Field(alias="tempatTurun")
    verse_count: int = Field(alias="jumlahAyat", ge=1)


class ChapterLink(BaseModel):
    """Pointer to a neighbouring chapter, as embedded in a detail record."""
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    number: int = Field(alias="nomor", ge=1)
    name_native: str = Field(default="", alias="nama")
    name_latin: str = Field(default="", alias="namaLatin")
    verse_count: int = Field(default=0, alias="jumlahAyat")


class Verse(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    number: int = Field(alias="nomorAyat", ge=1)
    text_native: str = Field(alias="teksArab")
    text_transliterated: str = Field(alias="teksLatin")
    text_translation: str = Field(alias="teksIndonesia")


class ChapterDetail(ChapterSummary):
    verses: List[Verse] = Field(alias="ayat")
    description: Optional[str] = Field(default=None, alias="deskripsi")
    next_chapter: Optional[ChapterLink] = Field(default=None, alias="suratSelanjutnya")
    previous_chapter: Optional[ChapterLink] = Field(default=None, alias="suratSebelumnya")

    @field_validator("next_chapter", "previous_chapter", mode="before")
    @classmethod
    def _false_means_missing(cls, value):
        # The API sends `false` for the first/last chapter
        if value is False:
            return None
        return value

    @model_validator(mode="after")
    def _check_verses(self):
        if len(self.verses) != self.verse_count:
            raise ValueError(
                f"chapter {self.number} declares {self.verse_count} verses but carries {len(self.verses)}"
            )
        for expected, verse in enumerate(self.verses, start=1):
            if verse.number != expected:
                raise ValueError(
                    f"chapter {self.number}: verse numbers must be contiguous, got {verse.number} at position {expected}"
                )
        return self

    def summary(self) -> ChapterSummary:
        return ChapterSummary(
            number=self.number,
            name_native=self.name_native,
            name_latin=self.name_latin,
            meaning=self.meaning,
            revelation_place=self.revelation_place,
            verse_count=self.verse_count,
        )
