from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator


class _CaseInsensitiveModel(BaseModel):
    model_config = ConfigDict(extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        if isinstance(data, dict):
            return {k.casefold() if isinstance(k, str) else k: v for k, v in data.items()}
        return data


class VerseEntry(_CaseInsensitiveModel):
    verse_number: int = Field(default=0, alias="versenumber")
    text: str = Field(default="", alias="chapterverse")

    @field_validator("text", mode="before")
    @classmethod
    def _trim_text(cls, value: Any) -> Any:
        if value is None:
            return ""
        if isinstance(value, str):
            return value.strip()
        return value


class ChapterEntry(_CaseInsensitiveModel):
    chapter_number: int = Field(default=0, alias="chapternumber")
    verses: list[VerseEntry] = Field(default_factory=list, alias="verses")

    @field_validator("verses", mode="before")
    @classmethod
    def _null_verses(cls, value: Any) -> Any:
        return [] if value is None else value


class BookEntry(_CaseInsensitiveModel):
    book_name: str = Field(default="", alias="bookname")
    # None marks an entry without a chapter list; the loader skips it
    chapters: Optional[list[ChapterEntry]] = Field(default=None, alias="lstchapters")

    @field_validator("book_name", mode="before")
    @classmethod
    def _null_name(cls, value: Any) -> Any:
        return "" if value is None else value


# entries are validated one at a time by the loader
BookFile = TypeAdapter(Optional[list[Any]])
