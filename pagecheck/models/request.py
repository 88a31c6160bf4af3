from typing import Any, List

from pydantic import BaseModel, Field, HttpUrl, field_validator

from pagecheck.services.batch import parse_url_list
from pagecheck.services.grammar import DEFAULT_LANGUAGE

MAX_BATCH_URLS = 50


class PageRequest(BaseModel):
    url: HttpUrl


class GrammarRequest(PageRequest):
    language: str = Field(
        default=DEFAULT_LANGUAGE,
        min_length=2,
        max_length=16,
        description="LanguageTool language code, e.g. 'en-US' or 'de-DE'.",
        examples=["en-US", "fr"],
    )


class BatchRequest(BaseModel):
    urls: List[str] = Field(
        min_length=1,
        max_length=MAX_BATCH_URLS,
        description=(
            "URLs to check, either as a JSON list or as one newline-separated "
            f"string (1–{MAX_BATCH_URLS} URLs)."
        ),
    )

    @field_validator("urls", mode="before")
    @classmethod
    def _split_text(cls, value: Any) -> Any:
        if isinstance(value, str):
            return parse_url_list(value)
        if isinstance(value, list):
            # Each list item is one URL; embedded newlines are not split
            return [
                v.strip() if isinstance(v, str) else v
                for v in value
                if not isinstance(v, str) or v.strip()
            ]
        return value


class GrammarBatchRequest(BatchRequest):
    language: str = Field(default=DEFAULT_LANGUAGE, min_length=2, max_length=16)
