"""Request and result models for remote movie search.

Field names follow Python conventions; aliases carry the wire names. The
inbound request uses the front end's names (``type``, ``release_year``,
``api_verison``), results are read from OMDb's keys (``imdbID``) and written
back with the service's own keys (``IMDBID``).
"""

from typing import Any, Iterable, List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, TypeAdapter, field_validator, model_validator

DEFAULT_API_VERSION = "1"


def fold_keys(data: Any, names: Iterable[str]) -> Any:
    """Rename keys that match one of ``names`` ignoring case.

    An exact key always wins over a case variant of it.
    """
    if not isinstance(data, dict):
        return data
    by_lower = {name.lower(): name for name in names}
    folded = dict(data)
    for key, value in data.items():
        if not isinstance(key, str):
            continue
        name = by_lower.get(key.lower())
        if name is not None and name != key and name not in data:
            folded.pop(key)
            folded[name] = value
    return folded


class SearchRequest(BaseModel):
    """Search parameters posted by the front end."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    title: str = Field(..., min_length=1, description="Title to search for")
    media_type: Optional[str] = Field(None, alias="type", description="movie, series or episode")
    release_year: Optional[str] = Field(None, description="Year of release")
    api_version: str = Field(DEFAULT_API_VERSION, alias="api_verison", description="Client API version")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_keys(data, ("title", "type", "release_year", "api_verison"))

    @classmethod
    def for_title(cls, title: str) -> "SearchRequest":
        """Build a request for ``title`` with every other field at its default."""
        return cls(title=title)


class SearchResult(BaseModel):
    """One matched item."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = Field("", validation_alias="Title", serialization_alias="Title")
    year: str = Field("", validation_alias="Year", serialization_alias="Year")
    imdb_id: str = Field(
        "",
        validation_alias=AliasChoices("imdbID", "IMDBID"),
        serialization_alias="IMDBID",
    )
    media_type: str = Field("", validation_alias="Type", serialization_alias="Type")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_keys(data, ("Title", "Year", "imdbID", "Type"))


class SearchResultEnvelope(BaseModel):
    """Outer object wrapping the results returned by OMDb.

    ``response`` and ``error`` mirror OMDb's ``Response``/``Error`` status
    fields; they are informational only.
    """

    model_config = ConfigDict(populate_by_name=True)

    search: List[SearchResult] = Field(
        default_factory=list,
        validation_alias="Search",
        serialization_alias="Search",
    )
    response: Optional[str] = Field(None, validation_alias="Response", serialization_alias="Response")
    error: Optional[str] = Field(None, validation_alias="Error", serialization_alias="Error")

    @model_validator(mode="before")
    @classmethod
    def _fold_keys(cls, data: Any) -> Any:
        return fold_keys(data, ("Search", "Response", "Error"))

    @field_validator("search", mode="before")
    @classmethod
    def _null_to_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def encode(self) -> bytes:
        return self.model_dump_json(by_alias=True, exclude_none=True).encode("utf-8")

    @classmethod
    def decode(cls, data: bytes) -> "SearchResultEnvelope":
        return cls.model_validate_json(data)


_RESULT_LIST = TypeAdapter(List[SearchResult])


def encode_results(results: List[SearchResult]) -> bytes:
    """Encode results as a JSON array using the service's output keys."""
    return _RESULT_LIST.dump_json(results, by_alias=True)
