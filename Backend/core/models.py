"""
Pydantic models for GitHub data and the portfolio payload.

Field names follow the JSON the browser exchanges with the API: GitHub's own
snake_case keys for profile and repository fields, camelCase for the flags
this service adds (hasReadme, downloadUrl).
"""
from typing import List, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, model_validator


class Identity(BaseModel):
    """Projection of the GitHub /user response that the prompts need."""

    model_config = ConfigDict(extra="ignore")

    login: str
    name: Optional[str] = None
    bio: Optional[str] = None
    followers: int = 0
    following: int = 0
    public_repos: int = 0
    email: Optional[str] = None
    avatar_url: Optional[str] = None
    html_url: Optional[str] = None

    @property
    def display_name(self) -> str:
        return self.name or self.login


class RepositorySummary(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str
    description: Optional[str] = None
    language: Optional[str] = None
    stars: int = Field(0, validation_alias=AliasChoices("stars", "stargazers_count"))
    forks: int = Field(0, validation_alias=AliasChoices("forks", "forks_count"))
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    topics: List[str] = Field(default_factory=list)
    owner_login: Optional[str] = None
    html_url: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _lift_owner_login(cls, data):
        # GitHub nests the owner as {"owner": {"login": ...}}
        if isinstance(data, dict) and not data.get("owner_login"):
            owner = data.get("owner")
            if isinstance(owner, dict) and owner.get("login"):
                data = {**data, "owner_login": owner["login"]}
        if isinstance(data, dict) and data.get("topics") is None:
            data = {**data, "topics": []}
        return data


class ReadmeResult(BaseModel):
    """Outcome of one README lookup. Absence is a valid result, not an error."""

    model_config = ConfigDict(populate_by_name=True)

    has_readme: bool = Field(False, alias="hasReadme")
    content: Optional[str] = None
    download_url: Optional[str] = Field(None, alias="downloadUrl")

    @classmethod
    def missing(cls) -> "ReadmeResult":
        return cls(has_readme=False, content=None)

    def to_response(self) -> dict:
        body = {"content": self.content, "hasReadme": self.has_readme}
        if self.download_url:
            body["downloadUrl"] = self.download_url
        return body


class PortfolioRepository(RepositorySummary):
    """One repository flattened together with its README lookup."""

    has_readme: bool = Field(
        False,
        validation_alias=AliasChoices("hasReadme", "has_readme"),
        serialization_alias="hasReadme",
    )
    readme: Optional[str] = None

    @classmethod
    def from_parts(cls, repo: RepositorySummary, readme: ReadmeResult) -> "PortfolioRepository":
        return cls(
            **repo.model_dump(),
            has_readme=readme.has_readme,
            readme=readme.content if readme.has_readme else None,
        )


class PortfolioPayload(BaseModel):
    """The unit passed from aggregation to generation. Order is fetch order."""

    model_config = ConfigDict(extra="ignore")

    user: Identity
    repositories: List[PortfolioRepository] = Field(default_factory=list)

    def to_response(self) -> dict:
        return self.model_dump(by_alias=True)
