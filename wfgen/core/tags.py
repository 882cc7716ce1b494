"""Container image tagging scheme shared by every deploy workflow."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

SHORT_REVISION_LENGTH = 7


class ImageTags(BaseModel):
    """The three tags pushed for one image build."""

    model_config = ConfigDict(frozen=True)

    primary: str = Field(..., description="{env}-{name}-{short revision}")
    name_latest: str = Field(..., description="{env}-{name}-latest")
    env_latest: str = Field(..., description="{env}-latest")

    @property
    def aliases(self) -> list[str]:
        return [self.name_latest, self.env_latest]

    @property
    def all(self) -> list[str]:
        return [self.primary, *self.aliases]


def short_revision(revision: str, length: int = SHORT_REVISION_LENGTH) -> str:
    revision = revision.strip()
    if not revision:
        raise ValueError("revision must not be empty")
    return revision[:length]


def tags_for_ref(environment: str, logical_name: str, short_ref: str) -> ImageTags:
    """Build tags around an already-shortened revision reference.

    ``short_ref`` is used verbatim, so workflow templates can pass a shell
    expansion such as ``${SHORT_SHA}`` that is resolved when the job runs.
    """
    return ImageTags(
        primary=f"{environment}-{logical_name}-{short_ref}",
        name_latest=f"{environment}-{logical_name}-latest",
        env_latest=f"{environment}-latest",
    )


def image_tags(environment: str, logical_name: str, revision: str) -> ImageTags:
    """Derive the tags for a full revision, e.g. ``dev-api-abc1234``."""
    return tags_for_ref(environment, logical_name, short_revision(revision))
