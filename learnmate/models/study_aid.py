"""Pydantic models for generated study aids."""

from pydantic import BaseModel, Field

from learnmate.models.profile import LearningStyle


class Source(BaseModel):
    """A web source the model attributed part of its answer to."""

    uri: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)


class StudyAidResult(BaseModel):
    """Parsed study aid response: the text plus any attributed sources."""

    text: str = Field(..., min_length=1)
    sources: list[Source] = Field(default_factory=list)


class StudyAidArtifact(BaseModel):
    """A study aid together with the context it was generated in."""

    text: str = Field(..., min_length=1, description="Generated study aid (markdown)")
    style: LearningStyle = Field(..., description="Style active at generation time")
    style_label: str = Field(..., description="Human label of that style")
    sources: list[Source] = Field(default_factory=list)
    document_name: str | None = Field(
        None,
        description="Name of the document the aid was generated from",
    )

    @classmethod
    def from_result(
        cls,
        result: StudyAidResult,
        style: LearningStyle,
        document_name: str | None = None,
    ) -> "StudyAidArtifact":
        return cls(
            text=result.text,
            style=style,
            style_label=style.label,
            sources=list(result.sources),
            document_name=document_name,
        )

    model_config = {"frozen": True}
