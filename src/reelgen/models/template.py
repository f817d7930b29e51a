"""Render template data model.

Template elements form a tagged union. The tag is derived from the element's
``type`` field, with one refinement: a ``text`` element bound to a narration
transcript (or named like a subtitle) is a :class:`CaptionElement`. Every
element keeps the render-engine properties it was given, including ones not
modelled here, and serializes back with only the properties that were present
or explicitly set.
"""

from typing import Annotated, Any, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, Tag, ValidationError

from ..errors import ModelContractError

TEMPLATE_KEYS = ("output_format", "width", "height", "elements")

Scalar = Optional[Union[int, float, str]]


def is_caption(name: Optional[str], transcript_source: Optional[str]) -> bool:
    """Whether a text element is a caption rather than static text."""
    if transcript_source:
        return True
    lowered = (name or "").lower()
    return "subtitle" in lowered or "caption" in lowered


def _element_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("type")
        name = value.get("name")
        transcript_source = value.get("transcript_source")
    else:
        kind = getattr(value, "type", None)
        name = getattr(value, "name", None)
        transcript_source = getattr(value, "transcript_source", None)

    if kind == "text":
        return "caption" if is_caption(name, transcript_source) else "text"
    if kind in ("video", "audio", "composition"):
        return kind
    return "other"


class BaseElement(BaseModel):
    """Properties shared by every render-engine element."""

    model_config = ConfigDict(extra="allow")

    type: str
    id: Optional[Union[str, int]] = None
    name: Optional[str] = None
    track: Optional[int] = None
    time: Scalar = None
    duration: Scalar = None


class VideoElement(BaseElement):
    type: Literal["video"]
    source: Optional[str] = None
    fit: Optional[str] = None


class AudioElement(BaseElement):
    type: Literal["audio"]
    source: Optional[str] = None
    provider: Optional[str] = None


class TextElement(BaseElement):
    type: Literal["text"]
    text: Optional[str] = None
    transcript_source: Optional[str] = None


class CaptionElement(TextElement):
    """A text element rendering the transcript of a narration audio element."""


class OtherElement(BaseElement):
    """Any element kind the pipeline does not post-process (shapes, images...)."""


class CompositionElement(BaseElement):
    """A scene: a group of elements played together."""

    type: Literal["composition"]
    elements: List["Element"] = Field(default_factory=list)


Element = Annotated[
    Union[
        Annotated[VideoElement, Tag("video")],
        Annotated[AudioElement, Tag("audio")],
        Annotated[CaptionElement, Tag("caption")],
        Annotated[TextElement, Tag("text")],
        Annotated[CompositionElement, Tag("composition")],
        Annotated[OtherElement, Tag("other")],
    ],
    Discriminator(_element_tag),
]

CompositionElement.model_rebuild()


class RenderTemplate(BaseModel):
    """The document consumed by the external rendering service."""

    model_config = ConfigDict(extra="allow")

    output_format: str
    width: int
    height: int
    elements: List[Element] = Field(default_factory=list)

    @classmethod
    def from_document(cls, data: Any, stage: str = "template") -> "RenderTemplate":
        """Parse a JSON document, raising ModelContractError on any mismatch."""
        if not isinstance(data, dict):
            raise ModelContractError(stage, f"expected a JSON object, got {type(data).__name__}")

        missing = [key for key in TEMPLATE_KEYS if key not in data]
        if missing:
            raise ModelContractError(stage, f"missing top-level keys: {', '.join(missing)}")

        try:
            return cls.model_validate(data)
        except ValidationError as e:
            raise ModelContractError(stage, f"template does not match the element schema: {e}") from e

    def to_document(self) -> dict[str, Any]:
        """Serialize to the JSON-ready dict handed to the renderer."""
        return self.model_dump(mode="json", exclude_unset=True)

    def compositions(self) -> List[CompositionElement]:
        """Top-level scene compositions, in order."""
        return [e for e in self.elements if isinstance(e, CompositionElement)]

    def containers(self) -> Iterator[List[Any]]:
        """Every element list in the template: the top level and each composition."""
        pending: List[List[Any]] = [self.elements]
        while pending:
            container = pending.pop(0)
            yield container
            pending.extend(e.elements for e in container if isinstance(e, CompositionElement))

    def iter_elements(self) -> Iterator[BaseElement]:
        """Every non-composition element, container by container."""
        for container in self.containers():
            for element in container:
                if not isinstance(element, CompositionElement):
                    yield element
