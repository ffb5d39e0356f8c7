"""LangGraph workflow definition for study aid generation."""

import logging
from pathlib import Path
from typing import Any, Protocol

from langgraph.graph import END, StateGraph

from learnmate.agents.generator import GenerationClient
from learnmate.errors import ExtractionFailed
from learnmate.graph.state import StudyState
from learnmate.models.study_aid import StudyAidArtifact

logger = logging.getLogger(__name__)


class ContentExtractor(Protocol):
    """Turns a document into bounded plain text."""

    def extract(self, path: str | Path) -> str: ...


def create_study_workflow(
    extractor: ContentExtractor, client: GenerationClient
) -> StateGraph:
    """
    Create the LangGraph workflow that turns a document into a study aid.

    The workflow follows this structure:
    1. Extractor - Reads the document into plain text
    2. Study aid writer - Generates the style-specific study aid

    Errors raised by either node end the run and reach the caller unchanged.

    Args:
        extractor: Content extractor for the extract node
        client: Generation client for the study aid node

    Returns:
        StateGraph ready to compile
    """

    def extract_content(state: StudyState) -> dict[str, Any]:
        """Extractor node: read the document, wrapping any failure in ExtractionFailed."""
        document = state["document"]
        try:
            content = extractor.extract(document)
        except ExtractionFailed:
            raise
        except Exception as e:
            raise ExtractionFailed(Path(document).name, str(e)) from e

        logger.info(f"Extracted {len(content)} characters from {Path(document).name}")
        return {"content": content}

    async def write_study_aid(state: StudyState) -> dict[str, Any]:
        """Study aid writer node: generate the aid for the requested style."""
        style = state["style"]
        result = await client.generate_study_aid(state["content"], style)
        artifact = StudyAidArtifact.from_result(
            result, style, document_name=Path(state["document"]).name
        )
        return {"artifact": artifact}

    workflow = StateGraph(StudyState)

    workflow.add_node("extractor", extract_content)
    workflow.add_node("study_aid_writer", write_study_aid)

    # Start -> Extractor -> Study aid writer -> End
    workflow.set_entry_point("extractor")
    workflow.add_edge("extractor", "study_aid_writer")
    workflow.add_edge("study_aid_writer", END)

    return workflow


def compile_workflow(extractor: ContentExtractor, client: GenerationClient):
    """
    Compile the workflow and return it ready for execution.

    Returns:
        Compiled workflow
    """
    workflow = create_study_workflow(extractor, client)
    return workflow.compile()
