"""Study aid session - runs the study pipeline and holds its latest result."""

import logging
from pathlib import Path

from learnmate.agents.generator import GenerationClient
from learnmate.graph.state import create_initial_state
from learnmate.graph.workflow import ContentExtractor, compile_workflow
from learnmate.models.profile import LearningStyle
from learnmate.models.study_aid import StudyAidArtifact

logger = logging.getLogger(__name__)


class StudyAidSession:
    """Owns at most one study aid artifact at a time."""

    def __init__(self, extractor: ContentExtractor, client: GenerationClient):
        self.extractor = extractor
        self.client = client
        self.workflow = compile_workflow(extractor, client)
        self._artifact: StudyAidArtifact | None = None

    @property
    def artifact(self) -> StudyAidArtifact | None:
        return self._artifact

    async def produce(self, document: str | Path, style: LearningStyle) -> StudyAidArtifact:
        """
        Extract a document and generate a study aid for it.

        The held artifact is only replaced once generation succeeded; on any
        failure the previous artifact stays in place and the error propagates.

        Args:
            document: Path of the document to study
            style: Learning style to generate for

        Returns:
            The new artifact

        Raises:
            ExtractionFailed: If the document could not be read
            GenerationUnavailable: If the service stayed unreachable
            MalformedResponse: If the service returned no study aid text
        """
        final_state = await self.workflow.ainvoke(create_initial_state(document, style))
        artifact = final_state["artifact"]

        self._artifact = artifact
        logger.info(
            f"Study aid for {artifact.document_name} ready "
            f"({artifact.style_label}, {len(artifact.sources)} sources)"
        )
        return artifact
