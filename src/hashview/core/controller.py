"""View orchestration: fetch -> classify -> fragment -> render, with stale-result suppression"""

import logging
from typing import Callable, Optional

from hashview.core.classify import classify
from hashview.core.fetch import ContentFetcher, FetchFailed
from hashview.core.fragment import parse_fragment
from hashview.core.frontmatter import extract_frontmatter
from hashview.core.models import (
    Error,
    Loading,
    MediaVariant,
    Ready,
    RetrievedArtifact,
    ViewContent,
    ViewFragmentState,
    ViewState,
)
from hashview.core.render import DEFAULT_PARSER_CONFIG, make_parser, render


logger = logging.getLogger(__name__)

MISSING_IDENTIFIER = "No content identifier provided."


def build_view(
    identifier: str,
    artifact: RetrievedArtifact,
    fragment: ViewFragmentState,
    raw_fragment: str = "",
    parser_config: str = DEFAULT_PARSER_CONFIG,
    ) -> Ready:
    """Classify a retrieved artifact and render it into a Ready state."""
    classification = classify(artifact.media_type, artifact.filename)
    frontmatter, body = {}, ""
    if classification.variant is MediaVariant.markdown:
        parsed = extract_frontmatter(artifact.text or "")
        frontmatter, body = parsed.frontmatter, parsed.body

    content = ViewContent(
        url=artifact.url,
        filename=artifact.filename,
        text=artifact.text,
        frontmatter=frontmatter,
        body=body,
        raw_fragment=raw_fragment,
    )
    html = render(classification, fragment, content, parser_config)
    return Ready(
        identifier=identifier,
        classification=classification,
        fragment=fragment,
        html=html,
        filename=artifact.filename,
    )


class ViewController:
    """Owns the Loading -> (Error | Ready) lifecycle of one viewer.

    Every open() starts a new generation; results belonging to an older
    generation, or arriving after close(), are dropped.
    """

    def __init__(
        self,
        fetcher: ContentFetcher,
        parser_config: str = DEFAULT_PARSER_CONFIG,
        listener: Optional[Callable[[ViewState], None]] = None,
        ):
        make_parser(parser_config)  # raises ValueError before any state is published
        self._fetcher = fetcher
        self.parser_config = parser_config
        self._listener = listener
        self._generation = 0
        self._closed = False
        self.state: Optional[ViewState] = None

    @property
    def closed(self) -> bool:
        return self._closed

    def _is_current(self, generation: int) -> bool:
        return not self._closed and generation == self._generation

    def _publish(self, generation: int, state: ViewState) -> Optional[ViewState]:
        """Set state if generation is still current. Returns the state, or None if dropped."""
        if not self._is_current(generation):
            logger.debug("Dropping stale %s for %s", type(state).__name__, state.identifier)
            return None
        self.state = state
        if self._listener is not None:
            self._listener(state)
        return state

    async def open(self, identifier: Optional[str], fragment: str = "") -> Optional[ViewState]:
        """Load and render identifier. Returns the terminal state, or None if superseded."""
        self._generation += 1
        generation = self._generation
        self._publish(generation, Loading(identifier))

        if not identifier:
            return self._publish(generation, Error(identifier, MISSING_IDENTIFIER))

        fragment_state = parse_fragment(fragment)
        try:
            artifact = await self._fetcher.fetch(identifier)
        except FetchFailed as e:
            return self._publish(generation, Error(identifier, str(e)))

        if not self._is_current(generation):
            logger.debug("Discarding superseded fetch for %s", identifier)
            return None

        ready = build_view(identifier, artifact, fragment_state, fragment, self.parser_config)
        return self._publish(generation, ready)

    def close(self) -> None:
        """Tear down: any in-flight fetch resolves without touching state."""
        self._closed = True
