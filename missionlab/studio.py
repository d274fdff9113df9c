"""Mission studio: the operation surface tying content and simulation together.

One :class:`MissionStudio` owns one catalog. Collaborators (credential
verifier, random source, renderer) are injected so tests can substitute
fakes and production can swap implementations without touching the
ingestion pipeline.
"""

import asyncio
import json
import random
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Optional, Union

from loguru import logger
from pydantic import BaseModel, Field

from .config import StudioConfig, config as default_config
from .content import (
    Catalog,
    CatalogMerger,
    ContentPackValidator,
    MergeResult,
    TopicResolver,
)
from .errors import (
    InvalidCredential,
    MissingInput,
    MissionLabError,
    PackTooLarge,
    ParseFailure,
    SchemaIssue,
    SchemaViolation,
)
from .physics import (
    FlightMetrics,
    LaunchParameters,
    PixelPath,
    TrajectorySimulator,
    ViewportMapper,
    ViewportMargins,
)
from .rendering import Renderer
from .security import CredentialVerifier, StaticSecretVerifier

LEARNING_FLOW = "Visual intuition → equation mapping → timed challenge drill."
SURPRISE_PROMPT = "Give me a smart mission on {topic}"
NO_PROMPT = "Surprise mission requested"
WELCOME_PROMPT = "Explain projectile motion in JEE-level depth"


class MissionBriefing(BaseModel):
    """A resolved topic with its mission content, ready for display."""

    topic: str
    title: str
    mission: str
    challenge: List[str]
    prompt: str
    flow: str = LEARNING_FLOW

    @property
    def quiz_lines(self) -> List[str]:
        return [
            f"Q{index}. {question}"
            for index, question in enumerate(self.challenge, start=1)
        ]


class UploadResult(BaseModel):
    """Outcome of a content-pack upload."""

    ok: bool
    merged: List[str] = Field(default_factory=list)
    added: List[str] = Field(default_factory=list)
    overwritten: List[str] = Field(default_factory=list)
    error_kind: Optional[str] = None
    reason: Optional[str] = None
    issues: List[SchemaIssue] = Field(default_factory=list)

    @classmethod
    def success(cls, result: MergeResult) -> "UploadResult":
        return cls(
            ok=True,
            merged=result.merged,
            added=result.added,
            overwritten=result.overwritten,
        )

    @classmethod
    def failure(cls, error: MissionLabError) -> "UploadResult":
        issues = error.issues if isinstance(error, SchemaViolation) else []
        return cls(ok=False, error_kind=error.kind, reason=str(error), issues=issues)

    @property
    def title(self) -> str:
        return "Upload successful" if self.ok else "Upload failed"

    @property
    def message(self) -> str:
        if not self.ok:
            return self.reason or "Upload failed."
        return (
            f"Loaded {len(self.merged)} topic(s): {', '.join(self.merged)}. "
            "You can now generate missions for them."
        )


@dataclass
class SimulationFrame:
    """Result of one slider update."""

    params: LaunchParameters
    status: str = "OK"
    metrics: Optional[FlightMetrics] = None
    path: Optional[PixelPath] = None
    error: Optional[str] = None
    labels: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.status == "OK"

    @property
    def readout(self) -> List[str]:
        if self.metrics is None:
            return []
        return self.metrics.summary_lines()


def _format_number(value: float) -> str:
    return f"{value:g}"


def slider_labels(params: LaunchParameters) -> List[str]:
    return [
        f"{_format_number(params.angle_deg)}°",
        f"{_format_number(params.speed_m_s)} m/s",
        f"{params.gravity_m_s2:.1f} m/s²",
    ]


def _title_for(topic: str) -> str:
    return f"Learning Mission: {topic[:1].upper() + topic[1:]}"


class MissionStudio:
    """Owns a catalog and exposes the mission and simulation operations."""

    def __init__(
        self,
        catalog: Optional[Catalog] = None,
        verifier: Optional[CredentialVerifier] = None,
        rng: Optional[random.Random] = None,
        renderer: Optional[Renderer] = None,
        settings: Optional[StudioConfig] = None,
    ):
        self.settings = settings or default_config
        if catalog is None:
            catalog = Catalog.with_presets(
                default_topic=self.settings.content.DEFAULT_TOPIC
            )
        self.catalog = catalog
        self.verifier = verifier or StaticSecretVerifier(self.settings.admin.ADMIN_KEY)
        self.rng = rng or random.Random()
        self.renderer = renderer

        self.resolver = TopicResolver(default_topic=self.catalog.default_topic)
        self.validator = ContentPackValidator()
        self.merger = CatalogMerger()

        viewport = self.settings.viewport
        self.simulator = TrajectorySimulator(self.settings.simulation.SAMPLE_COUNT)
        self.mapper = ViewportMapper(
            viewport.WIDTH_PX,
            viewport.HEIGHT_PX,
            ViewportMargins(
                horizontal=viewport.MARGIN_HORIZONTAL_PX,
                vertical=viewport.MARGIN_VERTICAL_PX,
                left=viewport.MARGIN_LEFT_PX,
                bottom=viewport.MARGIN_BOTTOM_PX,
            ),
        )

    # Missions

    def _briefing(self, topic: str, prompt: str) -> MissionBriefing:
        spec = self.catalog[topic]
        return MissionBriefing(
            topic=topic,
            title=_title_for(topic),
            mission=spec.mission,
            challenge=list(spec.challenge),
            prompt=prompt or NO_PROMPT,
        )

    def generate_mission(self, prompt: Optional[str]) -> MissionBriefing:
        """Resolve ``prompt`` to a topic and return its mission."""
        prompt = (prompt or "").strip()
        topic = self.resolver.resolve(prompt, self.catalog.keys())
        return self._briefing(topic, prompt)

    def surprise_mission(self) -> MissionBriefing:
        """Mission for a topic drawn uniformly from the current catalog."""
        topic = self.rng.choice(self.catalog.keys())
        return self._briefing(topic, SURPRISE_PROMPT.format(topic=topic))

    def welcome_mission(self) -> MissionBriefing:
        return self._briefing(self.catalog.default_topic, WELCOME_PROMPT)

    # Content packs

    def _authorize(self, provided_key: Optional[str]) -> None:
        key = (provided_key or "").strip()
        if not self.verifier.verify(key):
            raise InvalidCredential("Invalid admin key.")

    def _parse(self, file_bytes: Optional[bytes]) -> Any:
        if file_bytes is None:
            raise MissingInput("Please choose a JSON file to upload.")

        limit = self.settings.admin.MAX_UPLOAD_BYTES
        if len(file_bytes) > limit:
            raise PackTooLarge(len(file_bytes), limit)

        try:
            return json.loads(file_bytes.decode("utf-8-sig"))
        except (UnicodeDecodeError, json.JSONDecodeError, RecursionError) as e:
            raise ParseFailure("Unable to parse JSON file.") from e

    def _read_file(self, path: Optional[Union[str, Path]]) -> bytes:
        if path is None or not Path(path).is_file():
            raise MissingInput("Please choose a JSON file to upload.")

        path = Path(path)
        limit = self.settings.admin.MAX_UPLOAD_BYTES
        size = path.stat().st_size
        if size > limit:
            raise PackTooLarge(size, limit)
        return path.read_bytes()

    def _ingest_bytes(self, file_bytes: Optional[bytes]) -> MergeResult:
        candidate = self._parse(file_bytes)
        pack = self.validator.validate(candidate)
        result = self.merger.merge(self.catalog, pack)
        logger.info(
            f"Loaded {len(result.merged)} topic(s): {', '.join(result.merged)}"
        )
        return result

    def ingest(
        self, provided_key: Optional[str], file_bytes: Optional[bytes]
    ) -> MergeResult:
        """Authorize, parse, validate and merge a pack.

        Raises:
            InvalidCredential, MissingInput, ParseFailure, SchemaViolation
        """
        self._authorize(provided_key)
        return self._ingest_bytes(file_bytes)

    def upload_content_pack(
        self, provided_key: Optional[str], file_bytes: Optional[bytes]
    ) -> UploadResult:
        """Upload a pack from raw bytes; never raises for expected failures."""
        try:
            result = self.ingest(provided_key, file_bytes)
        except MissionLabError as e:
            logger.warning(f"Upload rejected ({e.kind}): {e}")
            return UploadResult.failure(e)
        return UploadResult.success(result)

    def upload_content_pack_file(
        self, provided_key: Optional[str], path: Optional[Union[str, Path]]
    ) -> UploadResult:
        try:
            self._authorize(provided_key)
            result = self._ingest_bytes(self._read_file(path))
        except MissionLabError as e:
            logger.warning(f"Upload rejected ({e.kind}): {e}")
            return UploadResult.failure(e)
        return UploadResult.success(result)

    async def upload_content_pack_async(
        self, provided_key: Optional[str], path: Optional[Union[str, Path]]
    ) -> UploadResult:
        """Async version of upload_content_pack_file; the read runs in an executor."""
        try:
            self._authorize(provided_key)
            file_bytes = await asyncio.get_running_loop().run_in_executor(
                None, self._read_file, path
            )
            result = self._ingest_bytes(file_bytes)
        except MissionLabError as e:
            logger.warning(f"Upload rejected ({e.kind}): {e}")
            return UploadResult.failure(e)
        return UploadResult.success(result)

    # Simulation

    def update_simulation(
        self, angle: float, speed: float, gravity: float
    ) -> SimulationFrame:
        """Recompute metrics and pixel path for new launch parameters.

        Non-physical input yields a frame with ``status == "ERROR"``.
        """
        params = LaunchParameters(
            angle_deg=angle, speed_m_s=speed, gravity_m_s2=gravity
        )
        frame = SimulationFrame(params=params, labels=slider_labels(params))

        try:
            metrics, sample = self.simulator.simulate(params)
            path = self.mapper.map(sample, metrics)
        except MissionLabError as e:
            logger.warning(f"Simulation failed: {e}")
            frame.status = "ERROR"
            frame.error = str(e)
            return frame

        frame.metrics = metrics
        frame.path = path
        if self.renderer is not None:
            self.renderer.draw(path, metrics)
        return frame

    def initial_simulation(self) -> SimulationFrame:
        defaults = self.settings.simulation
        return self.update_simulation(
            defaults.DEFAULT_ANGLE_DEG,
            defaults.DEFAULT_SPEED_M_S,
            defaults.DEFAULT_GRAVITY_M_S2,
        )
