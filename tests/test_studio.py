"""Test suite for the mission studio operation surface."""

import json
import random

import pytest

from missionlab import MissionStudio
from missionlab.config import StudioConfig
from missionlab.content import Catalog, MissionSpec
from missionlab.security import StaticSecretVerifier

SECRET = "test-admin-key"

OPTICS_PACK = {
    "optics": {"mission": "See light bend.", "challenge": ["Why does light refract?"]}
}


class RecordingRenderer:
    """Renderer double that keeps every frame it is asked to draw."""

    def __init__(self):
        self.frames = []

    def draw(self, path, metrics):
        self.frames.append((path, metrics))


class AllowListVerifier:
    def __init__(self, *accepted):
        self.accepted = set(accepted)
        self.seen = []

    def verify(self, provided_key):
        self.seen.append(provided_key)
        return provided_key in self.accepted


class LastChoice:
    """Random source that always picks the last item."""

    def choice(self, seq):
        return seq[-1]


@pytest.fixture
def studio():
    return MissionStudio(verifier=StaticSecretVerifier(SECRET), rng=random.Random(0))


def _encode(data) -> bytes:
    return json.dumps(data).encode("utf-8")


class TestGenerateMission:
    """Test prompt-driven mission generation."""

    def test_resolves_and_renders(self, studio):
        briefing = studio.generate_mission("Explain heat flow in engines")

        assert briefing.topic == "thermodynamics"
        assert briefing.title == "Learning Mission: Thermodynamics"
        assert briefing.mission == studio.catalog["thermodynamics"].mission
        assert briefing.prompt == "Explain heat flow in engines"
        assert briefing.flow.startswith("Visual intuition")

    def test_quiz_lines_are_numbered(self, studio):
        briefing = studio.generate_mission("projectile")
        assert briefing.quiz_lines[0].startswith("Q1. At 30°")
        assert len(briefing.quiz_lines) == 3

    def test_blank_prompt_uses_default(self, studio):
        briefing = studio.generate_mission("   ")
        assert briefing.topic == "projectile"
        assert briefing.prompt == "Surprise mission requested"

    def test_welcome_mission(self, studio):
        briefing = studio.welcome_mission()
        assert briefing.topic == "projectile"
        assert "JEE-level" in briefing.prompt

    def test_fabricated_catalog(self):
        catalog = Catalog(
            {"waves": MissionSpec(mission="Surf.", challenge=["What is a node?"])},
            default_topic="waves",
        )
        studio = MissionStudio(catalog=catalog, verifier=StaticSecretVerifier(SECRET))

        briefing = studio.generate_mission("electric charge")

        assert briefing.topic == "waves"


class TestSurpriseMission:
    """Test random topic selection."""

    def test_uses_injected_random_source(self):
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), rng=LastChoice())

        briefing = studio.surprise_mission()

        assert briefing.topic == "thermodynamics"
        assert briefing.prompt == "Give me a smart mission on thermodynamics"

    def test_seeded_selection_is_reproducible(self):
        picks = []
        for _ in range(2):
            studio = MissionStudio(
                verifier=StaticSecretVerifier(SECRET), rng=random.Random(1234)
            )
            picks.append([studio.surprise_mission().topic for _ in range(10)])

        assert picks[0] == picks[1]
        assert set(picks[0]) <= {"projectile", "electrostatics", "thermodynamics"}

    def test_includes_uploaded_topics(self, studio):
        studio.upload_content_pack(SECRET, _encode(OPTICS_PACK))
        studio.rng = LastChoice()
        assert studio.surprise_mission().topic == "optics"


class TestUploadContentPack:
    """Test the gated ingestion pipeline."""

    def test_upload_then_generate(self, studio):
        result = studio.upload_content_pack(SECRET, _encode(OPTICS_PACK))

        assert result.ok
        assert result.merged == ["optics"]
        assert result.title == "Upload successful"
        assert result.message.startswith("Loaded 1 topic(s): optics.")

        briefing = studio.generate_mission("optics please")
        assert briefing.topic == "optics"
        assert briefing.mission == "See light bend."
        assert briefing.challenge == ["Why does light refract?"]

    def test_wrong_key_leaves_catalog_untouched(self, studio):
        before = studio.catalog.keys()

        result = studio.upload_content_pack("not-the-key", _encode(OPTICS_PACK))

        assert not result.ok
        assert result.error_kind == "InvalidCredential"
        assert result.title == "Upload failed"
        assert studio.catalog.keys() == before

    def test_key_is_trimmed(self, studio):
        result = studio.upload_content_pack(f"  {SECRET}\n", _encode(OPTICS_PACK))
        assert result.ok

    def test_credential_checked_before_input(self, studio):
        result = studio.upload_content_pack("nope", None)
        assert result.error_kind == "InvalidCredential"

    def test_missing_file(self, studio):
        result = studio.upload_content_pack(SECRET, None)
        assert result.error_kind == "MissingInput"

    @pytest.mark.parametrize(
        "payload", [b"{not json", b"", b"\xff\xfe\x00", b"[" * 200000]
    )
    def test_unparseable_payload(self, studio, payload):
        before = studio.catalog.snapshot()

        result = studio.upload_content_pack(SECRET, payload)

        assert result.error_kind == "ParseFailure"
        assert result.reason == "Unable to parse JSON file."
        assert studio.catalog.snapshot() == before

    def test_schema_violation_is_all_or_nothing(self, studio):
        pack = dict(OPTICS_PACK)
        pack["waves"] = {"mission": "  ", "challenge": ["What is a node?"]}
        before = studio.catalog.keys()

        result = studio.upload_content_pack(SECRET, _encode(pack))

        assert result.error_kind == "SchemaViolation"
        assert [issue.topic for issue in result.issues] == ["waves"]
        assert studio.catalog.keys() == before

    def test_non_object_pack(self, studio):
        result = studio.upload_content_pack(SECRET, b'["optics"]')
        assert result.error_kind == "SchemaViolation"

    def test_override_existing_topic(self, studio):
        pack = {"projectile": {"mission": "Throw things.", "challenge": ["How far?"]}}

        result = studio.upload_content_pack(SECRET, _encode(pack))

        assert result.overwritten == ["projectile"]
        assert studio.generate_mission("").mission == "Throw things."

    def test_byte_order_mark_tolerated(self, studio):
        result = studio.upload_content_pack(
            SECRET, b"\xef\xbb\xbf" + _encode(OPTICS_PACK)
        )
        assert result.ok

    def test_upload_size_limit(self):
        settings = StudioConfig.from_dict({"admin": {"MAX_UPLOAD_BYTES": 16}})
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), settings=settings)

        result = studio.upload_content_pack(SECRET, _encode(OPTICS_PACK))

        assert result.error_kind == "ParseFailure"
        assert "limit" in result.reason
        assert "optics" not in studio.catalog

    def test_injected_verifier(self):
        verifier = AllowListVerifier("swap-in")
        studio = MissionStudio(verifier=verifier)

        result = studio.upload_content_pack("swap-in", _encode(OPTICS_PACK))

        assert result.ok
        assert verifier.seen == ["swap-in"]

    def test_upload_from_file(self, studio, tmp_path):
        pack_file = tmp_path / "optics.json"
        pack_file.write_text(json.dumps(OPTICS_PACK))

        result = studio.upload_content_pack_file(SECRET, pack_file)

        assert result.ok
        assert "optics" in studio.catalog

    @pytest.mark.parametrize("path", [None, "does/not/exist.json"])
    def test_upload_from_missing_file(self, studio, path):
        result = studio.upload_content_pack_file(SECRET, path)
        assert result.error_kind == "MissingInput"

    @pytest.mark.asyncio
    async def test_async_upload(self, studio, tmp_path):
        pack_file = tmp_path / "optics.json"
        pack_file.write_text(json.dumps(OPTICS_PACK))

        result = await studio.upload_content_pack_async(SECRET, pack_file)

        assert result.ok
        assert studio.generate_mission("optics").topic == "optics"

    @pytest.mark.asyncio
    async def test_async_upload_wrong_key(self, studio, tmp_path):
        pack_file = tmp_path / "optics.json"
        pack_file.write_text(json.dumps(OPTICS_PACK))

        result = await studio.upload_content_pack_async("nope", pack_file)

        assert result.error_kind == "InvalidCredential"
        assert "optics" not in studio.catalog


class TestUpdateSimulation:
    """Test the slider-driven simulation surface."""

    def test_frame_contents(self, studio):
        frame = studio.update_simulation(45, 20, 9.8)

        assert frame.ok
        assert frame.labels == ["45°", "20 m/s", "9.8 m/s²"]
        assert frame.readout[0] == "Time of flight: 2.89 s"
        assert len(frame.path) == 81
        assert frame.path.width == 640
        assert frame.path.height == 360

    def test_renderer_receives_frame(self):
        renderer = RecordingRenderer()
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), renderer=renderer)

        frame = studio.update_simulation(30, 15, 9.8)

        assert len(renderer.frames) == 1
        path, metrics = renderer.frames[0]
        assert path is frame.path
        assert metrics is frame.metrics

    def test_invalid_gravity_is_recoverable(self):
        renderer = RecordingRenderer()
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), renderer=renderer)

        frame = studio.update_simulation(45, 20, 0)

        assert frame.status == "ERROR"
        assert "Gravity" in frame.error
        assert frame.metrics is None
        assert frame.readout == []
        assert renderer.frames == []

        assert studio.update_simulation(45, 20, 9.8).ok

    def test_overflowing_speed_is_recoverable(self):
        renderer = RecordingRenderer()
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), renderer=renderer)

        frame = studio.update_simulation(45, 1e200, 9.8)

        assert frame.status == "ERROR"
        assert "non-finite" in frame.error
        assert frame.metrics is None
        assert renderer.frames == []

    def test_zero_angle(self, studio):
        frame = studio.update_simulation(0, 20, 9.8)

        assert frame.ok
        assert frame.metrics.time_of_flight_s == 0
        assert frame.path.points == [(20.0, 350.0)]

    def test_initial_simulation_uses_defaults(self, studio):
        frame = studio.initial_simulation()
        assert frame.labels == ["45°", "20 m/s", "9.8 m/s²"]

    def test_sample_count_from_settings(self):
        settings = StudioConfig.from_dict({"simulation": {"SAMPLE_COUNT": 10}})
        studio = MissionStudio(verifier=StaticSecretVerifier(SECRET), settings=settings)

        assert len(studio.update_simulation(45, 20, 9.8).path) == 11
