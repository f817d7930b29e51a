"""
Tests for Data Models

Tests for reelgen/models/
"""

import pytest
from pydantic import ValidationError

from reelgen.errors import ModelContractError
from reelgen.models import (
    AudioElement,
    CaptionConfig,
    CaptionElement,
    CaptionPlacement,
    CompositionElement,
    OtherElement,
    RenderTemplate,
    Segment,
    SceneVideoAsset,
    TemplateRequest,
    TextElement,
    VideoAsset,
    VideoElement,
    parse_timecode,
)
from reelgen.models.request import MAX_ASSETS


class TestTimecodes:
    """Tests for segment time codes."""

    def test_parse(self):
        assert parse_timecode("00:05") == 5
        assert parse_timecode("01:30") == 90
        assert parse_timecode("1:02:03") == 3723

    @pytest.mark.parametrize("value", ["5", "00:75", "ab:cd", ""])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            parse_timecode(value)

    def test_segment_duration(self):
        segment = Segment(start_time="00:05", end_time="00:12")
        assert segment.start_seconds == 5
        assert segment.duration_seconds == 7


class TestVideoAsset:
    """Tests for VideoAsset."""

    def test_prompt_view_includes_segment_seconds(self, harbor_asset):
        view = harbor_asset.prompt_view()
        segment = view["analysis_data"]["segments"][0]
        assert view["url"] == harbor_asset.upload_url
        assert segment["start_seconds"] == 5
        assert segment["duration_seconds"] == 7

    def test_unanalyzed_asset(self, boats_asset):
        assert not boats_asset.is_analyzed
        assert boats_asset.tags == []
        assert "analysis_data" not in boats_asset.prompt_view()

    def test_assets_are_read_only(self, boats_asset):
        with pytest.raises(ValidationError):
            boats_asset.upload_url = "https://elsewhere.example.com/x.mp4"


class TestSceneVideoAsset:
    """Tests for scene trims."""

    def test_numeric_trims_become_strings(self):
        asset = SceneVideoAsset(id="a", url="u", trim_start=5, trim_duration=7.5)
        assert asset.trim_start == "5"
        assert asset.trim_duration == "7.5"
        assert asset.is_trimmed

    def test_trims_must_be_paired(self):
        with pytest.raises(ValidationError, match="together"):
            SceneVideoAsset(id="a", url="u", trim_start="5")

    def test_blank_trims_mean_untrimmed(self):
        asset = SceneVideoAsset(id="a", url="u", trim_start="", trim_duration=" ")
        assert not asset.is_trimmed


class TestCaptionConfig:
    """Tests for CaptionConfig."""

    def test_camel_case_input(self):
        config = CaptionConfig.model_validate({
            "enabled": True,
            "presetId": "beasty",
            "placement": "middle",
            "transcriptColor": "#FF0000",
            "transcriptEffect": "highlight",
        })
        assert config.preset_id == "beasty"
        assert config.placement is CaptionPlacement.CENTER
        assert config.transcript_color == "#FF0000"
        assert config.model_dump(by_alias=True)["presetId"] == "beasty"

    def test_snake_case_input(self):
        config = CaptionConfig(preset_id="fade", transcript_effect="fade")
        assert config.preset_id == "fade"
        assert config.placement is CaptionPlacement.BOTTOM

    @pytest.mark.parametrize("color", ["red", "#fff", "04f827", "#04f82z"])
    def test_invalid_color(self, color):
        with pytest.raises(ValidationError):
            CaptionConfig(transcript_color=color)

    def test_invalid_effect(self):
        with pytest.raises(ValidationError, match="Unknown transcript effect"):
            CaptionConfig(transcript_effect="wobble")

    def test_default(self):
        config = CaptionConfig.default()
        assert config.enabled
        assert config.preset_id == "karaoke"
        assert config.transcript_color == "#04f827"


class TestTemplateRequest:
    """Tests for TemplateRequest."""

    def test_script_is_stripped(self, assets):
        request = TemplateRequest(script="  Hello there.  ", assets=assets, voice_id="v")
        assert request.script == "Hello there."

    def test_blank_script(self, assets):
        with pytest.raises(ValidationError, match="script cannot be empty"):
            TemplateRequest(script="   ", assets=assets)

    def test_missing_voice_uses_default(self, assets):
        from reelgen.config import config

        request = TemplateRequest(script="Hello", assets=assets, voice_id=None)
        assert request.voice_id == config.default_voice_id

    def test_asset_limits(self, harbor_asset):
        with pytest.raises(ValidationError, match="at least one"):
            TemplateRequest(script="Hello", assets=[])

        too_many = [
            VideoAsset(id=f"a{i}", upload_url=f"https://cdn.example.com/{i}.mp4")
            for i in range(MAX_ASSETS + 1)
        ]
        with pytest.raises(ValidationError, match="at most"):
            TemplateRequest(script="Hello", assets=too_many)

    def test_duplicate_ids(self, harbor_asset):
        with pytest.raises(ValidationError, match="duplicate asset ids: harbor"):
            TemplateRequest(script="Hello", assets=[harbor_asset, harbor_asset])

    def test_blank_upload_url(self):
        asset = VideoAsset(id="a", upload_url=" ")
        with pytest.raises(ValidationError, match="without an upload URL"):
            TemplateRequest(script="Hello", assets=[asset])

    def test_from_yaml(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text(
            "script: Waves roll in.\n"
            "voice_id: v1\n"
            "caption_config:\n"
            "  presetId: fade\n"
            "assets:\n"
            "  - id: a\n"
            "    upload_url: https://cdn.example.com/a.mp4\n"
        )

        request = TemplateRequest.from_yaml(path)

        assert request.caption_config.preset_id == "fade"
        assert request.assets[0].id == "a"


class TestRenderTemplate:
    """Tests for element parsing and serialization."""

    def test_element_kinds(self):
        template = RenderTemplate.from_document({
            "output_format": "mp4",
            "width": 1080,
            "height": 1920,
            "elements": [
                {"type": "composition", "elements": [
                    {"type": "video", "source": "https://cdn.example.com/a.mp4"},
                    {"type": "audio", "source": "Hello"},
                    {"type": "text", "transcript_source": "voice-1"},
                ]},
                {"type": "text", "name": "Subtitle-2", "text": "x"},
                {"type": "text", "name": "Title", "text": "Harbor"},
                {"type": "shape", "fill_color": "#000000"},
            ],
        })

        composition, subtitle, title, shape = template.elements
        assert isinstance(composition, CompositionElement)
        assert [type(e) for e in composition.elements] == [VideoElement, AudioElement, CaptionElement]
        assert isinstance(subtitle, CaptionElement)
        assert type(title) is TextElement
        assert isinstance(shape, OtherElement)

    def test_round_trip_keeps_only_given_properties(self):
        document = {
            "output_format": "mp4",
            "width": 1080,
            "height": 1920,
            "elements": [{"type": "video", "source": "s", "volume": "80%"}],
        }
        assert RenderTemplate.from_document(document).to_document() == document

    def test_missing_top_level_key(self):
        with pytest.raises(ModelContractError, match="missing top-level keys: elements"):
            RenderTemplate.from_document({"output_format": "mp4", "width": 1080, "height": 1920})

    def test_not_an_object(self):
        with pytest.raises(ModelContractError):
            RenderTemplate.from_document([])


class TestEmptyFiles:
    """Tests for loading empty YAML files."""

    def test_empty_request_file(self, tmp_path):
        path = tmp_path / "request.yaml"
        path.write_text("")

        with pytest.raises(ValidationError):
            TemplateRequest.from_yaml(path)

    def test_empty_plan_file(self, tmp_path):
        from reelgen.models import ScenePlan

        path = tmp_path / "plan.yaml"
        path.write_text("")

        with pytest.raises(ValidationError):
            ScenePlan.from_yaml(path)
