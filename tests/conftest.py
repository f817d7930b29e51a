"""
Pytest Configuration and Fixtures

Shared fixtures for all tests. No test talks to a real model: agents and the
pipeline are given a FakeClient that replays scripted responses.
"""

import copy
import json
from typing import Any, Dict, List, Union

import pytest

from reelgen.config import BUNDLED_RENDER_DOCS, Config
from reelgen.models import ScenePlan, TemplateRequest, VideoAsset

HARBOR_URL = "https://cdn.example.com/harbor.mp4"
BOATS_URL = "https://cdn.example.com/boats.mp4"
VOICE_ID = "voice-abc"


class FakeClient:
    """Stands in for AnthropicClient, replaying responses in order."""

    def __init__(self, responses: List[Union[str, Dict[str, Any], Exception]]) -> None:
        self._responses = list(responses)
        self.calls: List[Dict[str, Any]] = []

    async def create_message(
        self,
        prompt: str,
        max_tokens: int = 4096,
        system: str = None,
        temperature: float = 0.7,
    ) -> str:
        self.calls.append({
            "prompt": prompt,
            "max_tokens": max_tokens,
            "system": system,
            "temperature": temperature,
        })
        if not self._responses:
            raise AssertionError("FakeClient ran out of scripted responses")
        response = self._responses.pop(0)
        if isinstance(response, Exception):
            raise response
        if isinstance(response, dict):
            return json.dumps(response)
        return response


@pytest.fixture
def harbor_asset() -> VideoAsset:
    """An analyzed asset with one 7 second segment starting at 0:05."""
    return VideoAsset(
        id="harbor",
        upload_url=HARBOR_URL,
        title="Harbor at sunrise",
        description="Boats resting in a calm harbor",
        tags=["harbor", "morning"],
        user_id="user-1",
        duration_seconds=30,
        analysis_data={
            "segments": [
                {
                    "start_time": "00:05",
                    "end_time": "00:12",
                    "description": "Sun rising over the water",
                    "key_points": ["sunrise"],
                }
            ]
        },
    )


@pytest.fixture
def boats_asset() -> VideoAsset:
    """An unanalyzed 20 second asset."""
    return VideoAsset(
        id="boats",
        upload_url=BOATS_URL,
        title="Fishing boats",
        tags=None,
        user_id="user-1",
        duration_seconds=20,
    )


@pytest.fixture
def assets(harbor_asset, boats_asset) -> List[VideoAsset]:
    return [harbor_asset, boats_asset]


@pytest.fixture
def plan_data() -> Dict[str, Any]:
    """Planner output: scene 1 trimmed to the harbor segment, scene 2 with a stale URL."""
    return {
        "scenes": [
            {
                "scene_number": 1,
                "script_text": "Morning light spills over the quiet harbor town.",
                "video_asset": {
                    "id": "harbor",
                    "url": HARBOR_URL,
                    "title": "Harbor at sunrise",
                    "trim_start": 5,
                    "trim_duration": 7,
                },
                "reasoning": "The sunrise segment matches the opening line",
            },
            {
                "scene_number": 2,
                "script_text": "Fishermen haul their nets at dawn.",
                "video_asset": {
                    "id": "boats",
                    "url": "https://old-cdn.example.com/boats.mp4",
                    "title": "Fishing boats",
                },
                "reasoning": "Boats for the fishing line",
            },
        ]
    }


@pytest.fixture
def scene_plan(plan_data) -> ScenePlan:
    return ScenePlan.model_validate(plan_data)


def scene_composition(number: int, source: str) -> Dict[str, Any]:
    """A composition as a model typically writes it, with the usual mistakes."""
    return {
        "id": f"scene-{number}",
        "name": f"Scene-{number}",
        "type": "composition",
        "track": 1,
        "elements": [
            {
                "id": f"video-{number}",
                "name": f"Video-{number}",
                "type": "video",
                "track": 1,
                "source": source,
                "fit": "contain",
                "duration": 7,
            },
            {
                "id": f"voice-{number}",
                "name": f"Voice-{number}",
                "type": "audio",
                "track": 2,
                "text": f"Narration for scene {number}.",
                "provider": "elevenlabs model_id=eleven_multilingual_v2 voice_id=someone-else",
            },
            {
                "id": f"caption-{number}",
                "name": f"Subtitle-{number}",
                "type": "text",
                "track": 3,
                "time": 0,
                "duration": None,
                "transcript_source": f"voice-{number}",
                "x": "50%",
                "y": "80%",
                "shadow_color": "#000000",
                "transcript_effect": "fade",
            },
        ],
    }


@pytest.fixture
def template_document() -> Dict[str, Any]:
    """Template output for the two-scene plan."""
    return {
        "output_format": "mp4",
        "width": 1080,
        "height": 1920,
        "elements": [
            scene_composition(1, "https://cdn.example.com/wrong.mp4"),
            scene_composition(2, BOATS_URL),
        ],
    }


@pytest.fixture
def make_document(template_document):
    """Fresh deep copies of the template document, so tests can mutate freely."""
    def _make() -> Dict[str, Any]:
        return copy.deepcopy(template_document)
    return _make


@pytest.fixture
def request_data(assets) -> TemplateRequest:
    return TemplateRequest(
        script=(
            "Morning light spills over the quiet harbor town. "
            "Fishermen haul their nets at dawn."
        ),
        assets=assets,
        voice_id=VOICE_ID,
    )


@pytest.fixture
def test_config() -> Config:
    """Configuration independent of the environment."""
    return Config(
        anthropic_api_key="test-key",
        default_model="test-model",
        words_to_seconds_factor=0.7,
        duration_safety_margin=0.95,
        max_repair_attempts=3,
        default_voice_id="default-voice",
        voice_provider_template="elevenlabs model_id=eleven_multilingual_v2 voice_id={voice_id}",
        render_docs_path=BUNDLED_RENDER_DOCS,
    )
