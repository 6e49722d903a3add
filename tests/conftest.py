"""Pytest configuration and fixtures."""

import io
import json
from collections.abc import Callable
from typing import AsyncGenerator

import httpx
import pytest
from httpx import ASGITransport, AsyncClient
from PIL import Image

from nutriscan_api.core.config import GenerationParams
from nutriscan_api.models.chat import ChatMessageRecord, Role
from nutriscan_api.models.profile import ProfileRecord
from nutriscan_api.models.scan import ScanSessionRecord
from nutriscan_api.services.collaborators import (
    IdentityProvider,
    ImageStorage,
    ProfileSource,
    ScanPersistence,
)
from nutriscan_api.services.gemini.client import ModelFallbackClient
from nutriscan_api.services.prompt_composer import PromptComposer

TEST_API_KEY = "test-key-123"
TEST_BASE_URL = "https://gemini.test/v1beta/models"

SAMPLE_ANALYSIS = """📦 NAMA PRODUK
Krupuk Enak

📊 INFORMASI NILAI GIZI
| Energi | 120 kkal | 6% |

✅ KESIMPULAN
Cukup aman dikonsumsi sesekali.
Perhatikan kandungan natrium."""


# =============================================================================
# Gemini responses
# =============================================================================


def gemini_body(*texts: str, finish_reason: str = "STOP") -> dict:
    """A generateContent response body whose first candidate has `texts` as parts."""
    return {
        "candidates": [
            {
                "content": {"role": "model", "parts": [{"text": t} for t in texts]},
                "finishReason": finish_reason,
            }
        ]
    }


def gemini_response(text: str, status_code: int = 200) -> httpx.Response:
    return httpx.Response(status_code, json=gemini_body(text))


class ScriptedTransport(httpx.MockTransport):
    """
    Mock transport that answers calls from a script, one entry per call.

    Entries are httpx.Response objects or exceptions to raise. Every request
    is recorded so tests can count calls and inspect bodies.
    """

    def __init__(self, script: list[httpx.Response | Exception]):
        self.script = list(script)
        self.requests: list[httpx.Request] = []
        super().__init__(self._handle)

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if not self.script:
            raise AssertionError(f"Unexpected extra request to {request.url}")
        entry = self.script.pop(0)
        if isinstance(entry, Exception):
            raise entry
        return entry

    @property
    def models_called(self) -> list[str]:
        return [r.url.path.rsplit("/", 1)[-1].split(":")[0] for r in self.requests]

    def json_body(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


@pytest.fixture
def make_model_client() -> Callable[..., tuple[ModelFallbackClient, ScriptedTransport]]:
    """
    Factory for a ModelFallbackClient backed by a ScriptedTransport.

    Usage:
        client, transport = make_model_client([gemini_response("hi")])
    """

    def factory(
        script: list[httpx.Response | Exception],
        models: list[str] | None = None,
        api_key: str = TEST_API_KEY,
    ) -> tuple[ModelFallbackClient, ScriptedTransport]:
        transport = ScriptedTransport(script)
        client = ModelFallbackClient(
            api_key=api_key,
            base_url=TEST_BASE_URL,
            models=models if models is not None else ["model-a", "model-b", "model-c"],
            transport=transport,
        )
        return client, transport

    return factory


# =============================================================================
# Prompting
# =============================================================================


@pytest.fixture
def composer() -> PromptComposer:
    return PromptComposer(
        analysis_params=GenerationParams(temperature=0.3, max_output_tokens=8192),
        chat_params=GenerationParams(temperature=0.7, max_output_tokens=4096),
        history_window=10,
    )


# =============================================================================
# Collaborators
# =============================================================================


class StaticIdentity(IdentityProvider):
    def __init__(self, user_id: str | None):
        self.user_id = user_id

    async def get_current_user_id(self) -> str | None:
        return self.user_id


class RecordingStorage(ImageStorage):
    """Keeps uploads in memory; can be told to fail."""

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.uploads: list[tuple[str, bytes, str]] = []

    async def upload_image(self, user_id: str, data: bytes, filename: str) -> str:
        if self.fail:
            raise RuntimeError("storage offline")
        self.uploads.append((user_id, data, filename))
        return f"gridfs://scan_images/{len(self.uploads)}"


class InMemoryStore(ScanPersistence, ProfileSource):
    """Sessions, messages and profiles held in dicts, with switchable failures."""

    def __init__(self):
        self.profiles: dict[str, ProfileRecord] = {}
        self.sessions: dict[str, ScanSessionRecord] = {}
        self.messages: list[ChatMessageRecord] = []
        self.fail_profile = False
        self.fail_session = False
        self.fail_roles: set[str] = set()

    async def get_health_profile(self, user_id: str) -> ProfileRecord | None:
        if self.fail_profile:
            raise RuntimeError("profile store offline")
        return self.profiles.get(user_id)

    async def persist_session(
        self,
        user_id: str,
        image_url: str,
        product_name: str,
        analysis_text: str,
    ) -> str:
        if self.fail_session:
            raise RuntimeError("insert failed")
        session_id = f"session-{len(self.sessions) + 1}"
        self.sessions[session_id] = ScanSessionRecord(
            session_id=session_id,
            user_id=user_id,
            image_url=image_url,
            product_name=product_name,
            initial_analysis=analysis_text,
        )
        return session_id

    async def persist_message(self, session_id: str, role: Role, text: str) -> str:
        if role in self.fail_roles:
            raise RuntimeError(f"insert {role} message failed")
        message_id = f"msg-{len(self.messages) + 1}"
        self.messages.append(
            ChatMessageRecord(message_id=message_id, session_id=session_id, role=role, text=text)
        )
        return message_id

    async def get_session(self, session_id: str) -> ScanSessionRecord | None:
        return self.sessions.get(session_id)

    async def get_messages(self, session_id: str) -> list[ChatMessageRecord]:
        return [m for m in self.messages if m.session_id == session_id]


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def diabetic_profile() -> ProfileRecord:
    return ProfileRecord(
        id="user-1",
        full_name="Siti",
        health_conditions=["Diabetes"],
        food_allergies=["Kacang"],
        birth_year=1990,
        gender="female",
    )


# =============================================================================
# Images
# =============================================================================


def jpeg_bytes(width: int = 64, height: int = 48, color: str = "red") -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", (width, height), color).save(buffer, format="JPEG")
    return buffer.getvalue()


@pytest.fixture
def label_photo() -> bytes:
    """A small but valid JPEG standing in for a label photo."""
    return jpeg_bytes()


# =============================================================================
# HTTP
# =============================================================================


@pytest.fixture
async def client() -> AsyncGenerator[AsyncClient, None]:
    """
    Create async test client.

    Dependency overrides set by a test are cleared afterwards.

    Usage:
        async def test_endpoint(client: AsyncClient):
            response = await client.get("/health")
            assert response.status_code == 200
    """
    from nutriscan_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
