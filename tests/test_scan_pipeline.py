"""Tests for the scan pipeline coordinator."""

import base64
import io

import httpx
import pytest
from PIL import Image

from nutriscan_api.core.exceptions import ErrorKind, NutriScanError
from nutriscan_api.models.state import Error, Loading, Success
from nutriscan_api.services.scan_pipeline import ScanPipelineCoordinator

from conftest import SAMPLE_ANALYSIS, RecordingStorage, StaticIdentity, gemini_response, jpeg_bytes


@pytest.fixture
def build(store, composer, make_model_client):
    """Factory wiring a coordinator to in-memory collaborators."""

    def factory(script, user_id="user-1", storage=None):
        model_client, transport = make_model_client(script)
        storage = storage or RecordingStorage()
        coordinator = ScanPipelineCoordinator(
            identity=StaticIdentity(user_id),
            profiles=store,
            storage=storage,
            persistence=store,
            model_client=model_client,
            composer=composer,
            year_provider=lambda: 2025,
        )
        return coordinator, storage, transport

    return factory


class TestScanPipelineCoordinator:
    """Tests for ScanPipelineCoordinator.run and process."""

    @pytest.mark.asyncio
    async def test_happy_path(self, build, store, label_photo):
        coordinator, storage, transport = build([gemini_response(SAMPLE_ANALYSIS)])

        outcome = await coordinator.run(label_photo)

        assert outcome.result.product_name == "Krupuk Enak"
        assert outcome.result.analysis_text == SAMPLE_ANALYSIS
        assert outcome.image_url == "gridfs://scan_images/1"

        session = store.sessions[outcome.session_id]
        assert session.user_id == "user-1"
        assert session.product_name == "Krupuk Enak"
        assert session.initial_analysis == SAMPLE_ANALYSIS

        assert [(m.role, m.text) for m in store.messages] == [("assistant", SAMPLE_ANALYSIS)]
        assert len(transport.requests) == 1

    @pytest.mark.asyncio
    async def test_uploads_original_bytes_with_unique_name(self, build, label_photo):
        coordinator, storage, _ = build([gemini_response(SAMPLE_ANALYSIS)])

        await coordinator.run(label_photo)

        user_id, data, filename = storage.uploads[0]
        assert user_id == "user-1"
        assert data == label_photo
        assert filename.startswith("scan_") and filename.endswith(".jpg")

    @pytest.mark.asyncio
    async def test_model_receives_bounded_jpeg(self, build):
        coordinator, _, transport = build([gemini_response(SAMPLE_ANALYSIS)])

        await coordinator.run(jpeg_bytes(3000, 1500))

        inline = transport.json_body()["contents"][0]["parts"][1]["inline_data"]
        assert inline["mime_type"] == "image/jpeg"
        with Image.open(io.BytesIO(base64.b64decode(inline["data"]))) as image:
            assert image.format == "JPEG"
            assert image.size == (1024, 512)

    @pytest.mark.asyncio
    async def test_personalized_prompt_when_profile_exists(
        self, build, store, diabetic_profile, label_photo
    ):
        store.profiles["user-1"] = diabetic_profile
        coordinator, _, transport = build([gemini_response(SAMPLE_ANALYSIS)])

        await coordinator.run(label_photo)

        prompt = transport.json_body()["contents"][0]["parts"][0]["text"]
        assert "Riwayat penyakit: Diabetes" in prompt
        assert "Usia: 35 tahun" in prompt

    @pytest.mark.asyncio
    async def test_missing_identity_stops_before_anything(self, build, store, label_photo):
        coordinator, storage, transport = build([], user_id=None)

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(label_photo)

        assert exc_info.value.kind == ErrorKind.AUTHENTICATION_REQUIRED
        assert exc_info.value.message == "Silakan login terlebih dahulu"
        assert exc_info.value.retryable is False
        assert storage.uploads == []
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_profile_failure_degrades_to_generic(self, build, store, label_photo):
        store.fail_profile = True
        coordinator, _, transport = build([gemini_response(SAMPLE_ANALYSIS)])

        outcome = await coordinator.run(label_photo)

        prompt = transport.json_body()["contents"][0]["parts"][0]["text"]
        assert "KONDISI KESEHATAN PENGGUNA" not in prompt
        assert outcome.session_id in store.sessions

    @pytest.mark.asyncio
    async def test_invalid_image_stops_before_upload(self, build, label_photo):
        coordinator, storage, transport = build([])

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(b"definitely not an image")

        assert exc_info.value.kind == ErrorKind.INVALID_IMAGE
        assert storage.uploads == []
        assert transport.requests == []

    @pytest.mark.asyncio
    async def test_upload_failure_never_calls_model(self, build, store, label_photo):
        coordinator, _, transport = build([], storage=RecordingStorage(fail=True))

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(label_photo)

        assert exc_info.value.kind == ErrorKind.UPSTREAM_DEPENDENCY_FAILURE
        assert exc_info.value.message.startswith("Gagal upload: ")
        assert transport.requests == []
        assert store.sessions == {}

    @pytest.mark.asyncio
    async def test_model_failure_persists_nothing(self, build, store, label_photo):
        coordinator, storage, _ = build([httpx.Response(404)] * 3)

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(label_photo)

        assert exc_info.value.kind == ErrorKind.MODELS_EXHAUSTED
        assert len(storage.uploads) == 1
        assert store.sessions == {}
        assert store.messages == []

    @pytest.mark.asyncio
    async def test_session_persist_failure(self, build, store, label_photo):
        store.fail_session = True
        coordinator, _, _ = build([gemini_response(SAMPLE_ANALYSIS)])

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(label_photo)

        assert exc_info.value.kind == ErrorKind.UPSTREAM_DEPENDENCY_FAILURE
        assert exc_info.value.message.startswith("Gagal menyimpan: ")
        assert store.messages == []

    @pytest.mark.asyncio
    async def test_message_persist_failure(self, build, store, label_photo):
        store.fail_roles = {"assistant"}
        coordinator, _, _ = build([gemini_response(SAMPLE_ANALYSIS)])

        with pytest.raises(NutriScanError) as exc_info:
            await coordinator.run(label_photo)

        assert exc_info.value.kind == ErrorKind.UPSTREAM_DEPENDENCY_FAILURE

    @pytest.mark.asyncio
    async def test_unnamed_product_gets_placeholder(self, build, label_photo):
        coordinator, _, _ = build([gemini_response("Analisis tanpa nama produk.")])

        outcome = await coordinator.run(label_photo)

        assert outcome.result.product_name == "Produk Scan"

    @pytest.mark.asyncio
    async def test_process_reports_states(self, build, label_photo):
        coordinator, _, _ = build([gemini_response(SAMPLE_ANALYSIS)])
        states = []

        final = await coordinator.process(label_photo, states.append)

        assert isinstance(final, Success)
        assert final.value.result.product_name == "Krupuk Enak"
        assert all(isinstance(s, Loading) for s in states[:-1])
        assert len(states) > 2
        assert states[-1] is final

    @pytest.mark.asyncio
    async def test_process_returns_error_state(self, build, label_photo):
        coordinator, _, _ = build([httpx.Response(403)])
        states = []

        final = await coordinator.process(label_photo, states.append)

        assert final == Error(
            message="API Key tidak valid. Silakan periksa API Key Anda.",
            kind=ErrorKind.UNAUTHORIZED,
            retryable=False,
            details={"kind": "unauthorized", "retryable": False, "models_tried": ["model-a"]},
        )
        assert states[-1] == final

    @pytest.mark.asyncio
    async def test_error_state_keeps_failed_step(self, build, store, label_photo):
        store.fail_session = True
        coordinator, _, _ = build([gemini_response(SAMPLE_ANALYSIS)])

        final = await coordinator.process(label_photo)

        assert isinstance(final, Error)
        assert final.kind == ErrorKind.UPSTREAM_DEPENDENCY_FAILURE
        assert final.details["step"] == "persist"
