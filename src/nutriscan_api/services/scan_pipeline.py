"""End-to-end processing of one nutrition label photo."""

import logging
from collections.abc import Callable
from dataclasses import dataclass

from nutriscan_api.core.exceptions import ErrorKind, NutriScanError
from nutriscan_api.models.profile import HealthProfileSummary
from nutriscan_api.models.scan import ScanResult
from nutriscan_api.models.state import Error, Loading, PipelineState, Success
from nutriscan_api.utils.dates import current_year

from .analysis_text import extract_product_name
from .collaborators import IdentityProvider, ImageStorage, ProfileSource, ScanPersistence
from .gemini.client import ModelFallbackClient
from .image import generate_unique_filename, prepare_for_model, to_base64
from .prompt_composer import PromptComposer

logger = logging.getLogger(__name__)

StateListener = Callable[[PipelineState], None]


@dataclass(frozen=True)
class ScanOutcome:
    """What a successful run produced and where it was stored."""

    session_id: str
    image_url: str
    result: ScanResult


class ScanPipelineCoordinator:
    """
    Runs a scan: identity, profile, upload, analysis, naming, persistence.

    Every step except the profile lookup is fatal: its failure raises a
    NutriScanError and no later step runs. The profile lookup degrades to
    an empty profile so a broken profile store never blocks a scan.
    """

    def __init__(
        self,
        identity: IdentityProvider,
        profiles: ProfileSource,
        storage: ImageStorage,
        persistence: ScanPersistence,
        model_client: ModelFallbackClient,
        composer: PromptComposer,
        *,
        image_max_edge: int = 1024,
        image_quality: int = 80,
        year_provider: Callable[[], int] = current_year,
    ):
        self.identity = identity
        self.profiles = profiles
        self.storage = storage
        self.persistence = persistence
        self.model_client = model_client
        self.composer = composer
        self.image_max_edge = image_max_edge
        self.image_quality = image_quality
        self._year_provider = year_provider

    async def run(
        self,
        image_data: bytes,
        on_state: StateListener | None = None,
    ) -> ScanOutcome:
        """
        Process one label image.

        Args:
            image_data: Photo bytes as captured
            on_state: Optional listener for Loading progress labels

        Returns:
            ScanOutcome with the new session id, image URL and result

        Raises:
            NutriScanError: From the first failing step
        """
        notify = on_state or (lambda state: None)

        # 1. Identity
        notify(Loading("Memeriksa akun..."))
        user_id = await self.identity.get_current_user_id()
        if not user_id:
            raise NutriScanError(
                "Silakan login terlebih dahulu",
                kind=ErrorKind.AUTHENTICATION_REQUIRED,
            )

        # 2. Profile (best-effort)
        notify(Loading("Memuat profil kesehatan..."))
        profile = await self._load_profile(user_id)

        # 3. Image preparation and upload
        notify(Loading("Mengupload gambar..."))
        model_image = prepare_for_model(image_data, self.image_max_edge, self.image_quality)
        filename = generate_unique_filename()
        try:
            image_url = await self.storage.upload_image(user_id, image_data, filename)
        except Exception as e:
            logger.exception("Image upload failed")
            raise NutriScanError(
                f"Gagal upload: {e}",
                kind=ErrorKind.UPSTREAM_DEPENDENCY_FAILURE,
                details={"step": "upload"},
            ) from e

        # 4. Analysis
        notify(Loading(
            "🔍 Menganalisis untuk kondisi Anda..."
            if not profile.is_empty
            else "🔍 Membaca label nutrisi..."
        ))
        payload = self.composer.analysis_payload(to_base64(model_image), profile)
        generation = await self.model_client.generate(payload)
        analysis = generation.text

        # 5. Product name
        product_name = extract_product_name(analysis)
        logger.info(f"Analysis by {generation.model_id}, product: {product_name}")

        # 6. Persistence
        notify(Loading("Menyimpan hasil..."))
        try:
            session_id = await self.persistence.persist_session(
                user_id, image_url, product_name, analysis
            )
            await self.persistence.persist_message(session_id, "assistant", analysis)
        except Exception as e:
            logger.exception("Persisting scan failed")
            raise NutriScanError(
                f"Gagal menyimpan: {e}",
                kind=ErrorKind.UPSTREAM_DEPENDENCY_FAILURE,
                details={"step": "persist"},
            ) from e

        return ScanOutcome(
            session_id=session_id,
            image_url=image_url,
            result=ScanResult(product_name=product_name, analysis_text=analysis),
        )

    async def process(
        self,
        image_data: bytes,
        on_state: StateListener | None = None,
    ) -> Success[ScanOutcome] | Error:
        """Like `run`, but report the end state instead of raising."""
        notify = on_state or (lambda state: None)
        try:
            outcome = await self.run(image_data, notify)
        except NutriScanError as e:
            logger.warning(f"Scan failed ({e.kind.value}): {e.message}")
            state = Error(
                message=e.message,
                kind=e.kind,
                retryable=e.retryable,
                details=dict(e.details or {}),
            )
        else:
            state = Success(outcome)
        notify(state)
        return state

    async def _load_profile(self, user_id: str) -> HealthProfileSummary:
        try:
            record = await self.profiles.get_health_profile(user_id)
        except Exception as e:
            logger.warning(f"Profile lookup failed, continuing without personalization: {e}")
            return HealthProfileSummary.empty()
        return HealthProfileSummary.from_profile(record, self._year_provider())
