"""
Cloudinary Upload Connector
Unsigned image uploads using an upload preset

The preset must be of type "Unsigned" in the Cloudinary dashboard
(Settings > Upload > Upload presets); no API secret is involved.
"""
import logging
from typing import Optional

import httpx

from liquido.core.config import get_settings

logger = logging.getLogger(__name__)

MAX_FILE_SIZE = 5 * 1024 * 1024  # 5MB
ALLOWED_TYPES = ['image/jpeg', 'image/jpg', 'image/png', 'image/webp']


class ImageValidationError(ValueError):
    """Rejected before contacting Cloudinary"""


class UploadError(Exception):
    """Cloudinary refused or could not complete the upload"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def validate_image(content_type: Optional[str], size: int) -> None:
    """
    Check MIME type and size of an image

    Raises:
        ImageValidationError with a user-facing message
    """
    if not size:
        raise ImageValidationError("Nessun file selezionato.")
    if content_type not in ALLOWED_TYPES:
        raise ImageValidationError("Formato file non supportato. Usa JPG, PNG o WEBP.")
    if size > MAX_FILE_SIZE:
        raise ImageValidationError("File troppo grande. Dimensione massima: 5MB.")


class CloudinaryConnector:
    """Connector for the Cloudinary image upload endpoint"""

    def __init__(
        self,
        cloud_name: str = None,
        upload_preset: str = None,
        timeout: float = None,
        transport: httpx.AsyncBaseTransport = None
    ):
        settings = get_settings()
        self.cloud_name = cloud_name or settings.CLOUDINARY_CLOUD_NAME
        self.upload_preset = upload_preset or settings.CLOUDINARY_UPLOAD_PRESET
        self.timeout = timeout or settings.HTTP_TIMEOUT_SECONDS
        self._transport = transport

        if not self.cloud_name:
            raise ValueError("Cloudinary cloud name missing. Set CLOUDINARY_CLOUD_NAME")
        if not self.upload_preset:
            raise ValueError(
                "Cloudinary upload preset missing. Create an Unsigned preset and set CLOUDINARY_UPLOAD_PRESET"
            )

    @property
    def upload_url(self) -> str:
        return f"https://api.cloudinary.com/v1_1/{self.cloud_name}/image/upload"

    async def upload_image(self, filename: str, content: bytes, content_type: str, folder: str = None) -> str:
        """
        Upload an image

        Args:
            filename: Original file name
            content: Raw bytes
            content_type: MIME type
            folder: Optional folder (only honoured if the preset allows it)

        Returns:
            secure_url of the stored image
        """
        validate_image(content_type, len(content))

        data = {'upload_preset': self.upload_preset}
        if folder:
            data['folder'] = folder

        async with httpx.AsyncClient(transport=self._transport, timeout=self.timeout) as client:
            try:
                response = await client.post(
                    self.upload_url,
                    data=data,
                    files={'file': (filename, content, content_type)},
                )
            except httpx.HTTPError as e:
                logger.error(f"Cloudinary upload network error: {e}")
                raise UploadError("Errore di connessione durante il caricamento.") from e

        if response.status_code != 200:
            try:
                message = response.json().get('error', {}).get('message')
            except ValueError:
                message = None
            logger.error(
                f"Cloudinary API Error: status={response.status_code} "
                f"cloud={self.cloud_name} preset={self.upload_preset} message={message}"
            )
            if response.status_code == 400:
                message = (
                    f'Upload preset "{self.upload_preset}" non trovato o non valido. '
                    f'Verifica che esista, sia di tipo "Unsigned" e che il nome corrisponda esattamente.'
                )
            raise UploadError(message or "Errore durante il caricamento.", status_code=response.status_code)

        secure_url = response.json().get('secure_url')
        if not secure_url:
            raise UploadError("Risposta Cloudinary non valida.")

        logger.info(f"Uploaded {filename} to Cloudinary folder={folder}")
        return secure_url
