# =============================================================================
# tests/test_image_service.py - Image Upload Tests
# =============================================================================
# Cloudinary is replaced with an httpx.MockTransport; the handler records
# every request so tests can assert nothing was sent for rejected files.
# =============================================================================

import httpx
import pytest

from app.exceptions import ImageTooLargeError, ImageUploadError, InvalidImageTypeError
from core.models.media import ImageSlot
from core.services.image_service import ImageService, cloudinary_upload_url

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


class Recorder:
    """MockTransport handler that answers with a fixed response."""

    def __init__(self, status_code: int = 200, json: dict | None = None):
        self.status_code = status_code
        self.json = json if json is not None else {
            "secure_url": "https://res.cloudinary.com/demo/image/upload/v1/profiles/avatars/abc.png",
            "public_id": "profiles/avatars/abc",
            "width": 400,
            "height": 400,
        }
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        request.read()
        self.requests.append(request)
        return httpx.Response(self.status_code, json=self.json)

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self))


class TestValidateImage:
    """Test ImageService.validate_image()."""

    def test_accepts_allowed_type(self):
        ImageService.validate_image("image/webp", 1024)

    def test_rejects_gif(self):
        with pytest.raises(InvalidImageTypeError) as exc:
            ImageService.validate_image("image/gif", 1024)

        assert exc.value.message == "Apenas imagens JPG, PNG ou WEBP são permitidas"

    def test_rejects_over_one_megabyte(self):
        with pytest.raises(ImageTooLargeError) as exc:
            ImageService.validate_image("image/png", 1024 * 1024 + 1)

        assert exc.value.status_code == 413
        assert exc.value.message == "A imagem deve ter no máximo 1MB"

    def test_exactly_one_megabyte_is_fine(self):
        ImageService.validate_image("image/png", 1024 * 1024)


class TestUploadImage:
    """Test ImageService.upload_image()."""

    def test_success(self):
        recorder = Recorder()

        uploaded = ImageService.upload_image(
            PNG_BYTES, "me.png", "image/png", ImageSlot.AVATAR, client=recorder.client()
        )

        assert uploaded.secure_url.endswith("/abc.png")
        assert uploaded.width == 400
        [request] = recorder.requests
        assert str(request.url) == cloudinary_upload_url()
        assert b"perfil_catolico" in request.content
        assert b"profiles/avatars" in request.content

    def test_folder_follows_slot(self):
        recorder = Recorder()

        ImageService.upload_image(
            PNG_BYTES, "santo.png", "image/png", ImageSlot.SAINT, client=recorder.client()
        )

        assert b"profiles/saints" in recorder.requests[0].content

    def test_rejected_type_never_sent(self):
        recorder = Recorder()

        with pytest.raises(InvalidImageTypeError):
            ImageService.upload_image(
                b"GIF89a", "a.gif", "image/gif", ImageSlot.COVER, client=recorder.client()
            )

        assert recorder.requests == []

    def test_oversized_never_sent(self):
        recorder = Recorder()

        with pytest.raises(ImageTooLargeError):
            ImageService.upload_image(
                b"\x00" * (1024 * 1024 + 1), "big.png", "image/png", ImageSlot.COVER,
                client=recorder.client(),
            )

        assert recorder.requests == []

    def test_host_error(self):
        recorder = Recorder(status_code=400, json={"error": {"message": "Upload preset not found"}})

        with pytest.raises(ImageUploadError) as exc:
            ImageService.upload_image(
                PNG_BYTES, "me.png", "image/png", ImageSlot.AVATAR, client=recorder.client()
            )

        assert exc.value.message == "Erro ao fazer upload da imagem"
        assert len(recorder.requests) == 1

    def test_network_error(self):
        def unreachable(request):
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.Client(transport=httpx.MockTransport(unreachable))

        with pytest.raises(ImageUploadError):
            ImageService.upload_image(PNG_BYTES, "me.png", "image/png", ImageSlot.AVATAR, client=client)

    def test_unexpected_body(self):
        recorder = Recorder(json={"status": "ok"})

        with pytest.raises(ImageUploadError):
            ImageService.upload_image(
                PNG_BYTES, "me.png", "image/png", ImageSlot.AVATAR, client=recorder.client()
            )
