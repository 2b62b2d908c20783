from dataclasses import dataclass

ALLOWED_IMAGE_EXTENSIONS = ("jpeg", "png", "jpg", "webp", "gif")

# (extension, content type) keyed by leading magic bytes
_IMAGE_SIGNATURES = (
    (b"\xff\xd8\xff", ("jpg", "image/jpeg")),
    (b"\x89PNG\r\n\x1a\n", ("png", "image/png")),
    (b"GIF87a", ("gif", "image/gif")),
    (b"GIF89a", ("gif", "image/gif")),
)


@dataclass
class IncomingFile:
    filename: str
    content_type: str | None
    content: bytes

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass
class ImageUpload:
    content: bytes
    extension: str
    content_type: str


def sniff_image(content: bytes) -> tuple[str, str] | None:
    """Guess (extension, content type) from the file header, not the client's claim."""
    for signature, detected in _IMAGE_SIGNATURES:
        if content.startswith(signature):
            return detected
    if len(content) >= 12 and content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "webp", "image/webp"
    return None


def is_blank_upload(value) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return not value.strip()
    if isinstance(value, IncomingFile):
        return not value.filename and value.size == 0
    return False


def validate_image(field: str, value, max_kb: int) -> tuple[ImageUpload | None, list[str]]:
    if not isinstance(value, IncomingFile):
        return None, [
            f"The {field} field must be an image.",
            f"The {field} field must be a file of type: {', '.join(ALLOWED_IMAGE_EXTENSIONS)}.",
        ]

    errors: list[str] = []
    detected = sniff_image(value.content)
    if detected is None:
        errors.append(f"The {field} field must be an image.")
        errors.append(f"The {field} field must be a file of type: {', '.join(ALLOWED_IMAGE_EXTENSIONS)}.")
    if value.size > max_kb * 1024:
        errors.append(f"The {field} field must not be greater than {max_kb} kilobytes.")
    if errors:
        return None, errors

    extension, content_type = detected
    return ImageUpload(content=value.content, extension=extension, content_type=content_type), []
