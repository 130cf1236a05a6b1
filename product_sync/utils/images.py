from urllib.parse import quote

PLACEHOLDER_IMAGE_BASE = "https://placehold.co"
PLACEHOLDER_SIZE = "800x800"


def placeholder_image_url(title: str | None, base_url: str = PLACEHOLDER_IMAGE_BASE,
                          size: str = PLACEHOLDER_SIZE) -> str:
    """Deterministic placeholder image URL with the title rendered as text."""
    text = (title or "").strip() or "Product"
    return f"{base_url.rstrip('/')}/{size}.png?text={quote(text, safe='')}"
