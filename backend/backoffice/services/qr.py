"""QR code rendering for table links."""

import io

import qrcode

from shared.config.settings import settings


def render_qr_png(
    data: str,
    box_size: int | None = None,
    border: int | None = None,
    color: str = "#000000",
    background_color: str = "#FFFFFF",
) -> bytes:
    """
    Encode data as a PNG QR code.

    Args:
        data: Text to encode (usually a table link).
        box_size: Pixels per module (defaults to settings.qr_box_size).
        border: Quiet-zone width in modules (defaults to settings.qr_border).

    Returns:
        PNG bytes.
    """
    if not data:
        raise ValueError("Nothing to encode")

    qr = qrcode.QRCode(
        version=1,
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        box_size=box_size or settings.qr_box_size,
        border=settings.qr_border if border is None else border,
    )
    qr.add_data(data)
    qr.make(fit=True)

    img = qr.make_image(fill_color=color, back_color=background_color)
    buffer = io.BytesIO()
    img.save(buffer, format="PNG")
    return buffer.getvalue()
