"""Verification QR codes for certificates."""

import io

import qrcode
import qrcode.image.svg
from bs4 import BeautifulSoup, Tag

from .exceptions import ParseError
from .utils import PAGES, PUBLIC_URL, build_url


def verification_url(cert_number: str, base_url: str = PUBLIC_URL) -> str:
    """Build the public URL a certificate QR code points to.

    Args:
        cert_number: Certificate number (or id) to verify
        base_url: Public address of the panel

    Returns:
        URL of the verification page for this certificate
    """
    return build_url(base_url, PAGES["verify"], cert=cert_number)


def qr_svg(data: str, size: int = 180) -> Tag:
    """Render data as an inline SVG QR code.

    Args:
        data: Text to encode
        size: Displayed width and height in pixels

    Returns:
        ``<svg>`` tag ready to insert into a page

    Raises:
        ParseError: If the generated SVG cannot be read back
    """
    qr = qrcode.QRCode(
        error_correction=qrcode.constants.ERROR_CORRECT_M,
        border=2,
        image_factory=qrcode.image.svg.SvgPathImage,
    )
    qr.add_data(data)
    qr.make(fit=True)

    buffer = io.BytesIO()
    qr.make_image().save(buffer)

    svg = BeautifulSoup(buffer.getvalue(), "xml").find("svg")
    if svg is None:
        raise ParseError("QR code image did not contain an <svg> element")

    svg["width"] = str(size)
    svg["height"] = str(size)
    return svg
