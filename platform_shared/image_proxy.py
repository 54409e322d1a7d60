"""
Client for the image proxy server.

Builds signed URLs under which the proxy serves third-party images:

    client = ImageProxyClient(domain="usercontent.example.com", hmac_key=os.environ["CAMO_KEY"])
    client.generate_url("http://example.com/example.gif")
"""

from __future__ import annotations

import hashlib
import hmac
import re
from urllib.parse import quote


class ImageProxyClient:
    """
    Generates image proxy URLs signed with an HMAC-SHA1 digest of the image URL.
    """

    _IMG_TAG = re.compile(r"<\s*img[^>]*>", re.IGNORECASE)
    _SRC_ATTR = re.compile(r"""src=["|']([^'">]+)['|"]""")

    # Characters left unescaped by the proxy's query string decoder
    _URL_SAFE = "!~*'()"

    def __init__(self, domain: str, hmac_key: str, protocol: str = "https"):
        """
        Args:
            domain: Domain name of the image proxy server
            hmac_key: Key for the HMAC digest
            protocol: URL scheme of generated links
        """
        if not domain:
            raise ValueError("ImageProxyClient: Parameter domain is required!")
        if not hmac_key:
            raise ValueError("ImageProxyClient: Parameter hmac_key is required!")

        self.protocol = protocol
        self.hmac_key = hmac_key
        self.domain = domain

    def _create_digest(self, text: str) -> str:
        return hmac.new(self.hmac_key.encode("utf-8"), text.encode("utf-8"), hashlib.sha1).hexdigest()

    @staticmethod
    def _create_hex(text: str) -> str:
        return text.encode("utf-8").hex()

    def generate_url_with_param(self, url: str) -> str:
        """
        Generates an image URL in format:
        <protocol>://<domain>/<digest of image url>/?url=<url encoded image url>
        """
        digest = self._create_digest(url)
        escaped_url = quote(url, safe=self._URL_SAFE)
        return f"{self.protocol}://{self.domain}/{digest}/?url={escaped_url}"

    def generate_url(self, url: str) -> str:
        """
        Generates an image URL in format:
        <protocol>://<domain>/<digest of image url>/<hex string of image url>
        """
        digest = self._create_digest(url)
        hex_url = self._create_hex(url)
        return f"{self.protocol}://{self.domain}/{digest}/{hex_url}"

    def update_images_in_html(self, html: str) -> str:
        """
        Replaces src of every absolute http(s) <img> in the HTML with a proxy URL.
        """
        for img in self._IMG_TAG.findall(html):
            src_match = self._SRC_ATTR.search(img)
            if not src_match or not src_match.group(1).lower().startswith("http"):
                continue
            image_url = src_match.group(1)
            updated_img = img.replace(image_url, self.generate_url(image_url), 1)
            html = html.replace(img, updated_img, 1)

        return html

    def create_image_html(self, src: str, title: str, alt: str) -> str:
        """Creates an <img> element pointing to the proxied image."""
        return f'<img src="{self.generate_url(src)}" alt="{alt}" title="{title}">'


__all__ = ["ImageProxyClient"]
