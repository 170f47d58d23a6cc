"""
FB2 binary asset extractor.

Decodes the base64 ``<binary>`` elements at the end of a FictionBook into
payloads keyed by identifier, ready to resolve image references.
"""

import base64
import binascii
import mimetypes
from typing import Dict, Iterable, Optional
from xml.etree import ElementTree as ET

from fb2_reader.errors import Fb2ParseError
from fb2_reader.model.document_model import BinaryAsset
from fb2_reader.utils.logger import get_logger
from fb2_reader.utils.xml_utils import get_attribute

LOGGER = get_logger(__name__)

DEFAULT_CONTENT_TYPE = 'application/octet-stream'


class BinaryExtractor:
    """Extracts binary assets from ``<binary>`` elements."""
    
    def __init__(self, tolerant: bool = False):
        self.tolerant = tolerant
    
    def extract(self, elements: Iterable[ET.Element]) -> Dict[str, BinaryAsset]:
        """Decode every binary element; the first asset wins on duplicate ids."""
        assets: Dict[str, BinaryAsset] = {}
        
        for element in elements:
            asset = self._decode(element)
            if asset is None:
                continue
            if asset.asset_id in assets:
                LOGGER.warning("Duplicate binary id %r ignored", asset.asset_id)
                continue
            assets[asset.asset_id] = asset
        
        return assets
    
    def _decode(self, element: ET.Element) -> Optional[BinaryAsset]:
        asset_id = get_attribute(element, 'id')
        if not asset_id:
            return self._reject('binary element without id')
        
        # Base64 bodies are usually wrapped over many lines
        encoded = ''.join((element.text or '').split())
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as exc:
            return self._reject(f'binary {asset_id!r} is not valid base64', exc)
        
        content_type = get_attribute(element, 'content-type') or self._get_media_type(asset_id)
        return BinaryAsset(asset_id=asset_id, content_type=content_type, data=data)
    
    def _reject(self, message: str, cause: Optional[Exception] = None) -> None:
        if not self.tolerant:
            raise Fb2ParseError(message) from cause
        LOGGER.warning('Skipping %s', message)
        return None
    
    def _get_media_type(self, asset_id: str) -> str:
        """Guess a MIME type from an identifier such as ``cover.jpg``."""
        media_type, _ = mimetypes.guess_type(asset_id)
        return media_type or DEFAULT_CONTENT_TYPE
