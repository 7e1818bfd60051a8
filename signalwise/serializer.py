from typing import Any, Final

import msgspec
from loguru import logger

from .envelope import Envelope
from .errors import EnvelopeDecodeError
from .headers import Headers
from .registry import TypeRegistry
from .schema import FieldPredicate, regular_or_special

HEADERS_KEY: Final[str] = "headers"
PAYLOAD_KEY: Final[str] = "payload"


class EnvelopeSerializer:
    """
    Binary codec for envelopes, the manifest travels next to the bytes.

    wire format:
    ```json
    {"headers": {"correlation-id": "..."}, "payload": {"type": "...", ...}}
    ```
    """

    def __init__(
        self,
        registry: TypeRegistry[Any],
        *,
        predicate: FieldPredicate = regular_or_special,
    ):
        self._registry = registry
        self._predicate = predicate
        self._encoder = msgspec.json.Encoder()
        self._decoder = msgspec.json.Decoder(dict[str, Any])

    @property
    def registry(self) -> TypeRegistry[Any]:
        return self._registry

    def manifest(self, envelope: Envelope) -> str:
        return envelope.manifest

    def encode(self, envelope: Envelope) -> bytes:
        payload = envelope.to_json(predicate=self._predicate)
        data = self._encoder.encode(
            {HEADERS_KEY: envelope.headers.to_json(), PAYLOAD_KEY: payload}
        )
        logger.debug(f"encoded {envelope.manifest} into {len(data)} bytes")
        return data

    def decode(self, data: bytes, manifest: str) -> Envelope:
        try:
            wrapper = self._decoder.decode(data)
        except msgspec.DecodeError as exc:
            raise EnvelopeDecodeError(manifest, str(exc)) from exc

        payload = wrapper.get(PAYLOAD_KEY)
        if not isinstance(payload, dict):
            raise EnvelopeDecodeError(manifest, f"`{PAYLOAD_KEY}` is not an object")
        raw_headers = wrapper.get(HEADERS_KEY, {})
        if not isinstance(raw_headers, dict):
            raise EnvelopeDecodeError(manifest, f"`{HEADERS_KEY}` is not an object")

        logger.debug(f"decoding {manifest} from {len(data)} bytes")
        return self._registry.parse_as(manifest, payload, Headers.from_json(raw_headers))
