from typing import Any, Iterable

from ididi import Graph
from loguru import logger

from ._itypes import RawObject
from .aggregate import AggregatedResponse
from .envelope import CommandResponse, Envelope
from .errors import SignalwiseError, UnknownTypeError
from .headers import Headers
from .registry import TypeRegistry
from .schema import FieldPredicate, regular_or_special
from .serializer import EnvelopeSerializer


class Signalwise:
    """
    The build-once handle of a service instance.

    - registries: `TypeRegistry`, merged into one global registry, type tags must not overlap.

    - graph: `ididi.Graph`, `Signalwise` registers itself as a singleton so consumers
    resolve this handle instead of reaching for a global.

    - predicate: `FieldPredicate` used by the binary codec, defaults to `regular_or_special`.

    ```py
    signalwise = Signalwise(command_registry(), response_registry())
    command = signalwise.parse(raw, headers)
    data = signalwise.encode(response)
    ```
    """

    def __init__(
        self,
        *registries: TypeRegistry[Any],
        graph: Graph | None = None,
        predicate: FieldPredicate = regular_or_special,
    ):
        if registries:
            head, *rest = registries
            self._registry = head.merge(*rest) if rest else head
        else:
            self._registry = TypeRegistry[Any]({}, name="empty")

        self._serializer = EnvelopeSerializer(self._registry, predicate=predicate)
        self._dg = graph or Graph()
        self._dg.register_singleton(self)
        logger.debug(f"{self!r} is ready")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(registry={self._registry!r})"

    @property
    def registry(self) -> TypeRegistry[Any]:
        return self._registry

    @property
    def serializer(self) -> EnvelopeSerializer:
        return self._serializer

    @property
    def graph(self) -> Graph:
        return self._dg

    def parse(self, raw: RawObject, headers: Headers | None = None) -> Envelope:
        try:
            return self._registry.parse(raw, headers)
        except SignalwiseError as exc:
            logger.error(exc)
            raise

    def encode(self, envelope: Envelope) -> bytes:
        return self._serializer.encode(envelope)

    def decode(self, data: bytes, manifest: str) -> Envelope:
        return self._serializer.decode(data, manifest)

    def aggregate(
        self,
        responses: Iterable[CommandResponse],
        responses_type: str,
        headers: Headers | None = None,
    ) -> AggregatedResponse:
        "combine responses of one registered response type"
        if responses_type not in self._registry:
            raise UnknownTypeError(responses_type, self._registry.name)
        return AggregatedResponse.of(responses, responses_type, headers)
