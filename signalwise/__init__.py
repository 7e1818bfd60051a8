VERSION = "0.1.0"


from .aggregate import AggregatedResponse as AggregatedResponse
from .deserializer import TypeValidatingDeserializer as TypeValidatingDeserializer
from .envelope import Category as Category
from .envelope import Command as Command
from .envelope import CommandResponse as CommandResponse
from .envelope import Envelope as Envelope
from .headers import Headers as Headers
from .registry import RegistryBuilder as RegistryBuilder
from .registry import TypeRegistry as TypeRegistry
from .schema import FieldDefinition as FieldDefinition
from .schema import FieldMarker as FieldMarker
from .schema import FieldPredicate as FieldPredicate
from .schema import SchemaVersion as SchemaVersion
from .schema import accept_all as accept_all
from .schema import all_of as all_of
from .schema import is_visible as is_visible
from .schema import not_hidden as not_hidden
from .schema import regular_or_special as regular_or_special
from .serializer import EnvelopeSerializer as EnvelopeSerializer
from .signalwise import Signalwise as Signalwise
