"""
JSON:API projection of already-loaded entities.

Every resource type is described by a ResourceDefinition: how to read its
attributes, its self link, and an explicit table of RelationshipDescriptors
saying which related entities to reference and how to pull them off an
entity. The projector walks that table; it never touches the database, so
all relationships must be loaded before a page reaches it.

Related entities listed in ``include`` are serialized once into
``included``, keyed on (type, id), however many primary resources point at
them.
"""
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Sequence, Set, Tuple, Union
from urllib.parse import urlencode

from catalog.schemas.pagination import PaginationMeta
from catalog.services.attachments import AttachmentUrlResolver

logger = logging.getLogger(__name__)

JSONAPI_CONTENT_TYPE = "application/vnd.api+json"

ONE = "one"
OPTIONAL = "optional"
MANY = "many"
CARDINALITIES = (ONE, OPTIONAL, MANY)

QueryParams = Union[Mapping[str, Any], Iterable[Tuple[str, Any]]]


def iso8601(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _no_attachments(entity: object, attachment_name: str) -> Optional[str]:
    return None


@dataclass(frozen=True)
class RelationshipDescriptor:
    name: str
    target_type: str
    cardinality: str
    extract: Callable[[Any], Any]

    def __post_init__(self):
        if self.cardinality not in CARDINALITIES:
            raise ValueError(f"Unknown cardinality '{self.cardinality}' for relationship '{self.name}'")

    def related(self, record: Any) -> List[Any]:
        """The loaded related entities as a list (empty when absent)."""
        value = self.extract(record)
        if self.cardinality == MANY:
            return list(value or [])
        return [] if value is None else [value]


@dataclass(frozen=True)
class ResourceDefinition:
    type: str
    attributes: Callable[[Any, AttachmentUrlResolver], Dict[str, Any]]
    relationships: Tuple[RelationshipDescriptor, ...] = ()
    self_link: Optional[Callable[[Any], str]] = None

    def relationship(self, name: str) -> RelationshipDescriptor:
        for descriptor in self.relationships:
            if descriptor.name == name:
                return descriptor
        raise KeyError(f"'{self.type}' has no relationship named '{name}'")


def resource_identifier(resource_type: str, record: Any) -> Dict[str, str]:
    return {"type": resource_type, "id": str(record.id)}


def _query_pairs(params: Optional[QueryParams]) -> List[Tuple[str, Any]]:
    if params is None:
        return []
    if hasattr(params, "multi_items"):
        items = params.multi_items()
    elif isinstance(params, Mapping):
        items = params.items()
    else:
        items = params
    return [(str(key), value) for key, value in items if key != "page"]


def build_page_url(base_url: str, params: Optional[QueryParams], page: int) -> str:
    """base_url plus the preserved params and page, keys in sorted order."""
    pairs = _query_pairs(params)
    pairs.append(("page", page))
    pairs.sort(key=lambda pair: pair[0])
    return f"{base_url}?{urlencode(pairs)}"


def build_pagination_links(base_url: str, params: Optional[QueryParams], meta: PaginationMeta) -> Dict[str, str]:
    links = {
        "self": build_page_url(base_url, params, meta.current_page),
        "first": build_page_url(base_url, params, 1),
        "last": build_page_url(base_url, params, meta.last_page),
    }
    if meta.has_prev:
        links["prev"] = build_page_url(base_url, params, meta.current_page - 1)
    if meta.has_next:
        links["next"] = build_page_url(base_url, params, meta.current_page + 1)
    return links


class ResourceProjector:
    def __init__(
        self,
        definitions: Mapping[str, ResourceDefinition],
        attachment_url: Optional[AttachmentUrlResolver] = None,
    ):
        self.definitions = dict(definitions)
        self.attachment_url = attachment_url or _no_attachments

    def _definition(self, resource_type: str) -> ResourceDefinition:
        try:
            return self.definitions[resource_type]
        except KeyError:
            raise KeyError(f"No resource definition for type '{resource_type}'") from None

    def _relationships(self, definition: ResourceDefinition, record: Any) -> Dict[str, Any]:
        relationships = {}
        for descriptor in definition.relationships:
            related = descriptor.related(record)
            if descriptor.cardinality == MANY:
                data = [resource_identifier(descriptor.target_type, item) for item in related]
            else:
                data = resource_identifier(descriptor.target_type, related[0]) if related else None
            relationships[descriptor.name] = {"data": data}
        return relationships

    def serialize(self, resource_type: str, record: Any) -> Dict[str, Any]:
        """A single resource object: type, id, attributes, relationship references, links."""
        definition = self._definition(resource_type)
        resource = resource_identifier(resource_type, record)
        resource["attributes"] = definition.attributes(record, self.attachment_url)
        if definition.relationships:
            resource["relationships"] = self._relationships(definition, record)
        if definition.self_link is not None:
            resource["links"] = {"self": definition.self_link(record)}
        return resource

    def _included(self, resource_type: str, records: Sequence[Any], include: Sequence[str]) -> List[Dict[str, Any]]:
        definition = self._definition(resource_type)
        descriptors = [definition.relationship(name) for name in include]

        # Primary resources never repeat in included.
        seen: Set[Tuple[str, str]] = {(resource_type, str(record.id)) for record in records}
        included = []
        for record in records:
            for descriptor in descriptors:
                for related in descriptor.related(record):
                    key = (descriptor.target_type, str(related.id))
                    if key in seen:
                        continue
                    seen.add(key)
                    included.append(self.serialize(descriptor.target_type, related))
        return included

    def project(
        self,
        resource_type: str,
        records: Sequence[Any],
        meta: Optional[PaginationMeta] = None,
        base_url: Optional[str] = None,
        params: Optional[QueryParams] = None,
        include: Sequence[str] = (),
    ) -> Dict[str, Any]:
        """
        Build a collection document.

        ``meta`` adds the pagination meta object, and with ``base_url`` the
        self/first/last/prev/next links. ``params`` are the request's query
        parameters to carry over into every link (``page`` is replaced).
        """
        records = list(records)
        document: Dict[str, Any] = {
            "data": [self.serialize(resource_type, record) for record in records],
        }
        if include:
            document["included"] = self._included(resource_type, records, include)
        if meta is not None:
            document["meta"] = meta.model_dump()
            if base_url is not None:
                document["links"] = build_pagination_links(base_url, params, meta)
        logger.debug(
            f"Projected {len(records)} {resource_type} with {len(document.get('included', []))} included"
        )
        return document

    def project_one(self, resource_type: str, record: Any, include: Sequence[str] = ()) -> Dict[str, Any]:
        """Build a single-resource document."""
        document: Dict[str, Any] = {"data": self.serialize(resource_type, record)}
        if include:
            document["included"] = self._included(resource_type, [record], include)
        return document


def error_document(status_code: int, title: str, detail: str) -> Dict[str, Any]:
    return {"errors": [{"status": str(status_code), "title": title, "detail": detail}]}
