"""OpenAPI document parser.

Parses OpenAPI 3.x documents (already loaded from JSON or YAML) into a
ParsedAPI: one endpoint per (path, method) pair plus the component models.
"""

from cuppa_cli.errors import SpecError
from cuppa_cli.naming import capitalize, sanitize_type_name

from .base import (
    ParsedAPI,
    ParsedEndpoint,
    ParsedModel,
    ParsedParameter,
    ParsedProperty,
    ParsedRequestBody,
    ParsedResponse,
)

HTTP_METHODS = ("get", "post", "put", "patch", "delete")

# Parameters located "in: cookie" are not routed to any bucket.
PARAMETER_BUCKETS = {
    "path": "path_params",
    "query": "query_params",
    "header": "header_params",
}


def parse_openapi(doc: dict) -> ParsedAPI:
    """Parse an OpenAPI document into a ParsedAPI."""
    if not isinstance(doc, dict):
        raise SpecError("OpenAPI document must be a mapping")

    info = doc.get("info") or {}
    if not info.get("title"):
        raise SpecError("OpenAPI document is missing info.title")
    if info.get("version") is None:
        raise SpecError("OpenAPI document is missing info.version")

    servers = doc.get("servers") or []
    base_url = servers[0].get("url") if servers else None
    schemas = (doc.get("components") or {}).get("schemas") or {}

    return ParsedAPI(
        name=sanitize_type_name(info["title"]),
        version=str(info["version"]),
        description=info.get("description"),
        base_url=base_url,
        endpoints=_parse_endpoints(doc.get("paths") or {}),
        models=[_parse_model(name, _schema(schema)) for name, schema in schemas.items()],
    )


def _parse_endpoints(paths: dict) -> list[ParsedEndpoint]:
    endpoints = []
    for path, path_item in paths.items():
        path_item = path_item or {}
        shared_params = path_item.get("parameters") or []
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if operation is not None:
                endpoints.append(_parse_operation(method, path, operation, shared_params))
    return endpoints


def _parse_operation(method: str, path: str, operation: dict, shared_params: list[dict]) -> ParsedEndpoint:
    buckets: dict[str, list[ParsedParameter]] = {field: [] for field in PARAMETER_BUCKETS.values()}
    for param in [*shared_params, *(operation.get("parameters") or [])]:
        field = PARAMETER_BUCKETS.get(param.get("in"))
        if field:
            buckets[field].append(_parse_parameter(param))

    request_body = operation.get("requestBody")

    return ParsedEndpoint(
        operation_id=operation.get("operationId") or generate_operation_id(method, path),
        method=method.upper(),
        path=path,
        summary=operation.get("summary"),
        description=operation.get("description"),
        request_body=_parse_request_body(request_body) if request_body else None,
        responses=_parse_responses(operation.get("responses") or {}),
        tags=operation.get("tags") or [],
        **buckets,
    )


def _parse_parameter(param: dict) -> ParsedParameter:
    if "name" not in param:
        raise SpecError("OpenAPI parameter is missing 'name'")
    schema = _schema(param.get("schema"))
    return ParsedParameter(
        name=param["name"],
        type=resolve_type(schema),
        description=param.get("description"),
        required=bool(param.get("required", False)),
        is_array=is_array_schema(schema),
        format=schema.get("format"),
    )


def _first_content(content: dict | None) -> tuple[str | None, dict | None]:
    """The first declared (content type, schema) pair of a content map."""
    for content_type, media in (content or {}).items():
        schema = media.get("schema") if isinstance(media, dict) else None
        return content_type, _schema(schema) if schema is not None else None
    return None, None


def _parse_request_body(body: dict) -> ParsedRequestBody:
    content_type, schema = _first_content(body.get("content"))
    return ParsedRequestBody(
        type=resolve_type(schema) if schema else "any",
        description=body.get("description"),
        required=bool(body.get("required", False)),
        content_type=content_type or "application/json",
        is_array=is_array_schema(schema),
    )


def _parse_responses(responses: dict) -> list[ParsedResponse]:
    parsed = []
    for status_code, response in responses.items():
        response = response or {}
        content_type, schema = _first_content(response.get("content"))
        parsed.append(
            ParsedResponse(
                status_code=str(status_code),
                type=resolve_type(schema) if schema else None,
                description=response.get("description", ""),
                content_type=content_type,
                is_array=is_array_schema(schema),
            )
        )
    return parsed


def _parse_model(name: str, schema: dict) -> ParsedModel:
    required = schema.get("required") or []
    properties = []
    for prop_name, prop in (schema.get("properties") or {}).items():
        prop = _schema(prop)
        properties.append(
            ParsedProperty(
                name=prop_name,
                type=resolve_type(prop),
                description=prop.get("description"),
                optional=prop_name not in required or prop.get("nullable") is True,
                is_array=is_array_schema(prop),
                format=prop.get("format"),
                default_value=prop.get("default"),
            )
        )
    return ParsedModel(name=name, description=schema.get("description"), properties=properties)


def _schema(schema) -> dict:
    # Boolean schemas (``true``/``false``) carry no type information.
    return schema if isinstance(schema, dict) else {}


def _base_type(schema: dict) -> str | None:
    declared = schema.get("type")
    if isinstance(declared, list):
        # OpenAPI 3.1 type unions
        return next((t for t in declared if t != "null"), None)
    return declared


def is_array_schema(schema: dict | None) -> bool:
    return bool(schema) and _base_type(schema) == "array"


def resolve_type(schema: dict) -> str:
    """Resolve a schema to a type name: ``$ref`` targets by their last segment, arrays by their items."""
    schema = _schema(schema)
    if schema.get("$ref"):
        return schema["$ref"].split("/")[-1]
    base = _base_type(schema)
    if base == "array":
        return resolve_type(schema["items"]) if schema.get("items") else "any"
    return base or "any"


def generate_operation_id(method: str, path: str) -> str:
    """Derive an operationId: ``get /users/{id}`` -> ``getUsersById``."""
    parts = []
    for segment in path.split("/"):
        if not segment:
            continue
        if segment.startswith("{") and segment.endswith("}"):
            parts.append("By" + capitalize(segment[1:-1]))
        else:
            parts.append(capitalize(segment))
    return method.lower() + "".join(parts)
