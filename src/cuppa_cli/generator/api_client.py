"""API-client generators for OpenAPI documents.

Every client is a single file named ``<Api>APIClient`` holding the client
type, one method per endpoint (in document order) and the models declared
under ``components.schemas``. Method parameters are ordered path, query,
header, then the request body.
"""

import re

from cuppa_cli import typemap
from cuppa_cli.naming import is_identifier, to_identifier
from cuppa_cli.parser.base import ParsedAPI, ParsedEndpoint, ParsedParameter

from .base import Generator, Lines, doc_comment, indent, join_lines, provenance_header, string_literal
from .model import KotlinModelGenerator, SwiftModelGenerator, TypeScriptModelGenerator

DEFAULT_BASE_URL = "http://localhost"

_PATH_PARAM = re.compile(r"\{([^}]+)\}")


def client_name(api: ParsedAPI) -> str:
    return f"{api.name}APIClient"


def _param_type(param: ParsedParameter, platform: str) -> str:
    return typemap.schema_field_type(param.type, platform, is_array=param.is_array, fmt=param.format)


def _response_type(endpoint: ParsedEndpoint, platform: str) -> str | None:
    response = endpoint.success_response
    if response is None:
        return None
    return typemap.schema_field_type(response.type, platform, is_array=response.is_array)


def _body_type(endpoint: ParsedEndpoint, platform: str) -> str:
    body = endpoint.request_body
    return typemap.schema_field_type(body.type, platform, is_array=body.is_array)


def _endpoint_doc(endpoint: ParsedEndpoint) -> str:
    return endpoint.summary or endpoint.description or f"{endpoint.method} {endpoint.path}"


class APIClientGenerator(Generator):
    kind = "api-client"

    def file_name(self, api: ParsedAPI) -> str:
        return f"{client_name(api)}{self.file_extension}"


class SwiftAPIClientGenerator(APIClientGenerator):
    """URLSession client using async/await, plus ``Codable`` models."""

    platform = typemap.IOS
    file_extension = ".swift"

    def generate(self, api: ParsedAPI, source_file: str) -> str:
        name = client_name(api)
        base_url = api.base_url or DEFAULT_BASE_URL

        lines = provenance_header(source_file)
        lines += ["import Foundation", ""]
        lines += [
            f"public enum {name}Error: Error {{",
            "    case invalidURL",
            "    case invalidResponse",
            "    case httpError(statusCode: Int, data: Data)",
            "    case decodingFailed(Error)",
            "}",
            "",
        ]

        lines += doc_comment(api.description)
        lines += [
            f"/// {api.name} API client (version {api.version})",
            f"public final class {name} {{",
            "    public let baseURL: URL",
            "    private let session: URLSession",
            "    private let decoder = JSONDecoder()",
            "    private let encoder = JSONEncoder()",
            "",
            f"    public init(baseURL: URL = URL(string: {string_literal(base_url)})!, session: URLSession = .shared) {{",
            "        self.baseURL = baseURL",
            "        self.session = session",
            "    }",
            "",
        ]

        for endpoint in api.endpoints:
            lines += indent(self._render_endpoint(endpoint, name))
            lines.append("")

        lines += indent(self._render_transport(name))
        lines += ["}", ""]

        if api.models:
            lines += ["// MARK: - Models", ""]
            models = SwiftModelGenerator()
            for model in api.models:
                lines += models.render_model(model)

        return join_lines(lines)

    def _render_endpoint(self, endpoint: ParsedEndpoint, name: str) -> Lines:
        platform = self.platform
        arguments = []
        for param in (*endpoint.path_params, *endpoint.query_params, *endpoint.header_params):
            param_type = _param_type(param, platform)
            if param.required or param in endpoint.path_params:
                arguments.append(f"{to_identifier(param.name)}: {param_type}")
            else:
                arguments.append(f"{to_identifier(param.name)}: {param_type}? = nil")
        body = endpoint.request_body
        if body is not None:
            body_type = _body_type(endpoint, platform)
            arguments.append(f"body: {body_type}" if body.required else f"body: {body_type}? = nil")

        response_type = _response_type(endpoint, platform)
        returns = f" -> {response_type}" if response_type else ""
        path = _PATH_PARAM.sub(lambda m: f"\\({to_identifier(m.group(1))})", endpoint.path)

        lines = [f"/// {_endpoint_doc(endpoint)}"]
        lines.append(f"public func {to_identifier(endpoint.operation_id)}({', '.join(arguments)}) async throws{returns} {{")
        body_lines = [
            # Not string_literal(): the path carries \(...) interpolations.
            f'var components = URLComponents(url: baseURL.appendingPathComponent("{path}"), resolvingAgainstBaseURL: false)',
        ]
        if endpoint.query_params:
            body_lines.append("var queryItems: [URLQueryItem] = []")
            for param in endpoint.query_params:
                body_lines += self._optional_append(
                    param,
                    lambda value: f"queryItems.append(URLQueryItem(name: {string_literal(param.name)}, value: String(describing: {value})))",
                )
            body_lines.append("components?.queryItems = queryItems.isEmpty ? nil : queryItems")
        body_lines += [
            "guard let url = components?.url else {",
            f"    throw {name}Error.invalidURL",
            "}",
            "var request = URLRequest(url: url)",
            f"request.httpMethod = {string_literal(endpoint.method)}",
        ]
        for param in endpoint.header_params:
            body_lines += self._optional_append(
                param,
                lambda value: f"request.setValue(String(describing: {value}), forHTTPHeaderField: {string_literal(param.name)})",
            )
        if body is not None:
            content_type = f"request.setValue({string_literal(body.content_type)}, forHTTPHeaderField: \"Content-Type\")"
            if body.required:
                body_lines += ["request.httpBody = try encoder.encode(body)", content_type]
            else:
                body_lines += [
                    "if let body = body {",
                    "    request.httpBody = try encoder.encode(body)",
                    f"    {content_type}",
                    "}",
                ]
        if response_type:
            body_lines.append(f"return try await send(request, as: {response_type}.self)")
        else:
            body_lines.append("try await perform(request)")

        lines += indent(body_lines)
        lines.append("}")
        return lines

    @staticmethod
    def _optional_append(param: ParsedParameter, statement) -> Lines:
        identifier = to_identifier(param.name)
        if param.required:
            return [statement(identifier)]
        return [f"if let {identifier} = {identifier} {{", f"    {statement(identifier)}", "}"]

    @staticmethod
    def _render_transport(name: str) -> Lines:
        return [
            "private func send<T: Decodable>(_ request: URLRequest, as type: T.Type) async throws -> T {",
            "    let data = try await perform(request)",
            "    do {",
            "        return try decoder.decode(T.self, from: data)",
            "    } catch {",
            f"        throw {name}Error.decodingFailed(error)",
            "    }",
            "}",
            "",
            "@discardableResult",
            "private func perform(_ request: URLRequest) async throws -> Data {",
            "    let (data, response) = try await session.data(for: request)",
            "    guard let httpResponse = response as? HTTPURLResponse else {",
            f"        throw {name}Error.invalidResponse",
            "    }",
            "    guard (200..<300).contains(httpResponse.statusCode) else {",
            f"        throw {name}Error.httpError(statusCode: httpResponse.statusCode, data: data)",
            "    }",
            "    return data",
            "}",
        ]


class KotlinAPIClientGenerator(APIClientGenerator):
    """Retrofit service interface with ``suspend`` functions and a ``create`` factory."""

    platform = typemap.ANDROID
    file_extension = ".kt"

    def generate(self, api: ParsedAPI, source_file: str) -> str:
        name = client_name(api)
        base_url = api.base_url or DEFAULT_BASE_URL
        if not base_url.endswith("/"):
            base_url += "/"

        methods = [self._render_endpoint(endpoint) for endpoint in api.endpoints]
        annotations = sorted({annotation for _, used in methods for annotation in used})

        models = KotlinModelGenerator()
        lines = provenance_header(source_file)
        lines += [
            "import kotlinx.serialization.json.Json",
            "import okhttp3.MediaType.Companion.toMediaType",
            "import retrofit2.Retrofit",
            "import retrofit2.converter.kotlinx.serialization.asConverterFactory",
        ]
        lines += [f"import retrofit2.http.{annotation}" for annotation in annotations]
        lines += models.render_imports(list(api.models)) if api.models else [""]

        lines += ["/**", f" * {api.name} API client (version {api.version})"]
        if api.description:
            lines += [" *", f" * {' '.join(api.description.split())}"]
        lines += [" */", f"interface {name} {{", ""]

        for method_lines, _ in methods:
            lines += indent(method_lines)
            lines.append("")

        lines += [
            "    companion object {",
            f"        const val BASE_URL = {string_literal(base_url)}",
            "",
            f"        fun create(baseUrl: String = BASE_URL): {name} {{",
            "            val json = Json { ignoreUnknownKeys = true }",
            "            return Retrofit.Builder()",
            "                .baseUrl(baseUrl)",
            "                .addConverterFactory(json.asConverterFactory(\"application/json\".toMediaType()))",
            "                .build()",
            f"                .create({name}::class.java)",
            "        }",
            "    }",
            "}",
            "",
        ]

        for model in api.models:
            lines += models.render_model(model)

        return join_lines(lines)

    def _render_endpoint(self, endpoint: ParsedEndpoint) -> tuple[Lines, set[str]]:
        platform = self.platform
        path = endpoint.path.lstrip("/")
        used = set()

        arguments = []
        for annotation, params in (
            ("Path", endpoint.path_params),
            ("Query", endpoint.query_params),
            ("Header", endpoint.header_params),
        ):
            for param in params:
                used.add(annotation)
                param_type = _param_type(param, platform)
                if not param.required and annotation != "Path":
                    param_type = f"{param_type}? = null"
                arguments.append(f"@{annotation}({string_literal(param.name)}) {to_identifier(param.name)}: {param_type}")

        body = endpoint.request_body
        if body is not None:
            used.add("Body")
            body_type = _body_type(endpoint, platform)
            arguments.append(f"@Body body: {body_type}" if body.required else f"@Body body: {body_type}? = null")

        if endpoint.method == "DELETE" and body is not None:
            # Retrofit rejects @Body on @DELETE.
            used.add("HTTP")
            route = f"@HTTP(method = \"DELETE\", path = {string_literal(path)}, hasBody = true)"
        else:
            used.add(endpoint.method)
            route = f"@{endpoint.method}({string_literal(path)})"

        response_type = _response_type(endpoint, platform)
        returns = f": {response_type}" if response_type else ""

        lines = [f"/** {_endpoint_doc(endpoint)} */", route]
        if not arguments:
            lines.append(f"suspend fun {to_identifier(endpoint.operation_id)}(){returns}")
        else:
            lines.append(f"suspend fun {to_identifier(endpoint.operation_id)}(")
            lines += [f"    {argument}," for argument in arguments[:-1]]
            lines.append(f"    {arguments[-1]}")
            lines.append(f"){returns}")
        return lines, used


class TypeScriptAPIClientGenerator(APIClientGenerator):
    """``fetch``-based client class with model interfaces."""

    platform = typemap.WEB
    file_extension = ".ts"

    def generate(self, api: ParsedAPI, source_file: str) -> str:
        name = client_name(api)
        base_url = (api.base_url or DEFAULT_BASE_URL).rstrip("/")

        lines = provenance_header(source_file)
        models = TypeScriptModelGenerator()
        for model in api.models:
            lines += models.render_model(model)

        lines += [
            f"export class {name}Error extends Error {{",
            "  constructor(public readonly status: number, public readonly body: string) {",
            "    super(`Request failed with status ${status}`);",
            f"    this.name = '{name}Error';",
            "  }",
            "}",
            "",
            f"export interface {name}Options {{",
            "  baseUrl?: string;",
            "  headers?: Record<string, string>;",
            "  fetch?: typeof fetch;",
            "}",
            "",
            "/**",
            f" * {api.name} API client (version {api.version})",
        ]
        if api.description:
            lines += [" *", f" * {' '.join(api.description.split())}"]
        lines += [
            " */",
            f"export class {name} {{",
            "  private readonly baseUrl: string;",
            "  private readonly headers: Record<string, string>;",
            "  private readonly fetchImpl: typeof fetch;",
            "",
            f"  constructor(options: {name}Options = {{}}) {{",
            f"    this.baseUrl = options.baseUrl ?? '{base_url}';",
            "    this.headers = options.headers ?? {};",
            "    this.fetchImpl = options.fetch ?? globalThis.fetch.bind(globalThis);",
            "  }",
            "",
        ]

        for endpoint in api.endpoints:
            lines += ["  " + line if line else line for line in self._render_endpoint(endpoint)]
            lines.append("")

        lines += ["  " + line if line else line for line in self._render_transport(name)]
        lines += ["}", ""]
        return join_lines(lines)

    def _render_endpoint(self, endpoint: ParsedEndpoint) -> Lines:
        platform = self.platform
        arguments = [f"{to_identifier(p.name)}: {_param_type(p, platform)}" for p in endpoint.path_params]

        body = endpoint.request_body
        if body is not None and body.required:
            arguments.append(f"body: {_body_type(endpoint, platform)}")

        for label, params in (("query", endpoint.query_params), ("headers", endpoint.header_params)):
            if not params:
                continue
            fields = "; ".join(
                f"{self._key(p.name)}{'' if p.required else '?'}: {_param_type(p, platform)}" for p in params
            )
            default = "" if any(p.required for p in params) else " = {}"
            arguments.append(f"{label}: {{ {fields} }}{default}")

        # Optional parameters must come last.
        if body is not None and not body.required:
            arguments.append(f"body?: {_body_type(endpoint, platform)}")

        response_type = _response_type(endpoint, platform) or "void"
        path = _PATH_PARAM.sub(
            lambda m: f"${{encodeURIComponent(String({to_identifier(m.group(1))}))}}", endpoint.path
        )
        query = ", query" if endpoint.query_params else ""
        headers = "headers" if endpoint.header_params else "{}"
        payload = ", body" if body is not None else ""

        return [
            f"/** {_endpoint_doc(endpoint)} */",
            f"async {to_identifier(endpoint.operation_id)}({', '.join(arguments)}): Promise<{response_type}> {{",
            f"  const url = this.buildUrl(`{path}`{query});",
            f"  return this.request<{response_type}>('{endpoint.method}', url, {headers}{payload});",
            "}",
        ]

    @staticmethod
    def _key(name: str) -> str:
        return name if is_identifier(name) or name.isidentifier() else string_literal(name, "'")

    @staticmethod
    def _render_transport(name: str) -> Lines:
        return [
            "private buildUrl(path: string, query: Record<string, unknown> = {}): string {",
            "  const params = new URLSearchParams();",
            "  for (const [key, value] of Object.entries(query)) {",
            "    if (value === undefined || value === null) continue;",
            "    if (Array.isArray(value)) {",
            "      value.forEach((item) => params.append(key, String(item)));",
            "    } else {",
            "      params.append(key, String(value));",
            "    }",
            "  }",
            "  const search = params.toString();",
            "  return `${this.baseUrl}${path}${search ? `?${search}` : ''}`;",
            "}",
            "",
            "private async request<T>(",
            "  method: string,",
            "  url: string,",
            "  headers: Record<string, unknown>,",
            "  body?: unknown,",
            "): Promise<T> {",
            "  const requestHeaders: Record<string, string> = { ...this.headers };",
            "  for (const [key, value] of Object.entries(headers)) {",
            "    if (value !== undefined && value !== null) requestHeaders[key] = String(value);",
            "  }",
            "  if (body !== undefined) requestHeaders['Content-Type'] = 'application/json';",
            "  const response = await this.fetchImpl(url, {",
            "    method,",
            "    headers: requestHeaders,",
            "    body: body === undefined ? undefined : JSON.stringify(body),",
            "  });",
            "  if (!response.ok) {",
            f"    throw new {name}Error(response.status, await response.text());",
            "  }",
            "  const text = await response.text();",
            "  return (text ? JSON.parse(text) : undefined) as T;",
            "}",
        ]
