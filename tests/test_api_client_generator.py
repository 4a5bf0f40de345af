from pathlib import Path

import pytest

from cuppa_cli.generator.api_client import (
    KotlinAPIClientGenerator,
    SwiftAPIClientGenerator,
    TypeScriptAPIClientGenerator,
    client_name,
)
from cuppa_cli.parser.loader import load_document
from cuppa_cli.parser.openapi import parse_openapi

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def petstore():
    return parse_openapi(load_document(FIXTURES / "petstore.yaml"))


def _bare_api():
    return parse_openapi({
        "info": {"title": "Notes", "version": "2"},
        "paths": {
            "/notes/{id}": {
                "delete": {
                    "operationId": "deleteNote",
                    "parameters": [{"name": "id", "in": "path", "required": True, "schema": {"type": "string"}}],
                    "requestBody": {"content": {"application/json": {"schema": {"type": "object"}}}},
                    "responses": {"204": {"description": "Deleted"}},
                },
            },
        },
    })


class TestSwiftAPIClientGenerator:
    def test_client_and_error_types(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "public enum PetStoreAPIClientError: Error {" in code
        assert "public final class PetStoreAPIClient {" in code
        assert 'URL(string: "https://petstore.example.com/v1")!' in code

    def test_query_parameters(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "public func listPets(limit: Int? = nil) async throws -> [Pet] {" in code
        assert "if let limit = limit {" in code
        assert 'queryItems.append(URLQueryItem(name: "limit", value: String(describing: limit)))' in code
        assert "return try await send(request, as: [Pet].self)" in code

    def test_path_and_header_parameters(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "public func getPetsByPetId(petId: String, xRequestId: String? = nil) async throws -> Pet {" in code
        assert 'baseURL.appendingPathComponent("/pets/\\(petId)")' in code
        assert 'request.setValue(String(describing: xRequestId), forHTTPHeaderField: "X-Request-Id")' in code

    def test_request_body(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "public func createPet(body: NewPet) async throws -> Pet {" in code
        assert 'request.httpMethod = "POST"' in code
        assert "request.httpBody = try encoder.encode(body)" in code

    def test_endpoint_without_response_body(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "public func deletePet(petId: String) async throws {" in code
        assert "try await perform(request)" in code

    def test_models_follow_the_client(self, petstore):
        code = SwiftAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert code.index("// MARK: - Models") > code.index("public final class PetStoreAPIClient")
        assert "public struct Pet: Codable {" in code
        assert "    public let id: Int64" in code

    def test_default_base_url(self):
        code = SwiftAPIClientGenerator().generate(_bare_api(), "notes.yaml")
        assert 'URL(string: "http://localhost")!' in code

    def test_file_name(self, petstore):
        assert client_name(petstore) == "PetStoreAPIClient"
        assert SwiftAPIClientGenerator().file_name(petstore) == "PetStoreAPIClient.swift"


class TestKotlinAPIClientGenerator:
    def test_retrofit_interface(self, petstore):
        code = KotlinAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "interface PetStoreAPIClient {" in code
        assert '    @GET("pets")\n    suspend fun listPets(\n        @Query("limit") limit: Int? = null\n    ): List<Pet>' in code

    def test_only_used_annotations_are_imported(self, petstore):
        code = KotlinAPIClientGenerator().generate(petstore, "petstore.yaml")
        for annotation in ("Body", "DELETE", "GET", "Header", "POST", "Path", "Query"):
            assert f"import retrofit2.http.{annotation}\n" in code
        assert "import retrofit2.http.PUT" not in code
        assert "import retrofit2.http.HTTP\n" not in code

    def test_path_header_and_body(self, petstore):
        code = KotlinAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert '        @Path("petId") petId: String,\n        @Header("X-Request-Id") xRequestId: String? = null\n    ): Pet' in code
        assert "        @Body body: NewPet\n    ): Pet" in code
        assert '    @DELETE("pets/{petId}")\n    suspend fun deletePet(\n        @Path("petId") petId: String\n    )\n' in code

    def test_companion_factory(self, petstore):
        code = KotlinAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert 'const val BASE_URL = "https://petstore.example.com/v1/"' in code
        assert "fun create(baseUrl: String = BASE_URL): PetStoreAPIClient {" in code
        assert ".create(PetStoreAPIClient::class.java)" in code

    def test_models(self, petstore):
        code = KotlinAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "@Serializable\ndata class Pet(" in code
        assert "    val id: Long," in code

    def test_delete_with_body_uses_http_annotation(self):
        code = KotlinAPIClientGenerator().generate(_bare_api(), "notes.yaml")
        assert '@HTTP(method = "DELETE", path = "notes/{id}", hasBody = true)' in code
        assert "import retrofit2.http.HTTP" in code
        assert "@Body body: Map<String, Any>? = null" in code

    def test_file_name(self, petstore):
        assert KotlinAPIClientGenerator().file_name(petstore) == "PetStoreAPIClient.kt"


class TestTypeScriptAPIClientGenerator:
    def test_models_precede_the_client(self, petstore):
        code = TypeScriptAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert code.index("export interface Pet {") < code.index("export class PetStoreAPIClient {")
        assert "export class PetStoreAPIClientError extends Error {" in code

    def test_base_url(self, petstore):
        code = TypeScriptAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "this.baseUrl = options.baseUrl ?? 'https://petstore.example.com/v1';" in code

    def test_query_object(self, petstore):
        code = TypeScriptAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "async listPets(query: { limit?: number } = {}): Promise<Pet[]> {" in code
        assert "this.buildUrl(`/pets`, query)" in code
        assert "this.request<Pet[]>('GET', url, {})" in code

    def test_path_and_headers(self, petstore):
        code = TypeScriptAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "async getPetsByPetId(petId: string, headers: { 'X-Request-Id'?: string } = {}): Promise<Pet> {" in code
        assert "`/pets/${encodeURIComponent(String(petId))}`" in code
        assert "this.request<Pet>('GET', url, headers)" in code

    def test_body_and_void_response(self, petstore):
        code = TypeScriptAPIClientGenerator().generate(petstore, "petstore.yaml")
        assert "async createPet(body: NewPet): Promise<Pet> {" in code
        assert "this.request<Pet>('POST', url, {}, body)" in code
        assert "async deletePet(petId: string): Promise<void> {" in code

    def test_optional_body_follows_required_query(self):
        api = parse_openapi({
            "info": {"title": "Pets", "version": "1"},
            "paths": {"/pets": {"put": {
                "operationId": "updatePets",
                "parameters": [{"name": "dryRun", "in": "query", "required": True, "schema": {"type": "boolean"}}],
                "requestBody": {"content": {"application/json": {"schema": {"$ref": "#/components/schemas/Pet"}}}},
                "responses": {},
            }}},
        })
        code = TypeScriptAPIClientGenerator().generate(api, "pets.yaml")
        assert "async updatePets(query: { dryRun: boolean }, body?: Pet): Promise<void> {" in code
        assert "this.request<void>('PUT', url, {}, body)" in code

    def test_file_name(self, petstore):
        assert TypeScriptAPIClientGenerator().file_name(petstore) == "PetStoreAPIClient.ts"
