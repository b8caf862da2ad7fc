"""Tests for all API endpoints."""
import hashlib

import pytest


def _seed(client, *values):
    for value in values:
        assert client.post("/strings", json={"value": value}).status_code == 201


class TestCreateStringEndpoint:
    """Tests for POST /strings."""

    def test_create_string_success(self, client):
        response = client.post("/strings", json={"value": "racecar"})
        assert response.status_code == 201
        data = response.json()
        assert data["value"] == "racecar"
        assert data["id"] == hashlib.sha256(b"racecar").hexdigest()
        assert data["properties"]["length"] == 7
        assert data["properties"]["is_palindrome"] is True
        assert data["properties"]["word_count"] == 1
        assert data["properties"]["unique_characters"] == 4
        assert data["properties"]["character_frequency_map"] == {"r": 2, "a": 2, "c": 2, "e": 1}
        assert "created_at" in data

    def test_create_exact_duplicate_conflict(self, client):
        client.post("/strings", json={"value": "Test String"})
        response_dup = client.post("/strings", json={"value": "Test String"})
        assert response_dup.status_code == 409
        assert "error" in response_dup.json()
        # case-variant has a different hash
        response_case = client.post("/strings", json={"value": "test string"})
        assert response_case.status_code == 201

    def test_create_missing_value(self, client):
        response = client.post("/strings", json={})
        assert response.status_code == 400
        assert "value" in response.json()["error"]

    @pytest.mark.parametrize("value", [123, None, ["a"], {"a": 1}, True])
    def test_create_wrong_type(self, client, value):
        response = client.post("/strings", json={"value": value})
        assert response.status_code == 422
        assert "error" in response.json()

    def test_create_invalid_json_body(self, client):
        response = client.post(
            "/strings",
            content=b'{"value": "oops"',  # truncated JSON
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("body", [[], ["value"], "abc", 42])
    def test_create_non_object_body_is_missing_value(self, client, body):
        response = client.post("/strings", json=body)
        assert response.status_code == 400
        assert response.json() == {"error": 'Missing "value" field'}


class TestGetStringEndpoint:
    """Tests for GET /strings/{string_value}."""

    def test_get_string_success(self, client):
        client.post("/strings", json={"value": "test string"})
        response = client.get("/strings/test string")
        assert response.status_code == 200
        data = response.json()
        assert data["value"] == "test string"
        assert data["properties"]["sha256_hash"] == data["id"]

    def test_get_string_not_found(self, client):
        response = client.get("/strings/nonexistent_value")
        assert response.status_code == 404
        assert response.json() == {"error": "String does not exist in the system"}

    def test_get_string_preserves_created_at(self, client):
        created_at = client.post("/strings", json={"value": "test"}).json()["created_at"]
        assert client.get("/strings/test").json()["created_at"] == created_at


class TestGetAllStringsEndpoint:
    """Tests for GET /strings with filtering."""

    @pytest.fixture(autouse=True)
    def seed(self, client):
        _seed(client, "hello", "racecar", "hello world", "a")

    def test_get_all_strings(self, client):
        data = client.get("/strings").json()
        assert data["count"] == 4
        assert [r["value"] for r in data["data"]] == ["hello", "racecar", "hello world", "a"]
        assert data["filters_applied"] == {}

    def test_filter_by_palindrome(self, client):
        data = client.get("/strings?is_palindrome=true").json()
        assert data["count"] == 2
        assert data["filters_applied"] == {"is_palindrome": True}

    def test_filter_by_palindrome_false(self, client):
        data = client.get("/strings?is_palindrome=false").json()
        assert [r["value"] for r in data["data"]] == ["hello", "hello world"]

    def test_filter_by_min_length(self, client):
        assert client.get("/strings?min_length=5").json()["count"] == 3

    def test_filter_by_max_length(self, client):
        assert client.get("/strings?max_length=5").json()["count"] == 2

    def test_filter_by_word_count(self, client):
        assert client.get("/strings?word_count=1").json()["count"] == 3

    def test_filter_by_contains_character(self, client):
        data = client.get("/strings?contains_character=a").json()
        assert data["count"] == 2
        assert data["filters_applied"] == {"contains_character": "a"}

    def test_contains_character_uses_first_character(self, client):
        data = client.get("/strings?contains_character=wxyz").json()
        assert [r["value"] for r in data["data"]] == ["hello world"]
        assert data["filters_applied"] == {"contains_character": "w"}

    def test_filter_combined(self, client):
        response = client.get("/strings?is_palindrome=true&min_length=1&max_length=10")
        assert response.status_code == 200
        assert response.json()["filters_applied"] == {"is_palindrome": True, "min_length": 1, "max_length": 10}
        assert response.json()["count"] == 2

    def test_empty_contains_character_matches_everything(self, client):
        response = client.get("/strings?contains_character=")
        assert response.status_code == 200
        assert response.json()["count"] == 4
        assert response.json()["filters_applied"] == {}

    def test_partly_numeric_value_returns_400(self, client):
        response = client.get("/strings?min_length=5abc")
        assert response.status_code == 400

    @pytest.mark.parametrize("param", ["min_length", "max_length", "word_count"])
    def test_non_numeric_returns_400(self, client, param):
        response = client.get(f"/strings?{param}=abc")
        assert response.status_code == 400
        assert param in response.json()["error"]


class TestFilterByNaturalLanguageEndpoint:
    """Tests for GET /strings/filter-by-natural-language."""

    @pytest.fixture(autouse=True)
    def seed(self, client):
        _seed(client, "a", "racecar", "hello world", "level")

    def test_single_word_palindromes(self, client):
        response = client.get("/strings/filter-by-natural-language", params={"query": "single word palindromes"})
        assert response.status_code == 200
        data = response.json()
        assert data["count"] == 3
        assert data["interpreted_query"] == {
            "original": "single word palindromes",
            "parsed_filters": {"is_palindrome": True, "word_count": 1},
        }

    def test_strings_longer_than(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings longer than 10 characters"}
        )
        assert response.json()["count"] == 1

    def test_strings_containing_letter(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings containing the letter a"}
        )
        assert response.json()["count"] == 2

    def test_vowel_heuristic(self, client):
        response = client.get(
            "/strings/filter-by-natural-language", params={"query": "strings that contain the first vowel"}
        )
        assert response.json()["interpreted_query"]["parsed_filters"] == {"contains_character": "a"}
        assert response.json()["count"] == 2

    def test_unparseable_query_returns_400(self, client):
        response = client.get("/strings/filter-by-natural-language", params={"query": "asdf qwerty"})
        assert response.status_code == 400
        assert response.json() == {"error": "Unable to parse natural language query"}

    def test_missing_query_param_results_in_400(self, client):
        response = client.get("/strings/filter-by-natural-language")
        assert response.status_code == 400
        assert "query" in response.json()["error"]


class TestDeleteStringEndpoint:
    """Tests for DELETE /strings/{string_value}."""

    def test_delete_string_success(self, client):
        client.post("/strings", json={"value": "to delete"})
        delete_response = client.delete("/strings/to delete")
        assert delete_response.status_code == 204
        assert delete_response.content == b""
        assert client.get("/strings/to delete").status_code == 404

    def test_delete_nonexistent_string(self, client):
        response = client.delete("/strings/nonexistent_value")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_delete_string_not_in_get_all(self, client):
        _seed(client, "string1", "string2")
        client.delete("/strings/string2")
        data = client.get("/strings").json()
        assert [r["value"] for r in data["data"]] == ["string1"]


class TestServiceEndpoints:
    def test_health(self, client):
        assert client.get("/health").json() == {"status": "ok"}

    def test_root_lists_endpoints(self, client):
        data = client.get("/").json()
        assert "POST /strings" in data["endpoints"]

    def test_unknown_route_uses_error_body(self, client):
        response = client.get("/nowhere")
        assert response.status_code == 404
        assert "error" in response.json()

    def test_apps_do_not_share_state(self, client, store):
        from fastapi.testclient import TestClient
        from string_analyzer.main import create_app

        _seed(client, "only here")
        assert len(store) == 1
        with TestClient(create_app()) as other:
            assert other.get("/strings").json()["count"] == 0

    def test_error_schema_documented(self, client):
        schema = client.get("/openapi.json").json()
        assert "ErrorResponse" in schema["components"]["schemas"]
        delete_responses = schema["paths"]["/strings/{string_value}"]["delete"]["responses"]
        assert "404" in delete_responses
